"""Bounded retry for idempotent API calls."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
)

from .responses import is_network_result

T = TypeVar("T")

DEFAULT_ATTEMPTS = 3
DEFAULT_DELAY_SECONDS = 0.5

_logger = logging.getLogger(__name__)


def _is_failed_response(value: Any) -> bool:
    return is_network_result(value) and not value.ok


def _return_last_outcome(retry_state: RetryCallState) -> Any:
    # Re-raises the last exception, or hands back the last failed response.
    return retry_state.outcome.result()


async def retry_call(
    operation: Callable[[], Awaitable[T]],
    *,
    attempts: int = DEFAULT_ATTEMPTS,
    delay: float = DEFAULT_DELAY_SECONDS,
    logger: logging.Logger | None = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> T:
    """Run ``operation`` up to ``attempts`` times.

    A raised exception is logged and retried after ``delay`` seconds; the
    exception from the last attempt propagates. A response whose ``ok`` is
    false is retried straight away, and after the last attempt it is returned
    rather than raised. Any other value is returned from the first attempt.
    """
    log = logger or _logger

    def wait_after_error(retry_state: RetryCallState) -> float:
        return delay if retry_state.outcome.failed else 0.0

    def log_failed_attempt(retry_state: RetryCallState) -> None:
        outcome = retry_state.outcome
        if outcome.failed:
            log.error(
                "Retry attempt %d/%d failed: %s",
                retry_state.attempt_number,
                attempts,
                outcome.exception(),
            )
        else:
            log.warning(
                "Retry attempt %d/%d failed with status %s",
                retry_state.attempt_number,
                attempts,
                outcome.result().status,
            )

    retrying = AsyncRetrying(
        stop=stop_after_attempt(attempts),
        wait=wait_after_error,
        retry=retry_if_exception_type(Exception) | retry_if_result(_is_failed_response),
        after=log_failed_attempt,
        retry_error_callback=_return_last_outcome,
        sleep=sleep,
    )
    return await retrying(operation)
