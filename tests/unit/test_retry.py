"""Tests for the bounded retry policy."""

import logging

import pytest

from storefront_e2e.api.responses import MockResponse
from storefront_e2e.api.retry import retry_call


class FakeSleep:
    """Records requested delays instead of sleeping."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class FlakyOperation:
    """Raises for the first ``failures`` calls, then returns ``result``."""

    def __init__(self, failures: int, result=None):
        self.failures = failures
        self.result = result if result is not None else MockResponse(200, {"status": "success"})
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise ConnectionError(f"network down (call {self.calls})")
        return self.result


@pytest.fixture
def sleep():
    return FakeSleep()


class TestRetryOnErrors:
    """Raised errors are retried with a fixed delay."""

    @pytest.mark.parametrize("failures", [0, 1, 2])
    async def test_succeeds_within_budget(self, sleep, failures):
        operation = FlakyOperation(failures)

        result = await retry_call(operation, sleep=sleep)

        assert result.ok
        assert operation.calls == failures + 1
        assert sleep.delays == [0.5] * failures

    async def test_always_raising_is_called_three_times_and_reraises(self, sleep):
        operation = FlakyOperation(failures=10)

        with pytest.raises(ConnectionError, match="call 3"):
            await retry_call(operation, sleep=sleep)

        assert operation.calls == 3
        assert sleep.delays == [0.5, 0.5]

    async def test_custom_attempts_and_delay(self, sleep):
        operation = FlakyOperation(failures=10)

        with pytest.raises(ConnectionError):
            await retry_call(operation, attempts=2, delay=0.1, sleep=sleep)

        assert operation.calls == 2
        assert sleep.delays == [0.1]

    async def test_each_failed_attempt_is_logged(self, sleep, caplog):
        caplog.set_level(logging.ERROR)
        logger = logging.getLogger("tests.retry")

        with pytest.raises(ConnectionError):
            await retry_call(FlakyOperation(failures=10), logger=logger, sleep=sleep)

        messages = [r.getMessage() for r in caplog.records if r.name == "tests.retry"]
        assert messages[0].startswith("Retry attempt 1/3 failed")
        assert messages[-1].startswith("Retry attempt 3/3 failed")
        assert len(messages) == 3


class TestRetryOnResponses:
    """Failed responses are retried, then handed back without raising."""

    async def test_successful_response_returns_immediately(self, sleep):
        calls = []

        async def operation():
            calls.append(1)
            return MockResponse(200)

        result = await retry_call(operation, sleep=sleep)

        assert result.status == 200
        assert len(calls) == 1
        assert sleep.delays == []

    async def test_failed_response_is_returned_after_last_attempt(self, sleep):
        calls = []

        async def operation():
            calls.append(1)
            return MockResponse(503, {"error": "unavailable"})

        result = await retry_call(operation, sleep=sleep)

        assert result.status == 503
        assert not result.ok
        assert len(calls) == 3
        assert all(delay == 0 for delay in sleep.delays)

    async def test_recovers_after_failed_response(self, sleep):
        responses = [MockResponse(500), MockResponse(200, {"status": "success"})]

        async def operation():
            return responses.pop(0)

        result = await retry_call(operation, sleep=sleep)

        assert result.ok
        assert responses == []

    async def test_failed_responses_log_warnings(self, sleep, caplog):
        caplog.set_level(logging.WARNING)
        logger = logging.getLogger("tests.retry.responses")

        async def operation():
            return MockResponse(502)

        await retry_call(operation, logger=logger, sleep=sleep)

        warnings = [r for r in caplog.records if r.name == "tests.retry.responses"]
        assert len(warnings) == 3
        assert all(r.levelno == logging.WARNING for r in warnings)
        assert "status 502" in warnings[0].getMessage()


class TestOpaqueValues:
    """Values without a success flag pass straight through."""

    @pytest.mark.parametrize("value", [None, [], {"ok": False}, "text", 0])
    async def test_returned_from_first_attempt(self, sleep, value):
        calls = []

        async def operation():
            calls.append(1)
            return value

        assert await retry_call(operation, sleep=sleep) == value
        assert len(calls) == 1
