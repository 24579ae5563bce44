"""Helper functions for common page operations."""

import logging
import re

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page, expect

logger = logging.getLogger(__name__)

SETTLE_DELAY_MS = 500
_CHECKOUT_TOKEN = re.compile(r"/checkout/([^/?#]+)")


async def wait_for_page_stable(page: Page, timeout_ms: int = 30000) -> None:
    """Wait until the page stops loading.

    Network idle and DOM content loaded are both best effort: a timeout is
    logged and the wait carries on.
    """
    try:
        await page.wait_for_load_state("networkidle", timeout=timeout_ms)
    except PlaywrightError as e:
        logger.info("Network idle timeout, continuing anyway: %s", e)

    try:
        await page.wait_for_load_state("domcontentloaded", timeout=10000)
    except PlaywrightError as e:
        logger.info("Error waiting for DOM content, continuing anyway: %s", e)

    await page.wait_for_timeout(SETTLE_DELAY_MS)


async def verify_element_text(element: Locator, expected_text: str) -> None:
    """Assert an element is visible and contains the expected text."""
    await expect(element).to_be_visible()
    await expect(element).to_contain_text(expected_text)


async def clear_and_type(field: Locator, text: str) -> None:
    """Clear an input field and type a new value key by key."""
    await field.click()
    await field.clear()
    await field.press_sequentially(text)


def checkout_token_from_url(url: str) -> str:
    """Extract the checkout token from a ``/checkout/<token>/...`` URL, or ``""``."""
    match = _CHECKOUT_TOKEN.search(url)
    return match.group(1) if match else ""


def price_from_text(text: str | None) -> str:
    """First ``$12.34`` style amount in ``text``, or ``""``."""
    match = re.search(r"\$(\d+\.\d+)", text or "")
    return match.group(0) if match else ""
