"""Pytest plugin to capture screenshots and HTML snapshots on test failure."""

import logging
import re
from datetime import datetime
from pathlib import Path

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

logger = logging.getLogger(__name__)

REPORT_ATTR = "rep_{when}"


@pytest.hookimpl(hookwrapper=True, tryfirst=True)
def pytest_runtest_makereport(item, call):
    """Keep each phase's report on the item so fixtures can see the outcome."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, REPORT_ATTR.format(when=report.when), report)


def call_failed(item) -> bool:
    """Whether the test body of ``item`` failed."""
    report = getattr(item, REPORT_ATTR.format(when="call"), None)
    return report is not None and report.failed


def artifact_stem(item, now: datetime | None = None) -> str:
    """File name stem for a test's artifacts."""
    timestamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    clean_name = re.sub(r"[^\w.-]+", "_", item.nodeid)
    return f"{clean_name}_{timestamp}"


async def capture_failure_artifacts(
    page: Page,
    item,
    output_dir: Path,
    screenshot: bool = True,
    html: bool = True,
) -> list[Path]:
    """Save a screenshot and the page HTML for a failed test.

    Returns the written paths and records them on the item's
    ``user_properties``. Does nothing when the test passed.
    """
    if not call_failed(item):
        return []

    output_dir.mkdir(parents=True, exist_ok=True)
    stem = artifact_stem(item)
    written: list[Path] = []

    if screenshot:
        path = output_dir / f"{stem}.png"
        try:
            await page.screenshot(path=str(path), full_page=True)
            written.append(path)
        except PlaywrightError as e:
            logger.warning("Could not capture screenshot for %s: %s", item.nodeid, e)

    if html:
        path = output_dir / f"{stem}.html"
        try:
            path.write_text(await page.content(), encoding="utf-8")
            written.append(path)
        except PlaywrightError as e:
            logger.warning("Could not capture HTML for %s: %s", item.nodeid, e)

    for path in written:
        item.user_properties.append(("artifact_path", str(path)))
        logger.info("Saved failure artifact %s", path)

    return written
