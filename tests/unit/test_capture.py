"""Tests for failure artifact capture."""

from datetime import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from playwright.async_api import Error as PlaywrightError

from storefront_e2e.plugins.capture import artifact_stem, call_failed, capture_failure_artifacts


def make_item(failed: bool | None, nodeid: str = "tests/e2e/test_cart.py::test_abandoned[chromium]"):
    item = SimpleNamespace(nodeid=nodeid, user_properties=[])
    if failed is not None:
        item.rep_call = SimpleNamespace(failed=failed)
    return item


def make_page(html: str = "<html><body>checkout</body></html>") -> MagicMock:
    page = MagicMock()
    page.screenshot = AsyncMock()
    page.content = AsyncMock(return_value=html)
    return page


def test_call_failed():
    assert call_failed(make_item(True))
    assert not call_failed(make_item(False))
    assert not call_failed(make_item(None))


def test_artifact_stem_is_filesystem_safe():
    stem = artifact_stem(make_item(True), now=datetime(2026, 1, 2, 3, 4, 5))

    assert stem == "tests_e2e_test_cart.py_test_abandoned_chromium__20260102_030405"


class TestCaptureFailureArtifacts:

    async def test_passed_test_writes_nothing(self, tmp_path):
        page = make_page()

        assert await capture_failure_artifacts(page, make_item(False), tmp_path) == []
        page.screenshot.assert_not_awaited()

    async def test_failed_test_writes_screenshot_and_html(self, tmp_path):
        page = make_page()
        item = make_item(True)
        output_dir = tmp_path / "results"

        written = await capture_failure_artifacts(page, item, output_dir)

        assert [p.suffix for p in written] == [".png", ".html"]
        assert page.screenshot.await_args.kwargs["full_page"] is True
        assert written[1].read_text(encoding="utf-8") == "<html><body>checkout</body></html>"
        assert item.user_properties == [("artifact_path", str(p)) for p in written]

    async def test_html_only(self, tmp_path):
        page = make_page()

        written = await capture_failure_artifacts(page, make_item(True), tmp_path, screenshot=False)

        assert [p.suffix for p in written] == [".html"]
        page.screenshot.assert_not_awaited()

    async def test_screenshot_error_is_logged(self, tmp_path, caplog):
        page = make_page()
        page.screenshot.side_effect = PlaywrightError("Target closed")

        written = await capture_failure_artifacts(page, make_item(True), tmp_path)

        assert [p.suffix for p in written] == [".html"]
        assert "Could not capture screenshot" in caplog.text
