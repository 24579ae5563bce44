"""Shared fixtures: settings, Playwright browser/context/page, API client, test data."""

import os
from collections.abc import AsyncIterator, Awaitable, Callable

import pytest
import pytest_asyncio
from playwright.async_api import Browser, BrowserContext, Page, async_playwright, expect

from storefront_e2e.api import StorefrontClient
from storefront_e2e.config import Settings, load_config
from storefront_e2e.fixtures import TestData, build_test_data
from storefront_e2e.logs import configure_logging
from storefront_e2e.plugins.capture import capture_failure_artifacts

pytest_plugins = ["storefront_e2e.plugins.capture"]


def pytest_addoption(parser):
    parser.addoption(
        "--e2e",
        action="store_true",
        default=False,
        help="run browser scenarios against a running storefront",
    )


def pytest_configure(config):
    configure_logging()


def pytest_collection_modifyitems(config, items):
    if config.getoption("--e2e") or os.environ.get("STOREFRONT_E2E") == "1":
        return

    skip_e2e = pytest.mark.skip(reason="browser scenario; pass --e2e to run")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


@pytest.fixture
def settings() -> Settings:
    return load_config()


@pytest.fixture
def test_data() -> TestData:
    """Fresh users, address and cards for each test."""
    return build_test_data()


@pytest_asyncio.fixture
async def browser(settings: Settings) -> AsyncIterator[Browser]:
    """Launch the configured browser."""
    async with async_playwright() as p:
        launcher = getattr(p, settings.browser.name)
        browser = await launcher.launch(
            headless=settings.browser.headless,
            slow_mo=settings.browser.slow_mo_ms,
        )
        yield browser
        await browser.close()


async def new_context(browser: Browser, settings: Settings) -> BrowserContext:
    """New browser context with the suite's default timeouts."""
    context = await browser.new_context(base_url=settings.base_url)
    context.set_default_timeout(settings.browser.action_timeout_ms)
    context.set_default_navigation_timeout(settings.browser.navigation_timeout_ms)
    expect.set_options(timeout=settings.browser.expect_timeout_ms)
    return context


async def capture_and_close(context: BrowserContext, settings: Settings, item) -> None:
    """Save failure artifacts for every open page of ``context``, then close it."""
    try:
        for page in context.pages:
            await capture_failure_artifacts(
                page,
                item,
                settings.artifacts.output_dir,
                screenshot=settings.artifacts.screenshot_on_failure,
                html=settings.artifacts.html_on_failure,
            )
    finally:
        await context.close()


@pytest_asyncio.fixture
async def context(browser: Browser, settings: Settings, request) -> AsyncIterator[BrowserContext]:
    """New browser context; on failure its pages are captured before it closes."""
    context = await new_context(browser, settings)
    yield context
    await capture_and_close(context, settings, request.node)


@pytest_asyncio.fixture
async def open_context(
    browser: Browser, settings: Settings, request
) -> AsyncIterator[Callable[[], Awaitable[BrowserContext]]]:
    """Factory for extra browser contexts, all captured and closed on teardown."""
    contexts: list[BrowserContext] = []

    async def _open() -> BrowserContext:
        context = await new_context(browser, settings)
        contexts.append(context)
        return context

    yield _open
    for context in contexts:
        await capture_and_close(context, settings, request.node)


@pytest_asyncio.fixture
async def page(context: BrowserContext) -> Page:
    """New page; on failure a screenshot and HTML snapshot are saved."""
    return await context.new_page()


@pytest_asyncio.fixture
async def api_client(settings: Settings) -> AsyncIterator[StorefrontClient]:
    """API client, in mock mode unless ``use_mock`` is turned off."""
    client = StorefrontClient(settings)
    await client.initialize(use_mock=settings.use_mock)
    yield client
    await client.close()
