import pytest

from storefront_e2e.pages import Pages


@pytest.fixture
def pages(page, settings) -> Pages:
    return Pages(page, settings.base_url)
