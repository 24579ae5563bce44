"""Base page object shared by every storefront page."""

from typing import Self

from playwright.async_api import Page

from ..config import DEFAULT_BASE_URL
from ..helpers import wait_for_page_stable


class BasePage:
    """Header navigation, search, sorting and filters available on every page."""

    def __init__(self, page: Page, base_url: str = DEFAULT_BASE_URL):
        self.page = page
        self.base_url = base_url.rstrip("/")

    async def _settle(self) -> None:
        await wait_for_page_stable(self.page)

    async def goto(self, path: str = "/") -> Self:
        """Navigate to a site-relative path."""
        await self.page.goto(f"{self.base_url}{path}")
        await self._settle()
        return self

    async def search(self, search_term: str) -> Self:
        await self.page.get_by_role("button", name="Search").click()
        await self.page.get_by_role("textbox", name="Search").fill(search_term)
        await self.page.keyboard.press("Enter")
        await self._settle()
        return self

    async def _click_top_nav(self, name: str) -> Self:
        await self.page.get_by_label("Top").get_by_role("link", name=name).click()
        await self._settle()
        return self

    async def _click_link(self, name: str) -> Self:
        await self.page.get_by_role("link", name=name).click()
        await self._settle()
        return self

    async def go_to_shop_all(self) -> Self:
        return await self._click_top_nav("Shop All")

    async def go_to_new_arrivals(self) -> Self:
        return await self._click_top_nav("New arrivals")

    async def go_to_on_sale(self) -> Self:
        return await self._click_top_nav("On sale")

    async def go_to_blog(self) -> Self:
        return await self._click_link("Blog")

    async def go_to_cart(self) -> Self:
        return await self._click_link("Items in cart, View bag")

    async def go_to_account(self) -> Self:
        await self.page.get_by_role("navigation", name="Top").get_by_role("button").nth(1).click()
        await self._settle()
        return self

    async def go_to_wishlist(self) -> Self:
        await self.page.locator("#wishlist-icon").click()
        await self._settle()
        return self

    async def go_to_home(self) -> Self:
        return await self._click_link("Spree Demo Site")

    async def go_to_privacy_policy(self) -> Self:
        return await self._click_link("Privacy Policy")

    async def go_to_terms_of_service(self) -> Self:
        return await self._click_link("Terms of Service")

    async def go_to_my_account(self) -> Self:
        return await self._click_link("My Account")

    async def go_to_favorites(self) -> Self:
        return await self._click_link("Favorites")

    async def close_cart_sidebar(self) -> Self:
        await self.page.get_by_role("button", name="Close sidebar").click()
        await self._settle()
        return self

    async def checkout_from_sidebar(self) -> Self:
        await self.page.get_by_role("button", name="Proceed to Checkout").click()
        await self._settle()
        return self

    async def click_sort_button(self) -> Self:
        await self.page.locator('[data-test-id="sort-button"]').click()
        await self._settle()
        return self

    async def sort_by(self, option: str) -> Self:
        await self.click_sort_button()
        await self.page.get_by_text(option).click()
        await self._settle()
        return self

    async def open_filter_panel(self) -> Self:
        await self.page.get_by_role("button", name="Filter").click()
        await self._settle()
        return self

    async def set_price_filter(self, min_price: float, max_price: float) -> Self:
        """Fill the price range inputs; a non-positive bound is left empty."""
        await self.open_filter_panel()
        await self.page.get_by_role("link", name="Price").click()

        if min_price > 0:
            await self.page.get_by_role("spinbutton", name="from $").fill(str(min_price))
        if max_price > 0:
            await self.page.get_by_role("spinbutton", name="to $").fill(str(max_price))
        return self

    async def apply_filters(self) -> Self:
        await self.page.get_by_role("button", name="Apply").click()
        await self._settle()
        return self

    async def clear_all_filters(self) -> Self:
        await self.open_filter_panel()
        await self.page.get_by_role("link", name="Clear all").click()
        return await self.apply_filters()

    async def _check_filter_option(self, group: str, option: str) -> Self:
        await self.open_filter_panel()
        await self.page.get_by_role("link", name=group).click()
        await (
            self.page.get_by_role("listitem")
            .filter(has_text=option)
            .locator('input[type="checkbox"]')
            .check()
        )
        return await self.apply_filters()

    async def select_size_filter(self, size: str) -> Self:
        return await self._check_filter_option("Size", size)

    async def filter_by_in_stock(self, stock_filter: str) -> Self:
        return await self._check_filter_option("Availability", stock_filter)

    async def filter_by_price_range(self, min_price: float, max_price: float) -> Self:
        await self.set_price_filter(min_price, max_price)
        return await self.apply_filters()

    @property
    def current_url(self) -> str:
        return self.page.url
