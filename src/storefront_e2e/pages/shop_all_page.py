"""Shop All listing page."""

from typing import Self

from playwright.async_api import expect

from .base_page import BasePage
from .product_page import ProductPage

PRODUCT_CARDS = '#product-card-1, [id^="product-card-"]'


class ShopAllPage(BasePage):
    """Full product listing with wishlist and category filters."""

    async def goto(self) -> Self:
        return await super().goto("/products")

    async def get_product_count(self) -> int:
        return await self.page.locator(PRODUCT_CARDS).count()

    async def get_page_title(self) -> str | None:
        return await self.page.get_by_role("heading", name="Shop All").text_content()

    async def click_product_by_name(self, product_name: str) -> ProductPage:
        await self.page.get_by_role("link", name=product_name).click()
        await self._settle()
        return ProductPage(self.page, self.base_url)

    async def add_product_to_wishlist(self, product_id: int = 1) -> Self:
        await self.page.locator(f"#product-card-{product_id}").get_by_role("button", name="Add to wishlist").click()
        await self._settle()
        return self

    async def remove_product_from_wishlist(self) -> Self:
        await self.page.get_by_role("button", name="Remove from wishlist").click()
        await self._settle()
        return self

    async def close_account_sidebar(self) -> Self:
        await self.page.get_by_role("button", name="Close account sidebar").click()
        await self._settle()
        return self

    async def filter_by_mens_category(self) -> Self:
        await self.open_filter_panel()
        await self.page.get_by_role("link", name="Category").click()
        await (
            self.page.get_by_role("listitem")
            .filter(has_text="Men (35)")
            .locator('[id="filter\\[taxon_ids\\]\\[\\]"]')
            .check()
        )
        return await self.apply_filters()

    async def has_out_of_stock_filter(self) -> bool:
        return await self.page.get_by_text("Out of Stock (0)").is_visible()

    async def verify_shop_all_page(self, heading: str) -> Self:
        await expect(self.page.get_by_role("heading", name=heading)).to_be_visible()
        return self
