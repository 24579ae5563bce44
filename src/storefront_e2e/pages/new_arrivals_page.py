"""New arrivals collection page."""

import re
from typing import Self

from .base_page import BasePage
from .product_page import ProductPage
from .shop_all_page import PRODUCT_CARDS


class NewArrivalsPage(BasePage):

    async def goto(self) -> Self:
        return await super().goto("/t/collections/new-arrivals")

    async def is_new_arrivals_banner_visible(self) -> bool:
        return await self.page.get_by_text("Collection New arrivals").is_visible()

    async def get_product_count(self) -> int:
        return await self.page.locator(PRODUCT_CARDS).count()

    async def click_product_by_name(self, product_name: str) -> ProductPage:
        # Card links read "<name> $<price>".
        link_name = re.compile(rf"{re.escape(product_name)}.*\$")
        await self.page.get_by_role("link", name=link_name).click()
        await self._settle()
        return ProductPage(self.page, self.base_url)

    async def add_product_to_wishlist(self, product_id: int = 3) -> Self:
        await self.page.locator(f"#product-card-{product_id}").get_by_role("button", name="Add to wishlist").click()
        await self._settle()
        return self
