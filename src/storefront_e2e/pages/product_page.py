"""Product detail page."""

from typing import Self

from playwright.async_api import expect

from ..helpers import verify_element_text
from .base_page import BasePage
from .cart_page import CartPage


class ProductPage(BasePage):
    """Variant selection and add-to-cart on a product detail page."""

    async def goto(self, product_slug: str) -> Self:
        return await super().goto(f"/products/{product_slug}")

    async def get_product_name(self) -> str:
        name = await self.page.get_by_role("heading").first.text_content()
        return (name or "").strip()

    async def get_product_price(self) -> str:
        price = await self.page.get_by_role("paragraph").filter(has_text="$").text_content()
        return (price or "").strip()

    async def get_product_description(self) -> str:
        description = await self.page.locator("#product-details-page p").first.text_content()
        return (description or "").strip()

    async def get_product_color(self) -> str:
        color_text = await self.page.get_by_text("Color:").text_content()
        return (color_text or "").replace("Color:", "").strip()

    async def select_size(self, size: str) -> Self:
        await self.page.get_by_role("button", name="Please choose Size").click()
        await self.page.locator("label").filter(has_text=size).first.click()
        return self

    async def select_color(self, color: str) -> Self:
        await self.page.get_by_role("group").filter(has_text=f"Color: {color}").locator("div").nth(1).click()
        return self

    async def set_quantity(self, quantity: int) -> Self:
        quantity_input = self.page.get_by_role("spinbutton", name="Quantity")
        await quantity_input.clear()
        await quantity_input.fill(str(quantity))
        return self

    async def add_to_cart(self) -> CartPage:
        """Add the selected variant and open the cart."""
        await self.page.get_by_role("button", name="Add To Cart").click()
        await self._settle()
        await self.go_to_cart()
        return CartPage(self.page, self.base_url)

    async def get_cart_page(self) -> CartPage:
        await self.go_to_cart()
        return CartPage(self.page, self.base_url)

    async def add_to_wishlist(self) -> Self:
        await self.page.get_by_role("button", name="Add to wishlist").click()
        await self._settle()
        return self

    async def click_thumbnail(self, index: int) -> Self:
        thumbnails = self.page.locator('[role="img"]')
        count = await thumbnails.count()
        if index >= count:
            raise IndexError(f"Thumbnail index {index} is out of range (0-{count - 1})")

        await thumbnails.nth(index).click()
        await self._settle()
        return self

    async def is_in_stock(self) -> bool:
        return await self.page.locator("#product-details-page").get_by_text("In Stock").is_visible()

    async def verify_product_name(self, name: str) -> None:
        await verify_element_text(self.page.locator("#product-details-page"), name)

    async def verify_product_price(self, price: str) -> None:
        await expect(self.page.locator("#product-details-page").first).to_contain_text(f"${price}")
