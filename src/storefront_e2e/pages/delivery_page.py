"""Checkout delivery step."""

import re
from typing import Self

from playwright.async_api import expect

from ..helpers import price_from_text, verify_element_text
from ..models import Address
from .base_page import BasePage
from .payment_page import PaymentPage

# Credit card payments are set up asynchronously after the delivery step.
PAYMENT_SETUP_WAIT_MS = 10000


class DeliveryPage(BasePage):
    """Shipping method choice and the order summary beside it."""

    async def goto(self, token: str) -> Self:
        return await super().goto(f"/checkout/{token}/delivery")

    async def is_delivery_step(self) -> bool:
        return await self.page.locator("#checkout-step-delivery").is_visible()

    async def get_customer_email(self) -> str:
        text = await self.page.get_by_text(
            re.compile(r"[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+")
        ).text_content()
        return (text or "").strip()

    async def get_shipping_address(self) -> str:
        text = await self.page.get_by_text(re.compile(r"[A-Z][a-z]+ [A-Z][a-z]+, \d+ .+")).text_content()
        return (text or "").strip()

    async def edit_contact_info(self) -> Self:
        await self.page.get_by_role("link", name="Edit").first.click()
        await self._settle()
        return self

    async def edit_shipping_address(self) -> Self:
        await self.page.get_by_role("link", name="Edit").nth(1).click()
        await self._settle()
        return self

    async def select_shipping_method(self, method: str) -> Self:
        await self.page.get_by_role("radio", name=method).check()
        await self._settle()
        return self

    async def get_shipping_cost(self, method: str) -> str:
        text = await self.page.get_by_text(re.compile(rf"{re.escape(method)} \$\d+\.\d+")).text_content()
        return price_from_text(text)

    async def get_selected_shipping_method(self) -> str:
        label = self.page.locator('input[type="radio"]:checked').locator("..").locator("label")
        return await label.text_content() or ""

    async def apply_promo_code(self, code: str) -> Self:
        await self.page.get_by_role("textbox", name="ADD PROMO CODE").fill(code)
        await self.page.keyboard.press("Enter")
        await self._settle()
        return self

    async def continue_to_payment(self) -> PaymentPage:
        await self.page.get_by_role("button", name="Save and Continue").click()
        await self.page.wait_for_timeout(PAYMENT_SETUP_WAIT_MS)
        await self._settle()
        return PaymentPage(self.page, self.base_url)

    async def get_subtotal(self) -> str:
        return price_from_text(await self.page.get_by_text(re.compile(r"Subtotal: \$")).text_content())

    async def get_current_shipping_cost(self) -> str:
        return price_from_text(await self.page.get_by_text(re.compile(r"Shipping: \$")).text_content())

    async def get_order_total(self) -> str:
        return price_from_text(await self.page.get_by_text(re.compile(r"Total USD \$")).text_content())

    async def get_product_details(self) -> str:
        text = await self.page.locator("#checkout_line_items").text_content()
        return (text or "").strip()

    async def verify_order_costs(self, expected_subtotal: str, expected_shipping: str, expected_total: str) -> bool:
        return (
            expected_subtotal in await self.get_subtotal()
            and expected_shipping in await self.get_current_shipping_cost()
            and expected_total in await self.get_order_total()
        )

    async def verify_delivery_shipping_details(self, email: str, address: Address) -> None:
        """Check contact email, recipient name and the Edit link are shown."""
        await expect(self.page.get_by_text(email.lower())).to_be_visible()
        address_block = self.page.locator(".px-5.word-break")
        await expect(address_block.get_by_text(address.first_name)).to_be_visible()
        await expect(address_block.get_by_text(address.last_name)).to_be_visible()

        # Guests see Edit for contact and address, signed-in users only for the address.
        edit_links = self.page.get_by_role("link", name="Edit")
        count = await edit_links.count()
        if count > 1:
            await expect(edit_links.nth(1)).to_be_visible()
        elif count == 1:
            await expect(edit_links.first).to_be_visible()
        else:
            await expect(edit_links).to_be_visible()

    async def verify_shipping_cost(self, item_name: str, shipping_cost_label: str) -> None:
        await verify_element_text(self.page.locator("#checkout_summary"), shipping_cost_label)
        await verify_element_text(self.page.locator("#checkout_line_items"), item_name)
