"""Checkout address step and the single-page checkout flow."""

import re
from dataclasses import dataclass
from typing import Self

from playwright.async_api import expect

from ..models import Address
from .base_page import BasePage


@dataclass
class PaymentInfo:
    cardholder_name: str
    card_number: str
    expiry_month: str
    expiry_year: str
    cvv: str


@dataclass
class CheckoutInfo:
    """Everything complete_checkout() needs to place an order."""

    email: str
    address: Address
    shipping: str
    payment: PaymentInfo
    create_account: bool = False
    subscribe_to_newsletter: bool = False


class CheckoutPage(BasePage):
    """Contact and address forms of the checkout."""

    async def goto(self) -> Self:
        return await super().goto("/checkout")

    async def is_address_step(self) -> bool:
        return await self.page.get_by_label("breadcrumb").get_by_text("Address").is_visible()

    async def is_login_option_visible(self) -> bool:
        return await self.page.get_by_role("link", name="Login").is_visible()

    async def login_with_existing_account(self, email: str, password: str) -> Self:
        await self.page.get_by_role("link", name="Login").click()
        await self.page.get_by_role("textbox", name="Email").fill(email)
        await self.page.get_by_role("textbox", name="Password").fill(password)
        await self.page.get_by_role("button", name="Login").click()
        await self._settle()
        return self

    async def continue_as_guest(
        self,
        email: str,
        subscribe_to_newsletter: bool = False,
        create_account: bool = False,
    ) -> Self:
        await self.page.get_by_role("textbox", name="Email").fill(email)

        if subscribe_to_newsletter:
            await self.page.get_by_role("checkbox", name="Email me about new products,").check()
        if create_account:
            await self.page.get_by_role("checkbox", name="Create an account for faster").check()

        await self._settle()
        return self

    async def fill_billing_address(self, address: Address) -> Self:
        # Country first: it reloads the state list.
        await self.page.get_by_label("Country").select_option(label=address.country)
        await self._settle()

        await self.page.get_by_role("textbox", name="First Name").fill(address.first_name)
        await self.page.get_by_role("textbox", name="Last Name").fill(address.last_name)
        await self.page.get_by_role("textbox", name="Address", exact=True).fill(address.address1)
        if address.address2:
            await self.page.get_by_role("textbox", name="Address (contd.)").fill(address.address2)
        await self.page.get_by_role("textbox", name="City").fill(address.city)
        await self.page.locator("#order_ship_address_attributes_state_id").select_option(label=address.state)
        await self.page.get_by_role("textbox", name="Zip Code").fill(address.zipcode)
        await self.page.get_by_role("textbox", name="Phone").fill(address.phone)
        return self

    async def continue_to_next_step(self) -> Self:
        await self.page.get_by_role("button", name="Save and Continue").click()
        await self._settle()
        return self

    async def select_shipping_method(self, shipping_method_name: str) -> Self:
        await self.page.get_by_text(shipping_method_name).click()
        return self

    async def fill_payment_info(self, payment: PaymentInfo) -> Self:
        await self.page.get_by_role("textbox", name="Name on card").fill(payment.cardholder_name)
        await self.page.get_by_role("textbox", name="Card Number").fill(payment.card_number)
        await self.page.get_by_label("Month").select_option(payment.expiry_month)
        await self.page.get_by_label("Year").select_option(payment.expiry_year)
        await self.page.get_by_label("Card Verification Value (CVV)").fill(payment.cvv)
        return self

    async def place_order(self) -> None:
        await self.page.get_by_role("button", name="Place Order").click()
        await self._settle()

    async def get_order_number(self) -> str:
        text = await self.page.get_by_text(re.compile("Order #")).text_content()
        return (text or "").replace("Order #", "").strip()

    async def get_order_total(self) -> str:
        text = await self.page.get_by_text(re.compile(r"Order Total: \$")).text_content()
        return (text or "").strip()

    async def is_order_successful(self) -> bool:
        return await self.page.get_by_text("Thank You For Your Order").is_visible()

    async def complete_checkout(self, info: CheckoutInfo) -> str:
        """Run the whole checkout and return the order number, or ``""`` on failure."""
        await self.continue_as_guest(
            info.email,
            subscribe_to_newsletter=info.subscribe_to_newsletter,
            create_account=info.create_account,
        )

        await self.fill_billing_address(info.address)
        await self.continue_to_next_step()

        await self.select_shipping_method(info.shipping)
        await self.continue_to_next_step()

        await self.fill_payment_info(info.payment)
        await self.continue_to_next_step()

        await self.place_order()

        if await self.is_order_successful():
            return await self.get_order_number()
        return ""

    async def verify_email_shown(self, email: str) -> None:
        await expect(self.page.get_by_text(email.lower())).to_be_visible()

    async def enter_email(self, email: str) -> None:
        await self.page.locator("#order_ship_address_attributes_email").fill(email)
