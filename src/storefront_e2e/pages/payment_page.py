"""Checkout payment step and the order confirmation page."""

import re
from dataclasses import dataclass
from typing import Self

from playwright.async_api import expect

from ..api.mocks import mock_payment
from ..helpers import price_from_text
from .base_page import BasePage

ORDER_CONFIRMATION_TIMEOUT_MS = 40000


@dataclass
class CardInfo:
    """Card fields as the payment form labels them."""

    name_on_card: str
    card_number: str
    expiration_date: str
    cvv: str


@dataclass
class OrderDetails:
    order_number: str
    product_details: str
    subtotal: str
    shipping: str
    total: str


class PaymentPage(BasePage):
    """Payment method selection, order placement and confirmation checks."""

    async def goto(self, token: str) -> Self:
        return await super().goto(f"/checkout/{token}/payment")

    async def is_payment_step(self) -> bool:
        return await self.page.locator("#checkout-step-payment").is_visible()

    async def _summary_text(self, pattern: str) -> str:
        text = await self.page.get_by_text(re.compile(pattern)).text_content()
        return (text or "").strip()

    async def get_contact_info(self) -> str:
        return await self._summary_text(r"Contact .+@.+ Edit")

    async def get_shipping_address(self) -> str:
        return await self._summary_text(r"Ship Address .+ Edit")

    async def get_delivery_method(self) -> str:
        return await self._summary_text(r"Delivery method .+ Edit")

    async def _edit_section(self, section: str) -> Self:
        await self.page.get_by_text(section).get_by_role("link", name="Edit").click()
        await self._settle()
        return self

    async def edit_contact_info(self) -> Self:
        return await self._edit_section("Contact")

    async def edit_shipping_address(self) -> Self:
        return await self._edit_section("Ship Address")

    async def edit_delivery_method(self) -> Self:
        return await self._edit_section("Delivery method")

    async def fill_credit_card_info(self, card: CardInfo) -> Self:
        await self.page.get_by_role("textbox", name="Name on card").fill(card.name_on_card)
        await self.page.get_by_role("textbox", name="Card Number").fill(card.card_number)
        await self.page.get_by_role("textbox", name="Expiration Date").fill(card.expiration_date)
        await self.page.get_by_role("textbox", name="CVV").fill(card.cvv)
        await self._settle()
        return self

    async def select_check_payment(self) -> Self:
        await self.page.get_by_role("link", name="Check").click()
        await self._settle()
        return self

    async def select_credit_card_payment(self) -> Self:
        await self.page.locator("#order_payments_attributes__payment_method_id_2").check()
        await self._settle()
        return self

    async def place_order(self) -> Self:
        await self.page.get_by_role("button", name="Pay").click()
        await self._settle()
        return self

    async def is_order_confirmed(self) -> bool:
        return await self.page.get_by_text("Your order is confirmed!").is_visible()

    async def get_order_confirmation_message(self) -> str:
        message = await self.page.locator("h4").text_content()
        return (message or "").strip()

    async def get_order_details(self) -> OrderDetails:
        """Read the order summary from the confirmation page."""
        order_match = re.search(r"order_(\d+)", self.page.url)
        product_details = await self.page.locator("#checkout_line_items").text_content() or ""

        return OrderDetails(
            order_number=order_match.group(1) if order_match else "",
            product_details=product_details.strip(),
            subtotal=price_from_text(await self.page.get_by_text(re.compile(r"Subtotal: \$")).text_content()),
            shipping=price_from_text(await self.page.get_by_text(re.compile(r"Shipping: \$")).text_content()),
            total=price_from_text(await self.page.get_by_text(re.compile(r"Total USD \$")).text_content()),
        )

    async def verify_order_details(
        self,
        customer_name: str | None = None,
        product_details: str | None = None,
        subtotal: str | None = None,
        shipping: str | None = None,
        total: str | None = None,
    ) -> bool:
        """Compare the confirmation page with whichever expectations are given."""
        message = await self.get_order_confirmation_message()
        details = await self.get_order_details()

        checks = [
            customer_name is None or f"Thanks {customer_name}" in message,
            product_details is None or product_details in details.product_details,
            subtotal is None or subtotal in details.subtotal,
            shipping is None or shipping in details.shipping,
            total is None or total in details.total,
        ]
        return all(checks)

    async def complete_payment(self, card: CardInfo) -> OrderDetails | None:
        await self.fill_credit_card_info(card)
        await self.select_credit_card_payment()
        await self.place_order()

        if await self.is_order_confirmed():
            return await self.get_order_details()
        return None

    async def verify_order_success(self, first_name: str) -> None:
        await expect(self.page.get_by_text(re.compile(r"R[0-9]+"))).to_be_visible(
            timeout=ORDER_CONFIRMATION_TIMEOUT_MS
        )
        await expect(self.page.locator("h4")).to_contain_text(f"Thanks {first_name} for your order!")

    async def mock_payment(self) -> None:
        """Short-circuit payment so the payment page lands on the completion page."""
        await mock_payment(self.page, self.base_url)
