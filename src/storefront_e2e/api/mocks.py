"""Route interception that stands in for the payment gateway and order confirmation.

Once installed on a page, payment and confirm calls succeed, every checkout
page fetch lands on the order's completion page, and the completion page
itself is answered with a synthesized confirmation document.
"""

import html
import json
import logging
import random
from urllib.parse import urlparse

from playwright.async_api import Page, Request, Route

from ..config import DEFAULT_BASE_URL

SHIPPING_CHARGE = 5.00
ORDER_NUMBER_MAX = 999_999_999

PAYMENT_UPDATE_PATTERN = "**/checkout/**/update/payment"
CONFIRM_UPDATE_PATTERN = "**/checkout/**/update/confirm"
CHECKOUT_PATTERN = "**/checkout/**"
PAYMENT_PAGE_PATTERN = "**/checkout/*/payment"
_UPDATE_SUFFIXES = ("/update/payment", "/update/confirm")


CONFIRMATION_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <title>Order Confirmation</title>
</head>
<body>
  <div id="content" data-hook="">
    <div class="container">
      <div class="checkout-confirm">
        <div class="row">
          <div class="col-lg-8">
            <div class="d-flex flex-sm-row flex-column justify-content-center">
              <div class="text-center checkout-header-center">
                <div class="shop text-uppercase">SHOP</div>
              </div>
            </div>
            <div class="order-confirm-delivery-informations">
              <h3>Order {order_number}</h3>
              <h4 class="text-success text-uppercase">Thanks {first_name} for your order!</h4>
              <div>
                <div>Your order is confirmed!</div>
                <div>When your order is ready, you will receive an email confirmation.</div>
              </div>
              <div id="checkout_line_items">
                <div>
                  <div>{product_name}</div>
                  <div>Color: Dark Blue, Size: S</div>
                  <div>${price}</div>
                </div>
              </div>
              <div id="checkout_summary">
                <div>Subtotal: ${subtotal}</div>
                <div>Shipping: ${shipping}</div>
                <div>Total USD ${total}</div>
              </div>
            </div>
          </div>
        </div>
      </div>
    </div>
  </div>
</body>
</html>
"""


def generate_order_number() -> str:
    """Random order number in the storefront's ``R<digits>`` format."""
    return f"R{random.randint(0, ORDER_NUMBER_MAX)}"


def completion_path(order_token: str) -> str:
    return f"/checkout/{order_token}/complete"


class CheckoutMockServer:
    """Checkout backend simulated at the network boundary of one page.

    Rules are registered in this order: payment update, confirm, any checkout
    request, completion page.
    """

    def __init__(
        self,
        order_token: str,
        first_name: str,
        product_name: str,
        product_price: float,
        base_url: str = DEFAULT_BASE_URL,
        order_number: str | None = None,
        logger: logging.Logger | None = None,
    ):
        self.order_token = order_token
        self.first_name = first_name
        self.product_name = product_name
        self.product_price = product_price
        self.base_url = base_url.rstrip("/")
        self.order_number = order_number or generate_order_number()
        self._logger = logger or logging.getLogger(__name__)

    @property
    def completion_path(self) -> str:
        return completion_path(self.order_token)

    @property
    def completion_url(self) -> str:
        return f"{self.base_url}{self.completion_path}"

    @property
    def completion_pattern(self) -> str:
        return f"**{self.completion_path}"

    def confirmation_html(self) -> str:
        """Render the order confirmation page."""
        return CONFIRMATION_TEMPLATE.format(
            order_number=html.escape(self.order_number),
            first_name=html.escape(self.first_name),
            product_name=html.escape(self.product_name),
            price=f"{self.product_price:.2f}",
            subtotal=f"{self.product_price:.2f}",
            shipping=f"{SHIPPING_CHARGE:.2f}",
            total=f"{self.product_price + SHIPPING_CHARGE:.2f}",
        )

    async def install(self, page: Page) -> str:
        """Register all four rules on ``page`` and return the order number."""
        await page.route(PAYMENT_UPDATE_PATTERN, self.handle_payment_update)
        await page.route(CONFIRM_UPDATE_PATTERN, self.handle_confirm)
        await page.route(CHECKOUT_PATTERN, self.handle_checkout)
        await page.route(self.completion_pattern, self.handle_complete)
        self._logger.info(
            "Mocked order confirmation %s for checkout %s",
            self.order_number,
            self.order_token,
        )
        return self.order_number

    async def handle_payment_update(self, route: Route, request: Request) -> None:
        await route.fulfill(
            status=200,
            content_type="application/json",
            body=json.dumps({"success": True}),
        )

    async def handle_confirm(self, route: Route, request: Request) -> None:
        await route.fulfill(
            status=200,
            content_type="application/json",
            body=json.dumps({"success": True, "redirect_path": self.completion_path}),
        )

    async def handle_checkout(self, route: Route, request: Request) -> None:
        # Playwright tries the latest registered rule first. fallback() hands
        # the request to the earlier rules, or to the network when none is left.
        path = urlparse(request.url).path
        if "/complete" in path or path.endswith(_UPDATE_SUFFIXES):
            await route.fallback()
            return

        # Page navigations jump to the completion page; anything that mutates
        # state goes through so the page's own scripts keep working.
        if request.method == "GET":
            self._logger.debug("Redirecting %s to %s", request.url, self.completion_url)
            await route.fulfill(
                status=302,
                headers={"Location": self.completion_url},
                body="",
            )
        else:
            await route.fallback()

    async def handle_complete(self, route: Route, request: Request) -> None:
        await route.fulfill(
            status=200,
            content_type="text/html",
            body=self.confirmation_html(),
        )


async def mock_order_confirmation(
    page: Page,
    order_token: str,
    first_name: str,
    product_name: str,
    product_price: float,
    base_url: str = DEFAULT_BASE_URL,
) -> str:
    """Mock the payment and confirmation flow on ``page``; returns the order number."""
    server = CheckoutMockServer(
        order_token,
        first_name,
        product_name,
        product_price,
        base_url=base_url,
    )
    return await server.install(page)


async def mock_payment(page: Page, base_url: str = DEFAULT_BASE_URL) -> None:
    """Lighter mock: payment and confirm succeed, the payment page redirects to completion."""
    base_url = base_url.rstrip("/")

    async def payment_update(route: Route, request: Request) -> None:
        await route.fulfill(
            status=200,
            body=json.dumps({"success": True, "message": "Payment processed successfully"}),
        )

    async def confirm(route: Route, request: Request) -> None:
        await route.fulfill(
            status=200,
            body=json.dumps({"success": True, "message": "Payment successful"}),
        )

    async def payment_page(route: Route, request: Request) -> None:
        order_token = urlparse(request.url).path.split("/")[2]
        await route.fulfill(
            status=303,
            headers={
                "Location": f"{base_url}{completion_path(order_token)}",
                "Content-Type": "text/html; charset=utf-8",
            },
            body="",
        )

    await page.route(PAYMENT_UPDATE_PATTERN, payment_update)
    await page.route(CONFIRM_UPDATE_PATTERN, confirm)
    await page.route(PAYMENT_PAGE_PATTERN, payment_page)
