"""Tests for the checkout route-interception mocks."""

import json
import re
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from bs4 import BeautifulSoup

from storefront_e2e.api.mocks import (
    CHECKOUT_PATTERN,
    CONFIRM_UPDATE_PATTERN,
    PAYMENT_PAGE_PATTERN,
    PAYMENT_UPDATE_PATTERN,
    CheckoutMockServer,
    generate_order_number,
    mock_order_confirmation,
    mock_payment,
)

BASE_URL = "http://shop.test"
TOKEN = "abc123token"


def make_route() -> MagicMock:
    route = MagicMock()
    route.fulfill = AsyncMock()
    route.fallback = AsyncMock()
    return route


def make_request(path: str, method: str = "GET") -> SimpleNamespace:
    return SimpleNamespace(url=f"{BASE_URL}{path}", method=method)


def make_page() -> MagicMock:
    page = MagicMock()
    page.route = AsyncMock()
    return page


@pytest.fixture
def server():
    return CheckoutMockServer(
        TOKEN,
        "Ada",
        "Denim Shirt",
        92.99,
        base_url=BASE_URL + "/",
        order_number="R123456789",
    )


class TestOrderNumber:

    def test_format(self):
        for _ in range(50):
            assert re.fullmatch(r"R\d{1,9}", generate_order_number())

    def test_default_is_generated(self):
        server = CheckoutMockServer(TOKEN, "Ada", "Denim Shirt", 10.0)
        assert server.order_number.startswith("R")


class TestInstall:

    async def test_registers_rules_in_order(self, server):
        page = make_page()

        order_number = await server.install(page)

        assert order_number == "R123456789"
        patterns = [c.args[0] for c in page.route.await_args_list]
        assert patterns == [
            PAYMENT_UPDATE_PATTERN,
            CONFIRM_UPDATE_PATTERN,
            CHECKOUT_PATTERN,
            f"**/checkout/{TOKEN}/complete",
        ]

    async def test_helper_returns_order_number(self):
        page = make_page()

        order_number = await mock_order_confirmation(page, TOKEN, "Ada", "Denim Shirt", 92.99, BASE_URL)

        assert re.fullmatch(r"R\d+", order_number)
        assert page.route.await_count == 4


class TestCheckoutRedirect:
    """Checkout page fetches land on the completion page."""

    @pytest.mark.parametrize(
        "path",
        [f"/checkout/{TOKEN}", f"/checkout/{TOKEN}/delivery", f"/checkout/{TOKEN}/payment", "/checkout/other/address"],
    )
    async def test_get_redirects_to_completion(self, server, path):
        route = make_route()

        await server.handle_checkout(route, make_request(path))

        route.fulfill.assert_awaited_once()
        kwargs = route.fulfill.await_args.kwargs
        assert kwargs["status"] == 302
        assert kwargs["headers"]["Location"] == f"{BASE_URL}/checkout/{TOKEN}/complete"
        route.fallback.assert_not_awaited()

    @pytest.mark.parametrize("method", ["POST", "PUT", "PATCH", "DELETE"])
    async def test_non_get_passes_through(self, server, method):
        route = make_route()

        await server.handle_checkout(route, make_request(f"/checkout/{TOKEN}/delivery", method))

        route.fallback.assert_awaited_once()
        route.fulfill.assert_not_awaited()

    @pytest.mark.parametrize(
        "path",
        [f"/checkout/{TOKEN}/complete", f"/checkout/{TOKEN}/update/payment", f"/checkout/{TOKEN}/update/confirm"],
    )
    async def test_more_specific_rules_take_over(self, server, path):
        route = make_route()

        await server.handle_checkout(route, make_request(path))

        route.fallback.assert_awaited_once()
        route.fulfill.assert_not_awaited()


class TestCompletionPage:

    async def test_serves_confirmation_html(self, server):
        route = make_route()

        await server.handle_complete(route, make_request(f"/checkout/{TOKEN}/complete"))

        kwargs = route.fulfill.await_args.kwargs
        assert kwargs["status"] == 200
        assert kwargs["content_type"] == "text/html"
        text = BeautifulSoup(kwargs["body"], "html.parser").get_text(" ", strip=True)
        assert "Order R123456789" in text
        assert "Thanks Ada for your order!" in text
        assert "Denim Shirt" in text

    def test_totals_include_shipping(self, server):
        soup = BeautifulSoup(server.confirmation_html(), "html.parser")
        summary = soup.find(id="checkout_summary").get_text(" ", strip=True)

        assert "Subtotal: $92.99" in summary
        assert "Shipping: $5.00" in summary
        assert "Total USD $97.99" in summary

    def test_values_are_escaped(self):
        server = CheckoutMockServer(TOKEN, "<b>Eve</b>", "Shirt & Tie", 1.0, order_number="R1")
        soup = BeautifulSoup(server.confirmation_html(), "html.parser")

        assert soup.find("b") is None
        assert "Thanks <b>Eve</b> for your order!" in soup.get_text()
        assert "Shirt & Tie" in soup.get_text()


class TestUpdateEndpoints:

    async def test_payment_update_succeeds(self, server):
        route = make_route()

        await server.handle_payment_update(route, make_request(f"/checkout/{TOKEN}/update/payment", "POST"))

        kwargs = route.fulfill.await_args.kwargs
        assert kwargs["status"] == 200
        assert json.loads(kwargs["body"]) == {"success": True}

    async def test_confirm_points_at_completion(self, server):
        route = make_route()

        await server.handle_confirm(route, make_request(f"/checkout/{TOKEN}/update/confirm", "POST"))

        body = json.loads(route.fulfill.await_args.kwargs["body"])
        assert body == {"success": True, "redirect_path": f"/checkout/{TOKEN}/complete"}


class TestMockPayment:

    async def test_payment_page_answers_see_other(self):
        page = make_page()
        await mock_payment(page, BASE_URL)
        handlers = {c.args[0]: c.args[1] for c in page.route.await_args_list}
        route = make_route()

        await handlers[PAYMENT_PAGE_PATTERN](route, make_request(f"/checkout/{TOKEN}/payment"))

        kwargs = route.fulfill.await_args.kwargs
        assert kwargs["status"] == 303
        assert kwargs["headers"]["Location"] == f"{BASE_URL}/checkout/{TOKEN}/complete"

    async def test_update_calls_succeed(self):
        page = make_page()
        await mock_payment(page, BASE_URL)
        handlers = {c.args[0]: c.args[1] for c in page.route.await_args_list}

        for pattern in (PAYMENT_UPDATE_PATTERN, CONFIRM_UPDATE_PATTERN):
            route = make_route()
            await handlers[pattern](route, make_request(f"/checkout/{TOKEN}/update/x", "POST"))
            assert json.loads(route.fulfill.await_args.kwargs["body"])["success"] is True
