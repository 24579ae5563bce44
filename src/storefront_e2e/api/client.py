"""Mock-aware storefront API client.

The client talks to the storefront REST API through a Playwright
``APIRequestContext``. In mock mode every operation is answered in-process and
no request is ever sent; a client that fails to log in during ``initialize``
switches itself to mock mode instead of failing the run.
"""

import asyncio
import logging
import re
from collections.abc import Awaitable, Callable, Mapping
from datetime import datetime
from typing import Any

from playwright.async_api import APIRequestContext, Playwright, async_playwright

from ..config import Settings
from ..fixtures.test_data import DECLINED_CARD_NUMBER
from ..models import PaymentStatus
from .errors import ClientNotInitializedError, LoginError, NoOrdersFoundError, ResponseAssertionError
from .responses import MockResponse, NetworkResult
from .retry import retry_call

MOCK_TOKEN = "mock-token"
FALLBACK_MOCK_TOKEN = "mock-token-fallback"
REGISTRATION_NAME = "Playwright Tester"

LOGIN_PATH = "/api/auth/login"
REGISTER_PATH = "/api/auth/register"
CART_ADD_PATH = "/api/cart/add"
SHIPPING_PATH = "/api/checkout/shipping"
BILLING_PATH = "/api/checkout/billing"
PAYMENT_PATH = "/api/checkout/payment"
ORDERS_PATH = "/api/orders"

_EXPIRY_PATTERN = re.compile(r"^\s*(\d{1,2})\s*/?\s*(\d{2}|\d{4})\s*$")


def parse_expiry(expiry: str) -> datetime | None:
    """Parse ``MM/YY``, ``MM/YYYY``, ``MMYY`` or ``MMYYYY`` to the first day of that month.

    Returns None when the value cannot be read as a card expiry.
    """
    match = _EXPIRY_PATTERN.match(expiry or "")
    if not match:
        return None
    month, year = int(match.group(1)), int(match.group(2))
    if len(match.group(2)) == 2:
        year += 2000
    if not 1 <= month <= 12:
        return None
    return datetime(year, month, 1)


def mock_orders(now: datetime) -> list[dict[str, Any]]:
    """Single completed order returned by mock mode."""
    return [
        {
            "id": "mock-order-123",
            "status": "completed",
            "items": [{"productId": "mock-product", "quantity": 2, "price": 99.99}],
            "total": 99.99,
            "createdAt": now.isoformat(),
        }
    ]


def _failed_payment(message: str) -> MockResponse:
    return MockResponse(400, {"status": PaymentStatus.FAILED.value, "message": message})


class StorefrontClient:
    """Storefront API client with an all-or-nothing mock mode."""

    def __init__(
        self,
        settings: Settings | None = None,
        request_context: APIRequestContext | None = None,
        logger: logging.Logger | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.settings = settings or Settings()
        self._request = request_context
        self._owns_request = False
        self._playwright: Playwright | None = None
        self._logger = logger or logging.getLogger(__name__)
        self._sleep = sleep
        self._clock = clock
        self._token = ""
        self._mock_mode = False

    @property
    def token(self) -> str:
        return self._token

    @property
    def mock_mode(self) -> bool:
        return self._mock_mode

    async def __aenter__(self) -> "StorefrontClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def initialize(
        self,
        email: str | None = None,
        password: str | None = None,
        use_mock: bool = False,
    ) -> None:
        """Log in, or enter mock mode.

        Never raises: any failure while logging in is logged and the client
        falls back to mock mode with a distinct placeholder token.
        """
        self._mock_mode = use_mock

        if self._mock_mode:
            self._logger.info("Running in mock mode, bypassing actual API calls")
            self._token = MOCK_TOKEN
            return

        try:
            if self._request is None:
                await self._open_request_context()

            login_email = email or self.settings.user_email
            login_password = password or self.settings.user_password

            self._logger.info("Attempting to login with: %s", login_email)
            self._token = await self.login(login_email, login_password)
            self._logger.info("Login successful")
        except Exception as e:
            self._logger.error("Failed to initialize API client: %s", e)
            self._mock_mode = True
            self._token = FALLBACK_MOCK_TOKEN
            self._logger.info("Switching to mock mode due to initialization failure")

    async def close(self) -> None:
        """Dispose of the request context and Playwright driver if this client opened them."""
        if self._owns_request and self._request is not None:
            await self._request.dispose()
            self._request = None
            self._owns_request = False
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None

    async def login(self, email: str, password: str) -> str:
        """Log in and return the session token.

        An unauthorized answer registers the account once and logs in one more
        time; a second unauthorized answer is not retried. In mock mode the
        current placeholder token is returned without a request.
        """
        if self._mock_mode:
            return self._token

        self._require_request_context()

        response = await self._post_login(email, password)
        if response.status == 401:
            self._logger.info("Login failed, attempting to register user %s", email)
            await self.register(email, password)
            response = await self._post_login(email, password)

        if not response.ok:
            self._logger.warning("Login failed with status %s", response.status)
            self._logger.warning("Response: %s", await self._safe_text(response))
            raise LoginError(response.status)

        body = await response.json()
        return body["token"]

    async def register(self, email: str, password: str) -> NetworkResult | None:
        """Create an account. Returns the response; failures are only logged."""
        if self._mock_mode:
            return None

        self._require_request_context()

        response = await self._request.post(
            REGISTER_PATH,
            data={"email": email, "password": password, "name": REGISTRATION_NAME},
        )
        if not response.ok:
            self._logger.warning("Registration failed with status %s", response.status)
            self._logger.warning("Response: %s", await self._safe_text(response))
        return response

    async def add_to_cart(self, product_id: str, quantity: int) -> None:
        if self._mock_mode:
            return
        await self._post_and_assert(CART_ADD_PATH, {"productId": product_id, "quantity": quantity})

    async def set_shipping_address(self, address: Mapping[str, Any]) -> None:
        if self._mock_mode:
            return
        await self._post_and_assert(SHIPPING_PATH, dict(address))

    async def set_billing_address(self, address: Mapping[str, Any]) -> None:
        if self._mock_mode:
            return
        await self._post_and_assert(BILLING_PATH, dict(address))

    async def process_payment(self, payment: Mapping[str, Any]) -> NetworkResult:
        """Submit a payment.

        In mock mode the outcome is decided from the record itself: the
        declined sentinel card is refused, an expiry month already begun in
        the past is refused as expired, anything else succeeds. Live payments
        go through the retry policy.
        """
        if self._mock_mode:
            return self._mock_payment(payment)

        self._require_request_context()

        return await self._retry(
            lambda: self._request.post(
                PAYMENT_PATH,
                headers=self._auth_headers(),
                data=dict(payment),
            )
        )

    async def fetch_orders(self) -> Any:
        """Fetch the account's orders, newest first."""
        if self._mock_mode:
            return mock_orders(self._clock())

        self._require_request_context()

        response = await self._retry(
            lambda: self._request.get(ORDERS_PATH, headers=self._auth_headers())
        )
        if not response.ok:
            raise ResponseAssertionError(ORDERS_PATH, response.status)
        return await response.json()

    async def get_latest_order(self) -> dict[str, Any]:
        orders = await self.fetch_orders()
        if not isinstance(orders, list) or not orders:
            raise NoOrdersFoundError()
        return orders[0]

    def _mock_payment(self, payment: Mapping[str, Any]) -> MockResponse:
        if payment.get("cardNumber") == DECLINED_CARD_NUMBER:
            return _failed_payment("Your card was declined")

        expiry = payment.get("expiry")
        if expiry:
            expires = parse_expiry(str(expiry))
            if expires is not None and expires < self._clock():
                return _failed_payment("Your card has expired")

        return MockResponse(200, {"status": PaymentStatus.SUCCESS.value})

    async def _open_request_context(self) -> None:
        self._playwright = await async_playwright().start()
        self._request = await self._playwright.request.new_context(
            base_url=self.settings.base_url,
            ignore_https_errors=True,
        )
        self._owns_request = True

    async def _post_login(self, email: str, password: str) -> NetworkResult:
        return await self._request.post(LOGIN_PATH, data={"email": email, "password": password})

    async def _post_and_assert(self, path: str, data: dict[str, Any]) -> None:
        self._require_request_context()

        response = await self._request.post(path, headers=self._auth_headers(), data=data)
        if not response.ok:
            raise ResponseAssertionError(path, response.status)

    async def _retry(self, operation: Callable[[], Awaitable[Any]]) -> Any:
        return await retry_call(
            operation,
            attempts=self.settings.retry.attempts,
            delay=self.settings.retry.delay_ms / 1000,
            logger=self._logger,
            sleep=self._sleep,
        )

    def _auth_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
        }

    def _require_request_context(self) -> None:
        if not self._mock_mode and self._request is None:
            raise ClientNotInitializedError()

    @staticmethod
    async def _safe_text(response: NetworkResult) -> str:
        try:
            return await response.text()
        except Exception:
            return "Unable to read response"
