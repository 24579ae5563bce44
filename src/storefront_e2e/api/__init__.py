"""Storefront API client and network mocks."""

from .client import FALLBACK_MOCK_TOKEN, MOCK_TOKEN, StorefrontClient, parse_expiry
from .errors import (
    ClientNotInitializedError,
    LoginError,
    NoOrdersFoundError,
    ResponseAssertionError,
    StorefrontError,
)
from .mocks import CheckoutMockServer, generate_order_number, mock_order_confirmation, mock_payment
from .responses import MockResponse, NetworkResult
from .retry import retry_call

__all__ = [
    "CheckoutMockServer",
    "ClientNotInitializedError",
    "FALLBACK_MOCK_TOKEN",
    "LoginError",
    "MOCK_TOKEN",
    "MockResponse",
    "NetworkResult",
    "NoOrdersFoundError",
    "ResponseAssertionError",
    "StorefrontClient",
    "StorefrontError",
    "generate_order_number",
    "mock_order_confirmation",
    "mock_payment",
    "parse_expiry",
    "retry_call",
]
