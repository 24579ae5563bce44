"""Errors raised by the storefront API client."""


class StorefrontError(Exception):
    """Base class for storefront client errors."""


class ClientNotInitializedError(StorefrontError):
    """A live operation was attempted before a request context existed."""

    def __init__(self, message: str = "API request context not initialized"):
        super().__init__(message)


class LoginError(StorefrontError):
    """Login returned a non-success status."""

    def __init__(self, status: int):
        self.status = status
        super().__init__(f"Login failed with status {status}")


class ResponseAssertionError(StorefrontError, AssertionError):
    """An asserted API call came back without a success status."""

    def __init__(self, endpoint: str, status: int):
        self.endpoint = endpoint
        self.status = status
        super().__init__(f"Expected success from {endpoint}, got status {status}")


class NoOrdersFoundError(StorefrontError):
    """The orders endpoint returned no usable order list."""

    def __init__(self, message: str = "No orders found"):
        super().__init__(message)
