"""Storefront end-to-end and API test suite."""

__version__ = "0.1.0"
