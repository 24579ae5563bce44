"""Test data generators."""

from .test_data import (
    DECLINED_CARD_NUMBER,
    VALID_CARD_NUMBER,
    TestData,
    build_test_data,
    generate_address,
    generate_payment_info,
    generate_test_user,
    random_string,
)

__all__ = [
    "DECLINED_CARD_NUMBER",
    "VALID_CARD_NUMBER",
    "TestData",
    "build_test_data",
    "generate_address",
    "generate_payment_info",
    "generate_test_user",
    "random_string",
]
