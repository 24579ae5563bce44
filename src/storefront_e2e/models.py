"""Core data models for the storefront suite."""

from dataclasses import dataclass
from enum import Enum


class PaymentStatus(Enum):
    """Payment outcome reported by the checkout API."""

    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class TestUser:
    """A storefront account used by a scenario."""

    __test__ = False  # not a pytest test class

    email: str
    password: str
    first_name: str = ""
    last_name: str = ""


@dataclass
class Address:
    """Shipping or billing address."""

    first_name: str
    last_name: str
    address1: str
    city: str
    zipcode: str
    phone: str
    state: str
    country: str = "United States"
    address2: str | None = None

    def to_payload(self) -> dict[str, str]:
        """Serialize with the field names the checkout API expects."""
        payload = {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "address1": self.address1,
            "city": self.city,
            "zipcode": self.zipcode,
            "phone": self.phone,
            "state": self.state,
            "country": self.country,
        }
        if self.address2:
            payload["address2"] = self.address2
        return payload


@dataclass
class Card:
    """Credit card details as typed into the payment form."""

    cardholder_name: str
    card_number: str
    expiry_date: str  # MMYYYY, as the payment form accepts it
    cvv: str

    def to_payload(self) -> dict[str, str]:
        return {
            "paymentMethod": "credit_card",
            "cardholderName": self.cardholder_name,
            "cardNumber": self.card_number,
            "expiry": self.expiry_date,
            "cvv": self.cvv,
        }


@dataclass
class Product:
    """Catalogue product referenced by the scenarios."""

    name: str
    category: str
    price: float | None = None
