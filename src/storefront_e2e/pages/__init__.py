"""Page objects for the storefront."""

from functools import cached_property

from playwright.async_api import Page

from ..config import DEFAULT_BASE_URL
from .base_page import BasePage
from .cart_page import CartPage
from .checkout_page import CheckoutInfo, CheckoutPage, PaymentInfo
from .delivery_page import DeliveryPage
from .home_page import HomePage, LoginCredentials, UserRegistrationData
from .new_arrivals_page import NewArrivalsPage
from .payment_page import CardInfo, OrderDetails, PaymentPage
from .product_page import ProductPage
from .shop_all_page import ShopAllPage


class Pages:
    """All page objects for one browser page."""

    def __init__(self, page: Page, base_url: str = DEFAULT_BASE_URL):
        self.page = page
        self.base_url = base_url

    @cached_property
    def home(self) -> HomePage:
        return HomePage(self.page, self.base_url)

    @cached_property
    def shop_all(self) -> ShopAllPage:
        return ShopAllPage(self.page, self.base_url)

    @cached_property
    def new_arrivals(self) -> NewArrivalsPage:
        return NewArrivalsPage(self.page, self.base_url)

    @cached_property
    def product(self) -> ProductPage:
        return ProductPage(self.page, self.base_url)

    @cached_property
    def cart(self) -> CartPage:
        return CartPage(self.page, self.base_url)

    @cached_property
    def checkout(self) -> CheckoutPage:
        return CheckoutPage(self.page, self.base_url)

    @cached_property
    def delivery(self) -> DeliveryPage:
        return DeliveryPage(self.page, self.base_url)

    @cached_property
    def payment(self) -> PaymentPage:
        return PaymentPage(self.page, self.base_url)


__all__ = [
    "BasePage",
    "CardInfo",
    "CartPage",
    "CheckoutInfo",
    "CheckoutPage",
    "DeliveryPage",
    "HomePage",
    "LoginCredentials",
    "NewArrivalsPage",
    "OrderDetails",
    "Pages",
    "PaymentInfo",
    "PaymentPage",
    "ProductPage",
    "ShopAllPage",
    "UserRegistrationData",
]
