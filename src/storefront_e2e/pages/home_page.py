"""Home page and the account menu."""

from dataclasses import dataclass
from typing import Self

from ..helpers import clear_and_type
from .base_page import BasePage
from .cart_page import CartPage
from .new_arrivals_page import NewArrivalsPage
from .product_page import ProductPage
from .shop_all_page import ShopAllPage


@dataclass
class UserRegistrationData:
    email: str
    password: str
    password_confirmation: str | None = None


@dataclass
class LoginCredentials:
    email: str
    password: str
    remember_me: bool = False


class HomePage(BasePage):
    """Landing page: sign up, log in and the main navigation."""

    async def open_account_menu(self) -> Self:
        await self.page.get_by_role("button").nth(1).click()
        await self._settle()
        return self

    async def navigate_to_sign_up(self) -> Self:
        await self.open_account_menu()
        await self.page.get_by_role("link", name="Sign Up").click()
        await self._settle()
        return self

    async def register_new_user(self, user: UserRegistrationData) -> Self:
        """Fill and submit the sign-up form.

        Fields are typed key by key; the sign-up form validates on input
        events and drops values set with fill().
        """
        await self.navigate_to_sign_up()

        await clear_and_type(self.page.get_by_role("textbox", name="Email", exact=True), user.email)
        await clear_and_type(self.page.get_by_role("textbox", name="Password", exact=True), user.password)
        confirmation = user.password_confirmation or user.password
        await clear_and_type(self.page.get_by_role("textbox", name="Password Confirmation"), confirmation)

        await self.page.get_by_role("button", name="Sign Up").click()
        await self._settle()
        return self

    async def logout(self) -> Self:
        await self.page.get_by_role("button", name="Logout").click()
        await self._settle()
        return self

    async def login(self, credentials: LoginCredentials) -> Self:
        await self.open_account_menu()

        await self.page.get_by_role("textbox", name="Email", exact=True).fill(credentials.email)
        await self.page.get_by_role("textbox", name="Password").fill(credentials.password)
        if credentials.remember_me:
            await self.page.get_by_role("checkbox", name="Remember me").check()

        await self.page.get_by_role("button", name="Login").click()
        await self._settle()
        return self

    async def is_user_logged_in(self, email: str) -> bool:
        return await self.page.get_by_text(f"Logged in as {email}").is_visible()

    async def click_welcome_banner(self) -> Self:
        await self.page.get_by_role("link", name="Welcome to our shop!", exact=True).click()
        await self._settle()
        return self

    async def click_shop_all_from_main(self) -> ShopAllPage:
        await self.page.get_by_role("main").get_by_text("Shop All").click()
        await self._settle()
        return ShopAllPage(self.page, self.base_url)

    async def click_featured_product(self, product_name: str) -> ProductPage:
        await self.page.get_by_role("link", name=f"{product_name}$").click()
        await self._settle()
        return ProductPage(self.page, self.base_url)

    async def get_shop_all_page(self) -> ShopAllPage:
        await self.go_to_shop_all()
        return ShopAllPage(self.page, self.base_url)

    async def get_new_arrivals_page(self) -> NewArrivalsPage:
        await self.go_to_new_arrivals()
        return NewArrivalsPage(self.page, self.base_url)

    async def get_cart_page(self) -> CartPage:
        await self.go_to_cart()
        return CartPage(self.page, self.base_url)

    async def search_product(self, search_term: str) -> ShopAllPage:
        await self.search(search_term)
        return ShopAllPage(self.page, self.base_url)

    async def verify_welcome_message(self, welcome_text: str) -> bool:
        return await self.page.get_by_text(welcome_text).is_visible()
