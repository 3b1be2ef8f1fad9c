"""Login page object."""

from __future__ import annotations

import logging
from typing import Literal

from playwright.async_api import Page

from hotel_e2e.errors import PageAssertionError
from hotel_e2e.models.config import SuiteConfig
from hotel_e2e.models.test_case import LoginTestCase
from hotel_e2e.reporter.report import TestReport

from .base_page import BasePage

logger = logging.getLogger(__name__)


class LoginPage(BasePage):
    """Login form at ``/ja/login`` and its post-submit assertions."""

    def __init__(
        self,
        page: Page,
        config: SuiteConfig | None = None,
        report: TestReport | None = None,
    ):
        super().__init__(page, config, report)
        self.email_input = page.get_by_role("textbox", name="メールアドレス")
        self.password_input = page.get_by_role("textbox", name="パスワード")
        self.login_button = page.locator("#login-button")
        self.email_error_message = page.locator("#email-message")
        self.password_error_message = page.locator("#password-message")

    async def goto(self) -> None:
        await self.page.goto(self.config.url("login"))
        await self.wait_for_load()

    async def fill_email(self, email: str) -> None:
        await self.email_input.fill(email)

    async def fill_password(self, password: str) -> None:
        await self.password_input.fill(password)

    async def submit(self) -> None:
        await self.login_button.click()
        await self.wait_for_load()

    async def login_as(self, email: str, password: str) -> None:
        await self.fill_email(email)
        await self.fill_password(password)
        await self.submit()

    async def get_email_error_message(self) -> str:
        return await self.get_text_with_retry(self.email_error_message)

    async def get_password_error_message(self) -> str:
        return await self.get_text_with_retry(self.password_error_message)

    async def assert_error_messages(self, expected_email_error: str, expected_password_error: str) -> None:
        email_error = await self.get_email_error_message()
        password_error = await self.get_password_error_message()
        if expected_email_error not in email_error:
            raise PageAssertionError("Email error mismatch", expected=expected_email_error, actual=email_error)
        if expected_password_error not in password_error:
            raise PageAssertionError(
                "Password error mismatch", expected=expected_password_error, actual=password_error
            )

    async def assert_error_message_presence(
        self,
        field: Literal["email", "password"],
        should_exist: bool,
        expected_text: str | None = None,
    ) -> None:
        """Check one field's error slot: shown (optionally containing text) or blank."""
        element = self.email_error_message if field == "email" else self.password_error_message

        if should_exist:
            await self.assert_element_visible(element)
            if expected_text:
                text = await self.get_text_with_retry(element)
                if expected_text not in text:
                    raise PageAssertionError(
                        f"{field} error message mismatch", expected=expected_text, actual=text
                    )
            return

        # No error expected: the slot may be absent, hidden, or visible but blank.
        if await element.is_visible():
            text = (await element.text_content() or "").strip()
            if text:
                raise PageAssertionError(f"Unexpected {field} error message", expected="", actual=text)
        else:
            logger.debug("%s error slot not visible (no error)", field)

    async def execute_login_test(self, test_case: LoginTestCase) -> None:
        """Log in with the case's credentials and verify its expected outcome."""
        await self.login_as(test_case.email, test_case.password)

        if test_case.expected_outcome == "success":
            await self.assert_login_success()
            return

        await self.assert_login_failure()
        await self.assert_error_message_presence(
            "email", bool(test_case.expected_email_error), test_case.expected_email_error or None
        )
        await self.assert_error_message_presence(
            "password", bool(test_case.expected_password_error), test_case.expected_password_error or None
        )

    async def assert_login_success(self) -> None:
        """Landed on My Page with its heading shown."""
        await self.assert_current_url(r"mypage")
        await self.assert_element_visible('h2:has-text("マイページ")')

    async def assert_login_failure(self) -> None:
        """Still on the login page."""
        await self.assert_current_url(r"/login")
