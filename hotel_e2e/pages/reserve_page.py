"""Reservation form page object (the ``reserve.html`` tab opened from a plan card)."""

from __future__ import annotations

import logging
import re
from typing import Mapping

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from hotel_e2e.errors import PageAssertionError
from hotel_e2e.models.test_case import ContactMethod, ReservationData
from hotel_e2e.utils.waits import first_of

from .base_page import BasePage

logger = logging.getLogger(__name__)

INVALID_FEEDBACK_SELECTOR = ".invalid-feedback:visible"
SUBMIT_SELECTOR = '[data-test="submit-button"]'
CONFIRM_URL = re.compile(r".*confirm\.html")

_VISIBLE_FEEDBACK_COUNT_JS = """
() => Array.from(document.querySelectorAll('.invalid-feedback'))
    .filter(el => window.getComputedStyle(el).display !== 'none')
    .length
"""

# Feedback text next to a field, or null when the field, its feedback
# element, or the feedback's display is missing.
_FIELD_ERROR_JS = """
(id) => {
    const field = document.getElementById(id);
    if (!field || !field.parentElement) return null;
    const feedback = field.parentElement.querySelector('.invalid-feedback');
    if (!feedback) return null;
    return window.getComputedStyle(feedback).display !== 'none' ? feedback.textContent : null;
}
"""


class ReservePage(BasePage):
    """Reservation input form and its client-side validation feedback."""

    # --- inputs ---------------------------------------------------------------

    async def select_date(self, date: str) -> None:
        """Type a check-in date (``YYYY/MM/DD``) and close the date picker."""
        date_input = self.page.get_by_role("textbox", name="宿泊日 必須")
        await date_input.click()
        await date_input.fill(date)
        await self.page.get_by_role("button", name="閉じる").click()

    async def select_stay_days(self, days: str) -> None:
        await self.page.get_by_role("spinbutton", name="宿泊数 必須").fill(days)

    async def select_guests(self, guests: str) -> None:
        await self.page.get_by_role("spinbutton", name="人数 必須").fill(guests)

    async def choose_additional_plans(self, plans: list[str] | tuple[str, ...]) -> None:
        for plan in plans:
            await self.page.get_by_role("checkbox", name=plan).check()

    async def fill_name(self, name: str) -> None:
        await self.page.get_by_role("textbox", name="氏名 必須").fill(name)

    async def select_contact_method(self, method: ContactMethod) -> None:
        await self.page.select_option('select[name="contact"]', method)

    async def fill_email(self, email: str) -> None:
        await self.page.get_by_role("textbox", name="メールアドレス 必須").fill(email)

    async def fill_tel(self, tel: str) -> None:
        await self.page.get_by_role("textbox", name="電話番号 必須").fill(tel)

    async def fill_remarks(self, remarks: str) -> None:
        await self.page.fill('textarea[name="comment"]', remarks)

    async def fill_reservation_form(self, data: ReservationData) -> None:
        """Fill every input from ``data``.

        The email and phone inputs only appear once the matching contact
        method is chosen, so only the one for ``data.contact_method`` is
        filled.
        """
        await self.select_date(data.check_in_date)
        await self.select_stay_days(data.stay_days)
        await self.select_guests(data.guests)
        await self.choose_additional_plans(data.additional_plans)
        await self.fill_name(data.guest_name)
        await self.select_contact_method(data.contact_method)
        if data.contact_method == "email":
            await self.fill_email(data.email)
        elif data.contact_method == "tel":
            await self.fill_tel(data.tel)
        if data.remarks:
            await self.fill_remarks(data.remarks)

    async def proceed_to_confirm(self) -> None:
        await self.page.locator(SUBMIT_SELECTOR).click()

    # --- validation -------------------------------------------------------------

    async def get_visible_invalid_feedback_count(self) -> int:
        return await self.page.evaluate(_VISIBLE_FEEDBACK_COUNT_JS)

    async def get_field_error_message(self, field_id: str) -> str | None:
        """Displayed feedback text for ``field_id``, or ``None`` if none is shown."""
        return await self.page.evaluate(_FIELD_ERROR_JS, field_id)

    async def submit_and_wait_for_validation(self) -> str | None:
        """Submit, then wait for whichever comes first: inline errors or the
        confirmation page.

        Returns ``"validation"``, ``"navigation"`` or ``None`` when neither
        showed up within the race timeout. Callers assert on page state
        afterwards, not on the return value alone.
        """
        race_ms = self.config.timeouts.validation_race
        await self.proceed_to_confirm()
        outcome = await first_of({
            "validation": self.page.wait_for_selector(
                INVALID_FEEDBACK_SELECTOR, state="visible", timeout=race_ms
            ),
            "navigation": self.page.wait_for_url(CONFIRM_URL, timeout=race_ms),
        })
        if outcome is None:
            logger.debug("Neither validation feedback nor navigation within %dms", race_ms)
        await self.page.wait_for_timeout(self.config.timeouts.validation_settle)
        return outcome

    async def assert_field_error(self, field_id: str, expected_message: str) -> None:
        message = await self.get_field_error_message(field_id)
        if not message:
            raise PageAssertionError(
                f'No error message shown for field "{field_id}"', expected=expected_message, actual=message
            )
        if expected_message not in message:
            raise PageAssertionError(
                f'Unexpected error message for field "{field_id}"', expected=expected_message, actual=message
            )

    async def assert_multiple_field_errors(self, field_errors: Mapping[str, str]) -> None:
        for field_id, expected_message in field_errors.items():
            await self.assert_field_error(field_id, expected_message)

    async def assert_navigation_to_confirm_page(self) -> None:
        """Confirmation page reached; otherwise report why not."""
        try:
            await self.page.wait_for_url(CONFIRM_URL, timeout=self.config.timeouts.confirm_navigation)
        except PlaywrightTimeoutError as e:
            error_count = await self.get_visible_invalid_feedback_count()
            if error_count > 0:
                raise PageAssertionError(
                    f"Validation errors block the confirmation page ({error_count} shown)",
                    expected="confirm.html",
                    actual=self.page.url,
                ) from e
            raise PageAssertionError(
                "Did not reach the confirmation page", expected="confirm.html", actual=self.page.url
            ) from e
