"""Reservation confirmation page object."""

from __future__ import annotations

from hotel_e2e.errors import PageAssertionError

from .base_page import BasePage


class ConfirmPage(BasePage):
    """``confirm.html``: the read-back of the reservation and the completion modal."""

    async def confirm(self) -> None:
        await self.click_by_text("この内容で予約する")

    async def expect_modal_visible(self) -> None:
        await self.assert_element_visible(".modal")

    async def close_modal(self) -> None:
        await self.click_element('.modal button:has-text("閉じる")')

    async def get_plan_name_text(self) -> str:
        return await self.get_text_with_retry("#plan-name")

    async def get_guest_name_text(self) -> str:
        return await self.get_text_with_retry("#username")

    async def get_contact_text(self) -> str:
        return await self.get_text_with_retry("#contact")

    async def get_modal_text(self) -> str:
        modal_body = self.page.locator(".modal-body")
        await modal_body.wait_for(state="visible", timeout=self.config.timeouts.element)
        return await modal_body.text_content() or ""

    async def assert_reservation_details(self, plan_name: str, guest_name: str, contact: str) -> None:
        """Each read-back field contains what was entered on the form."""
        checks = (
            ("plan name", plan_name, await self.get_plan_name_text()),
            ("guest name", guest_name, await self.get_guest_name_text()),
            ("contact", contact, await self.get_contact_text()),
        )
        for label, expected, actual in checks:
            if expected not in actual:
                raise PageAssertionError(f"Confirmed {label} mismatch", expected=expected, actual=actual)

    async def assert_completion_modal(self, expected_text: str) -> None:
        await self.expect_modal_visible()
        text = await self.get_modal_text()
        if expected_text not in text:
            raise PageAssertionError("Completion modal text mismatch", expected=expected_text, actual=text)
