"""Data-driven reservation form validation runner."""

from __future__ import annotations

import logging

from hotel_e2e.errors import PageAssertionError
from hotel_e2e.models.test_case import ValidationTestCase
from hotel_e2e.pages.reserve_page import ReservePage
from hotel_e2e.reporter.report import TestReport, optional_step

from .form_actions import apply_form_actions

logger = logging.getLogger(__name__)


async def run_validation_case(
    reserve_page: ReservePage, test_case: ValidationTestCase, report: TestReport | None = None
) -> None:
    """Fill the form per ``test_case.setup``, submit, and check the outcome.

    Positive cases must reach the confirmation page with no inline errors
    shown. Negative cases must show at least one inline error per expected
    field, and each named field's message must contain its expected text.
    """
    if report is not None:
        report.severity(test_case.severity)
        report.description(test_case.description)
        if test_case.issue_id:
            report.issue(test_case.issue_id)
        report.tag(*test_case.tags)

    logger.info("Validation case %s: %s", test_case.issue_id, test_case.name)

    async with optional_step(report, "Fill the reservation form"):
        await apply_form_actions(reserve_page, test_case.setup)

    async with optional_step(report, "Submit and wait for validation"):
        outcome = await reserve_page.submit_and_wait_for_validation()
        logger.debug("Submit outcome: %s", outcome)

    if test_case.is_positive:
        async with optional_step(report, "Confirmation page reached"):
            await reserve_page.assert_navigation_to_confirm_page()
            error_count = await reserve_page.get_visible_invalid_feedback_count()
            if error_count != 0:
                raise PageAssertionError("Inline errors shown", expected=0, actual=error_count)
        return

    async with optional_step(report, "Inline errors shown"):
        error_count = await reserve_page.get_visible_invalid_feedback_count()
        expected_min = len(test_case.expected_errors)
        if error_count < expected_min:
            raise PageAssertionError(
                "Too few inline errors shown", expected=f">= {expected_min}", actual=error_count
            )
        await reserve_page.assert_multiple_field_errors(dict(test_case.expected_errors))
