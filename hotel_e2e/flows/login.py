"""Data-driven login case runner."""

from __future__ import annotations

import logging

from hotel_e2e.models.test_case import LoginTestCase
from hotel_e2e.pages.login_page import LoginPage
from hotel_e2e.reporter.report import TestReport, optional_step

logger = logging.getLogger(__name__)


def mask_password(password: str) -> str:
    """Passwords are reported by length only."""
    return "*" * len(password)


async def run_login_case(
    login_page: LoginPage, test_case: LoginTestCase, report: TestReport | None = None
) -> None:
    """Open the login form and check ``test_case``'s expected outcome.

    Raises ``PageAssertionError`` when the page does not behave as the case
    expects.
    """
    if report is not None:
        report.severity(test_case.severity)
        report.tag(*test_case.tags)
        report.parameter("email", test_case.email)
        report.parameter("password", mask_password(test_case.password))
        report.parameter("expected_outcome", test_case.expected_outcome)

    logger.info("Login case: %s", test_case.test_name)
    async with optional_step(report, "Open login page"):
        await login_page.goto()
    async with optional_step(report, f"Log in and expect {test_case.expected_outcome}"):
        await login_page.execute_login_test(test_case)
