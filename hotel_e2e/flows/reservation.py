"""Reservation flow orchestrator — plan selection through the completion modal."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from playwright.async_api import Page

from hotel_e2e.data.test_data import COMPLETION_MESSAGE, RESERVATION_DATA
from hotel_e2e.models.config import SuiteConfig
from hotel_e2e.models.test_case import ReservationFlowOptions, ReservationStep
from hotel_e2e.pages.confirm_page import ConfirmPage
from hotel_e2e.pages.plans_page import PlansPage
from hotel_e2e.pages.reserve_page import ReservePage
from hotel_e2e.reporter.report import TestReport, optional_note, optional_step

logger = logging.getLogger(__name__)


@dataclass
class ReservationFlowResult:
    success: bool
    reservation_page: Optional[Page] = None
    confirm_page: Optional[ConfirmPage] = None
    error_message: Optional[str] = None


async def open_reservation_page(
    page: Page,
    plan_name: str = RESERVATION_DATA.plan_name,
    config: SuiteConfig | None = None,
    report: TestReport | None = None,
) -> tuple[Page, ReservePage]:
    """Go to the plans page, pick ``plan_name`` and bind a form to the new tab."""
    plans_page = PlansPage(page, config, report)
    await plans_page.goto()
    reservation_page = await plans_page.select_plan_by_name(plan_name)
    return reservation_page, ReservePage(reservation_page, config, report)


async def execute_reservation_flow(
    page: Page,
    options: ReservationFlowOptions | None = None,
    report: TestReport | None = None,
    config: SuiteConfig | None = None,
) -> ReservationFlowResult:
    """Run a reservation end to end and report whether it completed.

    Each ``ReservationStep`` not listed in ``options.skip_steps`` runs as a
    reported step. Skipping SELECT_PLAN only skips opening the plans page;
    the plan is still selected from whatever page ``page`` shows, because
    that click opens the tab every later step runs in.

    Failures never raise: a screenshot of the reservation tab (or of
    ``page`` when no tab was opened) is attached when a report is bound,
    and the error is returned in the result.
    """
    options = options or ReservationFlowOptions()
    data = options.merged_with(RESERVATION_DATA)
    skip = set(options.skip_steps)
    reservation_page: Page | None = None

    try:
        plans_page = PlansPage(page, config, report)
        if ReservationStep.SELECT_PLAN not in skip:
            async with optional_step(report, f"{ReservationStep.SELECT_PLAN.value}: {data.plan_name}"):
                await plans_page.goto()

        reservation_page = await plans_page.select_plan_by_name(data.plan_name)

        reserve_form = ReservePage(reservation_page, config, report)
        if ReservationStep.FILL_FORM not in skip:
            async with optional_step(report, ReservationStep.FILL_FORM.value):
                await reserve_form.fill_reservation_form(data)
                optional_note(report, f"Check-in date: {data.check_in_date}")
                optional_note(report, f"Nights: {data.stay_days}")
                optional_note(report, f"Guests: {data.guests}")
                for plan in data.additional_plans:
                    optional_note(report, f"Additional plan: {plan}")
                optional_note(report, f"Guest name: {data.guest_name}")
                optional_note(report, f"Contact: {data.contact}")

            async with optional_step(report, "Proceed to confirmation"):
                await reserve_form.proceed_to_confirm()

        confirm_page = ConfirmPage(reservation_page, config, report)
        if ReservationStep.CONFIRM not in skip:
            async with optional_step(report, ReservationStep.CONFIRM.value):
                await confirm_page.assert_current_url(r".*/confirm\.html")
                await confirm_page.assert_reservation_details(
                    data.plan_name, data.guest_name, data.contact
                )

        if ReservationStep.COMPLETE not in skip:
            async with optional_step(report, ReservationStep.COMPLETE.value):
                await confirm_page.confirm()
                await confirm_page.assert_completion_modal(COMPLETION_MESSAGE)

    except Exception as e:
        logger.error("Reservation flow failed: %s", e)
        failed_tab = reservation_page if reservation_page is not None else page
        await _attach_error_screenshot(failed_tab, report)
        return ReservationFlowResult(success=False, error_message=str(e) or type(e).__name__)

    logger.info("Reservation flow completed for plan '%s'", data.plan_name)
    return ReservationFlowResult(
        success=True, reservation_page=reservation_page, confirm_page=confirm_page
    )


async def _attach_error_screenshot(page: Page, report: TestReport | None) -> None:
    try:
        body = await page.screenshot()
    except Exception as e:
        logger.warning("Error screenshot failed: %s", e)
        return
    if report is not None:
        report.attach("error-screenshot", body, "image/png")
