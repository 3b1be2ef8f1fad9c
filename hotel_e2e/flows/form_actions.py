"""Form action runner — replays ``FormAction`` records against the reservation form."""

from __future__ import annotations

import logging
from typing import Iterable

from hotel_e2e.models.test_case import FormAction
from hotel_e2e.pages.reserve_page import ReservePage

logger = logging.getLogger(__name__)


async def run_form_action(reserve_page: ReservePage, action: FormAction) -> None:
    """Execute a single form action on the reservation form."""
    logger.debug("Form action: %s | value=%s | values=%s",
                 action.action_type, action.value, action.values)

    match action.action_type:
        case "date":
            await reserve_page.select_date(action.value)
        case "stay_days":
            await reserve_page.select_stay_days(action.value)
        case "guests":
            await reserve_page.select_guests(action.value)
        case "additional_plans":
            await reserve_page.choose_additional_plans(action.values)
        case "name":
            await reserve_page.fill_name(action.value)
        case "contact":
            if action.value not in ("no", "email", "tel"):
                raise ValueError(f"contact action requires no, email or tel, got '{action.value}'")
            await reserve_page.select_contact_method(action.value)
        case "email":
            await reserve_page.fill_email(action.value)
        case "tel":
            await reserve_page.fill_tel(action.value)
        case "remarks":
            await reserve_page.fill_remarks(action.value)
        case _:
            raise ValueError(f"Unknown form action type: {action.action_type}")


async def apply_form_actions(reserve_page: ReservePage, actions: Iterable[FormAction]) -> None:
    """Run ``actions`` in order; the first failure propagates."""
    for action in actions:
        await run_form_action(reserve_page, action)
