"""Plan list page object — plan discovery and plan selection."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field

from playwright.async_api import Locator, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from hotel_e2e.errors import PlanSelectionError

from .base_page import BasePage

logger = logging.getLogger(__name__)

CARD_TITLE_SELECTOR = "h5.card-title"
RESERVE_BUTTON_SELECTOR = 'a.btn, a[role="button"]'
PRICE_SELECTOR = '.card-text:has-text("お値段")'


def plan_card_selector(plan_name: str) -> str:
    """Card body whose title is exactly ``plan_name``."""
    return f'.card-body:has({CARD_TITLE_SELECTOR}:text-is("{plan_name}"))'


@dataclass
class PlanSelectionDiagnostic:
    """What the plans page showed when a selection failed."""
    plan_name: str
    card_titles: list[str] = field(default_factory=list)
    card_exists: bool = False
    link_texts: list[str] = field(default_factory=list)
    reserve_button_count: int = 0


class PlansPage(BasePage):
    """Plan cards at ``/ja/plans``."""

    async def goto(self) -> None:
        await self.page.goto(self.config.url("plans"))
        await self.wait_for_load()

    def get_plan_card(self, plan_name: str) -> Locator:
        return self.page.locator(plan_card_selector(plan_name))

    async def select_plan_by_name(self, plan_name: str) -> Page:
        """Click a plan's reserve button and return the reservation tab it opens.

        The button is looked up inside the matching card only, so two cards
        with similar buttons can't be confused. The click and the popup
        event are awaited together; the returned tab has settled to network
        idle. On failure a diagnostic of the visible cards is captured
        before ``PlanSelectionError`` is raised.
        """
        timeout = self.config.timeouts.plan_selection
        try:
            card = self.get_plan_card(plan_name)
            await card.wait_for(state="visible", timeout=timeout)

            reserve_button = card.locator(RESERVE_BUTTON_SELECTOR)
            await reserve_button.wait_for(state="visible", timeout=timeout)

            async with self.page.expect_popup(timeout=timeout) as popup_info:
                await reserve_button.click()
            reservation_page = await popup_info.value
            try:
                await reservation_page.wait_for_load_state(
                    "networkidle", timeout=self.config.timeouts.page_load
                )
            except PlaywrightTimeoutError:
                logger.debug("Reservation tab did not reach network idle, continuing")
        except Exception as e:
            logger.error("Selecting plan '%s' failed: %s", plan_name, e)
            diagnostic = await self.debug_plan_selection(plan_name)
            if self.report is not None:
                self.report.attach_json("plan-selection-diagnostic", asdict(diagnostic))
                try:
                    body = await self.page.screenshot(full_page=True, timeout=5000)
                    self.report.attach("error-plan-selection", body, "image/png")
                except Exception as shot_err:
                    logger.warning("Plan selection screenshot failed: %s", shot_err)
            raise PlanSelectionError(plan_name, str(e), diagnostic) from e

        logger.info("Selected plan '%s' -> %s", plan_name, reservation_page.url)
        return reservation_page

    async def debug_plan_selection(self, plan_name: str) -> PlanSelectionDiagnostic:
        """Collect the visible cards and buttons. Never raises."""
        diagnostic = PlanSelectionDiagnostic(plan_name=plan_name)
        try:
            diagnostic.card_titles = await self.page.locator(CARD_TITLE_SELECTOR).all_text_contents()
            card = self.get_plan_card(plan_name)
            diagnostic.card_exists = await card.count() > 0
            if diagnostic.card_exists:
                diagnostic.link_texts = await card.locator("a").all_text_contents()
                diagnostic.reserve_button_count = await card.locator(RESERVE_BUTTON_SELECTOR).count()
        except Exception as e:
            logger.warning("Plan selection diagnostic incomplete: %s", e)

        logger.info(
            "Plan diagnostic for '%s': titles=%s card_exists=%s links=%s buttons=%d",
            plan_name, diagnostic.card_titles, diagnostic.card_exists,
            diagnostic.link_texts, diagnostic.reserve_button_count,
        )
        return diagnostic

    async def get_available_plans(self) -> list[str]:
        await self.wait_for_load()
        titles = await self.page.locator(CARD_TITLE_SELECTOR).all_text_contents()
        return [t.strip() for t in titles]

    async def search_plans(self, keyword: str) -> list[str]:
        return [p for p in await self.get_available_plans() if keyword in p]

    async def get_plan_price(self, plan_name: str) -> str:
        price = self.get_plan_card(plan_name).locator(PRICE_SELECTOR)
        return await self.get_text_with_retry(price)

    async def get_plan_details(self, plan_name: str) -> dict[str, str]:
        card = self.get_plan_card(plan_name)
        return {
            "title": await self.get_text_with_retry(card.locator(CARD_TITLE_SELECTOR)),
            "price": await self.get_text_with_retry(card.locator(PRICE_SELECTOR)),
            "description": await self.get_text_with_retry(card.locator(".card-text").first),
        }

    async def get_all_plans_summary(self) -> list[dict[str, str]]:
        summary = []
        for name in await self.get_available_plans():
            summary.append({"name": name, "price": await self.get_plan_price(name)})
        return summary
