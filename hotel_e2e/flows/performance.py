"""Page load and navigation timing against configured thresholds."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from time import monotonic
from typing import Awaitable, Callable, Iterable

from playwright.async_api import Page

from hotel_e2e.errors import PerformanceThresholdError
from hotel_e2e.reporter.report import TestReport, optional_step

logger = logging.getLogger(__name__)


@dataclass
class NavigationAction:
    action: Callable[[], Awaitable[None]]
    description: str


class PerformanceMetrics:
    """Wall-clock timings measured to network idle and recorded as parameters."""

    def __init__(self, page: Page, report: TestReport | None = None):
        self.page = page
        self.report = report
        self.timings: dict[str, int] = {}

    def _record(self, name: str, elapsed_ms: int) -> None:
        self.timings[name] = elapsed_ms
        if self.report is not None:
            self.report.parameter(name, f"{elapsed_ms}ms")
        logger.info("%s: %dms", name, elapsed_ms)

    async def measure_page_load(self, url: str, description: str) -> int:
        start = monotonic()
        await self.page.goto(url)
        await self.page.wait_for_load_state("networkidle")
        elapsed_ms = int((monotonic() - start) * 1000)
        self._record(f"{description} load time", elapsed_ms)
        return elapsed_ms

    async def measure_navigation(self, action: Callable[[], Awaitable[None]], description: str) -> int:
        start = monotonic()
        await action()
        await self.page.wait_for_load_state("networkidle")
        elapsed_ms = int((monotonic() - start) * 1000)
        self._record(f"{description} navigation time", elapsed_ms)
        return elapsed_ms

    async def measure_multiple_page_loads(
        self, pages: Iterable[tuple[str, str]], threshold_ms: int
    ) -> None:
        """Load each ``(url, name)`` in turn; a load at or over the threshold fails."""
        for url, name in pages:
            async with optional_step(self.report, f"Measure load time of {name}"):
                elapsed_ms = await self.measure_page_load(url, name)
                if elapsed_ms >= threshold_ms:
                    raise PerformanceThresholdError(name, elapsed_ms, threshold_ms)

    async def measure_multiple_navigations(
        self, actions: Iterable[NavigationAction], threshold_ms: int
    ) -> None:
        for nav in actions:
            async with optional_step(self.report, f"Measure response time of {nav.description}"):
                elapsed_ms = await self.measure_navigation(nav.action, nav.description)
                if elapsed_ms >= threshold_ms:
                    raise PerformanceThresholdError(nav.description, elapsed_ms, threshold_ms)
