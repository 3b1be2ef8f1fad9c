"""Exception types raised by page objects and flows."""

from __future__ import annotations

from typing import Any


class HotelE2EError(Exception):
    """Base exception for the hotel e2e suite."""

    pass


class UnknownNavTargetError(HotelE2EError, LookupError):
    """Raised when a navigation name is not in the page's registry."""

    def __init__(self, name: str, known: list[str]) -> None:
        self.name = name
        self.known = known
        super().__init__(
            f"Unknown navigation target '{name}' (known: {', '.join(known)})"
        )


class PageAssertionError(HotelE2EError, AssertionError):
    """A page did not reach the expected state. Carries expected vs actual."""

    def __init__(self, message: str, expected: Any = None, actual: Any = None) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"{message} (expected: {expected!r}, actual: {actual!r})")


class PlanSelectionError(HotelE2EError):
    """Selecting a plan card failed. The diagnostic lists what the page showed."""

    def __init__(self, plan_name: str, reason: str, diagnostic: Any = None) -> None:
        self.plan_name = plan_name
        self.reason = reason
        self.diagnostic = diagnostic
        titles = getattr(diagnostic, "card_titles", None)
        detail = f"; visible plans: {titles}" if titles is not None else ""
        super().__init__(f"Failed to select plan '{plan_name}': {reason}{detail}")


class PerformanceThresholdError(HotelE2EError, AssertionError):
    """A stopwatch timing exceeded its threshold."""

    def __init__(self, name: str, elapsed_ms: int, threshold_ms: int) -> None:
        self.name = name
        self.elapsed_ms = elapsed_ms
        self.threshold_ms = threshold_ms
        super().__init__(
            f"{name} took {elapsed_ms}ms, threshold is {threshold_ms}ms"
        )
