"""Base page object — navigation, waits and retry-aware text reads.

Every concrete page object wraps exactly one Playwright ``Page`` (one tab)
and resolves its locators lazily against it. A page object never outlives
its tab; after a navigation that opens a new tab, bind a fresh page object
to the new ``Page``.
"""

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Mapping

from playwright.async_api import Locator, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from hotel_e2e.errors import PageAssertionError, UnknownNavTargetError
from hotel_e2e.models.config import SuiteConfig
from hotel_e2e.reporter.report import TestReport

logger = logging.getLogger(__name__)


class BasePage:
    """Shared behaviour for all hotel page objects."""

    def __init__(
        self,
        page: Page,
        config: SuiteConfig | None = None,
        report: TestReport | None = None,
    ):
        self.page = page
        self.config = config or SuiteConfig()
        self.report = report
        self.nav: Mapping[str, Locator] = MappingProxyType({
            "home": page.get_by_role("link", name="ホーム"),
            "plans": page.get_by_role("link", name="宿泊予約"),
            "signup": page.get_by_role("link", name="会員登録"),
            "login": page.get_by_role("button", name="ログイン"),
            "logout": page.get_by_role("button", name="ログアウト"),
        })

    # --- waits --------------------------------------------------------------

    async def wait_for_load(self, timeout_ms: int | None = None) -> None:
        """Wait for network idle. A timeout is not fatal; callers rely on
        later element waits to surface real failures."""
        timeout = timeout_ms if timeout_ms is not None else self.config.timeouts.page_load
        try:
            await self.page.wait_for_load_state("networkidle", timeout=timeout)
        except PlaywrightTimeoutError:
            logger.debug("Network idle timeout after %dms, continuing", timeout)

    async def assert_current_url(self, pattern: str | re.Pattern[str], timeout_ms: int | None = None) -> None:
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        timeout = timeout_ms if timeout_ms is not None else self.config.timeouts.element
        try:
            await self.page.wait_for_url(regex, timeout=timeout)
        except PlaywrightTimeoutError:
            raise PageAssertionError(
                "URL did not match", expected=regex.pattern, actual=self.page.url
            ) from None

    async def assert_element_visible(self, target: str | Locator, timeout_ms: int | None = None) -> None:
        timeout = timeout_ms if timeout_ms is not None else self.config.timeouts.element
        try:
            await self._as_locator(target).first.wait_for(state="visible", timeout=timeout)
        except PlaywrightTimeoutError:
            raise PageAssertionError(
                "Element not visible", expected=str(target), actual="hidden or missing"
            ) from None

    # --- element helpers ----------------------------------------------------

    async def fill_input(self, selector: str, value: str) -> None:
        await self.page.fill(selector, value)

    async def click_element(self, selector: str) -> None:
        await self.page.click(selector)

    async def click_by_text(self, text: str) -> None:
        await self.page.click(f"text={text}")

    def _as_locator(self, target: str | Locator) -> Locator:
        return self.page.locator(target) if isinstance(target, str) else target

    async def get_text_with_retry(
        self,
        target: str | Locator,
        max_attempts: int | None = None,
        interval_ms: int | None = None,
    ) -> str:
        """Read an element's text, re-reading while it is still blank.

        The site fills several fields client-side after they become
        visible, so a single read can race the render. Waits for
        visibility, reads once, then re-reads up to ``max_attempts`` more
        times, ``interval_ms`` apart, while the text is whitespace-only. Returns
        the last value read, which may still be blank; callers that need a
        value must check it.
        """
        attempts_allowed = max_attempts if max_attempts is not None else self.config.retry.max_attempts
        interval = interval_ms if interval_ms is not None else self.config.retry.interval_ms
        locator = self._as_locator(target)
        await locator.wait_for(state="visible", timeout=self.config.timeouts.element)

        text = await locator.text_content() or ""
        attempts = 0
        while not text.strip() and attempts < attempts_allowed:
            await self.page.wait_for_timeout(interval)
            text = await locator.text_content() or ""
            attempts += 1

        if not text.strip():
            logger.debug("Text still blank after %d attempts", attempts)
        return text

    async def assert_text_content(self, target: str | Locator, expected_text: str) -> None:
        text = await self.get_text_with_retry(target)
        if expected_text not in text:
            raise PageAssertionError("Text not found", expected=expected_text, actual=text)

    # --- navigation -----------------------------------------------------------

    async def click_nav(self, name: str) -> None:
        element = self.nav.get(name)
        if element is None:
            raise UnknownNavTargetError(name, sorted(self.nav))
        await element.click()

    async def navigate_to_home(self) -> None:
        await self.click_nav("home")

    async def navigate_to_plans(self) -> None:
        await self.click_nav("plans")

    async def navigate_to_signup(self) -> None:
        await self.click_nav("signup")

    async def navigate_to_login(self) -> None:
        await self.click_nav("login")

    async def navigate_to_logout(self) -> None:
        await self.click_nav("logout")

    async def logout(self) -> None:
        await self.navigate_to_logout()

    # --- diagnostics ----------------------------------------------------------

    async def page_title(self) -> str:
        return await self.page.title()

    async def take_screenshot(self, path: str) -> str:
        """Full-page screenshot to ``path``. Failures are logged, not raised."""
        try:
            await self.page.screenshot(path=path, full_page=True)
        except Exception as e:
            logger.warning("Screenshot to %s failed: %s", path, e)
            return ""
        return path

    async def debug(self, message: str) -> None:
        logger.debug("DEBUG [%s]: %s", await self.page_title(), message)
