"""Browser launch and per-test context helpers."""

from __future__ import annotations

from playwright.async_api import Browser, BrowserContext, Playwright

from hotel_e2e.models.config import SuiteConfig

# The site renders Japanese copy and validation messages; locale drives the
# browser's own constraint-validation text ("このフィールドを入力してください。").
_LOCALE = "ja-JP"
_TIMEZONE = "Asia/Tokyo"


async def launch_browser(playwright: Playwright, headless: bool = True) -> Browser:
    """Launch Chromium for a test session."""
    return await playwright.chromium.launch(headless=headless)


async def create_context(
    browser: Browser,
    config: SuiteConfig,
    storage_state: dict | str | None = None,
) -> BrowserContext:
    """Create an isolated context bound to the site's base URL.

    Every test gets its own context, so no cookie or storage state leaks
    between test cases. Relative ``page.goto("/ja/login")`` calls resolve
    against ``config.base_url``.
    """
    context = await browser.new_context(
        base_url=config.base_url,
        viewport={"width": config.viewport.width, "height": config.viewport.height},
        locale=_LOCALE,
        timezone_id=_TIMEZONE,
        extra_http_headers={"Accept-Language": "ja,en-US;q=0.8"},
        storage_state=storage_state,
    )
    context.set_default_timeout(config.timeouts.test)
    return context
