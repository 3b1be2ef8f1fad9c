"""Pytest configuration and shared fixtures."""

import os
from contextlib import asynccontextmanager
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from PIL import Image
from playwright.async_api import Browser, BrowserContext, Page

from hotel_e2e.models.config import SuiteConfig
from hotel_e2e.reporter.report import TestReport


# ============================================================================
# E2E gating
# ============================================================================


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("e2e", "Live-site browser test options")
    group.addoption(
        "--e2e",
        action="store_true",
        default=False,
        help="Run tests marked e2e against the live site (or set HOTEL_E2E=1).",
    )
    group.addoption(
        "--e2e-base-url",
        action="store",
        default=None,
        help="Site under test. Defaults to HOTEL_E2E_BASE_URL or the public demo site.",
    )
    group.addoption(
        "--headed",
        action="store_true",
        default=False,
        help="Show the browser window during e2e tests.",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if config.getoption("--e2e") or os.environ.get("HOTEL_E2E") == "1":
        return
    skip_e2e = pytest.mark.skip(reason="live-site test; pass --e2e or set HOTEL_E2E=1")
    for item in items:
        if item.get_closest_marker("e2e") is not None:
            item.add_marker(skip_e2e)


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def suite_config(monkeypatch: pytest.MonkeyPatch) -> SuiteConfig:
    """Default config, independent of the caller's environment."""
    monkeypatch.delenv("HOTEL_E2E_BASE_URL", raising=False)
    return SuiteConfig()


@pytest.fixture
def report(tmp_path: Path) -> TestReport:
    return TestReport("case-001", "Sample case", tmp_path / "evidence", suite="unit")


# ============================================================================
# Mock Fixtures
# ============================================================================


def create_mock_locator(
    text: str | None = "",
    visible: bool = True,
    count: int = 1,
    texts: list[str] | None = None,
) -> MagicMock:
    """A Playwright ``Locator`` stand-in.

    ``.first`` returns the same mock and ``.locator()`` returns it too unless
    a test rewires it.
    """
    loc = MagicMock(name="locator")
    loc.wait_for = AsyncMock()
    loc.text_content = AsyncMock(return_value=text)
    loc.click = AsyncMock()
    loc.fill = AsyncMock()
    loc.check = AsyncMock()
    loc.is_visible = AsyncMock(return_value=visible)
    loc.count = AsyncMock(return_value=count)
    loc.all_text_contents = AsyncMock(return_value=texts or [])
    loc.first = loc
    loc.locator = MagicMock(return_value=loc)
    return loc


@pytest.fixture
def make_locator():
    """Fixture that provides the create_mock_locator function."""
    return create_mock_locator


@pytest.fixture
def mock_page() -> AsyncMock:
    """Create a mock Playwright page.

    Navigation and wait methods are async mocks; locator factories are
    plain mocks returning a default locator.
    """
    page = AsyncMock(spec=Page)
    page.url = "https://hotel.testplanisphere.dev/ja/index.html"
    page.title.return_value = "HOTEL PLANISPHERE - テスト自動化練習サイト"
    page.screenshot = AsyncMock(return_value=b"\x89PNG fake")
    page.goto = AsyncMock()
    page.click = AsyncMock()
    page.fill = AsyncMock()
    page.select_option = AsyncMock()
    page.evaluate = AsyncMock()
    page.wait_for_selector = AsyncMock()
    page.wait_for_url = AsyncMock()
    page.wait_for_load_state = AsyncMock()
    page.wait_for_timeout = AsyncMock()
    page.locator = MagicMock(return_value=create_mock_locator())
    page.get_by_role = MagicMock(return_value=create_mock_locator())
    page.on = MagicMock()
    return page


class FakeEventInfo:
    """Stand-in for Playwright's ``EventInfo``: ``await info.value``."""

    def __init__(self, value):
        self._value = value

    @property
    def value(self):
        async def _resolve():
            return self._value
        return _resolve()


def install_popup(page: AsyncMock, popup) -> None:
    """Make ``page.expect_popup()`` yield ``popup``."""

    @asynccontextmanager
    async def _expect_popup(*args, **kwargs):
        yield FakeEventInfo(popup)

    page.expect_popup = MagicMock(side_effect=_expect_popup)


@pytest.fixture
def popup_page() -> AsyncMock:
    """The reservation tab a plan card opens."""
    popup = AsyncMock(spec=Page)
    popup.url = "https://hotel.testplanisphere.dev/ja/reserve.html?plan-id=1"
    popup.screenshot = AsyncMock(return_value=b"\x89PNG popup")
    popup.wait_for_load_state = AsyncMock()
    popup.locator = MagicMock(return_value=create_mock_locator())
    popup.get_by_role = MagicMock(return_value=create_mock_locator())
    return popup


@pytest.fixture
def mock_context() -> AsyncMock:
    """Create a mock Playwright browser context."""
    context = AsyncMock(spec=BrowserContext)
    context.new_page = AsyncMock()
    context.set_default_timeout = MagicMock()
    return context


@pytest.fixture
def mock_browser() -> AsyncMock:
    """Create a mock Playwright browser."""
    browser = AsyncMock(spec=Browser)
    browser.new_context = AsyncMock()
    return browser


# ============================================================================
# Helper Functions
# ============================================================================


def create_mock_screenshot(path: Path, color: tuple[int, int, int] = (255, 255, 255)) -> None:
    """Write a small solid-colour PNG."""
    Image.new("RGB", (8, 8), color).save(path, format="PNG")


@pytest.fixture
def create_screenshot_helper():
    """Fixture that provides the create_mock_screenshot function."""
    return create_mock_screenshot


@pytest.fixture
def expect_popup():
    """Fixture that provides the install_popup function."""
    return install_popup
