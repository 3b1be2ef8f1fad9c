"""Live-site fixtures: config, a fresh browser page per test, and the report."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, AsyncIterator

import pytest
import pytest_asyncio
from playwright.async_api import Page, async_playwright

from hotel_e2e.models.config import DEFAULT_BASE_URL, SuiteConfig
from hotel_e2e.reporter.evidence_collector import EvidenceCollector
from hotel_e2e.reporter.json_report import write_test_result
from hotel_e2e.reporter.report import TestReport
from hotel_e2e.utils.browser import create_context, launch_browser

_UNSAFE_ID_RE = re.compile(r"[^\w.-]+")


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item: pytest.Item, call: pytest.CallInfo) -> Any:
    """Expose each phase's report as ``item.rep_setup`` / ``rep_call`` / ``rep_teardown``."""
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)


@pytest.fixture(scope="session")
def e2e_config(pytestconfig: pytest.Config) -> SuiteConfig:
    """Resolve the site URL from CLI, env, or default."""
    base_url = (
        pytestconfig.getoption("--e2e-base-url", default=None)
        or os.environ.get("HOTEL_E2E_BASE_URL")
        or DEFAULT_BASE_URL
    )
    return SuiteConfig(base_url=base_url, headless=not pytestconfig.getoption("--headed"))


@pytest_asyncio.fixture
async def page(e2e_config: SuiteConfig) -> AsyncIterator[Page]:
    """A page in its own browser context; nothing carries over between tests."""
    async with async_playwright() as p:
        browser = await launch_browser(p, headless=e2e_config.headless)
        context = await create_context(browser, e2e_config)
        try:
            yield await context.new_page()
        finally:
            await context.close()
            await browser.close()


@pytest_asyncio.fixture
async def report(request: pytest.FixtureRequest, e2e_config: SuiteConfig, page: Page) -> AsyncIterator[TestReport]:
    """Report for the running test.

    A failed test gets a full-page screenshot attached; every test's result is
    written under ``<report_output_dir>/e2e``.
    """
    test_id = _UNSAFE_ID_RE.sub("-", request.node.name).strip("-")
    evidence_dir = Path(e2e_config.report_output_dir) / "e2e" / test_id
    test_report = TestReport(test_id, request.node.name, evidence_dir, suite="e2e")
    collector = EvidenceCollector(evidence_dir, test_report)
    collector.setup_listeners(page)

    yield test_report

    rep = getattr(request.node, "rep_call", None)
    failed = rep is None or rep.failed
    if failed and e2e_config.screenshot_on_failure:
        await collector.attach_screenshot(page, "screenshot-on-failure")
    collector.save_logs()
    reason = str(rep.longrepr) if rep is not None and rep.failed else None
    write_test_result(
        test_report.to_result("fail" if failed else "pass", reason, collector.console_logs),
        evidence_dir,
    )
