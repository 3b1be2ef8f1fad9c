"""Suite runner — runs the data-driven case tables against the live site."""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Awaitable, Callable

from playwright.async_api import Page, async_playwright

from hotel_e2e.data.reservation_cases import RESERVATION_TEST_CASES
from hotel_e2e.data.test_data import LOGIN_TEST_CASES, MAIN_PAGES
from hotel_e2e.data.validation_cases import VALIDATION_TEST_CASES
from hotel_e2e.errors import PageAssertionError
from hotel_e2e.flows.login import run_login_case
from hotel_e2e.flows.performance import PerformanceMetrics
from hotel_e2e.flows.reservation import execute_reservation_flow, open_reservation_page
from hotel_e2e.flows.validation import run_validation_case
from hotel_e2e.models.config import SuiteConfig
from hotel_e2e.models.test_case import LoginTestCase, ReservationTestCase, ValidationTestCase
from hotel_e2e.models.test_result import RunResult, TestResult
from hotel_e2e.pages.login_page import LoginPage
from hotel_e2e.reporter.evidence_collector import EvidenceCollector
from hotel_e2e.reporter.json_report import write_test_result
from hotel_e2e.reporter.report import TestReport
from hotel_e2e.utils.browser import create_context, launch_browser

logger = logging.getLogger(__name__)

CaseBody = Callable[[Page, TestReport, SuiteConfig], Awaitable[None]]

SUITES = ("login", "validation", "reservation", "performance")


@dataclass
class SuiteCase:
    """One runnable case: identity, report labels and the coroutine that drives it."""
    test_id: str
    name: str
    suite: str
    body: CaseBody
    severity: str = "normal"
    epic: str = ""
    feature: str = ""
    tags: tuple[str, ...] = ()
    parameters: dict[str, str] = field(default_factory=dict)


def _login_case(index: int, case: LoginTestCase) -> SuiteCase:
    async def body(page: Page, report: TestReport, config: SuiteConfig) -> None:
        await run_login_case(LoginPage(page, config, report), case, report)

    return SuiteCase(
        test_id=f"login-{index + 1:02d}",
        name=case.test_name,
        suite="login",
        body=body,
        severity=case.severity,
        epic="認証システム",
        feature="ログイン",
        tags=case.tags,
    )


def _validation_case(case: ValidationTestCase) -> SuiteCase:
    async def body(page: Page, report: TestReport, config: SuiteConfig) -> None:
        _, reserve_page = await open_reservation_page(page, config=config, report=report)
        await run_validation_case(reserve_page, case, report)

    return SuiteCase(
        test_id=case.issue_id.lower(),
        name=case.name,
        suite="validation",
        body=body,
        severity=case.severity,
        epic="予約システム",
        feature="入力バリデーション",
        tags=case.tags,
    )


def _reservation_case(index: int, case: ReservationTestCase) -> SuiteCase:
    async def body(page: Page, report: TestReport, config: SuiteConfig) -> None:
        result = await execute_reservation_flow(page, case.options, report, config)
        if result.success != case.expect_success:
            raise PageAssertionError(
                "Reservation flow outcome mismatch",
                expected="success" if case.expect_success else "failure",
                actual=result.error_message or "success",
            )
        if case.expected_error_message and case.expected_error_message not in (result.error_message or ""):
            raise PageAssertionError(
                "Reservation flow error mismatch",
                expected=case.expected_error_message,
                actual=result.error_message,
            )

    return SuiteCase(
        test_id=f"reservation-{index + 1:02d}",
        name=case.name,
        suite="reservation",
        body=body,
        severity=case.severity,
        epic="予約システム",
        feature="宿泊予約",
        tags=case.tags,
    )


def _performance_case() -> SuiteCase:
    async def body(page: Page, report: TestReport, config: SuiteConfig) -> None:
        metrics = PerformanceMetrics(page, report)
        pages = [(config.url(path), name) for path, name in MAIN_PAGES]
        await metrics.measure_multiple_page_loads(pages, config.performance.page_load)

    return SuiteCase(
        test_id="performance-01",
        name="主要ページの読み込み時間が閾値内であること",
        suite="performance",
        body=body,
        severity="normal",
        epic="パフォーマンス",
        feature="ページ読み込み",
        tags=("performance",),
    )


def build_cases(suite: str = "all") -> list[SuiteCase]:
    """Cases for ``suite`` (one of ``SUITES`` or ``"all"``)."""
    if suite != "all" and suite not in SUITES:
        raise ValueError(f"Unknown suite '{suite}' (choose from {', '.join(SUITES)} or all)")

    cases: list[SuiteCase] = []
    if suite in ("all", "login"):
        cases.extend(_login_case(i, c) for i, c in enumerate(LOGIN_TEST_CASES))
    if suite in ("all", "validation"):
        cases.extend(_validation_case(c) for c in VALIDATION_TEST_CASES)
    if suite in ("all", "reservation"):
        cases.extend(_reservation_case(i, c) for i, c in enumerate(RESERVATION_TEST_CASES))
    if suite in ("all", "performance"):
        cases.append(_performance_case())
    return cases


class SuiteRunner:
    """Runs cases in parallel, each in its own browser context."""

    def __init__(self, config: SuiteConfig, output_dir: Path | None = None):
        self.config = config
        self.run_id = f"run_{uuid.uuid4().hex[:8]}"
        self.run_dir = (output_dir or Path(config.report_output_dir)) / self.run_id
        self.run_dir.mkdir(parents=True, exist_ok=True)

    async def run(self, cases: list[SuiteCase]) -> RunResult:
        started_at = time.strftime("%Y-%m-%dT%H:%M:%SZ")
        start_time = time.time()
        total = len(cases)
        logger.info("Starting run %s (%d cases) against %s", self.run_id, total, self.config.base_url)

        async with async_playwright() as p:
            browser = await launch_browser(p, headless=self.config.headless)
            semaphore = asyncio.Semaphore(self.config.max_parallel_contexts)

            async def _run_one(index: int, case: SuiteCase) -> TestResult:
                async with semaphore:
                    logger.info("Running case [%d/%d]: %s (%s)", index + 1, total, case.name, case.suite)
                    context = await create_context(browser, self.config)
                    try:
                        result = await self._run_case(context, case)
                    finally:
                        await context.close()
                    logger.info("[%s] %s: %s (%.1fs)", result.result.upper(), case.test_id,
                                case.name, result.duration_seconds)
                    return result

            test_results = list(await asyncio.gather(
                *(_run_one(i, c) for i, c in enumerate(cases))
            ))
            await browser.close()

        duration = time.time() - start_time
        run_result = RunResult(
            run_id=self.run_id,
            started_at=started_at,
            completed_at=time.strftime("%Y-%m-%dT%H:%M:%SZ"),
            base_url=self.config.base_url,
            total_tests=len(test_results),
            passed=sum(1 for r in test_results if r.result == "pass"),
            failed=sum(1 for r in test_results if r.result == "fail"),
            skipped=sum(1 for r in test_results if r.result == "skip"),
            errors=sum(1 for r in test_results if r.result == "error"),
            duration_seconds=round(duration, 2),
            test_results=test_results,
        )
        logger.info(
            "Run complete: %d passed, %d failed, %d errors (%.1fs)",
            run_result.passed, run_result.failed, run_result.errors, duration,
        )
        return run_result

    async def _run_case(self, context, case: SuiteCase) -> TestResult:
        """Run one case on a fresh page and convert its outcome to a result.

        Assertion failures are ``fail``; anything else raised is ``error``.
        """
        evidence_dir = self.run_dir / "evidence" / case.test_id
        report = TestReport(case.test_id, case.name, evidence_dir, suite=case.suite)
        report.severity(case.severity)
        if case.epic:
            report.epic(case.epic)
        if case.feature:
            report.feature(case.feature)
        report.tag(*case.tags)
        for name, value in case.parameters.items():
            report.parameter(name, value)

        collector = EvidenceCollector(evidence_dir, report)
        page = await context.new_page()
        collector.setup_listeners(page)

        outcome, reason = "pass", None
        try:
            await case.body(page, report, self.config)
        except AssertionError as e:
            outcome, reason = "fail", str(e)
        except Exception as e:
            logger.exception("Case %s raised", case.test_id)
            outcome, reason = "error", f"{type(e).__name__}: {e}"

        if outcome != "pass":
            logger.warning("Case %s %s: %s", case.test_id, outcome, reason)
            if self.config.screenshot_on_failure:
                await collector.attach_screenshot(page, "screenshot-on-failure")

        collector.save_logs()
        result = report.to_result(outcome, reason, collector.console_logs)
        write_test_result(result, evidence_dir)
        return result
