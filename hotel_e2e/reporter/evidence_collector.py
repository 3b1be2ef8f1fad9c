"""Evidence collector — captures screenshots and console output for a test."""

from __future__ import annotations

import logging
from pathlib import Path

from playwright.async_api import Page

from .report import TestReport

logger = logging.getLogger(__name__)


class EvidenceCollector:
    """Collects diagnostic evidence and files it into a ``TestReport``."""

    def __init__(self, evidence_dir: Path, report: TestReport | None = None):
        self.evidence_dir = evidence_dir
        self.evidence_dir.mkdir(parents=True, exist_ok=True)
        self.report = report
        self.console_logs: list[str] = []
        self._screenshot_count = 0

    def setup_listeners(self, page: Page) -> None:
        """Attach a console listener to a page (and any popup it opens)."""
        page.on("console", lambda msg: self.console_logs.append(
            f"[{msg.type}] {msg.text}"
        ))
        page.on("popup", self.setup_listeners)

    async def take_screenshot(self, page: Page, label: str = "", full_page: bool = False) -> str:
        """Capture a screenshot and return the file path, or "" on failure."""
        self._screenshot_count += 1
        name = f"screenshot_{label}_{self._screenshot_count}.png" if label else f"screenshot_{self._screenshot_count}.png"
        path = self.evidence_dir / name
        try:
            await page.screenshot(path=str(path), full_page=full_page, timeout=5000)
        except Exception as e:
            logger.warning("Screenshot failed: %s", e)
            return ""
        return str(path)

    async def attach_screenshot(self, page: Page, name: str, full_page: bool = True) -> bool:
        """Screenshot ``page`` straight into the report. Never raises."""
        if self.report is None:
            return bool(await self.take_screenshot(page, name, full_page=full_page))
        try:
            body = await page.screenshot(full_page=full_page, timeout=5000)
        except Exception as e:
            logger.warning("Screenshot '%s' failed: %s", name, e)
            return False
        return bool(self.report.attach(name, body, "image/png"))

    def save_logs(self) -> None:
        """Persist collected console output."""
        console_path = self.evidence_dir / "console.log"
        with open(console_path, "w", encoding="utf-8") as f:
            f.write("\n".join(self.console_logs))
