"""Per-test report recorder — steps, labels, parameters and attachments.

Page objects and flows write into a ``TestReport`` but never read from it.
Labels follow the usual test-report vocabulary (epic, feature, story,
severity, tag, owner, issue) so a run can be grouped the same way the site's
test catalogue is.
"""

from __future__ import annotations

import json
import logging
import re
import time
from contextlib import AbstractAsyncContextManager, asynccontextmanager, nullcontext
from pathlib import Path
from typing import Any, AsyncIterator

from hotel_e2e.models.test_result import Attachment, StepResult, TestResult

logger = logging.getLogger(__name__)

_UNSAFE_NAME_RE = re.compile(r"[^\w.-]+")

_EXTENSIONS = {
    "image/png": ".png",
    "application/json": ".json",
    "text/plain": ".txt",
}


class TestReport:
    """Collects reporting metadata for one test case."""

    __test__ = False

    def __init__(self, test_id: str, test_name: str, evidence_dir: Path, suite: str = ""):
        self.test_id = test_id
        self.test_name = test_name
        self.suite = suite
        self.evidence_dir = evidence_dir
        self.description_text = ""
        self.severity_level = "normal"
        self.labels: dict[str, list[str]] = {}
        self.links: list[dict[str, str]] = []
        self.parameters: dict[str, str] = {}
        self.steps: list[StepResult] = []
        self.attachments: list[Attachment] = []
        self._step_stack: list[StepResult] = []
        self._started = time.time()

    # --- labels -----------------------------------------------------------

    def label(self, name: str, value: str) -> None:
        values = self.labels.setdefault(name, [])
        if value not in values:
            values.append(value)

    def epic(self, value: str) -> None:
        self.label("epic", value)

    def feature(self, value: str) -> None:
        self.label("feature", value)

    def story(self, value: str) -> None:
        self.label("story", value)

    def tag(self, *values: str) -> None:
        for v in values:
            self.label("tag", v)

    def owner(self, value: str) -> None:
        self.label("owner", value)

    def severity(self, value: str) -> None:
        self.severity_level = value

    def description(self, text: str) -> None:
        self.description_text = text

    def link(self, url: str, name: str = "", link_type: str = "link") -> None:
        self.links.append({"url": url, "name": name or url, "type": link_type})

    def issue(self, issue_id: str, url: str = "") -> None:
        self.label("issue", issue_id)
        if url:
            self.link(url, issue_id, "issue")

    def parameter(self, name: str, value: Any) -> None:
        self.parameters[name] = str(value)

    # --- steps ------------------------------------------------------------

    @asynccontextmanager
    async def step(self, label: str) -> AsyncIterator[StepResult]:
        """Record a labelled step; nested steps attach to the enclosing one.

        An exception inside the block marks the step failed and propagates.
        """
        step = StepResult(label=label)
        parent = self._step_stack[-1].steps if self._step_stack else self.steps
        parent.append(step)
        self._step_stack.append(step)
        start = time.time()
        logger.debug("Step: %s", label)
        try:
            yield step
        except Exception as e:
            step.status = "fail"
            step.error_message = str(e)
            raise
        finally:
            step.duration_seconds = round(time.time() - start, 3)
            self._step_stack.pop()

    def note(self, label: str) -> None:
        """Record an empty, already-passed step (detail line under the current step)."""
        parent = self._step_stack[-1].steps if self._step_stack else self.steps
        parent.append(StepResult(label=label))

    # --- attachments ------------------------------------------------------

    def attach(self, name: str, body: bytes | str, content_type: str = "text/plain") -> str:
        """Write an attachment under the evidence dir and return its path.

        Attachment failures are logged and swallowed; they never mask the
        failure being diagnosed.
        """
        safe = _UNSAFE_NAME_RE.sub("-", name).strip("-") or "attachment"
        ext = _EXTENSIONS.get(content_type, "")
        path = self.evidence_dir / f"{len(self.attachments) + 1:02d}_{safe}{ext}"
        try:
            self.evidence_dir.mkdir(parents=True, exist_ok=True)
            if isinstance(body, bytes):
                path.write_bytes(body)
            else:
                path.write_text(body, encoding="utf-8")
        except OSError as e:
            logger.warning("Attachment '%s' could not be written: %s", name, e)
            return ""
        self.attachments.append(Attachment(name=name, content_type=content_type, path=str(path)))
        return str(path)

    def attach_json(self, name: str, data: Any) -> str:
        return self.attach(
            name,
            json.dumps(data, indent=2, ensure_ascii=False, default=str),
            "application/json",
        )

    # --- result -----------------------------------------------------------

    def to_result(
        self,
        result: str,
        failure_reason: str | None = None,
        console_logs: list[str] | None = None,
    ) -> TestResult:
        return TestResult(
            test_id=self.test_id,
            test_name=self.test_name,
            suite=self.suite,
            description=self.description_text,
            severity=self.severity_level,
            labels=self.labels,
            links=self.links,
            parameters=self.parameters,
            result=result,
            duration_seconds=round(time.time() - self._started, 2),
            failure_reason=failure_reason,
            steps=self.steps,
            attachments=self.attachments,
            console_logs=console_logs or [],
        )


def optional_step(report: TestReport | None, label: str) -> AbstractAsyncContextManager:
    """``report.step(label)``, or a no-op block when no report is bound."""
    return report.step(label) if report is not None else nullcontext()


def optional_note(report: TestReport | None, label: str) -> None:
    if report is not None:
        report.note(label)
