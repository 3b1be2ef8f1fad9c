"""JSON report output."""

from __future__ import annotations

import json
from pathlib import Path

from hotel_e2e.models.test_result import RunResult, TestResult


def generate_json_report(run_result: RunResult, output_path: Path) -> None:
    """Write a machine-readable JSON report for a whole run."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    report = run_result.model_dump()
    report["failures"] = [
        {
            "test_name": r.test_name,
            "suite": r.suite,
            "severity": r.severity,
            "result": r.result,
            "failure_reason": r.failure_reason,
        }
        for r in run_result.test_results
        if r.result in ("fail", "error")
    ]

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2, ensure_ascii=False, default=str)


def write_test_result(result: TestResult, output_dir: Path) -> Path:
    """Write one test's result next to its evidence, return the file path."""
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{result.test_id}-result.json"
    with open(path, "w", encoding="utf-8") as f:
        json.dump(result.model_dump(), f, indent=2, ensure_ascii=False, default=str)
    return path
