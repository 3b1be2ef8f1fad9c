"""Configuration models for the hotel e2e suite."""

from __future__ import annotations

import json
import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_BASE_URL = "https://hotel.testplanisphere.dev"


class ViewportConfig(BaseModel):
    width: int = 1280
    height: int = 720


class TimeoutConfig(BaseModel):
    """All values in milliseconds."""
    test: int = 30000
    page_load: int = 30000
    element: int = 5000
    plan_selection: int = 5000
    validation_race: int = 3000
    validation_settle: int = 100
    confirm_navigation: int = 10000


class RetryConfig(BaseModel):
    max_attempts: int = 10
    interval_ms: int = 200


def _env_threshold(name: str, default: int) -> int:
    raw = os.environ.get(name)
    return int(raw) if raw else default


class PerformanceThresholds(BaseModel):
    page_load: int = Field(
        default_factory=lambda: _env_threshold("PERF_THRESHOLD_PAGE_LOAD", 3000)
    )
    navigation: int = Field(
        default_factory=lambda: _env_threshold("PERF_THRESHOLD_NAVIGATION", 2000)
    )
    form_submit: int = Field(
        default_factory=lambda: _env_threshold("PERF_THRESHOLD_FORM_SUBMIT", 2500)
    )


class SuiteConfig(BaseModel):
    # Target
    base_url: str = Field(
        default_factory=lambda: os.environ.get("HOTEL_E2E_BASE_URL") or DEFAULT_BASE_URL,
        validate_default=True,
    )
    locale: str = "ja"

    # Browser
    headless: bool = True
    viewport: ViewportConfig = Field(default_factory=ViewportConfig)
    screenshot_on_failure: bool = True

    # Waits
    timeouts: TimeoutConfig = Field(default_factory=TimeoutConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)

    # Execution limits
    max_parallel_contexts: int = 3

    # Performance
    performance: PerformanceThresholds = Field(default_factory=PerformanceThresholds)

    # Visual snapshots
    visual_diff_tolerance: float = 0.05
    visual_baseline_dir: str = "./visual-baselines"

    # Reporting
    report_output_dir: str = "./e2e-reports"

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    def url(self, path: str) -> str:
        """Absolute URL for a localized route, e.g. ``url("login")``."""
        return f"{self.base_url}/{self.locale}/{path.lstrip('/')}"

    @classmethod
    def load(cls, path: str | Path) -> "SuiteConfig":
        """Load config from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Save config to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)
