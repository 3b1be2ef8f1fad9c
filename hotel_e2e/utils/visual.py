"""Visual snapshots — full-page screenshots compared against stored baselines."""

from __future__ import annotations

import io
import logging
from pathlib import Path

from PIL import Image
from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from hotel_e2e.errors import PageAssertionError

logger = logging.getLogger(__name__)

# Per-channel difference tolerated before a pixel counts as changed
# (anti-aliasing and font rendering vary between runs).
PIXEL_THRESHOLD = 40


def pixel_diff_ratio(baseline: Image.Image, current: Image.Image) -> float:
    """Share of pixels that differ between two images, 0.0 .. 1.0.

    ``current`` is resized to the baseline's dimensions first.
    """
    baseline = baseline.convert("RGB")
    current = current.convert("RGB")
    if baseline.size != current.size:
        current = current.resize(baseline.size)

    baseline_pixels = list(baseline.getdata())
    current_pixels = list(current.getdata())
    total = len(baseline_pixels)
    if total == 0:
        return 0.0

    diff_count = 0
    for bp, cp in zip(baseline_pixels, current_pixels):
        if any(abs(a - b) > PIXEL_THRESHOLD for a, b in zip(bp, cp)):
            diff_count += 1
    return diff_count / total


async def capture_snapshot(
    page: Page,
    name: str,
    baseline_dir: Path,
    tolerance: float = 0.05,
    update: bool = False,
) -> float:
    """Screenshot ``page`` and compare it with the baseline ``name``.

    A missing baseline (or ``update=True``) stores the screenshot as the new
    baseline and returns 0.0. Otherwise returns the diff ratio, raising
    ``PageAssertionError`` when it exceeds ``tolerance``; the rejected
    screenshot is kept next to the baseline as ``<name>.actual.png``.
    """
    try:
        await page.wait_for_load_state("networkidle")
    except PlaywrightTimeoutError:
        logger.debug("Network idle timeout before snapshot '%s', continuing", name)

    body = await page.screenshot(full_page=True)
    baseline_path = baseline_dir / name

    if update or not baseline_path.exists():
        baseline_dir.mkdir(parents=True, exist_ok=True)
        baseline_path.write_bytes(body)
        logger.info("Stored baseline %s", baseline_path)
        return 0.0

    with Image.open(baseline_path) as baseline:
        current = Image.open(io.BytesIO(body))
        ratio = pixel_diff_ratio(baseline, current)

    logger.info("Snapshot '%s' pixel diff: %.2f%% (tolerance %.2f%%)", name, ratio * 100, tolerance * 100)
    if ratio > tolerance:
        actual_path = baseline_path.with_name(f"{baseline_path.stem}.actual{baseline_path.suffix}")
        actual_path.write_bytes(body)
        raise PageAssertionError(
            f"Snapshot '{name}' differs from baseline",
            expected=f"<= {tolerance:.2%}",
            actual=f"{ratio:.2%}",
        )
    return ratio
