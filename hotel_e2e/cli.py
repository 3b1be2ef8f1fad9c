"""CLI entry point for the hotel e2e suite."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click
from playwright.async_api import async_playwright
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from hotel_e2e.models.config import SuiteConfig
from hotel_e2e.pages.plans_page import PlansPage
from hotel_e2e.reporter.json_report import generate_json_report
from hotel_e2e.runner import SUITES, SuiteRunner, build_cases
from hotel_e2e.utils.browser import create_context, launch_browser

console = Console()

DEFAULT_CONFIG = "hotel-e2e.json"


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def load_config(path: str) -> SuiteConfig:
    """Load ``path``; the default path may be absent, an explicit one may not."""
    try:
        return SuiteConfig.load(path)
    except FileNotFoundError:
        if path != DEFAULT_CONFIG:
            console.print(f"[red]Config file not found: {path}[/red]")
            console.print("Run 'hotel-e2e init' to create a default config.")
            sys.exit(1)
        return SuiteConfig()


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """End-to-end checks for the HOTEL PLANISPHERE reservation site"""
    setup_logging(verbose)


@cli.command()
@click.option("--suite", "-s", type=click.Choice([*SUITES, "all"]), default="all", help="Case table to run")
@click.option("--config", "-c", default=DEFAULT_CONFIG, help="Config file path")
@click.option("--headed", is_flag=True, help="Show the browser window")
def run(suite: str, config: str, headed: bool) -> None:
    """Run the data-driven cases and write a JSON report."""
    cfg = load_config(config)
    if headed:
        cfg.headless = False

    runner = SuiteRunner(cfg)
    result = asyncio.run(runner.run(build_cases(suite)))
    report_path = runner.run_dir / "report.json"
    generate_json_report(result, report_path)

    table = Table(title="Results Summary")
    table.add_column("Metric", style="bold")
    table.add_column("Value")
    table.add_row("Run ID", result.run_id)
    table.add_row("Duration", f"{result.duration_seconds}s")
    table.add_row("Total Tests", str(result.total_tests))
    table.add_row("Passed", f"[green]{result.passed}[/green]")
    table.add_row("Failed", f"[red]{result.failed}[/red]")
    table.add_row("Errors", f"[red]{result.errors}[/red]")
    console.print(table)

    for r in result.test_results:
        if r.result != "pass":
            console.print(f"  [red]{r.result.upper()}[/red] {r.test_id} {r.test_name}: {r.failure_reason}")
    console.print(f"  JSON report: [blue]{report_path}[/blue]")

    if result.failed or result.errors:
        sys.exit(1)


async def _fetch_plans(cfg: SuiteConfig) -> list[dict[str, str]]:
    async with async_playwright() as p:
        browser = await launch_browser(p, headless=cfg.headless)
        context = await create_context(browser, cfg)
        try:
            plans_page = PlansPage(await context.new_page(), cfg)
            await plans_page.goto()
            return await plans_page.get_all_plans_summary()
        finally:
            await context.close()
            await browser.close()


@cli.command()
@click.option("--config", "-c", default=DEFAULT_CONFIG, help="Config file path")
def plans(config: str) -> None:
    """List the plans currently offered, with prices."""
    cfg = load_config(config)
    summary = asyncio.run(_fetch_plans(cfg))

    table = Table(title="Plans")
    table.add_column("Plan", style="bold")
    table.add_column("Price")
    for entry in summary:
        table.add_row(entry["name"], entry["price"].strip())
    console.print(table)


@cli.command()
@click.option("--suite", "-s", type=click.Choice([*SUITES, "all"]), default="all", help="Case table to list")
def cases(suite: str) -> None:
    """List the cases a run would execute."""
    table = Table(title=f"Cases ({suite})")
    table.add_column("ID", style="bold")
    table.add_column("Suite")
    table.add_column("Severity")
    table.add_column("Name")
    for case in build_cases(suite):
        table.add_row(case.test_id, case.suite, case.severity, case.name)
    console.print(table)


@cli.command()
@click.option("--base-url", "-u", default=None, help="Site URL (defaults to the public demo site)")
def init(base_url: str | None) -> None:
    """Create a default configuration file."""
    config_path = Path(DEFAULT_CONFIG)
    if config_path.exists():
        if not click.confirm(f"{DEFAULT_CONFIG} already exists. Overwrite?"):
            return

    cfg = SuiteConfig(base_url=base_url) if base_url else SuiteConfig()
    cfg.save(config_path)
    console.print(f"[green]Created {config_path}[/green]")
    console.print("\nYou can now customize this file and run:")
    console.print("  [blue]hotel-e2e run --suite all[/blue]")


if __name__ == "__main__":
    cli()
