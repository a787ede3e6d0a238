"""pagegate check — open pages in a browser and verify they load."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer

from pagegate.core.config import load_config
from pagegate.core.exceptions import ConditionTimeoutError, DriverError, PageGateError
from pagegate.core.page_loader import load_page_definitions
from pagegate.driver import DRIVER_REGISTRY
from pagegate.page import Page
from pagegate.sync.evaluator import holds


def check_command(
    pages_path: str = typer.Argument(help="Page definition file or directory path."),
    url: str | None = typer.Option(None, "--url", "-u", help="Open this URL instead."),
    config_path: str | None = typer.Option(None, "--config", "-c", help="Config file path."),
    headless: bool | None = typer.Option(
        None, "--headless/--headed", help="Override driver.headless."
    ),
    timeout_ms: int | None = typer.Option(
        None, "--timeout-ms", help="Override the load-wait timeout."
    ),
) -> None:
    """Open each page, wait for it to load, and report its readiness checks."""
    overrides: dict[str, Any] = {}
    if headless is not None:
        overrides["driver"] = {"headless": headless}
    if timeout_ms is not None:
        overrides["wait"] = {"timeout_ms": timeout_ms}

    try:
        failed = _check(Path(pages_path), url, config_path, overrides)
    except PageGateError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from None

    if failed:
        raise typer.Exit(code=1)


def _check(
    pages_path: Path,
    url: str | None,
    config_path: str | None,
    overrides: dict[str, Any],
) -> int:
    """Check every page definition; return the number of pages that failed."""
    config = load_config(
        config_path=Path(config_path) if config_path else None,
        overrides=overrides,
    )
    variables = {"base_url": config.base_url} if config.base_url else {}
    pages = load_page_definitions(pages_path, variables)

    driver_cls = DRIVER_REGISTRY.get(config.driver.type)
    if driver_cls is None:
        msg = f"Unknown driver type: {config.driver.type}"
        raise PageGateError(msg)
    driver = driver_cls(config.driver)

    failed = 0
    driver.start()
    try:
        for definition in pages.values():
            page = Page(driver, definition, wait=definition.wait or config.wait)
            typer.echo(f"\nPage: {definition.name}")
            try:
                page.open(url)
            except DriverError as e:
                failed += 1
                typer.echo(f"  {e}")
                typer.echo(f"  Status: {typer.style('NOT OPENED', fg=typer.colors.RED)}")
                continue
            try:
                page.wait_for_page_to_load()
                status = typer.style("LOADED", fg=typer.colors.GREEN)
            except ConditionTimeoutError as e:
                failed += 1
                status = typer.style("NOT LOADED", fg=typer.colors.RED)
                typer.echo(f"  {e}")
            typer.echo(f"  Status: {status}")

            evaluator = page.dispatcher.evaluator
            for requirement in page.gate.requirements:
                ok = holds(
                    evaluator.evaluate(requirement.locator, requirement.condition),
                    requirement.condition,
                )
                mark = (
                    typer.style("OK", fg=typer.colors.GREEN)
                    if ok
                    else typer.style("MISSING", fg=typer.colors.RED)
                )
                typer.echo(f"    {mark} {requirement.describe()}")
    finally:
        driver.stop()

    typer.echo(f"\nSummary: {len(pages) - failed} loaded, {failed} failed, {len(pages)} total")
    return failed
