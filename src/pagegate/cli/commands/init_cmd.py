"""pagegate init — write a starter config and pages directory."""

from __future__ import annotations

from pathlib import Path

import typer

from pagegate.core.config import DEFAULT_CONFIG_FILENAME, save_config
from pagegate.core.exceptions import ConfigError
from pagegate.core.models import Config, DriverConfig, WaitSpec


def init_command(
    base_url: str = typer.Option("", "--base-url", "-u", help="Application base URL."),
    pages_dir: str = typer.Option("pages", "--pages-dir", help="Page definition directory."),
    browser: str = typer.Option("chromium", "--browser", help="chromium | firefox | webkit"),
    timeout_ms: int = typer.Option(10000, "--timeout-ms", help="Default load-wait timeout."),
    poll_interval_ms: int = typer.Option(500, "--poll-interval-ms", help="Default poll interval."),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config."),
) -> None:
    """Create pagegate.config.yaml and the pages directory in the current directory."""
    root = Path.cwd()
    config_path = root / DEFAULT_CONFIG_FILENAME

    try:
        config = Config(
            base_url=base_url,
            pages_dir=pages_dir,
            wait=WaitSpec(timeout_ms=timeout_ms, poll_interval_ms=poll_interval_ms),
            driver=DriverConfig(browser=browser),
        )
    except ValueError as e:
        typer.echo(typer.style(f"Invalid settings: {e}", fg=typer.colors.RED), err=True)
        raise typer.Exit(code=1) from None

    try:
        save_config(config, config_path, overwrite=force)
    except ConfigError as e:
        typer.echo(typer.style(str(e), fg=typer.colors.RED), err=True)
        typer.echo("Use --force to overwrite.", err=True)
        raise typer.Exit(code=1) from None

    pages_path = root / pages_dir
    pages_path.mkdir(parents=True, exist_ok=True)

    typer.echo("pagegate project initialized.")
    typer.echo(f"  Config: {config_path}")
    typer.echo(f"  Pages:  {pages_path}")
