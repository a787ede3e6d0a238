"""pagegate validate — page definition YAML validation."""

from __future__ import annotations

from pathlib import Path

import typer

from pagegate.core.exceptions import PageDefinitionError
from pagegate.core.page_loader import load_page_definition


def validate_command(
    path: str = typer.Argument(help="Page definition file or directory path."),
) -> None:
    """Validate page definition YAML files."""
    pages_path = Path(path)

    if not pages_path.exists():
        typer.echo(
            typer.style(f"Path does not exist: {path}", fg=typer.colors.RED),
            err=True,
        )
        raise typer.Exit(code=1)

    if pages_path.is_file():
        files = [pages_path]
    else:
        files = sorted(
            f for f in pages_path.rglob("*") if f.suffix in (".yaml", ".yml") and f.is_file()
        )

    if not files:
        typer.echo(
            typer.style(f"No YAML files found in: {path}", fg=typer.colors.RED),
            err=True,
        )
        raise typer.Exit(code=1)

    failed = 0
    for file in files:
        try:
            page = load_page_definition(file)
        except PageDefinitionError as e:
            failed += 1
            typer.echo(f"  {file.name}: {typer.style('ERROR', fg=typer.colors.RED)} - {e}")
            continue
        status = typer.style("OK", fg=typer.colors.GREEN)
        typer.echo(
            f"  {file.name}: {status} ({page.name}, "
            f"{len(page.elements)} element(s), {len(page.requirements())} ready check(s))"
        )

    typer.echo("")
    typer.echo(f"Validated {len(files)} file(s): {len(files) - failed} OK, {failed} ERROR")

    if failed:
        raise typer.Exit(code=1)
