"""pagegate CLI entry point."""

import logging

import typer

app = typer.Typer(
    name="pagegate",
    help="pagegate — page readiness and wait/verify checks",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        from pagegate import __version__

        typer.echo(f"pagegate {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log polling details."),
) -> None:
    """pagegate — page readiness and wait/verify checks."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


# -- Register commands --------------------------------------------------------

from pagegate.cli.commands.check_cmd import check_command  # noqa: E402
from pagegate.cli.commands.init_cmd import init_command  # noqa: E402
from pagegate.cli.commands.validate_cmd import validate_command  # noqa: E402

app.command(name="init")(init_command)
app.command(name="validate")(validate_command)
app.command(name="check")(check_command)
