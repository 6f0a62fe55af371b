"""tipjar CLI - main application entry point."""

import typer

from tipjar import __version__
from tipjar.config import get_settings
from tipjar.config.log_setup import setup_logging
from tipjar.display.components import console

app = typer.Typer(
    name="tipjar",
    help="Show occasional tips, governed by per-tip display rules.",
    no_args_is_help=True,
    add_completion=False,
)


def version_callback(value: bool):
    if value:
        console.print(f"tipjar version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr."),
):
    """tipjar - occasional, rule-driven tips."""
    setup_logging(get_settings(), verbose=verbose)


# Import and register commands
from tipjar.commands import show, stats, reset  # noqa: E402

app.command()(show.show)
app.command()(stats.stats)
app.command()(reset.reset)


if __name__ == "__main__":
    app()
