"""Reset command - forget all tip counters."""

import typer

from tipjar.config import get_settings
from tipjar.display.components import console, print_success
from tipjar.engine.random_tips import TIP_SETTING_STORAGE_ID
from tipjar.services.settings_store import SettingsStore


def reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """Forget how often tips were shown and dismissed."""
    settings = get_settings()

    if not yes and not typer.confirm("  Reset all tip counters?", default=False):
        console.print("  [dim]Nothing changed.[/dim]")
        raise typer.Exit()

    store = SettingsStore(settings.settings_file)
    if store.remove(TIP_SETTING_STORAGE_ID):
        print_success("Tip counters reset.")
    else:
        console.print("  [dim]No tip counters stored yet.[/dim]")
