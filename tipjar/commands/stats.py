"""Stats command - how often each tip was shown and dismissed."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from tipjar.catalogue import get_catalogue
from tipjar.config import get_settings
from tipjar.display.components import console, format_number, print_error, print_header, print_key_value
from tipjar.engine.models import ModuleConfig
from tipjar.engine.random_tips import TIP_SETTING_STORAGE_ID
from tipjar.errors import TipError
from tipjar.services.settings_store import SettingsStore


def stats(
    catalogue: Optional[Path] = typer.Option(
        None, "--catalogue", help="JSON file with tips (defaults to the built-in tips)"
    ),
):
    """Show per-tip counters."""
    settings = get_settings()

    try:
        tips = get_catalogue(catalogue or settings.catalogue_path)
    except TipError as e:
        print_error(escape(str(e)))
        raise typer.Exit(1)

    store = SettingsStore(settings.settings_file)
    config = ModuleConfig.from_dict(store.get_sync(TIP_SETTING_STORAGE_ID))

    print_header("Stats")
    print_key_value("Triggers", format_number(config.triggered_open))
    console.print()

    table = Table(box=None, padding=(0, 2), show_edge=False)
    table.add_column("Tip", style="bold")
    table.add_column("Shown", justify="right")
    table.add_column("Dismissed", justify="right")
    table.add_column("By context", style="dim")

    ids = [tip.id for tip in tips]
    ids += sorted(tip_id for tip_id in config.tips if tip_id not in ids)

    for tip_id in ids:
        counters = config.tips.get(tip_id)
        if counters is None:
            table.add_row(tip_id, "-", "-", "")
            continue
        by_context = ", ".join(
            f"{name}={count}" for name, count in sorted(counters.shown_context.items())
        )
        table.add_row(
            tip_id,
            format_number(counters.shown_count),
            format_number(counters.dismissed_count),
            by_context,
        )

    console.print(table)
    console.print()
