"""Show command - count a trigger and maybe show a tip."""

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape

from tipjar.catalogue import get_catalogue
from tipjar.config import Settings, get_settings
from tipjar.display.components import console, print_error
from tipjar.display.messages import MessageService
from tipjar.engine.models import TipResult, TipSpec
from tipjar.engine.random_tips import RandomTips
from tipjar.errors import TipError
from tipjar.services.settings_store import SettingsStore

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> RandomTips:
    """Create an engine wired to the settings file and the terminal."""
    return RandomTips(
        SettingsStore(settings.settings_file),
        MessageService(console),
        wait=settings.debounce_seconds,
        global_randomize=settings.global_randomize,
    )


async def _run_show(
    engine: RandomTips,
    tips: List[TipSpec],
    context: Optional[str],
    force: bool,
) -> TipResult:
    await engine.initialize(tips)
    engine.set_context(context)
    return await (engine.show_tip() if force else engine.show_tip_if_sampled())


def show(
    context: Optional[str] = typer.Option(
        None, "--context", "-c", help="Context label, e.g. 'popup'"
    ),
    catalogue: Optional[Path] = typer.Option(
        None, "--catalogue", help="JSON file with tips (defaults to the built-in tips)"
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Skip the global sampling and always try to show a tip"
    ),
    ask_dismiss: bool = typer.Option(
        True, "--dismiss/--keep", help="Ask whether to dismiss the shown tip"
    ),
):
    """Count one trigger and show a tip if one is due."""
    settings = get_settings()

    try:
        tips = get_catalogue(catalogue or settings.catalogue_path)
        engine = build_engine(settings)
        try:
            result = asyncio.run(_run_show(engine, tips, context, force))

            tip = engine.current_tip
            if result.shown and tip is not None and tip.allow_dismiss and ask_dismiss:
                if typer.confirm("  Dismiss this tip?", default=False):
                    engine.dismiss_current()
        finally:
            engine.flush()
    except TipError as e:
        print_error(escape(str(e)))
        raise typer.Exit(1)

    logger.info(f"show finished: outcome={result.outcome.value} tip={result.tip_id}")
