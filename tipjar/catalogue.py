"""Built-in tips and loading of tip catalogues from JSON files."""

import json
import logging
from pathlib import Path
from typing import List, Optional

from tipjar.engine.models import ActionButton, ModuleConfig, TipCounters, TipSpec
from tipjar.errors import CatalogueError

logger = logging.getLogger(__name__)


def _after_welcome_dismissed(
    spec: TipSpec, counters: TipCounters, original: TipSpec, config: ModuleConfig
) -> Optional[bool]:
    """Keep the stats tip back until the welcome tip has been dismissed once."""
    welcome = config.tips.get("welcome")
    if welcome is None or welcome.dismissed_count == 0:
        return False
    return None


DEFAULT_TIPS = (
    TipSpec(
        id="welcome",
        text="Tips show up now and then. Dismiss one to see it less often.",
        required_show_count=2,
        require_dismiss=1,
        maximum_dismiss=1,
        required_triggers=0,
    ),
    TipSpec(
        id="likeTool",
        text="Enjoying tipjar? A star on the project page helps a lot.",
        required_show_count=3,
        require_dismiss=1,
        maximum_dismiss=2,
        required_triggers=10,
        show_in_context={"popup": 1},
        action_button=ActionButton(text="Star it", action="https://pypi.org/project/tipjar/"),
    ),
    TipSpec(
        id="contexts",
        text="Pass --context to scope tips to one part of your tool.",
        required_show_count=1,
        required_triggers=5,
        randomize_display=True,
    ),
    TipSpec(
        id="stats",
        text="Run `tipjar stats` to see how often each tip was shown.",
        required_show_count=1,
        required_triggers=3,
        maximum_in_context={"popup": 0},
        show_tip=_after_welcome_dismissed,
    ),
)


def load_catalogue(path: Path) -> List[TipSpec]:
    """Read a JSON list of tip objects."""
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except OSError as e:
        raise CatalogueError(f"Could not read catalogue {path}: {e}")
    except ValueError as e:
        raise CatalogueError(f"Catalogue {path} is not valid JSON: {e}")

    if not isinstance(data, list):
        raise CatalogueError(f"Catalogue {path} must contain a JSON list of tips")

    tips = [TipSpec.from_dict(entry) for entry in data]

    seen = set()
    for tip in tips:
        if tip.id in seen:
            raise CatalogueError(f"Duplicate tip id {tip.id!r} in {path}")
        seen.add(tip.id)

    logger.debug(f"Loaded {len(tips)} tips from {path}")
    return tips


def get_catalogue(path: Optional[Path] = None) -> List[TipSpec]:
    """Tips from ``path`` if given, otherwise the built-in ones."""
    if path is None:
        return list(DEFAULT_TIPS)
    return load_catalogue(path)
