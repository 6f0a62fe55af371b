"""Data model for tips, their usage counters and the persisted module config."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

from tipjar.errors import CatalogueError

# Key an unset context is stored under (what a JSON encoder makes of null keys)
NO_CONTEXT_KEY = "null"

ShowTipHook = Callable[
    ["TipSpec", "TipCounters", "TipSpec", "ModuleConfig"],
    Union[Optional[bool], Awaitable[Optional[bool]]],
]


@dataclass(frozen=True)
class ActionButton:
    """Button attached to a tip message."""
    text: str
    action: str


@dataclass(frozen=True)
class TipSpec:
    """Static definition of a tip and the rules deciding when it may appear.

    ``required_show_count`` of None means the tip is never exhausted by
    showing it. ``require_dismiss`` may be False (ignore dismissals), True
    (require as many dismissals as ``required_show_count``) or an explicit
    number of dismissals. ``randomize_display`` is False, True (50%) or the
    probability that the tip is shown when evaluated.
    """
    id: str
    text: str
    action_button: Optional[ActionButton] = None
    allow_dismiss: bool = True
    required_show_count: Optional[int] = None
    require_dismiss: Union[bool, int] = False
    maximum_dismiss: Optional[int] = None
    required_triggers: int = 10
    randomize_display: Union[bool, float] = False
    show_in_context: Mapping[str, int] = field(default_factory=dict)
    maximum_in_context: Mapping[str, int] = field(default_factory=dict)
    show_tip: Optional[ShowTipHook] = field(default=None, compare=False, repr=False)

    def with_defaults(self) -> "TipSpec":
        """Return the copy used for evaluation, with shorthand values expanded."""
        if self.randomize_display is True:
            return dataclasses.replace(self, randomize_display=0.5)
        return self

    @property
    def randomize_probability(self) -> Optional[float]:
        """Chance of passing the per-tip randomization gate, None when disabled."""
        if self.randomize_display is False or self.randomize_display is None:
            return None
        if self.randomize_display is True:
            return 0.5
        return float(self.randomize_display)

    @property
    def required_dismiss_count(self) -> Optional[int]:
        """Number of dismissals that keeps the tip eligible, None when ignored."""
        if self.require_dismiss is True:
            return self.required_show_count
        if self.require_dismiss is False or self.require_dismiss is None:
            return None
        return int(self.require_dismiss)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TipSpec":
        """Build a spec from a catalogue entry using the camelCase JSON keys."""
        if not isinstance(data, Mapping):
            raise CatalogueError(f"tip entry must be an object, got {type(data).__name__}")
        tip_id = data.get("id")
        text = data.get("text")
        if not isinstance(tip_id, str) or not tip_id:
            raise CatalogueError(f"tip entry without a valid id: {data!r}")
        if not isinstance(text, str):
            raise CatalogueError(f"tip {tip_id!r} has no text")

        button = data.get("actionButton")
        action_button = None
        if button is not None:
            try:
                action_button = ActionButton(text=button["text"], action=button["action"])
            except (KeyError, TypeError):
                raise CatalogueError(f"tip {tip_id!r} has a malformed actionButton")

        # "maximumInContest" is the historical spelling of this key
        maximum_in_context = data.get("maximumInContext", data.get("maximumInContest"))

        return cls(
            id=tip_id,
            text=text,
            action_button=action_button,
            allow_dismiss=_flag(tip_id, "allowDismiss", data.get("allowDismiss", True)),
            required_show_count=_limit(
                tip_id, "requiredShowCount", data.get("requiredShowCount"), unbounded=True
            ),
            require_dismiss=_require_dismiss(tip_id, data.get("requireDismiss", False)),
            maximum_dismiss=_limit(tip_id, "maximumDismiss", data.get("maximumDismiss"), unbounded=True),
            required_triggers=_limit(tip_id, "requiredTriggers", data.get("requiredTriggers", 10)),
            randomize_display=_probability(tip_id, data.get("randomizeDisplay", False)),
            show_in_context=_context_map(tip_id, "showInContext", data.get("showInContext")),
            maximum_in_context=_context_map(tip_id, "maximumInContext", maximum_in_context),
        )


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _flag(tip_id: str, key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise CatalogueError(f"tip {tip_id!r}: {key} must be true or false, got {value!r}")
    return value


def _limit(tip_id: str, key: str, value: Any, unbounded: bool = False) -> Optional[int]:
    """A non-negative count; None only where the field may be unbounded."""
    if value is None and unbounded:
        return None
    if not _is_int(value) or value < 0:
        allowed = "a non-negative integer or null" if unbounded else "a non-negative integer"
        raise CatalogueError(f"tip {tip_id!r}: {key} must be {allowed}, got {value!r}")
    return value


def _require_dismiss(tip_id: str, value: Any) -> Union[bool, int]:
    if isinstance(value, bool):
        return value
    return _limit(tip_id, "requireDismiss", value)


def _probability(tip_id: str, value: Any) -> Union[bool, float]:
    if isinstance(value, bool):
        return value
    if not isinstance(value, (int, float)) or not 0 <= value <= 1:
        raise CatalogueError(
            f"tip {tip_id!r}: randomizeDisplay must be true, false or a number in [0, 1], got {value!r}"
        )
    return float(value)


def _context_map(tip_id: str, key: str, value: Any) -> Dict[str, int]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise CatalogueError(f"tip {tip_id!r}: {key} must map contexts to counts, got {value!r}")
    for context, count in value.items():
        if not isinstance(context, str) or not _is_int(count) or count < 0:
            raise CatalogueError(
                f"tip {tip_id!r}: {key} must map contexts to counts, got {context!r}: {count!r}"
            )
    return dict(value)


def _count(value: Any) -> int:
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0


@dataclass
class TipCounters:
    """Mutable usage history of one tip."""
    shown_count: int = 0
    dismissed_count: int = 0
    shown_context: Dict[str, int] = field(default_factory=dict)

    def shown_in(self, context: Optional[str]) -> int:
        return self.shown_context.get(context_key(context), 0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "shownCount": self.shown_count,
            "dismissedCount": self.dismissed_count,
            "shownContext": dict(self.shown_context),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "TipCounters":
        if not isinstance(data, Mapping):
            return cls()
        shown_context = data.get("shownContext")
        if not isinstance(shown_context, Mapping):
            shown_context = {}
        return cls(
            shown_count=_count(data.get("shownCount")),
            dismissed_count=_count(data.get("dismissedCount")),
            shown_context={str(k): _count(v) for k, v in shown_context.items()},
        )

    def merge(self, other: "TipCounters"):
        """Fold another record into this one without letting any counter go down."""
        self.shown_count = max(self.shown_count, other.shown_count)
        self.dismissed_count = max(self.dismissed_count, other.dismissed_count)
        for key, value in other.shown_context.items():
            self.shown_context[key] = max(self.shown_context.get(key, 0), value)


@dataclass
class ModuleConfig:
    """Everything the engine persists: per-tip counters and the trigger count."""
    tips: Dict[str, TipCounters] = field(default_factory=dict)
    triggered_open: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tips": {tip_id: counters.to_dict() for tip_id, counters in self.tips.items()},
            "triggeredOpen": self.triggered_open,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ModuleConfig":
        if not isinstance(data, Mapping):
            return cls()
        tips = data.get("tips")
        if not isinstance(tips, Mapping):
            tips = {}
        return cls(
            tips={str(tip_id): TipCounters.from_dict(raw) for tip_id, raw in tips.items()},
            triggered_open=_count(data.get("triggeredOpen")),
        )

    def merge(self, other: "ModuleConfig"):
        """Merge a stored config into this one, keeping the larger of each counter."""
        for tip_id, counters in other.tips.items():
            if tip_id in self.tips:
                self.tips[tip_id].merge(counters)
            else:
                self.tips[tip_id] = TipCounters.from_dict(counters.to_dict())
        self.triggered_open = max(self.triggered_open, other.triggered_open)


def context_key(context: Optional[str]) -> str:
    return NO_CONTEXT_KEY if context is None else context


class ShowOutcome(Enum):
    """Result of one attempt to show a tip."""
    SHOWN = "shown"
    NO_TIP = "no_tip"
    NOT_SAMPLED = "not_sampled"


@dataclass
class TipResult:
    """Outcome of show_tip / show_tip_if_sampled."""
    outcome: ShowOutcome
    tip_id: Optional[str] = None

    @property
    def shown(self) -> bool:
        return self.outcome is ShowOutcome.SHOWN
