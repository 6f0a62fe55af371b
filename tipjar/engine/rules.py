"""Eligibility rules deciding whether a tip may be shown right now.

The rules run in a fixed order. The custom ``show_tip`` hook comes first and
may force the decision either way. After it, the trigger, randomization,
dismiss and context ceilings can only hide the tip; nothing before them may
return True. Only then can the context requirement or the default show-count
threshold let the tip through.
"""

import inspect
import logging
import random
from typing import Optional

from tipjar.engine.models import ModuleConfig, TipCounters, TipSpec, context_key
from tipjar.errors import TipContractError

logger = logging.getLogger(__name__)


def randomize_passed(probability: float, rng=random) -> bool:
    """True for roughly ``probability`` of all calls."""
    return rng.random() < probability


async def run_custom_hook(
    spec: TipSpec,
    counters: TipCounters,
    original: TipSpec,
    config: ModuleConfig,
) -> Optional[bool]:
    """Call the tip's show_tip hook and validate what it returned."""
    result = spec.show_tip(spec, counters, original, config)
    if inspect.isawaitable(result):
        result = await result
    if result is not None and result is not True and result is not False:
        raise TipContractError(
            f"show_tip hook of tip {spec.id!r} returned {result!r}; expected True, False or None"
        )
    return result


def passes_static_rules(
    spec: TipSpec,
    counters: TipCounters,
    context: Optional[str],
    triggered_open: int,
    rng=random,
) -> bool:
    """Rules 2-7: everything except the custom hook."""
    if triggered_open < spec.required_triggers:
        logger.debug(f"tip {spec.id} hidden: {triggered_open}/{spec.required_triggers} triggers")
        return False

    probability = spec.randomize_probability
    if probability is not None and not randomize_passed(probability, rng):
        logger.debug(f"tip {spec.id} hidden: randomization ({probability})")
        return False

    if spec.maximum_dismiss is not None and counters.dismissed_count >= spec.maximum_dismiss:
        logger.debug(f"tip {spec.id} hidden: dismissed {counters.dismissed_count} times")
        return False

    key = context_key(context)
    shown_here = counters.shown_in(context)

    if key in spec.maximum_in_context and shown_here >= spec.maximum_in_context[key]:
        logger.debug(f"tip {spec.id} hidden: shown {shown_here} times in context {key}")
        return False

    # disqualifiers end here; the rules below may show the tip

    if key in spec.show_in_context and shown_here < spec.show_in_context[key]:
        return True

    if spec.required_show_count is None or counters.shown_count < spec.required_show_count:
        return True

    required_dismiss = spec.required_dismiss_count
    if required_dismiss is not None and counters.dismissed_count < required_dismiss:
        return True

    logger.debug(f"tip {spec.id} hidden: shown {counters.shown_count} times already")
    return False


async def should_be_shown(
    spec: TipSpec,
    counters: TipCounters,
    context: Optional[str],
    config: ModuleConfig,
    original: Optional[TipSpec] = None,
    rng=random,
) -> bool:
    """Decide whether ``spec`` (already defaulted) should be shown now.

    ``counters`` is the live record held by the engine; a custom hook may
    change it in place.
    """
    if spec.show_tip is not None:
        verdict = await run_custom_hook(spec, counters, original or spec, config)
        if verdict is not None:
            logger.debug(f"tip {spec.id} decided by show_tip hook: {verdict}")
            return verdict

    return passes_static_rules(spec, counters, context, config.triggered_open, rng)
