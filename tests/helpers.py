"""Shared test helpers."""

import asyncio
import io

from rich.console import Console

from tipjar.display.messages import MessageService
from tipjar.engine.models import ModuleConfig, TipCounters, TipSpec
from tipjar.engine.random_tips import RandomTips
from tipjar.engine.rules import should_be_shown


class FixedRandom:
    """Stand-in for random.Random with a fixed roll and first-index draws."""

    def __init__(self, value: float = 0.0):
        self.value = value
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.value

    def randrange(self, n: int) -> int:
        return 0


def quiet_messages() -> MessageService:
    return MessageService(Console(file=io.StringIO(), width=80, color_system=None))


def rendered(messages: MessageService) -> str:
    return messages.console.file.getvalue()


def make_engine(store, roll: float = 0.0, messages=None) -> RandomTips:
    return RandomTips(store, messages or quiet_messages(), rng=FixedRandom(roll), wait=60)


def evaluate(spec: TipSpec, counters=None, context=None, triggered=100, roll=0.0, config=None):
    """Run the rule chain synchronously."""
    counters = counters if counters is not None else TipCounters()
    config = config if config is not None else ModuleConfig(triggered_open=triggered)
    spec = spec.with_defaults()
    return asyncio.run(
        should_be_shown(spec, counters, context, config, rng=FixedRandom(roll))
    )


class ScriptedRandom(FixedRandom):
    """FixedRandom whose draws follow a script, then fall back to index 0."""

    def __init__(self, draws, value: float = 0.0):
        super().__init__(value)
        self.draws = list(draws)

    def randrange(self, n: int) -> int:
        return self.draws.pop(0) if self.draws else 0
