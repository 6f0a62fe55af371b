"""Shows random tips to the user, if wanted.

A ``RandomTips`` engine owns the candidate pool, the counters loaded from
the settings store and the tip that is currently on screen. Callers feed it
one trigger per ``initialize`` and serialize their calls; the engine has no
locking of its own.
"""

import logging
import random
from typing import Any, Dict, Iterable, Optional

from tipjar.display.messages import DISMISS_START, MessageService
from tipjar.engine.counters import CounterStore
from tipjar.engine.models import ModuleConfig, ShowOutcome, TipResult, TipSpec
from tipjar.engine.persistence import SaveScheduler
from tipjar.engine.rules import randomize_passed, should_be_shown
from tipjar.engine.selection import CandidatePool, select
from tipjar.errors import TipAlreadyShownError, TipConsistencyError, TipError
from tipjar.services.settings_store import SettingsStore

logger = logging.getLogger(__name__)

TIP_SETTING_STORAGE_ID = "randomTips"
MESSAGE_TIP_ID = "messageTip"
GLOBAL_RANDOMIZE = 0.2  # chance that a sampled trigger shows a tip at all
DEBOUNCE_SAVING = 1.0  # seconds


class RandomTips:
    """Selects, shows and tracks tips for one process."""

    def __init__(
        self,
        settings_store: SettingsStore,
        messages: MessageService,
        rng: Optional[random.Random] = None,
        wait: float = DEBOUNCE_SAVING,
        global_randomize: float = GLOBAL_RANDOMIZE,
    ):
        self.settings_store = settings_store
        self.messages = messages
        self.global_randomize = global_randomize
        self._rng = rng or random.Random()

        self.config = ModuleConfig()
        self.scheduler = SaveScheduler(self._save_config, wait=wait)
        self.counters = CounterStore(self.config, self.scheduler)
        self.pool: Optional[CandidatePool] = None
        self.context: Optional[str] = None
        self._tip_shown: Optional[TipSpec] = None

    @property
    def current_tip(self) -> Optional[TipSpec]:
        return self._tip_shown

    def _save_config(self):
        # runs on the timer thread; snapshot while no counter is being changed
        with self.scheduler.state_lock:
            snapshot = self.config.to_dict()
        self.settings_store.set(TIP_SETTING_STORAGE_ID, snapshot)

    async def initialize(self, catalogue: Iterable[TipSpec]):
        """Seed the pool, hook into dismissals, load counters and count one trigger."""
        self.pool = CandidatePool(catalogue, self._rng)

        self.messages.register_message_type(MESSAGE_TIP_ID)
        self.messages.set_hook(MESSAGE_TIP_ID, DISMISS_START, self._message_dismissed)

        stored = await self.settings_store.get(TIP_SETTING_STORAGE_ID)
        with self.scheduler.state_lock:
            self.config.merge(ModuleConfig.from_dict(stored))

        self.counters.increment_triggered()
        logger.debug(
            f"Initialized with {len(self.pool)} tips, triggered {self.config.triggered_open} times"
        )

    def set_context(self, context: Optional[str]):
        """Set the context later evaluations are scoped to."""
        self.context = context

    async def show_tip_if_sampled(self) -> TipResult:
        """Show a tip for only a share of the calls so the user is not annoyed."""
        if not randomize_passed(self.global_randomize, self._rng):
            logger.info("Show no random tip, because randomize did not pass")
            return TipResult(ShowOutcome.NOT_SAMPLED)
        return await self.show_tip()

    async def show_tip(self) -> TipResult:
        """Select a random eligible tip and show it."""
        if self.pool is None:
            raise TipError("initialize() has to be awaited before showing tips")

        # while a tip is on screen, discards only stick if the pool runs dry
        pool = self.pool if self._tip_shown is None else self.pool.copy()
        tip = await select(pool, self._is_eligible)
        if tip is None:
            self.pool = pool
            return TipResult(ShowOutcome.NO_TIP)

        self._show(tip.with_defaults())
        return TipResult(ShowOutcome.SHOWN, tip.id)

    async def _is_eligible(self, original: TipSpec) -> bool:
        spec = original.with_defaults()
        counters = self.counters.get_counters(spec.id)
        eligible = await should_be_shown(
            spec, counters, self.context, self.config, original=original, rng=self._rng
        )
        if spec.show_tip is not None:
            # the hook may have changed the counters in place
            self.counters.touch()
        return eligible

    def _show(self, spec: TipSpec):
        if self._tip_shown is not None:
            raise TipAlreadyShownError(self._tip_shown.id, spec.id)

        element = self.messages.get_element(MESSAGE_TIP_ID)
        element.dataset["tipId"] = spec.id
        self.messages.show_message(MESSAGE_TIP_ID, spec.text, spec.allow_dismiss, spec.action_button)

        self.counters.increment_shown(spec.id, self.context)
        self._tip_shown = spec

    def _message_dismissed(self, param: Dict[str, Any]):
        element = param["el_message"]
        self.dismiss(element.dataset.get("tipId"))
        element.dataset.pop("tipId", None)

    def dismiss(self, tip_id: Optional[str]):
        """Record that the shown tip ``tip_id`` was dismissed."""
        if self._tip_shown is None or self._tip_shown.id != tip_id:
            shown = self._tip_shown.id if self._tip_shown else None
            raise TipConsistencyError(
                f"cached tip and dismissed tip differ (shown={shown!r}, dismissed={tip_id!r})"
            )

        self.counters.increment_dismissed(tip_id)
        self._tip_shown = None
        logger.info(f"Tip {tip_id} has been dismissed")

    def dismiss_current(self) -> Optional[str]:
        """Dismiss whatever tip is on screen through the message box."""
        if self._tip_shown is None:
            return None
        tip_id = self._tip_shown.id
        self.messages.dismiss(MESSAGE_TIP_ID)
        return tip_id

    def flush(self) -> bool:
        """Write pending counter changes now."""
        return self.scheduler.flush()
