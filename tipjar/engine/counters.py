"""In-memory counters mirrored to storage through the save scheduler."""

from typing import Optional

from tipjar.engine.models import ModuleConfig, TipCounters, context_key
from tipjar.engine.persistence import SaveScheduler


class CounterStore:
    """Reads and increments the counters held in a ModuleConfig.

    Counters only ever go up. Every mutation schedules a save; nothing here
    blocks on storage. Mutations hold the scheduler's ``state_lock`` so a
    save running on the timer thread never sees a half-updated config.
    """

    def __init__(self, config: ModuleConfig, scheduler: SaveScheduler):
        self.config = config
        self.scheduler = scheduler

    @property
    def triggered_open(self) -> int:
        return self.config.triggered_open

    def get_counters(self, tip_id: str) -> TipCounters:
        """Counters for a tip, created zeroed (and saved) on first access."""
        with self.scheduler.state_lock:
            counters = self.config.tips.get(tip_id)
            created = counters is None
            if created:
                counters = TipCounters()
                self.config.tips[tip_id] = counters
        if created:
            self.scheduler.schedule_save()
        return counters

    def increment_shown(self, tip_id: str, context: Optional[str]):
        counters = self.get_counters(tip_id)
        key = context_key(context)
        with self.scheduler.state_lock:
            counters.shown_count += 1
            counters.shown_context[key] = counters.shown_context.get(key, 0) + 1
        self.scheduler.schedule_save()

    def increment_dismissed(self, tip_id: str):
        counters = self.get_counters(tip_id)
        with self.scheduler.state_lock:
            counters.dismissed_count += 1
        self.scheduler.schedule_save()

    def increment_triggered(self):
        with self.scheduler.state_lock:
            self.config.triggered_open += 1
        self.scheduler.schedule_save()

    def touch(self):
        """Schedule a save after counters were changed outside this class."""
        self.scheduler.schedule_save()
