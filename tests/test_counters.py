from tipjar.engine.counters import CounterStore
from tipjar.engine.models import ModuleConfig, TipCounters
from tipjar.engine.persistence import SaveScheduler


class RecordingScheduler(SaveScheduler):
    def __init__(self):
        super().__init__(lambda: None)
        self.requests = 0

    def schedule_save(self):
        self.requests += 1


def make_store(config=None):
    scheduler = RecordingScheduler()
    return CounterStore(config or ModuleConfig(), scheduler), scheduler


def test_first_access_creates_zeroed_record_and_saves():
    store, scheduler = make_store()
    counters = store.get_counters("a")
    assert counters == TipCounters(0, 0, {})
    assert store.config.tips["a"] is counters
    assert scheduler.requests == 1


def test_existing_record_is_returned_without_saving():
    config = ModuleConfig(tips={"a": TipCounters(shown_count=2)})
    store, scheduler = make_store(config)
    assert store.get_counters("a").shown_count == 2
    assert scheduler.requests == 0


def test_increment_shown_counts_context():
    store, scheduler = make_store()
    store.increment_shown("a", "popup")
    store.increment_shown("a", "popup")
    store.increment_shown("a", None)

    counters = store.get_counters("a")
    assert counters.shown_count == 3
    assert counters.shown_context == {"popup": 2, "null": 1}
    assert scheduler.requests == 4


def test_increment_dismissed_and_triggered():
    store, scheduler = make_store()
    store.increment_dismissed("a")
    store.increment_triggered()
    store.increment_triggered()

    assert store.get_counters("a").dismissed_count == 1
    assert store.triggered_open == 2


def test_counters_never_decrease():
    store, _ = make_store()
    history = []
    for step in range(20):
        if step % 3 == 0:
            store.increment_dismissed("a")
        else:
            store.increment_shown("a", "ctx" if step % 2 else None)
        counters = store.get_counters("a")
        history.append((counters.shown_count, counters.dismissed_count))

    for before, after in zip(history, history[1:]):
        assert after[0] >= before[0] >= 0
        assert after[1] >= before[1] >= 0


def test_mutations_wait_for_state_lock():
    import threading

    store, scheduler = make_store()
    done = threading.Event()
    worker = threading.Thread(target=lambda: (store.increment_shown("a", "popup"), done.set()))

    with scheduler.state_lock:
        worker.start()
        assert not done.wait(timeout=0.2)
        assert "a" not in store.config.tips

    assert done.wait(timeout=5)
    worker.join(timeout=5)
    assert store.config.tips["a"].shown_count == 1
