import threading

import pytest

from tipjar.engine.persistence import SaveScheduler


def test_flush_without_pending_save_does_nothing():
    saves = []
    scheduler = SaveScheduler(lambda: saves.append(1), wait=60)
    assert scheduler.flush() is False
    assert saves == []


def test_burst_of_requests_coalesces_into_one_write():
    saves = []
    scheduler = SaveScheduler(lambda: saves.append(1), wait=60)
    for _ in range(5):
        scheduler.schedule_save()

    assert scheduler.pending
    assert scheduler.flush() is True
    assert saves == [1]
    assert not scheduler.pending
    assert scheduler.flush() is False


def test_cancel_drops_pending_write():
    saves = []
    scheduler = SaveScheduler(lambda: saves.append(1), wait=60)
    scheduler.schedule_save()
    scheduler.cancel()
    assert not scheduler.pending
    assert scheduler.flush() is False
    assert saves == []


def test_timer_fires_after_wait():
    done = threading.Event()
    scheduler = SaveScheduler(done.set, wait=0.01)
    scheduler.schedule_save()
    assert done.wait(timeout=5)
    assert scheduler.writes == 1


def test_failed_timer_write_is_not_retried():
    calls = []
    done = threading.Event()

    def save():
        calls.append(1)
        done.set()
        raise OSError("disk full")

    scheduler = SaveScheduler(save, wait=0.01)
    scheduler.schedule_save()
    assert done.wait(timeout=5)
    assert calls == [1]
    assert not scheduler.pending


def test_flush_propagates_write_errors():
    def save():
        raise OSError("disk full")

    scheduler = SaveScheduler(save, wait=60)
    scheduler.schedule_save()
    with pytest.raises(OSError):
        scheduler.flush()


def test_timer_save_snapshots_config_under_state_lock(store):
    from helpers import make_engine
    from tipjar.engine.random_tips import TIP_SETTING_STORAGE_ID

    engine = make_engine(store)
    engine.counters.increment_triggered()
    engine.scheduler.cancel()

    written = threading.Event()
    with engine.scheduler.state_lock:
        worker = threading.Thread(target=lambda: (engine._save_config(), written.set()))
        worker.start()
        assert not written.wait(timeout=0.2)

    assert written.wait(timeout=5)
    worker.join(timeout=5)
    assert store.get_sync(TIP_SETTING_STORAGE_ID)["triggeredOpen"] == 1
