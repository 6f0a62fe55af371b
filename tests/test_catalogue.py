import json

import pytest

from tipjar.catalogue import DEFAULT_TIPS, get_catalogue, load_catalogue
from tipjar.engine.models import ModuleConfig, TipCounters
from tipjar.errors import CatalogueError


def write(tmp_path, data):
    path = tmp_path / "tips.json"
    path.write_text(json.dumps(data) if not isinstance(data, str) else data)
    return path


def test_default_catalogue_has_unique_ids():
    ids = [tip.id for tip in DEFAULT_TIPS]
    assert len(ids) == len(set(ids))
    assert get_catalogue() == list(DEFAULT_TIPS)


def test_stats_tip_waits_for_welcome_dismissal():
    stats_tip = next(tip for tip in DEFAULT_TIPS if tip.id == "stats")
    hook = stats_tip.show_tip
    config = ModuleConfig()
    assert hook(stats_tip, TipCounters(), stats_tip, config) is False

    config.tips["welcome"] = TipCounters(shown_count=1, dismissed_count=1)
    assert hook(stats_tip, TipCounters(), stats_tip, config) is None


def test_load_catalogue(tmp_path):
    path = write(tmp_path, [
        {"id": "a", "text": "first", "requiredShowCount": 1, "requiredTriggers": 0},
        {"id": "b", "text": "second", "randomizeDisplay": 0.3},
    ])
    tips = load_catalogue(path)
    assert [tip.id for tip in tips] == ["a", "b"]
    assert tips[0].required_triggers == 0
    assert tips[1].randomize_display == 0.3
    assert get_catalogue(path) == tips


@pytest.mark.parametrize("data", [
    "{broken",
    {"id": "a", "text": "not a list"},
    [{"id": "a", "text": "x"}, {"id": "a", "text": "y"}],
    [{"text": "no id"}],
])
def test_load_catalogue_rejects_bad_files(tmp_path, data):
    with pytest.raises(CatalogueError):
        load_catalogue(write(tmp_path, data))


def test_load_missing_catalogue(tmp_path):
    with pytest.raises(CatalogueError):
        load_catalogue(tmp_path / "missing.json")
