import pytest

from tipjar.config import reset_settings
from tipjar.services.settings_store import SettingsStore


@pytest.fixture(autouse=True)
def config_dir(tmp_path, monkeypatch):
    path = tmp_path / "tipjar-home"
    monkeypatch.setenv("TIPJAR_CONFIG_DIR", str(path))
    reset_settings()
    yield path
    reset_settings()


@pytest.fixture
def store(config_dir):
    return SettingsStore(config_dir / "settings.json")
