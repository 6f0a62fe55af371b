"""Settings and configuration for tipjar."""

import os
import json
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)


def _default_config_dir() -> Path:
    override = os.environ.get("TIPJAR_CONFIG_DIR")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".tipjar"


@dataclass
class Settings:
    """tipjar settings."""

    # Config file location
    config_dir: Path = field(default_factory=_default_config_dir)

    # Optional JSON tip catalogue replacing the built-in tips
    catalogue_path: Optional[Path] = None

    # Engine tuning
    debounce_seconds: float = 1.0  # coalescing window for counter writes
    global_randomize: float = 0.2  # share of sampled triggers that show a tip

    def __post_init__(self):
        """Ensure paths are Path objects and apply config.json overrides."""
        if isinstance(self.config_dir, str):
            self.config_dir = Path(self.config_dir).expanduser()
        if isinstance(self.catalogue_path, str):
            self.catalogue_path = Path(self.catalogue_path).expanduser()

        self._apply_config_file()

    @property
    def settings_file(self) -> Path:
        return self.config_dir / "settings.json"

    @property
    def log_dir(self) -> Path:
        return self.config_dir / "logs"

    def _apply_config_file(self):
        """Load config.json from the config dir and override matching fields."""
        config_path = self.config_dir / "config.json"
        if not config_path.exists():
            return

        try:
            with open(config_path, "r") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable {config_path}: {e}")
            return

        if "debounce_seconds" in data:
            self.debounce_seconds = float(data["debounce_seconds"])
        if "global_randomize" in data:
            self.global_randomize = float(data["global_randomize"])
        catalogue = data.get("catalogue")
        if catalogue and self.catalogue_path is None:
            path = Path(catalogue).expanduser()
            self.catalogue_path = path if path.is_absolute() else self.config_dir / path


# Singleton settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the settings singleton."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings():
    """Forget the cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None
