"""JSON file backed key/value settings storage."""

import asyncio
import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from tipjar.config import get_settings

logger = logging.getLogger(__name__)


class SettingsStore:
    """Stores JSON values by key in a single file.

    ``get`` is a coroutine so callers can await the initial load; ``set``
    writes immediately and returns nothing.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else get_settings().settings_file
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read settings file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings file {self.path}: not a JSON object")
            return {}
        return data

    def _dump(self, data: Dict[str, Any]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_path, self.path)

    async def get(self, key: str) -> Optional[Any]:
        """Return the value stored under ``key``, or None."""
        data = await asyncio.to_thread(self._load)
        return data.get(key)

    def get_sync(self, key: str) -> Optional[Any]:
        return self._load().get(key)

    def set(self, key: str, value: Any):
        """Store ``value`` under ``key``, keeping all other keys."""
        with self._lock:
            data = self._load()
            data[key] = value
            self._dump(data)
        logger.debug(f"Saved settings key {key} to {self.path}")

    def remove(self, key: str) -> bool:
        """Delete ``key``. Returns False if it was not stored."""
        with self._lock:
            data = self._load()
            if key not in data:
                return False
            del data[key]
            self._dump(data)
        return True

    def keys(self) -> List[str]:
        return list(self._load().keys())
