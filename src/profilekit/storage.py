"""Key-value persistence for widget configs.

A JSON file stands in for browser local storage. Every operation fails
closed: a missing or unwritable file yields the default value (or False)
and a log line, never an exception.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Callable
import asyncio
import json
import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_PATH = "~/.cache/profilekit/storage.json"

class ConfigStorage:
    def __init__(self, path: str | Path = DEFAULT_STORAGE_PATH, *, enabled: bool = True) -> None:
        self.path = Path(os.path.expanduser(os.path.expandvars(str(path))))
        self.enabled = enabled

    def is_available(self) -> bool:
        if not self.enabled:
            return False
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError:
            return False
        if self.path.exists():
            return os.access(self.path, os.R_OK | os.W_OK)
        return os.access(self.path.parent, os.W_OK)

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def _write(self, data: dict[str, Any]) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        tmp.replace(self.path)

    def save(self, key: str, value: Any) -> bool:
        if not self.is_available():
            return False
        try:
            data = self._read()
            data[key] = value
            self._write(data)
            return True
        except (OSError, ValueError, TypeError) as e:
            logger.error("Error saving %r to storage: %s", key, e)
            return False

    def load(self, key: str, default: Any = None) -> Any:
        if not self.is_available():
            return default
        try:
            return self._read().get(key, default)
        except (OSError, ValueError) as e:
            logger.error("Error loading %r from storage: %s", key, e)
            return default

    def remove(self, key: str) -> bool:
        if not self.is_available():
            return False
        try:
            data = self._read()
            data.pop(key, None)
            self._write(data)
            return True
        except (OSError, ValueError) as e:
            logger.error("Error removing %r from storage: %s", key, e)
            return False

    def exists(self, key: str) -> bool:
        return key in self.keys()

    def keys(self) -> list[str]:
        if not self.is_available():
            return []
        try:
            return sorted(self._read())
        except (OSError, ValueError) as e:
            logger.error("Error listing storage keys: %s", e)
            return []

    def clear(self) -> bool:
        if not self.is_available():
            return False
        try:
            self._write({})
            return True
        except OSError as e:
            logger.error("Error clearing storage: %s", e)
            return False

    def autosave(self, key: str, value: Any, delay: float = 2.0) -> Callable[[], None]:
        """Save ``value`` after ``delay`` seconds; the returned callable cancels it."""
        handle = asyncio.get_running_loop().call_later(delay, self.save, key, value)
        return handle.cancel
