"""Injectable key-value persistence for UI view preferences."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, MutableMapping, Optional, Protocol

from teamwear.config import get_config
from teamwear.logging import get_logger

logger = get_logger(__name__)

VIEW_MODE_KEY = "view_mode"
VIEW_MODES = ("grid", "list")


class PreferenceStore(Protocol):
    """Storage-agnostic preference port."""

    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...


class InMemoryPreferenceStore(PreferenceStore):
    """Preferences held in a mapping (a plain dict, or a UI session state)."""

    def __init__(self, backing: Optional[MutableMapping[str, Any]] = None) -> None:
        self._values = backing if backing is not None else {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value


class JsonFilePreferenceStore(PreferenceStore):
    """Preferences persisted as a JSON object in a file."""

    def __init__(self, path: str | Path = None) -> None:
        if path is None:
            path = get_config().preferences_path or "preferences.json"
        self.path = Path(path)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise RuntimeError(f"Preferences file {self.path} is not valid JSON: {e}") from e

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        values = self._read()
        values[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(values, indent=2, sort_keys=True), encoding="utf-8")
        logger.debug(f"Saved preference '{key}' to {self.path}")


def get_view_mode(store: PreferenceStore) -> str:
    """Stored grid/list view mode, falling back to the configured default."""
    default = get_config().default_view_mode
    mode = store.get(VIEW_MODE_KEY, default)
    if mode not in VIEW_MODES:
        logger.warning(f"Ignoring unknown view mode {mode!r}, using {default!r}")
        return default
    return mode


def set_view_mode(store: PreferenceStore, mode: str) -> None:
    if mode not in VIEW_MODES:
        raise ValueError(f"Unknown view mode: {mode} (expected one of {', '.join(VIEW_MODES)})")
    store.set(VIEW_MODE_KEY, mode)
