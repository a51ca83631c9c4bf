"""Settings access helpers for JSON-based configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


class JsonSettings:
    """JSON settings with dotted-key access and in-memory overrides.

    Overrides (for example from command line flags) are applied with `set` and
    never written back to the file.
    """

    def __init__(self, settings_path: str | Path | None = None) -> None:
        """Load `settings_path`; None gives empty settings (all defaults)."""
        self.path = Path(settings_path) if settings_path is not None else None
        self._data: dict[str, Any] = {}
        if self.path is None:
            return
        if not self.path.exists():
            raise FileNotFoundError(f"settings file not found: {self.path}")
        with self.path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"settings file must contain a JSON object: {self.path}")
        self._data = data

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        node: Any = self._data
        for part in key.split("."):
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node

    def set(self, key: str, value: Any) -> None:
        """Override dotted `key`; None values are ignored."""
        if value is None:
            return
        *parents, leaf = key.split(".")
        node = self._data
        for part in parents:
            child = node.get(part)
            if not isinstance(child, dict):
                child = node[part] = {}
            node = child
        node[leaf] = value
