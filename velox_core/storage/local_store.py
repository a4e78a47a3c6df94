"""Key/value settings persisted as a single local JSON document."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from loguru import logger


class JsonFileStorage:
    def __init__(self, path: Path) -> None:
        self.path = path

    def store(self, key: str, value: Any) -> None:
        items = self._read_all()
        items[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(items, ensure_ascii=True, indent=2), encoding="utf-8")

    def load(self, key: str, default: Any) -> Any:
        return self._read_all().get(key, default)

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning(f"Ignoring unreadable settings file {self.path}: {exc}")
            return {}
        if not isinstance(payload, dict):
            logger.warning(f"Ignoring settings file {self.path}: root is not an object")
            return {}
        return payload
