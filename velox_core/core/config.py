"""Runtime settings resolved from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


def _default_data_dir() -> Path:
    return Path.home() / ".velox-engine"


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    storage_backend: str = "json"
    export_dir: Path | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        raw_dir = os.getenv("VELOX_DATA_DIR")
        data_dir = Path(raw_dir).expanduser() if raw_dir else _default_data_dir()
        raw_export = os.getenv("VELOX_EXPORT_DIR")
        return cls(
            data_dir=data_dir,
            storage_backend=os.getenv("VELOX_STORAGE", "json").lower(),
            export_dir=Path(raw_export).expanduser() if raw_export else None,
            log_level=os.getenv("VELOX_LOG_LEVEL", "INFO").upper(),
        )

    @property
    def store_path(self) -> Path:
        return self.data_dir / "settings.json"

    @property
    def db_path(self) -> Path:
        return self.data_dir / "velox.db"

    @property
    def activities_dir(self) -> Path:
        return self.export_dir or self.data_dir / "activities"
