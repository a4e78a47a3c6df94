"""File-save capability for exported activities."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from loguru import logger


@runtime_checkable
class FileSaver(Protocol):
    def save_file(self, data: bytes, file_name: str) -> Path: ...


class DirectoryFileSaver:
    """Writes exported files into one directory, created on first use."""

    def __init__(self, base_dir: Path) -> None:
        self.base_dir = base_dir

    def save_file(self, data: bytes, file_name: str) -> Path:
        if Path(file_name).name != file_name:
            raise ValueError(f"File name must not contain a directory: {file_name!r}")
        self.base_dir.mkdir(parents=True, exist_ok=True)
        out = self.base_dir / file_name
        out.write_bytes(data)
        logger.info(f"Saved {len(data)} bytes to {out}")
        return out
