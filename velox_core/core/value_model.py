"""Validated value containers shared by telemetry, targets and settings."""

from __future__ import annotations

import math
from typing import Any, Callable, Generic, TypeVar

from loguru import logger

from velox_core.storage.base import IdentityStorage, PersistenceStrategy

T = TypeVar("T")

ValidityRule = Callable[[Any], bool]
InvalidHandler = Callable[[Any], None]


def exists(value: Any) -> bool:
    return value is not None and value != ""


def is_number(value: Any) -> bool:
    """True for finite ints and floats; bools are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, int):
        return True
    return math.isfinite(value)


def is_whole_number(value: Any) -> bool:
    if not is_number(value):
        return False
    return isinstance(value, int) or float(value).is_integer()


def in_range(min_value: float, max_value: float, value: float) -> bool:
    return min_value <= value <= max_value


def clamp(min_value: float, max_value: float, value: float) -> float:
    return max(min_value, min(max_value, value))


class ValueModel(Generic[T]):
    """Holds one domain value and degrades invalid input to a default.

    ``set`` never raises for a rejected candidate: ``on_invalid`` is called
    as a diagnostic and the default is returned and held instead.
    """

    def __init__(
        self,
        name: str,
        default: T,
        *,
        is_valid: ValidityRule | None = None,
        on_invalid: InvalidHandler | None = None,
        storage: PersistenceStrategy | None = None,
    ) -> None:
        self.name = name
        self.default = default
        self.value: T = default
        self.previous: T = default
        self._is_valid = is_valid
        self._on_invalid = on_invalid
        self.storage: PersistenceStrategy = storage or IdentityStorage(default)

    def is_valid(self, value: Any) -> bool:
        if self._is_valid is not None:
            return self._is_valid(value)
        return self.default_is_valid(value)

    def default_is_valid(self, value: Any) -> bool:
        return exists(value)

    def on_invalid(self, value: Any) -> None:
        if self._on_invalid is not None:
            self._on_invalid(value)
            return
        logger.error(f"Trying to set invalid {self.name}. {type(value).__name__} {value!r}")

    def set(self, candidate: Any) -> T:
        if self.is_valid(candidate):
            return self._hold(candidate)
        self.on_invalid(candidate)
        return self._hold(self.default)

    def _hold(self, value: T) -> T:
        self.previous = self.value
        self.value = value
        return value

    def backup(self, value: T) -> None:
        self.storage.store(value)

    def restore(self) -> T:
        loaded = self.storage.load()
        if self.is_valid(loaded):
            return self._hold(loaded)
        logger.warning(f"Restored {self.name} is invalid ({loaded!r}), using default")
        return self._hold(self.default)

    @property
    def persisted(self) -> bool:
        return not isinstance(self.storage, IdentityStorage)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, value={self.value!r})"
