"""Bounded telemetry values and stepped, clamped targets."""

from __future__ import annotations

import math
from typing import Any

from velox_core.core.value_model import (
    InvalidHandler,
    ValueModel,
    clamp,
    in_range,
    is_number,
    is_whole_number,
)
from velox_core.storage.base import PersistenceStrategy

Number = int | float


class BoundedNumericModel(ValueModel[Number]):
    """Rejects (never clamps) readings outside ``[min_value, max_value]``."""

    def __init__(
        self,
        name: str,
        *,
        min_value: Number = 0,
        max_value: Number = math.inf,
        integer: bool = True,
        default: Number = 0,
        on_invalid: InvalidHandler | None = None,
        storage: PersistenceStrategy | None = None,
    ) -> None:
        super().__init__(name, default, on_invalid=on_invalid, storage=storage)
        self.min_value = min_value
        self.max_value = max_value
        self.integer = integer

    def default_is_valid(self, value: Any) -> bool:
        kind_ok = is_whole_number(value) if self.integer else is_number(value)
        return kind_ok and in_range(self.min_value, self.max_value, value)


class SteppedTargetModel(ValueModel[Number]):
    """User-adjusted target: parses raw input and clamps it into range.

    Out-of-range numbers are pulled to the nearest bound; only input that is
    not a number at all falls back to the default.
    """

    def __init__(
        self,
        name: str,
        *,
        min_value: Number = 0,
        max_value: Number = 100,
        step: Number = 1,
        decimal: bool = False,
        default: Number = 0,
        on_invalid: InvalidHandler | None = None,
        storage: PersistenceStrategy | None = None,
    ) -> None:
        super().__init__(name, default, on_invalid=on_invalid, storage=storage)
        self.min_value = min_value
        self.max_value = max_value
        self.step = step
        self.decimal = decimal

    def default_is_valid(self, value: Any) -> bool:
        kind_ok = is_number(value) if self.decimal else is_whole_number(value)
        return kind_ok and in_range(self.min_value, self.max_value, value)

    def parse(self, raw: Any) -> Number:
        number = _to_number(raw)
        if number is None:
            raise ValueError(f"{self.name}: not a number: {raw!r}")
        return self._coerce(number)

    def _coerce(self, number: Number) -> Number:
        return float(number) if self.decimal else int(number)

    def set(self, candidate: Any) -> Number:
        number = _to_number(candidate)
        if number is None:
            self.on_invalid(candidate)
            return self._hold(self.default)
        return self._hold(self._coerce(clamp(self.min_value, self.max_value, number)))

    def inc(self, value: Number) -> Number:
        return self.set(value + self.step)

    def dec(self, value: Number) -> Number:
        return self.set(value - self.step)


def _to_number(raw: Any) -> Number | None:
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            raw = int(text)
        except ValueError:
            try:
                raw = float(text)
            except ValueError:
                return None
    if not is_number(raw):
        return None
    return raw
