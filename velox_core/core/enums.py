"""Closed-set settings such as mode, page, theme and measurement units."""

from __future__ import annotations

from typing import Any, Sequence

from velox_core.core.value_model import InvalidHandler, ValueModel
from velox_core.storage.base import PersistenceStrategy


class EnumModel(ValueModel[str]):
    def __init__(
        self,
        name: str,
        values: Sequence[str],
        *,
        default: str | None = None,
        on_invalid: InvalidHandler | None = None,
        storage: PersistenceStrategy | None = None,
    ) -> None:
        if not values:
            raise ValueError(f"{name}: enum needs at least one value")
        chosen = values[0] if default is None else default
        if chosen not in values:
            raise ValueError(f"{name}: default {chosen!r} is not one of {list(values)}")
        super().__init__(name, chosen, on_invalid=on_invalid, storage=storage)
        self.values: tuple[str, ...] = tuple(values)

    def default_is_valid(self, value: Any) -> bool:
        return value in self.values

    @property
    def is_binary(self) -> bool:
        return len(self.values) == 2

    def switch(self, current: Any) -> str:
        """Toggle between the two values of a binary enum."""
        if not self.is_binary:
            raise TypeError(f"{self.name} has {len(self.values)} values; switch needs exactly 2")
        first, second = self.values
        if current == first:
            return self._hold(second)
        if current == second:
            return self._hold(first)
        self.on_invalid(current)
        return self._hold(self.default)
