from __future__ import annotations

from typing import Any

import pytest


class InvalidRecorder:
    def __init__(self) -> None:
        self.calls: list[Any] = []

    def __call__(self, value: Any) -> None:
        self.calls.append(value)


@pytest.fixture
def invalid() -> InvalidRecorder:
    return InvalidRecorder()
