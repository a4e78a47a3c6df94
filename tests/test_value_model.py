from __future__ import annotations

from loguru import logger

from velox_core.core.value_model import ValueModel, clamp, exists, is_number, is_whole_number
from velox_core.storage.base import KeyedStorage, MemoryStorage


def test_set_returns_valid_candidate_and_tracks_previous() -> None:
    model = ValueModel("label", "none")

    assert model.set("first") == "first"
    assert model.set("second") == "second"
    assert model.value == "second"
    assert model.previous == "first"


def test_set_invalid_returns_default_and_reports(invalid) -> None:
    model = ValueModel("label", "none", on_invalid=invalid)
    model.set("kept")

    assert model.set("") == "none"
    assert model.set(None) == "none"
    assert invalid.calls == ["", None]
    assert model.value == "none"


def test_custom_validity_rule_overrides_default() -> None:
    model = ValueModel("even", 0, is_valid=lambda v: isinstance(v, int) and v % 2 == 0)

    assert model.set(4) == 4
    assert model.set(3) == 0


def test_default_invalid_handler_logs_error() -> None:
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="ERROR", format="{message}")
    try:
        ValueModel("power", 0, is_valid=lambda v: False).set("abc")
    finally:
        logger.remove(handler_id)

    assert len(messages) == 1
    assert "Trying to set invalid power" in messages[0]


def test_backup_and_restore_without_storage_uses_identity() -> None:
    model = ValueModel("label", "none")
    model.backup("stored")

    assert model.restore() == "none"
    assert not model.persisted


def test_restore_from_keyed_storage() -> None:
    backend = MemoryStorage()
    model = ValueModel("label", "none", storage=KeyedStorage(backend, "label", "none"))

    model.backup("saved")

    assert backend.load("label", None) == "saved"
    assert model.restore() == "saved"
    assert model.value == "saved"
    assert model.persisted


def test_backup_does_not_validate(invalid) -> None:
    backend = MemoryStorage()
    model = ValueModel("label", "none", on_invalid=invalid, storage=KeyedStorage(backend, "label", "none"))

    model.backup("")

    assert backend.load("label", "x") == ""
    assert invalid.calls == []


def test_number_helpers() -> None:
    assert exists(0)
    assert not exists("")
    assert is_number(1.5)
    assert not is_number(True)
    assert not is_number(float("nan"))
    assert not is_number("3")
    assert is_whole_number(250.0)
    assert not is_whole_number(250.5)
    assert clamp(0, 10, 12) == 10
    assert clamp(0, 10, -1) == 0
