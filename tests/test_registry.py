from __future__ import annotations

from pathlib import Path

import pytest

from velox_core.core.config import Settings
from velox_core.core.enums import EnumModel
from velox_core.core.numeric import BoundedNumericModel, SteppedTargetModel
from velox_core.core.registry import MODEL_NAMES, ModelRegistry, build_registry
from velox_core.storage.base import MemoryStorage
from velox_core.storage.sqlite_store import SQLiteStorage
from velox_core.workout.workout_model import WorkoutModel


def _registry(tmp_path: Path, storage=None, on_invalid=None):
    return build_registry(
        storage=storage if storage is not None else MemoryStorage(),
        settings=Settings(data_dir=tmp_path),
        on_invalid=on_invalid,
    )


def test_registry_exposes_every_model(tmp_path: Path) -> None:
    registry = _registry(tmp_path)

    assert tuple(registry) == MODEL_NAMES
    assert isinstance(registry["power"], BoundedNumericModel)
    assert isinstance(registry.powerTarget, SteppedTargetModel)
    assert isinstance(registry.theme, EnumModel)
    assert isinstance(registry.workout, WorkoutModel)


def test_workout_slot_must_hold_a_workout_model() -> None:
    registry = ModelRegistry({"workout": EnumModel("workout", ("a", "b"))})

    with pytest.raises(TypeError):
        registry.workout


def test_registry_cannot_be_rekeyed(tmp_path: Path) -> None:
    registry = _registry(tmp_path)

    with pytest.raises(TypeError):
        registry["power"] = registry["cadence"]
    with pytest.raises(AttributeError):
        registry.unknown


def test_registry_scenarios(tmp_path: Path, invalid) -> None:
    registry = _registry(tmp_path, on_invalid=invalid)

    assert registry.powerTarget.set(850) == 800
    assert registry.heartRate.set(300) == 0
    assert registry.slopeTarget.inc(44.5) == 45.0
    assert registry.theme.switch("dark") == "light"
    assert registry.mode.set("ergo") == "erg"
    assert invalid.calls == [300, "ergo"]


def test_registry_defaults(tmp_path: Path) -> None:
    snapshot = _registry(tmp_path).snapshot()

    assert snapshot["ftp"] == 200
    assert snapshot["weight"] == 75
    assert snapshot["theme"] == "dark"
    assert snapshot["measurement"] == "metric"
    assert snapshot["mode"] == "erg"
    assert snapshot["page"] == "home"
    assert snapshot["power"] == 0
    assert "workout" not in snapshot


def test_only_profile_models_persist(tmp_path: Path) -> None:
    registry = _registry(tmp_path)

    assert sorted(m.name for m in registry.persisted()) == ["ftp", "measurement", "theme", "weight"]


def test_profile_round_trip_across_registries(tmp_path: Path) -> None:
    backend = SQLiteStorage(tmp_path / "velox.db")
    first = _registry(tmp_path, storage=backend)
    first.ftp.backup(first.ftp.set(265))
    first.theme.backup(first.theme.switch(first.theme.value))

    second = _registry(tmp_path, storage=backend)
    restored = second.restore_all()

    assert restored == {"ftp": 265, "weight": 75, "theme": "light", "measurement": "metric"}
    assert second.ftp.value == 265


def test_restore_rejects_invalid_stored_value(tmp_path: Path) -> None:
    backend = MemoryStorage({"ftp": 9000, "measurement": "furlongs"})
    registry = _registry(tmp_path, storage=backend)

    assert registry.ftp.restore() == 200
    assert registry.measurement.restore() == "metric"


def test_isolated_registries_do_not_share_state(tmp_path: Path) -> None:
    a = _registry(tmp_path)
    b = _registry(tmp_path)

    a.power.set(300)

    assert a.power.value == 300
    assert b.power.value == 0
