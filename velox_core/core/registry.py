"""Named access point for every value model of a running session.

``build_registry`` wires the concrete models in a fixed order. Tests and
embedding applications build their own instance instead of sharing a
module-level singleton.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from velox_core.core.config import Settings
from velox_core.core.enums import EnumModel
from velox_core.core.numeric import BoundedNumericModel, SteppedTargetModel
from velox_core.core.value_model import InvalidHandler, ValueModel
from velox_core.storage.base import KeyedStorage, StorageBackend, get_storage
from velox_core.workout.files import DirectoryFileSaver, FileSaver
from velox_core.workout.workout_model import WorkoutModel

MODEL_NAMES: tuple[str, ...] = (
    "power",
    "heartRate",
    "cadence",
    "speed",
    "distance",
    "powerTarget",
    "resistanceTarget",
    "slopeTarget",
    "mode",
    "page",
    "ftp",
    "weight",
    "theme",
    "measurement",
    "workout",
)


class ModelRegistry(Mapping[str, ValueModel[Any]]):
    def __init__(self, models: dict[str, ValueModel[Any]]) -> None:
        self._models = dict(models)

    def __getitem__(self, name: str) -> ValueModel[Any]:
        return self._models[name]

    def __setitem__(self, name: str, model: ValueModel[Any]) -> None:
        raise TypeError("ModelRegistry is fixed after construction")

    def __iter__(self) -> Iterator[str]:
        return iter(self._models)

    def __len__(self) -> int:
        return len(self._models)

    def __getattr__(self, name: str) -> ValueModel[Any]:
        models = self.__dict__.get("_models", {})
        if name in models:
            return models[name]
        raise AttributeError(name)

    @property
    def workout(self) -> WorkoutModel:
        model = self._models["workout"]
        if not isinstance(model, WorkoutModel):
            raise TypeError(f"workout is a {type(model).__name__}, not a WorkoutModel")
        return model

    def persisted(self) -> list[ValueModel[Any]]:
        return [model for model in self._models.values() if model.persisted]

    def restore_all(self) -> dict[str, Any]:
        return {model.name: model.restore() for model in self.persisted()}

    def snapshot(self) -> dict[str, Any]:
        return {name: model.value for name, model in self._models.items() if name != "workout"}


def _bounded(
    name: str,
    *,
    max_value: float,
    integer: bool = True,
    default: int = 0,
    on_invalid: InvalidHandler | None,
    storage: StorageBackend | None = None,
) -> BoundedNumericModel:
    return BoundedNumericModel(
        name,
        min_value=0,
        max_value=max_value,
        integer=integer,
        default=default,
        on_invalid=on_invalid,
        storage=KeyedStorage(storage, name, default) if storage is not None else None,
    )


def _enum(
    name: str,
    values: tuple[str, ...],
    *,
    on_invalid: InvalidHandler | None,
    storage: StorageBackend | None = None,
) -> EnumModel:
    return EnumModel(
        name,
        values,
        on_invalid=on_invalid,
        storage=KeyedStorage(storage, name, values[0]) if storage is not None else None,
    )


def build_registry(
    storage: StorageBackend | None = None,
    saver: FileSaver | None = None,
    settings: Settings | None = None,
    on_invalid: InvalidHandler | None = None,
) -> ModelRegistry:
    """Build every model; ``ftp``, ``weight``, ``theme`` and ``measurement`` persist."""
    cfg = settings or Settings.from_env()
    backend = storage if storage is not None else get_storage(settings=cfg)
    file_saver = saver or DirectoryFileSaver(cfg.activities_dir)

    models: list[ValueModel[Any]] = [
        _bounded("power", max_value=2500, on_invalid=on_invalid),
        _bounded("heartRate", max_value=255, on_invalid=on_invalid),
        _bounded("cadence", max_value=255, on_invalid=on_invalid),
        _bounded("speed", max_value=120, integer=False, on_invalid=on_invalid),
        _bounded("distance", max_value=float("inf"), integer=False, on_invalid=on_invalid),
        SteppedTargetModel("powerTarget", max_value=800, step=10, on_invalid=on_invalid),
        SteppedTargetModel("resistanceTarget", max_value=100, step=10, on_invalid=on_invalid),
        SteppedTargetModel(
            "slopeTarget", max_value=45, step=0.5, decimal=True, on_invalid=on_invalid
        ),
        _enum("mode", ("erg", "resistance", "slope"), on_invalid=on_invalid),
        EnumModel("page", ("settings", "home", "workouts"), default="home", on_invalid=on_invalid),
        _bounded("ftp", max_value=500, default=200, on_invalid=on_invalid, storage=backend),
        _bounded("weight", max_value=500, default=75, on_invalid=on_invalid, storage=backend),
        _enum("theme", ("dark", "light"), on_invalid=on_invalid, storage=backend),
        _enum("measurement", ("metric", "imperial"), on_invalid=on_invalid, storage=backend),
        WorkoutModel("workout", saver=file_saver, on_invalid=on_invalid),
    ]
    return ModelRegistry({model.name: model for model in models})
