"""Value model holding the active workout and exporting finished sessions."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Callable

from loguru import logger

from velox_core.core.value_model import InvalidHandler, ValueModel
from velox_core.workout.activity import SessionData
from velox_core.workout.files import FileSaver
from velox_core.workout.fit_encoder import encode_activity
from velox_core.workout.library import default_workout_document
from velox_core.workout.model import WorkoutPlan
from velox_core.workout.parser import parse_workout

WorkoutParser = Callable[[str], WorkoutPlan]
ActivityEncoder = Callable[[SessionData], bytes]


def date_to_dash_string(value: datetime) -> str:
    return value.strftime("%d-%m-%Y-%H-%M")


class WorkoutModel(ValueModel[WorkoutPlan]):
    """Active workout definition.

    The parser, encoder and saver are collaborators behind narrow contracts;
    parse errors and save failures propagate to the caller unchanged.
    """

    def __init__(
        self,
        name: str = "workout",
        *,
        parser: WorkoutParser = parse_workout,
        encoder: ActivityEncoder = encode_activity,
        saver: FileSaver | None = None,
        on_invalid: InvalidHandler | None = None,
    ) -> None:
        self._parser = parser
        self._encoder = encoder
        self.saver = saver
        super().__init__(name, self.default_value(), on_invalid=on_invalid)

    def default_value(self) -> WorkoutPlan:
        return self.parse(default_workout_document())

    def default_is_valid(self, value: Any) -> bool:
        return isinstance(value, WorkoutPlan) and len(value.steps) > 0

    def parse(self, document: str) -> WorkoutPlan:
        return self._parser(document)

    def load(self, document: str) -> WorkoutPlan:
        """Parse ``document`` and hold it; the held workout is untouched on failure."""
        plan = self.parse(document)
        logger.info(f"Loaded workout '{plan.name}' ({len(plan.steps)} steps)")
        return self.set(plan)

    def file_name(self, now: datetime | None = None) -> str:
        return f"workout-{date_to_dash_string(now or datetime.now())}.fit"

    def encode(self, session: SessionData) -> bytes:
        return self._encoder(session)

    def save(self, session: SessionData, now: datetime | None = None) -> Path:
        if self.saver is None:
            raise RuntimeError("No file saver configured for workout export")
        activity = self.encode(session)
        return self.saver.save_file(activity, self.file_name(now))
