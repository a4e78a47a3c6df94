"""Built-in workouts shipped as ZWO documents."""

from __future__ import annotations

from dataclasses import dataclass

from velox_core.workout.model import WorkoutPlan
from velox_core.workout.parser import parse_zwo


@dataclass(frozen=True)
class BuiltinWorkout:
    key: str
    category: str
    xml: str

    def parse(self) -> WorkoutPlan:
        return parse_zwo(self.xml)


BUILTIN_WORKOUTS: tuple[BuiltinWorkout, ...] = (
    BuiltinWorkout(
        key="dijon",
        category="VO2max",
        xml="""
<workout_file>
    <author>Velox</author>
    <name>Dijon</name>
    <description>Classic 8x1 minute VO2 efforts with equal rest.</description>
    <sportType>bike</sportType>
    <tags></tags>
    <workout>
        <Warmup Duration="600" PowerLow="0.40" PowerHigh="0.70"/>
        <SteadyState Duration="300" Power="0.60"/>
        <IntervalsT Repeat="8" OnDuration="60" OffDuration="60" OnPower="1.20" OffPower="0.50" Cadence="100" CadenceResting="85"/>
        <Cooldown Duration="600" PowerLow="0.60" PowerHigh="0.30"/>
    </workout>
</workout_file>
""",
    ),
    BuiltinWorkout(
        key="tempo_30",
        category="Tempo",
        xml="""
<workout_file>
    <author>Velox</author>
    <name>Tempo 30</name>
    <description>Twelve minutes of tempo between an easy warmup and cooldown.</description>
    <sportType>bike</sportType>
    <workout>
        <Warmup Duration="420" PowerLow="0.45" PowerHigh="0.65"/>
        <SteadyState Duration="720" Power="0.78" Cadence="92"/>
        <SteadyState Duration="420" Power="0.55"/>
        <Cooldown Duration="240" PowerLow="0.55" PowerHigh="0.40"/>
    </workout>
</workout_file>
""",
    ),
    BuiltinWorkout(
        key="sweetspot_3x10",
        category="FTP",
        xml="""
<workout_file>
    <author>Velox</author>
    <name>Sweet Spot 3x10</name>
    <description>Three ten minute blocks just under threshold.</description>
    <sportType>bike</sportType>
    <workout>
        <Warmup Duration="600" PowerLow="0.45" PowerHigh="0.70"/>
        <SteadyState Duration="600" Power="0.88" Cadence="90"/>
        <SteadyState Duration="240" Power="0.60"/>
        <SteadyState Duration="600" Power="0.90" Cadence="90"/>
        <SteadyState Duration="240" Power="0.60"/>
        <SteadyState Duration="600" Power="0.92" Cadence="90"/>
        <Cooldown Duration="300" PowerLow="0.55" PowerHigh="0.40"/>
    </workout>
</workout_file>
""",
    ),
    BuiltinWorkout(
        key="endurance_free",
        category="Endurance",
        xml="""
<workout_file>
    <author>Velox</author>
    <name>Endurance Free Ride</name>
    <description>Ramp up, then ride freely on a gentle slope.</description>
    <sportType>bike</sportType>
    <workout>
        <Ramp Duration="600" PowerLow="0.50" PowerHigh="0.70"/>
        <FreeRide Duration="2400" Slope="2.0"/>
        <Cooldown Duration="300" PowerLow="0.60" PowerHigh="0.40"/>
    </workout>
</workout_file>
""",
    ),
)


def list_workouts() -> tuple[BuiltinWorkout, ...]:
    return BUILTIN_WORKOUTS


def default_workout_document() -> str:
    return BUILTIN_WORKOUTS[0].xml


def get_workout(key: str) -> BuiltinWorkout:
    workout = next((item for item in BUILTIN_WORKOUTS if item.key == key), None)
    if workout is None:
        raise ValueError(f"Unknown workout '{key}'")
    return workout
