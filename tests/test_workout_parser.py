from __future__ import annotations

from pathlib import Path

import pytest

from velox_core.workout.library import default_workout_document, get_workout, list_workouts
from velox_core.workout.parser import WorkoutParseError, load_workout, parse_workout

ZWO = """<?xml version="1.0" encoding="UTF-8"?>
<workout_file>
    <author>Coach</author>
    <name>Over Unders</name>
    <description>Alternating efforts.</description>
    <workout>
        <Warmup Duration="300" PowerLow="0.4" PowerHigh="0.7"/>
        <IntervalsT Repeat="2" OnDuration="60" OffDuration="30" OnPower="1.05" OffPower="0.95" Cadence="95"/>
        <FreeRide Duration="120" Slope="1.5"/>
        <Cooldown Duration="180" PowerLow="0.6" PowerHigh="0.3"/>
    </workout>
</workout_file>
"""


def test_parse_zwo_document() -> None:
    plan = parse_workout(ZWO)

    assert plan.name == "Over Unders"
    assert plan.author == "Coach"
    assert plan.description == "Alternating efforts."
    assert [s.label for s in plan.steps] == [
        "Warmup",
        "ON 1",
        "OFF 1",
        "ON 2",
        "OFF 2",
        "Free Ride",
        "Cooldown",
    ]
    assert plan.total_duration_sec == 300 + 2 * 90 + 120 + 180
    assert plan.steps[1].cadence_rpm == 95
    assert plan.steps[5].is_free_ride
    assert plan.steps[5].slope_pct == 1.5


def test_ramp_target_watts_interpolates() -> None:
    warmup = parse_workout(ZWO).steps[0]

    assert warmup.is_ramp
    assert warmup.target_watts(200) == 80
    assert warmup.target_watts(200, elapsed_sec=150) == 110
    assert warmup.target_watts(200, elapsed_sec=999) == 140


def test_parse_json_document() -> None:
    plan = parse_workout(
        '{"name":"Tempo","steps":[{"duration_sec":60,"power":0.6},'
        '{"duration_sec":30,"power":0.9,"label":"Push","cadence_rpm":100}]}'
    )

    assert plan.name == "Tempo"
    assert len(plan.steps) == 2
    assert plan.total_duration_sec == 90
    assert plan.steps[1].label == "Push"
    assert plan.steps[1].target_watts(250) == 225


def test_load_workout_csv(tmp_path: Path) -> None:
    workout_file = tmp_path / "sample.csv"
    workout_file.write_text(
        "duration_sec,power,label\n60,0.5,warmup\n120,0.8,tempo\n",
        encoding="utf-8",
    )

    plan = load_workout(workout_file)

    assert plan.name == "sample"
    assert len(plan.steps) == 2
    assert plan.steps[0].power_low == 0.5
    assert plan.total_duration_sec == 180


def test_load_workout_zwo_file(tmp_path: Path) -> None:
    workout_file = tmp_path / "over_unders.zwo"
    workout_file.write_text(ZWO, encoding="utf-8")

    assert load_workout(workout_file).name == "Over Unders"


def test_load_workout_invalid_extension(tmp_path: Path) -> None:
    workout_file = tmp_path / "sample.txt"
    workout_file.write_text("hello", encoding="utf-8")

    with pytest.raises(WorkoutParseError):
        load_workout(workout_file)


@pytest.mark.parametrize(
    "document",
    [
        "<workout_file><name>Broken</name>",
        "<workout_file><name>No body</name></workout_file>",
        "<workout_file><workout></workout></workout_file>",
        '<workout_file><workout><SteadyState Duration="0" Power="0.5"/></workout></workout_file>',
        '<workout_file><workout><SteadyState Duration="60"/></workout></workout_file>',
        '<workout_file><workout><Sprint Duration="60"/></workout></workout_file>',
        '{"name": "x", "steps": [{"duration_sec": 60, "power": -1}]}',
        '{"name": "x", "steps": "nope"}',
        "not a workout",
    ],
)
def test_malformed_documents_raise(document: str) -> None:
    with pytest.raises(WorkoutParseError):
        parse_workout(document)


def test_builtin_workouts_all_parse() -> None:
    for item in list_workouts():
        plan = item.parse()
        assert plan.steps
    assert parse_workout(default_workout_document()).name == "Dijon"
    assert get_workout("tempo_30").parse().name == "Tempo 30"
    with pytest.raises(ValueError):
        get_workout("missing")
