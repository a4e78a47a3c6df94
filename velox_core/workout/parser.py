"""Workout document parser (ZWO XML, JSON, CSV)."""

from __future__ import annotations

import csv
import io
import json
import math
import xml.etree.ElementTree as ET
from pathlib import Path

from velox_core.workout.model import WorkoutPlan, WorkoutStep


class WorkoutParseError(ValueError):
    """Raised when a workout document is invalid."""


def load_workout(path: str | Path) -> WorkoutPlan:
    file_path = Path(path)
    suffix = file_path.suffix.lower()
    text = file_path.read_text(encoding="utf-8")
    if suffix in (".zwo", ".xml"):
        return parse_zwo(text)
    if suffix == ".json":
        return parse_json(text, fallback_name=file_path.stem)
    if suffix == ".csv":
        return parse_csv(text, name=file_path.stem)
    raise WorkoutParseError(
        f"Unsupported workout format '{file_path.suffix}'. Use .zwo, .json or .csv"
    )


def parse_workout(document: str) -> WorkoutPlan:
    """Parse a workout document, detecting XML or JSON from its first character."""
    if not isinstance(document, str):
        raise WorkoutParseError(f"Workout document must be text, got {type(document).__name__}")
    head = document.lstrip()
    if head.startswith("<"):
        return parse_zwo(document)
    if head.startswith("{"):
        return parse_json(document)
    raise WorkoutParseError("Workout document is neither ZWO XML nor JSON")


def parse_zwo(document: str) -> WorkoutPlan:
    try:
        root = ET.fromstring(document.strip())
    except ET.ParseError as exc:
        raise WorkoutParseError(f"Invalid XML: {exc}") from exc

    workout_node = root.find("workout")
    if workout_node is None:
        raise WorkoutParseError("ZWO document is missing a <workout> section")

    name = (root.findtext("name") or "").strip() or "Workout"
    author = (root.findtext("author") or "").strip() or None
    description = (root.findtext("description") or "").strip() or None

    steps: list[WorkoutStep] = []
    for index, node in enumerate(workout_node):
        steps.extend(_zwo_element_steps(node, index))

    return _build_plan(name=name, steps=steps, author=author, description=description)


def _zwo_element_steps(node: ET.Element, index: int) -> list[WorkoutStep]:
    tag = node.tag.lower()
    where = f"Element {index + 1} <{node.tag}>"
    cadence = _optional_int_attr(node, "Cadence", where)

    if tag in ("warmup", "cooldown", "ramp"):
        duration = _duration_attr(node, "Duration", where)
        low = _float_attr(node, "PowerLow", where)
        high = _float_attr(node, "PowerHigh", where)
        return [
            WorkoutStep(
                duration_sec=duration,
                power_low=low,
                power_high=high,
                label=tag.capitalize(),
                cadence_rpm=cadence,
            )
        ]

    if tag == "steadystate":
        return [
            WorkoutStep(
                duration_sec=_duration_attr(node, "Duration", where),
                power_low=_float_attr(node, "Power", where),
                label="Steady",
                cadence_rpm=cadence,
            )
        ]

    if tag == "intervalst":
        repeat = _duration_attr(node, "Repeat", where)
        on_duration = _duration_attr(node, "OnDuration", where)
        off_duration = _duration_attr(node, "OffDuration", where)
        on_power = _float_attr(node, "OnPower", where)
        off_power = _float_attr(node, "OffPower", where)
        on_cadence = _optional_int_attr(node, "CadenceResting", where)
        out: list[WorkoutStep] = []
        for rep in range(repeat):
            out.append(
                WorkoutStep(
                    duration_sec=on_duration,
                    power_low=on_power,
                    label=f"ON {rep + 1}",
                    cadence_rpm=cadence,
                )
            )
            out.append(
                WorkoutStep(
                    duration_sec=off_duration,
                    power_low=off_power,
                    label=f"OFF {rep + 1}",
                    cadence_rpm=on_cadence,
                )
            )
        return out

    if tag in ("freeride", "maxeffort"):
        slope = _attr(node, "Slope")
        return [
            WorkoutStep(
                duration_sec=_duration_attr(node, "Duration", where),
                power_low=None,
                label="Free Ride" if tag == "freeride" else "Max Effort",
                cadence_rpm=cadence,
                slope_pct=_to_float(slope, "Slope", where) if slope is not None else None,
            )
        ]

    raise WorkoutParseError(f"{where}: unsupported workout element")


def parse_json(document: str, fallback_name: str = "Workout") -> WorkoutPlan:
    try:
        data = json.loads(document)
    except json.JSONDecodeError as exc:
        raise WorkoutParseError(f"Invalid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise WorkoutParseError("Workout JSON must be an object")

    name_obj = data.get("name", fallback_name)
    if not isinstance(name_obj, str):
        raise WorkoutParseError("Workout field 'name' must be a string")

    steps_obj = data.get("steps")
    if not isinstance(steps_obj, list):
        raise WorkoutParseError("Workout field 'steps' must be an array")

    steps: list[WorkoutStep] = []
    for i, raw in enumerate(steps_obj):
        if not isinstance(raw, dict):
            raise WorkoutParseError(f"Step {i + 1}: must be an object")
        steps.append(
            _build_step(
                duration_obj=raw.get("duration_sec"),
                power_obj=raw.get("power", raw.get("power_low")),
                power_high_obj=raw.get("power_high"),
                label_obj=raw.get("label"),
                cadence_obj=raw.get("cadence_rpm"),
                index=i,
            )
        )

    author = data.get("author")
    description = data.get("description")
    return _build_plan(
        name=name_obj.strip() or fallback_name,
        steps=steps,
        author=str(author) if author else None,
        description=str(description) if description else None,
    )


def parse_csv(document: str, name: str = "Workout") -> WorkoutPlan:
    rows: list[WorkoutStep] = []
    reader = csv.DictReader(io.StringIO(document))
    fields = set(reader.fieldnames or [])
    required = {"duration_sec", "power"}
    if not required.issubset(fields):
        raise WorkoutParseError(
            "CSV must contain headers: duration_sec,power[,power_high,label,cadence_rpm]"
        )

    for i, row in enumerate(reader):
        rows.append(
            _build_step(
                duration_obj=row.get("duration_sec"),
                power_obj=row.get("power"),
                power_high_obj=row.get("power_high"),
                label_obj=row.get("label"),
                cadence_obj=row.get("cadence_rpm"),
                index=i,
            )
        )

    return _build_plan(name=name, steps=rows)


def _build_step(
    *,
    duration_obj: object,
    power_obj: object,
    power_high_obj: object,
    label_obj: object,
    cadence_obj: object,
    index: int,
) -> WorkoutStep:
    where = f"Step {index + 1}"
    duration_sec = _to_int(duration_obj, "duration_sec", where)
    if duration_sec <= 0:
        raise WorkoutParseError(f"{where}: duration_sec must be > 0")

    power_low = _to_float(power_obj, "power", where)
    power_high = power_low if _blank(power_high_obj) else _to_float(power_high_obj, "power_high", where)
    if power_low < 0 or power_high < 0:
        raise WorkoutParseError(f"{where}: power must be >= 0")

    label: str | None
    if label_obj is None:
        label = None
    else:
        label = str(label_obj).strip() or None

    cadence_rpm = None if _blank(cadence_obj) else _to_int(cadence_obj, "cadence_rpm", where)
    if cadence_rpm is not None and cadence_rpm <= 0:
        raise WorkoutParseError(f"{where}: cadence_rpm must be > 0")

    return WorkoutStep(
        duration_sec=duration_sec,
        power_low=power_low,
        power_high=power_high,
        label=label,
        cadence_rpm=cadence_rpm,
    )


def _build_plan(
    *,
    name: str,
    steps: list[WorkoutStep],
    author: str | None = None,
    description: str | None = None,
) -> WorkoutPlan:
    if not steps:
        raise WorkoutParseError("Workout must contain at least one step")
    return WorkoutPlan(name=name, steps=tuple(steps), author=author, description=description)


def _attr(node: ET.Element, name: str) -> str | None:
    for key in (name, name.lower(), name.upper()):
        if key in node.attrib:
            return node.attrib[key]
    return None


def _float_attr(node: ET.Element, name: str, where: str) -> float:
    raw = _attr(node, name)
    if raw is None:
        raise WorkoutParseError(f"{where}: missing {name}")
    value = _to_float(raw, name, where)
    if value < 0:
        raise WorkoutParseError(f"{where}: {name} must be >= 0")
    return value


def _duration_attr(node: ET.Element, name: str, where: str) -> int:
    raw = _attr(node, name)
    if raw is None:
        raise WorkoutParseError(f"{where}: missing {name}")
    value = _to_int(raw, name, where)
    if value <= 0:
        raise WorkoutParseError(f"{where}: {name} must be > 0")
    return value


def _optional_int_attr(node: ET.Element, name: str, where: str) -> int | None:
    raw = _attr(node, name)
    if raw is None or raw.strip() == "":
        return None
    return _to_int(raw, name, where)


def _blank(raw: object) -> bool:
    return raw is None or (isinstance(raw, str) and raw.strip() == "")


def _to_int(raw: object, field_name: str, where: str) -> int:
    return int(_to_float(raw, field_name, where))


def _to_float(raw: object, field_name: str, where: str) -> float:
    if raw is None or isinstance(raw, bool):
        raise WorkoutParseError(f"{where}: invalid {field_name}")
    try:
        value = float(str(raw).strip())
    except ValueError as exc:
        raise WorkoutParseError(f"{where}: invalid {field_name}") from exc
    if not math.isfinite(value):
        raise WorkoutParseError(f"{where}: invalid {field_name}")
    return value
