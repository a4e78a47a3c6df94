"""Terminal CLI entrypoint for inspecting and adjusting Velox models."""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Any

from loguru import logger

from velox_core.core.config import Settings
from velox_core.core.enums import EnumModel
from velox_core.core.logger import setup_logger
from velox_core.core.numeric import SteppedTargetModel
from velox_core.core.registry import MODEL_NAMES, ModelRegistry, build_registry
from velox_core.workout.library import list_workouts
from velox_core.workout.model import WorkoutPlan
from velox_core.workout.parser import WorkoutParseError, load_workout


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Velox value models")
    parser.add_argument("--show", action="store_true", help="Print every model value")
    parser.add_argument(
        "--set",
        nargs=2,
        metavar=("NAME", "VALUE"),
        help="Validate and set a model value (persisted models are backed up)",
    )
    parser.add_argument("--inc", metavar="NAME", help="Step a target model up")
    parser.add_argument("--dec", metavar="NAME", help="Step a target model down")
    parser.add_argument(
        "--at",
        metavar="VALUE",
        help="Current value for --inc/--dec (targets are not persisted, default is the model default)",
    )
    parser.add_argument("--switch", metavar="NAME", help="Toggle a two-valued setting")
    parser.add_argument("--workout", metavar="PATH", help="Parse a .zwo/.json/.csv workout")
    parser.add_argument(
        "--list-workouts",
        action="store_true",
        help="List the built-in workouts",
    )
    parser.add_argument(
        "--storage",
        choices=("json", "sqlite", "memory"),
        default=None,
        help="Persistence backend (default from VELOX_STORAGE or json)",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default INFO)")
    return parser


def coerce_cli_value(raw: str) -> Any:
    for cast in (int, float):
        try:
            return cast(raw)
        except ValueError:
            continue
    return raw


def format_workout(plan: WorkoutPlan) -> str:
    minutes = plan.total_duration_sec / 60
    lines = [f"{plan.name} - {len(plan.steps)} steps, {minutes:.0f} min"]
    for step in plan.steps:
        if step.is_free_ride:
            power = "free"
        elif step.is_ramp:
            power = f"{step.power_low:.0%} -> {step.power_high:.0%}"
        else:
            power = f"{step.power_low:.0%}"
        label = step.label or "-"
        lines.append(f"  {label:<12} {step.duration_sec:>5}s  {power}")
    return "\n".join(lines)


def _print_models(registry: ModelRegistry) -> None:
    for name, value in registry.snapshot().items():
        print(f"{name:<18} {value}")
    print(f"{'workout':<18} {registry.workout.value.name}")


def _accepts(model: Any, candidate: Any) -> bool:
    if isinstance(model, SteppedTargetModel):
        try:
            model.parse(candidate)
        except ValueError:
            return False
        return True
    return model.is_valid(candidate)


def _require(registry: ModelRegistry, name: str) -> Any:
    if name not in registry:
        raise SystemExit(f"Unknown model '{name}'. Known: {', '.join(MODEL_NAMES)}")
    return registry[name]


def run(args: argparse.Namespace, registry: ModelRegistry) -> int:
    registry.restore_all()

    if args.list_workouts:
        for item in list_workouts():
            plan = item.parse()
            print(f"{item.key:<18} {item.category:<10} {plan.name}")
        return 0

    if args.workout:
        try:
            plan = load_workout(args.workout)
        except (WorkoutParseError, OSError) as exc:
            logger.error(f"Could not load workout {args.workout}: {exc}")
            return 1
        registry.workout.set(plan)
        print(format_workout(plan))
        return 0

    if args.set:
        name, raw = args.set
        model = _require(registry, name)
        candidate = coerce_cli_value(raw)
        value = model.set(candidate)
        print(f"{name} = {value}")
        if not _accepts(model, candidate):
            logger.error(f"Rejected {name}={raw!r}; stored value left unchanged")
            return 1
        if model.persisted:
            model.backup(value)
        return 0

    for op in ("inc", "dec"):
        name = getattr(args, op)
        if name:
            model = _require(registry, name)
            if not isinstance(model, SteppedTargetModel):
                raise SystemExit(f"'{name}' is not a target model")
            current = model.set(coerce_cli_value(args.at)) if args.at is not None else model.value
            print(f"{name} = {getattr(model, op)(current)}")
            return 0

    if args.switch:
        model = _require(registry, args.switch)
        if not isinstance(model, EnumModel) or not model.is_binary:
            raise SystemExit(f"'{args.switch}' cannot be switched")
        value = model.switch(model.value)
        if model.persisted:
            model.backup(value)
        print(f"{args.switch} = {value}")
        return 0

    if args.show:
        _print_models(registry)
        return 0

    return -1


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    if args.storage:
        settings = replace(settings, storage_backend=args.storage)
    setup_logger(level=(args.log_level or settings.log_level).upper())

    code = run(args, build_registry(settings=settings))
    if code < 0:
        parser.print_help()
        return 1
    return code


if __name__ == "__main__":
    raise SystemExit(main())
