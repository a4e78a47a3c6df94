"""Workout domain models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WorkoutStep:
    duration_sec: int
    power_low: float | None
    power_high: float | None = None
    label: str | None = None
    cadence_rpm: int | None = None
    slope_pct: float | None = None

    def __post_init__(self) -> None:
        if self.power_high is None and self.power_low is not None:
            object.__setattr__(self, "power_high", self.power_low)

    @property
    def is_ramp(self) -> bool:
        return self.power_low is not None and self.power_low != self.power_high

    @property
    def is_free_ride(self) -> bool:
        return self.power_low is None

    def target_watts(self, ftp_watts: int, elapsed_sec: float = 0.0) -> int | None:
        """Target power at ``elapsed_sec`` into the step, linear for ramps."""
        if self.power_low is None or self.power_high is None:
            return None
        frac = min(max(elapsed_sec / self.duration_sec, 0.0), 1.0)
        pct = self.power_low + (self.power_high - self.power_low) * frac
        return int(round(ftp_watts * pct))


@dataclass(frozen=True)
class WorkoutPlan:
    name: str
    steps: tuple[WorkoutStep, ...]
    author: str | None = None
    description: str | None = None

    @property
    def total_duration_sec(self) -> int:
        return sum(step.duration_sec for step in self.steps)
