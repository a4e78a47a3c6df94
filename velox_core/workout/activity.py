"""Recorded session samples and laps handed to the activity encoder."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ActivityRecord:
    timestamp: datetime
    power_watts: int | None = None
    cadence_rpm: int | None = None
    speed_kmh: float | None = None
    heart_rate_bpm: int | None = None
    distance_m: float | None = None


@dataclass(frozen=True)
class ActivityLap:
    start_time: datetime
    end_time: datetime
    distance_m: float | None = None

    @property
    def elapsed_sec(self) -> float:
        return (self.end_time - self.start_time).total_seconds()


@dataclass
class SessionData:
    records: list[ActivityRecord] = field(default_factory=list)
    laps: list[ActivityLap] = field(default_factory=list)

    def add_record(self, record: ActivityRecord) -> None:
        self.records.append(record)

    def close_lap(self, end_time: datetime) -> ActivityLap:
        """Close a lap running from the previous lap end (or first record) to ``end_time``."""
        if self.laps:
            start = self.laps[-1].end_time
        elif self.records:
            start = self.records[0].timestamp
        else:
            raise ValueError("Cannot close a lap before any record was added")
        distance = _distance_between(self.records, start, end_time)
        lap = ActivityLap(start_time=start, end_time=end_time, distance_m=distance)
        self.laps.append(lap)
        return lap

    @property
    def start_time(self) -> datetime | None:
        return self.records[0].timestamp if self.records else None

    @property
    def end_time(self) -> datetime | None:
        return self.records[-1].timestamp if self.records else None


def _distance_between(
    records: list[ActivityRecord], start: datetime, end: datetime
) -> float | None:
    inside = [
        r.distance_m
        for r in records
        if r.distance_m is not None and start <= r.timestamp <= end
    ]
    if not inside:
        return None
    return max(inside) - min(inside)
