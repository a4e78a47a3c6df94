"""FIT activity encoder for recorded sessions.

Builds a Garmin-compatible activity file (file id, timer events, one record
per sample, laps, session and activity summaries) from ``SessionData``.
"""

from __future__ import annotations

from datetime import datetime

from fit_tool.fit_file_builder import FitFileBuilder
from fit_tool.profile.messages.activity_message import ActivityMessage
from fit_tool.profile.messages.event_message import EventMessage
from fit_tool.profile.messages.file_id_message import FileIdMessage
from fit_tool.profile.messages.lap_message import LapMessage
from fit_tool.profile.messages.record_message import RecordMessage
from fit_tool.profile.messages.session_message import SessionMessage
from fit_tool.profile.profile_type import (
    Event,
    EventType,
    FileType,
    Manufacturer,
    Sport,
    SubSport,
)
from loguru import logger

from velox_core.workout.activity import ActivityLap, ActivityRecord, SessionData


def _ms(value: datetime) -> int:
    return int(round(value.timestamp() * 1000))


def encode_activity(session: SessionData) -> bytes:
    """Encode a recorded session into FIT activity bytes.

    Raises:
        ValueError: If the session has no records.
    """
    if not session.records:
        raise ValueError("Session has no records to encode")

    records = sorted(session.records, key=lambda r: r.timestamp)
    start = records[0].timestamp
    end = records[-1].timestamp
    laps = list(session.laps) or [
        ActivityLap(start_time=start, end_time=end, distance_m=_total_distance(records))
    ]
    elapsed = (end - start).total_seconds()

    builder = FitFileBuilder(auto_define=True, min_string_size=50)

    file_id = FileIdMessage()
    file_id.type = FileType.ACTIVITY
    file_id.manufacturer = Manufacturer.DEVELOPMENT.value
    file_id.product = 0
    file_id.serial_number = 0x12345678
    file_id.time_created = _ms(start)
    builder.add(file_id)

    start_event = EventMessage()
    start_event.event = Event.TIMER
    start_event.event_type = EventType.START
    start_event.timestamp = _ms(start)
    builder.add(start_event)

    for sample in records:
        builder.add(_record_message(sample))

    stop_event = EventMessage()
    stop_event.event = Event.TIMER
    stop_event.event_type = EventType.STOP
    stop_event.timestamp = _ms(end)
    builder.add(stop_event)

    for lap in laps:
        builder.add(_lap_message(lap, records))

    session_msg = SessionMessage()
    session_msg.timestamp = _ms(end)
    session_msg.start_time = _ms(start)
    session_msg.total_elapsed_time = elapsed
    session_msg.total_timer_time = elapsed
    session_msg.sport = Sport.CYCLING
    session_msg.sub_sport = SubSport.INDOOR_CYCLING
    session_msg.first_lap_index = 0
    session_msg.num_laps = len(laps)
    total_distance = _total_distance(records)
    if total_distance is not None:
        session_msg.total_distance = total_distance
    _apply_power_summary(session_msg, records)
    builder.add(session_msg)

    activity = ActivityMessage()
    activity.timestamp = _ms(end)
    activity.total_timer_time = elapsed
    activity.num_sessions = 1
    builder.add(activity)

    data = builder.build().to_bytes()
    logger.debug(f"Encoded FIT activity: {len(records)} records, {len(laps)} laps, {len(data)} bytes")
    return data


def _record_message(sample: ActivityRecord) -> RecordMessage:
    record = RecordMessage()
    record.timestamp = _ms(sample.timestamp)
    if sample.power_watts is not None:
        record.power = int(sample.power_watts)
    if sample.cadence_rpm is not None:
        record.cadence = int(sample.cadence_rpm)
    if sample.heart_rate_bpm is not None:
        record.heart_rate = int(sample.heart_rate_bpm)
    if sample.speed_kmh is not None:
        record.speed = float(sample.speed_kmh) / 3.6
    if sample.distance_m is not None:
        record.distance = float(sample.distance_m)
    return record


def _lap_message(lap: ActivityLap, records: list[ActivityRecord]) -> LapMessage:
    msg = LapMessage()
    msg.timestamp = _ms(lap.end_time)
    msg.start_time = _ms(lap.start_time)
    msg.total_elapsed_time = lap.elapsed_sec
    msg.total_timer_time = lap.elapsed_sec
    if lap.distance_m is not None:
        msg.total_distance = float(lap.distance_m)
    inside = [r for r in records if lap.start_time <= r.timestamp <= lap.end_time]
    _apply_power_summary(msg, inside)
    return msg


def _apply_power_summary(msg: LapMessage | SessionMessage, records: list[ActivityRecord]) -> None:
    powers = [r.power_watts for r in records if r.power_watts is not None]
    if not powers:
        return
    msg.avg_power = int(round(sum(powers) / len(powers)))
    msg.max_power = int(max(powers))


def _total_distance(records: list[ActivityRecord]) -> float | None:
    distances = [r.distance_m for r in records if r.distance_m is not None]
    if not distances:
        return None
    return float(max(distances) - min(distances))
