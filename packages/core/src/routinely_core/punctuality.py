"""Punctuality evaluation for routine tasks.

A routine stores its scheduled start/end as 12-hour clock strings such as
``"8:00 AM"``; a completion stores the actual start/end as instants. A time
is *on time* when it lands within ``GRACE_WINDOW_MINUTES`` of the scheduled
clock time on the same calendar day as the actual instant, in either
direction. A task is on time overall only when both its start and its end
are.

Minute differences are rounded half-up on their magnitude and then signed
(``10.5`` late becomes ``11``, ``10.5`` early becomes ``-11``), so a
difference of exactly ten minutes is on time and eleven is late. The reported
delta and the verdict always come from the same rounded value.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import datetime, time, tzinfo
from typing import Iterable, Optional

GRACE_WINDOW_MINUTES = 10

_CLOCK_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*([AaPp][Mm])\s*$")


@dataclass(frozen=True)
class Punctuality:
    start_delta: Optional[int] = None
    end_delta: Optional[int] = None
    start_on_time: Optional[bool] = None
    end_on_time: Optional[bool] = None
    on_time: Optional[bool] = None


@dataclass(frozen=True)
class TimeStats:
    on_time_count: int = 0
    late_count: int = 0
    total_completed_count: int = 0
    on_time_percentage: int = 0


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def parse_scheduled_time(text: str) -> time:
    """Parse ``"h:mm AM/PM"`` into a ``time``.

    ``12:xx AM`` is just after midnight and ``12:xx PM`` just after noon.
    Raises ``ValueError`` for anything else.
    """
    match = _CLOCK_RE.match(text or "")
    if not match:
        raise ValueError(f"not a 12-hour clock time: {text!r}")
    hour, minute, meridiem = int(match.group(1)), int(match.group(2)), match.group(3).upper()
    if not 1 <= hour <= 12 or not 0 <= minute <= 59:
        raise ValueError(f"clock time out of range: {text!r}")
    if meridiem == "AM":
        hour = 0 if hour == 12 else hour
    else:
        hour = hour if hour == 12 else hour + 12
    return time(hour, minute)


def scheduled_minutes(text: str) -> Optional[int]:
    """Minutes after midnight for a scheduled time, or None if malformed."""
    try:
        t = parse_scheduled_time(text)
    except ValueError:
        return None
    return t.hour * 60 + t.minute


def _wall_clock(actual: datetime, tz: Optional[tzinfo]) -> datetime:
    if tz is not None and actual.tzinfo is not None:
        actual = actual.astimezone(tz)
    return actual.replace(tzinfo=None)


def _minutes_from_schedule(scheduled: str, actual: datetime, tz: Optional[tzinfo]) -> int:
    clock = _wall_clock(actual, tz)
    scheduled_at = datetime.combine(clock.date(), parse_scheduled_time(scheduled))
    seconds = (clock - scheduled_at).total_seconds()
    minutes = round_half_up(abs(seconds) / 60)
    return -minutes if seconds < 0 else minutes


def minutes_from_schedule(scheduled: str, actual: Optional[datetime], tz: Optional[tzinfo] = None) -> Optional[int]:
    """Signed minutes between ``actual`` and the scheduled time that day.

    Positive means late, negative early. Returns None when there is no
    actual time or the scheduled string cannot be parsed.
    """
    if actual is None:
        return None
    try:
        return _minutes_from_schedule(scheduled, actual, tz)
    except ValueError:
        return None


def is_on_time(scheduled: str, actual: Optional[datetime], tz: Optional[tzinfo] = None) -> Optional[bool]:
    """Whether ``actual`` falls inside the grace window around ``scheduled``.

    None when there is no actual time; False when ``scheduled`` is malformed.
    """
    if actual is None:
        return None
    try:
        minutes = _minutes_from_schedule(scheduled, actual, tz)
    except ValueError:
        return False
    return abs(minutes) <= GRACE_WINDOW_MINUTES


def evaluate(routine, completion, tz: Optional[tzinfo] = None) -> Punctuality:
    """Evaluate a completion against its routine's schedule.

    ``routine`` needs ``start_time``/``end_time``; ``completion`` needs
    ``actual_start_time``/``actual_end_time``. The overall verdict is None
    unless both actual times are recorded.
    """
    actual_start = getattr(completion, "actual_start_time", None)
    actual_end = getattr(completion, "actual_end_time", None)
    start_on_time = is_on_time(routine.start_time, actual_start, tz)
    end_on_time = is_on_time(routine.end_time, actual_end, tz)
    on_time: Optional[bool] = None
    if start_on_time is not None and end_on_time is not None:
        on_time = start_on_time and end_on_time
    return Punctuality(
        start_delta=minutes_from_schedule(routine.start_time, actual_start, tz),
        end_delta=minutes_from_schedule(routine.end_time, actual_end, tz),
        start_on_time=start_on_time,
        end_on_time=end_on_time,
        on_time=on_time,
    )


def summarize(results: Iterable[Punctuality]) -> TimeStats:
    """Count on-time vs. late among results that have a verdict."""
    on_time = late = 0
    for result in results:
        if result.on_time is None:
            continue
        if result.on_time:
            on_time += 1
        else:
            late += 1
    total = on_time + late
    percentage = round_half_up(on_time / total * 100) if total else 0
    return TimeStats(
        on_time_count=on_time,
        late_count=late,
        total_completed_count=total,
        on_time_percentage=percentage,
    )


def describe_delta(minutes: Optional[int]) -> Optional[str]:
    if minutes is None:
        return None
    if minutes == 0:
        return "On time"
    if minutes > 0:
        return f"{minutes} minutes late"
    return f"{abs(minutes)} minutes early"


__all__ = [
    "GRACE_WINDOW_MINUTES",
    "Punctuality",
    "TimeStats",
    "round_half_up",
    "parse_scheduled_time",
    "scheduled_minutes",
    "minutes_from_schedule",
    "is_on_time",
    "evaluate",
    "summarize",
    "describe_delta",
]
