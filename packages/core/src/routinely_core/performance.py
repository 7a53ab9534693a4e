"""Weekly completion performance.

The working week is Monday through Friday of the week containing a date.
Each weekday's percentage is completed tasks over total routines; the
weekly average is the mean of the five percentages. Both round half-up.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta, tzinfo
from typing import List, Mapping, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from routinely_core.models import Routine, TaskCompletion
from routinely_core.punctuality import TimeStats, evaluate, round_half_up, summarize

logger = logging.getLogger("routinely_core.performance")

WORKING_DAYS = 5


@dataclass(frozen=True)
class DailyCompletion:
    date: date
    day: str
    completion_percentage: int


@dataclass(frozen=True)
class WeeklyPerformance:
    weekly_data: List[DailyCompletion] = field(default_factory=list)
    weekly_average: int = 0


def working_week(day: date) -> List[date]:
    monday = day - timedelta(days=day.weekday())
    return [monday + timedelta(days=i) for i in range(WORKING_DAYS)]


def completion_percentage(completed: int, total: int) -> int:
    if total <= 0:
        return 0
    return round_half_up(completed / total * 100)


def build_weekly_performance(day: date, total_routines: int, completed_by_date: Mapping[date, int]) -> WeeklyPerformance:
    days = working_week(day)
    weekly_data = [
        DailyCompletion(
            date=d,
            day=d.strftime("%A"),
            completion_percentage=completion_percentage(completed_by_date.get(d, 0), total_routines),
        )
        for d in days
    ]
    average = round_half_up(sum(d.completion_percentage for d in weekly_data) / len(weekly_data))
    return WeeklyPerformance(weekly_data=weekly_data, weekly_average=average)


def weekly_performance(db: Session, user_id: int, day: date) -> WeeklyPerformance:
    total = db.query(func.count(Routine.id)).filter(Routine.user_id == user_id).scalar() or 0
    days = working_week(day)
    completed_by_date = {}
    if total:
        rows = (
            db.query(TaskCompletion.date, func.count(TaskCompletion.id))
            .filter(
                TaskCompletion.user_id == user_id,
                TaskCompletion.completed.is_(True),
                TaskCompletion.date >= days[0],
                TaskCompletion.date <= days[-1],
            )
            .group_by(TaskCompletion.date)
            .all()
        )
        completed_by_date = {d: count for d, count in rows}
    result = build_weekly_performance(day, total, completed_by_date)
    logger.debug("performance.week user=%s start=%s routines=%d average=%d", user_id, days[0], total, result.weekly_average)
    return result


def time_stats(db: Session, user_id: int, end: date, days: int, tz: Optional[tzinfo] = None) -> TimeStats:
    """On-time summary for completed tasks from ``end - days`` through ``end``."""
    start = end - timedelta(days=days)
    completions = (
        db.query(TaskCompletion)
        .options(joinedload(TaskCompletion.routine))
        .filter(
            TaskCompletion.user_id == user_id,
            TaskCompletion.completed.is_(True),
            TaskCompletion.date >= start,
            TaskCompletion.date <= end,
        )
        .all()
    )
    return summarize(evaluate(c.routine, c, tz) for c in completions if c.routine is not None)


__all__ = [
    "DailyCompletion",
    "WeeklyPerformance",
    "working_week",
    "completion_percentage",
    "build_weekly_performance",
    "weekly_performance",
    "time_stats",
]
