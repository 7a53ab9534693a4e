from datetime import date, datetime

from routinely_core.models import Routine, TaskCompletion, User
from routinely_core.performance import (
    build_weekly_performance,
    completion_percentage,
    time_stats,
    weekly_performance,
    working_week,
)

MONDAY = date(2025, 1, 6)


def test_working_week_is_monday_to_friday():
    week = working_week(date(2025, 1, 8))  # Wednesday
    assert week == [date(2025, 1, d) for d in range(6, 11)]


def test_weekend_maps_to_preceding_monday():
    assert working_week(date(2025, 1, 11))[0] == MONDAY  # Saturday
    assert working_week(date(2025, 1, 12))[0] == MONDAY  # Sunday
    assert working_week(MONDAY)[0] == MONDAY


def test_zero_routines_yield_zero_everywhere():
    result = build_weekly_performance(MONDAY, 0, {MONDAY: 3})
    assert [d.completion_percentage for d in result.weekly_data] == [0, 0, 0, 0, 0]
    assert result.weekly_average == 0


def test_daily_percentage_and_average():
    completed = {date(2025, 1, 6): 1, date(2025, 1, 7): 2, date(2025, 1, 8): 3}
    result = build_weekly_performance(date(2025, 1, 9), 3, completed)
    assert [d.completion_percentage for d in result.weekly_data] == [33, 67, 100, 0, 0]
    assert result.weekly_average == 40
    assert [d.day for d in result.weekly_data] == ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]


def test_completion_percentage_rounds_half_up():
    assert completion_percentage(1, 8) == 13
    assert completion_percentage(0, 5) == 0
    assert completion_percentage(4, 0) == 0


def _seed(db_session, routines=3):
    user = User(username="perf", password_hash="x")
    db_session.add(user)
    db_session.commit()
    items = [
        Routine(user_id=user.id, task_name=f"Task {i}", start_time="8:00 AM", end_time="9:00 AM")
        for i in range(routines)
    ]
    db_session.add_all(items)
    db_session.commit()
    return user, items


def test_weekly_performance_counts_completed_only(db_session):
    user, items = _seed(db_session, routines=4)
    db_session.add_all([
        TaskCompletion(user_id=user.id, routine_id=items[0].id, date=MONDAY, completed=True),
        TaskCompletion(user_id=user.id, routine_id=items[1].id, date=MONDAY, completed=True),
        TaskCompletion(user_id=user.id, routine_id=items[2].id, date=MONDAY, completed=False),
        TaskCompletion(user_id=user.id, routine_id=items[0].id, date=date(2025, 1, 10), completed=True),
        # Saturday is outside the working week
        TaskCompletion(user_id=user.id, routine_id=items[0].id, date=date(2025, 1, 11), completed=True),
    ])
    db_session.commit()
    result = weekly_performance(db_session, user.id, date(2025, 1, 8))
    assert [d.completion_percentage for d in result.weekly_data] == [50, 0, 0, 0, 25]
    assert result.weekly_average == 15


def test_weekly_performance_without_routines(db_session):
    user, _ = _seed(db_session, routines=0)
    result = weekly_performance(db_session, user.id, MONDAY)
    assert result.weekly_average == 0
    assert all(d.completion_percentage == 0 for d in result.weekly_data)


def test_time_stats_over_trailing_window(db_session):
    user, items = _seed(db_session, routines=3)
    db_session.add_all([
        TaskCompletion(
            user_id=user.id, routine_id=items[0].id, date=MONDAY, completed=True,
            actual_start_time=datetime(2025, 1, 6, 8, 5), actual_end_time=datetime(2025, 1, 6, 9, 0),
        ),
        TaskCompletion(
            user_id=user.id, routine_id=items[1].id, date=MONDAY, completed=True,
            actual_start_time=datetime(2025, 1, 6, 8, 30), actual_end_time=datetime(2025, 1, 6, 9, 0),
        ),
        # No end time: not classified
        TaskCompletion(
            user_id=user.id, routine_id=items[2].id, date=MONDAY, completed=True,
            actual_start_time=datetime(2025, 1, 6, 8, 0),
        ),
        # Outside a one-week window ending on the 8th
        TaskCompletion(
            user_id=user.id, routine_id=items[0].id, date=date(2024, 12, 20), completed=True,
            actual_start_time=datetime(2024, 12, 20, 8, 0), actual_end_time=datetime(2024, 12, 20, 9, 0),
        ),
    ])
    db_session.commit()
    stats = time_stats(db_session, user.id, date(2025, 1, 8), 7)
    assert stats.on_time_count == 1
    assert stats.late_count == 1
    assert stats.total_completed_count == 2
    assert stats.on_time_percentage == 50
