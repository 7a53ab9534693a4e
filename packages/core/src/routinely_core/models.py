"""ORM models."""
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from routinely_core.db import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True)
    username = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)


class Routine(Base):
    __tablename__ = "routines"
    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    task_name = Column(String, nullable=False)
    start_time = Column(String, nullable=False)  # e.g. "8:00 AM"
    end_time = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    schedules = relationship("RoutineSchedule", back_populates="routine", cascade="all, delete-orphan")
    completions = relationship("TaskCompletion", back_populates="routine", cascade="all, delete-orphan")


class RoutineSchedule(Base):
    __tablename__ = "routine_schedules"
    __table_args__ = (
        UniqueConstraint("routine_id", "day_of_week", name="uq_routine_schedule_day"),
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_routine_schedule_day"),
    )
    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    routine_id = Column(Integer, ForeignKey("routines.id", ondelete="CASCADE"), nullable=False)
    day_of_week = Column(Integer, nullable=False)  # 0 = Sunday ... 6 = Saturday
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    routine = relationship("Routine", back_populates="schedules")


class TaskCompletion(Base):
    __tablename__ = "task_completions"
    __table_args__ = (
        UniqueConstraint("routine_id", "user_id", "date", name="uq_task_completion_day"),
    )
    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    routine_id = Column(Integer, ForeignKey("routines.id", ondelete="CASCADE"), nullable=False)
    date = Column(Date, nullable=False, index=True)
    completed = Column(Boolean, nullable=False, default=False)
    actual_start_time = Column(DateTime(timezone=True), nullable=True)
    actual_end_time = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)

    routine = relationship("Routine", back_populates="completions")

__all__ = ["User", "Routine", "RoutineSchedule", "TaskCompletion"]
