"""Request and response bodies shared by the routers.

Request bodies accept both snake_case and camelCase field names; responses
are always snake_case.
"""
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool


class RoutineCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    task_name: str = Field(alias="taskName", min_length=1)
    start_time: str = Field(alias="startTime", min_length=1)
    end_time: str = Field(alias="endTime", min_length=1)


class RoutineUpdateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    task_name: Optional[str] = Field(None, alias="taskName", min_length=1)
    start_time: Optional[str] = Field(None, alias="startTime", min_length=1)
    end_time: Optional[str] = Field(None, alias="endTime", min_length=1)


class RoutineOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    task_name: str
    start_time: str
    end_time: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ScheduleCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    routine_id: int = Field(alias="routineId")
    day_of_week: int = Field(alias="dayOfWeek")


class ScheduleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    routine_id: int
    day_of_week: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    routine: Optional[RoutineOut] = None


class CompletionUpsertRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    routine_id: int = Field(alias="routineId")
    date: date
    completed: Optional[StrictBool] = None
    actual_start_time: Optional[datetime] = Field(None, alias="actualStartTime")
    actual_end_time: Optional[datetime] = Field(None, alias="actualEndTime")


class PunctualityOut(BaseModel):
    start_delta: Optional[int] = None
    end_delta: Optional[int] = None
    start_label: Optional[str] = None
    end_label: Optional[str] = None
    start_on_time: Optional[bool] = None
    end_on_time: Optional[bool] = None
    on_time: Optional[bool] = None


class CompletionOut(BaseModel):
    id: int
    user_id: int
    routine_id: int
    date: date
    completed: bool
    actual_start_time: Optional[datetime] = None
    actual_end_time: Optional[datetime] = None
    created_at: Optional[datetime] = None
    routine: Optional[RoutineOut] = None
    punctuality: Optional[PunctualityOut] = None


class DailyCompletionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: date
    day: str
    completion_percentage: int


class WeeklyPerformanceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    weekly_data: List[DailyCompletionOut]
    weekly_average: int


class TimeStatsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    timeframe: str
    on_time_count: int
    late_count: int
    total_completed_count: int
    on_time_percentage: int


class UserCreateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserLoginRequest(BaseModel):
    username: str
    password: str


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
