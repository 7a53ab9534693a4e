from fastapi import APIRouter, Depends, HTTPException, Query
import logging
from datetime import date as date_type
from typing import Optional
from sqlalchemy.orm import Session
from routinely_core.auth import get_current_user, get_db
from routinely_core.config import Settings
from routinely_core.models import User
from routinely_core.performance import time_stats, weekly_performance
from ..schemas import TimeStatsOut, WeeklyPerformanceOut

router = APIRouter(prefix="/performance", tags=["performance"])
log = logging.getLogger("routinely_api")

settings = Settings()

TIMEFRAME_DAYS = {"week": 7, "month": 30}


@router.get("/", response_model=WeeklyPerformanceOut)
def get_weekly_performance(
    day: Optional[date_type] = Query(None, alias="date"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    day = day or date_type.today()
    result = weekly_performance(db, user.id, day)
    log.info("performance.week date=%s average=%d actor=%s", day, result.weekly_average, user.username)
    return result

@router.get("/time-stats", response_model=TimeStatsOut)
def get_time_stats(
    timeframe: str = "week",
    day: Optional[date_type] = Query(None, alias="date"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if timeframe not in TIMEFRAME_DAYS:
        raise HTTPException(status_code=400, detail="timeframe must be 'week' or 'month'")
    day = day or date_type.today()
    stats = time_stats(db, user.id, day, TIMEFRAME_DAYS[timeframe], settings.tzinfo())
    log.info("performance.time_stats timeframe=%s on_time=%d/%d actor=%s", timeframe, stats.on_time_count, stats.total_completed_count, user.username)
    return TimeStatsOut(
        timeframe=timeframe,
        on_time_count=stats.on_time_count,
        late_count=stats.late_count,
        total_completed_count=stats.total_completed_count,
        on_time_percentage=stats.on_time_percentage,
    )
