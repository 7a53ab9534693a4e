from fastapi import APIRouter, Depends, HTTPException
import logging
from typing import List, Optional
from sqlalchemy.orm import Session, joinedload
from routinely_core.auth import get_current_user, get_db
from routinely_core.models import RoutineSchedule, User
from routinely_core.routines import get_owned_routine
from ..schemas import ScheduleCreateRequest, ScheduleOut

router = APIRouter(prefix="/schedule", tags=["schedule"])
log = logging.getLogger("routinely_api")


@router.get("/", response_model=List[ScheduleOut])
def list_schedules(
    day_of_week: Optional[int] = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    query = (
        db.query(RoutineSchedule)
        .options(joinedload(RoutineSchedule.routine))
        .filter(RoutineSchedule.user_id == user.id)
    )
    if day_of_week is not None:
        query = query.filter(RoutineSchedule.day_of_week == day_of_week)
    items = query.order_by(RoutineSchedule.day_of_week.asc(), RoutineSchedule.id.asc()).all()
    log.info("schedule.list count=%d actor=%s", len(items), user.username)
    return items

@router.post("/", response_model=ScheduleOut)
def create_schedule(data: ScheduleCreateRequest, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    if not 0 <= data.day_of_week <= 6:
        log.warning("schedule.create invalid_day day=%s actor=%s", data.day_of_week, user.username)
        raise HTTPException(status_code=400, detail="Invalid day of week")
    routine = get_owned_routine(db, data.routine_id, user, action="schedule")
    existing = (
        db.query(RoutineSchedule)
        .filter(RoutineSchedule.routine_id == routine.id, RoutineSchedule.day_of_week == data.day_of_week)
        .first()
    )
    if existing:
        log.info("schedule.create exists id=%s actor=%s", existing.id, user.username)
        return existing
    schedule = RoutineSchedule(user_id=user.id, routine_id=routine.id, day_of_week=data.day_of_week)
    db.add(schedule)
    db.commit()
    db.refresh(schedule)
    log.info("schedule.create id=%s routine=%s day=%s actor=%s", schedule.id, routine.id, schedule.day_of_week, user.username)
    return schedule

@router.delete("/{schedule_id}")
def delete_schedule(schedule_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    schedule = db.query(RoutineSchedule).filter(RoutineSchedule.id == schedule_id).first()
    if not schedule:
        log.warning("schedule.delete not_found id=%s actor=%s", schedule_id, user.username)
        raise HTTPException(status_code=404, detail="Schedule not found")
    if schedule.user_id != user.id:
        log.warning("schedule.delete forbidden id=%s actor=%s", schedule_id, user.username)
        raise HTTPException(status_code=401, detail="Unauthorized")
    db.delete(schedule)
    db.commit()
    log.info("schedule.delete ok id=%s actor=%s", schedule_id, user.username)
    return {"status": "deleted"}
