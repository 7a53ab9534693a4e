from fastapi import APIRouter, Depends, Query
import logging
from datetime import date as date_type, datetime
from typing import List, Optional
from sqlalchemy.orm import Session, joinedload
from routinely_core.auth import get_current_user, get_db
from routinely_core.config import Settings
from routinely_core.models import TaskCompletion, User
from routinely_core.punctuality import describe_delta, evaluate
from routinely_core.routines import get_owned_routine
from ..schemas import CompletionOut, CompletionUpsertRequest, PunctualityOut, RoutineOut

router = APIRouter(prefix="/completions", tags=["completions"])
log = logging.getLogger("routinely_api")

settings = Settings()


def _local(value: Optional[datetime]) -> Optional[datetime]:
    """Store actual instants as naive wall-clock times.

    Aware values are first moved into the configured zone; without one their
    own offset's clock is kept. Either way every backend stores the same value.
    """
    if value is None or value.tzinfo is None:
        return value
    tz = settings.tzinfo()
    if tz is not None:
        value = value.astimezone(tz)
    return value.replace(tzinfo=None)


def build_completion_out(completion: TaskCompletion) -> CompletionOut:
    routine = completion.routine
    punctuality = None
    if routine is not None:
        result = evaluate(routine, completion, settings.tzinfo())
        punctuality = PunctualityOut(
            start_delta=result.start_delta,
            end_delta=result.end_delta,
            start_label=describe_delta(result.start_delta),
            end_label=describe_delta(result.end_delta),
            start_on_time=result.start_on_time,
            end_on_time=result.end_on_time,
            on_time=result.on_time,
        )
    return CompletionOut(
        id=completion.id,
        user_id=completion.user_id,
        routine_id=completion.routine_id,
        date=completion.date,
        completed=completion.completed,
        actual_start_time=completion.actual_start_time,
        actual_end_time=completion.actual_end_time,
        created_at=completion.created_at,
        routine=RoutineOut.model_validate(routine) if routine is not None else None,
        punctuality=punctuality,
    )


@router.get("/", response_model=List[CompletionOut])
def list_completions(
    day: Optional[date_type] = Query(None, alias="date"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    day = day or date_type.today()
    items = (
        db.query(TaskCompletion)
        .options(joinedload(TaskCompletion.routine))
        .filter(TaskCompletion.user_id == user.id, TaskCompletion.date == day)
        .order_by(TaskCompletion.id.asc())
        .all()
    )
    log.info("completion.list date=%s count=%d actor=%s", day, len(items), user.username)
    return [build_completion_out(c) for c in items]

@router.post("/", response_model=CompletionOut)
def upsert_completion(data: CompletionUpsertRequest, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    routine = get_owned_routine(db, data.routine_id, user, action="complete")
    provided = data.model_dump(exclude_unset=True)

    completion = (
        db.query(TaskCompletion)
        .filter(
            TaskCompletion.routine_id == routine.id,
            TaskCompletion.user_id == user.id,
            TaskCompletion.date == data.date,
        )
        .first()
    )
    if completion is None:
        completion = TaskCompletion(routine_id=routine.id, user_id=user.id, date=data.date)
        db.add(completion)
        action = "create"
    else:
        action = "update"
    if "completed" in provided or completion.completed is None:
        completion.completed = data.completed is True
    for key in ("actual_start_time", "actual_end_time"):
        if key in provided:
            setattr(completion, key, _local(provided[key]))
    db.commit()
    db.refresh(completion)
    log.info(
        "completion.%s id=%s routine=%s date=%s completed=%s actor=%s",
        action, completion.id, routine.id, completion.date, completion.completed, user.username,
    )
    return build_completion_out(completion)
