from fastapi import APIRouter, Depends, HTTPException
import logging
from typing import List
from sqlalchemy.orm import Session
from routinely_core.auth import get_current_user, get_db
from routinely_core.models import Routine, User
from routinely_core.routines import get_owned_routine, list_routines as list_user_routines, reset_to_default
from ..schemas import RoutineCreateRequest, RoutineOut, RoutineUpdateRequest

router = APIRouter(prefix="/routines", tags=["routines"])
log = logging.getLogger("routinely_api")


@router.get("/", response_model=List[RoutineOut])
def list_routines(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    items = list_user_routines(db, user)
    log.info("routine.list count=%d actor=%s", len(items), user.username)
    return items

@router.post("/", response_model=RoutineOut)
def create_routine(data: RoutineCreateRequest, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    routine = Routine(
        user_id=user.id,
        task_name=data.task_name,
        start_time=data.start_time,
        end_time=data.end_time,
    )
    db.add(routine)
    db.commit()
    db.refresh(routine)
    log.info("routine.create id=%s actor=%s", routine.id, user.username)
    return routine

@router.post("/reset", response_model=List[RoutineOut])
def reset_routines(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return reset_to_default(db, user)

@router.get("/{routine_id}", response_model=RoutineOut)
def read_routine(routine_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_owned_routine(db, routine_id, user)

@router.put("/{routine_id}", response_model=RoutineOut)
def update_routine(routine_id: int, update: RoutineUpdateRequest, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    routine = get_owned_routine(db, routine_id, user, action="update")
    data = update.model_dump(exclude_unset=True)
    if any(value is None for value in data.values()):
        log.warning("routine.update missing_fields id=%s actor=%s", routine_id, user.username)
        raise HTTPException(status_code=400, detail="Missing required fields")
    for key, value in data.items():
        setattr(routine, key, value)
    db.commit()
    db.refresh(routine)
    log.info("routine.update ok id=%s actor=%s", routine.id, user.username)
    return routine

@router.delete("/{routine_id}")
def delete_routine(routine_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    routine = get_owned_routine(db, routine_id, user, action="delete")
    db.delete(routine)
    db.commit()
    log.info("routine.delete ok id=%s actor=%s", routine_id, user.username)
    return {"status": "deleted"}
