"""Routine store helpers shared by the API routers."""
from __future__ import annotations

import logging
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from routinely_core.defaults import DEFAULT_ROUTINE
from routinely_core.models import Routine, User
from routinely_core.punctuality import scheduled_minutes

logger = logging.getLogger("routinely_core.routines")

# Sorts after every valid time of day
_UNPARSEABLE = 24 * 60


def _sort_key(routine: Routine):
    minutes = scheduled_minutes(routine.start_time)
    return (_UNPARSEABLE if minutes is None else minutes, routine.id)


def list_routines(db: Session, user: User) -> List[Routine]:
    """The user's routines in order of scheduled start time of day."""
    items = db.query(Routine).filter(Routine.user_id == user.id).all()
    return sorted(items, key=_sort_key)


def get_owned_routine(db: Session, routine_id: int, user: User, action: str = "read") -> Routine:
    """Load a routine, raising 404 if missing and 401 if owned by someone else."""
    routine = db.query(Routine).filter(Routine.id == routine_id).first()
    if not routine:
        logger.warning("routine.%s not_found id=%s actor=%s", action, routine_id, user.username)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Routine not found")
    if routine.user_id != user.id:
        logger.warning("routine.%s forbidden id=%s actor=%s", action, routine_id, user.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return routine


def reset_to_default(db: Session, user: User) -> List[Routine]:
    """Replace all of the user's routines with the default template.

    Runs in the caller's session and commits once.
    """
    existing = db.query(Routine).filter(Routine.user_id == user.id).all()
    for routine in existing:
        db.delete(routine)
    db.flush()
    created = [Routine(user_id=user.id, **item) for item in DEFAULT_ROUTINE]
    db.add_all(created)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    for routine in created:
        db.refresh(routine)
    logger.info("routine.reset removed=%d created=%d actor=%s", len(existing), len(created), user.username)
    return sorted(created, key=_sort_key)


__all__ = ["list_routines", "get_owned_routine", "reset_to_default"]
