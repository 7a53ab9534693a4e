"""Database initialization helper for Routinely.

Creates all tables and an optional seed user.
"""
from __future__ import annotations
import logging
import os
from sqlalchemy.orm import Session
from .db import Base, engine
from .models import User
from .auth import hash_password

logger = logging.getLogger("routinely_core.init_db")

DEFAULT_ADMIN_USER = os.environ.get("ROUTINELY_ADMIN_USER", "admin")
DEFAULT_ADMIN_PASS = os.environ.get("ROUTINELY_ADMIN_PASS", "admin")


def init_db(create_admin: bool = True) -> None:
    """Create tables and optional seed records.

    Parameters
    ----------
    create_admin: bool
        If True and no users exist, create an initial user with
        environment-provided credentials (ROUTINELY_ADMIN_USER/ROUTINELY_ADMIN_PASS).
    """
    Base.metadata.create_all(bind=engine)
    if not create_admin:
        return
    with Session(engine) as session:
        user_count = session.query(User).count()
        if user_count == 0:
            admin = User(username=DEFAULT_ADMIN_USER, password_hash=hash_password(DEFAULT_ADMIN_PASS))
            session.add(admin)
            session.commit()
            logger.info("init_db.seed user=%s", DEFAULT_ADMIN_USER)

if __name__ == "__main__":  # pragma: no cover
    init_db()
