"""Database setup.

Provides SQLAlchemy engine, session factory, and declarative base.

Defaults to an on-disk SQLite database under ``data/routinely.db`` at the
repository root, but respects an explicit environment override via
``ROUTINELY_DB_URL`` (or ``ROUTINELY_DATABASE_URL``) for testing or custom setups.
"""
from __future__ import annotations

import os
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, declarative_base
from routinely_core.config import Settings

_settings = Settings()
_settings.load_backend_env()
# Re-read after the env file may have supplied ROUTINELY_DB_URL
_settings = Settings()

DATABASE_URL = _settings.effective_database_url()

_connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    _connect_args = {"check_same_thread": False}
    _db_file = make_url(DATABASE_URL).database
    if _db_file and _db_file != ":memory:":
        os.makedirs(os.path.dirname(os.path.abspath(_db_file)), exist_ok=True)

engine = create_engine(
    DATABASE_URL,
    connect_args=_connect_args,
    pool_pre_ping=True,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

__all__ = [
    "DATABASE_URL",
    "engine",
    "SessionLocal",
    "Base",
]
