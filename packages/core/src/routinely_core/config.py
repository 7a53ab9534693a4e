"""Configuration utilities.

Settings are read from the environment, optionally seeded from
``config/env/.env.backend`` at the repository root.
"""
from dataclasses import dataclass, field
from typing import Optional, List
import os, sys
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from dotenv import load_dotenv  # type: ignore

# ---- Helpers ----

def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    val = os.getenv(name)
    return val if val not in (None, "") else default


def _env_flag(name: str, default: bool) -> bool:
    val = _env(name)
    if val is None:
        return default
    return val.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    val = _env(name)
    try:
        return int(val) if val is not None else default
    except ValueError:
        return default


def parse_origins(value: Optional[str]) -> List[str]:
    if not value:
        return []
    if value.strip() == "*":
        return ["*"]
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@dataclass
class Settings:
    database_url: Optional[str] = field(default_factory=lambda: _env("ROUTINELY_DB_URL") or _env("ROUTINELY_DATABASE_URL"))
    secret_key: Optional[str] = field(default_factory=lambda: _env("SECRET_KEY"))
    token_expire_hours: int = field(default_factory=lambda: _env_int("ACCESS_TOKEN_EXPIRE_HOURS", 12))
    allow_signup: bool = field(default_factory=lambda: _env_flag("ROUTINELY_ALLOW_SIGNUP", True))
    timezone: Optional[str] = field(default_factory=lambda: _env("ROUTINELY_TIMEZONE"))
    cors_origins: str = field(default_factory=lambda: _env("CORS_ORIGINS", "*"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))

    def _bundle_base(self) -> Optional[str]:
        base = getattr(sys, "_MEIPASS", None)
        if base and os.path.isdir(base):
            return base
        return None

    def repo_root(self) -> str:
        base = self._bundle_base()
        if base:  # Frozen bundle base (PyInstaller, etc.)
            return base
        # Walk upward from this file looking for project markers
        cur = os.path.abspath(os.path.dirname(__file__))
        markers = ("pyproject.toml", ".git")
        for _ in range(8):
            if any(os.path.exists(os.path.join(cur, m)) for m in markers):
                return cur
            parent = os.path.dirname(cur)
            if parent == cur:
                break
            cur = parent
        # Fallback: 4 levels up from packages/core/src/routinely_core
        return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../../../"))

    def load_backend_env(self) -> None:
        """Load canonical backend env file if present (idempotent)."""
        env_file = Path(self.repo_root()) / "config" / "env" / ".env.backend"
        if env_file.exists():
            load_dotenv(env_file, override=False)

    def resolve_path(self, p: Optional[str]) -> Optional[str]:
        if not p:
            return None
        if os.path.isabs(p):
            return p
        return os.path.abspath(os.path.join(self.repo_root(), p))

    def data_dir(self) -> str:
        return self.resolve_path("data") or "data"

    def effective_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return f"sqlite:///{os.path.join(self.data_dir(), 'routinely.db')}"

    def cors_origin_list(self) -> List[str]:
        return parse_origins(self.cors_origins)

    def tzinfo(self) -> Optional[ZoneInfo]:
        """Zone used to read actual instants as wall-clock times, if configured.

        Without it, aware instants keep their own offset's clock; completions
        are stored offset-free so SQLite and PostgreSQL agree.
        """
        if not self.timezone:
            return None
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            return None


__all__ = ["Settings", "parse_origins"]
