"""Central logging configuration helper."""
from __future__ import annotations
import logging
import logging.config
import os
from io import StringIO
from pathlib import Path
import re

DEFAULT_CONFIG_PATHS = [
    Path("config/logging.ini"),
    Path(__file__).resolve().parents[4] / "config" / "logging.ini",
]


class RedactionFilter(logging.Filter):
    """Mask bearer tokens and token fields before records reach a handler."""

    TOKEN_PATTERNS = [
        re.compile(r"(Authorization\s*[:=]\s*Bearer\s+)([A-Za-z0-9._~+\-=/]+)", re.IGNORECASE),
        re.compile(r"([?&])token=([^&\s]+)", re.IGNORECASE),
        re.compile(r"(\"?(?:access_)?token\"?\s*[:=]\s*\"?)([A-Za-z0-9._~+\-=/]+)(\"?)", re.IGNORECASE),
    ]

    @classmethod
    def redact(cls, s: str) -> str:
        out = cls.TOKEN_PATTERNS[0].sub(r"\1[REDACTED]", s)
        out = cls.TOKEN_PATTERNS[1].sub(r"\1token=[REDACTED]", out)
        out = cls.TOKEN_PATTERNS[2].sub(r"\1[REDACTED]\3", out)
        return out

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        # Format first then replace msg/args to avoid double format.
        if record.args:
            try:
                formatted = record.getMessage()
            except (TypeError, ValueError):
                return True
            record.msg = self.redact(formatted)
            record.args = None
        elif isinstance(record.msg, str):
            record.msg = self.redact(record.msg)
        return True


def configure_logging(level: str | None = None, config_file: str | os.PathLike[str] | None = None) -> None:
    """Configure logging using an INI template.

    If the config contains the placeholder __LOG_LEVEL__, it is replaced with
    the effective log level before passing to logging.config.fileConfig.
    """
    lvl = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    cfg_path: Path | None
    if config_file:
        cfg_path = Path(config_file)
    else:
        cfg_path = next((p for p in DEFAULT_CONFIG_PATHS if p.exists()), None)
    if not cfg_path or not cfg_path.exists():
        logging.basicConfig(level=getattr(logging, lvl, logging.INFO), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    else:
        text = cfg_path.read_text(encoding="utf-8").replace("__LOG_LEVEL__", lvl)
        # FileHandlers in the template write under logs/
        Path("logs").mkdir(exist_ok=True)
        logging.config.fileConfig(StringIO(text), disable_existing_loggers=False)

    redactor = RedactionFilter()

    # Attach to all existing handlers from root and named loggers.
    seen_handlers = set()
    def _attach(logger: logging.Logger) -> None:
        for h in logger.handlers:
            if id(h) in seen_handlers:
                continue
            if not any(isinstance(f, RedactionFilter) for f in h.filters):
                h.addFilter(redactor)
            seen_handlers.add(id(h))

    _attach(logging.getLogger())  # root
    for name in list(logging.root.manager.loggerDict.keys()):  # type: ignore[attr-defined]
        logger_obj = logging.getLogger(name)
        _attach(logger_obj)

__all__ = ["configure_logging", "RedactionFilter"]
