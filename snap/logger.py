"""Project logger.

Everything logs under ``snap``; modules take a child via ``get_logger("jobs")``.
Output goes to stderr only. ``SNAP_LOG_LEVEL`` and ``SNAP_LOG_CATS`` are read
again on every ``setup_logger()`` call, so CLI parsing that happens after the
first import still takes effect.
"""

import logging
import os
import sys

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

_FORMAT = "[%(asctime)s] %(levelname)s: %(message)s"
_DATEFMT = "%H:%M:%S"
_OWN_HANDLER_ATTR = "_snap_stderr"


class _CategoryFilter(logging.Filter):
    """Pass records whose last logger-name component is in ``allowed``."""

    def __init__(self, allowed: set[str]):
        super().__init__()
        self.allowed = allowed

    def filter(self, record: logging.LogRecord) -> bool:
        # snap.mockup -> mockup
        return (record.name or "").rsplit(".", 1)[-1] in self.allowed


def _env_level(default: int) -> int:
    name = (os.getenv("SNAP_LOG_LEVEL") or "").strip().lower()
    return _LEVELS.get(name, default)


def _env_categories() -> set[str]:
    cats = os.getenv("SNAP_LOG_CATS") or ""
    return {c.strip() for c in cats.split(",") if c.strip()}


def _stderr_handler(logger: logging.Logger) -> logging.StreamHandler:
    # Only handlers created here are touched; others (pytest capture, user files) stay
    own = [h for h in logger.handlers if getattr(h, _OWN_HANDLER_ATTR, False)]
    for h in own:
        if getattr(h, "stream", None) is sys.stderr:
            return h
    # stderr was swapped (pytest capture, a GUI launcher); the old handler is stale
    for h in own:
        logger.removeHandler(h)
    handler = logging.StreamHandler(stream=sys.stderr)
    setattr(handler, _OWN_HANDLER_ATTR, True)
    logger.addHandler(handler)
    return handler


def setup_logger(level: int = logging.INFO, name: str = "snap") -> logging.Logger:
    """Create or update the project logger; safe to call repeatedly."""
    logger = logging.getLogger(name)
    logger.setLevel(_env_level(level))

    handler = _stderr_handler(logger)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
    handler.filters.clear()
    allowed = _env_categories()
    if allowed:
        handler.addFilter(_CategoryFilter(allowed))

    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    base = setup_logger()
    return base if not name else base.getChild(name)
