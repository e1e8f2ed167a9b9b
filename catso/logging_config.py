"""Console logging for the app, the Behance import and uvicorn access."""

from __future__ import annotations

import logging
import os
from typing import Final


_APP_FORMAT: Final[str] = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_ACCESS_FORMAT: Final[str] = '%(client_addr)s - "%(request_line)s" %(status_code)s'
_DATEFMT: Final[str] = "%Y-%m-%d %H:%M:%S"

BEHANCE_LOGGER: Final[str] = "catso.behance"


def _resolve_level(level_name: str) -> int:
    """Translate a level name or number, falling back to INFO."""
    value = level_name.strip()
    if value.isdigit():
        return int(value)
    numeric = getattr(logging, value.upper(), None)
    return numeric if isinstance(numeric, int) else logging.INFO


def _attach_console(name: str, fmt: str, datefmt: str | None, level: int) -> None:
    target = logging.getLogger(name)
    if not target.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt, datefmt))
        target.addHandler(handler)
    target.setLevel(level)
    target.propagate = False


def configure_logging(*, debug: bool = False) -> None:
    """Set up the ``catso`` and ``uvicorn.access`` loggers.

    ``LOG_LEVEL`` overrides the app level; ``BEHANCE_LOG_LEVEL`` applies to
    the Behance import alone, so a sync can be traced without debug noise
    from every request.
    """
    level = _resolve_level(os.getenv("LOG_LEVEL") or ("DEBUG" if debug else "INFO"))
    _attach_console("catso", _APP_FORMAT, _DATEFMT, level)

    behance_level = os.getenv("BEHANCE_LOG_LEVEL")
    if behance_level:
        logging.getLogger(BEHANCE_LOGGER).setLevel(_resolve_level(behance_level))

    _attach_console("uvicorn.access", _ACCESS_FORMAT, None, max(level, logging.INFO))
