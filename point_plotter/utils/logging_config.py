"""Logging setup for the ``point-plotter`` command line.

Library modules only do ``logger = logging.getLogger(__name__)``; the
entrypoint calls :func:`setup_logging` once, which installs a console
handler on stderr (stdout may carry G-code in ``--dry-run`` mode) and,
optionally, a file handler writing human lines or JSON lines.

Every record carries the fields pushed with :func:`push_context`, e.g.
``app=draw_points output=job.gcode``::

    2026-10-19T13:45:12.345Z | INFO     | app=draw_points | Loading ...
    {"t": "2026-10-19T13:45:12.345000+00:00", "lvl": "INFO", "app": "draw_points", ...}

Calling :func:`setup_logging` again replaces the handlers it installed
earlier instead of stacking new ones.
"""

import contextvars
import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional


_context_var: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar(
    "point_plotter_log_context", default={}
)

# Handlers owned by setup_logging(); anything else on the root logger is left alone.
_installed_handlers: List[logging.Handler] = []

_LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"


def _timestamp(record: logging.LogRecord, utc: bool) -> datetime:
    if utc:
        return datetime.fromtimestamp(record.created, tz=timezone.utc)
    return datetime.fromtimestamp(record.created)


class ContextFormatter(logging.Formatter):
    """Render records as ``ts | LEVEL | context | message`` or as JSON.

    Parameters
    ----------
    fmt_mode : str
        ``"human"`` or ``"json"``.
    use_color : bool
        Color the level name (only when stderr is a terminal).
    tz : str
        ``"UTC"`` or ``"local"``.
    """

    def __init__(
        self,
        fmt_mode: str = "human",
        use_color: bool = True,
        tz: str = "UTC"
    ):
        super().__init__()
        self.fmt_mode = fmt_mode
        self.use_color = use_color and sys.stderr.isatty()
        self.utc = tz == "UTC"

    def format(self, record: logging.LogRecord) -> str:
        ts = _timestamp(record, self.utc)
        context = _context_var.get()
        if self.fmt_mode == "json":
            return self._json_line(record, ts, context)
        return self._human_line(record, ts, context)

    def _json_line(self, record, ts, context) -> str:
        doc: Dict[str, Any] = {
            "t": ts.isoformat(),
            "lvl": record.levelname,
            "name": record.name,
            "pid": os.getpid(),
            **context,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            doc["exc"] = self.formatException(record.exc_info)
        return json.dumps(doc, default=str)

    def _human_line(self, record, ts, context) -> str:
        level = f"{record.levelname:8s}"
        if self.use_color:
            level = f"{_LEVEL_COLORS.get(record.levelname, '')}{level}{_RESET}"

        fields = [ts.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z", level]
        if context:
            fields.append(" ".join(f"{k}={v}" for k, v in context.items()))
        fields.append(record.getMessage())
        line = " | ".join(fields)

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    *,
    json: bool = False,
    color: bool = True,
    to_stderr: bool = True,
    tz: str = "UTC",
    capture_warnings: bool = True,
    quiet_libs: Optional[List[str]] = None,
    context: Optional[Dict[str, Any]] = None,
) -> List[logging.Handler]:
    """Configure the root logger for a command-line run.

    Parameters
    ----------
    log_level : str
        Root level name (``"DEBUG"`` ... ``"CRITICAL"``).
    log_file : str, optional
        Extra file handler; parent directories are created.
    json : bool
        Write the file handler as JSON lines.
    color, to_stderr, tz
        Console handler options.
    capture_warnings : bool
        Route ``warnings.warn`` through logging.
    quiet_libs : list[str], optional
        Logger names clamped to WARNING.
    context : dict, optional
        Fields pushed with :func:`push_context` before returning.

    Returns
    -------
    list[logging.Handler]
        The handlers now installed.

    Raises
    ------
    ValueError
        If *log_level* is not a level name.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    root = logging.getLogger()
    for handler in _installed_handlers:
        root.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    root.setLevel(level)

    if to_stderr:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(ContextFormatter("human", color, tz))
        _installed_handlers.append(console)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(
            ContextFormatter("json" if json else "human", use_color=False, tz=tz)
        )
        _installed_handlers.append(file_handler)

    for handler in _installed_handlers:
        root.addHandler(handler)

    for lib in quiet_libs or []:
        logging.getLogger(lib).setLevel(logging.WARNING)
    logging.captureWarnings(capture_warnings)

    if context:
        push_context(**context)
    return list(_installed_handlers)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def push_context(**kwargs: Any) -> None:
    """Merge *kwargs* into the fields attached to every record."""
    _context_var.set({**_context_var.get(), **kwargs})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Drop the given context *keys*, or every field when *keys* is None."""
    if keys is None:
        _context_var.set({})
        return
    _context_var.set(
        {k: v for k, v in _context_var.get().items() if k not in keys}
    )


def get_context() -> Dict[str, Any]:
    """Copy of the current context fields."""
    return dict(_context_var.get())
