"""G-code renderer -- command values to single text lines.

Every function here is pure: it maps one value to one line of text with
no trailing newline.  The caller (normally :class:`Printer`) appends
``\\n`` when writing, so ``NoOp`` becomes a blank line.

Numeric convention:
    Every coordinate and feed value is written with exactly one
    fractional digit (``X10.0``, ``F1000.0``).

Motionless moves:
    A ``Move`` whose target has no axis would render as a bare
    ``G0 F...``, which some firmwares reject or treat as a modal feed
    change.  Such a move renders as a warning comment instead.
"""

from __future__ import annotations

import logging

from point_plotter.job_ir.commands import (
    Command,
    Comment,
    Coordinate,
    ModelCheck,
    Move,
    NoOp,
    Raw,
    StatusMessage,
)

logger = logging.getLogger(__name__)

EMPTY_MOVE_WARNING = "[WARNING] Move without coordinates!"


class GCodeError(Exception):
    """Raised when G-code generation fails due to invalid input."""

    pass


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _axis(name: str, value: float | None) -> str:
    """Render one axis word, or ``""`` when the axis is absent."""
    if value is None:
        return ""
    return f"{name}{value:.1f}"


def _f(feed: float) -> str:
    """Render the ``F`` word."""
    return f"F{feed:.1f}"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render_coordinate(coord: Coordinate) -> str:
    """Render present axes in X, Y, Z order, separated by single spaces.

    Examples
    --------
    >>> render_coordinate(Coordinate(x=0.0, z=2.0))
    'X0.0 Z2.0'
    >>> render_coordinate(Coordinate())
    ''
    """
    words = (
        _axis("X", coord.x),
        _axis("Y", coord.y),
        _axis("Z", coord.z),
    )
    return " ".join(w for w in words if w)


def render_move(move: Move, move_mode: int = 0) -> str:
    """Render a motion line ``G{mode} {coords} F{feed}``.

    Falls back to a warning comment when the target has no axis.
    """
    coords = render_coordinate(move.target)
    if not coords:
        logger.warning(
            "Move without coordinates (F%.1f) rendered as comment", move.feed
        )
        return render_command(Comment(EMPTY_MOVE_WARNING))
    return f"G{move_mode} {coords} {_f(move.feed)}"


def render_raw(raw: Raw) -> str:
    """Render a passthrough instruction with its optional inline comment."""
    if raw.comment is not None:
        return f"{raw.code} ; {raw.comment}"
    return raw.code


def render_command(command: Command, move_mode: int = 0) -> str:
    """Render any command to one line (no trailing newline).

    Parameters
    ----------
    command : Command
        Value to render.
    move_mode : int
        ``G`` number used for ``Move`` lines.

    Returns
    -------
    str
        The G-code line.  ``NoOp`` renders as ``""``.

    Raises
    ------
    GCodeError
        If *command* is not one of the known command types.
    """
    if isinstance(command, Move):
        return render_move(command, move_mode)
    if isinstance(command, Comment):
        return f"; {command.text}"
    if isinstance(command, StatusMessage):
        return f"M117 {command.text}"
    if isinstance(command, Raw):
        return render_raw(command)
    if isinstance(command, ModelCheck):
        return f'M862.3 P "{command.model}" ; printer model check'
    if isinstance(command, NoOp):
        return ""
    raise GCodeError(f"Unsupported command: {type(command).__name__}")
