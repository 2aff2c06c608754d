"""Command vocabulary -- the values a plotter job is built from.

Every instruction is an immutable, slotted dataclass.  The set is closed:
``Comment``, ``ModelCheck``, ``StatusMessage``, ``Move``, ``Raw`` and
``NoOp``.  Rendering to text lives in :mod:`point_plotter.gcode.renderer`;
nothing here knows about the output format.

Partial positions
-----------------
A :class:`Coordinate` carries three *optional* axes.  ``None`` means
"leave this axis where it is", exactly like an omitted word on a G-code
motion line.  An all-``None`` coordinate is a valid value; the renderer
turns a ``Move`` to it into a warning comment.
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Coordinates
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Partial 3-axis position in millimetres.

    Parameters
    ----------
    x, y, z : float | None
        Target value per axis.  ``None`` leaves the axis unchanged.
    """

    x: float | None = None
    y: float | None = None
    z: float | None = None

    def is_empty(self) -> bool:
        """Return ``True`` when no axis is present."""
        return self.x is None and self.y is None and self.z is None

    def merged_onto(self, base: Coordinate) -> Coordinate:
        """Return *base* with every present axis of ``self`` applied."""
        return Coordinate(
            x=self.x if self.x is not None else base.x,
            y=self.y if self.y is not None else base.y,
            z=self.z if self.z is not None else base.z,
        )


# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Command(ABC):
    """Base class for all plotter commands."""

    pass


# ---------------------------------------------------------------------------
# Annotation commands
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Comment(Command):
    """Human-readable annotation.  Never affects machine state."""

    text: str


@dataclass(frozen=True, slots=True)
class ModelCheck(Command):
    """Assert the identity of the target machine.

    Parameters
    ----------
    model : str
        Printer model name, e.g. ``"MK3S"``.
    """

    model: str

    def __post_init__(self) -> None:
        if not self.model:
            raise ValueError("ModelCheck requires a non-empty model name")


@dataclass(frozen=True, slots=True)
class StatusMessage(Command):
    """Text shown on the machine display (progress, ETA)."""

    text: str


# ---------------------------------------------------------------------------
# Motion
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Move(Command):
    """Linear motion toward a partial coordinate.

    Parameters
    ----------
    target : Coordinate
        Destination.  Absent axes stay put.
    feed : float
        Feed rate, written verbatim as the ``F`` word.
    """

    target: Coordinate
    feed: float


# ---------------------------------------------------------------------------
# Passthrough / spacing
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Raw(Command):
    """Pre-formatted instruction with an optional inline comment."""

    code: str
    comment: str | None = None


@dataclass(frozen=True, slots=True)
class NoOp(Command):
    """Blank output line, used for spacing only."""

    pass


# ---------------------------------------------------------------------------
# Fixed boilerplate
# ---------------------------------------------------------------------------

HOME = Raw("G28 W", "Home all without mesh bed level")
UNITS_MM = Raw("G21", "Set units to millimeters")
ABS_COORD = Raw("G90", "Use absolute coordinates")
SET_ORIGIN = Raw("G92 X0 Y0", "Set current position to origin")
MOTORS_OFF = Raw("M84", "Disable motors")
