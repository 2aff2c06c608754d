"""Travel-distance and remaining-time estimation.

Provides:
    - Path length: Euclidean distance summed over every ``Move``
    - Duration: path length / nominal speed (feed rates are ignored)
    - ``HH:MM:SS`` formatting for the progress messages

Tracks:
    - Current position (X, Y, Z); an absent axis in a move means zero
      displacement on that axis, and the axis keeps its previous value

No acceleration model.  The estimate is only used for the operator-facing
``M117`` remaining-time lines.

Usage:
    from point_plotter.gcode.estimator import DistanceEstimator, format_hms

    est = DistanceEstimator(start=Coordinate(0.0, 0.0, cfg.z0))
    total_mm = est.run(commands)
    print(format_hms(total_mm / cfg.eta_speed_mm_s))
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from point_plotter.job_ir.commands import Command, Coordinate, Move

logger = logging.getLogger(__name__)


def _delta(start: float | None, end: float | None) -> float:
    """Displacement on one axis; zero unless both ends are known."""
    if start is None or end is None:
        return 0.0
    return end - start


class DistanceEstimator:
    """Accumulate travel distance over a command sequence.

    Parameters
    ----------
    start : Coordinate
        Position before the first command.  The printer seeds it with
        ``(0, 0, z0)``; only relative travel matters for the estimate.

    Attributes
    ----------
    pos : Coordinate
        Current (carried-forward) position.
    total : float
        Accumulated distance in mm.
    move_count : int
        Number of ``Move`` commands seen.
    """

    def __init__(self, start: Coordinate) -> None:
        self.start = start
        self.pos = start
        self.total = 0.0
        self.move_count = 0

    def reset(self) -> None:
        """Return to the start position and clear the total."""
        self.pos = self.start
        self.total = 0.0
        self.move_count = 0

    def step(self, command: Command) -> float:
        """Advance over one command and return the distance it adds."""
        if not isinstance(command, Move):
            return 0.0

        target = command.target
        dx = _delta(self.pos.x, target.x)
        dy = _delta(self.pos.y, target.y)
        dz = _delta(self.pos.z, target.z)
        dist = math.sqrt(dx * dx + dy * dy + dz * dz)

        self.total += dist
        self.pos = target.merged_onto(self.pos)
        self.move_count += 1
        return dist

    def run(self, commands: Iterable[Command]) -> float:
        """Reset, walk *commands* once and return the total distance (mm)."""
        self.reset()
        for command in commands:
            self.step(command)
        logger.debug(
            "Estimated %.1f mm over %d moves", self.total, self.move_count
        )
        return self.total


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

def total_dist(commands: Iterable[Command], z0: float) -> float:
    """Total path length of *commands* starting at rest ``(0, 0, z0)``."""
    return DistanceEstimator(Coordinate(0.0, 0.0, z0)).run(commands)


def estimate_seconds(distance_mm: float, speed_mm_s: float) -> float:
    """Convert a path length to seconds at a nominal speed.

    Raises
    ------
    ValueError
        If *speed_mm_s* is not positive.
    """
    if speed_mm_s <= 0:
        raise ValueError(f"speed_mm_s must be > 0, got {speed_mm_s}")
    return distance_mm / speed_mm_s


def format_hms(seconds: float) -> str:
    """Format a duration as ``HH:MM:SS`` (truncated to whole seconds).

    Hours are not wrapped: 100 hours renders as ``100:00:00``.
    """
    total = int(max(seconds, 0.0))
    hours = total // 3600
    minutes = (total % 3600) // 60
    secs = total % 60
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
