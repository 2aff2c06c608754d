"""
G-code generation module.

Renders plotter commands to text, estimates travel distance and remaining
time, and assembles complete programs from buffered point drawings.
"""

from point_plotter.gcode.estimator import (
    DistanceEstimator,
    estimate_seconds,
    format_hms,
    total_dist,
)
from point_plotter.gcode.printer import Printer, SaveError
from point_plotter.gcode.renderer import (
    GCodeError,
    render_command,
    render_coordinate,
)

__all__ = [
    "DistanceEstimator",
    "GCodeError",
    "Printer",
    "SaveError",
    "estimate_seconds",
    "format_hms",
    "render_command",
    "render_coordinate",
    "total_dist",
]
