"""
Job command module.

Defines the closed set of plotter commands as immutable dataclasses.  This
vocabulary is the contract between point drawing and G-code rendering.

All coordinates are in millimeters, machine-relative after rescaling.
"""

from point_plotter.job_ir.commands import (
    ABS_COORD,
    HOME,
    MOTORS_OFF,
    SET_ORIGIN,
    UNITS_MM,
    Command,
    Comment,
    Coordinate,
    ModelCheck,
    Move,
    NoOp,
    Raw,
    StatusMessage,
)

__all__ = [
    "ABS_COORD",
    "HOME",
    "MOTORS_OFF",
    "SET_ORIGIN",
    "UNITS_MM",
    "Command",
    "Comment",
    "Coordinate",
    "ModelCheck",
    "Move",
    "NoOp",
    "Raw",
    "StatusMessage",
]
