"""Scalar geometry helpers.

Provides:
    - Linear rescaling between coordinate ranges (drawing space -> envelope)
    - Round-half-up for non-negative sizes

All coordinates in millimeters (mm) unless explicitly noted otherwise.
"""

import math


def rescale(
    value: float,
    source_min: float,
    source_max: float,
    target_min: float,
    target_max: float,
) -> float:
    """Map *value* linearly from one range into another.

    Parameters
    ----------
    value : float
        Value in the source range
    source_min, source_max : float
        Source range bounds
    target_min, target_max : float
        Target range bounds

    Returns
    -------
    float
        ``target_min + (value - source_min) / (source_max - source_min)
        * (target_max - target_min)``

    Raises
    ------
    ZeroDivisionError
        If ``source_max == source_min``.  Callers must guarantee a
        non-empty source range.

    Notes
    -----
    No clamping: values outside the source range extrapolate linearly
    outside the target range.
    """
    t = (value - source_min) / (source_max - source_min)
    return target_min + t * (target_max - target_min)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties away from zero for ``value >= 0``.

    Python's ``round`` uses banker's rounding (``round(2.5) == 2``); progress
    sampling needs ``2.5 -> 3``.
    """
    return int(math.floor(value + 0.5))
