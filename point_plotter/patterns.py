"""Point pattern generators.

Each function returns a flat ``list[tuple[float, float]]`` ready to feed
to :meth:`Printer.draw_point`.  Dimensions are in the caller's drawing
units, with the origin at the lower-left corner.

Used by the ``draw_points`` entrypoint to produce test jobs without a
points file.
"""

from __future__ import annotations

import re

Point = tuple[float, float]

_GRID_SPEC = re.compile(r"^\s*(\d+)\s*[xX]\s*(\d+)\s*$")


def grid(
    cols: int,
    rows: int,
    width: float,
    height: float,
    margin: float = 0.0,
) -> list[Point]:
    """Evenly spaced grid, row by row in boustrophedon order.

    Alternate rows run right-to-left so the head never travels back
    across the whole width between rows.

    Parameters
    ----------
    cols, rows : int
        Grid dimensions.  Both must be >= 1.
    width, height : float
        Area covered by the grid.
    margin : float
        Inset from every edge.

    Raises
    ------
    ValueError
        If the dimensions are invalid or the margin leaves no area.
    """
    if cols < 1 or rows < 1:
        raise ValueError(f"Grid must be at least 1x1, got {cols}x{rows}")
    usable_w = width - 2.0 * margin
    usable_h = height - 2.0 * margin
    if usable_w < 0 or usable_h < 0:
        raise ValueError(
            f"Margin {margin} leaves no room in {width} x {height}"
        )

    step_x = usable_w / (cols - 1) if cols > 1 else 0.0
    step_y = usable_h / (rows - 1) if rows > 1 else 0.0

    points: list[Point] = []
    for r in range(rows):
        y = margin + r * step_y
        xs = [margin + c * step_x for c in range(cols)]
        if r % 2 == 1:
            xs.reverse()
        points.extend((x, y) for x in xs)
    return points


def corners(width: float, height: float, margin: float = 0.0) -> list[Point]:
    """Four corners of the area, counter-clockwise from the origin.

    Handy for checking envelope placement and rescaling.
    """
    return grid(2, 2, width, height, margin)


def parse_grid_spec(spec: str) -> tuple[int, int]:
    """Parse ``"COLSxROWS"`` (e.g. ``"10x5"``) into ``(cols, rows)``.

    Raises
    ------
    ValueError
        If *spec* is malformed or a dimension is zero.
    """
    match = _GRID_SPEC.match(spec)
    if match is None:
        raise ValueError(f"Grid spec must look like COLSxROWS, got {spec!r}")
    cols, rows = int(match.group(1)), int(match.group(2))
    if cols < 1 or rows < 1:
        raise ValueError(f"Grid must be at least 1x1, got {spec!r}")
    return cols, rows
