"""YAML schema validation for job input files.

Provides pydantic validation for the points file consumed by the
``draw_points`` entrypoint:
    - Points schema (points.v1): ordered list of (x, y) pairs in drawing units

The printer configuration itself is parsed by
:mod:`point_plotter.configs.loader` into frozen dataclasses; this module only
covers pure-data input files.

Units:
    - Drawing space: caller units (rescaled into the envelope when
      ``source_size`` is configured), otherwise millimeters

Usage:
    from point_plotter.utils import validators
    points = validators.load_points_file("points.yaml").points
"""

import math
from pathlib import Path
from typing import List, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


# ============================================================================
# POINTS SCHEMA V1
# ============================================================================

class PointsFileV1(BaseModel):
    """Container for an ordered list of points (points.v1 schema)."""

    model_config = ConfigDict(populate_by_name=True)

    schema_version: str = Field("points.v1", alias="schema", description="Schema version")
    points: List[Tuple[float, float]] = Field(..., description="Ordered (x, y) points")

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "points.v1":
            raise ValueError(f"Expected schema 'points.v1', got '{v}'")
        return v

    @field_validator('points')
    @classmethod
    def validate_finite(cls, v: List[Tuple[float, float]]) -> List[Tuple[float, float]]:
        for i, (x, y) in enumerate(v):
            if not (math.isfinite(x) and math.isfinite(y)):
                raise ValueError(f"Point {i} is not finite: ({x}, {y})")
        return v


# ============================================================================
# PUBLIC API
# ============================================================================

def load_points_file(path: Union[str, Path]) -> PointsFileV1:
    """Load and validate a points file from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to a points.v1 YAML file

    Returns
    -------
    PointsFileV1
        Validated points

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If validation fails (with actionable error message)
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Points file not found: {path}")

    data = fs.load_yaml(path)
    if data is None:
        raise ValueError(f"Empty points file: {path}")
    try:
        return PointsFileV1(**data)
    except (ValidationError, TypeError) as e:
        raise ValueError(f"Points file validation failed at {path}: {e}") from e


def dump_points(points: List[Tuple[float, float]]) -> dict:
    """Return a points.v1 document for *points*, ready for YAML dumping."""
    return {
        "schema": "points.v1",
        "points": [[float(x), float(y)] for x, y in points],
    }
