"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Input file validation (validators)
    - Scalar geometry / rescaling (geometry)
    - Atomic I/O and YAML (fs)
    - Unified logging (logging_config)

No module in utils/ may import from upper layers (gcode, configs, scripts).

Convenience imports:
    from point_plotter.utils import fs, geometry, validators
    from point_plotter.utils.logging_config import setup_logging, get_logger
"""

from . import fs
from . import geometry
from . import logging_config
from . import validators

from .logging_config import get_logger, push_context, setup_logging

__all__ = [
    # Modules
    'fs',
    'geometry',
    'logging_config',
    'validators',
    # Direct exports
    'setup_logging',
    'get_logger',
    'push_context',
]
