"""Printer configuration loading and validation."""

from point_plotter.configs.loader import (
    ConfigError,
    PrinterConfig,
    config_from_dict,
    load_config,
)

__all__ = [
    "ConfigError",
    "PrinterConfig",
    "config_from_dict",
    "load_config",
]
