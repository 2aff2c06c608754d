"""Configuration loader for the point plotter.

Loads and validates ``printer.yaml`` into a typed, frozen dataclass.
Every physical parameter (envelope, heights, feed rates, ETA speed,
motion mode, park height, progress policy) comes from the config so that
several printers with different parameters can coexist in one process.

Feed rates are stored exactly as they appear in the G-code ``F`` word
(mm/min for Marlin/Prusa firmware).  The ETA speed is in **mm/s** because
it converts a distance in mm into seconds.

Usage::

    from point_plotter.configs.loader import load_config
    cfg = load_config()                        # default path
    cfg = load_config("/custom/printer.yaml")  # explicit path
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from point_plotter.utils.fs import load_yaml

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


# ---------------------------------------------------------------------------
# Dataclass
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PrinterConfig:
    """Complete printer configuration.

    All linear dimensions are in **millimeters**.

    Parameters
    ----------
    min, max : tuple[float, float]
        Envelope corners ``(x, y)``.  ``max`` must exceed ``min`` on both
        axes.
    z0 : float
        Resting (travel) height.
    z_plunge : float
        Height the tool is lowered to when marking a point.
    move_feed, plunge_feed, retract_feed : float
        ``F`` values for XY travel, plunge and retract moves.
    eta_speed_mm_s : float
        Nominal speed used to turn total path length into an ETA.  It is
        empirical and machine specific, so there is no default.
    model : str | None
        Printer model for the ``M862.3`` check, ``None`` to skip it.
    scale : tuple[float, float] | None
        Source drawing size ``(width, height)``.  When set, points are
        rescaled from ``[0, width] x [0, height]`` into the envelope.
    move_mode : int
        ``G`` number used for motion lines (0 or 1).
    park_z : float
        Height the head is lifted to before the motors are disabled.
    progress_fraction : float
        Fraction of the job length between progress messages.
    progress_min_interval : int
        Lower bound on the number of commands between progress messages.

    Raises
    ------
    ConfigError
        On any invalid combination (checked in ``__post_init__``).
    """

    min: tuple[float, float]
    max: tuple[float, float]
    z0: float
    z_plunge: float
    move_feed: float
    plunge_feed: float
    retract_feed: float
    eta_speed_mm_s: float
    model: str | None = None
    scale: tuple[float, float] | None = None
    move_mode: int = 0
    park_z: float = 80.0
    progress_fraction: float = 0.015
    progress_min_interval: int = 5

    def __post_init__(self) -> None:
        _validate_config(self)

    # -- Convenience helpers ------------------------------------------------

    @property
    def width(self) -> float:
        """Envelope width (``max.x - min.x``)."""
        return self.max[0] - self.min[0]

    @property
    def height(self) -> float:
        """Envelope height (``max.y - min.y``)."""
        return self.max[1] - self.min[1]


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _check_pair(name: str, value: Any) -> None:
    if not isinstance(value, tuple) or len(value) != 2:
        raise ConfigError(f"{name} must be an (x, y) pair, got {value!r}")


def _validate_config(cfg: PrinterConfig) -> None:
    """Validate field types and cross-field consistency.

    Raises
    ------
    ConfigError
        On any invalid combination.
    """
    _check_pair("min", cfg.min)
    _check_pair("max", cfg.max)
    if cfg.scale is not None:
        _check_pair("scale", cfg.scale)

    # -- Every number finite --------------------------------------------------
    numbers: list[tuple[str, Any]] = [
        ("min.x", cfg.min[0]), ("min.y", cfg.min[1]),
        ("max.x", cfg.max[0]), ("max.y", cfg.max[1]),
    ]
    if cfg.scale is not None:
        numbers += [("scale.width", cfg.scale[0]), ("scale.height", cfg.scale[1])]
    numbers += [
        (f.name, getattr(cfg, f.name))
        for f in fields(cfg)
        if f.name not in ("min", "max", "scale", "model")
    ]
    for name, value in numbers:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"{name} must be a number, got {value!r}")
        if not math.isfinite(value):
            raise ConfigError(f"{name} must be finite, got {value}")

    # -- Envelope has positive area -------------------------------------------
    if cfg.max[0] <= cfg.min[0]:
        raise ConfigError(
            f"Envelope max.x ({cfg.max[0]}) must exceed min.x ({cfg.min[0]})"
        )
    if cfg.max[1] <= cfg.min[1]:
        raise ConfigError(
            f"Envelope max.y ({cfg.max[1]}) must exceed min.y ({cfg.min[1]})"
        )

    # -- Source drawing size is non-degenerate --------------------------------
    if cfg.scale is not None and (cfg.scale[0] <= 0 or cfg.scale[1] <= 0):
        raise ConfigError(
            f"scale (source drawing size) must be positive, got {cfg.scale}"
        )

    # -- Speeds ----------------------------------------------------------------
    for name in ("move_feed", "plunge_feed", "retract_feed", "eta_speed_mm_s"):
        value = getattr(cfg, name)
        if value <= 0:
            raise ConfigError(f"{name} must be > 0, got {value}")

    # -- Output dialect / progress policy --------------------------------------
    if cfg.move_mode not in (0, 1):
        raise ConfigError(f"move_mode must be 0 or 1, got {cfg.move_mode}")
    if isinstance(cfg.progress_min_interval, float) or cfg.progress_min_interval < 1:
        raise ConfigError(
            f"progress_min_interval must be an integer >= 1, "
            f"got {cfg.progress_min_interval}"
        )
    if not 0 < cfg.progress_fraction <= 1:
        raise ConfigError(
            f"progress_fraction must be in (0, 1], got {cfg.progress_fraction}"
        )

    if cfg.model is not None and not cfg.model:
        raise ConfigError("model must be a non-empty string or null")

    # -- Heights: warnings only, the core does not check machine limits -------
    if cfg.z_plunge >= cfg.z0:
        logger.warning(
            "Plunge height %.1f is not below resting height %.1f",
            cfg.z_plunge,
            cfg.z0,
        )
    if cfg.park_z < cfg.z0:
        logger.warning(
            "Park height %.1f is below resting height %.1f",
            cfg.park_z,
            cfg.z0,
        )


# ---------------------------------------------------------------------------
# Internal parsing helpers
# ---------------------------------------------------------------------------


def _parse_pair(label: str, raw: Any) -> tuple[float, float]:
    """Parse a 2-element YAML list into a float tuple."""
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise ConfigError(f"{label} must be a 2-element list, got {raw!r}")
    return (float(raw[0]), float(raw[1]))


def _section(data: dict[str, Any], key: str, required: bool = True) -> dict[str, Any]:
    """Return the mapping under *key*; an absent optional section is ``{}``."""
    section = data[key] if required else data.get(key)
    if section is None and not required:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(
            f"Section '{key}' must be a mapping, got {type(section).__name__}"
        )
    return section


def _parse_model(data: dict[str, Any]) -> str | None:
    """Parse the optional ``printer.model`` entry."""
    model = _section(data, "printer", required=False).get("model")
    if model is None:
        return None
    return str(model)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def config_from_dict(data: dict[str, Any]) -> PrinterConfig:
    """Build a validated ``PrinterConfig`` from a parsed YAML mapping.

    Raises
    ------
    ConfigError
        If any field is missing or fails validation.
    """
    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration must be a mapping, got {type(data).__name__}"
        )
    try:
        # -- envelope -------------------------------------------------------
        env = _section(data, "envelope_mm")
        env_min = _parse_pair("envelope_mm.min", env["min"])
        env_max = _parse_pair("envelope_mm.max", env["max"])

        # -- optional rescale -----------------------------------------------
        raw_scale = data.get("source_size")
        scale = (
            _parse_pair("source_size", raw_scale)
            if raw_scale is not None
            else None
        )

        # -- z states -------------------------------------------------------
        zd = _section(data, "z_states")

        # -- feeds ----------------------------------------------------------
        fd = _section(data, "feeds")

        # -- optional sections ----------------------------------------------
        progress = _section(data, "progress", required=False)
        gcode = _section(data, "gcode", required=False)

        return PrinterConfig(
            min=env_min,
            max=env_max,
            z0=float(zd["rest_mm"]),
            z_plunge=float(zd["plunge_mm"]),
            move_feed=float(fd["move"]),
            plunge_feed=float(fd["plunge"]),
            retract_feed=float(fd["retract"]),
            eta_speed_mm_s=float(_section(data, "estimate")["speed_mm_s"]),
            model=_parse_model(data),
            scale=scale,
            move_mode=int(gcode.get("move_mode", 0)),
            park_z=float(zd.get("park_mm", 80.0)),
            progress_fraction=float(progress.get("fraction", 0.015)),
            progress_min_interval=int(progress.get("min_interval", 5)),
        )

    except KeyError as exc:
        raise ConfigError(
            f"Missing required configuration key: {exc}"
        ) from exc
    except (TypeError, ValueError) as exc:
        raise ConfigError(
            f"Invalid configuration value: {exc}"
        ) from exc


def load_config(path: str | Path | None = None) -> PrinterConfig:
    """Load and validate printer configuration from YAML.

    Parameters
    ----------
    path : str | Path | None
        Path to ``printer.yaml``.  ``None`` loads the default shipped
        alongside this module.

    Returns
    -------
    PrinterConfig
        Fully validated, frozen configuration object.

    Raises
    ------
    ConfigError
        If any field is missing or fails validation.
    FileNotFoundError
        If *path* does not exist.
    """
    if path is None:
        path = Path(__file__).parent / "printer.yaml"
    else:
        path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    logger.info("Loading configuration from %s", path)

    data = load_yaml(path)
    if data is None:
        raise ConfigError(f"Empty configuration file: {path}")

    config = config_from_dict(data)
    logger.info("Configuration loaded successfully")
    return config
