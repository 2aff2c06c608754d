"""Tests for the printer config loader.

Validates that:
    - the packaged printer.yaml loads and produces a usable config
    - missing keys and bad values raise ConfigError
    - degenerate envelopes and source sizes are rejected up front

Tests avoid hardcoding tunable values from printer.yaml (feeds, heights)
so they keep passing when the operator edits the file.
"""

from __future__ import annotations

import copy
import dataclasses
import logging
from pathlib import Path
from typing import Any

import pytest
import yaml

from point_plotter.configs.loader import (
    ConfigError,
    PrinterConfig,
    config_from_dict,
    load_config,
)


RAW: dict[str, Any] = {
    "printer": {"model": "MK3S"},
    "envelope_mm": {"min": [0.0, 0.0], "max": [180.0, 120.0]},
    "source_size": [90.0, 60.0],
    "z_states": {"rest_mm": 6.5, "plunge_mm": 4.0},
    "feeds": {"move": 1000.0, "plunge": 400.0, "retract": 800.0},
    "estimate": {"speed_mm_s": 200.0},
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def raw() -> dict[str, Any]:
    return copy.deepcopy(RAW)


@pytest.fixture()
def base() -> PrinterConfig:
    return config_from_dict(copy.deepcopy(RAW))


def _write(tmp_path: Path, data: Any) -> Path:
    path = tmp_path / "printer.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Packaged default
# ---------------------------------------------------------------------------


class TestDefaultConfig:
    def test_loads(self) -> None:
        cfg = load_config()
        assert isinstance(cfg, PrinterConfig)

    def test_envelope_positive(self) -> None:
        cfg = load_config()
        assert cfg.width > 0
        assert cfg.height > 0

    def test_speeds_positive(self) -> None:
        cfg = load_config()
        assert cfg.move_feed > 0
        assert cfg.plunge_feed > 0
        assert cfg.retract_feed > 0
        assert cfg.eta_speed_mm_s > 0

    def test_plunge_below_rest(self) -> None:
        cfg = load_config()
        assert cfg.z_plunge < cfg.z0

    def test_frozen(self) -> None:
        cfg = load_config()
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.z0 = 1.0  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParsing:
    def test_full_mapping(self, base: PrinterConfig) -> None:
        assert base.min == (0.0, 0.0)
        assert base.max == (180.0, 120.0)
        assert base.scale == (90.0, 60.0)
        assert base.model == "MK3S"
        assert base.eta_speed_mm_s == 200.0

    def test_defaults_for_optional_sections(self, base: PrinterConfig) -> None:
        assert base.park_z == 80.0
        assert base.move_mode == 0
        assert base.progress_fraction == pytest.approx(0.015)
        assert base.progress_min_interval == 5

    def test_optional_sections(self, raw: dict[str, Any]) -> None:
        raw["progress"] = {"fraction": 0.1, "min_interval": 2}
        raw["gcode"] = {"move_mode": 1}
        raw["z_states"]["park_mm"] = 50.0
        cfg = config_from_dict(raw)
        assert cfg.progress_fraction == pytest.approx(0.1)
        assert cfg.progress_min_interval == 2
        assert cfg.move_mode == 1
        assert cfg.park_z == 50.0

    def test_model_null(self, raw: dict[str, Any]) -> None:
        raw["printer"]["model"] = None
        assert config_from_dict(raw).model is None

    def test_printer_section_optional(self, raw: dict[str, Any]) -> None:
        del raw["printer"]
        assert config_from_dict(raw).model is None

    def test_source_size_null(self, raw: dict[str, Any]) -> None:
        raw["source_size"] = None
        assert config_from_dict(raw).scale is None

    def test_load_from_path(self, tmp_path: Path, raw: dict[str, Any]) -> None:
        cfg = load_config(_write(tmp_path, raw))
        assert cfg.max == (180.0, 120.0)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "printer.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ConfigError, match="Empty configuration"):
            load_config(path)

    def test_not_a_mapping(self) -> None:
        with pytest.raises(ConfigError, match="mapping"):
            config_from_dict([1, 2])  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidation:
    def test_missing_eta_speed(self, raw: dict[str, Any]) -> None:
        del raw["estimate"]
        with pytest.raises(ConfigError, match="Missing required"):
            config_from_dict(raw)

    def test_missing_feed(self, raw: dict[str, Any]) -> None:
        del raw["feeds"]["plunge"]
        with pytest.raises(ConfigError, match="plunge"):
            config_from_dict(raw)

    def test_bad_pair(self, raw: dict[str, Any]) -> None:
        raw["envelope_mm"]["min"] = [0.0]
        with pytest.raises(ConfigError, match="2-element"):
            config_from_dict(raw)

    def test_non_numeric(self, raw: dict[str, Any]) -> None:
        raw["feeds"]["move"] = "fast"
        with pytest.raises(ConfigError, match="Invalid configuration value"):
            config_from_dict(raw)

    @pytest.mark.parametrize(
        "env_min, env_max",
        [
            ([0.0, 0.0], [0.0, 100.0]),
            ([0.0, 0.0], [100.0, 0.0]),
            ([50.0, 0.0], [10.0, 100.0]),
        ],
    )
    def test_degenerate_envelope(
        self, raw: dict[str, Any], env_min: list, env_max: list,
    ) -> None:
        raw["envelope_mm"] = {"min": env_min, "max": env_max}
        with pytest.raises(ConfigError, match="must exceed"):
            config_from_dict(raw)

    @pytest.mark.parametrize("size", [[0.0, 60.0], [90.0, 0.0], [-1.0, 5.0]])
    def test_degenerate_source_size(
        self, raw: dict[str, Any], size: list,
    ) -> None:
        raw["source_size"] = size
        with pytest.raises(ConfigError, match="source drawing size"):
            config_from_dict(raw)

    def test_zero_eta_speed(self, base: PrinterConfig) -> None:
        with pytest.raises(ConfigError, match="eta_speed_mm_s"):
            dataclasses.replace(base, eta_speed_mm_s=0.0)

    def test_negative_feed(self, base: PrinterConfig) -> None:
        with pytest.raises(ConfigError, match="retract_feed"):
            dataclasses.replace(base, retract_feed=-1.0)

    def test_non_finite(self, base: PrinterConfig) -> None:
        with pytest.raises(ConfigError, match="finite"):
            dataclasses.replace(base, z0=float("nan"))

    def test_bad_move_mode(self, base: PrinterConfig) -> None:
        with pytest.raises(ConfigError, match="move_mode"):
            dataclasses.replace(base, move_mode=2)

    def test_bad_progress(self, base: PrinterConfig) -> None:
        with pytest.raises(ConfigError, match="progress_min_interval"):
            dataclasses.replace(base, progress_min_interval=0)
        with pytest.raises(ConfigError, match="progress_fraction"):
            dataclasses.replace(base, progress_fraction=0.0)

    def test_list_corner_rejected(self, base: PrinterConfig) -> None:
        with pytest.raises(ConfigError, match=r"\(x, y\) pair"):
            dataclasses.replace(base, min=[0.0, 0.0])  # type: ignore[arg-type]

    def test_plunge_above_rest_warns(
        self, base: PrinterConfig, caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.WARNING):
            cfg = dataclasses.replace(base, z_plunge=10.0)
        assert cfg.z_plunge == 10.0
        assert "Plunge height" in caplog.text

    @pytest.mark.parametrize(
        "key, value",
        [
            ("printer", "MK3S"),
            ("progress", [0.015, 5]),
            ("gcode", "G1"),
            ("feeds", None),
            ("estimate", 10.0),
            ("envelope_mm", [[0.0, 0.0], [180.0, 120.0]]),
        ],
    )
    def test_section_not_a_mapping(
        self, raw: dict[str, Any], key: str, value: Any,
    ) -> None:
        raw[key] = value
        with pytest.raises(ConfigError, match=f"Section '{key}' must be a mapping"):
            config_from_dict(raw)

    def test_optional_section_null(self, raw: dict[str, Any]) -> None:
        raw["progress"] = None
        raw["gcode"] = None
        cfg = config_from_dict(raw)
        assert cfg.progress_min_interval == 5
        assert cfg.move_mode == 0
