#!/usr/bin/env python3
"""
Draw Points Script.

Render a list of points (or a generated grid) to a G-code file.

Usage:
    python -m point_plotter.scripts.draw_points --grid 10x5 -o grid.gcode
    python -m point_plotter.scripts.draw_points --points job.yaml -o job.gcode
    python -m point_plotter.scripts.draw_points --grid 3x3 --dry-run
    point-plotter -c my_printer.yaml --points job.yaml -o job.gcode

Points files use the points.v1 schema:

    schema: points.v1
    points:
      - [10.0, 20.0]
      - [15.5, 20.0]

Grid points cover the source drawing size when ``source_size`` is set in
the config, otherwise the envelope.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

import yaml

from point_plotter import patterns
from point_plotter.configs.loader import ConfigError, PrinterConfig, load_config
from point_plotter.gcode.estimator import format_hms
from point_plotter.gcode.printer import Printer, SaveError
from point_plotter.utils import fs, validators
from point_plotter.utils.logging_config import pop_context, push_context, setup_logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="point-plotter",
        description="Render points to a G-code program",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="Printer configuration file (default: packaged printer.yaml)",
    )

    # Job source
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--points",
        "-p",
        type=str,
        help="Points file (YAML, points.v1 schema)",
    )
    source.add_argument(
        "--grid",
        "-g",
        type=str,
        metavar="COLSxROWS",
        help="Generate a grid of points, e.g. 10x5",
    )

    # Output
    output = parser.add_mutually_exclusive_group(required=True)
    output.add_argument(
        "--output",
        "-o",
        type=str,
        help="G-code output path",
    )
    output.add_argument(
        "--dry-run",
        action="store_true",
        help="Print G-code to stdout instead of writing a file",
    )

    # Pattern options
    parser.add_argument(
        "--margin",
        type=float,
        default=0.0,
        help="Grid inset from the drawing edges",
    )
    parser.add_argument(
        "--save-points",
        type=str,
        help="Also write the point list as a points.v1 file",
    )

    # Logging
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console log level",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Also log to this file",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Write the log file as JSON lines",
    )
    return parser


def _drawing_size(config: PrinterConfig) -> tuple[float, float]:
    """Area the grid should span, in drawing units."""
    if config.scale is not None:
        return config.scale
    return config.width, config.height


def _load_points(
    args: argparse.Namespace, config: PrinterConfig,
) -> list[tuple[float, float]]:
    if args.points:
        logger.info("Loading points file: %s", args.points)
        return list(validators.load_points_file(args.points).points)

    cols, rows = patterns.parse_grid_spec(args.grid)
    width, height = _drawing_size(config)
    logger.info(
        "Generating %dx%d grid over %.1f x %.1f", cols, rows, width, height
    )
    return patterns.grid(cols, rows, width, height, margin=args.margin)


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    setup_logging(
        args.log_level,
        args.log_file,
        json=args.json_logs,
        context={"app": "draw_points"},
    )

    try:
        config = load_config(args.config)
    except (ConfigError, FileNotFoundError, yaml.YAMLError) as e:
        logger.error("Error loading config: %s", e)
        return 1

    try:
        points = _load_points(args, config)
    except (ValueError, FileNotFoundError, yaml.YAMLError) as e:
        logger.error("Error loading points: %s", e)
        return 1

    if args.save_points:
        try:
            fs.atomic_yaml_dump(validators.dump_points(points), args.save_points)
        except RuntimeError as e:
            logger.error("Error saving points: %s", e)
            return 1
        logger.info("Saved %d points to %s", len(points), args.save_points)

    printer = Printer(config)
    for x, y in points:
        printer.draw_point(x, y)

    logger.info(
        "Job contains %d points, %d commands, ETA %s",
        printer.point_count,
        len(printer),
        format_hms(printer.estimated_duration()),
    )

    if args.dry_run:
        printer.write(sys.stdout)
        return 0

    push_context(output=args.output)
    try:
        printer.save(args.output)
    except SaveError as e:
        logger.error("%s", e)
        return 1
    finally:
        pop_context(["output"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
