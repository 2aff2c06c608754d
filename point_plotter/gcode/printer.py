"""Printer -- point requests to a complete G-code program.

A :class:`Printer` buffers commands for each :meth:`Printer.draw_point`
call and renders the whole job in one pass on :meth:`Printer.save`.

Program layout::

    header   comment, model check, G21, G90, G28 W, rest height,
             envelope minimum, G92 X0 Y0, "M117 0.0%"
    body     buffered commands, with an "M117 <pct>%  R<HH:MM:SS>"
             line injected after every Nth command
    footer   comment, lift to park height, M84

Coordinate frame:
    ``G92 X0 Y0`` is issued at the envelope minimum, so body moves are
    relative to that corner.  With ``scale`` configured, drawing
    coordinates in ``[0, w] x [0, h]`` map onto ``[0, width] x
    [0, height]`` of the envelope.

Progress sampling:
    ``N = max(round_half_up(len(buffer) * progress_fraction),
    progress_min_interval)``.  The remaining time is
    ``(1 - done) * total_distance / eta_speed_mm_s``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from io import StringIO
from pathlib import Path
from typing import Protocol

from point_plotter.configs.loader import PrinterConfig
from point_plotter.gcode.estimator import estimate_seconds, format_hms, total_dist
from point_plotter.gcode.renderer import GCodeError, render_command
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
    StatusMessage,
)
from point_plotter.utils.fs import atomic_write_text
from point_plotter.utils.geometry import rescale, round_half_up

logger = logging.getLogger(__name__)


class SaveError(GCodeError):
    """Raised when the G-code program cannot be written."""

    pass


class TextSink(Protocol):
    """Anything with a text ``write`` method (file, StringIO, stdout)."""

    def write(self, text: str, /) -> object: ...


class Printer:
    """Accumulate point drawings and render them as G-code.

    Parameters
    ----------
    config : PrinterConfig
        Validated printer configuration.  Invalid envelopes or source
        sizes are rejected when the config is constructed.

    Notes
    -----
    Not thread-safe: ``draw_point`` and ``save`` must not run
    concurrently on one instance.
    """

    def __init__(self, config: PrinterConfig) -> None:
        self._cfg = config
        self._commands: list[Command] = []
        self._points = 0
        self.width: float = config.width
        self.height: float = config.height

    # ------------------------------------------------------------------
    # Buffer access
    # ------------------------------------------------------------------

    @property
    def config(self) -> PrinterConfig:
        return self._cfg

    @property
    def commands(self) -> tuple[Command, ...]:
        """Buffered body commands, in insertion order."""
        return tuple(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    @property
    def point_count(self) -> int:
        """Number of ``draw_point`` calls buffered so far."""
        return self._points

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def draw_point(self, x: float, y: float) -> None:
        """Queue a mark at ``(x, y)``: travel, plunge, retract.

        Parameters
        ----------
        x, y : float
            Point in drawing space.  Rescaled into the envelope when
            ``config.scale`` is set, otherwise used as-is.
        """
        cfg = self._cfg
        if cfg.scale is not None:
            src_w, src_h = cfg.scale
            mx = rescale(x, 0.0, src_w, 0.0, self.width)
            my = rescale(y, 0.0, src_h, 0.0, self.height)
        else:
            mx, my = x, y

        self._commands.extend([
            Comment(f"draw_point({x:.1f}, {y:.1f})"),
            Move(Coordinate(x=mx, y=my), cfg.move_feed),
            Move(Coordinate(z=cfg.z_plunge), cfg.plunge_feed),
            Move(Coordinate(z=cfg.z0), cfg.retract_feed),
            NoOp(),
        ])
        self._points += 1

    def total_dist(self) -> float:
        """Path length of the buffered commands, from rest at ``(0, 0, z0)``."""
        return total_dist(self._commands, self._cfg.z0)

    def estimated_duration(self) -> float:
        """Estimated job duration in seconds."""
        return estimate_seconds(self.total_dist(), self._cfg.eta_speed_mm_s)

    def progress_interval(self) -> int:
        """Number of body commands between injected progress messages."""
        return max(
            round_half_up(len(self._commands) * self._cfg.progress_fraction),
            self._cfg.progress_min_interval,
        )

    def header(self) -> list[Command]:
        cfg = self._cfg
        cmds: list[Command] = [Comment("Start of generated code")]
        if cfg.model is not None:
            cmds.append(ModelCheck(cfg.model))
        cmds += [
            UNITS_MM,
            ABS_COORD,
            HOME,
            NoOp(),
            Move(Coordinate(z=cfg.z0), cfg.move_feed),
            Move(Coordinate(x=cfg.min[0], y=cfg.min[1]), cfg.move_feed),
            SET_ORIGIN,
            StatusMessage("0.0%"),
            NoOp(),
        ]
        return cmds

    def footer(self) -> list[Command]:
        cfg = self._cfg
        return [
            Comment("Lift the head up before turning off"),
            Move(Coordinate(z=cfg.park_z), cfg.move_feed),
            MOTORS_OFF,
            NoOp(),
        ]

    def iter_commands(self) -> Iterator[Command]:
        """Yield the full program: header, body with progress, footer."""
        return self._program(self.estimated_duration())

    def iter_lines(self) -> Iterator[str]:
        """Yield rendered lines (no trailing newlines)."""
        return self._lines(self.estimated_duration())

    def write(self, sink: TextSink) -> int:
        """Write every line plus ``\\n`` to *sink*.

        Returns
        -------
        int
            Number of lines written.
        """
        return self._write(sink, self.estimated_duration())

    def generate(self) -> str:
        """Return the complete G-code program as a string."""
        buf = StringIO()
        self.write(buf)
        return buf.getvalue()

    def save(self, filename: str | Path) -> Path:
        """Render the program and write it to *filename* atomically.

        Returns
        -------
        Path
            The written file.

        Raises
        ------
        SaveError
            If the file (or its directory) cannot be written.
        """
        path = Path(filename)
        duration = self.estimated_duration()
        buf = StringIO()
        self._write(buf, duration)
        gcode = buf.getvalue()
        try:
            atomic_write_text(path, gcode)
        except (OSError, RuntimeError) as exc:
            raise SaveError(f"Failed to save G-code to {path}: {exc}") from exc

        logger.info(
            "Wrote %d points (%d lines) to %s, ETA %s",
            self._points,
            gcode.count("\n"),
            path,
            format_hms(duration),
        )
        return path

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    # One DistanceEstimator pass per output; the duration is threaded through.

    def _program(self, duration: float) -> Iterator[Command]:
        yield from self.header()
        yield from self._body(duration)
        yield from self.footer()

    def _lines(self, duration: float) -> Iterator[str]:
        mode = self._cfg.move_mode
        for command in self._program(duration):
            yield render_command(command, mode)

    def _write(self, sink: TextSink, duration: float) -> int:
        count = 0
        for line in self._lines(duration):
            sink.write(line)
            sink.write("\n")
            count += 1
        return count

    def _body(self, duration: float) -> Iterator[Command]:
        total = len(self._commands)
        if total == 0:
            return

        skip = self.progress_interval()
        logger.debug(
            "Rendering %d commands, progress every %d, ETA %.1fs",
            total,
            skip,
            duration,
        )

        for count, command in enumerate(self._commands, start=1):
            yield command
            if count % skip == 0:
                done = count / total
                remaining = (1.0 - done) * duration
                yield StatusMessage(
                    f"{done * 100.0:.1f}%  R{format_hms(remaining)}"
                )
