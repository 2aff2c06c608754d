"""
Point Plotter Package.

Turns a list of "draw a point" requests into a G-code program for a
Prusa/Marlin-style printer fitted with a pen: travel to the point, plunge,
retract.  Progress and remaining-time messages are written to the printer
display while the job runs.

Subpackages:
    job_ir: Command values (comments, moves, status messages, raw codes)
    gcode: Rendering, distance/ETA estimation, program assembly
    configs: Printer configuration loading and validation
    utils: Atomic I/O, YAML, logging, rescaling, input validation
    scripts: Command-line entrypoints
"""

__version__ = "0.3.0"

__all__ = ["job_ir", "gcode", "configs", "utils", "scripts", "patterns"]
