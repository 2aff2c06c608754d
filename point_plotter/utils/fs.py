"""File output and YAML input for plotter jobs.

G-code and points files are written through a sibling temp file that is
fsynced and then renamed over the target.  A reader (or a printer polling
an upload folder) sees either the previous file or the complete new one,
never a truncated job that would stop with the pen lowered.

Usage:
    from point_plotter.utils import fs
    fs.atomic_write_text("out/job.gcode", gcode)
    cfg = fs.load_yaml("printer.yaml")
"""

import os
import tempfile
from pathlib import Path
from typing import Any, Union

import yaml

PathLike = Union[str, Path]


def ensure_dir(p: PathLike) -> Path:
    """Create *p* and any missing parents; return it as a ``Path``."""
    p = Path(p)
    p.mkdir(parents=True, exist_ok=True)
    return p


def atomic_write_bytes(path: PathLike, data: bytes) -> None:
    """Replace *path* with *data* in one rename.

    The temp file lives in the target directory so the rename never
    crosses a filesystem boundary.

    Raises
    ------
    RuntimeError
        If the directory cannot be created or any write step fails.
        The underlying ``OSError`` is kept as ``__cause__``.
    """
    path = Path(path)
    tmp_name = None
    try:
        ensure_dir(path.parent)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise RuntimeError(f"Failed to write {path} atomically: {e}") from e


def atomic_write_text(path: PathLike, text: str, encoding: str = "utf-8") -> None:
    """Text wrapper around :func:`atomic_write_bytes`."""
    atomic_write_bytes(path, text.encode(encoding))


def load_yaml(path: PathLike) -> Any:
    """Parse a YAML file with ``yaml.safe_load``.

    Returns ``None`` for an empty document; callers decide whether that
    is an error.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    yaml.YAMLError
        If the document is malformed.  The message names the file.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Failed to parse YAML file {path}: {e}") from e


def atomic_yaml_dump(obj: Any, path: PathLike) -> None:
    """Dump *obj* as block-style YAML (key order kept) and write it atomically."""
    text = yaml.safe_dump(obj, default_flow_style=False, sort_keys=False)
    atomic_write_text(path, text)
