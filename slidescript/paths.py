"""Helpers for resolving asset paths and preparing output locations.

Image paths in a slideshow are relative to the slideshow file unless the
caller supplies another base directory (``--asset-base`` on the CLI).
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

__all__ = ["resolve_asset", "prepare_output"]


def resolve_asset(src: str, *, base_dir: Optional[Path] = None) -> Path:
    """Return the absolute path of the asset *src*.

    Rules
    -----
    1. ``file://`` URLs are stripped to a plain path first.
    2. ``~`` is expanded.
    3. Relative paths are resolved against *base_dir* (default: cwd).
    """
    if src.startswith("file://"):
        src = src[7:]

    path = Path(src).expanduser()
    if not path.is_absolute():
        path = (base_dir or Path.cwd()) / path
    return path.resolve()


def prepare_output(output_path: str | Path, *, is_dir: bool = False) -> Path:
    """Create the directory that will hold *output_path* and return it resolved.

    Parameters
    ----------
    output_path
        A file path (PPTX, JSON dump) or, with ``is_dir=True``, a directory
        (PNG pages).
    """
    path = Path(output_path).expanduser().resolve()
    target_dir = path if is_dir else path.parent
    target_dir.mkdir(parents=True, exist_ok=True)
    return path
