# prerender/core/store/layout.py
"""
Deterministic on-disk layout under a prerender output root.
"""

from __future__ import annotations

import os
from pathlib import Path

from prerender.core.fetch.errors import OutputDirectoryError

SUBDIRS = ("reports", "snapshots", "archives", "logs")


def output_paths(output_dir: Path | str) -> dict[str, Path]:
    """
    Paths of the output tree. Nothing is created here.

    Layout (under <output>/):
      - snapshots/<encoded-url>.html
      - reports/<YYYY-MM-DD HH:MM:SS>.json
      - logs/snapshot-<DD-MM-YYYY>.log
      - archives/   (reserved, never written by the prerender run)
      - 404.html, 500.html
    """
    root = Path(output_dir)
    return {
        "root": root,
        "reports": root / "reports",
        "snapshots": root / "snapshots",
        "archives": root / "archives",
        "logs": root / "logs",
        "page_404": root / "404.html",
        "page_500": root / "500.html",
    }


def is_writable_dir(path: Path) -> bool:
    return path.is_dir() and os.access(path, os.W_OK | os.X_OK)


def ensure_output_tree(output_dir: Path | str) -> dict[str, Path]:
    """
    Create the four subdirectories (idempotent). The root itself must already exist.

    Raises OutputDirectoryError when a subdirectory cannot be created, e.g. a
    regular file already sits at its path.
    """
    paths = output_paths(output_dir)
    for name in SUBDIRS:
        try:
            paths[name].mkdir(exist_ok=True)
        except OSError as e:
            raise OutputDirectoryError(f"Cannot create {paths[name]}: {e}") from e
    return paths
