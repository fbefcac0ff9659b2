# prerender/core/store/snapshots.py
"""
Snapshot persistence and read-back by URL.

Reads are a pure cache lookup: a missing snapshot is reported as not-found,
never fetched on demand.
"""

from __future__ import annotations

import logging
from pathlib import Path

from prerender.schemas.models import Failure

from .files import atomic_write_bytes, read_bytes
from .filenames import url_to_filename
from .layout import output_paths

logger = logging.getLogger(__name__)


def snapshot_path(url: str, output_dir: Path | str) -> Path | Failure:
    name = url_to_filename(url)
    if isinstance(name, Failure):
        return name
    return output_paths(output_dir)["snapshots"] / name


def save_snapshot(url: str, html: bytes, output_dir: Path | str) -> Path | Failure:
    """Write (or overwrite) the snapshot for ``url``."""
    path = snapshot_path(url, output_dir)
    if isinstance(path, Failure):
        return path
    return atomic_write_bytes(path, html)


def get_snapshot(url: str, output_dir: Path | str) -> bytes | Failure:
    """Return the stored snapshot bytes for ``url``, or a not-found Failure."""
    path = snapshot_path(url, output_dir)
    if isinstance(path, Failure):
        return path
    data = read_bytes(path)
    if isinstance(data, Failure) and data.kind == "not_found":
        logger.debug("no snapshot for %s at %s", url, path)
    return data
