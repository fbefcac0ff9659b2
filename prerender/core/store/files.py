# prerender/core/store/files.py
"""
Filesystem primitives shared by the snapshot, report and error-page stores.

Writes go through a temp file in the destination directory followed by an
atomic rename, so a concurrent reader sees either the old or the new file.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from prerender.schemas.models import Failure

logger = logging.getLogger(__name__)

_KB = 1 << 10
_MB = 1 << 20
_GB = 1 << 30


def human_file_size(size: int) -> str:
    """
    Format a byte count for reports.

    Example:
        0        -> "0 bytes"
        1536     -> "1.50KB"
        3145728  -> "3.00MB"
    """
    if size >= _GB:
        return f"{size / _GB:,.2f}GB"
    if size >= _MB:
        return f"{size / _MB:,.2f}MB"
    if size >= _KB:
        return f"{size / _KB:,.2f}KB"
    return f"{size:,} bytes"


def atomic_write_bytes(path: Path, data: bytes) -> Path | Failure:
    """Replace ``path`` with ``data`` via temp file + rename."""
    tmp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(prefix=".tmp_", suffix=".part", delete=False, dir=str(path.parent)) as tf:
            tmp_path = Path(tf.name)
            tf.write(data)
        tmp_path.replace(path)
        return path
    except OSError as e:
        logger.error("write failed for %s: %s", path, e)
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        return Failure(kind="filesystem", reason=f"{type(e).__name__}: {e}")


def atomic_write_text(path: Path, text: str) -> Path | Failure:
    return atomic_write_bytes(path, text.encode("utf-8"))


def read_bytes(path: Path) -> bytes | Failure:
    if not path.is_file():
        return Failure(kind="not_found", reason=f"{path} does not exist")
    try:
        return path.read_bytes()
    except OSError as e:
        logger.error("read failed for %s: %s", path, e)
        return Failure(kind="filesystem", reason=f"{type(e).__name__}: {e}")


def list_files(directory: Path, extension: str) -> list[str]:
    """Sorted names of regular, non-hidden files in ``directory`` ending with ``.extension``."""
    suffix = "." + extension.lstrip(".")
    if not directory.is_dir():
        return []
    return sorted(p.name for p in directory.iterdir() if p.is_file() and p.suffix == suffix and not p.name.startswith("."))
