# prerender/reports/report.py
"""
Per-run report: accumulation during a run, JSON persistence, read-back.

A report is a JSON array with one object per input URL, in input order:
    [{"url": ..., "file": ..., "http": 200, "size": "1.50KB", "time": 0.42}, ...]
Files are named after the save time: reports/<YYYY-MM-DD HH:MM:SS>.json
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from prerender.core.store.files import atomic_write_text, list_files, read_bytes
from prerender.core.store.layout import output_paths
from prerender.schemas.models import Failure, ReportEntry

logger = logging.getLogger(__name__)

REPORT_EXT = "json"
_STAMP_FMT = "%Y-%m-%d %H:%M:%S"


class ReportAccumulator:
    """
    Single-owner buffer of report entries for one run.

    Entries exist for every URL from the start (``url`` only) and are filled in
    as each URL is processed.
    """

    def __init__(self, urls: Sequence[str]) -> None:
        self._entries: list[ReportEntry] = [ReportEntry(url=u) for u in urls]

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, index: int, **fields: Any) -> ReportEntry:
        """Merge ``fields`` into the entry at ``index`` and return the updated entry."""
        entry = self._entries[index].model_copy(update=fields)
        self._entries[index] = entry
        return entry

    def entries(self) -> list[ReportEntry]:
        return list(self._entries)


def report_filename(now: datetime, attempt: int = 0) -> str:
    stamp = now.strftime(_STAMP_FMT)
    return f"{stamp}.{REPORT_EXT}" if attempt == 0 else f"{stamp}-{attempt}.{REPORT_EXT}"


def save_report(entries: Sequence[ReportEntry], reports_dir: Path, *, now: datetime | None = None) -> Path | Failure:
    """
    Persist ``entries`` as one JSON document named after ``now``.

    A second save within the same second gets a ``-N`` suffix instead of
    overwriting the earlier report.
    """
    ts = now or datetime.now()
    payload = json.dumps([e.to_json_dict() for e in entries])

    attempt = 0
    path = reports_dir / report_filename(ts, attempt)
    while path.exists():
        attempt += 1
        path = reports_dir / report_filename(ts, attempt)

    written = atomic_write_text(path, payload)
    if isinstance(written, Failure):
        logger.error("could not save report %s: %s", path.name, written.reason)
    else:
        logger.info("report saved: %s (%d entries)", written, len(entries))
    return written


def load_report(path: Path | str) -> list[ReportEntry] | Failure:
    """Read a saved report back into entries."""
    data = read_bytes(Path(path))
    if isinstance(data, Failure):
        return data
    try:
        raw = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        return Failure(kind="parse", reason=f"invalid report JSON in {path}: {e}")
    if not isinstance(raw, list):
        return Failure(kind="parse", reason=f"report {path} is not a JSON array")
    try:
        return [ReportEntry.model_validate(item) for item in raw]
    except ValidationError as e:
        return Failure(kind="parse", reason=f"report {path} has invalid entries: {e}")


def list_saved_reports(output_dir: Path | str) -> list[str]:
    """Report filenames under <output>/reports, sorted by name."""
    return list_files(output_paths(output_dir)["reports"], REPORT_EXT)
