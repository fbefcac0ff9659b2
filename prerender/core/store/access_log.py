# prerender/core/store/access_log.py
"""
Append-only, per-day log of snapshot *serving* (not of prerender runs).

One file per calendar day: logs/snapshot-DD-MM-YYYY.log
One line per access:       DD-MM-YYYY HH:MM:SS;ip;url;http_code;user_agent
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from .layout import output_paths

logger = logging.getLogger(__name__)


def access_log_path(output_dir: Path | str, day: datetime) -> Path:
    return output_paths(output_dir)["logs"] / f"snapshot-{day.strftime('%d-%m-%Y')}.log"


def _one_line(value: object) -> str:
    return str(value).replace("\r", " ").replace("\n", " ")


def format_access_line(now: datetime, ip: str, url: str, http_code: int | str, user_agent: str) -> str:
    fields = [now.strftime("%d-%m-%Y %H:%M:%S"), ip, url, http_code, user_agent]
    return ";".join(_one_line(f) for f in fields) + "\n"


def log_access(
    ip: str,
    user_agent: str,
    url: str,
    http_code: int | str,
    output_dir: Path | str,
    *,
    now: datetime | None = None,
) -> bool:
    """Append one access line to today's file, creating it when absent. Never raises on I/O errors."""
    ts = now or datetime.now()
    path = access_log_path(output_dir, ts)
    line = format_access_line(ts, ip, url, http_code, user_agent)
    try:
        path.parent.mkdir(exist_ok=True)
        with path.open("a", encoding="utf-8") as fh:
            fh.write(line)
        return True
    except OSError as e:
        logger.error("cannot append to access log %s: %s", path, e)
        return False
