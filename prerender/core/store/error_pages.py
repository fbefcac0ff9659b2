# prerender/core/store/error_pages.py
"""
Custom 404/500 pages stored at the output root, with built-in fallbacks.
"""

from __future__ import annotations

import logging
from pathlib import Path

from prerender.schemas.models import Failure

from .files import atomic_write_text, read_bytes
from .layout import output_paths

logger = logging.getLogger(__name__)

SUPPORTED_CODES = (404, 500)


def default_error_page(code: int) -> str:
    return f"<!DOCTYPE html>\n<html>\n<head>\n    <title>{code}</title>\n</head>\n<body>\n{code}\n</body>\n</html>"


def _page_path(code: int, output_dir: Path | str) -> Path:
    if code not in SUPPORTED_CODES:
        raise ValueError(f"unsupported error page code: {code}")
    return output_paths(output_dir)[f"page_{code}"]


def get_error_page(code: int, output_dir: Path | str) -> str:
    """Stored override for ``code`` if present and readable, else the built-in page."""
    data = read_bytes(_page_path(code, output_dir))
    if isinstance(data, Failure):
        return default_error_page(code)
    return data.decode("utf-8", errors="replace")


def set_error_page(code: int, html: str, output_dir: Path | str) -> bool:
    written = atomic_write_text(_page_path(code, output_dir), html)
    if isinstance(written, Failure):
        logger.error("could not store %s page: %s", code, written.reason)
        return False
    return True


def get_404(output_dir: Path | str) -> str:
    return get_error_page(404, output_dir)


def set_404(html: str, output_dir: Path | str) -> bool:
    return set_error_page(404, html, output_dir)


def get_500(output_dir: Path | str) -> str:
    return get_error_page(500, output_dir)


def set_500(html: str, output_dir: Path | str) -> bool:
    return set_error_page(500, html, output_dir)
