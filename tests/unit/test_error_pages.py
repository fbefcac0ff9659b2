# tests/unit/test_error_pages.py
from __future__ import annotations

from pathlib import Path

import pytest

from prerender.core.store import (
    default_error_page,
    get_404,
    get_500,
    get_error_page,
    set_404,
    set_500,
    set_error_page,
)


def test_defaults_when_no_override(output_dir: Path) -> None:
    assert get_404(output_dir) == default_error_page(404)
    assert get_500(output_dir) == default_error_page(500)
    assert "<title>404</title>" in default_error_page(404)
    assert default_error_page(500).startswith("<!DOCTYPE html>")


def test_override_round_trip(output_dir: Path) -> None:
    html = "<html><body>Nothing here. ✨</body></html>"
    assert set_404(html, output_dir) is True
    assert get_404(output_dir) == html
    assert (output_dir / "404.html").read_text(encoding="utf-8") == html
    # the other page is untouched
    assert get_500(output_dir) == default_error_page(500)


def test_set_500_overwrites(output_dir: Path) -> None:
    set_500("<p>first</p>", output_dir)
    set_500("<p>second</p>", output_dir)
    assert get_500(output_dir) == "<p>second</p>"


def test_unsupported_code_raises(output_dir: Path) -> None:
    with pytest.raises(ValueError):
        get_error_page(403, output_dir)
    with pytest.raises(ValueError):
        set_error_page(418, "<p>teapot</p>", output_dir)


def test_set_into_missing_root_returns_false(tmp_path: Path) -> None:
    assert set_error_page(404, "<p>x</p>", tmp_path / "missing") is False
