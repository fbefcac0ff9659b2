# tests/__init__.py
"""
Expose common test utilities so tests can import directly:
    from tests import make_config, FakeBackend
"""

from tests.utils import (
    DEFAULT_BACKEND,
    DEFAULT_URLS,
    FakeBackend,
    FakeResp,
    RecordingPacer,
    make_config,
    page_html,
    sitemap_xml,
    write_sitemap,
)

__all__ = [
    "DEFAULT_BACKEND",
    "DEFAULT_URLS",
    "FakeBackend",
    "FakeResp",
    "RecordingPacer",
    "make_config",
    "page_html",
    "sitemap_xml",
    "write_sitemap",
]
