# tests/utils.py
"""
Single source of truth for test data, factories, and fake backend responses.
Update values here to cascade across the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import requests

from prerender.schemas.models import PrerenderConfig

# -----------------------------
# Global defaults (edit once)
# -----------------------------

DEFAULT_BACKEND = "http://prerender.local:3000/"

DEFAULT_URLS = (
    "https://example.com/",
    "https://example.com/blog",
    "https://example.com/blog/post-1",
)

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def page_html(url: str) -> bytes:
    """Deterministic rendered HTML for a target URL."""
    return f"<!DOCTYPE html><html><head><title>{url}</title></head><body><div id=app>{url}</div></body></html>".encode()


# -----------------------------
# Factories
# -----------------------------


def make_config(output_dir: Path, **overrides: Any) -> PrerenderConfig:
    """Valid config rooted at ``output_dir`` with no pacing delay."""
    data: dict[str, Any] = {
        "urls": list(DEFAULT_URLS),
        "output_dir": output_dir,
        "backend_url": DEFAULT_BACKEND,
        "delay_s": 0,
        "timeout_s": 5,
    }
    data.update(overrides)
    return PrerenderConfig.model_validate(data)


def sitemap_xml(urls: list[str] | tuple[str, ...], *, namespaced: bool = True) -> str:
    ns = f' xmlns="{SITEMAP_NS}"' if namespaced else ""
    body = "".join(f"  <url><loc>{u}</loc><changefreq>daily</changefreq></url>\n" for u in urls)
    return f'<?xml version="1.0" encoding="UTF-8"?>\n<urlset{ns}>\n{body}</urlset>\n'


def write_sitemap(path: Path, urls: list[str] | tuple[str, ...], *, namespaced: bool = True) -> Path:
    path.write_text(sitemap_xml(urls, namespaced=namespaced), encoding="utf-8")
    return path


# -----------------------------
# Fake HTTP
# -----------------------------


class FakeResp:
    """Minimal stand-in for requests.Response (status + raw content)."""

    def __init__(self, *, status: int = 200, body: bytes = b"") -> None:
        self.status_code = status
        self.content = body

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class FakeBackend:
    """
    Callable replacing ``requests.get`` for the snapshot fetcher.

    - ``statuses`` maps a target URL to the status the backend answers with (default 200)
    - ``unreachable`` lists target URLs that raise a ConnectionError
    - every call is recorded in ``calls`` as (backend_url, kwargs)
    """

    def __init__(self, backend: str = DEFAULT_BACKEND) -> None:
        self.backend = backend
        self.statuses: dict[str, int] = {}
        self.unreachable: set[str] = set()
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def target_of(self, full_url: str) -> str:
        return full_url[len(self.backend) :] if full_url.startswith(self.backend) else full_url

    def __call__(self, url: str, **kwargs: Any) -> FakeResp:
        self.calls.append((url, kwargs))
        target = self.target_of(url)
        if target in self.unreachable:
            raise requests.ConnectionError(f"connection refused: {url}")
        status = self.statuses.get(target, 200)
        body = page_html(target) if status == 200 else b"<html><body>backend error</body></html>"
        return FakeResp(status=status, body=body)

    @property
    def targets(self) -> list[str]:
        return [self.target_of(u) for u, _ in self.calls]


class RecordingPacer:
    """Pacer that records the hooks it receives instead of sleeping."""

    def __init__(self) -> None:
        self.events: list[str] = []

    def before_request(self) -> None:
        self.events.append("before")

    def after_request(self) -> None:
        self.events.append("after")
