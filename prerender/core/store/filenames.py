# prerender/core/store/filenames.py
"""
URL → snapshot filename mapping.

The mapping is one-way: lookups re-derive the name from the URL, nothing is
stored to map back. Scheme and host name are dropped, so URLs that only differ
in those parts (or in path segments equal to the host) share one file. That
collision is part of the on-disk contract and must not be "fixed" here without
migrating existing snapshot trees.

Only the host name is removed: a port or userinfo stays in the name
(``https://example.com:8080/a`` → ``:8080-a.html``).
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from prerender.schemas.models import Failure

INDEX_NAME = "index"
SNAPSHOT_EXT = ".html"


def url_to_filename(url: str) -> str | Failure:
    """
    Map a URL to a flat, filesystem-safe snapshot filename.

    Example:
        https://example.com/blog/post-1 -> blog-post-1.html
        https://example.com/            -> index.html
    """
    try:
        raw = url.strip()
        parts = urlsplit(raw)
        host = parts.hostname
    except (ValueError, AttributeError) as e:
        return Failure(kind="invalid_url", reason=f"cannot parse {url!r}: {e}")

    if not parts.scheme or not host:
        return Failure(kind="invalid_url", reason=f"missing scheme or host in {url!r}")

    # urlsplit lowercases scheme and host, the raw URL may not
    if "[" in parts.netloc:
        host = f"[{host}]"
    name = re.sub(re.escape(f"{parts.scheme}://"), "", raw, flags=re.IGNORECASE)
    name = re.sub(re.escape(host), "", name, flags=re.IGNORECASE)
    name = name.replace("/", "-").strip("-")
    return (name or INDEX_NAME) + SNAPSHOT_EXT
