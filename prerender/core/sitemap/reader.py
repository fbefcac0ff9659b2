# prerender/core/sitemap/reader.py
"""
Sitemap (urlset) → ordered list of page URLs.

Only ``<urlset><url><loc>`` documents are accepted; namespaces are ignored so
both the sitemaps.org namespace and bare documents parse. Sitemap indexes are
rejected as a parse failure (they list sitemaps, not pages).
"""

from __future__ import annotations

import logging
from pathlib import Path

from lxml import etree

from prerender.schemas.models import Failure

logger = logging.getLogger(__name__)


def _local(tag: object) -> str:
    # comments / processing instructions have non-string tags
    if not isinstance(tag, str):
        return ""
    return etree.QName(tag).localname


def parse_sitemap(data: bytes | str) -> list[str] | Failure:
    """Extract every ``url/loc`` in document order from an in-memory sitemap."""
    if isinstance(data, str):
        data = data.encode("utf-8")

    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)
    try:
        root = etree.fromstring(data, parser=parser)
    except etree.XMLSyntaxError as e:
        return Failure(kind="parse", reason=f"malformed sitemap XML: {e}")

    if root is None or _local(root.tag) != "urlset":
        found = _local(root.tag) if root is not None else "nothing"
        return Failure(kind="parse", reason=f"expected a <urlset> root, found <{found}>")

    urls: list[str] = []
    for idx, entry in enumerate(root):
        if _local(entry.tag) != "url":
            continue
        loc = next((c for c in entry if _local(c.tag) == "loc"), None)
        text = (loc.text or "").strip() if loc is not None else ""
        if not text:
            logger.warning("sitemap entry #%d has no <loc>; skipped", idx)
            continue
        urls.append(text)
    return urls


def read_sitemap(path: Path | str) -> list[str] | Failure:
    """Read a sitemap file; missing/unreadable files and malformed XML come back as Failure."""
    p = Path(path)
    if not p.is_file():
        logger.error("sitemap %s does not exist or is not a file", p)
        return Failure(kind="not_found", reason=f"{p} does not exist or is not a file")
    try:
        data = p.read_bytes()
    except OSError as e:
        logger.error("sitemap %s is not readable: %s", p, e)
        return Failure(kind="not_found", reason=f"{p} is not readable: {e}")

    result = parse_sitemap(data)
    if isinstance(result, Failure):
        logger.error("sitemap %s: %s", p, result.reason)
    return result
