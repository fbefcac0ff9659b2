# prerender/core/sitemap/__init__.py
from .reader import parse_sitemap, read_sitemap

__all__ = ["parse_sitemap", "read_sitemap"]
