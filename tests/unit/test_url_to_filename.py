# tests/unit/test_url_to_filename.py
from __future__ import annotations

import pytest

from prerender.core.store.filenames import url_to_filename
from prerender.schemas.models import Failure


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://example.com/blog/post-1", "blog-post-1.html"),
        ("https://example.com/blog/post-1/", "blog-post-1.html"),
        ("https://example.com/", "index.html"),
        ("https://example.com", "index.html"),
        ("http://example.com/about", "about.html"),
        ("https://example.com:8443/shop/cart", ":8443-shop-cart.html"),
        ("https://bot:pw@example.com/a", "bot:pw@-a.html"),
        ("http://[::1]:3000/app", ":3000-app.html"),
        ("https://example.com/search?q=shoes", "search?q=shoes.html"),
    ],
)
def test_url_to_filename_examples(url: str, expected: str) -> None:
    assert url_to_filename(url) == expected


def test_url_to_filename_is_deterministic() -> None:
    url = "https://example.com/a/b/c"
    assert url_to_filename(url) == url_to_filename(url) == "a-b-c.html"


def test_scheme_case_is_ignored() -> None:
    assert url_to_filename("HTTPS://example.com/blog") == "blog.html"


def test_host_case_is_ignored() -> None:
    assert url_to_filename("https://Example.COM/Blog") == "Blog.html"


def test_port_is_kept_so_ports_do_not_collide() -> None:
    assert url_to_filename("https://example.com:8080/a") == ":8080-a.html"
    assert url_to_filename("https://example.com/a") == "a.html"


def test_scheme_and_host_are_dropped_so_hosts_collide() -> None:
    # Known limitation of the flat layout: same path on two hosts → same file.
    assert url_to_filename("https://a.example.com/x") == url_to_filename("http://b.example.com/x")


def test_surrounding_whitespace_is_ignored() -> None:
    assert url_to_filename("  https://example.com/blog  ") == "blog.html"


@pytest.mark.parametrize("url", ["", "not a url", "/relative/path", "example.com/blog"])
def test_url_without_scheme_or_host_is_invalid(url: str) -> None:
    res = url_to_filename(url)
    assert isinstance(res, Failure)
    assert res.kind == "invalid_url"
    assert not res
