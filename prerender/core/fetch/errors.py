# prerender/core/fetch/errors.py
"""
Typed errors + utilities for the snapshot fetcher.

Exports
-------
- PrerenderError, ConfigError, OutputDirectoryError
- SnapshotFetchError, TransportError, BackendStatusError
- FETCH_ERRORS
- classify_fetch_error(exc)
- fetch_error_guard()
- failure_from_error(exc)
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import requests

from prerender.schemas.models import Failure

# =========================
# Exception types
# =========================


class PrerenderError(RuntimeError):
    """Base class for prerender failures."""


class ConfigError(PrerenderError):
    """Run configuration is invalid (bad JSON, bad auth string, unreadable sitemap...)."""


class OutputDirectoryError(ConfigError):
    """Output root is missing or not writable."""


class SnapshotFetchError(PrerenderError):
    """Base class for rendering-backend call failures."""


class TransportError(SnapshotFetchError):
    """Connection, DNS, TLS or timeout failure: no HTTP status available."""


class BackendStatusError(SnapshotFetchError):
    """Backend answered with a status other than 200."""

    def __init__(self, status_code: int, message: str = "") -> None:
        super().__init__(message or f"HTTP {status_code}")
        self.status_code = status_code


# Selector tuple for grouped exception handling
FETCH_ERRORS = (TransportError, BackendStatusError)

# =========================
# Classification helpers
# =========================


def classify_fetch_error(exc: Exception) -> SnapshotFetchError:
    """
    Map arbitrary exceptions raised while calling the backend to a typed error.

      - SnapshotFetchError subclasses → passed through
      - requests.HTTPError with a response → BackendStatusError
      - other requests.* errors → TransportError
      - Fallback → TransportError (the call did not produce a usable response)
    """
    if isinstance(exc, SnapshotFetchError):
        return exc

    if isinstance(exc, requests.HTTPError) and exc.response is not None:
        return BackendStatusError(exc.response.status_code, str(exc))

    return TransportError(f"{type(exc).__name__}: {exc}")


@contextmanager
def fetch_error_guard() -> Iterator[None]:
    """Context manager to normalize unexpected exceptions at the transport boundary."""
    try:
        yield
    except FETCH_ERRORS:
        raise
    except (requests.RequestException, UnicodeError) as exc:
        # UnicodeError: a header value (credentials, User-Agent) that cannot be encoded
        raise classify_fetch_error(exc) from exc


def failure_from_error(exc: SnapshotFetchError) -> Failure:
    if isinstance(exc, BackendStatusError):
        return Failure(kind="http_status", reason=str(exc), status_code=exc.status_code)
    return Failure(kind="transport", reason=str(exc))


__all__ = [
    "PrerenderError",
    "ConfigError",
    "OutputDirectoryError",
    "SnapshotFetchError",
    "TransportError",
    "BackendStatusError",
    "FETCH_ERRORS",
    "classify_fetch_error",
    "fetch_error_guard",
    "failure_from_error",
]
