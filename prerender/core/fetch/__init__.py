# prerender/core/fetch/__init__.py
from .errors import (
    FETCH_ERRORS,
    BackendStatusError,
    ConfigError,
    OutputDirectoryError,
    PrerenderError,
    SnapshotFetchError,
    TransportError,
    classify_fetch_error,
    failure_from_error,
    fetch_error_guard,
)
from .pacing import FixedDelayPacer, IntervalPacer, Pacer
from .snapshot_fetcher import fetch_snapshot, fetch_with_config

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
    "Pacer",
    "FixedDelayPacer",
    "IntervalPacer",
    "fetch_snapshot",
    "fetch_with_config",
]
