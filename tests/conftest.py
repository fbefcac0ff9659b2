# tests/conftest.py
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests.utils import FakeBackend, RecordingPacer, make_config


# -------- Environment isolation --------
@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep PRERENDER_* variables of the developer shell out of the tests."""
    for key in ("OUTPUT", "BACKEND_URL", "AUTH", "DELAY", "TIMEOUT", "DEBUG"):
        monkeypatch.delenv(f"PRERENDER_{key}", raising=False)
    yield


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """configure_logging() attaches handlers to the package logger; drop them after each test."""
    yield
    logger = logging.getLogger("prerender")
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.setLevel(logging.NOTSET)


# -------- Output tree --------
@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Existing, writable, empty output root."""
    out = tmp_path / "prerender"
    out.mkdir()
    return out


# -------- Backend + pacing --------
@pytest.fixture
def fake_backend(monkeypatch) -> FakeBackend:
    """Patch the fetcher's requests.get with a scriptable fake rendering backend."""
    backend = FakeBackend()
    monkeypatch.setattr("prerender.core.fetch.snapshot_fetcher.requests.get", backend)
    return backend


@pytest.fixture
def recording_pacer() -> RecordingPacer:
    return RecordingPacer()


@pytest.fixture
def config_factory(output_dir: Path):
    """
    Factory for valid configs rooted at the ``output_dir`` fixture.

    Usage:
        cfg = config_factory()
        cfg = config_factory(urls=["https://example.com/a"], delay_s=1)
    """

    def _factory(**overrides):
        root = overrides.pop("output_dir", output_dir)
        return make_config(root, **overrides)

    return _factory


# -------- Pytest markers --------
def pytest_configure(config):
    config.addinivalue_line("markers", "integration: marks integration tests")
