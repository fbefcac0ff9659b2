# prerender/core/fetch/snapshot_fetcher.py
"""
One call to the rendering backend for one target URL.

The backend URL is formed by plain concatenation: ``backend_url + url``
(e.g. ``http://prerender:3000/`` + ``https://example.com/blog``). Only HTTP 200
counts as a snapshot; everything else comes back as a Failure so the caller can
record it and move on. One attempt per call, no retries.
"""

from __future__ import annotations

import logging

import requests

from prerender.schemas.models import DEFAULT_USER_AGENT, BasicAuth, Failure, FetchResult, PrerenderConfig

from .errors import SnapshotFetchError, failure_from_error, fetch_error_guard

logger = logging.getLogger(__name__)

_BODY_PREVIEW_CHARS = 500

# -------------------------
# Internal HTTP helpers
# -------------------------


def _http_get(url: str, ua: str, auth: BasicAuth | None, timeout: float) -> tuple[int, bytes]:
    with fetch_error_guard():
        resp = requests.get(
            url,
            headers={"User-Agent": ua},
            auth=auth.as_tuple() if auth else None,
            timeout=timeout,
            allow_redirects=True,
        )
        return resp.status_code, resp.content


def _preview(body: bytes) -> str:
    text = body.decode("utf-8", errors="replace")
    return text if len(text) <= _BODY_PREVIEW_CHARS else text[:_BODY_PREVIEW_CHARS] + "…"


# -------------------------
# Public API
# -------------------------


def fetch_snapshot(
    url: str,
    *,
    backend_url: str,
    auth: BasicAuth | None = None,
    user_agent: str = DEFAULT_USER_AGENT,
    timeout_s: float = 60.0,
) -> FetchResult:
    """
    Ask the rendering backend for the HTML of ``url``.

    Returns a FetchResult with ``body`` set on HTTP 200. Non-200 answers carry
    the status and an ``http_status`` failure; transport errors carry no status
    and a ``transport`` failure. The backend body of a rejected answer is only
    logged.
    """
    target = backend_url + url
    logger.info("Call prerender: %s", target)

    try:
        status, content = _http_get(target, user_agent, auth, timeout_s)
    except SnapshotFetchError as e:
        failure = failure_from_error(e)
        logger.warning("Snapshot backend unreachable for %s: %s", url, failure.reason)
        return FetchResult(url=url, status_code=failure.status_code, failure=failure)

    if status != 200:
        logger.warning("Snapshot backend error. Status: %s Html: %s", status, _preview(content))
        return FetchResult(
            url=url,
            status_code=status,
            failure=Failure(kind="http_status", reason=f"HTTP {status} for {target}", status_code=status),
        )

    return FetchResult(url=url, status_code=status, body=content)


def fetch_with_config(url: str, config: PrerenderConfig) -> FetchResult:
    """``fetch_snapshot`` with backend, credentials, UA and timeout taken from a run config."""
    return fetch_snapshot(
        url,
        backend_url=config.backend_url,
        auth=config.auth,
        user_agent=config.user_agent,
        timeout_s=config.timeout_s,
    )


if __name__ == "__main__":  # pragma: no cover
    import argparse
    import sys

    p = argparse.ArgumentParser(description="Fetch one snapshot from a rendering backend (dev aid).")
    p.add_argument("--backend", required=True)
    p.add_argument("--url", required=True)
    p.add_argument("--auth", default=None)
    p.add_argument("--timeout", type=float, default=60.0)
    args = p.parse_args()

    res = fetch_snapshot(
        args.url,
        backend_url=args.backend,
        auth=BasicAuth.parse(args.auth) if args.auth else None,
        timeout_s=args.timeout,
    )
    if res.ok and res.body is not None:
        sys.stdout.write(res.body.decode("utf-8", errors="replace"))
    else:
        print(f"failed: {res.failure}", file=sys.stderr)
        raise SystemExit(1)
