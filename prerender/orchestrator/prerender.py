# prerender/orchestrator/prerender.py
"""
Prerender orchestrator: URL list → rendering backend → snapshot files + report.

Run (per URL, strictly in input order)
--------------------------------------
  1) entry = {url}
  2) start timer
  3) fetch via the rendering backend; on HTTP 200 map the URL to a filename,
     write the snapshot, set entry.file
  4) always record http (if any), size and time (2 decimals)
  5) pacing (the default policy sleeps `delay_s`, also after the last URL)

After the loop the report is written once to reports/<YYYY-MM-DD HH:MM:SS>.json
and returned. Progress is not durable mid-run: a crash loses the report.

Errors
------
- Construction raises OutputDirectoryError when the output root is missing or
  not writable; nothing is created in that case.
- After construction nothing raises: backend and filesystem problems end up in
  the report and in the logs.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from prerender.core.fetch.errors import OutputDirectoryError
from prerender.core.fetch.pacing import FixedDelayPacer, Pacer
from prerender.core.fetch.snapshot_fetcher import fetch_with_config
from prerender.core.store.files import human_file_size
from prerender.core.store.layout import ensure_output_tree, is_writable_dir
from prerender.core.store.snapshots import save_snapshot
from prerender.reports.report import ReportAccumulator, list_saved_reports, save_report
from prerender.schemas.models import Failure, FetchResult, PrerenderConfig, RunReport, RunState

logger = logging.getLogger(__name__)

FetchFn = Callable[[str, PrerenderConfig], FetchResult]


class Prerenderer:
    """
    Drives one or more prerender runs for a fixed configuration.

    Attributes:
        config: Immutable run configuration.
        paths:  Output tree (root, reports, snapshots, archives, logs, ...).
        state:  Idle → Running → Completed.
    """

    def __init__(
        self,
        config: PrerenderConfig,
        *,
        pacer: Pacer | None = None,
        fetch: FetchFn = fetch_with_config,
        clock: Callable[[], datetime] = datetime.now,
        timer: Callable[[], float] = time.perf_counter,
    ) -> None:
        output = Path(config.output_dir)
        if not is_writable_dir(output):
            raise OutputDirectoryError(f"Output directory not writable: {output}")

        self.config = config
        self.paths = ensure_output_tree(output)
        self.pacer: Pacer = pacer if pacer is not None else FixedDelayPacer(config.delay_s)
        self.state = RunState.IDLE
        self._fetch = fetch
        self._clock = clock
        self._timer = timer
        self._stop_requested = False

    # ---------- Public API ----------

    def prerender(self) -> RunReport:
        """Run every configured URL once and persist the report."""
        urls = list(self.config.urls)
        self.state = RunState.RUNNING
        self._stop_requested = False
        acc = ReportAccumulator(urls)
        stopped = False

        logger.info("prerender run started: %d urls → %s", len(urls), self.paths["snapshots"])

        for idx, url in enumerate(urls):
            if self._stop_requested:
                logger.warning("stop requested; %d of %d urls left unprocessed", len(urls) - idx, len(urls))
                stopped = True
                break
            self._process_one(acc, idx, url)

        entries = acc.entries()
        saved = save_report(entries, self.paths["reports"], now=self._clock())
        self.state = RunState.COMPLETED

        failed_save = isinstance(saved, Failure)
        report = RunReport(
            entries=entries,
            saved_to=None if failed_save else saved,
            save_failure=saved if failed_save else None,
            stopped_early=stopped,
        )

        logger.info(
            "prerender run finished: %d ok, %d failed, report=%s",
            len(report.succeeded),
            len(report.failed),
            report.saved_to or "not saved",
        )
        return report

    def request_stop(self) -> None:
        """Ask a running ``prerender()`` to stop before its next URL; the partial report is still saved."""
        self._stop_requested = True

    def load_reports(self) -> list[str]:
        return list_saved_reports(self.paths["root"])

    # ---------- Internals ----------

    def _process_one(self, acc: ReportAccumulator, idx: int, url: str) -> None:
        self.pacer.before_request()
        start = self._timer()

        result = self._fetch(url, self.config)

        fields: dict[str, object] = {}
        if result.status_code is not None:
            fields["http"] = result.status_code

        body = result.body if result.ok else None
        fields["size"] = human_file_size(len(body) if body is not None else 0)

        if body is not None:
            written = save_snapshot(url, body, self.paths["root"])
            if isinstance(written, Failure):
                logger.warning("snapshot for %s not stored (%s): %s", url, written.kind, written.reason)
            else:
                fields["file"] = written.name

        fields["time"] = round(self._timer() - start, 2)
        acc.record(idx, **fields)

        self.pacer.after_request()
