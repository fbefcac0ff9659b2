# prerender/cli.py
"""
Command-line entry point.

Usage
-----
    prerender-spa run --output /var/www/prerender/ --backend http://localhost:3000/ \
                      --sitemap public/sitemap.xml --auth user:pass --delay 2
    prerender-spa run --config prerender.json
    prerender-spa reports --output /var/www/prerender/
    prerender-spa show --output /var/www/prerender/ https://example.com/blog
    prerender-spa error-page --output /var/www/prerender/ 404 --set custom404.html
    prerender-spa log-access --output /var/www/prerender/ 203.0.113.9 "Googlebot/2.1" https://example.com/ 200
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from prerender.core.fetch.errors import ConfigError
from prerender.core.logging_utils import configure_logging
from prerender.core.store.access_log import log_access
from prerender.core.store.error_pages import get_error_page, set_error_page
from prerender.core.store.snapshots import get_snapshot
from prerender.inputs.inputs import ConfigLoader
from prerender.orchestrator.prerender import Prerenderer
from prerender.reports.report import list_saved_reports
from prerender.schemas.models import Failure, PrerenderConfig

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="prerender-spa", description="Prerender SPA URLs through a rendering backend.")
    p.add_argument("--log-file", type=str, default=None, help="Also log to this rotating file.")
    p.add_argument("--verbose", "-v", action="store_true", help="Debug logging.")
    sub = p.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Prerender every URL and save a report.")
    run.add_argument("--config", type=str, default=None, help="Path to JSON config.")
    run.add_argument("--output", type=str, default=None, help="Output directory (must exist and be writable).")
    run.add_argument("--backend", type=str, default=None, help="Rendering backend base URL.")
    run.add_argument("--urls", nargs="*", default=None, help="Target URLs.")
    run.add_argument("--sitemap", type=str, default=None, help="Read target URLs from a local sitemap.xml.")
    run.add_argument("--auth", type=str, default=None, help="Backend Basic auth as user:password.")
    run.add_argument("--delay", type=float, default=None, help="Seconds between backend calls (default 2).")
    run.add_argument("--timeout", type=float, default=None, help="HTTP timeout per backend call in seconds.")

    reports = sub.add_parser("reports", help="List saved run reports.")
    reports.add_argument("--output", type=str, required=True)

    show = sub.add_parser("show", help="Print the stored snapshot of a URL.")
    show.add_argument("--output", type=str, required=True)
    show.add_argument("url")

    page = sub.add_parser("error-page", help="Print or set the 404/500 page.")
    page.add_argument("--output", type=str, required=True)
    page.add_argument("code", type=int, choices=(404, 500))
    page.add_argument("--set", dest="set_from", type=str, default=None, help="HTML file to store as override.")

    access = sub.add_parser("log-access", help="Append one line to today's snapshot access log.")
    access.add_argument("--output", type=str, required=True)
    access.add_argument("ip")
    access.add_argument("user_agent")
    access.add_argument("url")
    access.add_argument("http_code", type=int)

    return p.parse_args(argv)


def _build_config(args: argparse.Namespace) -> PrerenderConfig:
    loader = ConfigLoader()
    if args.config:
        cfg = loader.load(args.config)
        return loader.with_overrides(
            cfg,
            urls=args.urls,
            sitemap=args.sitemap,
            output=args.output,
            backend_url=args.backend,
            auth=args.auth,
            delay=args.delay,
            timeout=args.timeout,
        )

    return loader.build(
        urls=args.urls,
        sitemap=args.sitemap,
        output=args.output,
        backend_url=args.backend,
        auth=args.auth,
        delay=args.delay,
        timeout=args.timeout,
    )


def _cmd_run(args: argparse.Namespace) -> int:
    try:
        cfg = _build_config(args)
        if not cfg.urls:
            raise ConfigError("no URLs to prerender")
        prerenderer = Prerenderer(cfg)
    except ConfigError as e:
        print(f"configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG

    report = prerenderer.prerender()
    print(f"urls: {len(report.entries)} (ok: {len(report.succeeded)}, failed: {len(report.failed)})")
    for entry in report.failed:
        print(f"  failed: {entry.url} (http={entry.http if entry.http is not None else 'n/a'})")

    if report.save_failure is not None:
        print(f"report not saved: {report.save_failure.reason}", file=sys.stderr)
        return EXIT_FAILED
    print(f"report: {report.saved_to}")
    return EXIT_OK


def _cmd_reports(args: argparse.Namespace) -> int:
    for name in list_saved_reports(args.output):
        print(name)
    return EXIT_OK


def _cmd_show(args: argparse.Namespace) -> int:
    html = get_snapshot(args.url, args.output)
    if isinstance(html, Failure):
        print(f"{html.kind}: {html.reason}", file=sys.stderr)
        return EXIT_FAILED
    sys.stdout.write(html.decode("utf-8", errors="replace"))
    return EXIT_OK


def _cmd_error_page(args: argparse.Namespace) -> int:
    if args.set_from:
        src = Path(args.set_from)
        try:
            html = src.read_text(encoding="utf-8")
        except OSError as e:
            print(f"cannot read {src}: {e}", file=sys.stderr)
            return EXIT_FAILED
        return EXIT_OK if set_error_page(args.code, html, args.output) else EXIT_FAILED
    sys.stdout.write(get_error_page(args.code, args.output))
    return EXIT_OK


def _cmd_log_access(args: argparse.Namespace) -> int:
    ok = log_access(args.ip, args.user_agent, args.url, args.http_code, args.output)
    return EXIT_OK if ok else EXIT_FAILED


_COMMANDS = {
    "run": _cmd_run,
    "reports": _cmd_reports,
    "show": _cmd_show,
    "error-page": _cmd_error_page,
    "log-access": _cmd_log_access,
}


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)
    return _COMMANDS[args.command](args)


if __name__ == "__main__":
    raise SystemExit(main())
