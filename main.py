# main.py
"""
Entry Point: prerender-spa

Purpose
-------
Prerender a single-page application for crawlers:
  1) Load the run configuration (--config JSON and/or flags, PRERENDER_* env).
  2) Ask the rendering backend for each URL, one at a time, with a delay between calls.
  3) Store every HTTP 200 snapshot under <output>/snapshots/ and write one JSON
     report under <output>/reports/.

Design
------
- Thin launcher; all commands live in prerender.cli.
- Same behavior as the installed `prerender-spa` console script.

Usage
-----
    python main.py run --output /var/www/prerender/ --backend http://localhost:3000/ \
                       --sitemap public/sitemap.xml --delay 2
    python main.py reports --output /var/www/prerender/
"""

from __future__ import annotations

from prerender.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
