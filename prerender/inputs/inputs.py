# prerender/inputs/inputs.py
"""
Run configuration loader for prerender-spa.

Goals
-----
- File-first configuration validated with Pydantic (PrerenderConfig).
- URL list given inline or read from a local sitemap.
- Minimal environment-variable overrides for CI/cron convenience.

Supported JSON shape
--------------------
    {
      "urls": ["https://example.com/", "https://example.com/blog"],
      "sitemap": "public/sitemap.xml",
      "output": "/var/www/prerender/",
      "backend_url": "http://localhost:3000/",
      "auth": "user:password",
      "delay": 2,
      "timeout": 60,
      "user_agent": "..."
    }

``urls`` wins over ``sitemap`` when both are present.

Environment overrides (optional)
--------------------------------
- PRERENDER_OUTPUT       -> output
- PRERENDER_BACKEND_URL  -> backend_url
- PRERENDER_AUTH         -> auth ("user:password")
- PRERENDER_DELAY        -> delay (float)
- PRERENDER_TIMEOUT      -> timeout (float)

Public API
----------
- class ConfigLoader:
    - load(path) -> PrerenderConfig
    - load_json(text) -> PrerenderConfig
    - build(**values) -> PrerenderConfig
    - with_overrides(cfg, **kwargs) -> PrerenderConfig (non-destructive copy)
- function load_config(path) -> PrerenderConfig  (convenience)
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

from pydantic import ValidationError

from prerender.core.fetch.errors import ConfigError
from prerender.core.sitemap.reader import read_sitemap
from prerender.schemas.models import BasicAuth, Failure, PrerenderConfig

# JSON key -> PrerenderConfig field
_KEY_MAP = {
    "urls": "urls",
    "output": "output_dir",
    "output_dir": "output_dir",
    "backend_url": "backend_url",
    "backend": "backend_url",
    "auth": "auth",
    "delay": "delay_s",
    "delay_s": "delay_s",
    "timeout": "timeout_s",
    "timeout_s": "timeout_s",
    "user_agent": "user_agent",
}


@dataclass(frozen=True)
class ConfigLoader:
    """
    File-first configuration loader with light env overrides.

    Responsibilities:
        - Read JSON from a file or string
        - Resolve the URL list (inline or sitemap)
        - Apply environment overrides
        - Validate with Pydantic, surfacing problems as ConfigError
    """

    env_prefix: str = "PRERENDER_"

    # ---------- Public API ----------

    def load(self, path: str | Path) -> PrerenderConfig:
        p = Path(path)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {p}")
        if p.suffix.lower() != ".json":
            raise ConfigError(f"Unsupported config format for {p.name}; only .json is supported.")
        try:
            raw = json.loads(p.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Invalid JSON in {p}: {e}") from e
        return self._from_raw(raw, base_dir=p.parent)

    def load_json(self, text: str) -> PrerenderConfig:
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON payload: {e}") from e
        return self._from_raw(raw, base_dir=Path.cwd())

    def build(self, **values: Any) -> PrerenderConfig:
        """
        Build from keyword values using the JSON key names (CLI entry point).

        Explicit values win over PRERENDER_* variables, as with_overrides() does
        on top of a loaded file.
        """
        explicit = {k: v for k, v in values.items() if v is not None}
        return self._from_raw(explicit, base_dir=Path.cwd(), explicit_wins=True)

    def with_overrides(
        self,
        cfg: PrerenderConfig,
        *,
        urls: list[str] | None = None,
        sitemap: str | Path | None = None,
        output: str | Path | None = None,
        backend_url: str | None = None,
        auth: str | None = None,
        delay: float | None = None,
        timeout: float | None = None,
    ) -> PrerenderConfig:
        """
        Return a *new* config with provided non-null overrides applied.
        Does not mutate the original instance; the result is re-validated.
        """
        updates: dict[str, Any] = {}
        if urls:
            updates["urls"] = urls
        elif sitemap is not None:
            updates["urls"] = self._urls_from_sitemap(Path(sitemap), Path.cwd())
        if output is not None:
            updates["output_dir"] = Path(output)
        if backend_url is not None:
            updates["backend_url"] = backend_url
        if auth is not None:
            updates["auth"] = auth
        if delay is not None:
            updates["delay_s"] = delay
        if timeout is not None:
            updates["timeout_s"] = timeout

        if not updates:
            return cfg
        return self._validate({**cfg.model_dump(), **updates})

    # ---------- Internals ----------

    def _from_raw(self, raw: Any, *, base_dir: Path, explicit_wins: bool = False) -> PrerenderConfig:
        if not isinstance(raw, dict):
            raise ConfigError("Config root must be a JSON object.")
        raw = cast(dict[str, Any], raw)

        data: dict[str, Any] = {}
        for key, value in raw.items():
            field = _KEY_MAP.get(key)
            if field is not None:
                data[field] = value

        if not data.get("urls") and raw.get("sitemap"):
            data["urls"] = self._urls_from_sitemap(Path(raw["sitemap"]), base_dir)

        env = self._apply_env_overrides({})
        data = {**env, **data} if explicit_wins else {**data, **env}
        return self._validate(data)

    def _urls_from_sitemap(self, path: Path, base_dir: Path) -> list[str]:
        if not path.is_absolute():
            path = base_dir / path
        urls = read_sitemap(path)
        if isinstance(urls, Failure):
            raise ConfigError(f"Cannot read sitemap {path}: {urls.reason}")
        return urls

    def _apply_env_overrides(self, data: dict[str, Any]) -> dict[str, Any]:
        prefix = self.env_prefix
        out = dict(data)

        output = os.getenv(f"{prefix}OUTPUT")
        if output:
            out["output_dir"] = output

        backend = os.getenv(f"{prefix}BACKEND_URL")
        if backend:
            out["backend_url"] = backend

        auth = os.getenv(f"{prefix}AUTH")
        if auth:
            out["auth"] = auth

        for env_key, field in (("DELAY", "delay_s"), ("TIMEOUT", "timeout_s")):
            val = os.getenv(f"{prefix}{env_key}")
            if val:
                try:
                    out[field] = float(val)
                except ValueError:
                    # Ignore bad value; keep configured one
                    pass

        return out

    def _validate(self, data: dict[str, Any]) -> PrerenderConfig:
        auth = data.get("auth")
        if isinstance(auth, str) and auth:
            try:
                data = {**data, "auth": BasicAuth.parse(auth)}
            except ValueError as e:
                raise ConfigError(str(e)) from e
        try:
            return PrerenderConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Configuration validation failed:\n{e}") from e


# ----------------------------
# Convenience function
# ----------------------------


def load_config(path: str | Path) -> PrerenderConfig:
    """Convenience wrapper for one-shot callers."""
    return ConfigLoader().load(path)
