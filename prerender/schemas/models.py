# prerender/schemas/models.py

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Chromium UA; some rendering backends reject requests without a browser-like agent.
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Ubuntu Chromium/56.0.2924.76 Chrome/56.0.2924.76 Safari/537.36"
)

# =========================
# Failures
# =========================

FailureKind = Literal["invalid_url", "transport", "http_status", "parse", "filesystem", "not_found"]


class Failure(BaseModel):
    """
    Tagged failure value returned by operations that never raise.

    Callers check ``isinstance(result, Failure)`` before using a payload.
    """

    model_config = ConfigDict(frozen=True)

    kind: FailureKind = Field(..., description="Failure category.")
    reason: str = Field("", description="Human-readable detail for logs and CLI output.")
    status_code: int | None = Field(None, description="HTTP status when the failure came from a backend response.")

    def __bool__(self) -> bool:
        return False


# =========================
# Configuration
# =========================


class BasicAuth(BaseModel):
    """HTTP Basic credential for the rendering backend."""

    model_config = ConfigDict(frozen=True)

    username: str = Field(..., min_length=1)
    password: str = Field("")

    @field_validator("username", "password")
    @classmethod
    def _latin1_only(cls, v: str) -> str:
        # requests encodes Basic credentials as latin-1
        try:
            v.encode("latin-1")
        except UnicodeEncodeError as e:
            raise ValueError("auth credentials must be latin-1 encodable") from e
        return v

    @classmethod
    def parse(cls, value: str) -> BasicAuth:
        """Build from a ``user:password`` string (password may contain colons)."""
        if ":" not in value:
            raise ValueError("auth must be formatted as 'user:password'")
        user, pwd = value.split(":", 1)
        return cls(username=user, password=pwd)

    def as_tuple(self) -> tuple[str, str]:
        return self.username, self.password

    def __repr__(self) -> str:
        return f"BasicAuth(username={self.username!r}, password='***')"


class PrerenderConfig(BaseModel):
    """
    Immutable run configuration owned by one ``Prerenderer``.

    The output directory must already exist and be writable; the orchestrator
    checks it at construction time, not this model.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="ignore")

    urls: tuple[str, ...] = Field(default_factory=tuple, description="Target URLs, processed in this order.")
    output_dir: Path = Field(..., description="Output root holding snapshots/, reports/, archives/ and logs/.")
    backend_url: str = Field(..., min_length=1, description="Rendering backend base URL; the target URL is appended verbatim.")
    auth: BasicAuth | None = Field(None, description="Optional HTTP Basic credential for the backend.")
    delay_s: float = Field(2.0, ge=0, description="Seconds to wait between two backend calls.")
    timeout_s: float = Field(60.0, gt=0, description="HTTP timeout for one backend call.")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="User-Agent header sent to the backend.")

    @field_validator("auth", mode="before")
    @classmethod
    def _parse_auth(cls, v: object) -> object:
        if isinstance(v, str):
            return BasicAuth.parse(v) if v else None
        return v

    @field_validator("urls", mode="before")
    @classmethod
    def _strip_urls(cls, v: object) -> object:
        if isinstance(v, str):
            v = [v]
        if isinstance(v, (list, tuple)):
            return tuple(str(u).strip() for u in v if str(u).strip())
        return v


# =========================
# Fetch results
# =========================


class FetchResult(BaseModel):
    """Outcome of one backend call: the HTML body on HTTP 200, a Failure otherwise."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="Target URL (not the backend URL).")
    status_code: int | None = Field(None, description="HTTP status; None on transport failure.")
    body: bytes | None = Field(None, description="Snapshot HTML bytes, only set on success.")
    failure: Failure | None = Field(None, description="Why no snapshot was produced.")

    @property
    def ok(self) -> bool:
        return self.failure is None and self.body is not None


# =========================
# Reports
# =========================


class ReportEntry(BaseModel):
    """
    One line of a run report. Field order is the JSON key order.

    ``file`` is only set on success; ``http`` is absent on transport failure.
    """

    model_config = ConfigDict(extra="ignore")

    url: str
    file: str | None = None
    http: int | None = None
    size: str | None = None
    time: float | None = None

    def to_json_dict(self) -> dict[str, object]:
        return self.model_dump(exclude_none=True)


class RunState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


class RunReport(BaseModel):
    """Entries of one prerender run plus where (or whether) they were persisted."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    entries: list[ReportEntry] = Field(default_factory=list)
    saved_to: Path | None = Field(None, description="Report file written at the end of the run.")
    save_failure: Failure | None = Field(None, description="Why the report could not be written.")
    stopped_early: bool = Field(False, description="True when request_stop() ended the run before the last URL.")

    @property
    def saved(self) -> bool:
        return self.saved_to is not None

    @property
    def succeeded(self) -> list[ReportEntry]:
        return [e for e in self.entries if e.file is not None]

    @property
    def failed(self) -> list[ReportEntry]:
        return [e for e in self.entries if e.file is None and e.time is not None]
