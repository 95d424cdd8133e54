"""Configuration schema models using Pydantic."""

import json
from enum import Enum
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs, unquote, urlsplit

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from .duration import DurationParseError, parse_duration, validate_duration_range

DEFAULT_HOST = "https://eplanning.blm.gov"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class QueryConfig(BaseModel):
    """A free-text search, optionally fanned out across the configured states."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    search_text: str = Field(
        "",
        validation_alias=AliasChoices("search_text", "searchText"),
        description="Text submitted to the upstream search",
    )
    per_state: bool = Field(
        False,
        validation_alias=AliasChoices("per_state", "perState"),
        description="Issue one search per configured state",
    )

    @field_validator("search_text", mode="before")
    @classmethod
    def coerce_search_text(cls, v: Any) -> str:
        """Treat a missing or null search text as empty; the expander skips it."""
        if v is None:
            return ""
        return str(v).strip()


class SearchDefinition(BaseModel):
    """A pre-built advanced search, given inline or inside an ePlanning URL."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field("unnamed", description="Label used in logs and stats")
    adv_search: Optional[Dict[str, Any]] = Field(
        None,
        validation_alias=AliasChoices("adv_search", "advSearch"),
        description="Structured filter expression sent as advSearch",
    )
    url: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("url", "link", "href"),
        description="Search page URL whose advSearch parameter holds the filter",
    )

    def filter_expression(self) -> Optional[Dict[str, Any]]:
        """Return the inline filter, else the one embedded in ``url``."""
        if self.adv_search is not None:
            return self.adv_search
        if not self.url:
            return None
        return parse_adv_search_from_url(self.url)


def parse_adv_search_from_url(url: str) -> Optional[Dict[str, Any]]:
    """Extract the JSON ``advSearch`` query parameter from an ePlanning URL.

    ``parse_qs`` decodes once; links copied from a browser are sometimes
    encoded twice, so a second unquote is tried before giving up.
    """
    try:
        values = parse_qs(urlsplit(url).query).get("advSearch")
    except ValueError:
        return None
    if not values:
        return None

    raw = values[0]
    for candidate in (raw, unquote(raw)):
        try:
            parsed = json.loads(candidate)
        except ValueError:
            continue
        if isinstance(parsed, dict):
            return parsed
    return None


class FeedConfig(BaseModel):
    """Titles and links for generated feeds."""

    title: str = Field(
        "The Overlook — BLM Lands & Realty Watch (National)",
        min_length=1,
        description="National feed title",
    )
    link: str = Field(
        f"{DEFAULT_HOST}/eplanning-ui/home",
        min_length=1,
        description="Channel link for every feed",
    )
    state_title_template: str = Field(
        "The Overlook — BLM Watch ({state})",
        description="Per-state feed title; {state} is replaced with the state label",
    )

    @field_validator("state_title_template")
    @classmethod
    def require_state_placeholder(cls, v: str) -> str:
        if "{state}" not in v:
            raise ValueError("state_title_template must contain '{state}'")
        try:
            v.format(state="NV")
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(
                f"state_title_template may only use the '{{state}}' placeholder: {e!r}"
            ) from e
        return v


class OutputConfig(BaseModel):
    """Where feeds are written."""

    directory: str = Field("docs", min_length=1, description="Output directory")
    national_filename: str = Field("index.xml", min_length=1)
    state_subdirectory: str = Field("by-state", min_length=1)
    summary_filename: str = Field("last-run.json", min_length=1)


class UpstreamConfig(BaseModel):
    """Upstream search endpoints and HTTP settings."""

    host: str = Field(DEFAULT_HOST, description="Base URL used to build project links")
    api_url: str = Field(
        f"{DEFAULT_HOST}/eplanning-ui/search",
        description="Endpoint for structured (JSON) searches",
    )
    search_page_url: str = Field(
        f"{DEFAULT_HOST}/eplanning-ui/search",
        description="Human search page used by the markup and browser fallbacks",
    )
    page_size: int = Field(100, ge=1, le=1000, description="Rows requested per search")
    http_request_timeout: int = Field(
        30, ge=5, le=300, description="Request timeout in seconds"
    )
    user_agent: str = Field("NepaWatch/1.0", min_length=1)

    @field_validator("host", "api_url", "search_page_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        stripped = v.strip().rstrip("/")
        if not stripped.startswith(("http://", "https://")):
            raise ValueError(f"Expected an http(s) URL, got: {v}")
        return stripped

    @field_validator("user_agent")
    @classmethod
    def strip_user_agent(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("user_agent cannot be empty")
        return stripped


class BrowserConfig(BaseModel):
    """Rendered-DOM fallback settings."""

    enabled: bool = Field(False, description="Try a headless browser when HTTP strategies fail")
    wait_seconds: float = Field(
        20, gt=0, le=60, description="Longest wait for project links to render"
    )
    headless: bool = True


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(LogFormat.KEY_VALUE, description="json or key-value")


class AppConfig(BaseModel):
    """Root configuration for a feed build."""

    queries: List[QueryConfig] = Field(default_factory=list)
    states: List[str] = Field(default_factory=list, description="State codes for per-state queries")
    searches: List[SearchDefinition] = Field(default_factory=list)
    feed: FeedConfig = Field(default_factory=FeedConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    upstream: UpstreamConfig = Field(default_factory=UpstreamConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    poll_interval: str = Field("6h", description="Interval between scheduled builds")

    # Computed field
    poll_interval_seconds: Optional[int] = None

    @field_validator("states")
    @classmethod
    def clean_states(cls, v: List[str]) -> List[str]:
        """Strip whitespace and drop blank entries, keeping order."""
        return [str(state).strip() for state in v if state is not None and str(state).strip()]

    @field_validator("poll_interval")
    @classmethod
    def validate_poll_interval(cls, v: str) -> str:
        try:
            validate_duration_range(parse_duration(v))
        except DurationParseError as e:
            raise ValueError(str(e)) from e
        return v

    @model_validator(mode="after")
    def require_work_and_compute_fields(self):
        if not self.queries and not self.searches:
            raise ValueError("Configuration must define at least one of: queries or searches")
        self.poll_interval_seconds = parse_duration(self.poll_interval)
        return self
