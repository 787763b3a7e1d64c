"""Pydantic models describing the aggregation pipeline configuration."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from pydantic import BaseModel, Field, field_validator, model_validator

from ..records import SourceName

DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
DEFAULT_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"

DGFT_URL = "https://dgft.gov.in/CP/"
TRADE_PORTAL_URL = "https://www.indiantradeportal.in/vs.jsp?pid=1&txthscode={hs_code}"


class SourceConfig(BaseModel):
    """One live directory source queried on every aggregation."""

    source: SourceName
    url_template: str
    headers: dict[str, str] = Field(default_factory=dict)
    max_records: int = 5
    enabled: bool = True

    @field_validator("source")
    @classmethod
    def _reject_synthetic(cls, value: SourceName) -> SourceName:
        if value is SourceName.SYNTHETIC:
            raise ValueError("Synthetic records are generated, not fetched")
        return value

    @model_validator(mode="after")
    def _validate_source(self) -> "SourceConfig":
        if not self.url_template.startswith(("http://", "https://")):
            raise ValueError(f"url_template must be an http(s) URL: {self.url_template}")
        try:
            self.url_template.format(hs_code="0000")
        except (AttributeError, IndexError, KeyError, ValueError) as exc:
            raise ValueError(
                f"url_template may only use the {{hs_code}} placeholder: {self.url_template}"
            ) from exc
        if self.max_records < 1:
            raise ValueError("max_records must be >= 1")
        return self

    def render_url(self, hs_code: str) -> str:
        return self.url_template.format(hs_code=quote(hs_code, safe=""))


def default_sources() -> list[SourceConfig]:
    return [
        SourceConfig(source=SourceName.DGFT, url_template=DGFT_URL),
        SourceConfig(source=SourceName.TRADE_PORTAL, url_template=TRADE_PORTAL_URL),
    ]


class AggregatorConfig(BaseModel):
    """Global controls shared by every aggregation run."""

    min_interval_seconds: float = 2.0
    timeout_seconds: float = 15.0
    default_limit: int = 15
    user_agent: str = DEFAULT_USER_AGENT
    accept: str = DEFAULT_ACCEPT
    # List order is fetch priority
    sources: list[SourceConfig] = Field(default_factory=default_sources)

    @field_validator("min_interval_seconds", mode="before")
    @classmethod
    def _coerce_interval(cls, value: Any) -> float:
        interval = float(value)
        if interval < 0:
            raise ValueError("min_interval_seconds must be non-negative")
        return interval

    @model_validator(mode="after")
    def _validate_limits(self) -> "AggregatorConfig":
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")
        if self.default_limit < 1:
            raise ValueError("default_limit must be >= 1")
        seen: set[SourceName] = set()
        for source in self.sources:
            if source.source in seen:
                raise ValueError(f"Source configured twice: {source.source.value}")
            seen.add(source.source)
        return self

    def enabled_sources(self) -> list[SourceConfig]:
        return [source for source in self.sources if source.enabled]

    def request_headers(self, source: SourceConfig) -> dict[str, str]:
        headers = {"User-Agent": self.user_agent, "Accept": self.accept}
        headers.update(source.headers)
        return headers


__all__ = [
    "AggregatorConfig",
    "DEFAULT_ACCEPT",
    "DEFAULT_USER_AGENT",
    "SourceConfig",
    "default_sources",
]
