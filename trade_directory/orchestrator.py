"""Aggregation orchestrator wiring together rate limiting, fetching, parsing, merge and enrichment."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

import httpx
import structlog

from .config import AggregatorConfig, SourceConfig
from .engine import (
    Deduplicator,
    Enricher,
    RateLimiter,
    RecordParser,
    SourceFetcher,
    SyntheticGenerator,
    build_parser,
)
from .errors import FetchError, NoDataFoundError
from .records import (
    AggregateResult,
    BusinessType,
    CompanyRecord,
    DirectoryResponse,
    ResponseMetadata,
    SourceName,
    SourceReport,
    TradeOverview,
)

LoggerFactory = Callable[[str], structlog.BoundLogger]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class LiveSource:
    """Fetch settings, fetcher and parser for one live source."""

    config: SourceConfig
    fetcher: SourceFetcher
    parser: RecordParser
    logger: structlog.BoundLogger

    @property
    def name(self) -> SourceName:
        return self.config.source


class Aggregator:
    """Drive one exporter or importer aggregation end to end.

    Live sources are visited strictly one after another in configured priority
    order, each behind the shared rate limiter. A failing source contributes no
    records; the synthetic roster is always appended last, so a correct run
    never ends empty.
    """

    def __init__(
        self,
        config: AggregatorConfig,
        client: httpx.AsyncClient,
        *,
        rate_limiter: RateLimiter | None = None,
        parsers: Mapping[SourceName, RecordParser] | None = None,
        generator: SyntheticGenerator | None = None,
        deduplicator: Deduplicator | None = None,
        enricher: Enricher | None = None,
        clock: Callable[[], datetime] | None = None,
        logger_factory: LoggerFactory | None = None,
    ) -> None:
        self.config = config
        self.rate_limiter = rate_limiter or RateLimiter(config.min_interval_seconds)
        self.generator = generator or SyntheticGenerator()
        self.deduplicator = deduplicator or Deduplicator()
        self.enricher = enricher or Enricher(clock)
        self._clock = clock or _utcnow
        self.logger = structlog.get_logger("trade_directory.aggregator")
        parsers = parsers or {}
        self.sources: list[LiveSource] = []
        for source_config in config.enabled_sources():
            name = source_config.source.value
            source_log = (
                logger_factory(name) if logger_factory else self.logger.bind(source=name)
            )
            self.sources.append(
                LiveSource(
                    config=source_config,
                    fetcher=SourceFetcher(source_config.source, client, logger=source_log),
                    parser=parsers.get(source_config.source)
                    or build_parser(source_config.source, source_config.max_records),
                    logger=source_log,
                )
            )

    async def get_companies(
        self, hs_code: str, role: BusinessType, limit: int | None = None
    ) -> AggregateResult:
        if not hs_code or not hs_code.strip():
            raise ValueError("hs_code is required")
        hs_code = hs_code.strip()
        limit = self.config.default_limit if limit is None else limit
        if limit < 1:
            raise ValueError("limit must be >= 1")
        log = self.logger.bind(hs_code=hs_code, role=role.value)

        collected: list[list[CompanyRecord]] = []
        reports: list[SourceReport] = []
        for live in self.sources:
            records, report = await self._collect(live, hs_code, role)
            collected.append(records)
            reports.append(report)

        synthetic = self.generator.generate(hs_code, role)
        collected.append(synthetic)
        reports.append(SourceReport(SourceName.SYNTHETIC, "ok", len(synthetic)))

        merged = self.deduplicator.merge_with_stats(collected)
        log.info("records_merged", unique=len(merged.records), duplicates=merged.dropped)
        if not merged.records:
            # The synthetic roster is unconditional, so this is a defect, not a data gap
            log.error("no_data_found", sources=[report.as_dict() for report in reports])
            raise NoDataFoundError(hs_code, role.value)

        companies = self.enricher.enrich(merged.records[:limit], role)
        result = AggregateResult(
            hs_code=hs_code,
            role=role,
            companies=companies,
            last_updated=self._clock(),
            source_reports=reports,
        )
        log.info(
            "aggregation_completed",
            total=result.total,
            available=len(merged.records),
            source=result.source,
        )
        return result

    async def _collect(
        self, live: LiveSource, hs_code: str, role: BusinessType
    ) -> tuple[list[CompanyRecord], SourceReport]:
        await self.rate_limiter.wait()
        url = live.config.render_url(hs_code)
        try:
            response = await live.fetcher.fetch(
                url,
                self.config.request_headers(live.config),
                timeout=self.config.timeout_seconds,
            )
        except FetchError as exc:
            live.logger.warning(
                "source_fetch_failed",
                url=url,
                hs_code=hs_code,
                error=str(exc.cause),
            )
            return [], SourceReport(live.name, "failed", error=str(exc.cause))

        try:
            records = live.parser.parse(response.text, hs_code=hs_code, role=role)
        except Exception as exc:  # noqa: BLE001
            live.logger.warning("source_parse_failed", hs_code=hs_code, error=str(exc))
            return [], SourceReport(live.name, "failed", error=str(exc))

        live.logger.info(
            "source_parsed",
            hs_code=hs_code,
            role=role.value,
            records=len(records),
        )
        return records, SourceReport(live.name, "ok", len(records))


class TradeDirectoryService:
    """Public entry points returning success-or-failure envelopes.

    The service owns the rate limiter, so every aggregation it drives, including
    concurrent ones, shares one outbound spacing. Keep a single instance per
    process to rate-limit all traffic to the directory sources.
    """

    metadata_source = "DGFT + Indian Trade Portal + Synthetic Directory"

    def __init__(
        self,
        config: AggregatorConfig | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        rate_limiter: RateLimiter | None = None,
        aggregator: Aggregator | None = None,
        clock: Callable[[], datetime] | None = None,
        logger_factory: LoggerFactory | None = None,
    ) -> None:
        self.config = config or AggregatorConfig()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            follow_redirects=True, timeout=self.config.timeout_seconds
        )
        self._clock = clock or _utcnow
        self.rate_limiter = rate_limiter or RateLimiter(self.config.min_interval_seconds)
        self.aggregator = aggregator or Aggregator(
            self.config,
            self._client,
            rate_limiter=self.rate_limiter,
            clock=self._clock,
            logger_factory=logger_factory,
        )
        self.logger = structlog.get_logger("trade_directory.service")

    async def __aenter__(self) -> "TradeDirectoryService":
        return self

    async def __aexit__(self, *_exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def get_exporters(self, hs_code: str, limit: int | None = None) -> DirectoryResponse:
        return await self._respond(hs_code, BusinessType.EXPORTER, limit)

    async def get_importers(self, hs_code: str, limit: int | None = None) -> DirectoryResponse:
        return await self._respond(hs_code, BusinessType.IMPORTER, limit)

    async def overview(self, hs_code: str, limit: int | None = None) -> TradeOverview:
        exporters, importers = await asyncio.gather(
            self.get_exporters(hs_code, limit),
            self.get_importers(hs_code, limit),
        )
        return TradeOverview(hs_code=hs_code.strip(), exporters=exporters, importers=importers)

    def health(self) -> dict[str, Any]:
        components = {f"{source.name.value}Fetcher": "active" for source in self.aggregator.sources}
        components["syntheticGenerator"] = "active"
        return {
            "service": "TradeDirectoryService",
            "status": "healthy",
            "components": components,
            "minIntervalSeconds": self.rate_limiter.min_interval,
            "lastCheck": self._clock().isoformat(timespec="seconds"),
            "realDataOnly": True,
            "noFallbacks": True,
        }

    async def _respond(
        self, hs_code: str, role: BusinessType, limit: int | None
    ) -> DirectoryResponse:
        try:
            result = await self.aggregator.get_companies(hs_code, role, limit)
        except NoDataFoundError as exc:
            self.logger.error(
                "directory_lookup_failed", hs_code=exc.hs_code, role=role.value, error=str(exc)
            )
            return DirectoryResponse(
                role=role,
                metadata=self._metadata(real_data=False),
                error=f"Failed to get {role.plural_key}: {exc}",
            )
        return DirectoryResponse(role=role, metadata=self._metadata(real_data=True), result=result)

    def _metadata(self, *, real_data: bool) -> ResponseMetadata:
        return ResponseMetadata(
            source=self.metadata_source, real_data=real_data, timestamp=self._clock()
        )


__all__ = ["Aggregator", "LiveSource", "TradeDirectoryService"]
