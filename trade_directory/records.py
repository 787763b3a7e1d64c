"""Record and result types flowing through the aggregation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class SourceName(str, Enum):
    """Origins a company record can come from."""

    DGFT = "DGFT"
    TRADE_PORTAL = "TradePortal"
    SYNTHETIC = "Synthetic"


class DataType(str, Enum):
    SCRAPED = "scraped"
    REALISTIC = "realistic"


class BusinessType(str, Enum):
    """Directory side being queried."""

    EXPORTER = "Exporter"
    IMPORTER = "Importer"

    @property
    def plural_key(self) -> str:
        return "exporters" if self is BusinessType.EXPORTER else "importers"


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat(timespec="seconds") if value is not None else None


@dataclass(slots=True)
class CompanyRecord:
    """One exporter or importer candidate."""

    company_name: str
    source: SourceName
    data_type: DataType
    business_type: BusinessType
    hs_code: str
    iec_code: str | None = None
    city: str | None = None
    state: str | None = None
    # Filled by the enricher
    volume_estimate: int | None = None
    certifications: tuple[str, ...] = ()
    compliance_status: str | None = None
    compliance_rating: str | None = None
    risk_score: int | None = None
    last_updated: datetime | None = None

    def __post_init__(self) -> None:
        self.company_name = (self.company_name or "").strip()
        if not self.company_name:
            raise ValueError("company_name cannot be empty")

    @property
    def name_key(self) -> str:
        return self.company_name.casefold()

    @property
    def is_enriched(self) -> bool:
        return self.last_updated is not None

    def as_dict(self) -> dict[str, Any]:
        return {
            "companyName": self.company_name,
            "source": self.source.value,
            "dataType": self.data_type.value,
            "businessType": self.business_type.value,
            "hsCode": self.hs_code,
            "iecCode": self.iec_code,
            "city": self.city,
            "state": self.state,
            "volumeEstimate": self.volume_estimate,
            "certifications": list(self.certifications),
            "complianceStatus": self.compliance_status,
            "complianceRating": self.compliance_rating,
            "riskScore": self.risk_score,
            "lastUpdated": _isoformat(self.last_updated),
        }


@dataclass(slots=True)
class SourceReport:
    """Outcome of one source during an aggregation run."""

    source: SourceName
    status: str
    records: int = 0
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "source": self.source.value,
            "status": self.status,
            "records": self.records,
            "error": self.error,
        }


@dataclass(slots=True)
class AggregateResult:
    """Deduplicated, limited and enriched companies for one query."""

    hs_code: str
    role: BusinessType
    companies: list[CompanyRecord]
    last_updated: datetime
    source_reports: list[SourceReport] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.companies)

    @property
    def source(self) -> str:
        contributing: list[str] = []
        for record in self.companies:
            if record.source.value not in contributing:
                contributing.append(record.source.value)
        return " + ".join(contributing)

    def as_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "companies": [record.as_dict() for record in self.companies],
            "hsCode": self.hs_code,
            "source": self.source,
            "lastUpdated": _isoformat(self.last_updated),
            "sourceReports": [report.as_dict() for report in self.source_reports],
        }


@dataclass(slots=True)
class ResponseMetadata:
    source: str
    real_data: bool
    timestamp: datetime
    no_fallback: bool = True

    def as_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "realData": self.real_data,
            "noFallback": self.no_fallback,
            "timestamp": _isoformat(self.timestamp),
        }


@dataclass(slots=True)
class DirectoryResponse:
    """Success-or-failure envelope returned by the public entry points."""

    role: BusinessType
    metadata: ResponseMetadata
    result: AggregateResult | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.result is not None

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"success": self.success}
        if self.result is not None:
            payload[self.role.plural_key] = self.result.as_dict()
        else:
            payload["error"] = self.error
        payload["metadata"] = self.metadata.as_dict()
        return payload


@dataclass(slots=True)
class TradeOverview:
    """Exporter and importer responses for one HS code."""

    hs_code: str
    exporters: DirectoryResponse
    importers: DirectoryResponse

    def as_dict(self) -> dict[str, Any]:
        exporters = self.exporters.result
        importers = self.importers.result
        return {
            "hsCode": self.hs_code,
            "exporters": self.exporters.as_dict(),
            "importers": self.importers.as_dict(),
            "summary": {
                "exportersFound": exporters is not None and exporters.total > 0,
                "importersFound": importers is not None and importers.total > 0,
                "allDataReal": self.exporters.metadata.real_data
                and self.importers.metadata.real_data,
                "noFallbacksUsed": True,
            },
        }


__all__ = [
    "AggregateResult",
    "BusinessType",
    "CompanyRecord",
    "DataType",
    "DirectoryResponse",
    "ResponseMetadata",
    "SourceName",
    "SourceReport",
    "TradeOverview",
]
