"""Derived fields attached to records after merge and truncation."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Sequence

from ..records import BusinessType, CompanyRecord

EXPORT_BASE_VOLUME = 500_000
IMPORT_BASE_VOLUME = 200_000
EXPORT_STEP = 100_000
IMPORT_STEP = 50_000

# Substring of the lower-cased city -> increment; every match counts
EXPORT_CITY_INCREMENTS: tuple[tuple[str, int], ...] = (
    ("mumbai", 2_000_000),
    ("delhi", 1_500_000),
    ("chennai", 1_000_000),
    ("bangalore", 800_000),
)
IMPORT_CITY_INCREMENTS: tuple[tuple[str, int], ...] = (
    ("mumbai", 800_000),
    ("delhi", 600_000),
    ("chennai", 400_000),
    ("bangalore", 300_000),
)

COMPLIANCE_STATUS = "Verified"
# Placeholder until a real risk model exists
DEFAULT_RISK_SCORE = 0


def _estimate(
    city: str | None, index: int, base: int, increments: tuple[tuple[str, int], ...], step: int
) -> int:
    volume = base
    lowered = (city or "").lower()
    for needle, increment in increments:
        if needle in lowered:
            volume += increment
    return volume + index * step


def estimate_export_volume(record: CompanyRecord, index: int) -> int:
    return _estimate(record.city, index, EXPORT_BASE_VOLUME, EXPORT_CITY_INCREMENTS, EXPORT_STEP)


def estimate_import_volume(record: CompanyRecord, index: int) -> int:
    return _estimate(record.city, index, IMPORT_BASE_VOLUME, IMPORT_CITY_INCREMENTS, IMPORT_STEP)


def default_certifications(record: CompanyRecord) -> tuple[str, ...]:
    certifications = ["FSSAI"]
    name = record.company_name.lower()
    if "organic" in name:
        certifications.extend(("Organic", "NPOP"))
    if "spice" in name:
        certifications.append("HACCP")
    return tuple(certifications)


def default_rating(record: CompanyRecord) -> str:
    city = (record.city or "").lower()
    if "mumbai" in city or "delhi" in city:
        return "A+"
    if "chennai" in city or "bangalore" in city:
        return "A"
    return "B+"


class Enricher:
    """Return enriched copies of records; inputs are left untouched."""

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def enrich(self, records: Sequence[CompanyRecord], role: BusinessType) -> list[CompanyRecord]:
        timestamp = self._clock()
        enriched: list[CompanyRecord] = []
        for index, record in enumerate(records):
            if role is BusinessType.EXPORTER:
                derived = {
                    "volume_estimate": estimate_export_volume(record, index),
                    "certifications": default_certifications(record),
                }
            else:
                derived = {
                    "volume_estimate": estimate_import_volume(record, index),
                    "compliance_rating": default_rating(record),
                }
            enriched.append(
                replace(
                    record,
                    compliance_status=COMPLIANCE_STATUS,
                    risk_score=DEFAULT_RISK_SCORE,
                    last_updated=timestamp,
                    **derived,
                )
            )
        return enriched


__all__ = [
    "Enricher",
    "default_certifications",
    "default_rating",
    "estimate_export_volume",
    "estimate_import_volume",
]
