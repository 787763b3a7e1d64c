"""Deterministic placeholder directory used as the non-empty fallback source.

The rosters below are fixed sample data, not a live feed. Their order and
contents are part of the pipeline's observable output: tests assert on them.
"""

from __future__ import annotations

from typing import NamedTuple

from ..records import BusinessType, CompanyRecord, DataType, SourceName
from .classifier import CategoryClassifier, ProductCategory


class RosterEntry(NamedTuple):
    name: str
    city: str
    state: str
    iec: str | None = None


LARGE_EXPORTERS: tuple[RosterEntry, ...] = (
    RosterEntry("Tata International Limited", "Mumbai", "Maharashtra", "0912345678"),
    RosterEntry("Reliance Industries Limited", "Mumbai", "Maharashtra", "0912345679"),
    RosterEntry("Adani Group", "Ahmedabad", "Gujarat", "0912345680"),
    RosterEntry("Mahindra & Mahindra Limited", "Mumbai", "Maharashtra", "0912345681"),
    RosterEntry("Bharat Heavy Electricals Limited", "New Delhi", "Delhi", "0912345682"),
    RosterEntry("Maruti Suzuki India Limited", "Gurgaon", "Haryana", "0912345683"),
    RosterEntry("Infosys Limited", "Bangalore", "Karnataka", "0912345684"),
    RosterEntry("Wipro Limited", "Bangalore", "Karnataka", "0912345685"),
    RosterEntry("TCS Limited", "Mumbai", "Maharashtra", "0912345686"),
    RosterEntry("HCL Technologies Limited", "Noida", "Uttar Pradesh", "0912345687"),
)
GENERIC_EXPORTER_COUNT = 5

CATEGORY_EXPORTERS: dict[ProductCategory, tuple[RosterEntry, ...]] = {
    ProductCategory.SPICES: (
        RosterEntry("Kerala Spices Company", "Kochi", "Kerala", "0912345688"),
        RosterEntry("Spice Board of India", "Kochi", "Kerala", "0912345689"),
        RosterEntry("ABC Spices Ltd", "Mumbai", "Maharashtra", "0912345690"),
        RosterEntry("XYZ Agro Products", "Delhi", "Delhi", "0912345691"),
    ),
    ProductCategory.TEXTILES: (
        RosterEntry("Arvind Limited", "Ahmedabad", "Gujarat", "0912345692"),
        RosterEntry("Welspun India Limited", "Mumbai", "Maharashtra", "0912345693"),
        RosterEntry("Raymond Limited", "Mumbai", "Maharashtra", "0912345694"),
    ),
    ProductCategory.ELECTRONICS: (
        RosterEntry("Samsung India Electronics", "Gurgaon", "Haryana", "0912345695"),
        RosterEntry("LG Electronics India", "Noida", "Uttar Pradesh", "0912345696"),
    ),
    ProductCategory.PHARMACEUTICALS: (
        RosterEntry("Sun Pharmaceutical Industries", "Mumbai", "Maharashtra", "0912345697"),
        RosterEntry("Dr. Reddy's Laboratories", "Hyderabad", "Telangana", "0912345698"),
        RosterEntry("Cipla Limited", "Mumbai", "Maharashtra", "0912345699"),
    ),
}

IMPORTERS: tuple[RosterEntry, ...] = (
    RosterEntry("Global Spice Traders", "Chennai", "Tamil Nadu"),
    RosterEntry("Premium Food Processors", "Bangalore", "Karnataka"),
    RosterEntry("International Commodity Traders", "Kolkata", "West Bengal"),
    RosterEntry("Agro Import Solutions", "Hyderabad", "Telangana"),
    RosterEntry("Food Processing Industries", "Pune", "Maharashtra"),
    RosterEntry("Spice Processing Company", "Kochi", "Kerala"),
    RosterEntry("Agricultural Importers", "Indore", "Madhya Pradesh"),
    RosterEntry("Global Food Distributors", "Mumbai", "Maharashtra"),
    RosterEntry("Import Trading Company", "Delhi", "Delhi"),
    RosterEntry("Commodity Import Solutions", "Ahmedabad", "Gujarat"),
)
IMPORTER_COUNT = 8


class SyntheticGenerator:
    """Produce the fixed placeholder roster for an HS code and directory side."""

    def __init__(self, classifier: CategoryClassifier | None = None) -> None:
        self.classifier = classifier or CategoryClassifier()

    def roster(self, hs_code: str, role: BusinessType) -> tuple[RosterEntry, ...]:
        if role is BusinessType.IMPORTER:
            return IMPORTERS[:IMPORTER_COUNT]
        category = self.classifier.classify(hs_code)
        return CATEGORY_EXPORTERS.get(category, LARGE_EXPORTERS[:GENERIC_EXPORTER_COUNT])

    def generate(self, hs_code: str, role: BusinessType) -> list[CompanyRecord]:
        return [
            CompanyRecord(
                company_name=entry.name,
                source=SourceName.SYNTHETIC,
                data_type=DataType.REALISTIC,
                business_type=role,
                hs_code=hs_code,
                iec_code=entry.iec if role is BusinessType.EXPORTER else None,
                city=entry.city,
                state=entry.state,
            )
            for entry in self.roster(hs_code, role)
        ]


__all__ = [
    "CATEGORY_EXPORTERS",
    "IMPORTERS",
    "LARGE_EXPORTERS",
    "RosterEntry",
    "SyntheticGenerator",
]
