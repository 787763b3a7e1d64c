"""Cross-source merge keyed on case-insensitive company name."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from ..records import CompanyRecord


@dataclass
class MergeResult:
    records: list[CompanyRecord] = field(default_factory=list)
    dropped: int = 0


class Deduplicator:
    """Concatenate record lists in priority order, keeping first occurrences.

    Later duplicates are dropped whole; no field-level merge takes place, so
    a scraped record shadows a synthetic one carrying city and IEC data.
    """

    def merge(self, lists_in_priority_order: Iterable[Sequence[CompanyRecord]]) -> list[CompanyRecord]:
        return self.merge_with_stats(lists_in_priority_order).records

    def merge_with_stats(
        self, lists_in_priority_order: Iterable[Sequence[CompanyRecord]]
    ) -> MergeResult:
        result = MergeResult()
        seen: set[str] = set()
        for records in lists_in_priority_order:
            for record in records:
                key = record.name_key
                if key in seen:
                    result.dropped += 1
                    continue
                seen.add(key)
                result.records.append(record)
        return result


__all__ = ["Deduplicator", "MergeResult"]
