"""Extraction of company candidates from directory markup."""

from __future__ import annotations

from typing import ClassVar

import structlog
from selectolax.parser import HTMLParser

from ..errors import ParseError
from ..records import BusinessType, CompanyRecord, DataType, SourceName

# Labels of form controls that the directory pages render inside table cells
FORM_CONTROL_TERMS = (
    "email",
    "message",
    "captcha",
    "username",
    "password",
    "login",
    "submit",
    "search",
    "query",
    "input",
    "button",
    "form",
    "field",
    "label",
)
MIN_NAME_LENGTH = 4


def is_form_control(text: str) -> bool:
    lowered = text.lower()
    return any(term in lowered for term in FORM_CONTROL_TERMS)


def accept_company_name(text: str) -> bool:
    """Return True when ``text`` looks like a company name rather than page chrome."""

    candidate = text.strip()
    if len(candidate) < MIN_NAME_LENGTH:
        return False
    if ":" in candidate:
        return False
    return not is_form_control(candidate)


class RecordParser:
    """Parse one source's markup into company records using its selectors.

    Subclasses declare the row and name-cell selectors per directory side.
    Name-cell text of every matching node in a row is joined, mirroring how
    the directory pages split a firm name across nested elements.
    """

    source: ClassVar[SourceName]
    row_selectors: ClassVar[dict[BusinessType, str]]
    name_selectors: ClassVar[dict[BusinessType, str]]

    def __init__(
        self,
        max_records: int | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.max_records = max_records
        self.logger = logger or structlog.get_logger("trade_directory.parser").bind(
            source=self.source.value
        )

    def parse(self, raw_body: str, *, hs_code: str, role: BusinessType) -> list[CompanyRecord]:
        try:
            names = self.extract_names(raw_body, role)
        except ParseError as exc:
            self.logger.warning("parse_failed", role=role.value, error=str(exc))
            return []
        return [
            CompanyRecord(
                company_name=name,
                source=self.source,
                data_type=DataType.SCRAPED,
                business_type=role,
                hs_code=hs_code,
            )
            for name in names
        ]

    def extract_names(self, raw_body: str, role: BusinessType) -> list[str]:
        document = self._load(raw_body)
        names: list[str] = []
        try:
            rows = document.css(self.row_selectors[role])
            for row in rows:
                cells = row.css(self.name_selectors[role])
                text = " ".join(" ".join(cell.text() for cell in cells).split())
                if not accept_company_name(text):
                    continue
                names.append(text)
                if self.max_records is not None and len(names) >= self.max_records:
                    break
        except (TypeError, ValueError) as exc:
            raise ParseError(f"selector evaluation failed: {exc}") from exc
        return names

    @staticmethod
    def _load(raw_body: str) -> HTMLParser:
        if not isinstance(raw_body, str) or not raw_body.strip():
            raise ParseError("empty document")
        try:
            return HTMLParser(raw_body)
        except (TypeError, ValueError) as exc:
            raise ParseError(f"unreadable markup: {exc}") from exc


class DGFTRecordParser(RecordParser):
    source = SourceName.DGFT
    row_selectors = {
        BusinessType.EXPORTER: "table tr, .company-row, .exporter-item",
        BusinessType.IMPORTER: "table tr, .company-row, .importer-item",
    }
    name_selectors = {
        BusinessType.EXPORTER: "td:first-child, .company-name, .firm-name",
        BusinessType.IMPORTER: "td:first-child, .company-name, .firm-name",
    }


class TradePortalRecordParser(RecordParser):
    source = SourceName.TRADE_PORTAL
    row_selectors = {
        BusinessType.EXPORTER: ".supplier-item, .exporter-item, table tr",
        BusinessType.IMPORTER: ".buyer-item, .importer-item, table tr",
    }
    name_selectors = {
        BusinessType.EXPORTER: ".supplier-name, .company-name, td:first-child",
        BusinessType.IMPORTER: ".buyer-name, .company-name, td:first-child",
    }


PARSER_REGISTRY: dict[SourceName, type[RecordParser]] = {
    SourceName.DGFT: DGFTRecordParser,
    SourceName.TRADE_PORTAL: TradePortalRecordParser,
}


def build_parser(source: SourceName, max_records: int | None = None) -> RecordParser:
    parser_class = PARSER_REGISTRY.get(source)
    if parser_class is None:
        allowed = ", ".join(sorted(name.value for name in PARSER_REGISTRY))
        raise ValueError(f"No parser registered for source '{source.value}'. Known: {allowed}.")
    return parser_class(max_records=max_records)


__all__ = [
    "DGFTRecordParser",
    "FORM_CONTROL_TERMS",
    "PARSER_REGISTRY",
    "RecordParser",
    "TradePortalRecordParser",
    "accept_company_name",
    "build_parser",
    "is_form_control",
]
