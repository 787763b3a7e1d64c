"""Multi-source exporter/importer directory aggregation."""

from .orchestrator import Aggregator, TradeDirectoryService
from .records import BusinessType, CompanyRecord, DirectoryResponse, SourceName

__all__ = [
    "Aggregator",
    "BusinessType",
    "CompanyRecord",
    "DirectoryResponse",
    "SourceName",
    "TradeDirectoryService",
]
