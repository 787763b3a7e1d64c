"""Engine components driving fetch → parse → merge → enrich."""

from .classifier import CategoryClassifier, ProductCategory, classify
from .dedup import Deduplicator
from .enricher import Enricher
from .fetcher import FetchResponse, SourceFetcher
from .parser import RecordParser, build_parser
from .rate_limiter import RateLimiter
from .synthetic import SyntheticGenerator

__all__ = [
    "CategoryClassifier",
    "Deduplicator",
    "Enricher",
    "FetchResponse",
    "ProductCategory",
    "RateLimiter",
    "RecordParser",
    "SourceFetcher",
    "SyntheticGenerator",
    "build_parser",
    "classify",
]
