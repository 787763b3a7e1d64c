"""Configuration package exports."""

from .loader import ConfigLocator, ConfigRepository
from .models import AggregatorConfig, SourceConfig, default_sources

__all__ = [
    "AggregatorConfig",
    "ConfigLocator",
    "ConfigRepository",
    "SourceConfig",
    "default_sources",
]
