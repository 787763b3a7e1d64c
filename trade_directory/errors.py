"""Exception hierarchy for the aggregation pipeline."""

from __future__ import annotations


class TradeDirectoryError(Exception):
    """Base class for every pipeline error."""


class FetchError(TradeDirectoryError):
    """One live source could not be fetched (network, timeout or non-2xx)."""

    def __init__(self, source: str, cause: str | BaseException) -> None:
        self.source = source
        self.cause = cause
        super().__init__(f"{source}: {cause}")


class ParseError(TradeDirectoryError):
    """Markup returned by a source could not be loaded."""


class NoDataFoundError(TradeDirectoryError):
    """Merged result is empty even after the synthetic fallback ran."""

    def __init__(self, hs_code: str, role: str) -> None:
        self.hs_code = hs_code
        self.role = role
        super().__init__(f"No {role.lower()}s found for HS code {hs_code}")


__all__ = ["FetchError", "NoDataFoundError", "ParseError", "TradeDirectoryError"]
