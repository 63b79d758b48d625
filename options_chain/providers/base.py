"""Provider abstractions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional


class UpstreamError(RuntimeError):
    """Raised when the market-data API answers with a non-success status."""

    def __init__(
        self,
        what: str,
        reason: str,
        params: Mapping[str, Any],
        status_code: Optional[int] = None,
    ) -> None:
        self.what = what
        self.reason = reason
        self.params = dict(params)
        self.status_code = status_code
        super().__init__(f"Failed to fetch {what}: {reason} when using params: {self.params}")


class MarketDataProvider(ABC):
    @abstractmethod
    def ping(self) -> bool:
        """Return True if provider is reachable."""

    @abstractmethod
    def fetch_quotes(self, symbol: str) -> Dict[str, Any]:
        """Fetch the raw quotes payload for a symbol."""

    @abstractmethod
    def fetch_option_chain(
        self,
        symbol: str,
        expiration: Optional[str] = None,
        greeks: Optional[bool] = None,
    ) -> Dict[str, Any]:
        """Fetch the raw options chain payload."""

    @abstractmethod
    def fetch_history(
        self,
        symbol: str,
        interval: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
        session_filter: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Fetch the raw historical prices payload."""
