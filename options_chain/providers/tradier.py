"""Tradier market data provider."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from options_chain.config import TradierConfig
from options_chain.providers.base import MarketDataProvider, UpstreamError

logger = logging.getLogger(__name__)


@dataclass
class TradierMarketDataProvider(MarketDataProvider):
    config: TradierConfig

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.token}",
            "Accept": "application/json",
        }

    def _get(self, path: str, params: Dict[str, str], what: str) -> Dict[str, Any]:
        url = f"{self.config.base_url}{path}"
        logger.debug("GET %s params=%s", url, params)
        response = requests.get(
            url,
            headers=self._headers(),
            params=params,
            timeout=self.config.timeout_seconds,
        )
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise UpstreamError(what, response.reason, params, response.status_code) from exc
        payload = response.json()
        return payload if isinstance(payload, dict) else {}

    def ping(self) -> bool:
        self._get("/markets/clock", {}, "market clock")
        return True

    def fetch_quotes(self, symbol: str) -> Dict[str, Any]:
        return self._get("/markets/quotes", {"symbols": symbol}, "quote")

    def fetch_option_chain(
        self,
        symbol: str,
        expiration: Optional[str] = None,
        greeks: Optional[bool] = None,
    ) -> Dict[str, Any]:
        params: Dict[str, str] = {}
        if symbol:
            params["symbol"] = symbol
        if expiration:
            params["expiration"] = expiration
        if greeks is not None:
            params["greeks"] = "true" if greeks else "false"
        return self._get("/markets/options/chains", params, "options chain")

    def fetch_history(
        self,
        symbol: str,
        interval: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
        session_filter: Optional[str] = None,
    ) -> Dict[str, Any]:
        candidates = {
            "symbol": symbol,
            "interval": interval,
            "start": start,
            "end": end,
            "session_filter": session_filter,
        }
        params = {key: value for key, value in candidates.items() if value}
        return self._get("/markets/history", params, "historical prices")
