"""MCP server exposing the options-chain and historical-prices tools over stdio."""

import logging
from typing import Any, Dict, Literal, Optional

from mcp.server.fastmcp import FastMCP

from options_chain import tools
from options_chain.providers.base import MarketDataProvider

SERVER_NAME = "options-chain"

logger = logging.getLogger(__name__)


def build_server(provider: MarketDataProvider) -> FastMCP:
    mcp = FastMCP(SERVER_NAME)

    @mcp.tool(name="find-options-chain", description=tools.FIND_OPTIONS_CHAIN_DESCRIPTION)
    def find_options_chain(
        symbol: str,
        expiration: Optional[str] = None,
        greeks: bool = True,
        option_type: Literal["call", "put", "both"] = "both",
        strike_percentage: float = 10,
    ) -> Dict[str, Any]:
        """expiration is YYYY-MM-DD; strike_percentage is the +/- range around the current price."""
        return tools.find_options_chain(
            provider,
            symbol,
            expiration=expiration,
            greeks=greeks,
            option_type=option_type,
            strike_percentage=strike_percentage,
            logger=logger,
        )

    @mcp.tool(name="historical-prices", description=tools.HISTORICAL_PRICES_DESCRIPTION)
    def historical_prices(
        symbol: str,
        start: str,
        end: str,
        interval: Literal["daily", "weekly", "monthly"] = "daily",
        session_filter: Literal["all", "open"] = "all",
    ) -> Dict[str, Any]:
        """symbol may be a stock or an OCC option symbol (ex. AAPL220617C00270000)."""
        return tools.historical_prices(
            provider,
            symbol,
            interval=interval,
            start=start,
            end=end,
            session_filter=session_filter,
            logger=logger,
        )

    return mcp


def serve(provider: MarketDataProvider) -> None:
    mcp = build_server(provider)
    logger.info("Starting %s MCP server on stdio", SERVER_NAME)
    mcp.run(transport="stdio")
