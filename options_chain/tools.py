"""Tool handlers shared by the MCP server and the CLI."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from options_chain.models.options import (
    FilterRequest,
    OptionType,
    chain_records,
    first_quote_price,
)
from options_chain.options.chain_filter import build_filtered_chain
from options_chain.providers.base import MarketDataProvider

FIND_OPTIONS_CHAIN_DESCRIPTION = (
    "Query the Tradier API to find options chains based on a symbol on a given "
    "expiration date. Limits the results to options with volume, bid, and ask "
    "greater than 0.10 and strikes within a percentage of the current price"
)
HISTORICAL_PRICES_DESCRIPTION = (
    "Query the Tradier API to find historical prices for a given symbol or option "
    "contract on in a given time range"
)


def find_options_chain(
    provider: MarketDataProvider,
    symbol: str,
    expiration: Optional[str] = None,
    greeks: Optional[bool] = True,
    option_type: OptionType | str | None = OptionType.BOTH,
    strike_percentage: Optional[float] = 10,
    logger: Optional[logging.Logger] = None,
) -> Dict[str, Any]:
    quotes = provider.fetch_quotes(symbol)
    current_price = first_quote_price(quotes)
    chain = provider.fetch_option_chain(symbol, expiration=expiration, greeks=greeks)
    raw_contracts = chain_records(chain)
    if logger is not None:
        logger.info(
            "Fetched %s option records for %s exp=%s (last=%s)",
            len(raw_contracts),
            symbol,
            expiration or "nearest",
            current_price,
        )

    request = FilterRequest(
        underlying_price=current_price,
        percentage=strike_percentage,
        option_type=OptionType.parse(option_type),
        include_greeks=greeks is not False,
    )
    return build_filtered_chain(current_price, raw_contracts, request, logger=logger)


def historical_prices(
    provider: MarketDataProvider,
    symbol: str,
    interval: str = "daily",
    start: Optional[str] = None,
    end: Optional[str] = None,
    session_filter: str = "all",
    logger: Optional[logging.Logger] = None,
) -> Dict[str, Any]:
    payload = provider.fetch_history(
        symbol,
        interval=interval,
        start=start,
        end=end,
        session_filter=session_filter,
    )
    if logger is not None:
        logger.info("Fetched %s history for %s (%s to %s)", interval, symbol, start, end)
    return payload
