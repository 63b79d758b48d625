from __future__ import annotations

import logging
from typing import Any, Iterable

from options_chain.models.options import FilterRequest, OptionContract, OptionType
from options_chain.options.strikes import select_significant_strikes

MIN_QUOTE = 0.10


def filter_quality(
    contracts: Iterable[OptionContract],
    option_type: OptionType | str,
) -> list[OptionContract]:
    wanted = OptionType.parse(option_type)
    return [
        contract
        for contract in contracts
        if (wanted is OptionType.BOTH or contract.option_type == wanted.value)
        and contract.volume > 0
        and contract.bid > MIN_QUOTE
        and contract.ask > MIN_QUOTE
    ]


def build_filtered_chain(
    underlying_price: float,
    raw_contracts: Iterable[Any],
    request: FilterRequest,
    logger: logging.Logger | None = None,
) -> dict[str, list[dict[str, Any]]]:
    """Parse, quality-filter and strike-reduce a raw chain into a response payload."""
    if underlying_price != request.underlying_price:
        raise ValueError(
            f"Underlying price {underlying_price} does not match request price {request.underlying_price}"
        )
    contracts = [OptionContract.from_record(record) for record in raw_contracts]
    option_type = OptionType.parse(request.option_type)
    quality = filter_quality(contracts, option_type)
    percentage = request.effective_percentage
    strikes = {contract.strike for contract in quality}
    significant = select_significant_strikes(underlying_price, percentage, strikes)
    retained = [contract for contract in quality if contract.strike in significant]
    if not request.include_greeks:
        retained = [contract.without_greeks() for contract in retained]

    if logger is not None:
        logger.info(
            "Chain filtered: raw=%s quality=%s strikes=%s significant=%s retained=%s "
            "(price=%s pct=%s type=%s)",
            len(contracts),
            len(quality),
            len(strikes),
            len(significant),
            len(retained),
            underlying_price,
            percentage,
            option_type.value,
        )
    return {"option": [contract.to_dict() for contract in retained]}
