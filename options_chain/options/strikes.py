"""Strike-significance selection.

Near the money every listed strike is kept. Further out only "round" strikes
survive, with the rounding granularity growing with the distance from the
underlying price and with the price level of the underlying itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

DIVISIBILITY_TOLERANCE = 0.01


class InvalidUnderlyingPriceError(ValueError):
    """Raised when strike distances cannot be measured against the price."""


@dataclass(frozen=True)
class StrikeBand:
    strike: float
    distance: float
    tier: str
    keep: bool


def compute_bounds(underlying_price: float, percentage: float) -> tuple[float, float]:
    lower_bound = underlying_price * (1 - percentage / 100)
    upper_bound = underlying_price * (1 + percentage / 100)
    return lower_bound, upper_bound


def is_divisible(strike: float, step: float) -> bool:
    remainder = strike % step
    return remainder < DIVISIBILITY_TOLERANCE or remainder > step - DIVISIBILITY_TOLERANCE


def strike_distance(strike: float, underlying_price: float) -> float:
    return abs(strike - underlying_price) * 100 / underlying_price


def _tier_rule(distance: float, underlying_price: float) -> tuple[str, float | None]:
    """Return the tier label and the required step (None keeps everything, 1 means whole)."""
    if distance <= 2:
        return "<=2%", None
    if distance <= 5:
        return "2-5%", 2
    if distance <= 10:
        return "5-10%", 5 if underlying_price > 100 else 1
    if distance <= 20:
        return "10-20%", 10 if underlying_price > 100 else 5
    if underlying_price > 500:
        return ">20%", 50
    if underlying_price > 100:
        return ">20%", 25
    return ">20%", 10


def _passes(strike: float, step: float | None) -> bool:
    if step is None:
        return True
    if step == 1:
        return float(strike).is_integer()
    return is_divisible(strike, step)


def classify_strikes(
    underlying_price: float,
    percentage: float,
    strikes: Iterable[float],
) -> list[StrikeBand]:
    """Band every in-range strike, sorted ascending, with its keep decision."""
    unique_strikes = sorted(set(strikes))
    if not unique_strikes:
        return []
    if underlying_price <= 0:
        raise InvalidUnderlyingPriceError(
            f"Underlying price must be positive to rank strikes, got {underlying_price}"
        )
    lower_bound, upper_bound = compute_bounds(underlying_price, percentage)
    bands: list[StrikeBand] = []
    for strike in unique_strikes:
        if strike < lower_bound or strike > upper_bound:
            continue
        distance = strike_distance(strike, underlying_price)
        tier, step = _tier_rule(distance, underlying_price)
        bands.append(StrikeBand(strike, distance, tier, _passes(strike, step)))
    return bands


def select_significant_strikes(
    underlying_price: float,
    percentage: float,
    strikes: Iterable[float],
) -> set[float]:
    return {
        band.strike
        for band in classify_strikes(underlying_price, percentage, strikes)
        if band.keep
    }


def strike_reduction(total: int, kept: int) -> float:
    if total <= 0:
        return 0.0
    return (total - kept) / total * 100
