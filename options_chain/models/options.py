"""Typed option-chain records built from loosely shaped upstream JSON."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any, Optional

DEFAULT_STRIKE_PERCENTAGE = 20.0


class OptionType(str, Enum):
    CALL = "call"
    PUT = "put"
    BOTH = "both"

    @classmethod
    def parse(cls, value: "OptionType | str | None") -> "OptionType":
        if value is None:
            return cls.BOTH
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(f"Unsupported option type: {value}")


@dataclass(frozen=True)
class Greeks:
    delta: float = 0.0
    gamma: float = 0.0
    theta: float = 0.0
    vega: float = 0.0
    mid_iv: float = 0.0

    @classmethod
    def from_record(cls, record: dict) -> "Greeks":
        return cls(
            delta=_coerce_float(record.get("delta")),
            gamma=_coerce_float(record.get("gamma")),
            theta=_coerce_float(record.get("theta")),
            vega=_coerce_float(record.get("vega")),
            mid_iv=_coerce_float(record.get("mid_iv")),
        )


@dataclass(frozen=True)
class OptionContract:
    symbol: str
    description: str
    last: Optional[float]
    volume: int
    bid: float
    ask: float
    underlying: str
    strike: float
    change_percentage: Optional[float]
    open_interest: int
    expiration_date: str
    option_type: str
    greeks: Optional[Greeks] = None

    @classmethod
    def from_record(cls, record: Any) -> "OptionContract":
        """Build a contract from one raw chain entry.

        Missing or non-numeric numbers become 0, missing strings become "",
        and ``last``/``change_percentage`` stay None when absent. Greeks are
        attached only when the record carries a greeks object.
        """
        if not isinstance(record, dict):
            record = {}
        raw_greeks = record.get("greeks")
        return cls(
            symbol=_coerce_str(record.get("symbol")),
            description=_coerce_str(record.get("description")),
            last=_coerce_optional_float(record.get("last")),
            volume=_coerce_int(record.get("volume")),
            bid=_coerce_float(record.get("bid")),
            ask=_coerce_float(record.get("ask")),
            underlying=_coerce_str(record.get("underlying")),
            strike=_coerce_float(record.get("strike")),
            change_percentage=_coerce_optional_float(record.get("change_percentage")),
            open_interest=_coerce_int(record.get("open_interest")),
            expiration_date=_coerce_str(record.get("expiration_date")),
            option_type=_coerce_str(record.get("option_type")).lower(),
            greeks=Greeks.from_record(raw_greeks) if isinstance(raw_greeks, dict) else None,
        )

    def without_greeks(self) -> "OptionContract":
        return replace(self, greeks=None)

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        if self.greeks is None:
            payload.pop("greeks")
        return payload


@dataclass(frozen=True)
class FilterRequest:
    underlying_price: float
    percentage: Optional[float] = None
    option_type: OptionType = OptionType.BOTH
    include_greeks: bool = True

    @property
    def effective_percentage(self) -> float:
        if self.percentage is None:
            return DEFAULT_STRIKE_PERCENTAGE
        return max(0.0, min(100.0, float(self.percentage)))


def first_quote_price(payload: Any) -> float:
    """Return the first quote's ``last`` price from a quotes payload, or 0."""
    quotes = payload.get("quotes") if isinstance(payload, dict) else None
    if not isinstance(quotes, dict):
        return 0.0
    entries = _one_or_many(quotes.get("quote"))
    if not entries or not isinstance(entries[0], dict):
        return 0.0
    return _coerce_float(entries[0].get("last"))


def chain_records(payload: Any) -> list:
    """Return the raw option entries of a chain payload, or an empty list."""
    options = payload.get("options") if isinstance(payload, dict) else None
    if not isinstance(options, dict):
        return []
    return _one_or_many(options.get("option"))


def _one_or_many(value: Any) -> list:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _coerce_float(value: Any) -> float:
    result = _coerce_optional_float(value)
    return 0.0 if result is None else result


def _coerce_optional_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result


def _coerce_int(value: Any) -> int:
    return int(_coerce_float(value))


def _coerce_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
