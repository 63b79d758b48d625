import pytest

from options_chain.models.options import (
    FilterRequest,
    Greeks,
    OptionContract,
    OptionType,
    chain_records,
    first_quote_price,
)


def test_contract_from_sparse_record_defaults_fields() -> None:
    contract = OptionContract.from_record({"strike": 450, "option_type": "Put", "volume": "abc"})

    assert contract.symbol == ""
    assert contract.description == ""
    assert contract.last is None
    assert contract.change_percentage is None
    assert contract.volume == 0
    assert contract.bid == 0.0
    assert contract.ask == 0.0
    assert contract.open_interest == 0
    assert contract.strike == 450.0
    assert contract.option_type == "put"
    assert contract.greeks is None


def test_contract_from_non_mapping_is_empty() -> None:
    contract = OptionContract.from_record(None)

    assert contract.strike == 0.0
    assert contract.expiration_date == ""


def test_contract_greeks_default_missing_values() -> None:
    contract = OptionContract.from_record({"strike": 100, "greeks": {"delta": 0.42, "mid_iv": None}})

    assert contract.greeks == Greeks(delta=0.42)


def test_to_dict_omits_absent_greeks() -> None:
    with_greeks = OptionContract.from_record({"strike": 100, "greeks": {"delta": 0.4}})
    without = with_greeks.without_greeks()

    assert with_greeks.to_dict()["greeks"]["delta"] == 0.4
    assert "greeks" not in without.to_dict()
    assert with_greeks.greeks is not None


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"quotes": {"quote": {"symbol": "SPY", "last": 556.12}}}, 556.12),
        ({"quotes": {"quote": [{"last": 10.5}, {"last": 99.0}]}}, 10.5),
        ({"quotes": {"unmatched_symbols": {"symbol": "NOPE"}}}, 0.0),
        ({"quotes": {"quote": {"symbol": "SPY", "last": None}}}, 0.0),
        ({}, 0.0),
        (None, 0.0),
    ],
)
def test_first_quote_price(payload, expected) -> None:
    assert first_quote_price(payload) == expected


def test_chain_records_handles_null_and_single_option() -> None:
    assert chain_records({"options": None}) == []
    assert chain_records({}) == []
    assert chain_records({"options": {"option": {"strike": 5}}}) == [{"strike": 5}]
    assert len(chain_records({"options": {"option": [{"strike": 5}, {"strike": 6}]}})) == 2


def test_option_type_parse() -> None:
    assert OptionType.parse(None) is OptionType.BOTH
    assert OptionType.parse(" Call ") is OptionType.CALL
    with pytest.raises(ValueError):
        OptionType.parse("straddle")


@pytest.mark.parametrize(
    "percentage, expected",
    [(None, 20.0), (10, 10.0), (-3, 0.0), (250, 100.0)],
)
def test_filter_request_effective_percentage(percentage, expected) -> None:
    assert FilterRequest(underlying_price=100, percentage=percentage).effective_percentage == expected
