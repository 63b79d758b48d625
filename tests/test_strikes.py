import pytest

from options_chain.options.strikes import (
    InvalidUnderlyingPriceError,
    classify_strikes,
    compute_bounds,
    is_divisible,
    select_significant_strikes,
    strike_reduction,
)


@pytest.mark.parametrize("price", [1.0, 42.5, 100.0, 556.0, 1234.5])
@pytest.mark.parametrize("percentage", [0.0, 2.5, 10.0, 50.0, 100.0])
def test_bounds_contain_price_and_have_expected_width(price, percentage) -> None:
    lower, upper = compute_bounds(price, percentage)

    assert lower <= price <= upper
    assert upper - lower == pytest.approx(2 * price * percentage / 100)


def test_bounds_for_spy_example() -> None:
    lower, upper = compute_bounds(556, 10)

    assert lower == pytest.approx(500.4)
    assert upper == pytest.approx(611.6)


def test_selection_is_subset_and_idempotent() -> None:
    strikes = {i * 0.5 for i in range(20, 1500)}
    for price, percentage in [(556.0, 30.0), (42.5, 60.0), (250.0, 100.0)]:
        selected = select_significant_strikes(price, percentage, strikes)

        assert selected <= strikes
        assert select_significant_strikes(price, percentage, selected) == selected


def test_at_the_money_kept_and_below_lower_bound_excluded() -> None:
    selected = select_significant_strikes(556, 10, {500, 556})

    assert selected == {556}


def test_far_tier_requires_multiple_of_ten_above_100() -> None:
    selected = select_significant_strikes(556, 20, {610, 612, 615, 620})

    assert 612 not in selected
    assert 615 not in selected
    assert 610 in selected
    assert 620 in selected


def test_near_tier_keeps_even_strikes_only() -> None:
    selected = select_significant_strikes(150, 10, {144, 145, 147.5, 149, 153})

    # 147.5 and 149 sit within 2%, 153 is exactly 2% away.
    assert selected == {144, 147.5, 149, 153}


def test_exact_tier_boundary_falls_into_lower_tier() -> None:
    # Exactly 5% away: the even-strike rule applies, not the whole-number rule.
    selected = select_significant_strikes(100, 10, {95, 105, 106, 106.5})

    assert selected == {106}


def test_price_of_exactly_100_uses_low_price_band() -> None:
    assert select_significant_strikes(100, 10, {93, 94}) == {93, 94}
    assert select_significant_strikes(101, 10, {93, 94, 95}) == {95}


@pytest.mark.parametrize(
    "price, strikes, expected",
    [
        (600, {450, 475}, {450}),
        (500, {375, 400}, {375, 400}),
        (400, {300, 310, 475}, {300}),
        (50, {30, 35, 38}, {30}),
    ],
)
def test_far_out_of_the_money_tiers_scale_with_price(price, strikes, expected) -> None:
    assert select_significant_strikes(price, 50, strikes) == expected


def test_divisibility_tolerance() -> None:
    assert is_divisible(5.005, 5)
    assert is_divisible(4.995, 5)
    assert is_divisible(2.5, 0.5)
    assert not is_divisible(5.02, 5)
    assert not is_divisible(612, 10)


def test_empty_strikes_yield_empty_selection() -> None:
    assert select_significant_strikes(556, 10, set()) == set()
    assert select_significant_strikes(0, 10, []) == set()


@pytest.mark.parametrize("price", [0, -10.0])
def test_non_positive_price_is_rejected(price) -> None:
    with pytest.raises(InvalidUnderlyingPriceError):
        select_significant_strikes(price, 10, {100, 105})


def test_spy_ladder_reduction() -> None:
    ladder = list(range(500, 611))

    selected = select_significant_strikes(556, 10, ladder)

    assert len(ladder) == 111
    assert set(range(545, 568)) <= selected
    assert {530, 544, 568, 582, 505, 525, 585, 610} <= selected
    assert not {500, 501, 529, 531, 583, 584} & selected
    assert len(selected) == 50

    bands = classify_strikes(556, 10, ladder)
    kept_by_tier = {}
    total_by_tier = {}
    for band in bands:
        total_by_tier[band.tier] = total_by_tier.get(band.tier, 0) + 1
        kept_by_tier[band.tier] = kept_by_tier.get(band.tier, 0) + int(band.keep)
    density = [kept_by_tier[tier] / total_by_tier[tier] for tier in ("<=2%", "2-5%", "5-10%")]
    assert density[0] > density[1] > density[2]

    assert strike_reduction(len(ladder), len(selected)) == pytest.approx(54.95, abs=0.01)


def test_classify_strikes_sorted_with_tiers() -> None:
    bands = classify_strikes(556, 10, [612, 556, 530, 500])

    assert [band.strike for band in bands] == [530, 556]
    assert [band.tier for band in bands] == ["2-5%", "<=2%"]
    assert all(band.keep for band in bands)


def test_strike_reduction_handles_empty_ladder() -> None:
    assert strike_reduction(0, 0) == 0.0


def test_ten_and_twenty_percent_boundaries_fall_into_lower_tier() -> None:
    # Exactly 10% away: multiples of 5 survive, not only multiples of 10.
    assert select_significant_strikes(150, 50, {165, 135}) == {165, 135}
    # Exactly 20% away: multiples of 10 survive, not only multiples of 25.
    assert select_significant_strikes(150, 50, {180, 120}) == {180, 120}
