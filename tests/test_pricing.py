"""Tests for the seasonal pricing table."""

from __future__ import annotations

import pytest

from backend.domain.pricing import (
    PRICING_STRATEGIES,
    StayDates,
    calculate_price,
    high_season_price,
    low_season_price,
    peak_season_price,
    resolve_pricing_strategy,
)


@pytest.mark.parametrize(
    ("season", "multiplier"),
    [("low", 1.0), ("high", 1.3), ("peak", 1.6)],
)
def test_known_seasons_apply_multiplier(season: str, multiplier: float) -> None:
    for base_price in (50.0, 80.0, 120.0, 199.99, 0.01):
        expected = base_price if season == "low" else base_price * multiplier
        assert calculate_price(base_price, season) == expected


def test_low_season_returns_base_price_unchanged() -> None:
    assert low_season_price(123.45) == 123.45


@pytest.mark.parametrize("season", ["winter", "", "HIGH", "Peak", None])
def test_unknown_season_falls_back_to_low(season) -> None:
    assert resolve_pricing_strategy(season) is low_season_price
    assert calculate_price(200.0, season) == 200.0


def test_dates_hint_does_not_change_price() -> None:
    dates = StayDates(check_in="2026-12-20", check_out="2026-12-27")
    assert high_season_price(80.0, dates) == high_season_price(80.0)
    assert peak_season_price(80.0, dates) == 80.0 * 1.6
    assert calculate_price(80.0, "high", dates) == 80.0 * 1.3


def test_strategy_table_is_closed_to_three_seasons() -> None:
    assert set(PRICING_STRATEGIES) == {"low", "high", "peak"}
