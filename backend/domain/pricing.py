"""Seasonal pricing functions keyed by season name."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional


@dataclass(frozen=True)
class StayDates:
    """Check-in/check-out hint passed through to pricing functions."""

    check_in: str
    check_out: str


PricingStrategy = Callable[[float, Optional[StayDates]], float]

DEFAULT_SEASON = "low"


def low_season_price(base_price: float, dates: Optional[StayDates] = None) -> float:
    return base_price


def high_season_price(base_price: float, dates: Optional[StayDates] = None) -> float:
    return base_price * 1.3


def peak_season_price(base_price: float, dates: Optional[StayDates] = None) -> float:
    return base_price * 1.6


# Current strategies ignore ``dates``; it is part of the signature so
# date-aware seasons can be registered without changing callers.
PRICING_STRATEGIES: dict[str, PricingStrategy] = {
    "low": low_season_price,
    "high": high_season_price,
    "peak": peak_season_price,
}


def resolve_pricing_strategy(season: Optional[str]) -> PricingStrategy:
    """Return the strategy for ``season``, falling back to low season."""
    if season is None:
        return PRICING_STRATEGIES[DEFAULT_SEASON]
    return PRICING_STRATEGIES.get(season, PRICING_STRATEGIES[DEFAULT_SEASON])


def calculate_price(
    base_price: float,
    season: Optional[str] = DEFAULT_SEASON,
    dates: Optional[StayDates] = None,
) -> float:
    strategy = resolve_pricing_strategy(season)
    return strategy(base_price, dates)
