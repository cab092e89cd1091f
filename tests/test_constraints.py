"""Tests for room attribute validation rules."""

from __future__ import annotations

import pytest

from backend.domain.constraints import (
    RoomChanges,
    validate_base_price,
    validate_occupancy,
    validate_room_changes,
)


# --- base_price ---

@pytest.mark.parametrize(
    "base_price",
    [0, 0.0, -0.01, -50, float("nan"), float("inf"), float("-inf")],
)
def test_non_positive_base_price_raises(base_price: float) -> None:
    with pytest.raises(ValueError, match="Base price must be greater than 0"):
        validate_base_price(base_price)


def test_smallest_positive_base_price_passes() -> None:
    validate_base_price(0.01)


# --- occupancy ---

@pytest.mark.parametrize("occupancy", [0, -1])
def test_non_positive_occupancy_raises(occupancy: int) -> None:
    with pytest.raises(ValueError, match="Occupancy must be greater than 0"):
        validate_occupancy(occupancy)


def test_occupancy_of_one_passes() -> None:
    validate_occupancy(1)


# --- partial changes ---

def test_empty_changes_pass() -> None:
    validate_room_changes(RoomChanges())


def test_availability_only_change_passes() -> None:
    validate_room_changes(RoomChanges(is_available=False))


def test_bad_occupancy_is_reported_even_with_valid_price() -> None:
    with pytest.raises(ValueError, match="Occupancy"):
        validate_room_changes(RoomChanges(base_price=99.0, occupancy=0))
