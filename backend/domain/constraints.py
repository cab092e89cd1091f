"""Domain-level validation rules for room attributes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RoomChanges:
    """Partial update payload; ``None`` means the field is left untouched."""

    base_price: Optional[float] = None
    occupancy: Optional[int] = None
    is_available: Optional[bool] = None


def validate_base_price(base_price: float) -> None:
    if not math.isfinite(base_price) or base_price <= 0:
        raise ValueError("Base price must be greater than 0")


def validate_occupancy(occupancy: int) -> None:
    if not math.isfinite(occupancy) or occupancy <= 0:
        raise ValueError("Occupancy must be greater than 0")


def validate_room_changes(changes: RoomChanges) -> None:
    """Check every supplied field before any of them is applied."""
    if changes.base_price is not None:
        validate_base_price(changes.base_price)
    if changes.occupancy is not None:
        validate_occupancy(changes.occupancy)
