"""Domain models for the hotel room inventory."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Optional


class RoomType(str, Enum):
    SIMPLE = "simple"
    DOUBLE = "double"
    EXECUTIVE = "executive"
    SUITE = "suite"


@dataclass(frozen=True)
class RoomTypeProfile:
    default_occupancy: int
    amenities: tuple[str, ...]


ROOM_TYPE_PROFILES: dict[RoomType, RoomTypeProfile] = {
    RoomType.SIMPLE: RoomTypeProfile(
        default_occupancy=1,
        amenities=("TV", "WiFi", "Private Bathroom"),
    ),
    RoomType.DOUBLE: RoomTypeProfile(
        default_occupancy=2,
        amenities=("TV", "WiFi", "Private Bathroom", "Two Beds"),
    ),
    RoomType.EXECUTIVE: RoomTypeProfile(
        default_occupancy=2,
        amenities=("TV", "WiFi", "Private Bathroom", "King Bed", "Work Desk", "Mini Bar"),
    ),
    RoomType.SUITE: RoomTypeProfile(
        default_occupancy=4,
        amenities=(
            "TV",
            "WiFi",
            "Private Bathroom",
            "King Bed",
            "Living Room",
            "Mini Bar",
            "Balcony",
        ),
    ),
}


def parse_room_type(value: str | RoomType) -> RoomType:
    """Resolve an exact type tag; raises ``ValueError`` for anything else."""
    if isinstance(value, RoomType):
        return value
    try:
        return RoomType(value)
    except ValueError as exc:
        raise ValueError(f"Invalid room type: {value}") from exc


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def next_timestamp(previous: datetime) -> datetime:
    """Current UTC time, nudged forward so it is strictly after ``previous``."""
    now = utc_now()
    if now <= previous:
        return previous + timedelta(microseconds=1)
    return now


@dataclass(frozen=True)
class RoomSnapshot:
    """Read-only copy of a room handed to every caller outside the repository."""

    id: str
    number: str
    room_type: RoomType
    base_price: float
    occupancy: int
    is_available: bool
    amenities: tuple[str, ...]
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "number": self.number,
            "type": self.room_type.value,
            "base_price": self.base_price,
            "occupancy": self.occupancy,
            "is_available": self.is_available,
            "amenities": list(self.amenities),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass
class Room:
    number: str
    room_type: RoomType
    base_price: float
    occupancy: int
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    is_available: bool = True
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(init=False)

    def __post_init__(self) -> None:
        self.updated_at = self.created_at

    @property
    def amenities(self) -> tuple[str, ...]:
        return ROOM_TYPE_PROFILES[self.room_type].amenities

    def matches_type(self, room_type: str) -> bool:
        return self.room_type.value == room_type.lower()

    def touch(self, at: Optional[datetime] = None) -> datetime:
        self.updated_at = at if at is not None else next_timestamp(self.updated_at)
        return self.updated_at

    def update_status(self, available: bool, at: Optional[datetime] = None) -> None:
        self.is_available = available
        self.touch(at)

    def snapshot(self) -> RoomSnapshot:
        return RoomSnapshot(
            id=self.id,
            number=self.number,
            room_type=self.room_type,
            base_price=self.base_price,
            occupancy=self.occupancy,
            is_available=self.is_available,
            amenities=self.amenities,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


def create_room(
    room_type: str | RoomType,
    number: str,
    base_price: float,
    occupancy: Optional[int] = None,
) -> Room:
    """Build a room whose defaults and amenities come from its type profile."""
    resolved_type = parse_room_type(room_type)
    profile = ROOM_TYPE_PROFILES[resolved_type]
    return Room(
        number=number,
        room_type=resolved_type,
        base_price=base_price,
        occupancy=occupancy if occupancy is not None else profile.default_occupancy,
    )


@dataclass(frozen=True)
class RoomSearchCriteria:
    room_type: Optional[str] = None
    is_available: Optional[bool] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    occupancy: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        """Only the criteria that were actually supplied."""
        supplied = {
            "type": self.room_type,
            "is_available": self.is_available,
            "min_price": self.min_price,
            "max_price": self.max_price,
            "occupancy": self.occupancy,
        }
        return {key: value for key, value in supplied.items() if value is not None}


@dataclass(frozen=True)
class TypeStatistics:
    total: int
    available: int
    occupied: int

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "available": self.available,
            "occupied": self.occupied,
        }


@dataclass(frozen=True)
class RoomStatistics:
    total: int
    available: int
    occupied: int
    by_type: dict[RoomType, TypeStatistics]

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "available": self.available,
            "occupied": self.occupied,
            "by_type": {
                room_type.value: stats.to_dict()
                for room_type, stats in self.by_type.items()
            },
        }


@dataclass(frozen=True)
class DeletionResult:
    room_id: str
    number: str

    @property
    def message(self) -> str:
        return f"Room {self.number} deleted successfully"
