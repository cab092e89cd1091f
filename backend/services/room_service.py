"""Business logic for room inventory queries, mutations and pricing."""

from __future__ import annotations

from typing import Optional

from backend.domain.constraints import (
    RoomChanges,
    validate_base_price,
    validate_occupancy,
    validate_room_changes,
)
from backend.domain.models import (
    DeletionResult,
    Room,
    RoomSearchCriteria,
    RoomSnapshot,
    RoomStatistics,
    RoomType,
    TypeStatistics,
    create_room,
    next_timestamp,
    parse_room_type,
)
from backend.domain.pricing import DEFAULT_SEASON, StayDates, calculate_price
from backend.repository.room_repository import RoomRepository
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


class RoomServiceError(Exception):
    """Base exception for room inventory failures."""


class InvalidArgumentError(RoomServiceError):
    """Raised for an unknown room type or a non-positive price or occupancy."""


class DuplicateKeyError(RoomServiceError):
    """Raised when a room number is already taken."""


class RoomNotFoundError(RoomServiceError):
    """Raised when a room id does not exist in the collection."""

    def __init__(self, room_id: str) -> None:
        super().__init__(f"Room with ID {room_id} not found")
        self.room_id = room_id


class RoomService:
    """Owns every read and write against the room collection."""

    def __init__(
        self,
        repository: Optional[RoomRepository] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._repository = repository or RoomRepository()

    def initialize(self) -> int:
        if not self._settings.seed_sample_rooms:
            return 0
        return self._repository.seed_sample_rooms()

    def create_room(
        self,
        room_type: str,
        number: str,
        base_price: float,
        occupancy: Optional[int] = None,
    ) -> RoomSnapshot:
        with self._repository.lock:
            if self._repository.find_by_number(number) is not None:
                raise DuplicateKeyError(f"Room number {number} already exists")
            try:
                resolved_type = parse_room_type(room_type)
                validate_base_price(base_price)
                if occupancy is not None:
                    validate_occupancy(occupancy)
            except ValueError as exc:
                raise InvalidArgumentError(str(exc)) from exc

            snapshot = self._repository.add(
                create_room(resolved_type, number, base_price, occupancy)
            )
        logger.info("Created %s room %s (%s)", snapshot.room_type.value, snapshot.number, snapshot.id)
        return snapshot

    def get_all_rooms(self) -> list[RoomSnapshot]:
        return self._repository.list_all()

    def get_room_by_id(self, room_id: str) -> Optional[RoomSnapshot]:
        return self._repository.find_by_id(room_id)

    def get_room_by_number(self, number: str) -> Optional[RoomSnapshot]:
        return self._repository.find_by_number(number)

    def update_room(
        self,
        room_id: str,
        base_price: Optional[float] = None,
        occupancy: Optional[int] = None,
        is_available: Optional[bool] = None,
    ) -> RoomSnapshot:
        """Apply only the supplied fields, stamping ``updated_at`` once."""
        changes = RoomChanges(
            base_price=base_price,
            occupancy=occupancy,
            is_available=is_available,
        )

        def apply(room: Room) -> None:
            stamp = next_timestamp(room.updated_at)
            if changes.base_price is not None:
                room.base_price = changes.base_price
            if changes.occupancy is not None:
                room.occupancy = changes.occupancy
            if changes.is_available is not None:
                room.update_status(changes.is_available, at=stamp)
            room.touch(stamp)

        with self._repository.lock:
            if self._repository.find_by_id(room_id) is None:
                raise RoomNotFoundError(room_id)
            try:
                validate_room_changes(changes)
            except ValueError as exc:
                raise InvalidArgumentError(str(exc)) from exc
            snapshot = self._repository.mutate(room_id, apply)
        if snapshot is None:
            raise RoomNotFoundError(room_id)
        logger.info("Updated room %s", snapshot.number)
        return snapshot

    def delete_room(self, room_id: str) -> DeletionResult:
        removed = self._repository.remove(room_id)
        if removed is None:
            raise RoomNotFoundError(room_id)
        logger.info("Deleted room %s (%s)", removed.number, removed.id)
        return DeletionResult(room_id=removed.id, number=removed.number)

    def get_rooms_by_type(self, room_type: str) -> list[RoomSnapshot]:
        return self._repository.filter(lambda room: room.matches_type(room_type))

    def get_available_rooms(self) -> list[RoomSnapshot]:
        return self._repository.filter(lambda room: room.is_available)

    def get_occupied_rooms(self) -> list[RoomSnapshot]:
        return self._repository.filter(lambda room: not room.is_available)

    def calculate_room_price(
        self,
        room_id: str,
        season: Optional[str] = DEFAULT_SEASON,
        dates: Optional[StayDates] = None,
    ) -> float:
        """Price for ``season``; unknown seasons are priced as low season."""
        room = self._repository.find_by_id(room_id)
        if room is None:
            raise RoomNotFoundError(room_id)
        return calculate_price(room.base_price, season, dates)

    def update_room_availability(self, room_id: str, is_available: bool) -> RoomSnapshot:
        snapshot = self._repository.mutate(
            room_id,
            lambda room: room.update_status(is_available),
        )
        if snapshot is None:
            raise RoomNotFoundError(room_id)
        logger.info(
            "Room %s marked %s",
            snapshot.number,
            "available" if is_available else "occupied",
        )
        return snapshot

    def get_room_statistics(self) -> RoomStatistics:
        rooms = self._repository.list_all()
        by_type: dict[RoomType, TypeStatistics] = {}
        for room_type in RoomType:
            typed = [room for room in rooms if room.room_type is room_type]
            available = sum(1 for room in typed if room.is_available)
            by_type[room_type] = TypeStatistics(
                total=len(typed),
                available=available,
                occupied=len(typed) - available,
            )
        available_total = sum(1 for room in rooms if room.is_available)
        return RoomStatistics(
            total=len(rooms),
            available=available_total,
            occupied=len(rooms) - available_total,
            by_type=by_type,
        )

    def search_rooms(self, criteria: RoomSearchCriteria) -> list[RoomSnapshot]:
        def matches(room: Room) -> bool:
            if criteria.room_type and not room.matches_type(criteria.room_type):
                return False
            if criteria.is_available is not None and room.is_available != criteria.is_available:
                return False
            if criteria.min_price is not None and room.base_price < criteria.min_price:
                return False
            if criteria.max_price is not None and room.base_price > criteria.max_price:
                return False
            if criteria.occupancy is not None and room.occupancy < criteria.occupancy:
                return False
            return True

        return self._repository.filter(matches)
