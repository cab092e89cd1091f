"""Repository layer owning the in-memory room collection."""

from __future__ import annotations

from dataclasses import dataclass
from threading import RLock
from typing import Callable, List, Optional

from backend.domain.models import Room, RoomSnapshot, RoomType, create_room
from backend.utils.logger import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class SeedRoom:
    room_type: RoomType
    number: str
    base_price: float
    occupancy: int


SAMPLE_ROOMS: tuple[SeedRoom, ...] = (
    SeedRoom(RoomType.SIMPLE, "101", 50.0, 1),
    SeedRoom(RoomType.SIMPLE, "102", 50.0, 1),
    SeedRoom(RoomType.DOUBLE, "201", 80.0, 2),
    SeedRoom(RoomType.DOUBLE, "202", 80.0, 2),
    SeedRoom(RoomType.EXECUTIVE, "301", 120.0, 2),
    SeedRoom(RoomType.EXECUTIVE, "302", 120.0, 2),
    SeedRoom(RoomType.SUITE, "401", 200.0, 4),
    SeedRoom(RoomType.SUITE, "402", 200.0, 4),
)


class RoomRepository:
    """Keeps rooms in insertion order behind a single lock.

    ``Room`` objects never leave this class; callers get ``RoomSnapshot``
    copies, and mutations go through :meth:`mutate`.
    """

    def __init__(self) -> None:
        self._rooms: List[Room] = []
        self._lock = RLock()

    @property
    def lock(self) -> RLock:
        """Held by the service around multi-step check-then-act sequences."""
        return self._lock

    def _find(self, predicate: Callable[[Room], bool]) -> Optional[Room]:
        return next((room for room in self._rooms if predicate(room)), None)

    def list_all(self) -> list[RoomSnapshot]:
        with self._lock:
            return [room.snapshot() for room in self._rooms]

    def filter(self, predicate: Callable[[Room], bool]) -> list[RoomSnapshot]:
        with self._lock:
            return [room.snapshot() for room in self._rooms if predicate(room)]

    def find_by_id(self, room_id: str) -> Optional[RoomSnapshot]:
        with self._lock:
            room = self._find(lambda item: item.id == room_id)
            return room.snapshot() if room is not None else None

    def find_by_number(self, number: str) -> Optional[RoomSnapshot]:
        with self._lock:
            room = self._find(lambda item: item.number == number)
            return room.snapshot() if room is not None else None

    def add(self, room: Room) -> RoomSnapshot:
        with self._lock:
            if self._find(lambda item: item.number == room.number) is not None:
                raise ValueError(f"Room number {room.number} already exists")
            self._rooms.append(room)
            return room.snapshot()

    def mutate(
        self,
        room_id: str,
        mutation: Callable[[Room], None],
    ) -> Optional[RoomSnapshot]:
        """Apply ``mutation`` to the stored room; ``None`` when the id is unknown."""
        with self._lock:
            room = self._find(lambda item: item.id == room_id)
            if room is None:
                return None
            mutation(room)
            return room.snapshot()

    def remove(self, room_id: str) -> Optional[RoomSnapshot]:
        with self._lock:
            for index, room in enumerate(self._rooms):
                if room.id == room_id:
                    del self._rooms[index]
                    return room.snapshot()
            return None

    def seed_sample_rooms(self) -> int:
        """Seed the fixed sample rooms only when the collection is empty."""
        with self._lock:
            if self._rooms:
                logger.info("Rooms already present; skipping sample seed")
                return 0
            for seed in SAMPLE_ROOMS:
                self._rooms.append(
                    create_room(
                        seed.room_type,
                        seed.number,
                        seed.base_price,
                        seed.occupancy,
                    )
                )
            logger.info("Seeded %d sample rooms", len(SAMPLE_ROOMS))
            return len(SAMPLE_ROOMS)
