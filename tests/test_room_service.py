from __future__ import annotations

from dataclasses import replace

import pytest

from backend.domain.models import RoomSearchCriteria, RoomType
from backend.repository.room_repository import RoomRepository
from backend.services.room_service import (
    DuplicateKeyError,
    InvalidArgumentError,
    RoomNotFoundError,
    RoomService,
)
from backend.utils.config import get_settings


def _build_service(seed: bool = True) -> RoomService:
    settings = replace(get_settings(), seed_sample_rooms=seed)
    service = RoomService(repository=RoomRepository(), settings=settings)
    service.initialize()
    return service


def _room_id(service: RoomService, number: str) -> str:
    room = service.get_room_by_number(number)
    assert room is not None
    return room.id


def _assert_statistics_consistent(service: RoomService) -> None:
    stats = service.get_room_statistics()
    assert stats.total == stats.available + stats.occupied
    assert sum(item.total for item in stats.by_type.values()) == stats.total
    for item in stats.by_type.values():
        assert item.total == item.available + item.occupied


# --- startup seed ---

def test_seed_creates_eight_rooms_in_fixed_order():
    service = _build_service()
    rooms = service.get_all_rooms()

    assert [room.number for room in rooms] == [
        "101", "102", "201", "202", "301", "302", "401", "402",
    ]
    prices = {room.number: room.base_price for room in rooms}
    assert prices["101"] == 50.0
    assert prices["202"] == 80.0
    assert prices["301"] == 120.0
    assert prices["402"] == 200.0
    assert all(room.is_available for room in rooms)


def test_initialize_is_idempotent():
    service = _build_service()
    assert service.initialize() == 0
    assert len(service.get_all_rooms()) == 8


def test_seed_can_be_disabled():
    service = _build_service(seed=False)
    assert service.get_all_rooms() == []


# --- create ---

def test_create_room_appends_snapshot():
    service = _build_service()
    room = service.create_room("suite", "501", 350.0, 5)

    assert room.room_type is RoomType.SUITE
    assert room.occupancy == 5
    assert service.get_all_rooms()[-1] == room
    assert service.get_room_by_id(room.id) == room


def test_create_room_without_occupancy_uses_type_default():
    service = _build_service()
    assert service.create_room("simple", "103", 55.0).occupancy == 1
    assert service.create_room("suite", "403", 210.0).occupancy == 4


def test_duplicate_number_fails_and_leaves_collection_untouched():
    service = _build_service()
    service.create_room("double", "203", 90.0)
    before = service.get_all_rooms()

    with pytest.raises(DuplicateKeyError, match="Room number 203 already exists"):
        service.create_room("suite", "203", 300.0)

    assert service.get_all_rooms() == before


def test_duplicate_check_runs_before_type_check():
    service = _build_service()
    with pytest.raises(DuplicateKeyError):
        service.create_room("castle", "101", -1.0)


@pytest.mark.parametrize("base_price", [0, 0.0, -10.0, float("nan"), float("inf")])
def test_create_rejects_non_positive_price(base_price):
    service = _build_service()
    with pytest.raises(InvalidArgumentError, match="Base price must be greater than 0"):
        service.create_room("simple", "104", base_price)
    assert service.get_room_by_number("104") is None


def test_create_accepts_smallest_positive_price():
    service = _build_service()
    room = service.create_room("simple", "104", 0.01)
    assert room.base_price == 0.01


def test_create_rejects_unknown_type():
    service = _build_service()
    with pytest.raises(InvalidArgumentError, match="Invalid room type: penthouse"):
        service.create_room("penthouse", "601", 500.0)


def test_create_rejects_explicit_non_positive_occupancy():
    service = _build_service()
    with pytest.raises(InvalidArgumentError, match="Occupancy"):
        service.create_room("double", "204", 80.0, 0)


# --- reads ---

def test_get_all_rooms_is_repeatable_without_mutation():
    service = _build_service()
    assert service.get_all_rooms() == service.get_all_rooms()


def test_missing_room_lookups_return_none():
    service = _build_service()
    assert service.get_room_by_id("does-not-exist") is None
    assert service.get_room_by_number("999") is None


def test_get_rooms_by_type_is_case_insensitive():
    service = _build_service()
    numbers = [room.number for room in service.get_rooms_by_type("EXECUTIVE")]
    assert numbers == ["301", "302"]
    assert service.get_rooms_by_type("executiveroom") == []


def test_available_and_occupied_partition_collection():
    service = _build_service()
    service.update_room_availability(_room_id(service, "202"), False)
    service.update_room_availability(_room_id(service, "401"), False)

    occupied = [room.number for room in service.get_occupied_rooms()]
    available = [room.number for room in service.get_available_rooms()]

    assert occupied == ["202", "401"]
    assert len(available) == 6
    assert set(occupied).isdisjoint(available)


# --- update ---

def test_partial_update_changes_only_supplied_fields():
    service = _build_service()
    room_id = _room_id(service, "201")
    before = service.get_room_by_id(room_id)

    after = service.update_room(room_id, occupancy=3)

    assert after.occupancy == 3
    assert after.base_price == before.base_price
    assert after.is_available == before.is_available
    assert after.updated_at > before.updated_at
    assert after.created_at == before.created_at
    assert after.amenities == before.amenities


def test_update_with_availability_stamps_once():
    service = _build_service()
    room_id = _room_id(service, "301")

    after = service.update_room(room_id, base_price=150.0, is_available=False)

    assert after.base_price == 150.0
    assert after.is_available is False
    assert after.updated_at > after.created_at


def test_invalid_update_is_all_or_nothing():
    service = _build_service()
    room_id = _room_id(service, "102")
    before = service.get_room_by_id(room_id)

    with pytest.raises(InvalidArgumentError):
        service.update_room(room_id, base_price=75.0, occupancy=0)
    with pytest.raises(InvalidArgumentError):
        service.update_room(room_id, base_price=-1.0)

    assert service.get_room_by_id(room_id) == before


@pytest.mark.parametrize("base_price", [float("nan"), float("inf")])
def test_update_rejects_non_finite_price(base_price):
    service = _build_service()
    room_id = _room_id(service, "201")
    before = service.get_room_by_id(room_id)

    with pytest.raises(InvalidArgumentError, match="Base price must be greater than 0"):
        service.update_room(room_id, base_price=base_price)

    assert service.get_room_by_id(room_id) == before
    assert service.get_room_statistics().total == 8


def test_update_unknown_room_raises_not_found():
    service = _build_service()
    with pytest.raises(RoomNotFoundError, match="Room with ID nope not found"):
        service.update_room("nope", occupancy=2)


def test_every_mutation_strictly_increases_updated_at():
    service = _build_service()
    room_id = _room_id(service, "401")
    stamps = [service.get_room_by_id(room_id).updated_at]

    stamps.append(service.update_room_availability(room_id, False).updated_at)
    stamps.append(service.update_room_availability(room_id, True).updated_at)
    stamps.append(service.update_room(room_id).updated_at)
    stamps.append(service.update_room(room_id, base_price=220.0).updated_at)

    assert all(later > earlier for earlier, later in zip(stamps, stamps[1:]))


def test_update_availability_unknown_room_raises_not_found():
    service = _build_service()
    with pytest.raises(RoomNotFoundError):
        service.update_room_availability("missing", True)


# --- delete ---

def test_delete_is_final_and_decrements_total():
    service = _build_service()
    room_id = _room_id(service, "302")
    total_before = service.get_room_statistics().total

    result = service.delete_room(room_id)

    assert result.number == "302"
    assert result.message == "Room 302 deleted successfully"
    assert service.get_room_by_id(room_id) is None
    assert service.get_room_statistics().total == total_before - 1
    with pytest.raises(RoomNotFoundError):
        service.delete_room(room_id)
    with pytest.raises(RoomNotFoundError):
        service.calculate_room_price(room_id, "high")


def test_deleted_number_can_be_reused_with_new_identity():
    service = _build_service()
    old_id = _room_id(service, "101")
    service.delete_room(old_id)

    new_room = service.create_room("simple", "101", 60.0)

    assert new_room.id != old_id
    assert service.get_room_by_id(old_id) is None


# --- pricing ---

@pytest.mark.parametrize(
    ("season", "expected"),
    [("low", 80.0), ("high", 80.0 * 1.3), ("peak", 80.0 * 1.6), ("monsoon", 80.0)],
)
def test_calculate_room_price_by_season(season, expected):
    service = _build_service()
    room_id = _room_id(service, "201")
    before = service.get_room_by_id(room_id)

    assert service.calculate_room_price(room_id, season) == expected
    assert service.get_room_by_id(room_id) == before


def test_calculate_room_price_defaults_to_low_season():
    service = _build_service()
    assert service.calculate_room_price(_room_id(service, "401")) == 200.0


def test_calculate_room_price_unknown_room_raises():
    service = _build_service()
    with pytest.raises(RoomNotFoundError):
        service.calculate_room_price("missing", "peak")


# --- statistics ---

def test_statistics_on_seed_set():
    service = _build_service()
    stats = service.get_room_statistics()

    assert (stats.total, stats.available, stats.occupied) == (8, 8, 0)
    assert set(stats.by_type) == set(RoomType)
    assert all(item.total == 2 for item in stats.by_type.values())


def test_statistics_stay_consistent_across_mutations():
    service = _build_service()
    _assert_statistics_consistent(service)

    suite = service.create_room("suite", "403", 250.0)
    _assert_statistics_consistent(service)
    service.update_room_availability(suite.id, False)
    service.update_room_availability(_room_id(service, "101"), False)
    _assert_statistics_consistent(service)
    service.delete_room(_room_id(service, "102"))
    _assert_statistics_consistent(service)

    stats = service.get_room_statistics()
    assert stats.by_type[RoomType.SUITE].total == 3
    assert stats.by_type[RoomType.SUITE].occupied == 1
    assert stats.by_type[RoomType.SIMPLE].total == 1
    assert stats.occupied == 2


def test_statistics_on_empty_collection_list_every_type():
    service = _build_service(seed=False)
    stats = service.get_room_statistics()

    assert stats.total == 0
    assert all(item.total == 0 for item in stats.by_type.values())
    assert set(stats.to_dict()["by_type"]) == {"simple", "double", "executive", "suite"}


# --- search ---

def test_search_composes_type_availability_and_min_price():
    service = _build_service()
    rooms = service.search_rooms(
        RoomSearchCriteria(room_type="double", is_available=True, min_price=80)
    )
    assert [room.number for room in rooms] == ["201", "202"]


def test_search_without_criteria_returns_everything():
    service = _build_service()
    assert service.search_rooms(RoomSearchCriteria()) == service.get_all_rooms()


def test_search_price_range_and_occupancy():
    service = _build_service()

    in_range = service.search_rooms(RoomSearchCriteria(min_price=80, max_price=120))
    assert [room.number for room in in_range] == ["201", "202", "301", "302"]

    roomy = service.search_rooms(RoomSearchCriteria(occupancy=3))
    assert [room.number for room in roomy] == ["401", "402"]


def test_search_by_availability_and_type_case():
    service = _build_service()
    service.update_room_availability(_room_id(service, "402"), False)

    occupied_suites = service.search_rooms(
        RoomSearchCriteria(room_type="Suite", is_available=False)
    )
    assert [room.number for room in occupied_suites] == ["402"]


def test_search_with_unknown_type_matches_nothing():
    service = _build_service()
    assert service.search_rooms(RoomSearchCriteria(room_type="castle")) == []
