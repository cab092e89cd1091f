"""HTTP controller layer for room inventory endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from backend.controllers.dependencies import get_room_service
from backend.domain.models import RoomSearchCriteria, RoomSnapshot, RoomStatistics
from backend.domain.pricing import DEFAULT_SEASON, StayDates
from backend.services.room_service import (
    DuplicateKeyError,
    InvalidArgumentError,
    RoomNotFoundError,
    RoomService,
)
from backend.utils.logger import get_logger


logger = get_logger(__name__)
router = APIRouter(tags=["rooms"])


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys while keeping snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RoomResponse(CamelModel):
    id: str
    number: str
    type: str
    base_price: float = Field(gt=0.0)
    occupancy: int = Field(gt=0)
    is_available: bool
    amenities: list[str]
    created_at: datetime
    updated_at: datetime


class CreateRoomRequest(CamelModel):
    type: str = Field(min_length=1)
    number: str = Field(min_length=1)
    base_price: float = Field(allow_inf_nan=False)
    occupancy: Optional[int] = None

    @field_validator("number", mode="before")
    @classmethod
    def coerce_number(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class UpdateRoomRequest(CamelModel):
    base_price: Optional[float] = Field(default=None, allow_inf_nan=False)
    occupancy: Optional[int] = None
    is_available: Optional[bool] = None


class AvailabilityRequest(CamelModel):
    is_available: bool


class RoomEnvelope(CamelModel):
    success: bool = True
    data: RoomResponse
    message: Optional[str] = None


class RoomListEnvelope(CamelModel):
    success: bool = True
    data: list[RoomResponse]
    count: int = Field(ge=0)
    type: Optional[str] = None


class SearchCriteriaResponse(CamelModel):
    type: Optional[str] = None
    is_available: Optional[bool] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    occupancy: Optional[int] = None


class SearchEnvelope(CamelModel):
    success: bool = True
    data: list[RoomResponse]
    count: int = Field(ge=0)
    criteria: SearchCriteriaResponse


class MessageEnvelope(CamelModel):
    success: bool = True
    message: str


class StayDatesResponse(CamelModel):
    check_in: str
    check_out: str


class PriceQuoteResponse(CamelModel):
    room_id: str
    season: str
    price: float = Field(ge=0.0)
    dates: Optional[StayDatesResponse] = None


class PriceEnvelope(CamelModel):
    success: bool = True
    data: PriceQuoteResponse


class TypeStatisticsResponse(CamelModel):
    total: int = Field(ge=0)
    available: int = Field(ge=0)
    occupied: int = Field(ge=0)


class StatisticsResponse(CamelModel):
    total: int = Field(ge=0)
    available: int = Field(ge=0)
    occupied: int = Field(ge=0)
    by_type: dict[str, TypeStatisticsResponse]


class StatisticsEnvelope(CamelModel):
    success: bool = True
    data: StatisticsResponse


def _to_response(snapshot: RoomSnapshot) -> RoomResponse:
    return RoomResponse(**snapshot.to_dict())


def _to_list_envelope(
    snapshots: list[RoomSnapshot],
    room_type: Optional[str] = None,
) -> RoomListEnvelope:
    return RoomListEnvelope(
        data=[_to_response(item) for item in snapshots],
        count=len(snapshots),
        type=room_type,
    )


def _to_statistics(stats: RoomStatistics) -> StatisticsResponse:
    return StatisticsResponse(**stats.to_dict())


def _not_found(exc: RoomNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


def _bad_request(exc: Exception) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


def _internal_error(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


@router.get(
    "",
    response_model=RoomListEnvelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
async def list_rooms(service: RoomService = Depends(get_room_service)) -> RoomListEnvelope:
    try:
        return _to_list_envelope(service.get_all_rooms())
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected failure listing rooms")
        raise _internal_error("Failed to list rooms") from exc


@router.post(
    "",
    response_model=RoomEnvelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_room(
    payload: CreateRoomRequest,
    service: RoomService = Depends(get_room_service),
) -> RoomEnvelope:
    try:
        room = service.create_room(
            room_type=payload.type,
            number=payload.number,
            base_price=payload.base_price,
            occupancy=payload.occupancy,
        )
        return RoomEnvelope(data=_to_response(room), message="Room created successfully")
    except (InvalidArgumentError, DuplicateKeyError) as exc:
        raise _bad_request(exc) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected failure creating room")
        raise _internal_error("Failed to create room") from exc


@router.get(
    "/available",
    response_model=RoomListEnvelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
async def list_available_rooms(
    service: RoomService = Depends(get_room_service),
) -> RoomListEnvelope:
    try:
        return _to_list_envelope(service.get_available_rooms())
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected failure listing available rooms")
        raise _internal_error("Failed to list available rooms") from exc


@router.get(
    "/occupied",
    response_model=RoomListEnvelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
async def list_occupied_rooms(
    service: RoomService = Depends(get_room_service),
) -> RoomListEnvelope:
    try:
        return _to_list_envelope(service.get_occupied_rooms())
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected failure listing occupied rooms")
        raise _internal_error("Failed to list occupied rooms") from exc


@router.get(
    "/type/{room_type}",
    response_model=RoomListEnvelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
async def list_rooms_by_type(
    room_type: str,
    service: RoomService = Depends(get_room_service),
) -> RoomListEnvelope:
    try:
        return _to_list_envelope(service.get_rooms_by_type(room_type), room_type=room_type)
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected failure listing rooms by type")
        raise _internal_error("Failed to list rooms by type") from exc


@router.get(
    "/search",
    response_model=SearchEnvelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
async def search_rooms(
    room_type: Optional[str] = Query(default=None, alias="type"),
    is_available: Optional[bool] = Query(default=None, alias="isAvailable"),
    min_price: Optional[float] = Query(default=None, alias="minPrice", allow_inf_nan=False),
    max_price: Optional[float] = Query(default=None, alias="maxPrice", allow_inf_nan=False),
    occupancy: Optional[int] = Query(default=None),
    service: RoomService = Depends(get_room_service),
) -> SearchEnvelope:
    criteria = RoomSearchCriteria(
        room_type=room_type or None,
        is_available=is_available,
        min_price=min_price,
        max_price=max_price,
        occupancy=occupancy,
    )
    try:
        rooms = service.search_rooms(criteria)
        return SearchEnvelope(
            data=[_to_response(item) for item in rooms],
            count=len(rooms),
            criteria=SearchCriteriaResponse(**criteria.to_dict()),
        )
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected failure searching rooms")
        raise _internal_error("Failed to search rooms") from exc


@router.get(
    "/stats/statistics",
    response_model=StatisticsEnvelope,
    status_code=status.HTTP_200_OK,
)
async def room_statistics(
    service: RoomService = Depends(get_room_service),
) -> StatisticsEnvelope:
    try:
        return StatisticsEnvelope(data=_to_statistics(service.get_room_statistics()))
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected failure computing room statistics")
        raise _internal_error("Failed to compute room statistics") from exc


@router.get(
    "/{room_id}",
    response_model=RoomEnvelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
async def get_room(
    room_id: str,
    service: RoomService = Depends(get_room_service),
) -> RoomEnvelope:
    room = service.get_room_by_id(room_id)
    if room is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")
    return RoomEnvelope(data=_to_response(room))


@router.put(
    "/{room_id}",
    response_model=RoomEnvelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
async def update_room(
    room_id: str,
    payload: UpdateRoomRequest,
    service: RoomService = Depends(get_room_service),
) -> RoomEnvelope:
    try:
        room = service.update_room(
            room_id,
            base_price=payload.base_price,
            occupancy=payload.occupancy,
            is_available=payload.is_available,
        )
        return RoomEnvelope(data=_to_response(room), message="Room updated successfully")
    except RoomNotFoundError as exc:
        raise _not_found(exc) from exc
    except InvalidArgumentError as exc:
        raise _bad_request(exc) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected failure updating room")
        raise _internal_error("Failed to update room") from exc


@router.delete(
    "/{room_id}",
    response_model=MessageEnvelope,
    status_code=status.HTTP_200_OK,
)
async def delete_room(
    room_id: str,
    service: RoomService = Depends(get_room_service),
) -> MessageEnvelope:
    try:
        result = service.delete_room(room_id)
        return MessageEnvelope(message=result.message)
    except RoomNotFoundError as exc:
        raise _not_found(exc) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected failure deleting room")
        raise _internal_error("Failed to delete room") from exc


@router.get(
    "/{room_id}/price",
    response_model=PriceEnvelope,
    status_code=status.HTTP_200_OK,
)
async def room_price(
    room_id: str,
    season: str = Query(default=DEFAULT_SEASON),
    check_in: Optional[str] = Query(default=None, alias="checkIn"),
    check_out: Optional[str] = Query(default=None, alias="checkOut"),
    service: RoomService = Depends(get_room_service),
) -> PriceEnvelope:
    dates = (
        StayDates(check_in=check_in, check_out=check_out)
        if check_in and check_out
        else None
    )
    try:
        price = service.calculate_room_price(room_id, season, dates)
        return PriceEnvelope(
            data=PriceQuoteResponse(
                room_id=room_id,
                season=season,
                price=price,
                dates=(
                    StayDatesResponse(check_in=dates.check_in, check_out=dates.check_out)
                    if dates is not None
                    else None
                ),
            )
        )
    except RoomNotFoundError as exc:
        raise _not_found(exc) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected failure calculating room price")
        raise _internal_error("Failed to calculate room price") from exc


@router.put(
    "/{room_id}/availability",
    response_model=RoomEnvelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
async def update_room_availability(
    room_id: str,
    payload: AvailabilityRequest,
    service: RoomService = Depends(get_room_service),
) -> RoomEnvelope:
    try:
        room = service.update_room_availability(room_id, payload.is_available)
        state = "available" if payload.is_available else "occupied"
        return RoomEnvelope(
            data=_to_response(room),
            message=f"Room {room.number} availability updated to {state}",
        )
    except RoomNotFoundError as exc:
        raise _not_found(exc) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected failure updating room availability")
        raise _internal_error("Failed to update room availability") from exc
