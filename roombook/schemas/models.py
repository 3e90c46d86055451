from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class RoomStatus(Enum):
    ACTIVE = 'ACTIVE'
    INACTIVE = 'INACTIVE'


class ReservationStatus(Enum):
    ACTIVE = 'ACTIVE'
    CANCELLED = 'CANCELLED'


class RoomIn(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    capacity: int = Field(gt=0)
    status: RoomStatus = RoomStatus.ACTIVE


class Room(BaseModel):
    room_id: int
    name: str
    capacity: int
    status: RoomStatus


class RequesterIn(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=150)


class Requester(BaseModel):
    requester_id: int
    name: str
    email: str


class ReservationRequest(BaseModel):
    """Dates travel as `YYYY-MM-DD`, times as 24-hour `HH:MM`; the core parses them."""
    requester_id: int
    room_id: int
    date: str = Field(min_length=1, examples=["2030-01-31"])
    start_time: str = Field(min_length=1, examples=["10:00"])
    end_time: str = Field(min_length=1, examples=["12:00"])
    reason: str = Field(min_length=1, max_length=255)


class Reservation(BaseModel):
    reservation_id: int
    room_id: int
    room_name: str | None
    requester_id: int
    requester_name: str | None
    date: str
    start_time: str
    end_time: str
    reason: str
    status: ReservationStatus
    created_at: datetime
    updated_at: datetime | None = None
