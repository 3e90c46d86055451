from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum

from roombook.core.entities.schedule import TimeWindow
from roombook.core.errors import (
    CancellationWindowClosed,
    ReservationAlreadyCancelled,
    ReservationAlreadyStarted,
)


class ReservationStatus(str, Enum):
    ACTIVE = "ACTIVE"
    CANCELLED = "CANCELLED"


@dataclass(slots=True)
class Reservation:
    """
    A booking of one room by one requester. Room and requester are held by id only.

    "Started" is never stored: it is derived from the schedule and the instant passed in.
    """
    reservation_id: int | None
    room_id: int
    requester_id: int
    date: date
    start_time: time
    end_time: time
    reason: str
    status: ReservationStatus = ReservationStatus.ACTIVE
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def window(self) -> TimeWindow:
        return TimeWindow(date=self.date, start_time=self.start_time, end_time=self.end_time)

    @property
    def is_active(self) -> bool:
        return self.status is ReservationStatus.ACTIVE

    def has_started(self, now: datetime) -> bool:
        return not self.window.starts_after(now)

    def ensure_modifiable(self, now: datetime) -> None:
        if self.status is ReservationStatus.CANCELLED:
            raise ReservationAlreadyCancelled("Cannot modify a cancelled reservation")
        if self.has_started(now):
            raise ReservationAlreadyStarted()

    def reschedule(
        self,
        *,
        room_id: int,
        requester_id: int,
        window: TimeWindow,
        reason: str,
        now: datetime,
    ) -> None:
        self.room_id = room_id
        self.requester_id = requester_id
        self.date = window.date
        self.start_time = window.start_time
        self.end_time = window.end_time
        self.reason = reason
        self.updated_at = now

    def cancel(self, now: datetime) -> None:
        if self.status is ReservationStatus.CANCELLED:
            raise ReservationAlreadyCancelled()
        if self.has_started(now):
            raise CancellationWindowClosed()
        self.status = ReservationStatus.CANCELLED
        self.updated_at = now
