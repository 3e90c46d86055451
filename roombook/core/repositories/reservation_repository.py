from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, time

from roombook.core.entities.reservation import Reservation, ReservationStatus


class ReservationRepository(ABC):
    @abstractmethod
    def get(self, reservation_id: int) -> Reservation | None:
        raise NotImplementedError

    @abstractmethod
    def add(self, reservation: Reservation) -> Reservation:
        """Insert a new reservation and return it with its assigned id."""
        raise NotImplementedError

    @abstractmethod
    def update(self, reservation: Reservation) -> None:
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[Reservation]:
        raise NotImplementedError

    @abstractmethod
    def list_by_requester(self, requester_id: int) -> list[Reservation]:
        raise NotImplementedError

    @abstractmethod
    def list_by_room_and_date(self, room_id: int, on_date: date) -> list[Reservation]:
        raise NotImplementedError

    @abstractmethod
    def find_overlapping(
        self,
        *,
        room_id: int,
        on_date: date,
        start_time: time,
        end_time: time,
        status: ReservationStatus,
    ) -> list[Reservation]:
        """
        Reservations on (room_id, on_date) with the given status whose `[start, end)`
        overlaps `[start_time, end_time)`, i.e. `start_time < r.end and r.start < end_time`.
        """
        raise NotImplementedError
