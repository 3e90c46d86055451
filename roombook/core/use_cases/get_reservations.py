from __future__ import annotations

from datetime import date

from roombook.core.entities.reservation import Reservation
from roombook.core.entities.schedule import parse_date
from roombook.core.errors import NotFoundError
from roombook.core.repositories.reservation_repository import ReservationRepository


class GetReservationUseCase:
    def __init__(self, *, reservation_repo: ReservationRepository) -> None:
        self._reservation_repo = reservation_repo

    def execute(self, *, reservation_id: int) -> Reservation:
        reservation = self._reservation_repo.get(reservation_id)
        if reservation is None:
            raise NotFoundError("Reservation", reservation_id)
        return reservation


class ListReservationsUseCase:
    """Read projections over stored reservations, ordered by date, start time, id."""

    def __init__(self, *, reservation_repo: ReservationRepository) -> None:
        self._reservation_repo = reservation_repo

    def all(self) -> list[Reservation]:
        return self._sorted(self._reservation_repo.list_all())

    def by_requester(self, *, requester_id: int) -> list[Reservation]:
        return self._sorted(self._reservation_repo.list_by_requester(requester_id))

    def by_room_and_date(self, *, room_id: int, on_date: str | date) -> list[Reservation]:
        return self._sorted(self._reservation_repo.list_by_room_and_date(room_id, parse_date(on_date)))

    @staticmethod
    def _sorted(reservations: list[Reservation]) -> list[Reservation]:
        return sorted(reservations, key=lambda r: (r.date, r.start_time, r.reservation_id or 0))
