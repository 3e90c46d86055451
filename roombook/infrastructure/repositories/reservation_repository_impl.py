from __future__ import annotations

from datetime import date, time

from sqlalchemy import select
from sqlalchemy.orm import Session

from roombook.core.entities.reservation import Reservation, ReservationStatus
from roombook.core.repositories.reservation_repository import ReservationRepository
from roombook.infrastructure.models.models import ReservationModel


class ReservationRepositoryImpl(ReservationRepository):
    def __init__(self, db: Session):
        self.db = db

    def get(self, reservation_id: int) -> Reservation | None:
        row = self.db.get(ReservationModel, reservation_id)
        if row is None:
            return None
        return self._to_entity(row)

    def add(self, reservation: Reservation) -> Reservation:
        row = ReservationModel()
        self._apply(row, reservation)
        self.db.add(row)
        self.db.flush()
        return self._to_entity(row)

    def update(self, reservation: Reservation) -> None:
        row = self.db.get(ReservationModel, reservation.reservation_id)
        if row is None:
            raise LookupError(f"Reservation {reservation.reservation_id!r} does not exist")

        self._apply(row, reservation)
        self.db.flush()

    def list_all(self) -> list[Reservation]:
        return self._list(select(ReservationModel))

    def list_by_requester(self, requester_id: int) -> list[Reservation]:
        return self._list(select(ReservationModel).where(ReservationModel.requester_id == requester_id))

    def list_by_room_and_date(self, room_id: int, on_date: date) -> list[Reservation]:
        return self._list(
            select(ReservationModel)
            .where(ReservationModel.room_id == room_id)
            .where(ReservationModel.reservation_date == on_date)
        )

    def find_overlapping(
        self,
        *,
        room_id: int,
        on_date: date,
        start_time: time,
        end_time: time,
        status: ReservationStatus,
    ) -> list[Reservation]:
        return self._list(
            select(ReservationModel)
            .where(ReservationModel.room_id == room_id)
            .where(ReservationModel.reservation_date == on_date)
            .where(ReservationModel.status == status)
            .where(ReservationModel.start_time < end_time)
            .where(ReservationModel.end_time > start_time)
        )

    def _list(self, stmt) -> list[Reservation]:
        stmt = stmt.order_by(
            ReservationModel.reservation_date,
            ReservationModel.start_time,
            ReservationModel.reservation_id,
        )
        return [self._to_entity(row) for row in self.db.scalars(stmt)]

    @staticmethod
    def _apply(row: ReservationModel, reservation: Reservation) -> None:
        row.room_id = reservation.room_id
        row.requester_id = reservation.requester_id
        row.reservation_date = reservation.date
        row.start_time = reservation.start_time
        row.end_time = reservation.end_time
        row.reason = reservation.reason
        row.status = reservation.status
        row.created_at = reservation.created_at
        row.updated_at = reservation.updated_at

    @staticmethod
    def _to_entity(row: ReservationModel) -> Reservation:
        return Reservation(
            reservation_id=row.reservation_id,
            room_id=row.room_id,
            requester_id=row.requester_id,
            date=row.reservation_date,
            start_time=row.start_time,
            end_time=row.end_time,
            reason=row.reason,
            status=ReservationStatus(row.status) if not isinstance(row.status, ReservationStatus) else row.status,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
