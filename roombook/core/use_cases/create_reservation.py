from __future__ import annotations

import logging
from datetime import date, time

from roombook.core.clock import Clock
from roombook.core.entities.reservation import Reservation, ReservationStatus
from roombook.core.entities.schedule import TimeWindow
from roombook.core.errors import NotFoundError, RoomInactive, StartNotInFuture
from roombook.core.repositories.requester_directory import RequesterDirectory
from roombook.core.repositories.reservation_repository import ReservationRepository
from roombook.core.repositories.room_directory import RoomDirectory
from roombook.core.use_cases.check_conflict import CheckConflictUseCase

logger = logging.getLogger(__name__)


class CreateReservationUseCase:
    """
    Books a room for a requester.

    Checks, in order: requester and room exist, room is ACTIVE, end is after start,
    start lies strictly after now, no ACTIVE reservation on the room overlaps.
    Nothing is written unless every check passes.
    """

    def __init__(
        self,
        *,
        room_directory: RoomDirectory,
        requester_directory: RequesterDirectory,
        reservation_repo: ReservationRepository,
        clock: Clock,
    ) -> None:
        self._room_directory = room_directory
        self._requester_directory = requester_directory
        self._reservation_repo = reservation_repo
        self._clock = clock
        self._conflicts = CheckConflictUseCase(reservation_repo=reservation_repo)

    def execute(
        self,
        *,
        requester_id: int,
        room_id: int,
        date: str | date,
        start_time: str | time,
        end_time: str | time,
        reason: str,
    ) -> Reservation:
        if self._requester_directory.get(requester_id) is None:
            raise NotFoundError("Requester", requester_id)

        room = self._room_directory.get(room_id, for_update=True)
        if room is None:
            raise NotFoundError("Room", room_id)
        if not room.is_active:
            raise RoomInactive()

        window = TimeWindow.parse(date, start_time, end_time)
        window.require_ordered()

        now = self._clock.now()
        if not window.starts_after(now):
            raise StartNotInFuture()

        self._conflicts.execute(room_id=room_id, window=window).raise_for_conflict()

        reservation = self._reservation_repo.add(
            Reservation(
                reservation_id=None,
                room_id=room_id,
                requester_id=requester_id,
                date=window.date,
                start_time=window.start_time,
                end_time=window.end_time,
                reason=reason,
                status=ReservationStatus.ACTIVE,
                created_at=now,
            )
        )
        logger.info(
            "Reservation %s created: room=%s date=%s %s-%s",
            reservation.reservation_id,
            room_id,
            window.date,
            window.start_time,
            window.end_time,
        )
        return reservation
