from __future__ import annotations

import logging
from datetime import date, time

from roombook.core.clock import Clock
from roombook.core.entities.reservation import Reservation
from roombook.core.entities.schedule import TimeWindow
from roombook.core.errors import NotFoundError, RoomInactive, StartNotInFuture
from roombook.core.repositories.requester_directory import RequesterDirectory
from roombook.core.repositories.reservation_repository import ReservationRepository
from roombook.core.repositories.room_directory import RoomDirectory
from roombook.core.use_cases.check_conflict import CheckConflictUseCase

logger = logging.getLogger(__name__)


class ModifyReservationUseCase:
    """
    Replaces room, requester, schedule and reason of an ACTIVE reservation.

    Eligibility is gated on the current (pre-edit) start instant; the proposed start
    must independently lie in the future. The reservation's own interval is excluded
    from the conflict check.
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
        reservation_id: int,
        requester_id: int,
        room_id: int,
        date: str | date,
        start_time: str | time,
        end_time: str | time,
        reason: str,
    ) -> Reservation:
        reservation = self._reservation_repo.get(reservation_id)
        if reservation is None:
            raise NotFoundError("Reservation", reservation_id)

        now = self._clock.now()
        reservation.ensure_modifiable(now)

        if self._requester_directory.get(requester_id) is None:
            raise NotFoundError("Requester", requester_id)

        room = self._room_directory.get(room_id, for_update=True)
        if room is None:
            raise NotFoundError("Room", room_id)
        if not room.is_active:
            raise RoomInactive()

        window = TimeWindow.parse(date, start_time, end_time)
        window.require_ordered()
        if not window.starts_after(now):
            raise StartNotInFuture()

        self._conflicts.execute(
            room_id=room_id,
            window=window,
            exclude_reservation_id=reservation_id,
        ).raise_for_conflict()

        reservation.reschedule(
            room_id=room_id,
            requester_id=requester_id,
            window=window,
            reason=reason,
            now=now,
        )
        self._reservation_repo.update(reservation)

        logger.info(
            "Reservation %s modified: room=%s date=%s %s-%s",
            reservation_id,
            room_id,
            window.date,
            window.start_time,
            window.end_time,
        )
        return reservation
