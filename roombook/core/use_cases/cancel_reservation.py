from __future__ import annotations

import logging

from roombook.core.clock import Clock
from roombook.core.entities.reservation import Reservation
from roombook.core.errors import NotFoundError
from roombook.core.repositories.reservation_repository import ReservationRepository

logger = logging.getLogger(__name__)


class CancelReservationUseCase:
    def __init__(self, *, reservation_repo: ReservationRepository, clock: Clock) -> None:
        self._reservation_repo = reservation_repo
        self._clock = clock

    def execute(self, *, reservation_id: int) -> Reservation:
        reservation = self._reservation_repo.get(reservation_id)
        if reservation is None:
            raise NotFoundError("Reservation", reservation_id)

        reservation.cancel(self._clock.now())
        self._reservation_repo.update(reservation)

        logger.info("Reservation %s cancelled", reservation_id)
        return reservation
