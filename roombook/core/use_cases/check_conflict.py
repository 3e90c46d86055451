from __future__ import annotations

from dataclasses import dataclass, field

from roombook.core.entities.reservation import ReservationStatus
from roombook.core.entities.schedule import TimeWindow
from roombook.core.errors import ScheduleConflict
from roombook.core.repositories.reservation_repository import ReservationRepository


@dataclass(frozen=True, slots=True)
class ConflictCheckResult:
    conflicting_ids: list[int] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.conflicting_ids

    def raise_for_conflict(self) -> None:
        if not self.ok:
            raise ScheduleConflict(self.conflicting_ids)


class CheckConflictUseCase:
    """
    Decides whether a candidate window for a room is admissible against the room's
    ACTIVE reservations on that date.

    The storage query pre-filters on the half-open overlap predicate; the predicate is
    re-applied here so admissibility does not depend on how a store implements it.
    Callers must have checked `window.is_ordered()` first.
    """

    def __init__(self, *, reservation_repo: ReservationRepository) -> None:
        self._reservation_repo = reservation_repo

    def execute(
        self,
        *,
        room_id: int,
        window: TimeWindow,
        exclude_reservation_id: int | None = None,
    ) -> ConflictCheckResult:
        candidates = self._reservation_repo.find_overlapping(
            room_id=room_id,
            on_date=window.date,
            start_time=window.start_time,
            end_time=window.end_time,
            status=ReservationStatus.ACTIVE,
        )

        conflicting = [
            r.reservation_id
            for r in candidates
            if r.reservation_id != exclude_reservation_id
            and r.is_active
            and r.room_id == room_id
            and r.window.overlaps(window)
        ]
        return ConflictCheckResult(conflicting_ids=conflicting)
