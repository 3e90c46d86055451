from __future__ import annotations

from datetime import date, time

from roombook.core.entities.room import Room
from roombook.core.entities.schedule import TimeWindow
from roombook.core.repositories.reservation_repository import ReservationRepository
from roombook.core.repositories.room_directory import RoomDirectory
from roombook.core.use_cases.check_conflict import CheckConflictUseCase


class ListAvailableRoomsUseCase:
    """
    ACTIVE rooms with no ACTIVE reservation overlapping the window, in directory order.

    One conflict query per candidate room: O(rooms x reservations per room-day).
    A per-room interval index can replace the query if that stops being small.
    """

    def __init__(self, *, room_directory: RoomDirectory, reservation_repo: ReservationRepository) -> None:
        self._room_directory = room_directory
        self._conflicts = CheckConflictUseCase(reservation_repo=reservation_repo)

    def execute(self, *, date: str | date, start_time: str | time, end_time: str | time) -> list[Room]:
        window = TimeWindow.parse(date, start_time, end_time)
        window.require_ordered()

        return [
            room
            for room in self._room_directory.list_all()
            if room.is_active and self._conflicts.execute(room_id=room.room_id, window=window).ok
        ]
