from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RoomStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


@dataclass(slots=True)
class Room:
    room_id: int | None
    name: str
    capacity: int
    status: RoomStatus = RoomStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status is RoomStatus.ACTIVE
