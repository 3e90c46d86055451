from __future__ import annotations

from abc import ABC, abstractmethod

from roombook.core.entities.room import Room


class RoomDirectory(ABC):
    """
    Repository interface for the room registry.
    """

    @abstractmethod
    def get(self, room_id: int, *, for_update: bool = False) -> Room | None:
        """
        Return a single room by id, or None if missing.

        `for_update` asks the store to lock the room row until the unit of work ends, so
        concurrent lifecycle operations on the same room are serialised where supported.
        """
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[Room]:
        """All rooms in stable directory order (by id)."""
        raise NotImplementedError

    @abstractmethod
    def add(self, room: Room) -> Room:
        """Insert a room and return it with its assigned id."""
        raise NotImplementedError

    @abstractmethod
    def update(self, room: Room) -> None:
        raise NotImplementedError
