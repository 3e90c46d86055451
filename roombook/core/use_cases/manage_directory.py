from __future__ import annotations

import logging

from roombook.core.entities.requester import Requester
from roombook.core.entities.room import Room, RoomStatus
from roombook.core.errors import NotFoundError
from roombook.core.repositories.requester_directory import RequesterDirectory
from roombook.core.repositories.room_directory import RoomDirectory

logger = logging.getLogger(__name__)


class RoomDirectoryUseCase:
    """
    Minimal room registry maintenance. Name uniqueness is not enforced here.
    """

    def __init__(self, *, room_directory: RoomDirectory) -> None:
        self._room_directory = room_directory

    def register(self, *, name: str, capacity: int, status: RoomStatus = RoomStatus.ACTIVE) -> Room:
        room = self._room_directory.add(Room(room_id=None, name=name, capacity=capacity, status=status))
        logger.info("Room %s registered: %r (%s)", room.room_id, room.name, room.status.value)
        return room

    def update(self, *, room_id: int, name: str, capacity: int, status: RoomStatus) -> Room:
        room = self.get(room_id=room_id)
        room.name = name
        room.capacity = capacity
        room.status = status
        self._room_directory.update(room)
        logger.info("Room %s updated: %r (%s)", room.room_id, room.name, room.status.value)
        return room

    def get(self, *, room_id: int) -> Room:
        room = self._room_directory.get(room_id)
        if room is None:
            raise NotFoundError("Room", room_id)
        return room

    def list_all(self) -> list[Room]:
        return self._room_directory.list_all()


class RequesterDirectoryUseCase:
    def __init__(self, *, requester_directory: RequesterDirectory) -> None:
        self._requester_directory = requester_directory

    def register(self, *, name: str, email: str) -> Requester:
        requester = self._requester_directory.add(Requester(requester_id=None, name=name, email=email))
        logger.info("Requester %s registered: %r", requester.requester_id, requester.name)
        return requester

    def update(self, *, requester_id: int, name: str, email: str) -> Requester:
        requester = self.get(requester_id=requester_id)
        requester.name = name
        requester.email = email
        self._requester_directory.update(requester)
        logger.info("Requester %s updated: %r", requester.requester_id, requester.name)
        return requester

    def get(self, *, requester_id: int) -> Requester:
        requester = self._requester_directory.get(requester_id)
        if requester is None:
            raise NotFoundError("Requester", requester_id)
        return requester

    def list_all(self) -> list[Requester]:
        return self._requester_directory.list_all()
