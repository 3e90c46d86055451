from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from roombook.core.entities.room import Room, RoomStatus
from roombook.core.repositories.room_directory import RoomDirectory
from roombook.infrastructure.models.models import RoomModel


class RoomDirectoryImpl(RoomDirectory):
    """SQLAlchemy implementation of the room registry. Never commits; the caller owns the transaction."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, room_id: int, *, for_update: bool = False) -> Room | None:
        stmt = select(RoomModel).where(RoomModel.room_id == room_id)
        if for_update:
            stmt = stmt.with_for_update()
        row = self._db.scalars(stmt).one_or_none()
        if row is None:
            return None
        return self._to_entity(row)

    def list_all(self) -> list[Room]:
        rows = self._db.scalars(select(RoomModel).order_by(RoomModel.room_id))
        return [self._to_entity(row) for row in rows]

    def add(self, room: Room) -> Room:
        row = RoomModel(name=room.name, capacity=room.capacity, status=room.status)
        self._db.add(row)
        self._db.flush()
        return self._to_entity(row)

    def update(self, room: Room) -> None:
        row = self._db.get(RoomModel, room.room_id)
        if row is None:
            raise LookupError(f"Room {room.room_id!r} does not exist")

        row.name = room.name
        row.capacity = room.capacity
        row.status = room.status
        self._db.flush()

    @staticmethod
    def _to_entity(row: RoomModel) -> Room:
        return Room(
            room_id=row.room_id,
            name=row.name,
            capacity=row.capacity,
            status=RoomStatus(row.status) if not isinstance(row.status, RoomStatus) else row.status,
        )
