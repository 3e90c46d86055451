from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from roombook.core.entities.requester import Requester
from roombook.core.repositories.requester_directory import RequesterDirectory
from roombook.infrastructure.models.models import RequesterModel


class RequesterDirectoryImpl(RequesterDirectory):
    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, requester_id: int) -> Requester | None:
        row = self._db.get(RequesterModel, requester_id)
        if row is None:
            return None
        return self._to_entity(row)

    def list_all(self) -> list[Requester]:
        rows = self._db.scalars(select(RequesterModel).order_by(RequesterModel.requester_id))
        return [self._to_entity(row) for row in rows]

    def add(self, requester: Requester) -> Requester:
        row = RequesterModel(name=requester.name, email=requester.email)
        self._db.add(row)
        self._db.flush()
        return self._to_entity(row)

    def update(self, requester: Requester) -> None:
        row = self._db.get(RequesterModel, requester.requester_id)
        if row is None:
            raise LookupError(f"Requester {requester.requester_id!r} does not exist")

        row.name = requester.name
        row.email = requester.email
        self._db.flush()

    @staticmethod
    def _to_entity(row: RequesterModel) -> Requester:
        return Requester(requester_id=row.requester_id, name=row.name, email=row.email)
