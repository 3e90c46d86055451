from __future__ import annotations

import pytest
from sqlalchemy.orm import sessionmaker

from roombook.core.entities.requester import Requester
from roombook.core.entities.room import RoomStatus
from roombook.core.errors import NotFoundError
from roombook.core.use_cases.manage_directory import RequesterDirectoryUseCase, RoomDirectoryUseCase
from roombook.infrastructure.repositories.requester_directory_impl import RequesterDirectoryImpl
from roombook.tests.fakes import InMemoryRequesterDirectory, InMemoryRoomDirectory


@pytest.fixture()
def requesters(requester_directory: InMemoryRequesterDirectory) -> RequesterDirectoryUseCase:
    return RequesterDirectoryUseCase(requester_directory=requester_directory)


def test_requester_update_overwrites_name_and_email(requesters, requester_directory) -> None:
    updated = requesters.update(requester_id=1, name="Ursula K", email="uk@example.org")

    assert updated == Requester(requester_id=1, name="Ursula K", email="uk@example.org")
    assert requester_directory.get(1) == updated


def test_requester_update_does_not_check_uniqueness(requesters) -> None:
    other = requesters.register(name="Vera", email="vera@example.org")

    requesters.update(requester_id=other.requester_id, name="Ursula", email="ursula@example.org")

    assert [(r.name, r.email) for r in requesters.list_all()] == [
        ("Ursula", "ursula@example.org"),
        ("Ursula", "ursula@example.org"),
    ]


def test_requester_update_unknown_is_not_found(requesters, requester_directory) -> None:
    with pytest.raises(NotFoundError, match="Requester not found: 42"):
        requesters.update(requester_id=42, name="X", email="x@example.org")
    assert len(requester_directory.list_all()) == 1


def test_room_update_unknown_is_not_found(room_directory: InMemoryRoomDirectory) -> None:
    rooms = RoomDirectoryUseCase(room_directory=room_directory)

    with pytest.raises(NotFoundError, match="Room"):
        rooms.update(room_id=99, name="X", capacity=1, status=RoomStatus.ACTIVE)


def test_sqlalchemy_requester_update_flushes_without_committing(session_factory: sessionmaker) -> None:
    db = session_factory()
    try:
        store = RequesterDirectoryImpl(db)
        ada = store.add(Requester(requester_id=None, name="Ada", email="ada@example.org"))
        db.commit()

        store.update(Requester(requester_id=ada.requester_id, name="Ada L", email="al@example.org"))
        assert store.get(ada.requester_id).email == "al@example.org"

        db.rollback()
        assert store.get(ada.requester_id).email == "ada@example.org"

        with pytest.raises(LookupError):
            store.update(Requester(requester_id=999, name="X", email="x@example.org"))
    finally:
        db.close()
