from __future__ import annotations

import os
from collections.abc import Iterator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
from starlette.testclient import TestClient

os.environ.setdefault("ROOMBOOK_DATABASE_URL", "sqlite+pysqlite:///:memory:")

from roombook.core.entities.room import Room, RoomStatus
from roombook.core.entities.requester import Requester
from roombook.infrastructure.database import Base, session_scope
from roombook.main import app
from roombook.presentation import routers
from roombook.tests.config_tests import NOW
from roombook.tests.fakes import (
    FakeClock,
    InMemoryRequesterDirectory,
    InMemoryReservationRepository,
    InMemoryRoomDirectory,
)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(NOW)


@pytest.fixture()
def room_directory() -> InMemoryRoomDirectory:
    directory = InMemoryRoomDirectory()
    directory.add(Room(room_id=None, name="Room A", capacity=20))
    directory.add(Room(room_id=None, name="Room B", capacity=8))
    directory.add(Room(room_id=None, name="Closed Lab", capacity=12, status=RoomStatus.INACTIVE))
    return directory


@pytest.fixture()
def requester_directory() -> InMemoryRequesterDirectory:
    directory = InMemoryRequesterDirectory()
    directory.add(Requester(requester_id=None, name="Ursula", email="ursula@example.org"))
    return directory


@pytest.fixture()
def reservation_repo() -> InMemoryReservationRepository:
    return InMemoryReservationRepository()


@pytest.fixture()
def session_factory() -> Iterator[sessionmaker]:
    """
    A private in-memory SQLite database per test, so API tests never share state.
    """
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(bind=engine, expire_on_commit=False)
    finally:
        engine.dispose()


@pytest.fixture()
def client(session_factory: sessionmaker, clock: FakeClock) -> Iterator[TestClient]:
    def _override_get_db() -> Iterator[Session]:
        with session_scope(session_factory) as db:
            yield db

    app.dependency_overrides[routers.get_db] = _override_get_db
    app.dependency_overrides[routers.get_clock] = lambda: clock
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
