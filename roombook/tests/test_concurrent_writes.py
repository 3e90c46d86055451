from __future__ import annotations

import threading
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from roombook.core.errors import ScheduleConflict
from roombook.infrastructure.database import Base, build_engine, session_scope
from roombook.schemas.models import RequesterIn, ReservationRequest, RoomIn
from roombook.services.roombook_service import (
    create_reservation_service,
    list_reservations_service,
    register_requester_service,
    register_room_service,
)
from roombook.tests.config_tests import TOMORROW
from roombook.tests.fakes import FakeClock

THREADS = 8
CREATES_PER_THREAD = 23


@pytest.fixture(params=["in-memory", "file"])
def factory(request: pytest.FixtureRequest, tmp_path: Path, session_factory: sessionmaker) -> Iterator[sessionmaker]:
    """
    Both engine shapes the service runs on: one shared in-memory connection, and a pooled SQLite file.
    """
    if request.param == "in-memory":
        yield session_factory
        return

    engine = build_engine(f"sqlite+pysqlite:///{tmp_path / 'roombook.db'}")
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(bind=engine, expire_on_commit=False)
    finally:
        engine.dispose()


def _setup_directory(factory: sessionmaker, rooms: int) -> tuple[list[int], int]:
    with session_scope(factory) as db:
        room_ids = [register_room_service(RoomIn(name=f"Room {i}", capacity=10), db).room_id for i in range(rooms)]
        requester_id = register_requester_service(RequesterIn(name="Ada", email="ada@example.org"), db).requester_id
    return room_ids, requester_id


def _slot(index: int) -> tuple[str, str]:
    start = 8 * 60 + index * 30
    end = start + 30
    return f"{start // 60:02d}:{start % 60:02d}", f"{end // 60:02d}:{end % 60:02d}"


def _create(factory: sessionmaker, clock: FakeClock, body: ReservationRequest) -> int:
    with session_scope(factory) as db:
        return create_reservation_service(body, db, clock).reservation_id


def _stored(factory: sessionmaker, **filters) -> list:
    with session_scope(factory) as db:
        return list_reservations_service(db, **filters)


def test_every_acknowledged_create_is_stored(factory: sessionmaker, clock: FakeClock) -> None:
    room_ids, requester_id = _setup_directory(factory, THREADS)
    barrier = threading.Barrier(THREADS)

    def _worker(room_id: int) -> list[int]:
        barrier.wait()
        acknowledged = []
        for i in range(CREATES_PER_THREAD):
            start, end = _slot(i)
            body = ReservationRequest(
                requester_id=requester_id,
                room_id=room_id,
                date=TOMORROW,
                start_time=start,
                end_time=end,
                reason=f"slot {i}",
            )
            acknowledged.append(_create(factory, clock, body))
        return acknowledged

    with ThreadPoolExecutor(max_workers=THREADS) as pool:
        results = list(pool.map(_worker, room_ids))

    acknowledged = [rid for ids in results for rid in ids]
    stored = _stored(factory)

    assert len(acknowledged) == THREADS * CREATES_PER_THREAD
    assert len(set(acknowledged)) == len(acknowledged)
    assert sorted(r.reservation_id for r in stored) == sorted(acknowledged)
    for room_id in room_ids:
        assert len(_stored(factory, room_id=room_id, on_date=TOMORROW)) == CREATES_PER_THREAD


def test_overlapping_concurrent_creates_leave_exactly_one_active(factory: sessionmaker, clock: FakeClock) -> None:
    (room_id,), requester_id = _setup_directory(factory, 1)
    contenders = 10
    barrier = threading.Barrier(contenders)

    # Every window covers 10:30-11:00 of the same room and day.
    bodies = [
        ReservationRequest(
            requester_id=requester_id,
            room_id=room_id,
            date=TOMORROW,
            start_time=f"{9 + i % 2:02d}:{(i * 3) % 30:02d}",
            end_time=f"{11 + i % 3:02d}:00",
            reason=f"contender {i}",
        )
        for i in range(contenders)
    ]

    def _contend(body: ReservationRequest) -> int:
        barrier.wait()
        return _create(factory, clock, body)

    with ThreadPoolExecutor(max_workers=contenders) as pool:
        futures = [pool.submit(_contend, body) for body in bodies]

    winners = [f.result() for f in futures if f.exception() is None]
    losers = [f.exception() for f in futures if f.exception() is not None]

    assert len(winners) == 1
    assert len(losers) == contenders - 1
    assert all(isinstance(e, ScheduleConflict) for e in losers)

    stored = _stored(factory, room_id=room_id, on_date=TOMORROW)
    assert [r.reservation_id for r in stored] == winners
    assert stored[0].status.value == "ACTIVE"


@pytest.mark.parametrize(
    ("url", "shared"),
    [
        ("sqlite+pysqlite:///:memory:", True),
        ("sqlite://", True),
        ("sqlite+pysqlite:///./roombook.db", False),
    ],
)
def test_only_in_memory_sqlite_shares_one_connection(url: str, shared: bool) -> None:
    engine = build_engine(url)
    try:
        assert isinstance(engine.pool, StaticPool) is shared
    finally:
        engine.dispose()
