from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.orm import Session

from roombook.core.clock import Clock
from roombook.core.entities.requester import Requester as CoreRequester
from roombook.core.entities.reservation import Reservation as CoreReservation
from roombook.core.entities.room import Room as CoreRoom
from roombook.core.entities.room import RoomStatus as CoreRoomStatus
from roombook.core.entities.schedule import format_date, format_time
from roombook.core.errors import BusinessRuleViolation, NotFoundError
from roombook.core.use_cases.cancel_reservation import CancelReservationUseCase
from roombook.core.use_cases.create_reservation import CreateReservationUseCase
from roombook.core.use_cases.get_reservations import GetReservationUseCase, ListReservationsUseCase
from roombook.core.use_cases.list_available_rooms import ListAvailableRoomsUseCase
from roombook.core.use_cases.manage_directory import RequesterDirectoryUseCase, RoomDirectoryUseCase
from roombook.core.use_cases.modify_reservation import ModifyReservationUseCase
from roombook.infrastructure.logging_config import get_logger
from roombook.infrastructure.repositories.requester_directory_impl import RequesterDirectoryImpl
from roombook.infrastructure.repositories.reservation_repository_impl import ReservationRepositoryImpl
from roombook.infrastructure.repositories.room_directory_impl import RoomDirectoryImpl
from roombook.schemas.models import (
    Requester,
    RequesterIn,
    Reservation,
    ReservationRequest,
    ReservationStatus,
    Room,
    RoomIn,
    RoomStatus,
)

logger = get_logger(__name__)

# Serialises check, write and response mapping within this process. Across processes the
# room row lock taken by the lifecycle use cases is what serialises writers (ignored by SQLite).
_write_lock = threading.Lock()


@contextmanager
def _unit_of_work(db: Session, operation: str) -> Iterator[None]:
    """
    One atomic lifecycle operation: commit once on success, roll back on any failure.
    """
    with _write_lock:
        try:
            yield
            db.commit()
        except (BusinessRuleViolation, NotFoundError) as e:
            db.rollback()
            logger.info("%s rejected: %s", operation, e)
            raise
        except Exception:
            db.rollback()
            logger.warning("%s failed; transaction rolled back", operation, exc_info=True)
            raise


def _to_room(room: CoreRoom) -> Room:
    return Room(
        room_id=room.room_id,
        name=room.name,
        capacity=room.capacity,
        status=RoomStatus(room.status.value),
    )


def _to_requester(requester: CoreRequester) -> Requester:
    return Requester(requester_id=requester.requester_id, name=requester.name, email=requester.email)


def _to_reservation(reservation: CoreReservation, db: Session) -> Reservation:
    """
    Resolve room/requester display names at the response boundary.
    """
    room = RoomDirectoryImpl(db).get(reservation.room_id)
    requester = RequesterDirectoryImpl(db).get(reservation.requester_id)

    return Reservation(
        reservation_id=reservation.reservation_id,
        room_id=reservation.room_id,
        room_name=room.name if room is not None else None,
        requester_id=reservation.requester_id,
        requester_name=requester.name if requester is not None else None,
        date=format_date(reservation.date),
        start_time=format_time(reservation.start_time),
        end_time=format_time(reservation.end_time),
        reason=reservation.reason,
        status=ReservationStatus(reservation.status.value),
        created_at=reservation.created_at,
        updated_at=reservation.updated_at,
    )


# -----------------------------
# Reservations
# -----------------------------
def create_reservation_service(body: ReservationRequest, db: Session, clock: Clock) -> Reservation:
    use_case = CreateReservationUseCase(
        room_directory=RoomDirectoryImpl(db),
        requester_directory=RequesterDirectoryImpl(db),
        reservation_repo=ReservationRepositoryImpl(db),
        clock=clock,
    )

    with _unit_of_work(db, "create reservation"):
        reservation = use_case.execute(
            requester_id=body.requester_id,
            room_id=body.room_id,
            date=body.date,
            start_time=body.start_time,
            end_time=body.end_time,
            reason=body.reason,
        )
        response = _to_reservation(reservation, db)

    return response


def modify_reservation_service(
    reservation_id: int,
    body: ReservationRequest,
    db: Session,
    clock: Clock,
) -> Reservation:
    use_case = ModifyReservationUseCase(
        room_directory=RoomDirectoryImpl(db),
        requester_directory=RequesterDirectoryImpl(db),
        reservation_repo=ReservationRepositoryImpl(db),
        clock=clock,
    )

    with _unit_of_work(db, f"modify reservation {reservation_id}"):
        reservation = use_case.execute(
            reservation_id=reservation_id,
            requester_id=body.requester_id,
            room_id=body.room_id,
            date=body.date,
            start_time=body.start_time,
            end_time=body.end_time,
            reason=body.reason,
        )
        response = _to_reservation(reservation, db)

    return response


def cancel_reservation_service(reservation_id: int, db: Session, clock: Clock) -> None:
    use_case = CancelReservationUseCase(reservation_repo=ReservationRepositoryImpl(db), clock=clock)

    with _unit_of_work(db, f"cancel reservation {reservation_id}"):
        use_case.execute(reservation_id=reservation_id)


def get_reservation_service(reservation_id: int, db: Session) -> Reservation:
    use_case = GetReservationUseCase(reservation_repo=ReservationRepositoryImpl(db))
    return _to_reservation(use_case.execute(reservation_id=reservation_id), db)


def list_reservations_service(
    db: Session,
    *,
    room_id: int | None = None,
    on_date: str | None = None,
    requester_id: int | None = None,
) -> list[Reservation]:
    """
    Room+date filter wins over requester filter; with neither, every reservation is listed.
    """
    use_case = ListReservationsUseCase(reservation_repo=ReservationRepositoryImpl(db))

    if room_id is not None and on_date is not None:
        reservations = use_case.by_room_and_date(room_id=room_id, on_date=on_date)
    elif requester_id is not None:
        reservations = use_case.by_requester(requester_id=requester_id)
    else:
        reservations = use_case.all()

    return [_to_reservation(r, db) for r in reservations]


def list_available_rooms_service(on_date: str, start_time: str, end_time: str, db: Session) -> list[Room]:
    use_case = ListAvailableRoomsUseCase(
        room_directory=RoomDirectoryImpl(db),
        reservation_repo=ReservationRepositoryImpl(db),
    )
    rooms = use_case.execute(date=on_date, start_time=start_time, end_time=end_time)
    return [_to_room(room) for room in rooms]


# -----------------------------
# Directory
# -----------------------------
def register_room_service(body: RoomIn, db: Session) -> Room:
    use_case = RoomDirectoryUseCase(room_directory=RoomDirectoryImpl(db))
    with _unit_of_work(db, "register room"):
        room = use_case.register(name=body.name, capacity=body.capacity, status=CoreRoomStatus(body.status.value))
    return _to_room(room)


def update_room_service(room_id: int, body: RoomIn, db: Session) -> Room:
    use_case = RoomDirectoryUseCase(room_directory=RoomDirectoryImpl(db))
    with _unit_of_work(db, f"update room {room_id}"):
        room = use_case.update(
            room_id=room_id,
            name=body.name,
            capacity=body.capacity,
            status=CoreRoomStatus(body.status.value),
        )
    return _to_room(room)


def get_room_service(room_id: int, db: Session) -> Room:
    use_case = RoomDirectoryUseCase(room_directory=RoomDirectoryImpl(db))
    return _to_room(use_case.get(room_id=room_id))


def list_rooms_service(db: Session) -> list[Room]:
    use_case = RoomDirectoryUseCase(room_directory=RoomDirectoryImpl(db))
    return [_to_room(room) for room in use_case.list_all()]


def register_requester_service(body: RequesterIn, db: Session) -> Requester:
    use_case = RequesterDirectoryUseCase(requester_directory=RequesterDirectoryImpl(db))
    with _unit_of_work(db, "register requester"):
        requester = use_case.register(name=body.name, email=body.email)
    return _to_requester(requester)


def get_requester_service(requester_id: int, db: Session) -> Requester:
    use_case = RequesterDirectoryUseCase(requester_directory=RequesterDirectoryImpl(db))
    return _to_requester(use_case.get(requester_id=requester_id))


def list_requesters_service(db: Session) -> list[Requester]:
    use_case = RequesterDirectoryUseCase(requester_directory=RequesterDirectoryImpl(db))
    return [_to_requester(r) for r in use_case.list_all()]


def update_requester_service(requester_id: int, body: RequesterIn, db: Session) -> Requester:
    use_case = RequesterDirectoryUseCase(requester_directory=RequesterDirectoryImpl(db))
    with _unit_of_work(db, f"update requester {requester_id}"):
        requester = use_case.update(requester_id=requester_id, name=body.name, email=body.email)
    return _to_requester(requester)
