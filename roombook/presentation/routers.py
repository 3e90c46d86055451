from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from roombook.core.clock import Clock
from roombook.core.errors import BusinessRuleViolation, InvalidScheduleInput, NotFoundError
from roombook.infrastructure.clock import SystemClock
from roombook.infrastructure.database import session_scope
from roombook.services.roombook_service import (
    cancel_reservation_service,
    create_reservation_service,
    get_requester_service,
    get_reservation_service,
    get_room_service,
    list_available_rooms_service,
    list_requesters_service,
    list_reservations_service,
    list_rooms_service,
    modify_reservation_service,
    register_requester_service,
    register_room_service,
    update_requester_service,
    update_room_service,
)
from roombook.schemas.models import Requester, RequesterIn, Reservation, ReservationRequest, Room, RoomIn

router = APIRouter()


def get_db() -> Session:
    with session_scope() as db:
        yield db


def get_clock() -> Clock:
    return SystemClock()


def _rule_violation(e: BusinessRuleViolation) -> HTTPException:
    """Unparseable dates/times are 422; every other business rule is 409."""
    if isinstance(e, InvalidScheduleInput):
        return HTTPException(status_code=422, detail=str(e))
    return HTTPException(status_code=409, detail=str(e))


# -----------------------------
# Reservations
# -----------------------------
@router.post("/reservations", response_model=Reservation, status_code=201)
def post_reservations(
    body: ReservationRequest,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> Reservation:
    """
    Create a reservation

    Returns:
      - 201 with the stored reservation
      - 404 if the room or requester does not exist
      - 409 on business rule violation (inactive room, bad time order, past start, conflict)
      - 422 on malformed body, date or time
    """
    try:
        return create_reservation_service(body, db, clock)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except BusinessRuleViolation as e:
        raise _rule_violation(e)


@router.get("/reservations", response_model=list[Reservation])
def get_reservations(
    room_id: int | None = Query(default=None),
    date: str | None = Query(default=None),
    requester_id: int | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[Reservation]:
    """
    List reservations, optionally by room and date or by requester

    Deliberately strict: a half-given room/date filter is rejected with 422 instead of
    falling through to the requester filter or the full list.
    """
    if (room_id is None) != (date is None):
        raise HTTPException(status_code=422, detail="room_id and date must be given together")

    try:
        return list_reservations_service(db, room_id=room_id, on_date=date, requester_id=requester_id)
    except BusinessRuleViolation as e:
        raise _rule_violation(e)


@router.get("/reservations/{reservation_id}", response_model=Reservation)
def get_reservations_reservation_id(reservation_id: int, db: Session = Depends(get_db)) -> Reservation:
    """
    Get a reservation
    """
    try:
        return get_reservation_service(reservation_id, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/reservations/{reservation_id}", response_model=Reservation)
def put_reservations_reservation_id(
    reservation_id: int,
    body: ReservationRequest,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> Reservation:
    """
    Modify a reservation that is ACTIVE and has not started yet
    """
    try:
        return modify_reservation_service(reservation_id, body, db, clock)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except BusinessRuleViolation as e:
        raise _rule_violation(e)


def _cancel(reservation_id: int, db: Session, clock: Clock) -> Response:
    try:
        cancel_reservation_service(reservation_id, db, clock)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except BusinessRuleViolation as e:
        raise _rule_violation(e)
    return Response(status_code=204)


@router.post("/reservations/{reservation_id}/cancel", status_code=204, response_class=Response)
def post_reservations_reservation_id_cancel(
    reservation_id: int,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> Response:
    """
    Cancel a reservation before its start time
    """
    return _cancel(reservation_id, db, clock)


@router.delete("/reservations/{reservation_id}", status_code=204, response_class=Response)
def delete_reservations_reservation_id(
    reservation_id: int,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> Response:
    """
    Cancel a reservation (the record is kept with status CANCELLED)
    """
    return _cancel(reservation_id, db, clock)


# -----------------------------
# Rooms
# -----------------------------
@router.get("/rooms/available", response_model=list[Room])
def get_rooms_available(
    date: str = Query(...),
    start_time: str = Query(...),
    end_time: str = Query(...),
    db: Session = Depends(get_db),
) -> list[Room]:
    """
    ACTIVE rooms with no ACTIVE reservation overlapping [start_time, end_time) on date
    """
    try:
        return list_available_rooms_service(date, start_time, end_time, db)
    except BusinessRuleViolation as e:
        raise _rule_violation(e)


@router.post("/rooms", response_model=Room, status_code=201)
def post_rooms(body: RoomIn, db: Session = Depends(get_db)) -> Room:
    return register_room_service(body, db)


@router.get("/rooms", response_model=list[Room])
def get_rooms(db: Session = Depends(get_db)) -> list[Room]:
    return list_rooms_service(db)


@router.get("/rooms/{room_id}", response_model=Room)
def get_rooms_room_id(room_id: int, db: Session = Depends(get_db)) -> Room:
    try:
        return get_room_service(room_id, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/rooms/{room_id}", response_model=Room)
def put_rooms_room_id(room_id: int, body: RoomIn, db: Session = Depends(get_db)) -> Room:
    try:
        return update_room_service(room_id, body, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


# -----------------------------
# Requesters
# -----------------------------
@router.post("/requesters", response_model=Requester, status_code=201)
def post_requesters(body: RequesterIn, db: Session = Depends(get_db)) -> Requester:
    return register_requester_service(body, db)


@router.get("/requesters", response_model=list[Requester])
def get_requesters(db: Session = Depends(get_db)) -> list[Requester]:
    return list_requesters_service(db)


@router.get("/requesters/{requester_id}", response_model=Requester)
def get_requesters_requester_id(requester_id: int, db: Session = Depends(get_db)) -> Requester:
    try:
        return get_requester_service(requester_id, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/requesters/{requester_id}", response_model=Requester)
def put_requesters_requester_id(requester_id: int, body: RequesterIn, db: Session = Depends(get_db)) -> Requester:
    try:
        return update_requester_service(requester_id, body, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
