from __future__ import annotations


class NotFoundError(Exception):
    """Raise to map to HTTP 404."""

    def __init__(self, resource: str, resource_id: object) -> None:
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} not found: {resource_id!r}")


class BusinessRuleViolation(Exception):
    """
    Raise to map to HTTP 409 (domain rule violation).

    Subclasses carry a stable `code` and a default human-readable reason.
    """

    code = "business_rule_violation"
    default_message = "Business rule violated"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class RoomInactive(BusinessRuleViolation):
    code = "room_inactive"
    default_message = "Cannot reserve an inactive room"


class InvalidTimeRange(BusinessRuleViolation):
    code = "invalid_time_range"
    default_message = "End time must be later than start time"


class StartNotInFuture(BusinessRuleViolation):
    code = "start_not_in_future"
    default_message = "Reservations cannot be created or moved to the past"


class ReservationAlreadyCancelled(BusinessRuleViolation):
    code = "reservation_already_cancelled"
    default_message = "Reservation is already cancelled"


class ReservationAlreadyStarted(BusinessRuleViolation):
    code = "reservation_already_started"
    default_message = "Cannot modify a reservation that has already started or passed"


class CancellationWindowClosed(BusinessRuleViolation):
    code = "cancellation_window_closed"
    default_message = "Cancellations are only allowed before the reservation start time"


class ScheduleConflict(BusinessRuleViolation):
    code = "schedule_conflict"
    default_message = "Another active reservation already occupies this room in this window"

    def __init__(self, conflicting_ids: list[int] | None = None, message: str | None = None) -> None:
        self.conflicting_ids = list(conflicting_ids or [])
        super().__init__(message)


class InvalidScheduleInput(BusinessRuleViolation):
    """Raise to map to HTTP 422 (unparseable date or time)."""

    code = "invalid_schedule_input"
    default_message = "Invalid date or time"
