"""Domain errors raised by the RSVP, check-in and reminder services.

Every error carries a stable ``error_code`` and the HTTP status the API layer
renders it with, so routers never translate errors by hand.
"""


class CampusEventsError(Exception):
    """Base class for errors reported back to the caller."""

    error_code = "error"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CampusEventsError):
    error_code = "validation_error"
    status_code = 400


class DeadlineExpiredError(CampusEventsError):
    error_code = "deadline_expired"
    status_code = 400


class InvalidCodeError(CampusEventsError):
    """Raised for malformed QR payloads or codes that resolve to nothing."""

    error_code = "invalid_code"
    status_code = 400


class NotFoundError(CampusEventsError):
    error_code = "not_found"
    status_code = 404


class UnauthorizedError(CampusEventsError):
    error_code = "unauthorized"
    status_code = 403


class DuplicateCheckInError(CampusEventsError):
    error_code = "duplicate_check_in"
    status_code = 409


class AlreadyMemberError(CampusEventsError):
    error_code = "already_member"
    status_code = 409


class CapacityRaceError(CampusEventsError):
    """Raised when the optimistic retry budget is exhausted under contention."""

    error_code = "capacity_race"
    status_code = 409


class StoreError(Exception):
    """Persistence failure surfaced by an EventStore implementation."""


class StoreConflictError(StoreError):
    """Lock contention or a unique-key race; the transaction may be retried."""
