"""
Domain Error Taxonomy

Every failure the booking core reports to callers is one of these.
The API layer maps each class to an HTTP status; only TransientError
is retried automatically.
"""


class DomainError(Exception):
    """Base class for caller-visible domain failures."""

    code = "error"
    default_message = "Request failed."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(DomainError):
    """Vehicle or booking does not exist."""

    code = "not_found"
    default_message = "Not found."


class ConflictError(DomainError):
    """Requested dates overlap existing bookings or blocked periods."""

    code = "conflict"
    default_message = "The vehicle is not available for the selected dates."


class ForbiddenError(DomainError):
    """Requester is neither the booking owner nor an administrator."""

    code = "forbidden"
    default_message = "Not authorized."


class InvalidInputError(DomainError, ValueError):
    """Malformed dates, start after end, missing fields."""

    code = "invalid_input"
    default_message = "Invalid input."


class InvalidTransitionError(InvalidInputError):
    """Booking status change not allowed by the transition table."""

    code = "invalid_transition"


class TransientError(DomainError):
    """Storage timeout or lock contention that outlasted the retries."""

    code = "transient"
    default_message = "The booking service is busy. Please retry."
    retryable = True
