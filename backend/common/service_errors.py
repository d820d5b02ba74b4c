from http import HTTPStatus


class ServiceError(Exception):
    """
    Base class for errors raised by the service layer.

    Each subclass carries the HTTP status it maps to, so the global exception
    handler can convert it without knowing about individual services.
    """

    status_code: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidInputError(ServiceError, ValueError):
    """Raised when a request is missing fields or carries malformed values."""

    status_code = HTTPStatus.BAD_REQUEST


class UnauthorizedError(ServiceError):
    """Raised when the caller identity is missing or cannot be verified."""

    status_code = HTTPStatus.UNAUTHORIZED


class ForbiddenError(ServiceError):
    """Raised when the caller is known but lacks rights for the action."""

    status_code = HTTPStatus.FORBIDDEN


class NotFoundError(ServiceError):
    """Raised when a mentor, session, post or profile does not exist."""

    status_code = HTTPStatus.NOT_FOUND


class SlotUnavailableError(InvalidInputError):
    """Raised when the requested start time is not in the mentor's availability."""


class SlotConflictError(ServiceError):
    """Raised when the mentor already has a scheduled session on that date."""

    status_code = HTTPStatus.CONFLICT


class InvalidTransitionError(InvalidInputError):
    """Raised when a session action is not legal from its current status."""
