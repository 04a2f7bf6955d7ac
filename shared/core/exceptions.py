"""
Domain exceptions shared by the hotel and auth services.

The crud layer raises these; ``shared.helpers.exception_handler`` turns them
into the standard failure envelope with the matching HTTP status.
"""

from typing import Any, Dict, Optional

from shared.utils.app_status_code import AppStatusCode


class HotelOpsError(Exception):
    """Base class for every error the services raise on purpose."""

    status_code: int = 400
    app_status_code: str = AppStatusCode.OPERATION_FAILED

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}')"


class ValidationError(HotelOpsError):
    """Malformed or logically inconsistent input, e.g. check-in after check-out."""

    status_code = 400
    app_status_code = AppStatusCode.INVALID_INPUT


class NotFoundError(HotelOpsError):
    status_code = 404
    app_status_code = AppStatusCode.RESOURCE_NOT_FOUND


class ConflictError(HotelOpsError):
    """The request collides with existing state (overlapping dates, duplicate email)."""

    status_code = 409
    app_status_code = AppStatusCode.BOOKING_CONFLICT


class DuplicateEntryError(ConflictError):
    app_status_code = AppStatusCode.DUPLICATE_ENTRY


class IllegalStateTransitionError(HotelOpsError):
    """The operation is not valid from the entity's current status."""

    status_code = 400
    app_status_code = AppStatusCode.INVALID_STATE_TRANSITION


class AuthenticationError(HotelOpsError):
    status_code = 401
    app_status_code = AppStatusCode.AUTHENTICATION_FAILED


class PermissionDeniedError(HotelOpsError):
    status_code = 403
    app_status_code = AppStatusCode.ACCESS_FORBIDDEN


class AIServiceError(HotelOpsError):
    """The external text analysis service failed or answered with garbage."""

    status_code = 502
    app_status_code = AppStatusCode.EXTERNAL_SERVICE_ERROR
