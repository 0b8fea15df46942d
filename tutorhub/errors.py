"""
Error kinds raised by the service layer.

Routes let these propagate; the handlers registered in ``tutorhub.main``
turn them into ``{"error": ..., "details": ...}`` responses.
"""
from typing import Any, Optional


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message: str, details: Optional[Any] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationFailed(ServiceError):
    status_code = 400


class NotFound(ServiceError):
    status_code = 404


class Forbidden(ServiceError):
    status_code = 403


class Conflict(ServiceError):
    status_code = 409


class UpstreamError(ServiceError):
    """Payment provider failure. Carries the provider's HTTP status when known."""

    status_code = 502
