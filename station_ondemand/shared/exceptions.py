"""Application exception hierarchy."""
from typing import Any, Dict, Optional


class AppError(Exception):
    """Base error carrying an HTTP status and structured details."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ForbiddenError(AppError):
    """The requested operation is not permitted for this resource."""

    status_code = 403


class NotFoundError(AppError):
    """The requested resource does not exist."""

    status_code = 404
