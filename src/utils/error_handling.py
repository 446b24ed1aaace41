"""Custom exceptions and helpers for consistent error responses."""

import json
from typing import Any, Dict


class AppError(Exception):
    """Base class for application errors."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(AppError):
    """Raised when a requested resource is missing."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class ValidationError(AppError):
    """Raised when input validation fails, always before any write."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, status_code=422)


class AuthenticationError(AppError):
    """Raised on bad credentials or a missing session."""

    def __init__(self, message: str = "Invalid credentials."):
        super().__init__(message, status_code=401)


class ForbiddenError(AppError):
    """Raised when the session role may not use a route."""

    def __init__(self, message: str = "Not allowed for this role"):
        super().__init__(message, status_code=403)


class PersistenceError(AppError):
    """Raised when a read or write against the document store fails."""

    def __init__(self, message: str = "Connection failed. Please check your internet connection."):
        super().__init__(message, status_code=503)


def to_response(error: AppError) -> Dict[str, Any]:
    """Convert an AppError into a Lambda proxy integration response."""
    return {
        "statusCode": error.status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps({"message": str(error), "status": "error"}),
    }
