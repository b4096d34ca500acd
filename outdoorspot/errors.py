"""Application errors carrying an HTTP status code."""
from typing import Optional


class AppError(Exception):
    """Base error turned into a `{success: false, message}` envelope."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(AppError):
    status_code = 400


class AuthenticationError(AppError):
    status_code = 401


class PermissionDeniedError(AppError):
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class WeatherLookupError(BadRequestError):
    """Raised when a weather reading cannot be produced for the given name."""
