"""
Custom exception classes for unified error handling.

Every error leaves the API as ``{"message": str}`` with the status code
carried by the exception class.
"""

from fastapi import status
from fastapi.responses import JSONResponse


class AppBaseError(Exception):
    """Base exception for all application errors."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class BadRequestError(AppBaseError):
    """Raised when the client sent an invalid field, category, filter or reference."""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppBaseError):
    """Raised when a looked-up record does not exist."""
    status_code = status.HTTP_404_NOT_FOUND


class ServerError(AppBaseError):
    """Raised when the store fails or a write produced no result."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Something went wrong."):
        super().__init__(message=message)


# ── Utility: convert to JSON response ────────────────────

def app_error_to_response(error: AppBaseError) -> JSONResponse:
    """Convert an AppBaseError to a JSONResponse with the message envelope."""
    return JSONResponse(
        status_code=error.status_code,
        content={"message": error.message},
    )
