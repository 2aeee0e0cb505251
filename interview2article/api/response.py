"""Response envelope helpers for consistent API responses."""

from typing import Any

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Error detail structure.

    ``retryable`` tells the client it may offer the user a retry.
    """

    code: str
    message: str
    retryable: bool = False


class ApiResponse(BaseModel):
    """Standard API response envelope."""

    data: Any | None = None
    error: ErrorDetail | None = None


def success_response(data: Any) -> dict[str, Any]:
    """Create a success response envelope."""
    return {"data": data, "error": None}


def error_response(code: str, message: str, retryable: bool = False) -> dict[str, Any]:
    """Create an error response envelope."""
    return {
        "data": None,
        "error": {"code": code, "message": message, "retryable": retryable},
    }
