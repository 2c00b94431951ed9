"""
Error types shared by the auth handlers.

ApiError is what the HTTP layer renders; everything else either gets
translated into one by the service or falls through to the global handler.
"""

from typing import Any, Dict, Optional


class ApiError(Exception):
    """An error with an HTTP status and a client-facing message."""

    def __init__(self, status_code: int, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.error = error

    def to_content(self) -> Dict[str, Any]:
        content: Dict[str, Any] = {"message": self.message}
        if self.error is not None:
            content["error"] = self.error
        return content


class EmailAlreadyRegistered(Exception):
    """Raised by the credential store when the email unique constraint is hit."""

    def __init__(self, email: str):
        super().__init__(f"Email {email} is already registered")
        self.email = email


def internal_error(exc: BaseException) -> ApiError:
    return ApiError(500, "Internal server error", error=str(exc))
