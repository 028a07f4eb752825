"""Error taxonomy raised by services and rendered by the API error handler."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FieldError:
    path: str
    msg: str

    def to_dict(self) -> dict[str, str]:
        return {"path": self.path, "msg": self.msg}


class BlogError(Exception):
    status_code: int = 500
    message: str = "Server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"success": False, "message": self.message}


class NotFoundError(BlogError):
    status_code = 404
    message = "Resource not found"


class ForbiddenError(BlogError):
    status_code = 403
    message = "Not authorized to perform this action"


class AuthenticationRequired(BlogError):
    status_code = 401
    message = "Not authorized, please log in"


class ConflictError(BlogError):
    status_code = 409
    message = "Resource already exists"


class ValidationFailed(BlogError):
    """One or more field invariants were violated.

    Carries every violated field, not just the first one found.
    """

    status_code = 400
    message = "Validation failed"

    def __init__(self, errors: list[FieldError], message: str | None = None) -> None:
        super().__init__(message)
        self.errors = list(errors)

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        body["errors"] = [e.to_dict() for e in self.errors]
        return body
