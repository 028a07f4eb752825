from __future__ import annotations

from typing import Any, Iterable, Mapping

from quill.constants import PostField

FieldErrors = dict[PostField, str]


class ApiError(Exception):
    """A request the server answered with a failure envelope."""

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
        errors: Iterable[Mapping[str, Any]] = (),
    ) -> None:
        super().__init__(message or f"Request failed with status {status_code}")
        self.message = message
        self.status_code = status_code
        self.errors = [dict(e) for e in errors]

    @property
    def field_errors(self) -> FieldErrors:
        """Server errors keyed by post field.

        Entries whose path is not a known post field are dropped; the first
        message for a field wins.
        """
        result: FieldErrors = {}
        for err in self.errors:
            try:
                field = PostField(err.get("path"))
            except ValueError:
                continue
            result.setdefault(field, str(err.get("msg", "")))
        return result


class NetworkError(ApiError):
    """The request never produced a server response."""

    def __init__(self, detail: str) -> None:
        super().__init__(None)
        self.detail = detail

    def __str__(self) -> str:
        return f"Network error: {self.detail}"


class MalformedResponseError(ApiError):
    """The server reported success but the body is not a usable envelope."""

    def __init__(self, detail: str, *, status_code: int | None = None) -> None:
        super().__init__(None, status_code=status_code)
        self.detail = detail

    def __str__(self) -> str:
        return f"Malformed response: {self.detail}"
