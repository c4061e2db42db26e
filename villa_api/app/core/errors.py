"""
Error taxonomy for the villa service.

Every failure a client can observe is one of the exceptions below.
The store raises ``NotFound`` and ``Conflict``; the service layer
raises all of them and decides which one reaches the client.  The
HTTP layer renders any ``VillaAPIError`` through a single exception
handler using ``status_code`` and ``to_dict``.
"""

from typing import Any, Dict, Iterable, List, Optional

from fastapi import status


def field_errors(errors: Iterable[Dict[str, Any]]) -> Dict[str, List[str]]:
    """Group pydantic error dicts by field path.

    The ``body`` prefix FastAPI adds to request body errors is dropped,
    so ``("body", "name")`` becomes ``"name"``.  Errors about the whole
    payload are keyed by ``""``.
    """
    grouped: Dict[str, List[str]] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] == "body":
            loc = loc[1:]
        grouped.setdefault(".".join(loc), []).append(error.get("msg", "Invalid value"))
    return grouped


class VillaAPIError(Exception):
    """Base class for all errors surfaced by the villa service."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(
        self,
        detail: Optional[str] = None,
        errors: Optional[Dict[str, List[str]]] = None,
    ) -> None:
        self.detail = detail or self.default_detail
        self.errors = errors
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"detail": self.detail}
        if self.errors:
            body["errors"] = self.errors
        return body


class InvalidArgument(VillaAPIError):
    """Malformed or semantically invalid input (zero id, null payload, id mismatch)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request"


class NotFound(VillaAPIError):
    """The referenced villa does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Villa not found"


class Conflict(VillaAPIError):
    """A uniqueness violation, reported as a field-level validation error.

    Existing clients expect a 400 carrying the offending
    field and message rather than a 409.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Villa already exists!"

    def __init__(self, field: str = "name", message: Optional[str] = None) -> None:
        message = message or self.default_detail
        self.field = field
        super().__init__(message, errors={field: [message]})


class InternalError(VillaAPIError):
    """The caller supplied a value the server owns, such as a pre-set id."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"
