"""
Error types shared by every concept.

A single tagged error type, ``ConceptError``, carries:
  kind         — which family of failure (see ``ErrorKind``)
  status_code  — the HTTP code the router answers with
  template     — message format with ``{0}``, ``{1}``, … placeholders
  args         — values rendered into the template
  tag          — name of the concrete error, key of the response error registry
  payload      — structured data (offending filter / ids) for enrichment

Concrete errors (``UserNotFoundError``, ``FriendRequestNotFoundError``, …)
live next to the concept that raises them and only pick a template, a tag
and a payload.
"""
import enum
import re
from typing import Any, Optional


class ErrorKind(str, enum.Enum):
    BAD_VALUES = "bad_values"
    UNAUTHENTICATED = "unauthenticated"
    NOT_ALLOWED = "not_allowed"
    NOT_FOUND = "not_found"
    NOT_IMPLEMENTED = "not_implemented"


STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.BAD_VALUES: 400,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.NOT_ALLOWED: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.NOT_IMPLEMENTED: 501,
}


_PLACEHOLDER = re.compile(r"\{(\d+)\}")


def format_message(template: str, *args: Any) -> str:
    """Replace ``{n}`` with the n-th argument; unmatched placeholders stay as-is."""
    def _fill(match: re.Match) -> str:
        index = int(match.group(1))
        return str(args[index]) if index < len(args) else match.group(0)

    # Single pass: placeholders inside an argument are never expanded
    return _PLACEHOLDER.sub(_fill, template)


class ConceptError(Exception):
    kind: ErrorKind = ErrorKind.BAD_VALUES
    tag: str = "concept_error"

    def __init__(
        self,
        template: str,
        *args: Any,
        kind: Optional[ErrorKind] = None,
        tag: Optional[str] = None,
        payload: Optional[dict] = None,
    ):
        self.template = template
        self.format_args = args
        if kind is not None:
            self.kind = kind
        if tag is not None:
            self.tag = tag
        self.payload = payload or {}
        self.status_code = STATUS_CODES[self.kind]
        self.message = format_message(template, *args)
        super().__init__(self.message)

    def format_with(self, *args: Any) -> "ConceptError":
        """Same error (kind, code, tag, payload) rendered with different arguments."""
        return ConceptError(
            self.template, *args, kind=self.kind, tag=self.tag, payload=self.payload
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.status_code}, {self.message!r})"


class BadValuesError(ConceptError):
    """Malformed or empty input."""

    kind = ErrorKind.BAD_VALUES
    tag = "bad_values"


class UnauthenticatedError(ConceptError):
    kind = ErrorKind.UNAUTHENTICATED
    tag = "unauthenticated"


class NotAllowedError(ConceptError):
    """Precondition, uniqueness or ownership violation."""

    kind = ErrorKind.NOT_ALLOWED
    tag = "not_allowed"


class NotFoundError(ConceptError):
    kind = ErrorKind.NOT_FOUND
    tag = "not_found"


class UnimplementedError(ConceptError):
    """Raised by the unfinished algorithms (ranking, ingestion, rendering)."""

    kind = ErrorKind.NOT_IMPLEMENTED
    tag = "not_implemented"

    def __init__(self, feature: str = "Functionality"):
        super().__init__("{0}: Functionality not yet implemented!", feature, payload={"feature": feature})
