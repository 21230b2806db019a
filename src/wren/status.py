"""Status registry — semantic HTTP outcomes and the JSON envelope.

A ``Status`` is both the value a handler returns and the body written
back to the client::

    {"Code": 400, "Message": "Bad Request", "Errors": ["name is required"]}

``Errors`` is omitted when empty. The module-level instances are
process-wide singletons; handlers derive ad-hoc statuses from them with
``with_errors()`` or build one from a code with ``Status.for_code()``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from http import HTTPStatus
from typing import Any


@dataclass(frozen=True, slots=True)
class Status:
    """An immutable HTTP outcome: code, reason message, detail strings."""

    code: int
    message: str
    errors: tuple[str, ...] = ()

    @classmethod
    def for_code(cls, code: int, *errors: str) -> Status:
        """Build a status with the standard reason phrase for *code*.

        Raises ``ValueError`` if *code* is not a known HTTP status.
        """
        return cls(code=code, message=HTTPStatus(code).phrase, errors=tuple(errors))

    def with_errors(self, *errors: str) -> Status:
        """Return a copy with *errors* appended to the detail list."""
        return replace(self, errors=(*self.errors, *errors))

    @property
    def is_success(self) -> bool:
        """True for codes in the inclusive range 200–299."""
        return 200 <= self.code <= 299

    def to_dict(self) -> dict[str, Any]:
        """The JSON envelope as a dict."""
        data: dict[str, Any] = {"Code": self.code, "Message": self.message}
        if self.errors:
            data["Errors"] = list(self.errors)
        return data

    def to_json(self) -> str:
        """The JSON envelope, compactly encoded."""
        return json.dumps(self.to_dict(), separators=(",", ":"))

    def __str__(self) -> str:
        return f"{self.code} {self.message}"


OK = Status.for_code(200)
Created = Status.for_code(201)
Accepted = Status.for_code(202)
NoContent = Status.for_code(204)
MovedPermanently = Status.for_code(301)
BadRequest = Status.for_code(400)
Unauthorized = Status.for_code(401)
Forbidden = Status.for_code(403)
NotFound = Status.for_code(404)
MethodNotAllowed = Status.for_code(405)
Conflict = Status.for_code(409)
UnprocessableEntity = Status.for_code(422)
InternalServerError = Status.for_code(500)
ServiceUnavailable = Status.for_code(503)
