"""Micropub failure kinds raised by the domain."""

from __future__ import annotations

from typing import ClassVar


class MicropubError(Exception):
    """Base class for failures that map onto a Micropub error response."""

    error: ClassVar[str] = "invalid_request"
    status: ClassVar[int] = 400

    def __init__(self, description: str) -> None:
        super().__init__(description)
        self.description = description

    def to_body(self) -> dict[str, str]:
        return {"error": self.error, "error_description": self.description}


class InvalidTarget(MicropubError):
    """Raised when an action references a post that does not exist."""

    error = "not_found"
    status = 404


class InvalidInstruction(MicropubError):
    """Raised when an update instruction is structurally malformed."""


class TypeMismatch(InvalidInstruction):
    """Raised when an instruction supplies a scalar where a list of values is required."""

    def __init__(self, property_name: str) -> None:
        super().__init__(f"{property_name} should be an array")
        self.property_name = property_name


ERROR_STATUS: dict[str, int] = {
    "invalid_request": 400,
    "unauthorized": 401,
    "insufficient_scope": 401,
    "forbidden": 403,
    "not_found": 404,
}
