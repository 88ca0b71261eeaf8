"""Summary: Error taxonomy for web service requests and response decoding.
Why: Let callers tell an unreachable service from an unusable payload."""

from __future__ import annotations

from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    """Classify failures so callers can decide whether retrying makes sense."""

    TRANSPORT = "transport"
    MALFORMED_DOCUMENT = "malformed_document"
    FIELD_DECODE = "field_decode"
    INVALID_QUERY = "invalid_query"


class WS2Error(Exception):
    """Base class for every failure raised by the client."""

    kind: ClassVar[ErrorKind]

    @property
    def retryable(self) -> bool:
        """Return True when repeating the same call could succeed."""

        return self.kind is ErrorKind.TRANSPORT


class TransportError(WS2Error):
    """The request failed or the service answered with a non-success status."""

    kind = ErrorKind.TRANSPORT

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.cause = cause

    def __str__(self) -> str:
        msg = self.message
        if self.status is not None:
            msg += f" (status={self.status})"
        if self.cause is not None:
            msg += f", caused by: {self.cause}"
        return msg


class DecodeError(WS2Error):
    """The service responded but the payload could not be decoded."""


class MalformedDocumentError(DecodeError):
    """Response body is not XML or lacks the expected container element."""

    kind = ErrorKind.MALFORMED_DOCUMENT


class FieldDecodeError(DecodeError):
    """A required value is missing or a value cannot be parsed."""

    kind = ErrorKind.FIELD_DECODE

    def __init__(self, field: str, raw: str | None, reason: str) -> None:
        super().__init__(f"cannot decode field '{field}' from {raw!r}: {reason}")
        self.field = field
        self.raw = raw
        self.reason = reason


class InvalidQuerySpecError(WS2Error):
    """Caller-supplied request parameters violate builder preconditions."""

    kind = ErrorKind.INVALID_QUERY


__all__ = [
    "DecodeError",
    "ErrorKind",
    "FieldDecodeError",
    "InvalidQuerySpecError",
    "MalformedDocumentError",
    "TransportError",
    "WS2Error",
]
