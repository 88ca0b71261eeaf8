"""Summary: Port describing the blocking HTTP transport the client needs.
Why: Keep the request/decode pipeline independent from any HTTP library."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class HTTPResponse:
    """Status, headers and raw body of one HTTP exchange."""

    status: int
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@runtime_checkable
class TransportPort(Protocol):
    """Issue one GET and return whatever the server answered."""

    def get(self, url: str, params: Sequence[tuple[str, str]]) -> HTTPResponse:
        """Perform the request.

        Raises:
            TransportError: The request could not be completed.
        """
        ...


__all__ = ["HTTPResponse", "TransportPort"]
