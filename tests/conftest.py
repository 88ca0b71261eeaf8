"""Shared pytest fixtures for web service tests."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from mbws.features.ws2.domain.errors import TransportError
from mbws.features.ws2.usecases.ports import HTTPResponse

FIXTURES_DIR: Path = Path(__file__).parent / "fixtures" / "ws2"


class FakeTransport:
    """Transport double recording every request and replaying one response."""

    def __init__(
        self,
        response: HTTPResponse | None = None,
        error: TransportError | None = None,
    ) -> None:
        self.response: HTTPResponse = response or HTTPResponse(status=200)
        self.error: TransportError | None = error
        self.calls: list[tuple[str, list[tuple[str, str]]]] = []

    def get(self, url: str, params: Sequence[tuple[str, str]]) -> HTTPResponse:
        self.calls.append((url, list(params)))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def load_fixture() -> Callable[[str], bytes]:
    """Return a loader for XML documents under ``tests/fixtures/ws2``."""

    def _load(name: str) -> bytes:
        return (FIXTURES_DIR / name).read_bytes()

    return _load


@pytest.fixture
def fake_transport_factory() -> Callable[..., FakeTransport]:
    """Build ``FakeTransport`` instances serving a body or raising an error."""

    def _build(
        body: bytes = b"",
        status: int = 200,
        error: TransportError | None = None,
    ) -> FakeTransport:
        return FakeTransport(HTTPResponse(status=status, body=body), error)

    return _build
