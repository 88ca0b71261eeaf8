"""Where: src/mbws/platform/musicbrainz/client.py
What: Facade exposing one typed call per entity and access pattern.
Why: Tie query building, transport and XML decoding into a single blocking
     call that returns either a complete value or exactly one error.

Collaborators:
- ``query_builder`` maps a ``QuerySpec`` onto path and parameters
- ``http_client`` performs the GET (swappable through ``transport``)
- ``envelope_decoder`` turns the body into records, envelopes and scores
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from functools import partial
from types import TracebackType
from typing import Any, TypeVar

from mbws.config.settings import WS2_ROOT_URL
from mbws.features.ws2.domain.entities import (
    Annotation,
    Artist,
    Label,
    Recording,
    Release,
    ReleaseGroup,
    Work,
    schema_for,
)
from mbws.features.ws2.domain.envelope import ListEnvelope, ScoredEntity
from mbws.features.ws2.domain.errors import (
    DecodeError,
    InvalidQuerySpecError,
    TransportError,
    WS2Error,
)
from mbws.features.ws2.domain.result import Err, Ok, Result
from mbws.features.ws2.usecases.envelope_decoder import decode_entity, decode_list
from mbws.features.ws2.usecases.ports import TransportPort
from mbws.features.ws2.usecases.query_builder import QuerySpec, build_request_target
from mbws.platform.logging import logger

from .http_client import MusicBrainzHTTPClient

T = TypeVar("T")


class WS2Client:
    """Blocking MusicBrainz WS2 client.

    Every operation issues exactly one request. Nothing is cached, retried or
    rate limited; callers own those policies.
    """

    def __init__(
        self,
        root_url: str | None = None,
        transport: TransportPort | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.root_url: str = (root_url or WS2_ROOT_URL).rstrip("/")
        self.transport: TransportPort = transport or MusicBrainzHTTPClient(user_agent, timeout)

    def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> "WS2Client":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # Pipeline ---------------------------------------------------------------

    def _fail(self, spec: QuerySpec, error: WS2Error, event: str) -> Err:
        logger.warning(
            "MusicBrainz %s %s failed: %s",
            spec.pattern.value,
            spec.entity,
            error,
            extra={
                "ws2_event": event,
                "pattern": spec.pattern.value,
                "entity": spec.entity,
                "status": getattr(error, "status", None),
                "error_message": str(error),
            },
        )
        return Err(error)

    def execute(self, spec: QuerySpec, decode: Callable[[bytes], T]) -> Result[T]:
        """Run one request described by ``spec`` and decode its body."""

        try:
            target = build_request_target(spec)
        except InvalidQuerySpecError as exc:
            return self._fail(spec, exc, "ws2.query.invalid")

        url = target.url(self.root_url)
        logger.debug(
            "GET %s?%s",
            url,
            target.query_string(),
            extra={
                "ws2_event": "ws2.request.start",
                "url": f"{url}?{target.query_string()}" if target.params else url,
                "pattern": spec.pattern.value,
                "entity": spec.entity,
            },
        )

        try:
            response = self.transport.get(url, target.params)
        except TransportError as exc:
            return self._fail(spec, exc, "ws2.request.failed")

        if not response.ok:
            error = TransportError(f"GET {url} was not successful", status=response.status)
            return self._fail(spec, error, "ws2.request.failed")

        try:
            value = decode(response.body)
        except DecodeError as exc:
            return self._fail(spec, exc, "ws2.decode.failed")

        extra: dict[str, Any] = {
            "ws2_event": "ws2.decode.complete",
            "pattern": spec.pattern.value,
            "entity": spec.entity,
        }
        if isinstance(value, ListEnvelope):
            extra.update(items=len(value), count=value.count, offset=value.offset)
        logger.debug("Decoded %s %s response", spec.pattern.value, spec.entity, extra=extra)
        return Ok(value)

    def _lookup(self, record_type: type[T], mbid: str, includes: Iterable[str]) -> Result[T]:
        spec = QuerySpec.lookup(schema_for(record_type).tag, mbid, tuple(includes))
        return self.execute(spec, partial(decode_entity, record_type=record_type))

    def _browse(
        self,
        record_type: type[T],
        relation: str,
        mbid: str,
        limit: int,
        offset: int,
        includes: Iterable[str],
    ) -> Result[ListEnvelope[T]]:
        spec = QuerySpec.browse(
            schema_for(record_type).tag, relation, mbid, limit, offset, tuple(includes)
        )
        return self.execute(spec, partial(decode_list, record_type=record_type))

    def _search(
        self,
        record_type: type[T],
        query: str,
        limit: int,
        offset: int,
    ) -> Result[ListEnvelope[ScoredEntity[T]]]:
        spec = QuerySpec.search(schema_for(record_type).tag, query, limit, offset)
        return self.execute(spec, partial(decode_list, record_type=record_type, scored=True))

    # Lookup -----------------------------------------------------------------

    def lookup_artist(self, mbid: str, includes: Iterable[str] = ()) -> Result[Artist]:
        return self._lookup(Artist, mbid, includes)

    def lookup_release(self, mbid: str, includes: Iterable[str] = ()) -> Result[Release]:
        return self._lookup(Release, mbid, includes)

    def lookup_release_group(self, mbid: str, includes: Iterable[str] = ()) -> Result[ReleaseGroup]:
        return self._lookup(ReleaseGroup, mbid, includes)

    def lookup_label(self, mbid: str, includes: Iterable[str] = ()) -> Result[Label]:
        return self._lookup(Label, mbid, includes)

    def lookup_recording(self, mbid: str, includes: Iterable[str] = ()) -> Result[Recording]:
        return self._lookup(Recording, mbid, includes)

    def lookup_work(self, mbid: str, includes: Iterable[str] = ()) -> Result[Work]:
        return self._lookup(Work, mbid, includes)

    # Browse -----------------------------------------------------------------

    def browse_artists(
        self, relation: str, mbid: str, limit: int = -1, offset: int = -1, includes: Iterable[str] = ()
    ) -> Result[ListEnvelope[Artist]]:
        """Artists linked to a recording, release, release group or work."""
        return self._browse(Artist, relation, mbid, limit, offset, includes)

    def browse_releases(
        self, relation: str, mbid: str, limit: int = -1, offset: int = -1, includes: Iterable[str] = ()
    ) -> Result[ListEnvelope[Release]]:
        """Releases linked to an artist, track artist, label, recording or release group."""
        return self._browse(Release, relation, mbid, limit, offset, includes)

    def browse_release_groups(
        self, relation: str, mbid: str, limit: int = -1, offset: int = -1, includes: Iterable[str] = ()
    ) -> Result[ListEnvelope[ReleaseGroup]]:
        """Release groups linked to an artist or a release."""
        return self._browse(ReleaseGroup, relation, mbid, limit, offset, includes)

    def browse_labels(
        self, relation: str, mbid: str, limit: int = -1, offset: int = -1, includes: Iterable[str] = ()
    ) -> Result[ListEnvelope[Label]]:
        """Labels linked to a release."""
        return self._browse(Label, relation, mbid, limit, offset, includes)

    def browse_recordings(
        self, relation: str, mbid: str, limit: int = -1, offset: int = -1, includes: Iterable[str] = ()
    ) -> Result[ListEnvelope[Recording]]:
        """Recordings linked to an artist or a release."""
        return self._browse(Recording, relation, mbid, limit, offset, includes)

    def browse_works(
        self, relation: str, mbid: str, limit: int = -1, offset: int = -1, includes: Iterable[str] = ()
    ) -> Result[ListEnvelope[Work]]:
        """Works linked to an artist."""
        return self._browse(Work, relation, mbid, limit, offset, includes)

    # Search -----------------------------------------------------------------
    # ``query`` is sent verbatim; use ``escape_lucene`` for literal text.

    def search_artist(self, query: str, limit: int = -1, offset: int = -1) -> Result[ListEnvelope[ScoredEntity[Artist]]]:
        return self._search(Artist, query, limit, offset)

    def search_release(self, query: str, limit: int = -1, offset: int = -1) -> Result[ListEnvelope[ScoredEntity[Release]]]:
        return self._search(Release, query, limit, offset)

    def search_release_group(self, query: str, limit: int = -1, offset: int = -1) -> Result[ListEnvelope[ScoredEntity[ReleaseGroup]]]:
        return self._search(ReleaseGroup, query, limit, offset)

    def search_label(self, query: str, limit: int = -1, offset: int = -1) -> Result[ListEnvelope[ScoredEntity[Label]]]:
        return self._search(Label, query, limit, offset)

    def search_recording(self, query: str, limit: int = -1, offset: int = -1) -> Result[ListEnvelope[ScoredEntity[Recording]]]:
        return self._search(Recording, query, limit, offset)

    def search_work(self, query: str, limit: int = -1, offset: int = -1) -> Result[ListEnvelope[ScoredEntity[Work]]]:
        return self._search(Work, query, limit, offset)

    def search_annotation(self, query: str, limit: int = -1, offset: int = -1) -> Result[ListEnvelope[ScoredEntity[Annotation]]]:
        return self._search(Annotation, query, limit, offset)


__all__ = ["WS2Client"]
