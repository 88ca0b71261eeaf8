from __future__ import annotations

import logging
from collections.abc import Callable

import pytest
from pytest_mock import MockerFixture

from mbws.features.ws2.domain.entities import (
    Annotation,
    Artist,
    Label,
    Recording,
    Release,
    ReleaseGroup,
    Work,
)
from mbws.features.ws2.domain.envelope import ListEnvelope, ScoredEntity
from mbws.features.ws2.domain.errors import (
    ErrorKind,
    FieldDecodeError,
    InvalidQuerySpecError,
    MalformedDocumentError,
    TransportError,
)
from mbws.features.ws2.domain.result import Err, Ok
from mbws.platform.musicbrainz import client as client_module
from mbws.platform.musicbrainz.client import WS2Client

from tests.conftest import FakeTransport

ROOT = "http://mb.test/ws/2"
MBID = "10adbe5e-a2c0-4bf3-8249-2b4cbf6e6ca8"


def _client(transport: FakeTransport) -> WS2Client:
    return WS2Client(root_url=ROOT, transport=transport)


def test_search_artist_returns_scored_envelope(
    load_fixture: Callable[[str], bytes],
    fake_transport_factory: Callable[..., FakeTransport],
) -> None:
    transport = fake_transport_factory(load_fixture("SearchArtist.xml"))

    result = _client(transport).search_artist("Gopher", -1, -1)

    assert isinstance(result, Ok)
    envelope = result.unwrap()
    assert isinstance(envelope, ListEnvelope)
    assert envelope.count == 1
    hit = envelope.items[0]
    assert isinstance(hit, ScoredEntity)
    assert hit.entity.name == "Gopher And Friends"
    assert hit.score == 100
    assert transport.calls == [(f"{ROOT}/artist", [("query", "Gopher")])]


def test_search_release_group_uses_hyphenated_collection(
    load_fixture: Callable[[str], bytes],
    fake_transport_factory: Callable[..., FakeTransport],
) -> None:
    transport = fake_transport_factory(load_fixture("SearchReleaseGroup.xml"))

    result = _client(transport).search_release_group("Tenance", limit=10, offset=0)

    assert result.ok
    assert all(isinstance(hit.entity, ReleaseGroup) for hit in result.unwrap())
    assert transport.calls == [
        (f"{ROOT}/release-group", [("query", "Tenance"), ("limit", "10"), ("offset", "0")])
    ]


def test_search_annotation(
    load_fixture: Callable[[str], bytes],
    fake_transport_factory: Callable[..., FakeTransport],
) -> None:
    transport = fake_transport_factory(load_fixture("SearchAnnotation.xml"))

    result = _client(transport).search_annotation("Merzhin")

    hit = result.unwrap().items[0]
    assert isinstance(hit.entity, Annotation)
    assert hit.entity.type == "release"


def test_lookup_artist_sends_includes(
    load_fixture: Callable[[str], bytes],
    fake_transport_factory: Callable[..., FakeTransport],
) -> None:
    transport = fake_transport_factory(load_fixture("LookupArtist.xml"))

    result = _client(transport).lookup_artist(MBID, includes=["aliases"])

    artist = result.unwrap()
    assert isinstance(artist, Artist)
    assert artist.name == "Massive Attack"
    assert transport.calls == [(f"{ROOT}/artist/{MBID}", [("inc", "aliases")])]


def test_browse_releases_keeps_server_counters(
    load_fixture: Callable[[str], bytes],
    fake_transport_factory: Callable[..., FakeTransport],
) -> None:
    transport = fake_transport_factory(load_fixture("BrowseReleases.xml"))

    result = _client(transport).browse_releases("artist", MBID, limit=3, offset=2)

    envelope = result.unwrap()
    assert (envelope.count, envelope.offset, len(envelope)) == (5, 2, 3)
    assert all(isinstance(release, Release) for release in envelope)
    assert transport.calls == [
        (f"{ROOT}/release", [("artist", MBID), ("limit", "3"), ("offset", "2")])
    ]


def test_non_success_status_never_reaches_decoder(
    mocker: MockerFixture,
    fake_transport_factory: Callable[..., FakeTransport],
) -> None:
    decode_spy = mocker.patch.object(client_module, "decode_list")
    transport = fake_transport_factory(b"<metadata/>", status=503)

    result = _client(transport).search_artist("Gopher")

    assert isinstance(result, Err)
    assert isinstance(result.error, TransportError)
    assert result.error.status == 503
    assert result.kind is ErrorKind.TRANSPORT
    assert result.error.retryable is True
    decode_spy.assert_not_called()


def test_transport_exception_becomes_err(fake_transport_factory: Callable[..., FakeTransport]) -> None:
    failure = TransportError("connection refused")
    transport = fake_transport_factory(error=failure)

    result = _client(transport).lookup_release(MBID)

    assert isinstance(result, Err)
    assert result.error is failure
    with pytest.raises(TransportError):
        result.unwrap()


def test_malformed_payload_is_err_without_partial_value(
    fake_transport_factory: Callable[..., FakeTransport],
) -> None:
    transport = fake_transport_factory(b'<metadata><release-list count="1" offset="0"></release-list></metadata>')

    result = _client(transport).search_artist("Gopher")

    assert isinstance(result, Err)
    assert isinstance(result.error, MalformedDocumentError)
    assert result.error.retryable is False


def test_bad_field_in_later_entity_fails_whole_call(
    fake_transport_factory: Callable[..., FakeTransport],
) -> None:
    body = (
        b'<metadata><artist-list count="2" offset="0">'
        b'<artist id="a1"><name>Fine</name></artist>'
        b'<artist id="a2"><life-span><begin>2007-99</begin></life-span></artist>'
        b"</artist-list></metadata>"
    )
    transport = fake_transport_factory(body)

    result = _client(transport).browse_artists("release", MBID)

    assert isinstance(result, Err)
    assert isinstance(result.error, FieldDecodeError)
    assert result.error.raw == "2007-99"


def test_invalid_query_fails_before_any_request(fake_transport_factory: Callable[..., FakeTransport]) -> None:
    transport = fake_transport_factory(b"")

    result = _client(transport).browse_works("label", MBID)

    assert isinstance(result, Err)
    assert isinstance(result.error, InvalidQuerySpecError)
    assert transport.calls == []


def test_each_call_issues_exactly_one_request(
    load_fixture: Callable[[str], bytes],
    fake_transport_factory: Callable[..., FakeTransport],
) -> None:
    transport = fake_transport_factory(load_fixture("SearchArtist.xml"))
    client = _client(transport)

    _ = client.search_artist("Gopher")
    _ = client.search_artist("Gopher")

    assert len(transport.calls) == 2


def test_default_root_and_transport_come_from_settings(mocker: MockerFixture) -> None:
    mocker.patch.object(client_module, "WS2_ROOT_URL", "https://example.org/ws/2/")

    client = WS2Client(user_agent="tester/1.0")

    assert client.root_url == "https://example.org/ws/2"
    assert isinstance(client.transport, client_module.MusicBrainzHTTPClient)
    assert client.transport.user_agent == "tester/1.0"
    client.close()


def test_context_manager_closes_transport(mocker: MockerFixture) -> None:
    transport = mocker.Mock()

    with WS2Client(root_url=ROOT, transport=transport) as client:
        assert client.transport is transport

    transport.close.assert_called_once_with()


@pytest.mark.parametrize(
    ("method", "path", "body", "record_type", "title"),
    [
        ("lookup_release", "release", f'<release id="{MBID}"><title>Mezzanine</title></release>', Release, "Mezzanine"),
        ("lookup_release_group", "release-group", f'<release-group id="{MBID}"><title>Mezzanine</title></release-group>', ReleaseGroup, "Mezzanine"),
        ("lookup_label", "label", f'<label id="{MBID}"><name>Virgin</name></label>', Label, "Virgin"),
        ("lookup_recording", "recording", f'<recording id="{MBID}"><title>Teardrop</title></recording>', Recording, "Teardrop"),
        ("lookup_work", "work", f'<work id="{MBID}"><title>Teardrop</title></work>', Work, "Teardrop"),
    ],
)
def test_lookups_decode_their_entity(
    fake_transport_factory: Callable[..., FakeTransport],
    method: str,
    path: str,
    body: str,
    record_type: type,
    title: str,
) -> None:
    transport = fake_transport_factory(f"<metadata>{body}</metadata>".encode())

    result = getattr(_client(transport), method)(MBID)

    record = result.unwrap()
    assert isinstance(record, record_type)
    assert record.id == MBID
    assert (getattr(record, "title", None) or getattr(record, "name", None)) == title
    assert transport.calls == [(f"{ROOT}/{path}/{MBID}", [])]


def test_invalid_query_is_logged_as_its_own_event(
    fake_transport_factory: Callable[..., FakeTransport],
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.WARNING, logger="mbws"):
        _ = _client(fake_transport_factory(b"")).browse_works("label", MBID)

    events = [getattr(record, "ws2_event", None) for record in caplog.records]
    assert events == ["ws2.query.invalid"]


def test_failed_status_is_reported_once(
    fake_transport_factory: Callable[..., FakeTransport],
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.WARNING, logger="mbws"):
        result = _client(fake_transport_factory(b"", status=503)).search_artist("Gopher")

    assert isinstance(result, Err)
    assert str(result.error).count("503") == 1
    (record,) = caplog.records
    assert record.ws2_event == "ws2.request.failed"
    assert record.error_message.count("status=503") == 1
