"""Typed client for the MusicBrainz XML web service (WS2)."""

from mbws.features.ws2 import (
    ErrorKind,
    Err,
    FlexibleDate,
    ListEnvelope,
    Ok,
    QuerySpec,
    Result,
    ScoredEntity,
    WS2Error,
)
from mbws.platform.musicbrainz import MusicBrainzHTTPClient, WS2Client

__version__ = "0.1.0"

__all__ = [
    "Err",
    "ErrorKind",
    "FlexibleDate",
    "ListEnvelope",
    "MusicBrainzHTTPClient",
    "Ok",
    "QuerySpec",
    "Result",
    "ScoredEntity",
    "WS2Client",
    "WS2Error",
    "__version__",
]
