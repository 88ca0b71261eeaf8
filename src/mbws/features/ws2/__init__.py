# Path: `src/mbws/features/ws2/__init__.py`
# Summary: Export WS2 domain records and request/decode use cases.
# Why: Provide a stable import surface for the client facade and tests.

from .domain.dates import DatePrecision, FlexibleDate
from .domain.entities import (
    Alias,
    Annotation,
    Artist,
    ArtistCredit,
    Label,
    LabelInfo,
    Lifespan,
    Medium,
    NameCredit,
    Recording,
    Release,
    ReleaseGroup,
    TextRepresentation,
    Work,
)
from .domain.envelope import ListEnvelope, ScoredEntity, score_map
from .domain.errors import (
    DecodeError,
    ErrorKind,
    FieldDecodeError,
    InvalidQuerySpecError,
    MalformedDocumentError,
    TransportError,
    WS2Error,
)
from .domain.result import Err, Ok, Result
from .usecases.envelope_decoder import decode_entity, decode_list
from .usecases.ports import HTTPResponse, TransportPort
from .usecases.query_builder import (
    AccessPattern,
    QuerySpec,
    RequestTarget,
    build_request_target,
    escape_lucene,
)

__all__ = [
    "AccessPattern",
    "Alias",
    "Annotation",
    "Artist",
    "ArtistCredit",
    "DatePrecision",
    "DecodeError",
    "Err",
    "ErrorKind",
    "FieldDecodeError",
    "FlexibleDate",
    "HTTPResponse",
    "InvalidQuerySpecError",
    "Label",
    "LabelInfo",
    "Lifespan",
    "ListEnvelope",
    "MalformedDocumentError",
    "Medium",
    "NameCredit",
    "Ok",
    "QuerySpec",
    "Recording",
    "Release",
    "ReleaseGroup",
    "RequestTarget",
    "Result",
    "ScoredEntity",
    "TextRepresentation",
    "TransportError",
    "TransportPort",
    "WS2Error",
    "Work",
    "build_request_target",
    "decode_entity",
    "decode_list",
    "escape_lucene",
    "score_map",
]
