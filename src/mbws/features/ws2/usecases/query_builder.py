"""Where: src/mbws/features/ws2/usecases/query_builder.py
What: Turn a request description into a path and ordered query parameters.
Why: Keep parameter presence rules in one pure function that needs no
     transport to test.

Request shapes:
    lookup:   /<ENTITY>/<MBID>?inc=<INC>
    browse:   /<ENTITY>?<RELATION>=<MBID>&limit=<LIMIT>&offset=<OFFSET>&inc=<INC>
    search:   /<ENTITY>?query=<QUERY>&limit=<LIMIT>&offset=<OFFSET>
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Final
from urllib.parse import quote, urlencode

from mbws.features.ws2.domain.errors import InvalidQuerySpecError

LUCENE_SPECIAL: Final[re.Pattern[str]] = re.compile(r'([+\-&|!(){}\[\]\^"~*?:\\\/])')

RELATABLE_TYPES: Final[tuple[str, ...]] = (
    "area", "artist", "label", "place", "event", "recording", "release",
    "release-group", "series", "url", "work", "instrument",
)
RELATION_INCLUDES: Final[tuple[str, ...]] = tuple(f"{entity}-rels" for entity in RELATABLE_TYPES)
TAG_INCLUDES: Final[tuple[str, ...]] = ("tags",)
RATING_INCLUDES: Final[tuple[str, ...]] = ("ratings",)


class AccessPattern(str, Enum):
    """The three ways the service exposes an entity collection."""

    LOOKUP = "lookup"
    BROWSE = "browse"
    SEARCH = "search"


LOOKUP_INCLUDES: Final[dict[str, tuple[str, ...]]] = {
    "artist": (
        "recordings", "releases", "release-groups", "works",
        "various-artists", "discids", "media", "isrcs", "aliases", "annotation",
    ) + RELATION_INCLUDES + TAG_INCLUDES + RATING_INCLUDES,
    "label": (
        "releases", "discids", "media", "aliases", "annotation",
    ) + RELATION_INCLUDES + TAG_INCLUDES + RATING_INCLUDES,
    "recording": (
        "artists", "releases", "discids", "media", "artist-credits", "isrcs",
        "work-level-rels", "annotation", "aliases",
    ) + TAG_INCLUDES + RATING_INCLUDES + RELATION_INCLUDES,
    "release": (
        "artists", "labels", "recordings", "release-groups", "media",
        "artist-credits", "discids", "isrcs", "recording-level-rels",
        "work-level-rels", "annotation", "aliases",
    ) + TAG_INCLUDES + RELATION_INCLUDES,
    "release-group": (
        "artists", "releases", "discids", "media", "artist-credits",
        "annotation", "aliases",
    ) + TAG_INCLUDES + RATING_INCLUDES + RELATION_INCLUDES,
    "work": ("aliases", "annotation") + TAG_INCLUDES + RATING_INCLUDES + RELATION_INCLUDES,
}

BROWSE_INCLUDES: Final[dict[str, tuple[str, ...]]] = {
    "artist": ("aliases",) + TAG_INCLUDES + RATING_INCLUDES + RELATION_INCLUDES,
    "label": ("aliases",) + TAG_INCLUDES + RATING_INCLUDES + RELATION_INCLUDES,
    "recording": ("artist-credits", "isrcs") + TAG_INCLUDES + RATING_INCLUDES + RELATION_INCLUDES,
    "release": (
        "artist-credits", "labels", "recordings", "isrcs", "release-groups",
        "media", "discids",
    ) + RELATION_INCLUDES,
    "release-group": ("artist-credits",) + TAG_INCLUDES + RATING_INCLUDES + RELATION_INCLUDES,
    "work": ("aliases", "annotation") + TAG_INCLUDES + RATING_INCLUDES + RELATION_INCLUDES,
}

BROWSE_RELATIONS: Final[dict[str, tuple[str, ...]]] = {
    "artist": ("recording", "release", "release-group", "work"),
    "label": ("release",),
    "recording": ("artist", "release"),
    "release": ("artist", "track_artist", "label", "recording", "release-group"),
    "release-group": ("artist", "release"),
    "work": ("artist",),
}

SEARCHABLE_ENTITIES: Final[tuple[str, ...]] = (
    "annotation", "artist", "label", "recording", "release", "release-group", "work",
)


@dataclass(frozen=True, slots=True)
class QuerySpec:
    """Immutable description of one request.

    ``value`` is the MBID for lookups and browses, the raw query text for
    searches. Negative ``limit``/``offset`` leave paging to the server.
    """

    pattern: AccessPattern
    entity: str
    value: str
    relation: str = ""
    limit: int = -1
    offset: int = -1
    includes: tuple[str, ...] = ()

    @classmethod
    def lookup(cls, entity: str, mbid: str, includes: tuple[str, ...] = ()) -> "QuerySpec":
        return cls(AccessPattern.LOOKUP, entity, mbid, includes=tuple(includes))

    @classmethod
    def browse(
        cls,
        entity: str,
        relation: str,
        mbid: str,
        limit: int = -1,
        offset: int = -1,
        includes: tuple[str, ...] = (),
    ) -> "QuerySpec":
        return cls(AccessPattern.BROWSE, entity, mbid, relation, limit, offset, tuple(includes))

    @classmethod
    def search(cls, entity: str, query: str, limit: int = -1, offset: int = -1) -> "QuerySpec":
        return cls(AccessPattern.SEARCH, entity, query, limit=limit, offset=offset)


@dataclass(frozen=True, slots=True)
class RequestTarget:
    """Path below the service root plus query parameters in send order."""

    path: str
    params: tuple[tuple[str, str], ...] = ()

    def url(self, root: str) -> str:
        return root.rstrip("/") + self.path

    def query_string(self) -> str:
        return urlencode(self.params)

    def param(self, name: str) -> str | None:
        for key, value in self.params:
            if key == name:
                return value
        return None


def escape_lucene(text: str) -> str:
    """Escape Lucene special characters so ``text`` is searched literally."""

    return LUCENE_SPECIAL.sub(r"\\\1", text)


def _check_includes(spec: QuerySpec, valid: dict[str, tuple[str, ...]]) -> None:
    allowed = valid.get(spec.entity, ())
    for include in spec.includes:
        if include not in allowed:
            raise InvalidQuerySpecError(
                f"'{include}' is not a valid {spec.pattern.value} include for {spec.entity}"
            )


def _paging(spec: QuerySpec) -> list[tuple[str, str]]:
    params: list[tuple[str, str]] = []
    if spec.limit >= 0:
        params.append(("limit", str(spec.limit)))
    if spec.offset >= 0:
        params.append(("offset", str(spec.offset)))
    return params


def _inc(spec: QuerySpec) -> list[tuple[str, str]]:
    if not spec.includes:
        return []
    return [("inc", ",".join(spec.includes))]


def build_request_target(spec: QuerySpec) -> RequestTarget:
    """Map ``spec`` onto the request it describes.

    Args:
        spec: Request description.

    Returns:
        RequestTarget: Path and ordered parameters. Unset optional values are
        omitted rather than sent empty.

    Raises:
        InvalidQuerySpecError: Unknown entity, empty identifier or query,
            unsupported relation or include.
    """
    value = spec.value.strip()

    if spec.pattern is AccessPattern.SEARCH:
        if spec.entity not in SEARCHABLE_ENTITIES:
            raise InvalidQuerySpecError(f"unknown search entity '{spec.entity}'")
        if not value:
            raise InvalidQuerySpecError("a search needs a non-empty query")
        if spec.includes:
            raise InvalidQuerySpecError("searches do not accept includes")
        return RequestTarget(f"/{spec.entity}", tuple([("query", spec.value), *_paging(spec)]))

    if spec.entity not in LOOKUP_INCLUDES:
        raise InvalidQuerySpecError(f"unknown {spec.pattern.value} entity '{spec.entity}'")
    if not value:
        raise InvalidQuerySpecError(f"a {spec.pattern.value} needs a non-empty MBID")

    if spec.pattern is AccessPattern.LOOKUP:
        _check_includes(spec, LOOKUP_INCLUDES)
        return RequestTarget(f"/{spec.entity}/{quote(value, safe='')}", tuple(_inc(spec)))

    relations = BROWSE_RELATIONS[spec.entity]
    if spec.relation not in relations:
        raise InvalidQuerySpecError(
            f"cannot browse {spec.entity} by '{spec.relation}'; expected one of {', '.join(relations)}"
        )
    _check_includes(spec, BROWSE_INCLUDES)
    return RequestTarget(
        f"/{spec.entity}",
        tuple([(spec.relation, value), *_paging(spec), *_inc(spec)]),
    )


__all__ = [
    "AccessPattern",
    "BROWSE_INCLUDES",
    "BROWSE_RELATIONS",
    "LOOKUP_INCLUDES",
    "QuerySpec",
    "RequestTarget",
    "SEARCHABLE_ENTITIES",
    "build_request_target",
    "escape_lucene",
]
