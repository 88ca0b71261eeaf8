"""Where: src/mbws/features/ws2/domain/entities.py
What: Entity records returned by the web service and their XML schemas.
Why: Keep data shapes and their decoding contract side by side.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from . import schema as f
from .dates import FlexibleDate


@dataclass(frozen=True, slots=True)
class Alias:
    name: str = ""
    sort_name: str = ""
    locale: str = ""
    type: str = ""


@dataclass(frozen=True, slots=True)
class Lifespan:
    ended: bool = False
    begin: FlexibleDate = field(default_factory=FlexibleDate.absent)
    end: FlexibleDate = field(default_factory=FlexibleDate.absent)


@dataclass(frozen=True, slots=True)
class Artist:
    id: str = ""
    type: str = ""
    name: str = ""
    sort_name: str = ""
    disambiguation: str = ""
    gender: str = ""
    country_code: str = ""  # ISO 3166-1 alpha-2
    lifespan: Lifespan = field(default_factory=Lifespan)
    aliases: tuple[Alias, ...] = ()


@dataclass(frozen=True, slots=True)
class NameCredit:
    name: str = ""
    join_phrase: str = ""
    artist: Artist = field(default_factory=Artist)


@dataclass(frozen=True, slots=True)
class ArtistCredit:
    name_credits: tuple[NameCredit, ...] = ()

    @property
    def display_name(self) -> str:
        """Join credited names the way the service prints them."""

        return "".join(
            (credit.name or credit.artist.name) + credit.join_phrase
            for credit in self.name_credits
        )


@dataclass(frozen=True, slots=True)
class TextRepresentation:
    language: str = ""
    script: str = ""


@dataclass(frozen=True, slots=True)
class Label:
    id: str = ""
    type: str = ""
    name: str = ""
    sort_name: str = ""
    disambiguation: str = ""
    label_code: int = 0
    country_code: str = ""
    lifespan: Lifespan = field(default_factory=Lifespan)
    aliases: tuple[Alias, ...] = ()


@dataclass(frozen=True, slots=True)
class LabelInfo:
    catalog_number: str = ""
    label: Label = field(default_factory=Label)


@dataclass(frozen=True, slots=True)
class Medium:
    title: str = ""
    position: int = 0
    format: str = ""


@dataclass(frozen=True, slots=True)
class ReleaseGroup:
    id: str = ""
    type: str = ""
    title: str = ""
    disambiguation: str = ""
    primary_type: str = ""
    first_release_date: FlexibleDate = field(default_factory=FlexibleDate.absent)
    artist_credit: ArtistCredit = field(default_factory=ArtistCredit)
    releases: tuple[Release, ...] = ()


@dataclass(frozen=True, slots=True)
class Release:
    id: str = ""
    title: str = ""
    status: str = ""
    disambiguation: str = ""
    text_representation: TextRepresentation = field(default_factory=TextRepresentation)
    artist_credit: ArtistCredit = field(default_factory=ArtistCredit)
    release_group: ReleaseGroup = field(default_factory=ReleaseGroup)
    date: FlexibleDate = field(default_factory=FlexibleDate.absent)
    country_code: str = ""
    barcode: str = ""
    asin: str = ""
    label_infos: tuple[LabelInfo, ...] = ()
    media: tuple[Medium, ...] = ()


@dataclass(frozen=True, slots=True)
class Recording:
    id: str = ""
    title: str = ""
    length: int = 0  # milliseconds
    disambiguation: str = ""
    video: bool = False
    artist_credit: ArtistCredit = field(default_factory=ArtistCredit)
    releases: tuple[Release, ...] = ()


@dataclass(frozen=True, slots=True)
class Work:
    id: str = ""
    type: str = ""
    title: str = ""
    language: str = ""
    disambiguation: str = ""
    aliases: tuple[Alias, ...] = ()


@dataclass(frozen=True, slots=True)
class Annotation:
    """A miniature wiki attached to an artist, label, recording, release,
    release group or work."""

    type: str = ""
    entity: str = ""
    name: str = ""
    text: str = ""


_ARTIST_CREDIT = f.nested("artist_credit", "artist-credit", ArtistCredit)

SCHEMAS: dict[type, f.EntitySchema] = {
    Alias: f.EntitySchema("alias", (
        f.chardata("name"),
        f.attr("sort_name"),
        f.attr("locale"),
        f.attr("type"),
    )),
    Lifespan: f.EntitySchema("life-span", (
        f.flag("ended"),
        f.date("begin"),
        f.date("end"),
    )),
    Artist: f.EntitySchema("artist", (
        f.attr("id", required=True),
        f.attr("type"),
        f.text("name"),
        f.text("sort_name"),
        f.text("disambiguation"),
        f.text("gender"),
        f.text("country_code", "country"),
        f.nested("lifespan", "life-span", Lifespan),
        f.many("aliases", "alias-list/alias", Alias),
    )),
    NameCredit: f.EntitySchema("name-credit", (
        f.text("name"),
        f.attr("join_phrase", "joinphrase"),
        f.nested("artist", "artist", Artist),
    )),
    ArtistCredit: f.EntitySchema("artist-credit", (
        f.many("name_credits", "name-credit", NameCredit),
    )),
    TextRepresentation: f.EntitySchema("text-representation", (
        f.text("language"),
        f.text("script"),
    )),
    Label: f.EntitySchema("label", (
        f.attr("id"),
        f.attr("type"),
        f.text("name"),
        f.text("sort_name"),
        f.text("disambiguation"),
        f.integer("label_code"),
        f.text("country_code", "country"),
        f.nested("lifespan", "life-span", Lifespan),
        f.many("aliases", "alias-list/alias", Alias),
    )),
    LabelInfo: f.EntitySchema("label-info", (
        f.text("catalog_number"),
        f.nested("label", "label", Label),
    )),
    Medium: f.EntitySchema("medium", (
        f.text("title"),
        f.integer("position"),
        f.text("format"),
    )),
    ReleaseGroup: f.EntitySchema("release-group", (
        f.attr("id"),
        f.attr("type"),
        f.text("title"),
        f.text("disambiguation"),
        f.text("primary_type"),
        f.date("first_release_date"),
        _ARTIST_CREDIT,
        f.many("releases", "release-list/release", Release),
    )),
    Release: f.EntitySchema("release", (
        f.attr("id", required=True),
        f.text("title"),
        f.text("status"),
        f.text("disambiguation"),
        f.nested("text_representation", "text-representation", TextRepresentation),
        _ARTIST_CREDIT,
        f.nested("release_group", "release-group", ReleaseGroup),
        f.date("date"),
        f.text("country_code", "country"),
        f.text("barcode"),
        f.text("asin"),
        f.many("label_infos", "label-info-list/label-info", LabelInfo),
        f.many("media", "medium-list/medium", Medium),
    )),
    Recording: f.EntitySchema("recording", (
        f.attr("id", required=True),
        f.text("title"),
        f.integer("length"),
        f.text("disambiguation"),
        f.flag("video"),
        _ARTIST_CREDIT,
        f.many("releases", "release-list/release", Release),
    )),
    Work: f.EntitySchema("work", (
        f.attr("id", required=True),
        f.attr("type"),
        f.text("title"),
        f.text("language"),
        f.text("disambiguation"),
        f.many("aliases", "alias-list/alias", Alias),
    )),
    Annotation: f.EntitySchema("annotation", (
        f.attr("type"),
        f.text("entity"),
        f.text("name"),
        f.text("text"),
    )),
}


def schema_for(record_type: type) -> f.EntitySchema:
    """Return the registered schema for ``record_type``.

    Raises:
        KeyError: ``record_type`` has no registered schema.
    """
    try:
        return SCHEMAS[record_type]
    except KeyError:
        raise KeyError(f"no XML schema registered for {record_type.__name__}") from None


__all__ = [
    "Alias",
    "Annotation",
    "Artist",
    "ArtistCredit",
    "Label",
    "LabelInfo",
    "Lifespan",
    "Medium",
    "NameCredit",
    "Recording",
    "Release",
    "ReleaseGroup",
    "SCHEMAS",
    "TextRepresentation",
    "Work",
    "schema_for",
]
