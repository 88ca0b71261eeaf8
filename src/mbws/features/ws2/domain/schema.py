"""Where: src/mbws/features/ws2/domain/schema.py
What: Declarative description of how XML elements map onto record fields.
Why: The decoder walks these descriptions generically, so supporting a new
     entity means declaring its fields rather than writing a decode function.

A field path is a ``/``-separated list of child element names relative to the
record element. ``ATTRIBUTE`` fields read an attribute of the record element
itself, ``CHARDATA`` fields read the record element's own text, and
``MANY`` fields collect every element matched by the final path segment.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FieldKind(str, Enum):
    """Value conversion applied to a mapped field."""

    ATTRIBUTE = "attribute"
    CHARDATA = "chardata"
    TEXT = "text"
    INTEGER = "integer"
    FLAG = "flag"
    DATE = "date"
    NESTED = "nested"
    MANY = "many"


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Map one record field to its XML location."""

    name: str
    path: str
    kind: FieldKind
    required: bool = False
    target: type | None = None

    def __post_init__(self) -> None:
        if self.kind in (FieldKind.NESTED, FieldKind.MANY) and self.target is None:
            raise ValueError(f"field '{self.name}' of kind {self.kind.value} needs a target record type")

    @property
    def segments(self) -> tuple[str, ...]:
        return tuple(part for part in self.path.split("/") if part)


@dataclass(frozen=True, slots=True)
class EntitySchema:
    """The XML element name of a record type and its field mappings."""

    tag: str
    fields: tuple[FieldSpec, ...]


def attr(name: str, attribute: str | None = None, *, required: bool = False) -> FieldSpec:
    return FieldSpec(name, attribute or name.replace("_", "-"), FieldKind.ATTRIBUTE, required)


def chardata(name: str) -> FieldSpec:
    return FieldSpec(name, "", FieldKind.CHARDATA)


def text(name: str, path: str | None = None, *, required: bool = False) -> FieldSpec:
    return FieldSpec(name, path or name.replace("_", "-"), FieldKind.TEXT, required)


def integer(name: str, path: str | None = None) -> FieldSpec:
    return FieldSpec(name, path or name.replace("_", "-"), FieldKind.INTEGER)


def flag(name: str, path: str | None = None) -> FieldSpec:
    return FieldSpec(name, path or name.replace("_", "-"), FieldKind.FLAG)


def date(name: str, path: str | None = None) -> FieldSpec:
    return FieldSpec(name, path or name.replace("_", "-"), FieldKind.DATE)


def nested(name: str, path: str, target: type) -> FieldSpec:
    return FieldSpec(name, path, FieldKind.NESTED, target=target)


def many(name: str, path: str, target: type) -> FieldSpec:
    return FieldSpec(name, path, FieldKind.MANY, target=target)


__all__ = [
    "EntitySchema",
    "FieldKind",
    "FieldSpec",
    "attr",
    "chardata",
    "date",
    "flag",
    "integer",
    "many",
    "nested",
    "text",
]
