"""Where: src/mbws/features/ws2/usecases/envelope_decoder.py
What: Decode web service XML into typed records, list envelopes and scores.
Why: One generic walk over declarative schemas replaces a decode function
     per entity type.
"""

from __future__ import annotations

import xml.etree.ElementTree as etree
from typing import Any, TypeVar, cast

from mbws.features.ws2.domain.dates import FlexibleDate
from mbws.features.ws2.domain.entities import schema_for
from mbws.features.ws2.domain.envelope import ListEnvelope, ScoredEntity
from mbws.features.ws2.domain.errors import FieldDecodeError, MalformedDocumentError
from mbws.features.ws2.domain.schema import FieldKind, FieldSpec

T = TypeVar("T")

_METADATA_TAG = "metadata"
_TRUE_VALUES = frozenset({"true", "1"})
_FALSE_VALUES = frozenset({"false", "0", ""})


def _local(name: str) -> str:
    """Drop a ``{namespace}`` prefix from a tag or attribute name."""

    return name.rsplit("}", 1)[-1] if name.startswith("{") else name


def _strip_namespaces(root: etree.Element) -> None:
    for element in root.iter():
        element.tag = _local(element.tag)
        if any(key.startswith("{") for key in element.attrib):
            element.attrib = {_local(key): value for key, value in element.attrib.items()}


def parse_document(body: bytes | str) -> etree.Element:
    """Parse a response body into an element tree with local names only.

    Raises:
        MalformedDocumentError: The body is not well-formed XML.
    """
    try:
        root = etree.fromstring(body)
    except etree.ParseError as exc:
        raise MalformedDocumentError(f"response is not well-formed XML: {exc}") from exc
    _strip_namespaces(root)
    return root


def _find_path(element: etree.Element, segments: tuple[str, ...]) -> etree.Element | None:
    current: etree.Element | None = element
    for segment in segments:
        if current is None:
            return None
        current = current.find(segment)
    return current


def _find_all(element: etree.Element, segments: tuple[str, ...]) -> list[etree.Element]:
    parent = _find_path(element, segments[:-1])
    if parent is None:
        return []
    return parent.findall(segments[-1])


def _parse_int(spec_name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise FieldDecodeError(spec_name, raw, "not an integer") from None


def _parse_flag(spec_name: str, raw: str) -> bool:
    normalized = raw.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise FieldDecodeError(spec_name, raw, "not a boolean")


def _decode_field(element: etree.Element, spec: FieldSpec) -> tuple[bool, Any]:
    """Return ``(found, value)`` for one mapped field."""

    if spec.kind is FieldKind.ATTRIBUTE:
        raw_attr = element.get(spec.path)
        return raw_attr is not None, raw_attr

    if spec.kind is FieldKind.CHARDATA:
        return True, (element.text or "").strip()

    if spec.kind is FieldKind.MANY:
        children = _find_all(element, spec.segments)
        return bool(children), tuple(decode_record(child, cast(type, spec.target)) for child in children)

    child = _find_path(element, spec.segments)
    if child is None:
        return False, None

    if spec.kind is FieldKind.NESTED:
        return True, decode_record(child, cast(type, spec.target))

    raw = (child.text or "").strip()
    if spec.kind is FieldKind.TEXT:
        return True, raw
    if spec.kind is FieldKind.INTEGER:
        return True, _parse_int(spec.name, raw) if raw else 0
    if spec.kind is FieldKind.FLAG:
        return True, _parse_flag(spec.name, raw)
    return True, FlexibleDate.parse(raw, field=spec.name)


def decode_record(element: etree.Element, record_type: type[T]) -> T:
    """Build ``record_type`` from ``element`` using its registered schema.

    Fields missing from the document keep their dataclass defaults.

    Raises:
        FieldDecodeError: A required field is missing or a value is malformed.
    """
    schema = schema_for(record_type)
    values: dict[str, Any] = {}
    for spec in schema.fields:
        found, value = _decode_field(element, spec)
        if not found:
            if spec.required:
                raise FieldDecodeError(f"{schema.tag}.{spec.name}", None, "required value is missing")
            continue
        values[spec.name] = value
    return record_type(**values)


def _list_container(root: etree.Element, tag: str) -> etree.Element:
    list_tag = f"{tag}-list"
    if root.tag == list_tag:
        return root
    if root.tag == _METADATA_TAG:
        container = root.find(list_tag)
        if container is not None:
            return container
    raise MalformedDocumentError(f"expected a <{list_tag}> container, found <{root.tag}>")


def _counter(container: etree.Element, name: str) -> int:
    raw = container.get(name)
    if raw is None:
        raise FieldDecodeError(f"{container.tag}.{name}", None, "required attribute is missing")
    try:
        return int(raw)
    except ValueError:
        raise FieldDecodeError(f"{container.tag}.{name}", raw, "not an integer") from None


def decode_list(
    body: bytes | str,
    record_type: type[T],
    *,
    scored: bool = False,
) -> ListEnvelope[Any]:
    """Decode a ``<tag>-list`` envelope.

    Args:
        body: Raw response body.
        record_type: Entity record each list child decodes into.
        scored: Wrap each record in ``ScoredEntity`` with its ``score``.

    Returns:
        ListEnvelope: Server-reported ``count``/``offset`` and the records in
        document order.

    Raises:
        MalformedDocumentError: Not XML, or no list container for the entity.
        FieldDecodeError: Missing or non-numeric counters, or a bad field.
    """
    tag = schema_for(record_type).tag
    container = _list_container(parse_document(body), tag)
    count = _counter(container, "count")
    offset = _counter(container, "offset")

    items: list[Any] = []
    for child in container.findall(tag):
        record = decode_record(child, record_type)
        if scored:
            raw_score = child.get("score")
            score = _parse_int(f"{tag}.score", raw_score) if raw_score else 0
            items.append(ScoredEntity(record, score))
        else:
            items.append(record)
    return ListEnvelope(count=count, offset=offset, items=tuple(items))


def decode_entity(body: bytes | str, record_type: type[T]) -> T:
    """Decode a lookup document holding exactly one entity.

    Raises:
        MalformedDocumentError: Not XML, or no element for the entity.
        FieldDecodeError: A field is missing or malformed.
    """
    tag = schema_for(record_type).tag
    root = parse_document(body)
    element = root if root.tag == tag else None
    if element is None and root.tag == _METADATA_TAG:
        element = root.find(tag)
    if element is None:
        raise MalformedDocumentError(f"expected a <{tag}> element, found <{root.tag}>")
    return decode_record(element, record_type)


__all__ = ["decode_entity", "decode_list", "decode_record", "parse_document"]
