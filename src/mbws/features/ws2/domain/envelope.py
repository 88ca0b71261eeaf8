"""Summary: Paginated list results and relevance-scored search entries.
Why: Preserve server-reported pagination verbatim alongside decoded items."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class ScoredEntity(Generic[E]):
    """A search hit and its 0-100 relevance score."""

    entity: E
    score: int = 0


@dataclass(frozen=True, slots=True)
class ListEnvelope(Generic[T]):
    """One page of results.

    ``count`` is the total number of matches on the server and ``offset``
    the index of the first item in this page, both as reported by the
    service rather than derived from ``items``.
    """

    count: int
    offset: int
    items: tuple[T, ...] = ()

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


def score_map(envelope: ListEnvelope[ScoredEntity[E]]) -> dict[E, int]:
    """Map each search hit to its score.

    Entities that compare equal collapse into one key holding the first score.
    """

    scores: dict[E, int] = {}
    for hit in envelope.items:
        _ = scores.setdefault(hit.entity, hit.score)
    return scores


__all__ = ["ListEnvelope", "ScoredEntity", "score_map"]
