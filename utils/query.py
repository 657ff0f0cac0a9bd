"""Query-string composition from independent option fragments.

Each fragment declares the keys it may emit and contributes nothing while it
sits at its zero value. `compose` concatenates the contributions, so adding or
reordering fragments never changes what another fragment emits.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

import httpx

from core.errors import SerializationError

DEFAULT_PER_PAGE = 30

QueryPairs = list[tuple[str, str]]


class QueryFragment(Protocol):
    def query_pairs(self) -> QueryPairs:
        ...


@dataclass(frozen=True)
class Pagination:
    per_page: int = DEFAULT_PER_PAGE

    def query_pairs(self) -> QueryPairs:
        if not self.per_page:
            return []
        return [("per_page", str(self.per_page))]


@dataclass(frozen=True)
class Filter:
    query: str = ""

    def query_pairs(self) -> QueryPairs:
        if not self.query:
            return []
        return [("q", self.query)]


@dataclass(frozen=True)
class FieldSelection:
    ids: Sequence[str] = ()

    def query_pairs(self) -> QueryPairs:
        # one repeated key per id, in caller order
        return [("fields", field_id) for field_id in self.ids]


def compose(path: str, *fragments: QueryFragment) -> str:
    """Return `path` with the query pairs of every fragment appended."""
    try:
        url = httpx.URL(path)
    except (httpx.InvalidURL, TypeError) as e:
        raise SerializationError(f"failed to add options to request: {e}") from e

    pairs: QueryPairs = []
    for fragment in fragments:
        pairs.extend(fragment.query_pairs())
    if not pairs:
        return str(url)
    return str(url.copy_merge_params(httpx.QueryParams(pairs)))
