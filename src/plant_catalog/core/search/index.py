"""In-memory forward (prefix) inverted index over the light dataset."""

import re
from collections import defaultdict
from collections.abc import Iterable, Mapping

from loguru import logger

from plant_catalog.models.plant import LightRecord

_TOKEN_RE = re.compile(r"\w+", flags=re.UNICODE)


def tokenize(text: str) -> list[str]:
    """Split text into case-folded word tokens."""
    return _TOKEN_RE.findall(text.casefold())


def searchable_text(record: LightRecord) -> str:
    """Concatenate every searchable field of a record into one blob.

    Absent fields are skipped. Facet-only fields (types, zones, light,
    maintenance) are filtered through facets, not text search.
    """
    parts: list[str | None] = [record.key, record.full_name, record.genus, record.species]
    sequences: Iterable[tuple[str, ...]] = (
        record.common_names,
        record.cultivars,
        record.tags,
        record.soil_texture,
        record.soil_ph,
        record.soil_drainage,
        record.problems,
        record.attracts,
        record.resistances,
        record.additional_value,
    )
    for values in sequences:
        parts.extend(values)
    return " ".join(p for p in parts if p)


class SearchIndex:
    """Answer prefix queries with the set of matching record keys.

    Every prefix of every token is indexed, so lookups are a dict access per
    query token followed by a set intersection.
    """

    def __init__(self) -> None:
        self._prefixes: dict[str, set[str]] = defaultdict(set)
        self._blobs: dict[str, str] = {}

    @classmethod
    def build(cls, records: Mapping[str, LightRecord]) -> "SearchIndex":
        index = cls()
        for key, record in records.items():
            index.add(key, searchable_text(record))
        logger.debug(
            "Search index built: {} records, {} prefixes", len(index._blobs), len(index._prefixes)
        )
        return index

    def add(self, key: str, text: str) -> None:
        self._blobs[key] = text
        for token in set(tokenize(text)):
            for end in range(1, len(token) + 1):
                self._prefixes[token[:end]].add(key)

    def blob(self, key: str) -> str | None:
        """Return the searchable text indexed for a key."""
        return self._blobs.get(key)

    def __len__(self) -> int:
        return len(self._blobs)

    def search(self, query: str | None) -> frozenset[str] | None:
        """Return keys whose text has a token prefixed by every query token.

        Returns:
            None when the query is absent or blank ("no text filter"),
            otherwise the (possibly empty) set of matching keys. A query of
            punctuation only matches nothing.
        """
        if query is None or not query.strip():
            return None
        tokens = tokenize(query)
        if not tokens:
            return frozenset()

        matches: set[str] | None = None
        for token in sorted(set(tokens), key=len, reverse=True):
            keys = self._prefixes.get(token)
            if not keys:
                return frozenset()
            matches = set(keys) if matches is None else matches & keys
            if not matches:
                return frozenset()
        return frozenset(matches or ())
