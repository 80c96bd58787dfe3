"""Multi-facet filtering over light records.

Each facet (type, zone, light, maintenance) has a universe of values: the
union of that attribute across all records, computed once after load. A
selection holds the currently checked values per facet. "All" is the
enumerated universe, not a wildcard, and a record with no values for a facet
never matches it. A facet with an empty universe does not filter at all.

Problem plants use a single boolean toggle: when it is on every record
passes, when it is off only records listing no problems pass.
"""

import re
from collections import Counter
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, replace
from enum import Enum

from plant_catalog.models.plant import LightRecord


class Facet(str, Enum):
    TYPE = "type"
    ZONE = "zone"
    LIGHT = "light"
    MAINTENANCE = "maintenance"


_FACET_ATTRS: dict[Facet, str] = {
    Facet.TYPE: "plant_types",
    Facet.ZONE: "hardiness_zones",
    Facet.LIGHT: "light",
    Facet.MAINTENANCE: "maintenance",
}

_ZONE_RE = re.compile(r"^\s*(\d+)\s*([A-Za-z]?)\s*$")

LIGHT_ORDER: tuple[str, ...] = (
    "full sun (6 or more hours of direct sunlight a day)",
    "partial shade (direct sunlight only part of the day, 2-6 hours)",
    "dappled sunlight (shade through upper canopy all day)",
    "deep shade (less than 2 hours to no direct sunlight)",
)

# Short spellings seen in older datasets, ranked alongside the long phrases.
_LIGHT_ALIASES: dict[str, int] = {
    "full sun": 0,
    "partial shade": 1,
    "part shade": 1,
    "dappled sunlight": 2,
    "dappled shade": 2,
    "deep shade": 3,
}

MAINTENANCE_ORDER: tuple[str, ...] = ("low", "medium", "high")


def facet_values(record: LightRecord, facet: Facet) -> tuple[str, ...]:
    """Return the values a record carries for a facet."""
    return getattr(record, _FACET_ATTRS[facet])  # type: ignore[no-any-return]


def parse_zone(zone: str) -> tuple[int, str] | None:
    """Parse "7b" into (7, "b"). Returns None for values that do not fit."""
    m = _ZONE_RE.match(zone)
    if not m:
        return None
    return int(m.group(1)), m.group(2).lower()


def sort_zones(zones: Iterable[str]) -> list[str]:
    """Sort zones by number, then letter. Unparseable zones go last, in input order."""

    def key(zone: str) -> tuple[int, int, str]:
        parsed = parse_zone(zone)
        if parsed is None:
            return (1, 0, "")
        return (0, parsed[0], parsed[1])

    return sorted(zones, key=key)


def _ranked_sort(values: Iterable[str], rank: Callable[[str], int | None]) -> list[str]:
    def key(value: str) -> tuple[int, int, str, str]:
        r = rank(value)
        if r is None:
            return (1, 0, value.casefold(), value)
        return (0, r, "", value)

    return sorted(values, key=key)


def _light_rank(value: str) -> int | None:
    folded = value.strip().casefold()
    if folded in LIGHT_ORDER:
        return LIGHT_ORDER.index(folded)
    return _LIGHT_ALIASES.get(folded)


def _maintenance_rank(value: str) -> int | None:
    folded = value.strip().casefold()
    return MAINTENANCE_ORDER.index(folded) if folded in MAINTENANCE_ORDER else None


def sort_light(values: Iterable[str]) -> list[str]:
    """Known light phrases in sun-to-shade order, then the rest alphabetically."""
    return _ranked_sort(values, _light_rank)


def sort_maintenance(values: Iterable[str]) -> list[str]:
    """Low, medium, high, then the rest alphabetically."""
    return _ranked_sort(values, _maintenance_rank)


def sort_types(values: Iterable[str]) -> list[str]:
    """Case-insensitive alphabetical order, ties broken case-sensitively."""
    return sorted(values, key=lambda v: (v.casefold(), v))


SORTERS: dict[Facet, Callable[[Iterable[str]], list[str]]] = {
    Facet.TYPE: sort_types,
    Facet.ZONE: sort_zones,
    Facet.LIGHT: sort_light,
    Facet.MAINTENANCE: sort_maintenance,
}


@dataclass(frozen=True)
class FacetUniverse:
    """Every value each facet takes across the dataset, in display order."""

    values: Mapping[Facet, tuple[str, ...]]
    counts: Mapping[Facet, Mapping[str, int]]

    @classmethod
    def from_records(cls, records: Iterable[LightRecord]) -> "FacetUniverse":
        counters: dict[Facet, Counter[str]] = {facet: Counter() for facet in Facet}
        for record in records:
            for facet in Facet:
                counters[facet].update(set(facet_values(record, facet)))
        return cls(
            values={facet: tuple(SORTERS[facet](counters[facet])) for facet in Facet},
            counts={facet: dict(counters[facet]) for facet in Facet},
        )

    def __getitem__(self, facet: Facet) -> tuple[str, ...]:
        return self.values[facet]

    def count(self, facet: Facet, value: str) -> int:
        """Number of records carrying a value."""
        return self.counts[facet].get(value, 0)


@dataclass(frozen=True)
class FacetSelection:
    """Selected values per facet plus the problem-plants toggle.

    All operations return a new selection.
    """

    types: frozenset[str] = frozenset()
    zones: frozenset[str] = frozenset()
    light: frozenset[str] = frozenset()
    maintenance: frozenset[str] = frozenset()
    include_problem_plants: bool = True

    @classmethod
    def all_of(cls, universe: FacetUniverse) -> "FacetSelection":
        return cls(
            types=frozenset(universe[Facet.TYPE]),
            zones=frozenset(universe[Facet.ZONE]),
            light=frozenset(universe[Facet.LIGHT]),
            maintenance=frozenset(universe[Facet.MAINTENANCE]),
            include_problem_plants=True,
        )

    def selected(self, facet: Facet) -> frozenset[str]:
        return {
            Facet.TYPE: self.types,
            Facet.ZONE: self.zones,
            Facet.LIGHT: self.light,
            Facet.MAINTENANCE: self.maintenance,
        }[facet]

    def _with(self, facet: Facet, values: frozenset[str]) -> "FacetSelection":
        field_name = {
            Facet.TYPE: "types",
            Facet.ZONE: "zones",
            Facet.LIGHT: "light",
            Facet.MAINTENANCE: "maintenance",
        }[facet]
        return replace(self, **{field_name: values})

    def toggle(self, facet: Facet, value: str) -> "FacetSelection":
        current = self.selected(facet)
        if value in current:
            return self._with(facet, current - {value})
        return self._with(facet, current | {value})

    def select_all(self, facet: Facet, universe: FacetUniverse) -> "FacetSelection":
        return self._with(facet, frozenset(universe[facet]))

    def clear_all(self, facet: Facet) -> "FacetSelection":
        return self._with(facet, frozenset())

    def with_values(self, facet: Facet, values: Iterable[str]) -> "FacetSelection":
        return self._with(facet, frozenset(values))

    def with_problem_plants(self, include: bool) -> "FacetSelection":
        return replace(self, include_problem_plants=include)


def facet_matches(record: LightRecord, facet: Facet, selected: frozenset[str]) -> bool:
    """True if the record has at least one value in a non-empty selection."""
    if not selected:
        return False
    return any(value in selected for value in facet_values(record, facet))


def problems_match(record: LightRecord, include_problem_plants: bool) -> bool:
    return include_problem_plants or not record.problems


def record_matches(
    record: LightRecord, selection: FacetSelection, universe: FacetUniverse | None = None
) -> bool:
    """AND of every facet predicate and the problem-plants policy.

    Given a universe, facets that no record in the dataset carries are
    skipped: with nothing to select they place no restriction.
    """
    return all(
        facet_matches(record, facet, selection.selected(facet))
        for facet in Facet
        if universe is None or universe[facet]
    ) and problems_match(record, selection.include_problem_plants)
