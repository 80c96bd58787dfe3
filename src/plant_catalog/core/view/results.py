"""Filter, order and page the light dataset for display."""

from collections.abc import Callable, Mapping, Sequence

from plant_catalog.core.filters.facets import FacetUniverse, parse_zone, record_matches, sort_zones
from plant_catalog.core.search.index import SearchIndex
from plant_catalog.core.view.state import ViewState
from plant_catalog.models.plant import LightRecord, Page, PlantRow


def build_predicate(
    index: SearchIndex, state: ViewState, universe: FacetUniverse | None = None
) -> Callable[[LightRecord], bool]:
    """Combine the search clause and every facet clause with AND."""
    search_hits = index.search(state.search_text)

    def predicate(record: LightRecord) -> bool:
        if search_hits is not None and record.key not in search_hits:
            return False
        return record_matches(record, state.selection, universe)

    return predicate


def filter_keys(
    records: Mapping[str, LightRecord],
    index: SearchIndex,
    state: ViewState,
    universe: FacetUniverse | None = None,
) -> list[str]:
    """Keys of matching records, in dataset order."""
    predicate = build_predicate(index, state, universe)
    return [key for key, record in records.items() if predicate(record)]


def paginate(keys: Sequence[str], render_window: int) -> Page:
    """Take the first render_window keys. A window past the end is fine."""
    window = max(render_window, 0)
    return Page(keys=tuple(keys[:window]), total=len(keys), render_window=window)


def zone_range(zones: Sequence[str]) -> str:
    """Render zones as "low - high", or the single zone, or "" when absent.

    Only parseable zones bound the range; the raw values are used when none parse.
    """
    ordered = sort_zones(z for z in zones if parse_zone(z) is not None) or list(zones)
    if not ordered:
        return ""
    if len(ordered) == 1 or ordered[0] == ordered[-1]:
        return ordered[0]
    return f"{ordered[0]} - {ordered[-1]}"


def summarize(record: LightRecord) -> PlantRow:
    return PlantRow(
        key=record.key,
        title=record.title,
        common_names=", ".join(record.common_names),
        zone_range=zone_range(record.hardiness_zones),
        plant_types=record.plant_types,
        light=record.light,
        maintenance=record.maintenance,
    )
