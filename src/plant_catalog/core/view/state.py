"""Immutable view state: search text, facet selection and render window."""

from dataclasses import dataclass, replace

from plant_catalog.config import DEFAULT_RENDER_WINDOW, RENDER_WINDOW_INCREMENT
from plant_catalog.core.filters.facets import Facet, FacetSelection, FacetUniverse


@dataclass(frozen=True)
class ViewState:
    """What the user is currently looking at.

    Every action returns a new state. Any change to the search text or a
    facet selection resets the render window; only load_more() grows it.
    """

    selection: FacetSelection
    search_text: str = ""
    render_window: int = DEFAULT_RENDER_WINDOW

    @classmethod
    def initial(cls, universe: FacetUniverse) -> "ViewState":
        return cls(selection=FacetSelection.all_of(universe))

    def _reset(self, **changes: object) -> "ViewState":
        return replace(self, render_window=DEFAULT_RENDER_WINDOW, **changes)  # type: ignore[arg-type]

    def with_search(self, text: str | None) -> "ViewState":
        return self._reset(search_text=text or "")

    def with_selection(self, selection: FacetSelection) -> "ViewState":
        return self._reset(selection=selection)

    def toggle(self, facet: Facet, value: str) -> "ViewState":
        return self.with_selection(self.selection.toggle(facet, value))

    def select_all(self, facet: Facet, universe: FacetUniverse) -> "ViewState":
        return self.with_selection(self.selection.select_all(facet, universe))

    def clear_all(self, facet: Facet) -> "ViewState":
        return self.with_selection(self.selection.clear_all(facet))

    def with_problem_plants(self, include: bool) -> "ViewState":
        return self.with_selection(self.selection.with_problem_plants(include))

    def load_more(self) -> "ViewState":
        return replace(self, render_window=self.render_window + RENDER_WINDOW_INCREMENT)
