"""Catalog and browsing session built on the loader, index and filters."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from loguru import logger

from plant_catalog.core.dataset.loader import DatasetLoader
from plant_catalog.core.detail.projector import project_detail
from plant_catalog.core.filters.facets import Facet, FacetUniverse
from plant_catalog.core.search.index import SearchIndex
from plant_catalog.core.view.results import filter_keys, paginate, summarize
from plant_catalog.core.view.state import ViewState
from plant_catalog.errors import CatalogError, CatalogNotReadyError
from plant_catalog.models.plant import DetailView, LightRecord, Page, PlantRow


@dataclass(frozen=True)
class PlantCatalog:
    """The loaded dataset with its search index and facet universe.

    Built once per session and never modified afterwards.
    """

    records: Mapping[str, LightRecord]
    index: SearchIndex
    universe: FacetUniverse

    @classmethod
    def from_records(cls, records: Mapping[str, LightRecord]) -> "PlantCatalog":
        index = SearchIndex.build(records)
        universe = FacetUniverse.from_records(records.values())
        logger.debug("Catalog ready: {} plants indexed", len(index))
        return cls(records=records, index=index, universe=universe)

    @classmethod
    def load(cls, loader: DatasetLoader) -> "PlantCatalog":
        return cls.from_records(loader.load_light_dataset())

    def initial_state(self) -> ViewState:
        return ViewState.initial(self.universe)

    def filter(self, state: ViewState) -> list[str]:
        return filter_keys(self.records, self.index, state, self.universe)

    def page(self, state: ViewState) -> Page:
        return paginate(self.filter(state), state.render_window)

    def rows(self, page: Page) -> list[PlantRow]:
        return [summarize(self.records[key]) for key in page.keys]


class SessionStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class CatalogSession:
    """Single-user browsing session.

    Holds the view state and the currently displayed detail record. The
    catalog is loaded once; until it is ready no search or filter input is
    accepted. Detail loads that fail leave the previous detail in place and
    set a notification instead.
    """

    def __init__(self, loader: DatasetLoader) -> None:
        self._loader = loader
        self.status = SessionStatus.LOADING
        self.error: str | None = None
        self.notification: str | None = None
        self.catalog: PlantCatalog | None = None
        self._state: ViewState | None = None
        self.detail_key: str | None = None
        self.detail_record: dict[str, Any] | None = None

    def load(self) -> bool:
        """Load the dataset and build the index. Returns True on success."""
        if self.status is not SessionStatus.LOADING:
            return self.status is SessionStatus.READY
        try:
            self.catalog = PlantCatalog.load(self._loader)
        except CatalogError as e:
            self.status = SessionStatus.FAILED
            self.error = str(e)
            logger.error("Failed to load plant dataset: {}", e)
            return False
        self._state = self.catalog.initial_state()
        self.status = SessionStatus.READY
        return True

    def _ready(self) -> tuple[PlantCatalog, ViewState]:
        if self.catalog is None or self._state is None:
            msg = f"Catalog is not ready (status: {self.status.value})"
            if self.error:
                msg += f": {self.error}"
            raise CatalogNotReadyError(msg)
        return self.catalog, self._state

    @property
    def state(self) -> ViewState:
        return self._ready()[1]

    def search(self, text: str | None) -> ViewState:
        _catalog, state = self._ready()
        self._state = state.with_search(text)
        return self._state

    def toggle(self, facet: Facet, value: str) -> ViewState:
        _catalog, state = self._ready()
        self._state = state.toggle(facet, value)
        return self._state

    def select_all(self, facet: Facet) -> ViewState:
        catalog, state = self._ready()
        self._state = state.select_all(facet, catalog.universe)
        return self._state

    def clear_all(self, facet: Facet) -> ViewState:
        _catalog, state = self._ready()
        self._state = state.clear_all(facet)
        return self._state

    def set_problem_plants(self, include: bool) -> ViewState:
        _catalog, state = self._ready()
        self._state = state.with_problem_plants(include)
        return self._state

    def load_more(self) -> ViewState:
        _catalog, state = self._ready()
        self._state = state.load_more()
        return self._state

    def visible(self) -> Page:
        catalog, state = self._ready()
        return catalog.page(state)

    def visible_rows(self) -> list[PlantRow]:
        catalog, _state = self._ready()
        return catalog.rows(self.visible())

    def open_detail(self, key: str) -> DetailView | None:
        """Load and show a plant's detail record.

        Returns the projected view, or None if the load failed, in which case
        a notification is set and the previous detail stays displayed.
        """
        self._ready()
        try:
            record = self._loader.load_detail_record(key)
        except CatalogError as e:
            self.notification = f"Could not load details for {key}: {e}"
            logger.warning("Detail load failed for {}: {}", key, e)
            return None
        self.notification = None
        self.detail_key = key
        self.detail_record = record
        return project_detail(record)

    def close_detail(self) -> None:
        self.detail_key = None
        self.detail_record = None

    @property
    def detail(self) -> DetailView | None:
        if self.detail_record is None:
            return None
        return project_detail(self.detail_record)
