"""Searchable, filterable plant catalog."""

from plant_catalog.catalog import CatalogSession, PlantCatalog
from plant_catalog.core.dataset.loader import DatasetLoader
from plant_catalog.errors import CatalogError, CatalogNotReadyError, LoadError, ParseError
from plant_catalog.protocols import FetcherProtocol
from plant_catalog.transport import DirectoryFetcher, HttpFetcher, open_fetcher

__all__ = [
    "CatalogError",
    "CatalogNotReadyError",
    "CatalogSession",
    "DatasetLoader",
    "DirectoryFetcher",
    "FetcherProtocol",
    "HttpFetcher",
    "LoadError",
    "ParseError",
    "PlantCatalog",
    "open_fetcher",
]
