"""Shared test fixtures."""

from pathlib import Path
from typing import Any

import pytest

from plant_catalog.catalog import PlantCatalog
from plant_catalog.core.dataset.loader import DatasetLoader
from tests.unit.fakes import FakeFetcher, gzip_json

FULL_SUN = "Full sun (6 or more hours of direct sunlight a day)"
PARTIAL_SHADE = "Partial Shade (Direct sunlight only part of the day, 2-6 hours)"
DAPPLED = "Dappled Sunlight (Shade through upper canopy all day)"
DEEP_SHADE = "Deep shade (Less than 2 hours to no direct sunlight)"

LIGHT_DATASET: dict[str, dict[str, Any]] = {
    "rosa-rugosa": {
        "f": "Rosa rugosa",
        "c": ["Beach Rose", "Saltspray Rose"],
        "g": "Rosa",
        "sp": "rugosa",
        "t": ["Shrub"],
        "z": ["2", "3", "4", "5", "6", "7"],
        "a": ["Bees", "Butterflies"],
        "r": ["Salt", "Drought"],
        "m": "Low",
        "l": [FULL_SUN],
    },
    "rhododendron-catawbiense": {
        "f": "Rhododendron catawbiense",
        "c": ["Catawba Rhododendron"],
        "g": "Rhododendron",
        "sp": "catawbiense",
        "t": ["Shrub"],
        "z": ["4a", "5", "6", "7", "8"],
        "m": ["Medium"],
        "l": [PARTIAL_SHADE, DAPPLED],
        "s": ["Loam (Silt)"],
        "ph": ["Acid (<6.0)"],
        "d": ["Good Drainage"],
        "p": ["Root rot", "Lace bugs"],
    },
    "acer-rubrum": {
        "f": "Acer rubrum",
        "c": ["Red Maple"],
        "cv": ["October Glory", "Red Sunset"],
        "g": "Acer",
        "sp": "rubrum",
        "t": ["Tree"],
        "z": ["3", "4", "5", "6", "7", "8", "9"],
        "m": "Low",
        "l": [FULL_SUN, PARTIAL_SHADE],
        "tg": ["fall color"],
    },
    "hosta-plantaginea": {
        "f": "Hosta plantaginea",
        "c": ["August Lily"],
        "g": "Hosta",
        "t": ["Herbaceous Perennial"],
        "z": ["3a", "9b"],
        "m": ["Medium"],
        "l": [DEEP_SHADE],
        "p": ["Slugs"],
    },
    "mystery-plant": {"f": "Mystery plant"},
}

DETAIL_RECORDS: dict[str, dict[str, Any]] = {
    "rosa-rugosa": {
        "name": "rosa-rugosa",
        "full-name": "Rosa rugosa",
        "common-names": ["Beach Rose", "Saltspray Rose"],
        "family": "Rosaceae",
        "genus": "Rosa",
        "species": "rugosa",
        "plant-type": ["Shrub"],
        "usda-plant-hardiness-zone": ["2", "3"],
        "maintenance": "Low",
        "flower-color": [],
        "stem-description": "   ",
        "references": [{"url": "https://example.org/rosa", "referenced": "2024-05-01"}],
        "internal-notes": "never rendered",
    },
}


def publish(files: dict[str, bytes], root: Path) -> Path:
    """Write payloads to a directory laid out like the published site."""
    for rel, payload in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(payload)
    return root


def published_files() -> dict[str, bytes]:
    files = {"light-weight-data-set.json.gz": gzip_json(LIGHT_DATASET)}
    for key, record in DETAIL_RECORDS.items():
        files[f"zipped-plants/{key}.gz"] = gzip_json(record)
    return files


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    """Return a fetcher serving the sample dataset and detail records."""
    return FakeFetcher(published_files())


@pytest.fixture
def loader(fake_fetcher: FakeFetcher) -> DatasetLoader:
    return DatasetLoader(fake_fetcher)


@pytest.fixture
def catalog(loader: DatasetLoader) -> PlantCatalog:
    """Return a catalog built from the sample dataset."""
    return PlantCatalog.load(loader)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Return a directory holding the published sample data."""
    return publish(published_files(), tmp_path / "public")
