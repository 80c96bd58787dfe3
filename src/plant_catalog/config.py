"""Configuration constants for the plant catalog."""

import os
from pathlib import Path

# Resource paths, relative to the data source root (a URL or a directory).
LIGHT_DATASET_PATH: str = "light-weight-data-set.json.gz"
DETAIL_RECORD_DIR: str = "zipped-plants"

# Directory with published data. First directory which is found is used.
DATA_DIRECTORIES: list[Path] = [
    Path("~/.local/share/plant-catalog").expanduser(),
    Path("~/.plant-catalog").expanduser(),
    Path("public"),
]

# Environment variable overriding the data source (URL or directory).
SOURCE_ENV_VAR: str = "PLANT_CATALOG_SOURCE"

# Number of results realized into view, and how much "load more" adds.
DEFAULT_RENDER_WINDOW: int = 200
RENDER_WINDOW_INCREMENT: int = 200

# Seconds before an HTTP fetch is abandoned.
REQUEST_TIMEOUT: float = 30.0


def resolve_data_source() -> str:
    """Return the data source: env override, else first existing data directory.

    Falls back to the first candidate directory so callers get a clear
    "not found" error from the fetcher rather than here.
    """
    env_source = os.environ.get(SOURCE_ENV_VAR)
    if env_source:
        return env_source
    for candidate in DATA_DIRECTORIES:
        if candidate.is_dir():
            return str(candidate)
    return str(DATA_DIRECTORIES[0])
