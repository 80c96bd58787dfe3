"""Load the light dataset and individual detail records."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from loguru import logger

from plant_catalog.config import DETAIL_RECORD_DIR, LIGHT_DATASET_PATH
from plant_catalog.core.dataset.decode import decode_payload, parse_json_text
from plant_catalog.core.dataset.light_record import parse_light_dataset
from plant_catalog.errors import ParseError
from plant_catalog.models.plant import LightRecord
from plant_catalog.protocols import FetcherProtocol


def detail_record_path(key: str) -> str:
    """Resource path of a plant's detail record. The key is used verbatim."""
    return f"{DETAIL_RECORD_DIR}/{key}.gz"


class DatasetLoader:
    """Fetch and decode catalog resources through a transport."""

    def __init__(self, fetcher: FetcherProtocol) -> None:
        self._fetcher = fetcher

    def _fetch_json(self, path: str) -> Any:
        payload = self._fetcher.fetch(path)
        decoded = decode_payload(payload, source=path)
        logger.debug("Fetched {} ({} bytes, {})", path, len(payload), decoded.encoding)
        return parse_json_text(decoded.text, source=path)

    def load_light_dataset(self) -> Mapping[str, LightRecord]:
        """Fetch, decode and parse the light dataset.

        Returns:
            Read-only mapping of plant key to LightRecord, in document order.

        Raises:
            LoadError: If the transport fails.
            ParseError: If the payload is not a valid light dataset.
        """
        data = self._fetch_json(LIGHT_DATASET_PATH)
        records = parse_light_dataset(data)
        logger.debug("Loaded light dataset: {} plants", len(records))
        return MappingProxyType(records)

    def load_detail_record(self, key: str) -> dict[str, Any]:
        """Fetch the full detail record for one plant.

        Raises:
            LoadError: If the transport fails.
            ParseError: If the payload is not a JSON object.
        """
        path = detail_record_path(key)
        data = self._fetch_json(path)
        if not isinstance(data, dict):
            msg = f"Detail record {key!r} must be a JSON object, got {type(data).__name__}"
            raise ParseError(msg)
        return data
