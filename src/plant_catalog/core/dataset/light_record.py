"""Parse the abbreviated-key light dataset into domain models."""

from typing import Any

from plant_catalog.errors import ParseError
from plant_catalog.models.plant import LightRecord

# Abbreviated wire key -> LightRecord attribute.
SCALAR_FIELDS: dict[str, str] = {
    "f": "full_name",
    "g": "genus",
    "sp": "species",
}

SEQUENCE_FIELDS: dict[str, str] = {
    "c": "common_names",
    "cv": "cultivars",
    "t": "plant_types",
    "z": "hardiness_zones",
    "a": "attracts",
    "r": "resistances",
    "m": "maintenance",
    "l": "light",
    "s": "soil_texture",
    "ph": "soil_ph",
    "d": "soil_drainage",
    "p": "problems",
    "v": "additional_value",
    "tg": "tags",
}


def _as_sequence(value: Any) -> tuple[str, ...]:
    """Normalize a scalar-or-list wire value to a tuple of non-empty strings."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,) if value else ()
    if isinstance(value, list | tuple):
        return tuple(v for v in value if isinstance(v, str) and v)
    return ()


def _as_scalar(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def parse_light_record(key: str, data: dict[str, Any]) -> LightRecord:
    """Build a LightRecord from one entry of the light dataset.

    Unknown keys are ignored. Maintenance arrives either as a string or a
    list and always comes out as a tuple.
    """
    fields: dict[str, Any] = {}
    for wire_key, attr in SCALAR_FIELDS.items():
        fields[attr] = _as_scalar(data.get(wire_key))
    for wire_key, attr in SEQUENCE_FIELDS.items():
        fields[attr] = _as_sequence(data.get(wire_key))
    return LightRecord(key=key, **fields)


def parse_light_dataset(data: Any) -> dict[str, LightRecord]:
    """Parse a decoded light dataset document, preserving document order.

    Raises:
        ParseError: If the document or any entry is not a JSON object.
    """
    if not isinstance(data, dict):
        msg = f"Light dataset must be a JSON object, got {type(data).__name__}"
        raise ParseError(msg)

    records: dict[str, LightRecord] = {}
    for key, entry in data.items():
        if not isinstance(entry, dict):
            msg = f"Light dataset entry {key!r} must be a JSON object"
            raise ParseError(msg)
        records[key] = parse_light_record(key, entry)
    return records
