"""Project a full detail record onto labelled display fields.

Detail records are open-ended mappings. Only keys on the allow-list below
are rendered, in its order; everything else is ignored.
"""

import io
import json
from collections.abc import Mapping
from typing import Any

from plant_catalog.models.plant import DetailSection, DetailView

DETAIL_SECTIONS: tuple[tuple[str, tuple[tuple[str, str], ...]], ...] = (
    (
        "Basic Information",
        (
            ("family", "Family"),
            ("genus", "Genus"),
            ("species", "Species"),
            ("life-cycle", "Life Cycle"),
            ("plant-type", "Plant Type"),
            ("country-or-region-of-origin", "Origin"),
        ),
    ),
    (
        "Growth Characteristics",
        (
            ("dimensions", "Dimensions"),
            ("habit/form", "Habit/Form"),
            ("growth-rate", "Growth Rate"),
            ("texture", "Texture"),
            ("woody-plant-leaf-characteristics", "Woody Plant Leaf Characteristics"),
        ),
    ),
    (
        "Growing Conditions",
        (
            ("usda-plant-hardiness-zone", "USDA Hardiness Zones"),
            ("light", "Light Requirements"),
            ("soil-texture", "Soil Texture"),
            ("soil-ph", "Soil pH"),
            ("soil-drainage", "Soil Drainage"),
            ("available-space-to-plant", "Available Space Needed"),
        ),
    ),
    (
        "Flowers",
        (
            ("flower-color", "Flower Color"),
            ("flower-bloom-time", "Bloom Time"),
            ("flower-shape", "Flower Shape"),
            ("flower-size", "Flower Size"),
            ("flower-petals", "Flower Petals"),
            ("flower-inflorescence", "Inflorescence"),
            ("flower-value-to-gardener", "Value to Gardener"),
            ("flower-description", "Flower Description"),
        ),
    ),
    (
        "Foliage",
        (
            ("leaf-color", "Leaf Color"),
            ("leaf-type", "Leaf Type"),
            ("leaf-arrangement", "Leaf Arrangement"),
            ("leaf-shape", "Leaf Shape"),
            ("leaf-margin", "Leaf Margin"),
            ("leaf-length", "Leaf Length"),
            ("leaf-width", "Leaf Width"),
            ("hairs-present", "Hairs Present"),
            ("leaf-description", "Leaf Description"),
        ),
    ),
    (
        "Stems",
        (
            ("stem-color", "Stem Color"),
            ("stem-is-aromatic", "Aromatic"),
            ("stem-description", "Stem Description"),
        ),
    ),
    (
        "Fruit",
        (
            ("fruit-color", "Fruit Color"),
            ("fruit-type", "Fruit Type"),
            ("display/harvest-time", "Display/Harvest Time"),
        ),
    ),
    (
        "Landscape & Wildlife",
        (
            ("maintenance", "Maintenance"),
            ("problems", "Problems"),
            ("landscape-location", "Landscape Location"),
            ("landscape-theme", "Landscape Theme"),
            ("design-feature", "Design Feature"),
            ("attracts", "Attracts"),
            ("wildlife-value", "Wildlife Value"),
            ("play-value", "Play Value"),
            ("resistance-to-challenges", "Resistance"),
        ),
    ),
    (
        "References",
        (("references", "References"),),
    ),
)


def _to_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)


def is_empty(value: Any) -> bool:
    """None, whitespace-only strings and collections of nothing but those are empty."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, list | tuple | set):
        return all(is_empty(v) for v in value)
    if isinstance(value, dict):
        return not value
    return False


def _format_element(value: Any) -> str:
    if isinstance(value, bool):
        return _to_json(value)
    if isinstance(value, str | int | float):
        return str(value)
    return _to_json(value)


def format_value(value: Any) -> str:
    """Render a detail value as display text."""
    if isinstance(value, list | tuple):
        return ", ".join(_format_element(v) for v in value if not is_empty(v))
    if isinstance(value, Mapping):
        return _to_json(value)
    return _format_element(value)


def _first_present(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = record.get(key)
        if not is_empty(value):
            return value
    return None


def project_detail(record: Mapping[str, Any]) -> DetailView:
    """Map a detail record onto titled sections of (label, value) pairs.

    Missing and empty values are omitted, and so are sections left with no
    fields. Title and common names are returned separately.
    """
    sections: list[DetailSection] = []
    for title, pairs in DETAIL_SECTIONS:
        fields = tuple(
            (label, format_value(record[key]))
            for key, label in pairs
            if not is_empty(record.get(key))
        )
        if fields:
            sections.append(DetailSection(title=title, fields=fields))

    name = _first_present(record, "full-name", "fullName", "name")
    common = _first_present(record, "common-names", "commonNames")
    if not isinstance(common, list | tuple):
        common = [] if common is None else [common]
    return DetailView(
        title=format_value(name) if name is not None else None,
        common_names=tuple(format_value(c) for c in common if not is_empty(c)),
        sections=tuple(sections),
    )


def render_detail_text(view: DetailView) -> str:
    """Render a detail view as indented plain text."""
    out = io.StringIO()
    if view.title:
        print(view.title, file=out)
    if view.common_names:
        print(", ".join(view.common_names), file=out)
    for section in view.sections:
        print(f"\n## {section.title}", file=out)
        for label, value in section.fields:
            print(f"  {label}: {value}", file=out)
    return out.getvalue()


def detail_as_dict(view: DetailView) -> dict[str, Any]:
    """JSON-ready form of a detail view."""
    return {
        "title": view.title,
        "common_names": list(view.common_names),
        "sections": [
            {"title": s.title, "fields": [{"label": k, "value": v} for k, v in s.fields]}
            for s in view.sections
        ],
    }
