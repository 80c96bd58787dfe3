"""Domain models for the plant catalog."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LightRecord:
    """Compact projection of a plant used for listing, search and filtering.

    Every attribute is optional. Absent sequences are empty tuples, absent
    scalars are None.
    """

    key: str
    full_name: str | None = None
    common_names: tuple[str, ...] = ()
    cultivars: tuple[str, ...] = ()
    genus: str | None = None
    species: str | None = None
    plant_types: tuple[str, ...] = ()
    hardiness_zones: tuple[str, ...] = ()
    attracts: tuple[str, ...] = ()
    resistances: tuple[str, ...] = ()
    maintenance: tuple[str, ...] = ()
    light: tuple[str, ...] = ()
    soil_texture: tuple[str, ...] = ()
    soil_ph: tuple[str, ...] = ()
    soil_drainage: tuple[str, ...] = ()
    problems: tuple[str, ...] = ()
    additional_value: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()

    @property
    def title(self) -> str:
        return self.full_name or self.key


@dataclass(frozen=True)
class PlantRow:
    """One listing row, ready for display."""

    key: str
    title: str
    common_names: str
    zone_range: str
    plant_types: tuple[str, ...] = ()
    light: tuple[str, ...] = ()
    maintenance: tuple[str, ...] = ()


@dataclass(frozen=True)
class Page:
    """The visible slice of a filtered result sequence."""

    keys: tuple[str, ...]
    total: int
    render_window: int

    @property
    def has_more(self) -> bool:
        return self.total > len(self.keys)


@dataclass(frozen=True)
class DetailSection:
    """A titled group of labelled detail fields."""

    title: str
    fields: tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class DetailView:
    """A full detail record projected onto labelled, display-ready fields."""

    title: str | None
    common_names: tuple[str, ...]
    sections: tuple[DetailSection, ...]

    @property
    def fields(self) -> tuple[tuple[str, str], ...]:
        """All (label, value) pairs in display order."""
        return tuple(field for section in self.sections for field in section.fields)
