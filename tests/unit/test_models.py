"""Tests for domain models."""

import pytest

from plant_catalog.models.plant import LightRecord, Page


def test_light_record_is_frozen() -> None:
    record = LightRecord(key="rosa-rugosa", full_name="Rosa rugosa")
    with pytest.raises(AttributeError):
        record.full_name = "changed"  # type: ignore[misc]


def test_light_record_title_falls_back_to_key() -> None:
    assert LightRecord(key="rosa-rugosa").title == "rosa-rugosa"
    assert LightRecord(key="rosa-rugosa", full_name="Rosa rugosa").title == "Rosa rugosa"


def test_page_has_more() -> None:
    assert Page(keys=("a",), total=2, render_window=1).has_more
    assert not Page(keys=("a", "b"), total=2, render_window=200).has_more
