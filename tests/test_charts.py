"""Tests for the built-in chart gallery."""

from __future__ import annotations

import pytest

from vizgallery.catalog import CHART_CATEGORIES
from vizgallery.charts import BUILTIN_CHARTS, build_default_catalog
from vizgallery.compatibility import compatible_charts
from vizgallery.editor import EditorSession
from vizgallery.spec_parsers import is_unit_spec, is_valid_vegalite
pytestmark = pytest.mark.unit


@pytest.fixture(scope="module")
def default_catalog():
    return build_default_catalog()


def test_every_builtin_chart_loads(default_catalog) -> None:
    """All built-in definitions pass validation, in declaration order."""

    assert [d.id for d in default_catalog.list()] == [c["id"] for c in BUILTIN_CHARTS]


def test_builtin_ids_are_unique() -> None:
    ids = [c["id"] for c in BUILTIN_CHARTS]
    assert len(ids) == len(set(ids))


def test_builtin_specs_are_valid(default_catalog) -> None:
    for definition in default_catalog:
        assert is_valid_vegalite(definition.spec()), definition.id


def test_builtin_categories_are_known(default_catalog) -> None:
    assert {d.category for d in default_catalog} <= set(CHART_CATEGORIES)


def test_unit_specs_open_in_editor(default_catalog) -> None:
    for definition in default_catalog:
        if is_unit_spec(definition.spec()):
            EditorSession(definition).set_mark("point")


def test_bar_chart_needs_category_and_value(default_catalog, make_profile) -> None:
    profile = make_profile(["category", "value"], row_count=5)
    ids = [d.id for d in compatible_charts(default_catalog, profile)]
    assert "bar-chart" in ids
    assert "scatter-plot" not in ids
