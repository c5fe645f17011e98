"""Shared fixtures for gallery tests."""

from __future__ import annotations

import pytest

from vizgallery.catalog import ChartCatalog, ChartDefinition, DataRequirements
from vizgallery.data_profiler import ColumnMetadata, DatasetProfile

SCHEMA = "https://vega.github.io/schema/vega-lite/v5.json"


@pytest.fixture
def bar_spec() -> dict:
    """Bar spec with x/y bound to category/value."""

    return {
        "$schema": SCHEMA,
        "data": {"values": [{"category": "A", "value": 28}, {"category": "B", "value": 55}]},
        "mark": "bar",
        "encoding": {
            "x": {"field": "category", "type": "nominal"},
            "y": {"field": "value", "type": "quantitative"},
        },
    }


@pytest.fixture
def bar_definition(bar_spec) -> ChartDefinition:
    return ChartDefinition(
        id="bar-chart",
        title="Bar Chart",
        description="Simple bar chart for comparing categorical data",
        category="Statistical",
        complexity="Beginner",
        base_spec=bar_spec,
        data_requirements=DataRequirements(required_fields=("category", "value"), min_data_points=2),
    )


@pytest.fixture
def free_definition() -> ChartDefinition:
    """Definition with no data requirements."""

    return ChartDefinition(
        id="free-points",
        title="Points",
        description="Anything goes",
        category="Correlation",
        complexity="Beginner",
        base_spec={"mark": "point", "encoding": {"x": {"field": "a", "type": "quantitative"}}},
    )


@pytest.fixture
def catalog(bar_definition, free_definition) -> ChartCatalog:
    cat = ChartCatalog()
    cat.register(bar_definition)
    cat.register(free_definition)
    return cat


@pytest.fixture
def make_profile():
    """Factory for profiles whose columns all share one type."""

    def _make(names, row_count=5, col_type="nominal") -> DatasetProfile:
        return DatasetProfile(
            row_count=row_count,
            columns=tuple(ColumnMetadata(name=n, type=col_type) for n in names),
        )

    return _make
