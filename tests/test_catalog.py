"""Tests for chart definitions and the append-only catalog."""

from __future__ import annotations

import jsonschema
import pytest

from vizgallery.catalog import ChartCatalog, ChartDefinition, DataRequirements
from vizgallery.errors import ChartNotFound, DuplicateId, InvalidCatalogEntry

pytestmark = pytest.mark.unit


def _definition(chart_id="c1", spec=None, **kwargs) -> ChartDefinition:
    return ChartDefinition(
        id=chart_id,
        title=kwargs.pop("title", "T"),
        description=kwargs.pop("description", "D"),
        category=kwargs.pop("category", "Statistical"),
        complexity=kwargs.pop("complexity", "Beginner"),
        base_spec=spec if spec is not None else {"mark": "bar"},
        **kwargs,
    )


def test_register_and_get_round_trip(bar_definition) -> None:
    """A registered definition can be fetched back by id."""

    catalog = ChartCatalog()
    catalog.register(bar_definition)
    assert catalog.get("bar-chart") is bar_definition
    assert "bar-chart" in catalog
    assert len(catalog) == 1


def test_list_preserves_registration_order() -> None:
    """list() returns definitions in the order they were registered."""

    catalog = ChartCatalog()
    for chart_id in ("zeta", "alpha", "mid"):
        catalog.register(_definition(chart_id))
    assert [d.id for d in catalog.list()] == ["zeta", "alpha", "mid"]
    assert [d.id for d in catalog] == ["zeta", "alpha", "mid"]


def test_duplicate_id_is_rejected_and_catalog_unchanged(bar_definition) -> None:
    """A second registration with a known id fails and leaves the first entry in place."""

    catalog = ChartCatalog()
    catalog.register(bar_definition)
    other = _definition("bar-chart", category="Comparison")
    with pytest.raises(DuplicateId):
        catalog.register(other)
    assert catalog.get("bar-chart") is bar_definition
    assert len(catalog) == 1


def test_get_unknown_id_raises_not_found() -> None:
    """Looking up a missing id raises ChartNotFound, which is also a KeyError."""

    catalog = ChartCatalog()
    with pytest.raises(ChartNotFound):
        catalog.get("nope")
    with pytest.raises(KeyError):
        catalog.get("nope")


@pytest.mark.parametrize(
    "spec",
    [
        {"mark": "violin"},
        {"mark": "bar", "encoding": {"x": "category"}},
        {"encoding": {"x": {"field": "a", "type": "nominal"}}},
        "not a spec",
    ],
)
def test_schema_invalid_base_spec_is_rejected(spec) -> None:
    """Definitions whose base spec is not valid Vega-Lite never get built."""

    with pytest.raises(InvalidCatalogEntry):
        _definition(spec=spec)


def test_negative_min_data_points_is_rejected() -> None:
    """minDataPoints must be a non-negative integer."""

    with pytest.raises(InvalidCatalogEntry):
        _definition(data_requirements=DataRequirements(required_fields=("a",), min_data_points=-1))


def test_unknown_category_and_complexity_are_rejected() -> None:
    """Category and complexity come from closed enumerations."""

    with pytest.raises(InvalidCatalogEntry):
        _definition(category="Misc")
    with pytest.raises(InvalidCatalogEntry):
        _definition(complexity="Expert")


def test_empty_id_is_rejected() -> None:
    with pytest.raises(InvalidCatalogEntry):
        _definition("")


def test_register_rechecks_spec_mutated_after_construction(bar_definition) -> None:
    """A base spec edited in place after construction is caught at registration."""

    bar_definition.base_spec["mark"] = "violin"
    with pytest.raises(InvalidCatalogEntry):
        ChartCatalog().register(bar_definition)


def test_definition_spec_is_a_private_copy(bar_spec) -> None:
    """Neither the input dict nor spec() results alias the stored base spec."""

    definition = _definition(spec=bar_spec)
    bar_spec["mark"] = "line"
    assert definition.base_spec["mark"] == "bar"

    handed_out = definition.spec()
    handed_out["encoding"]["x"]["field"] = "changed"
    assert definition.base_spec["encoding"]["x"]["field"] == "category"


def test_spec_without_inline_data_is_accepted() -> None:
    """Inline data is optional in a base spec."""

    definition = _definition(spec={"mark": "line", "encoding": {"x": {"field": "t", "type": "temporal"}}})
    assert "data" not in definition.base_spec


def test_by_category_filters_in_order(catalog) -> None:
    assert [d.id for d in catalog.by_category("Statistical")] == ["bar-chart"]
    assert catalog.by_category("Hierarchical") == []


def test_from_dict_reads_gallery_shape() -> None:
    """The object-literal gallery shape maps onto ChartDefinition."""

    definition = ChartDefinition.from_dict({
        "id": "scatter-plot",
        "title": "Scatter Plot",
        "description": "x vs y",
        "category": "Statistical",
        "complexity": "Beginner",
        "metadata": {"tags": ["correlation"], "dataRequirements": {"minDataPoints": 10, "requiredFields": ["x", "y"]}},
        "spec": {"mark": "point", "encoding": {"x": {"field": "x", "type": "quantitative"}}},
    })
    assert definition.data_requirements == DataRequirements(required_fields=("x", "y"), min_data_points=10)
    assert definition.tags == ("correlation",)


def test_from_dict_missing_keys() -> None:
    with pytest.raises(InvalidCatalogEntry, match="missing keys"):
        ChartDefinition.from_dict({"id": "x", "title": "X"})


def test_from_definitions_raises_by_default(bar_definition) -> None:
    """Loading stops at the first invalid entry unless skipping is requested."""

    with pytest.raises(InvalidCatalogEntry):
        ChartCatalog.from_definitions([bar_definition, lambda: _definition("bad", spec={"mark": "violin"})])


def test_from_definitions_skip_invalid_logs_and_continues(bar_definition, free_definition, caplog) -> None:
    """With skip_invalid the bad and duplicate entries are logged and left out."""

    catalog = ChartCatalog.from_definitions(
        [
            bar_definition,
            lambda: _definition("bad", spec={"mark": "violin"}),
            bar_definition,
            free_definition,
        ],
        skip_invalid=True,
    )
    assert [d.id for d in catalog.list()] == ["bar-chart", "free-points"]
    assert sum("skipping chart definition" in r.getMessage() for r in caplog.records) == 2


def test_schema_failure_is_chained(bar_spec) -> None:
    """The Vega-Lite validation error stays reachable as the cause."""

    bar_spec["mark"] = "violin"
    with pytest.raises(InvalidCatalogEntry) as exc_info:
        _definition(spec=bar_spec)
    assert isinstance(exc_info.value.__cause__, jsonschema.ValidationError)
    assert exc_info.value.chart_id == "c1"


def _payload(**metadata) -> dict:
    return {
        "id": "bar-chart",
        "title": "Bar Chart",
        "category": "Statistical",
        "complexity": "Beginner",
        "metadata": metadata,
        "spec": {"mark": "bar"},
    }


@pytest.mark.parametrize(
    "payload",
    [
        {**_payload(), "metadata": ["tags"]},
        _payload(dataRequirements=["category"]),
        _payload(dataRequirements={"requiredFields": "category"}),
        _payload(dataRequirements={"requiredFields": ["category", 3]}),
        _payload(tags="bar"),
    ],
)
def test_from_dict_rejects_malformed_metadata(payload) -> None:
    """Wrongly shaped metadata is an invalid entry, not a crash."""

    with pytest.raises(InvalidCatalogEntry) as exc_info:
        ChartDefinition.from_dict(payload)
    assert exc_info.value.chart_id == "bar-chart"


def test_malformed_metadata_is_skippable(bar_definition) -> None:
    catalog = ChartCatalog.from_definitions(
        [lambda: ChartDefinition.from_dict({**_payload(), "id": "broken", "metadata": ["tags"]}), bar_definition],
        skip_invalid=True,
    )
    assert [d.id for d in catalog] == ["bar-chart"]


@pytest.mark.parametrize("fields", ["category", ("category", None), 5])
def test_data_requirements_need_string_fields(fields) -> None:
    with pytest.raises(InvalidCatalogEntry):
        DataRequirements(required_fields=fields)


def test_data_requirements_must_be_typed() -> None:
    with pytest.raises(InvalidCatalogEntry):
        _definition(data_requirements={"requiredFields": ["a"]})


@pytest.fixture
def gallery() -> ChartCatalog:
    catalog = ChartCatalog()
    catalog.register(_definition("line", title="Line Chart", category="Time Series", complexity="Intermediate"))
    catalog.register(_definition("bar", title="Bar Chart", category="Statistical", tags=("comparison",)))
    catalog.register(_definition("stream", title="Stream Graph", category="Time Series", complexity="Advanced"))
    catalog.register(_definition("pie", title="Pie", description="Share of a whole", category="Part to Whole"))
    return catalog


def test_search_without_filters_returns_everything(gallery) -> None:
    assert [d.id for d in gallery.search()] == ["line", "bar", "stream", "pie"]
    assert [d.id for d in gallery.search("  ")] == ["line", "bar", "stream", "pie"]


def test_search_matches_title_description_and_tags(gallery) -> None:
    """Term matching is a case-insensitive substring over title, description and tags."""

    assert [d.id for d in gallery.search("CHART")] == ["line", "bar"]
    assert [d.id for d in gallery.search("whole")] == ["pie"]
    assert [d.id for d in gallery.search("compar")] == ["bar"]
    assert gallery.search("violin") == []


def test_search_combines_filters(gallery) -> None:
    assert [d.id for d in gallery.search(category="Time Series")] == ["line", "stream"]
    assert [d.id for d in gallery.search(category="Time Series", complexity="Advanced")] == ["stream"]
    assert [d.id for d in gallery.search("chart", category="Time Series")] == ["line"]


def test_search_sorting(gallery) -> None:
    """Sorting follows the declared enum order and is stable within a group."""

    assert [d.id for d in gallery.search(sort_by="category")] == ["bar", "line", "stream", "pie"]
    assert [d.id for d in gallery.search(sort_by="complexity")] == ["bar", "pie", "line", "stream"]
    with pytest.raises(ValueError):
        gallery.search(sort_by="title")
