"""Append-only registry of gallery chart definitions.

A catalog is built once at start-up and then only read. Every definition is
checked when it is constructed and again when it is registered, so nothing that
fails Vega-Lite validation can end up in the gallery.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Literal, Optional, Tuple, get_args

import jsonschema

from .errors import ChartNotFound, DuplicateId, InvalidCatalogEntry
from .spec_parsers import check_spec, deepcopy_spec, describe_error

logger = logging.getLogger(__name__)


ChartCategory = Literal[
    "Statistical",
    "Time Series",
    "Comparison",
    "Correlation",
    "Part to Whole",
    "Hierarchical",
]
Complexity = Literal["Beginner", "Intermediate", "Advanced"]

CHART_CATEGORIES: Tuple[ChartCategory, ...] = get_args(ChartCategory)
COMPLEXITY_LEVELS: Tuple[Complexity, ...] = get_args(Complexity)

SortKey = Literal["category", "complexity"]


def _check_base_spec(chart_id: Optional[str], spec: Any) -> None:
    try:
        check_spec(spec)
    except (ValueError, jsonschema.ValidationError) as exc:
        raise InvalidCatalogEntry(chart_id, f"base spec is not valid Vega-Lite ({describe_error(exc)})") from exc


def _string_list(chart_id: Optional[str], value: Any, key: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise InvalidCatalogEntry(chart_id, f"{key} must be a list of strings, got {value!r}")
    return tuple(value)


@dataclass(frozen=True)
class DataRequirements:
    """Minimum shape a dataset needs before a chart makes sense.

    Args:
        required_fields: Column names the chart's encodings refer to, in order.
        min_data_points: Minimum row count, or None for no lower bound.
    """

    required_fields: Tuple[str, ...] = ()
    min_data_points: Optional[int] = None

    def __post_init__(self):
        fields = self.required_fields
        if not isinstance(fields, (list, tuple)) or not all(isinstance(f, str) for f in fields):
            raise InvalidCatalogEntry(None, f"requiredFields must be a sequence of strings, got {fields!r}")
        object.__setattr__(self, "required_fields", tuple(fields))


@dataclass(frozen=True)
class ChartDefinition:
    """A gallery entry: display metadata plus the chart's base Vega-Lite spec.

    The base spec is copied on the way in and on the way out (`spec()`), so the
    definition stays immutable even though the spec itself is a plain dict.
    """

    id: str
    title: str
    description: str
    category: ChartCategory
    complexity: Complexity
    base_spec: Dict[str, Any] = field(repr=False)
    data_requirements: Optional[DataRequirements] = None
    tags: Tuple[str, ...] = ()

    def __post_init__(self):
        if not isinstance(self.id, str) or not self.id:
            raise InvalidCatalogEntry(None, "id must be a non-empty string")
        if self.category not in CHART_CATEGORIES:
            raise InvalidCatalogEntry(self.id, f"unknown category {self.category!r}")
        if self.complexity not in COMPLEXITY_LEVELS:
            raise InvalidCatalogEntry(self.id, f"unknown complexity {self.complexity!r}")

        req = self.data_requirements
        if req is not None and not isinstance(req, DataRequirements):
            raise InvalidCatalogEntry(self.id, f"data_requirements must be DataRequirements, got {type(req).__name__}")
        if req is not None:
            mdp = req.min_data_points
            if mdp is not None and (isinstance(mdp, bool) or not isinstance(mdp, int) or mdp < 0):
                raise InvalidCatalogEntry(self.id, f"minDataPoints must be a non-negative integer, got {mdp!r}")

        _check_base_spec(self.id, self.base_spec)

        object.__setattr__(self, "base_spec", deepcopy_spec(self.base_spec))
        object.__setattr__(self, "tags", tuple(self.tags))

    def spec(self) -> Dict[str, Any]:
        """Fresh deep copy of the base spec, safe to edit."""
        return deepcopy_spec(self.base_spec)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ChartDefinition":
        """Build a definition from the gallery's object-literal shape
        (`id, title, description, category, complexity, spec, metadata`)."""
        if not isinstance(payload, dict):
            raise InvalidCatalogEntry(None, f"definition must be an object, got {type(payload).__name__}")
        chart_id = payload.get("id")
        missing = [k for k in ("id", "title", "category", "complexity", "spec") if k not in payload]
        if missing:
            raise InvalidCatalogEntry(chart_id, f"missing keys {missing}")

        meta = payload.get("metadata")
        if meta is None:
            meta = {}
        if not isinstance(meta, dict):
            raise InvalidCatalogEntry(chart_id, f"metadata must be an object, got {type(meta).__name__}")
        req_payload = meta.get("dataRequirements")
        req = None
        if req_payload is not None:
            if not isinstance(req_payload, dict):
                raise InvalidCatalogEntry(
                    chart_id, f"dataRequirements must be an object, got {type(req_payload).__name__}")
            req = DataRequirements(
                required_fields=_string_list(chart_id, req_payload.get("requiredFields"), "requiredFields"),
                min_data_points=req_payload.get("minDataPoints"),
            )
        return cls(
            id=chart_id,
            title=payload["title"],
            description=payload.get("description", ""),
            category=payload["category"],
            complexity=payload["complexity"],
            base_spec=payload["spec"],
            data_requirements=req,
            tags=_string_list(chart_id, meta.get("tags"), "tags"),
        )


class ChartCatalog:
    """Keyed, ordered, append-only collection of ChartDefinition."""

    def __init__(self):
        self._by_id: Dict[str, ChartDefinition] = {}

    def register(self, definition: ChartDefinition) -> None:
        if not isinstance(definition, ChartDefinition):
            raise InvalidCatalogEntry(None, f"expected ChartDefinition, got {type(definition).__name__}")
        if definition.id in self._by_id:
            raise DuplicateId(definition.id)

        # base_spec is a dict and may have been edited in place since construction
        req = definition.data_requirements
        if req is not None and req.min_data_points is not None and req.min_data_points < 0:
            raise InvalidCatalogEntry(definition.id, f"minDataPoints must be >= 0, got {req.min_data_points}")
        _check_base_spec(definition.id, definition.base_spec)

        self._by_id[definition.id] = definition
        logger.debug("registered chart %r (%s)", definition.id, definition.category)

    def get(self, chart_id: str) -> ChartDefinition:
        try:
            return self._by_id[chart_id]
        except KeyError:
            raise ChartNotFound(chart_id) from None

    def list(self) -> Tuple[ChartDefinition, ...]:
        return tuple(self._by_id.values())

    def by_category(self, category: ChartCategory) -> List[ChartDefinition]:
        return [d for d in self._by_id.values() if d.category == category]

    def search(
        self,
        term: Optional[str] = None,
        category: Optional[ChartCategory] = None,
        complexity: Optional[Complexity] = None,
        sort_by: Optional[SortKey] = None,
    ) -> List[ChartDefinition]:
        """
        Gallery filter bar query.

        `term` is a case-insensitive substring match against title, description
        and tags; blank terms match everything. `sort_by` orders by the declared
        category or complexity order and keeps registration order within a group.
        """
        needle = (term or "").strip().lower()
        out = []
        for d in self._by_id.values():
            if category is not None and d.category != category:
                continue
            if complexity is not None and d.complexity != complexity:
                continue
            if needle:
                haystack = [d.title, d.description, *d.tags]
                if not any(needle in s.lower() for s in haystack):
                    continue
            out.append(d)

        if sort_by == "category":
            out.sort(key=lambda d: CHART_CATEGORIES.index(d.category))
        elif sort_by == "complexity":
            out.sort(key=lambda d: COMPLEXITY_LEVELS.index(d.complexity))
        elif sort_by is not None:
            raise ValueError(f"sort_by must be 'category' or 'complexity', got {sort_by!r}")
        return out

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, chart_id: object) -> bool:
        return chart_id in self._by_id

    def __iter__(self) -> Iterator[ChartDefinition]:
        return iter(self.list())

    @classmethod
    def from_definitions(
        cls,
        definitions: Iterable[Any],
        *,
        skip_invalid: bool = False,
    ) -> "ChartCatalog":
        """
        Register definitions in order. Items may be ChartDefinition objects or
        zero-arg callables building one (so a definition that fails validation
        while being constructed is still subject to `skip_invalid`).

        By default the first invalid or duplicate entry aborts loading. With
        skip_invalid=True the entry is logged and left out instead.
        """
        catalog = cls()
        for item in definitions:
            try:
                definition = item() if callable(item) else item
                catalog.register(definition)
            except (InvalidCatalogEntry, DuplicateId) as exc:
                if not skip_invalid:
                    raise
                logger.warning("skipping chart definition: %s", exc)
        logger.info("chart catalog loaded with %d definitions", len(catalog))
        return catalog
