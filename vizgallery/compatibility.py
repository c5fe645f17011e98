from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from .catalog import ChartCatalog, ChartDefinition
from .data_profiler import DatasetProfile


@dataclass(frozen=True)
class CompatibilityResult:
    definition: ChartDefinition
    satisfied: bool
    missing_fields: Tuple[str, ...] = ()
    too_few_rows: bool = False

    def to_report(self) -> Dict[str, Any]:
        return {
            "id": self.definition.id,
            "title": self.definition.title,
            "satisfied": self.satisfied,
            "missingFields": list(self.missing_fields),
        }


def check_chart(definition: ChartDefinition, profile: DatasetProfile) -> CompatibilityResult:
    req = definition.data_requirements
    if req is None:
        return CompatibilityResult(definition=definition, satisfied=True)

    present = set(profile.column_names())
    missing = tuple(f for f in req.required_fields if f not in present)
    too_few = req.min_data_points is not None and profile.row_count < req.min_data_points

    return CompatibilityResult(
        definition=definition,
        satisfied=not missing and not too_few,
        missing_fields=missing,
        too_few_rows=too_few,
    )


def filter_charts(catalog: ChartCatalog, profile: DatasetProfile) -> Tuple[CompatibilityResult, ...]:
    """One result per catalog entry, in registration order."""
    return tuple(check_chart(d, profile) for d in catalog.list())


def compatible_charts(catalog: ChartCatalog, profile: DatasetProfile) -> List[ChartDefinition]:
    return [r.definition for r in filter_charts(catalog, profile) if r.satisfied]


def compatibility_report(catalog: ChartCatalog, profile: DatasetProfile) -> List[Dict[str, Any]]:
    return [r.to_report() for r in filter_charts(catalog, profile)]
