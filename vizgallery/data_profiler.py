from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from .vega_types import FieldType, is_field_type

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnStats:
    min: Optional[float] = None
    max: Optional[float] = None
    mean: Optional[float] = None
    median: Optional[float] = None


@dataclass(frozen=True)
class ColumnMetadata:
    name: str
    type: str                          # one of FIELD_TYPES, or passed through as-is
    unique_values: Optional[int] = None
    missing_values: Optional[int] = None
    stats: Optional[ColumnStats] = None  # quantitative only

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("ColumnMetadata.name must be a non-empty string")
        for attr in ("unique_values", "missing_values"):
            v = getattr(self, attr)
            if v is not None and (not isinstance(v, (int, np.integer)) or v < 0):
                raise ValueError(f"ColumnMetadata.{attr} must be a non-negative integer, got {v!r}")
        if self.stats is not None and self.type != "quantitative":
            object.__setattr__(self, "stats", None)

    @property
    def recognized_type(self) -> Optional[FieldType]:
        return self.type if is_field_type(self.type) else None


@dataclass(frozen=True)
class DatasetProfile:
    row_count: int
    columns: Tuple[ColumnMetadata, ...] = ()

    def __post_init__(self):
        if not isinstance(self.row_count, (int, np.integer)) or self.row_count < 0:
            raise ValueError(f"DatasetProfile.row_count must be a non-negative integer, got {self.row_count!r}")
        cols = tuple(self.columns)
        seen = set()
        for c in cols:
            if c.name in seen:
                raise ValueError(f"Duplicate column name in profile: {c.name!r}")
            seen.add(c.name)
        object.__setattr__(self, "columns", cols)

    def column_names(self) -> List[str]:
        return [c.name for c in self.columns]

    def column(self, name: str) -> Optional[ColumnMetadata]:
        for c in self.columns:
            if c.name == name:
                return c
        return None

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "DatasetProfile":
        """
        Build a profile from the loader payload:
          {"rowCount": 5, "columns": [{"name": "value", "type": "quantitative",
                                        "uniqueValues": 5, "missingValues": 0,
                                        "stats": {"min": 1, "max": 9, "mean": 4, "median": 4}}]}
        """
        if not isinstance(payload, dict):
            raise ValueError(f"Dataset profile must be an object, got {type(payload).__name__}")
        if "rowCount" not in payload:
            raise ValueError("Dataset profile is missing 'rowCount'")

        columns = []
        for i, col in enumerate(payload.get("columns") or []):
            if not isinstance(col, dict) or "name" not in col:
                raise ValueError(f"columns[{i}] must be an object with a 'name'")
            stats = col.get("stats")
            columns.append(ColumnMetadata(
                name=col["name"],
                type=str(col.get("type", "")),
                unique_values=col.get("uniqueValues"),
                missing_values=col.get("missingValues"),
                stats=ColumnStats(**{k: stats.get(k) for k in ("min", "max", "mean", "median")})
                if isinstance(stats, dict) else None,
            ))
        return cls(row_count=payload["rowCount"], columns=tuple(columns))


# ---------------------------
# Inference from a DataFrame
# ---------------------------
def _looks_numeric(sample: pd.Series) -> bool:
    parsed = pd.to_numeric(sample, errors="coerce")
    return bool(len(sample)) and bool(parsed.notna().all())


def infer_column_type(series: pd.Series, datetime_ratio: float = 0.8) -> FieldType:
    if pd.api.types.is_datetime64_any_dtype(series):
        return "temporal"
    if pd.api.types.is_bool_dtype(series):
        return "nominal"
    if pd.api.types.is_numeric_dtype(series):
        return "quantitative"

    if pd.api.types.is_object_dtype(series) or pd.api.types.is_string_dtype(series):
        sample = series.dropna().astype(str).head(80)
        if len(sample) == 0:
            return "nominal"
        # numeric-looking text ("1", "2", "10") reads as ranked codes, not a measure
        if _looks_numeric(sample):
            return "ordinal"
        parsed = pd.to_datetime(sample, errors="coerce", format="mixed")
        if parsed.notna().mean() >= datetime_ratio:
            return "temporal"
    return "nominal"


def _stats(series: pd.Series) -> Optional[ColumnStats]:
    s = pd.to_numeric(series, errors="coerce").dropna()
    if s.empty:
        return None
    arr = s.to_numpy(dtype=float)
    return ColumnStats(
        min=float(np.min(arr)),
        max=float(np.max(arr)),
        mean=float(np.mean(arr)),
        median=float(np.median(arr)),
    )


def profile_dataframe(
    df: pd.DataFrame,
    col_types: Optional[Dict[str, str]] = None,
    datetime_ratio: float = 0.8,
) -> DatasetProfile:
    col_types = dict(col_types or {})
    columns = []
    for c in df.columns:
        name = str(c)
        s = df[c]
        t = col_types.get(name) or infer_column_type(s, datetime_ratio=datetime_ratio)
        columns.append(ColumnMetadata(
            name=name,
            type=t,
            unique_values=int(s.nunique(dropna=True)),
            missing_values=int(s.isna().sum()),
            stats=_stats(s) if t == "quantitative" else None,
        ))
        logger.debug("profiled column %r as %s", name, t)

    return DatasetProfile(row_count=int(len(df)), columns=tuple(columns))
