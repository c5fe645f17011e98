"""Built-in gallery charts.

Each entry mirrors the gallery's object-literal shape (id, title, description,
category, complexity, metadata.dataRequirements, spec) and is turned into a
ChartDefinition when the catalog is built.
"""

from __future__ import annotations

import math
from functools import partial
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from .catalog import ChartCatalog, ChartDefinition

SCHEMA = "https://vega.github.io/schema/vega-lite/v5.json"


# ---------------------------
# Sample data (deterministic)
# ---------------------------
_rng = np.random.default_rng(42)

CATEGORICAL: List[Dict[str, Any]] = [
    {"category": "A", "value": 28},
    {"category": "B", "value": 55},
    {"category": "C", "value": 43},
    {"category": "D", "value": 91},
    {"category": "E", "value": 81},
]

TEMPORAL: List[Dict[str, Any]] = [
    {"date": f"2024-01-{i + 1:02d}", "value": round(math.sin(i / 5) * 10 + 20, 2)}
    for i in range(20)
]

QUARTERLY: List[Dict[str, Any]] = [
    {"category": c, "quarter": q, "value": v}
    for c, q, v in [
        ("Electronics", "Q1", 320), ("Electronics", "Q2", 430),
        ("Clothing", "Q1", 230), ("Clothing", "Q2", 310),
        ("Books", "Q1", 180), ("Books", "Q2", 280),
    ]
]

CORRELATION: List[Dict[str, Any]] = [
    {
        "x": round(float(x), 2),
        "y": round(float(y), 2),
        "category": ["Electronics", "Clothing", "Books", "Food", "Sports"][int(k)],
        "size": round(float(s), 2),
    }
    for x, y, k, s in zip(
        _rng.uniform(0, 100, 50),
        _rng.uniform(0, 100, 50),
        _rng.integers(0, 5, 50),
        _rng.uniform(10, 60, 50),
    )
]

STREAM: List[Dict[str, Any]] = [
    {"time": i, "category": c, "value": round(math.sin(i / 10) * 10 + 20 + j * 3, 2)}
    for i in range(50)
    for j, c in enumerate(["A", "B", "C", "D"])
]

GRID: List[Dict[str, Any]] = [
    {"x": i // 10, "y": i % 10, "value": round(float(v), 3)}
    for i, v in enumerate(_rng.uniform(0, 100, 100))
]

DISTRIBUTION: List[Dict[str, Any]] = [
    {"category": c, "value": round(float(v), 2)}
    for c, loc in (("A", 40), ("B", 55), ("C", 70))
    for v in _rng.normal(loc, 12, 30)
]

MARKET_SHARE: List[Dict[str, Any]] = [
    {"company": "Alpha", "share": 35},
    {"company": "Beta", "share": 25},
    {"company": "Gamma", "share": 20},
    {"company": "Delta", "share": 12},
    {"company": "Other", "share": 8},
]


def _requirements(fields: List[str], min_points: Optional[int] = None) -> Dict[str, Any]:
    req: Dict[str, Any] = {"requiredFields": fields}
    if min_points is not None:
        req["minDataPoints"] = min_points
    return req


# ---------------------------
# Chart definitions
# ---------------------------
BUILTIN_CHARTS: Tuple[Dict[str, Any], ...] = (
    {
        "id": "bar-chart",
        "title": "Bar Chart",
        "description": "Simple bar chart for comparing categorical data",
        "category": "Statistical",
        "complexity": "Beginner",
        "metadata": {"tags": ["comparison", "categorical"],
                     "dataRequirements": _requirements(["category", "value"], 2)},
        "spec": {
            "$schema": SCHEMA,
            "data": {"values": CATEGORICAL},
            "mark": "bar",
            "encoding": {
                "x": {"field": "category", "type": "nominal"},
                "y": {"field": "value", "type": "quantitative"},
            },
        },
    },
    {
        "id": "scatter-plot",
        "title": "Scatter Plot",
        "description": "A basic scatter plot showing the relationship between two variables",
        "category": "Statistical",
        "complexity": "Beginner",
        "metadata": {"tags": ["correlation", "distribution"],
                     "dataRequirements": _requirements(["x", "y"], 10)},
        "spec": {
            "$schema": SCHEMA,
            "data": {"values": [{"x": r["x"], "y": r["y"]} for r in CORRELATION[:20]]},
            "mark": "point",
            "encoding": {
                "x": {"field": "x", "type": "quantitative"},
                "y": {"field": "y", "type": "quantitative"},
            },
        },
    },
    {
        "id": "boxplot-distribution",
        "title": "Box Plot",
        "description": "Distribution summary per category: median, quartiles and outliers",
        "category": "Statistical",
        "complexity": "Intermediate",
        "metadata": {"tags": ["distribution", "statistics"],
                     "dataRequirements": _requirements(["category", "value"], 5)},
        "spec": {
            "$schema": SCHEMA,
            "data": {"values": DISTRIBUTION},
            "mark": "boxplot",
            "encoding": {
                "x": {"field": "category", "type": "nominal"},
                "y": {"field": "value", "type": "quantitative"},
            },
        },
    },
    {
        "id": "strip-plot",
        "title": "Strip Plot",
        "description": "Every observation as a tick, one row per category",
        "category": "Statistical",
        "complexity": "Beginner",
        "metadata": {"tags": ["distribution"],
                     "dataRequirements": _requirements(["category", "value"])},
        "spec": {
            "$schema": SCHEMA,
            "data": {"values": DISTRIBUTION},
            "mark": "tick",
            "encoding": {
                "x": {"field": "value", "type": "quantitative"},
                "y": {"field": "category", "type": "nominal"},
            },
        },
    },
    {
        "id": "line-chart",
        "title": "Line Chart",
        "description": "Show trends over time",
        "category": "Time Series",
        "complexity": "Beginner",
        "metadata": {"tags": ["trend", "temporal"],
                     "dataRequirements": _requirements(["date", "value"], 2)},
        "spec": {
            "$schema": SCHEMA,
            "data": {"values": TEMPORAL},
            "mark": "line",
            "encoding": {
                "x": {"field": "date", "type": "temporal"},
                "y": {"field": "value", "type": "quantitative"},
            },
        },
    },
    {
        "id": "area-chart",
        "title": "Area Chart",
        "description": "Cumulative magnitude over time",
        "category": "Time Series",
        "complexity": "Beginner",
        "metadata": {"tags": ["trend", "temporal"],
                     "dataRequirements": _requirements(["date", "value"], 2)},
        "spec": {
            "$schema": SCHEMA,
            "data": {"values": TEMPORAL},
            "mark": {"type": "area", "opacity": 0.7, "line": True},
            "encoding": {
                "x": {"field": "date", "type": "temporal"},
                "y": {"field": "value", "type": "quantitative"},
            },
        },
    },
    {
        "id": "stream-graph",
        "title": "Stream Graph",
        "description": "Stacked areas centred around a baseline to show shifting composition",
        "category": "Time Series",
        "complexity": "Advanced",
        "metadata": {"tags": ["composition", "temporal"],
                     "dataRequirements": _requirements(["time", "category", "value"], 10)},
        "spec": {
            "$schema": SCHEMA,
            "data": {"values": STREAM},
            "mark": "area",
            "encoding": {
                "x": {"field": "time", "type": "quantitative"},
                "y": {"field": "value", "type": "quantitative", "stack": "center"},
                "color": {"field": "category", "type": "nominal"},
            },
        },
    },
    {
        "id": "grouped-bar",
        "title": "Grouped Bar Chart",
        "description": "Side-by-side bars comparing sub-groups within each category",
        "category": "Comparison",
        "complexity": "Intermediate",
        "metadata": {"tags": ["comparison", "categorical"],
                     "dataRequirements": _requirements(["quarter", "category", "value"], 2)},
        "spec": {
            "$schema": SCHEMA,
            "data": {"values": QUARTERLY},
            "mark": "bar",
            "encoding": {
                "x": {"field": "quarter", "type": "nominal"},
                "y": {"field": "value", "type": "quantitative", "stack": None},
                "color": {"field": "category", "type": "nominal"},
                "xOffset": {"field": "category"},
            },
        },
    },
    {
        "id": "stacked-bar",
        "title": "Stacked Bar Chart",
        "description": "Totals per category split into stacked components",
        "category": "Comparison",
        "complexity": "Intermediate",
        "metadata": {"tags": ["comparison", "composition"],
                     "dataRequirements": _requirements(["quarter", "category", "value"], 2)},
        "spec": {
            "$schema": SCHEMA,
            "data": {"values": QUARTERLY},
            "mark": "bar",
            "encoding": {
                "x": {"field": "quarter", "type": "nominal"},
                "y": {"field": "value", "type": "quantitative", "stack": True},
                "color": {"field": "category", "type": "nominal"},
            },
        },
    },
    {
        "id": "bubble-chart",
        "title": "Bubble Chart",
        "description": "Scatter plot with a third quantitative variable mapped to size",
        "category": "Correlation",
        "complexity": "Intermediate",
        "metadata": {"tags": ["correlation", "multivariate"],
                     "dataRequirements": _requirements(["x", "y", "size"], 10)},
        "spec": {
            "$schema": SCHEMA,
            "data": {"values": CORRELATION},
            "mark": {"type": "circle", "opacity": 0.7},
            "encoding": {
                "x": {"field": "x", "type": "quantitative", "scale": {"zero": False}},
                "y": {"field": "y", "type": "quantitative", "scale": {"zero": False}},
                "size": {"field": "size", "type": "quantitative", "scale": {"range": [50, 400]}},
                "color": {"field": "category", "type": "nominal", "scale": {"scheme": "tableau10"}},
                "tooltip": [
                    {"field": "x", "type": "quantitative", "format": ".1f"},
                    {"field": "y", "type": "quantitative", "format": ".1f"},
                    {"field": "category", "type": "nominal"},
                ],
            },
        },
    },
    {
        "id": "heatmap",
        "title": "Heatmap",
        "description": "Matrix of values encoded by colour intensity",
        "category": "Correlation",
        "complexity": "Intermediate",
        "metadata": {"tags": ["matrix", "density"],
                     "dataRequirements": _requirements(["x", "y", "value"], 4)},
        "spec": {
            "$schema": SCHEMA,
            "data": {"values": GRID},
            "mark": "rect",
            "encoding": {
                "x": {"field": "x", "type": "ordinal"},
                "y": {"field": "y", "type": "ordinal"},
                "color": {"field": "value", "type": "quantitative"},
            },
        },
    },
    {
        "id": "pie-chart",
        "title": "Pie Chart",
        "description": "Circular statistical visualization for part-to-whole relationships",
        "category": "Part to Whole",
        "complexity": "Beginner",
        "metadata": {"tags": ["proportion"],
                     "dataRequirements": _requirements(["company", "share"], 2)},
        "spec": {
            "$schema": SCHEMA,
            "data": {"values": MARKET_SHARE},
            "mark": "arc",
            "encoding": {
                "theta": {"field": "share", "type": "quantitative"},
                "color": {"field": "company", "type": "nominal"},
            },
            "view": {"stroke": None},
        },
    },
    {
        "id": "donut-chart",
        "title": "Donut Chart",
        "description": "Pie chart with a hollow centre",
        "category": "Part to Whole",
        "complexity": "Beginner",
        "metadata": {"tags": ["proportion"],
                     "dataRequirements": _requirements(["category", "value"], 2)},
        "spec": {
            "$schema": SCHEMA,
            "data": {"values": CATEGORICAL},
            "mark": {"type": "arc", "innerRadius": 50},
            "encoding": {
                "theta": {"field": "value", "type": "quantitative"},
                "color": {"field": "category", "type": "nominal"},
            },
            "view": {"stroke": None},
        },
    },
    {
        "id": "radial-chart",
        "title": "Radial Chart",
        "description": "Arcs whose angle and radius both encode values",
        "category": "Part to Whole",
        "complexity": "Advanced",
        "metadata": {"tags": ["radial"],
                     "dataRequirements": _requirements(["category", "value"], 3)},
        "spec": {
            "$schema": SCHEMA,
            "data": {"values": CATEGORICAL},
            "mark": {"type": "arc", "innerRadius": 20, "stroke": "#fff"},
            "encoding": {
                "theta": {"field": "value", "type": "quantitative", "stack": True},
                "radius": {"field": "value", "type": "quantitative", "scale": {"type": "sqrt", "zero": True}},
                "color": {"field": "category", "type": "nominal"},
            },
        },
    },
    {
        "id": "ranked-bar",
        "title": "Ranked Bar Chart",
        "description": "Horizontal bars sorted by value, the usual alternative to a crowded pie",
        "category": "Comparison",
        "complexity": "Beginner",
        "metadata": {"tags": ["ranking"],
                     "dataRequirements": _requirements(["category", "value"], 2)},
        "spec": {
            "$schema": SCHEMA,
            "data": {"values": CATEGORICAL},
            "mark": "bar",
            "encoding": {
                "y": {"field": "category", "type": "nominal", "sort": "-x"},
                "x": {"field": "value", "type": "quantitative", "scale": {"zero": True}},
            },
        },
    },
)


def builtin_definitions():
    """Deferred constructors, one per built-in chart, in gallery order."""
    return [partial(ChartDefinition.from_dict, payload) for payload in BUILTIN_CHARTS]


def build_default_catalog(skip_invalid: bool = False) -> ChartCatalog:
    return ChartCatalog.from_definitions(builtin_definitions(), skip_invalid=skip_invalid)
