from __future__ import annotations

from typing import Optional


class GalleryError(Exception):
    """Base class for chart gallery errors."""


class InvalidCatalogEntry(GalleryError, ValueError):
    """A chart definition is malformed or its base spec is not valid Vega-Lite."""

    def __init__(self, chart_id: Optional[str], reason: str):
        self.chart_id = chart_id
        self.reason = reason
        label = repr(chart_id) if chart_id else "<no id>"
        super().__init__(f"Invalid chart definition {label}: {reason}")


class DuplicateId(GalleryError, ValueError):
    def __init__(self, chart_id: str):
        self.chart_id = chart_id
        super().__init__(f"Chart id {chart_id!r} is already registered")


class ChartNotFound(GalleryError, KeyError):
    def __init__(self, chart_id: str):
        self.chart_id = chart_id
        super().__init__(chart_id)

    def __str__(self) -> str:
        return f"No chart registered with id {self.chart_id!r}"


class InvariantViolation(GalleryError, RuntimeError):
    """The working specification handed to the update engine is not schema-valid.

    This points at a bug in the caller's state handling, not at user input.
    """
