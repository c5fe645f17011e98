from __future__ import annotations

import json
from typing import Any, Dict, Optional

import altair as alt
import jsonschema


VEGA_LITE_SCHEMA_URL = alt.SCHEMA_URL


def deepcopy_spec(spec: Dict[str, Any]) -> Dict[str, Any]:
    # json roundtrip: specs are plain dict/list/primitive documents, and the copy
    # must not share a single sub-object with the source
    return json.loads(json.dumps(spec))


def get_mark(spec: Dict[str, Any]) -> str:
    mark = spec.get("mark")
    if isinstance(mark, dict):
        mark = mark.get("type")
    return str(mark).lower() if mark else "unknown"


def get_encoding(spec: Dict[str, Any]) -> Dict[str, Any]:
    enc = spec.get("encoding")
    return enc if isinstance(enc, dict) else {}


def encoded_fields(spec: Dict[str, Any]) -> Dict[str, str]:
    """channel -> field for every channel bound to a single field."""
    out: Dict[str, str] = {}
    for ch, e in get_encoding(spec).items():
        if isinstance(e, dict) and e.get("field"):
            out[ch] = str(e["field"])
    return out


def is_unit_spec(spec: Dict[str, Any]) -> bool:
    return isinstance(spec, dict) and "mark" in spec


def _chart_class(spec: Dict[str, Any]):
    if "layer" in spec:
        return alt.LayerChart
    return alt.Chart


def check_spec(spec: Any) -> None:
    """
    Validate against the Vega-Lite schema bundled with Altair.
    Raises ValueError for structural problems and lets Altair's
    jsonschema.ValidationError through for schema failures.

    Inline data is optional for gallery specs (the dataset is bound later),
    so a spec without "data" is checked with an empty inline dataset.
    """
    if not isinstance(spec, dict):
        raise ValueError(f"spec must be an object, got {type(spec).__name__}")
    if "mark" not in spec and "layer" not in spec:
        raise ValueError("spec has neither 'mark' nor 'layer'")

    probe = dict(spec)
    if probe.get("data") is None:
        probe["data"] = {"values": []}
    _chart_class(probe).from_dict(probe, validate=True)


def describe_error(exc: Exception) -> str:
    if isinstance(exc, jsonschema.ValidationError):
        path = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        return f"{path}: {exc.message}"
    return str(exc)


def schema_error(spec: Any) -> Optional[str]:
    """None when the spec is valid, otherwise a one-line reason."""
    try:
        check_spec(spec)
    except (ValueError, jsonschema.ValidationError) as exc:
        return describe_error(exc)
    return None


def is_valid_vegalite(spec: Any) -> bool:
    return schema_error(spec) is None


def summarize_spec(spec: Dict[str, Any]) -> Dict[str, Any]:
    # compact view used by the app next to the live preview
    title = spec.get("title")
    if isinstance(title, dict):
        title = title.get("text")
    data = spec.get("data")
    n_values = len(data["values"]) if isinstance(data, dict) and isinstance(data.get("values"), list) else None
    return {
        "title": title,
        "mark": get_mark(spec),
        "fields": encoded_fields(spec),
        "inline_rows": n_values,
    }
