from __future__ import annotations

import json
from typing import Any, Dict, Iterable

import jsonschema
import pandas as pd

from .errors import InvariantViolation
from .spec_parsers import check_spec, deepcopy_spec, describe_error, get_encoding, is_unit_spec
from .vega_types import EncodingUpdate, VisualEditorUpdate

# keys that cannot sit next to "field" in a channel definition
_CONSTANT_KEYS = ("value", "datum")


def check_working_spec(spec: Dict[str, Any]) -> None:
    if not is_unit_spec(spec):
        raise InvariantViolation("working spec must be a single-view Vega-Lite spec with a top-level 'mark'")
    try:
        check_spec(spec)
    except (ValueError, jsonschema.ValidationError) as exc:
        raise InvariantViolation(f"working spec is not valid Vega-Lite: {describe_error(exc)}") from exc


def _rebind(prior: Any, binding: EncodingUpdate) -> Dict[str, Any]:
    # only field and type are overwritten; aggregate, sort, scale and the like are kept
    channel = dict(prior) if isinstance(prior, dict) else {}
    for key in _CONSTANT_KEYS:
        channel.pop(key, None)
    channel.update(binding.to_encoding())
    return channel


def _merge_encoding(enc: Dict[str, Any], update: VisualEditorUpdate) -> Dict[str, Any]:
    # channel-level merge: only channels named in the update are touched
    for channel, binding in update.encoding.items():
        if binding.clears:
            enc.pop(channel, None)
        else:
            enc[channel] = _rebind(enc.get(channel), binding)
    return enc


def apply_update(current: Dict[str, Any], update: VisualEditorUpdate) -> Dict[str, Any]:
    """
    Fold one visual edit into a working spec and return the new spec.

    - mark: replaced wholesale (mark objects like {"type": "arc", "innerRadius": 50}
      become the bare new mark); encoding is not touched by a mark change.
    - encoding: per named channel, overwrite field (and type when the update
      carries one) on top of the prior channel definition, or drop the channel
      when the update clears it. Channels not named keep their previous definition.

    `current` is never modified and the result shares no sub-object with it.
    """
    check_working_spec(current)
    out = deepcopy_spec(current)

    if update.mark is not None:
        out["mark"] = update.mark

    if update.encoding is not None:
        enc = _merge_encoding(get_encoding(out), update)
        if enc or "encoding" in out:
            out["encoding"] = enc

    return out


def apply_updates(current: Dict[str, Any], updates: Iterable[VisualEditorUpdate]) -> Dict[str, Any]:
    """Strict left fold: later updates to the same channel win."""
    check_working_spec(current)
    out = deepcopy_spec(current)
    for upd in updates:
        out = apply_update(out, upd)
    return out


def with_inline_data(spec: Dict[str, Any], df, max_rows: int = 5000) -> Dict[str, Any]:
    """
    Gallery specs ship with sample data; for preview we swap in the user's
    dataset as inline values.

    If df is too large, we sample to keep the UI fast.
    """
    out = deepcopy_spec(spec)
    if df is None or len(df) == 0:
        return out

    if isinstance(df, pd.DataFrame) and len(df) > max_rows:
        df2 = df.sample(n=max_rows, random_state=42)
    else:
        df2 = df

    # to_json turns timestamps into ISO strings and NaN into null
    records = json.loads(df2.to_json(orient="records", date_format="iso"))

    out["data"] = {"values": records}
    return out
