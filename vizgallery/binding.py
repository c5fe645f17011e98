from __future__ import annotations

from typing import Dict, Optional

from .data_profiler import ColumnMetadata
from .vega_types import EncodingChannel, EncodingUpdate, FieldType, is_field_type


# used only when neither the caller nor the column gives a recognized type
CHANNEL_DEFAULT_TYPES: Dict[str, FieldType] = {
    "theta": "quantitative",
    "size": "quantitative",
    "color": "nominal",
}


def resolve_type(column: ColumnMetadata, channel: EncodingChannel,
                 explicit_type: Optional[str] = None) -> FieldType:
    if is_field_type(explicit_type):
        return explicit_type
    if is_field_type(column.type):
        return column.type
    return CHANNEL_DEFAULT_TYPES.get(channel, "quantitative")


def resolve_binding(column: ColumnMetadata, channel: EncodingChannel,
                    explicit_type: Optional[str] = None) -> EncodingUpdate:
    """
    Turn a dropped column into a channel binding.
    Type precedence: explicit_type, then the column's own type, then the
    channel default. Unrecognized strings at either level are skipped.
    """
    return EncodingUpdate(field=column.name, type=resolve_type(column, channel, explicit_type))
