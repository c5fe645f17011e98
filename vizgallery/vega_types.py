from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Literal, Mapping, Optional, get_args


FieldType = Literal["quantitative", "temporal", "nominal", "ordinal"]
EncodingChannel = Literal["x", "y", "color", "size", "theta", "tooltip"]
MarkType = Literal[
    "bar", "line", "point", "area", "circle", "arc",
    "square", "tick", "rect", "rule", "text", "trail", "boxplot",
]

FIELD_TYPES: List[FieldType] = list(get_args(FieldType))
ENCODING_CHANNELS: List[EncodingChannel] = list(get_args(EncodingChannel))
MARK_TYPES: List[MarkType] = list(get_args(MarkType))

# marks offered by the visual editor's mark picker
EDITOR_MARKS: List[MarkType] = ["bar", "line", "point", "area", "circle", "arc"]


def is_field_type(value: Any) -> bool:
    return isinstance(value, str) and value in FIELD_TYPES


@dataclass(frozen=True)
class EncodingUpdate:
    """Binding for one encoding channel.

    field=None means "remove the channel"; use CLEAR for readability.
    """
    field: Optional[str] = None
    type: Optional[FieldType] = None

    def __post_init__(self):
        if self.field is not None and (not isinstance(self.field, str) or not self.field):
            raise ValueError(f"EncodingUpdate.field must be a non-empty string, got {self.field!r}")
        if self.type is not None and not is_field_type(self.type):
            raise ValueError(f"EncodingUpdate.type must be one of {FIELD_TYPES}, got {self.type!r}")

    @property
    def clears(self) -> bool:
        return self.field is None

    def to_encoding(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"field": self.field}
        if self.type is not None:
            out["type"] = self.type
        return out


CLEAR = EncodingUpdate()


@dataclass(frozen=True)
class VisualEditorUpdate:
    """One user interaction: a mark change, channel bindings, or both.

    A channel missing from `encoding` is left alone; a channel mapped to CLEAR
    (or None) is removed from the spec.
    """
    mark: Optional[MarkType] = None
    encoding: Optional[Mapping[EncodingChannel, EncodingUpdate]] = None

    def __post_init__(self):
        if self.mark is not None and self.mark not in MARK_TYPES:
            raise ValueError(f"Unknown mark type {self.mark!r}; expected one of {MARK_TYPES}")
        if self.encoding is None:
            return
        enc: Dict[str, EncodingUpdate] = {}
        for ch, upd in dict(self.encoding).items():
            if ch not in ENCODING_CHANNELS:
                raise ValueError(f"Unknown encoding channel {ch!r}; expected one of {ENCODING_CHANNELS}")
            if upd is None:
                upd = CLEAR
            if not isinstance(upd, EncodingUpdate):
                raise ValueError(f"Encoding update for {ch!r} must be an EncodingUpdate, got {type(upd).__name__}")
            enc[ch] = upd
        # freeze so a caller keeping a reference to its dict cannot change history
        object.__setattr__(self, "encoding", MappingProxyType(enc))

    @classmethod
    def set_mark(cls, mark: MarkType) -> "VisualEditorUpdate":
        return cls(mark=mark)

    @classmethod
    def bind(cls, channel: EncodingChannel, binding: EncodingUpdate) -> "VisualEditorUpdate":
        return cls(encoding={channel: binding})

    @classmethod
    def clear(cls, channel: EncodingChannel) -> "VisualEditorUpdate":
        return cls(encoding={channel: CLEAR})

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "VisualEditorUpdate":
        """
        Parse the UI payload shape:
          {"mark": "line", "encoding": {"y": {"field": "score", "type": "quantitative"}, "color": null}}
        A channel given as null, or as an object without "field", is a removal.
        """
        if not isinstance(payload, dict):
            raise ValueError(f"Visual editor update must be an object, got {type(payload).__name__}")
        unknown = set(payload) - {"mark", "encoding"}
        if unknown:
            raise ValueError(f"Unexpected keys in visual editor update: {sorted(unknown)}")

        enc_payload = payload.get("encoding")
        encoding: Optional[Dict[str, EncodingUpdate]] = None
        if enc_payload is not None:
            if not isinstance(enc_payload, dict):
                raise ValueError("'encoding' must be an object mapping channel -> {field?, type?}")
            encoding = {}
            for ch, e in enc_payload.items():
                if e is None:
                    encoding[ch] = CLEAR
                    continue
                if not isinstance(e, dict):
                    raise ValueError(f"encoding.{ch} must be an object or null")
                if e.get("field") is None:
                    encoding[ch] = CLEAR
                else:
                    encoding[ch] = EncodingUpdate(field=e["field"], type=e.get("type"))

        return cls(mark=payload.get("mark"), encoding=encoding)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.mark is not None:
            out["mark"] = self.mark
        if self.encoding is not None:
            out["encoding"] = {
                ch: (None if upd.clears else upd.to_encoding()) for ch, upd in self.encoding.items()
            }
        return out
