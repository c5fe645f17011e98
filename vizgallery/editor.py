from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from .binding import resolve_binding
from .catalog import ChartDefinition
from .data_profiler import ColumnMetadata
from .spec_parsers import deepcopy_spec
from .spec_updater import apply_update, check_working_spec
from .vega_types import EncodingChannel, MarkType, VisualEditorUpdate

logger = logging.getLogger(__name__)


class EditorSession:
    """
    Working state of one visual-editor session.

    Holds the current spec and the updates applied so far. Every update yields
    a new spec object; the previous one is dropped, never edited. A session has
    a single owner, so there is no locking.
    """

    def __init__(self, definition: ChartDefinition):
        self.chart_id: Optional[str] = definition.id
        self._base = definition.spec()
        self._current = deepcopy_spec(self._base)
        self._history: List[VisualEditorUpdate] = []
        self._check_start()

    @classmethod
    def from_spec(cls, spec: Dict[str, Any]) -> "EditorSession":
        session = cls.__new__(cls)
        session.chart_id = None
        session._base = deepcopy_spec(spec)
        session._current = deepcopy_spec(spec)
        session._history = []
        session._check_start()
        return session

    def _check_start(self) -> None:
        check_working_spec(self._base)

    # ---------------------------
    # State
    # ---------------------------
    @property
    def spec(self) -> Dict[str, Any]:
        return deepcopy_spec(self._current)

    @property
    def history(self) -> Tuple[VisualEditorUpdate, ...]:
        return tuple(self._history)

    def reset(self) -> Dict[str, Any]:
        self._current = deepcopy_spec(self._base)
        self._history = []
        logger.debug("session %r reset to base spec", self.chart_id)
        return self.spec

    # ---------------------------
    # Edits
    # ---------------------------
    def apply(self, update: VisualEditorUpdate) -> Dict[str, Any]:
        self._current = apply_update(self._current, update)
        self._history.append(update)
        logger.debug("session %r applied %s", self.chart_id, update.to_dict())
        return self.spec

    def set_mark(self, mark: MarkType) -> Dict[str, Any]:
        return self.apply(VisualEditorUpdate.set_mark(mark))

    def bind(self, column: ColumnMetadata, channel: EncodingChannel,
             explicit_type: Optional[str] = None) -> Dict[str, Any]:
        return self.apply(VisualEditorUpdate.bind(channel, resolve_binding(column, channel, explicit_type)))

    def clear(self, channel: EncodingChannel) -> Dict[str, Any]:
        return self.apply(VisualEditorUpdate.clear(channel))
