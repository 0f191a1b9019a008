"""Per-row action dispatch for entity tables.

Table widgets recycle their row widgets/items across redraws, so handlers
must never capture the entity of a row at widget-creation time. The binder
keeps the mapping ``row key -> entity`` of the latest render and resolves it
when the user actually clicks.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Generic, Iterable, List, Optional, Tuple, TypeVar

E = TypeVar("E")

RowHandler = Callable[[E, Any], None]

ACTION_EDIT = "edit"
ACTION_DELETE = "delete"


class RowActionBinder(Generic[E]):
    """Resolve row keys to the currently displayed entity and run handlers."""

    def __init__(self) -> None:
        self._log = logging.getLogger(__name__)
        self._entities: Dict[str, E] = {}
        self._order: List[str] = []
        self._handlers: Dict[str, RowHandler] = {}

    def register(self, action: str, handler: RowHandler) -> None:
        """Attach ``handler(entity, context)`` to ``action`` for every row."""
        self._handlers[action] = handler

    def actions(self) -> Tuple[str, ...]:
        return tuple(self._handlers)

    def bind(self, rows: Iterable[Tuple[str, E]]) -> None:
        """Replace the row snapshot with ``(row_key, entity)`` pairs."""
        entities: Dict[str, E] = {}
        order: List[str] = []
        for key, entity in rows:
            if key in entities:
                raise ValueError(f"Duplicate row key '{key}'")
            entities[key] = entity
            order.append(key)
        self._entities = entities
        self._order = order

    def row_keys(self) -> List[str]:
        return list(self._order)

    def entity_for(self, row_key: str) -> Optional[E]:
        return self._entities.get(row_key)

    def trigger(self, action: str, row_key: str, context: Any = None) -> bool:
        """Run ``action`` for the entity currently shown under ``row_key``.

        Returns:
            ``True`` when a handler ran, ``False`` for unknown actions or rows
            that are no longer displayed.
        """
        handler = self._handlers.get(action)
        if handler is None:
            self._log.debug("No handler registered for row action %r", action)
            return False
        entity = self._entities.get(row_key)
        if entity is None:
            self._log.debug("Row %r is not displayed anymore; ignoring %s", row_key, action)
            return False
        handler(entity, context)
        return True


__all__ = ["ACTION_DELETE", "ACTION_EDIT", "RowActionBinder", "RowHandler"]
