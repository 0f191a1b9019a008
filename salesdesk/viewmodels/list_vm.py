"""Base view model for entity tables.

Call context:
    ``EntityListPresenter`` calls ``reload()`` on startup and whenever a form
    or a delete reports changed data, then renders ``rows()`` into the table
    view. Row clicks go through ``row_actions``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Iterable, List, Optional, TypeVar

from salesdesk.domain.errors import PresentationError
from salesdesk.usecases.list_entities import ListEntities

from .row_actions import RowActionBinder

E = TypeVar("E")
R = TypeVar("R")


def name_key(entity: Any) -> str:
    return (getattr(entity, "name", "") or "").upper()


def sort_by_name(entities: Iterable[E]) -> List[E]:
    """Case-insensitive ascending order; ``sorted`` keeps ties in input order."""
    return sorted(entities, key=name_key)


class EntityListVM(Generic[E, R]):
    """Snapshot of one ``find_all()`` call plus its display rows.

    The snapshot is only ever replaced wholesale. ``begin_reload()`` hands out
    a generation token and ``finish_reload()`` applies a result only if its
    token is still the newest one, so a slow load can never overwrite the
    result of a load that was requested after it.
    """

    def __init__(
        self,
        *,
        list_uc: Optional[ListEntities[E]] = None,
        on_rows_changed: Optional[Callable[[List[R]], None]] = None,
    ) -> None:
        self._log = logging.getLogger(type(self).__module__)
        self.list_uc = list_uc
        self.on_rows_changed = on_rows_changed
        self.row_actions: RowActionBinder[E] = RowActionBinder()
        self._entities: List[E] = []
        self._rows: List[R] = []
        self._generation = 0

    # ---- Loading ----
    def require_services(self) -> None:
        if self.list_uc is None:
            raise PresentationError("SERVICE_NOT_READY", "List service not initialized.")

    def load(self) -> List[E]:
        """Fetch all entities sorted by name.

        Raises:
            PresentationError: When no list use case is wired.
            ServiceError: When the service call fails.
        """
        self.require_services()
        return sort_by_name(self.list_uc())  # type: ignore[misc]

    def begin_reload(self) -> int:
        self._generation += 1
        return self._generation

    def is_current(self, token: int) -> bool:
        return token == self._generation

    def finish_reload(self, token: int, entities: Iterable[E]) -> bool:
        """Apply a loaded collection if ``token`` is still current.

        ``entities`` may come straight from ``find_all()``; it is sorted by
        name here. Rows are built before anything is replaced; if building
        fails the previous snapshot stays as it was.
        """
        if not self.is_current(token):
            self._log.debug("Discarding stale reload %s (current %s)", token, self._generation)
            return False
        snapshot = sort_by_name(entities)
        rows = [self.to_row(entity) for entity in snapshot]
        self._entities = snapshot
        self._rows = rows
        self.row_actions.bind((self.row_key(row), entity) for row, entity in zip(rows, snapshot))
        if self.on_rows_changed:
            self.on_rows_changed(list(rows))
        return True

    def reload(self) -> List[R]:
        token = self.begin_reload()
        entities = self.load()
        self.finish_reload(token, entities)
        return self.rows()

    def on_data_changed(self) -> None:
        """Data-change listener hook: every change triggers a full reload."""
        self.reload()

    # ---- Snapshot accessors ----
    def rows(self) -> List[R]:
        return list(self._rows)

    def entities(self) -> List[E]:
        return list(self._entities)

    def entity_for(self, row_key: str) -> Optional[E]:
        return self.row_actions.entity_for(row_key)

    # ---- Row projection (subclasses) ----
    def to_row(self, entity: E) -> R:
        raise NotImplementedError

    def row_key(self, row: R) -> str:
        return str(getattr(row, "id"))


__all__ = ["EntityListVM", "name_key", "sort_by_name"]
