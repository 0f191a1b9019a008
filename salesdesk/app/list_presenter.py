"""Presenter that connects one entity table view to its view models.

All UI actions end here: errors raised by the view models are caught, logged
and shown as a modal alert, never propagated into the Tk event loop.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, List, Optional, Protocol, Sequence, Tuple, TypeVar

from ..domain.ports import UseCaseError
from ..viewmodels.confirmation_gate import ConfirmationGate
from ..viewmodels.dialog_workflow import DialogOutcome, DialogWorkflow
from ..viewmodels.list_vm import EntityListVM
from ..viewmodels.row_actions import ACTION_DELETE, ACTION_EDIT

E = TypeVar("E")


class AlertPort(Protocol):
    def show_alert(self, title: str, header: str, message: str) -> None: ...
    def confirm(self, title: str, header: str, message: str) -> Optional[bool]: ...


class TableViewPort(Protocol):
    def set_rows(self, rows: List[Tuple[str, Any]]) -> None: ...


class EntityListPresenter(Generic[E]):
    """Wire list VM, dialog workflow and confirmation gate for one table."""

    def __init__(
        self,
        *,
        vm: EntityListVM[E, Any],
        view: TableViewPort,
        workflow: DialogWorkflow[E],
        gate: ConfirmationGate[E],
        alerts: AlertPort,
        new_entity: Callable[[], E],
        parent: Any = None,
        noun: str = "record",
        also_refresh: Sequence[Callable[[], Any]] = (),
        toast: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.vm = vm
        self.view = view
        self.workflow = workflow
        self.gate = gate
        self.alerts = alerts
        self.new_entity = new_entity
        self.parent = parent
        self.noun = noun
        self.also_refresh = list(also_refresh)
        self._toast = toast

        vm.on_rows_changed = self._render
        vm.row_actions.register(ACTION_EDIT, self.on_edit)
        vm.row_actions.register(ACTION_DELETE, self.on_delete)
        gate.on_deleted = self._after_change

    # ---- Loading ----
    def refresh(self) -> bool:
        """Reload the table; on failure keep the old rows and show an alert."""
        try:
            self.vm.reload()
        except UseCaseError as exc:
            self._alert(exc, f"Error loading {self.noun}s")
            return False
        return True

    def _render(self, rows: List[Any]) -> None:
        self.view.set_rows([(self.vm.row_key(row), row) for row in rows])

    # ---- View callbacks ----
    def on_new(self) -> None:
        self._open_form(self.new_entity())

    def on_row_action(self, action: str, row_key: str, context: Any = None) -> None:
        self.vm.row_actions.trigger(action, row_key, context)

    def on_edit(self, entity: E, context: Any = None) -> None:
        self._open_form(entity)

    def on_delete(self, entity: E, context: Any = None) -> None:
        try:
            deleted = self.gate.delete(entity)
        except UseCaseError as exc:
            self._alert(exc, "Error deleting")
            return
        if deleted and self._toast:
            self._toast(f"Deleted {self.noun} {getattr(entity, 'name', '')}")

    # ------------------------------------------------------------------
    def _open_form(self, entity: E) -> Optional[DialogOutcome[E]]:
        try:
            return self.workflow.open_form(entity, on_complete=self._after_change, parent=self.parent)
        except UseCaseError as exc:
            self._alert(exc, "Error loading form")
            return None

    def _after_change(self) -> None:
        self.refresh()
        for callback in self.also_refresh:
            callback()

    def _alert(self, exc: UseCaseError, header: str) -> None:
        self._log.warning("%s (%s): %s", header, exc.code, exc.message)
        self.alerts.show_alert(type(exc).__name__, header, exc.message)


def link_tables(*presenters: EntityListPresenter[Any]) -> None:
    """Make a change in any of ``presenters`` reload all the others.

    Sellers show their department name and departments show seller counts,
    so each table displays data the other one edits.
    """
    for presenter in presenters:
        for other in presenters:
            if other is not presenter:
                presenter.also_refresh.append(other.refresh)


def refresh_tables(*presenters: EntityListPresenter[Any]) -> bool:
    """Reload every table, even after one fails; True only if all loaded."""
    results = [presenter.refresh() for presenter in presenters]
    return all(results)


__all__ = ["AlertPort", "EntityListPresenter", "TableViewPort", "link_tables", "refresh_tables"]
