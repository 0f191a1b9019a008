"""Tk implementations of ``FormOpener`` for the dialog workflow."""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Optional, Type, TypeVar

from ..domain.ports import UseCaseError
from ..viewmodels.dialog_workflow import DialogOutcome
from ..viewmodels.form_vm import EntityFormVM
from .views.entity_form_dialog import EntityFormDialog

E = TypeVar("E")


class TkFormOpener(Generic[E]):
    """Build the form VM and dialog, then block in ``wait_window``.

    Args:
        dialog_cls: Dialog class to instantiate.
        vm_factory: Builds a fresh form VM for the entity being edited.
        on_error: Receives save failures while the dialog stays open.
    """

    def __init__(
        self,
        dialog_cls: Type[EntityFormDialog],
        vm_factory: Callable[[E], EntityFormVM[E]],
        *,
        on_error: Optional[Callable[[UseCaseError], None]] = None,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.dialog_cls = dialog_cls
        self.vm_factory = vm_factory
        self.on_error = on_error

    def __call__(self, entity: E, parent: Any) -> DialogOutcome[E]:
        vm = self.vm_factory(entity)
        vm.update_form_data()
        dialog = self.dialog_cls(parent, vm, on_error=self.on_error)
        parent.wait_window(dialog)
        outcome = vm.outcome
        self._log.debug("%s closed (submitted=%s)", self.dialog_cls.__name__, outcome.submitted)
        return outcome


__all__ = ["TkFormOpener"]
