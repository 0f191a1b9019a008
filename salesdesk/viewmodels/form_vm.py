"""Shared state for modal create/edit forms (no tkinter here)."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Generic, List, Optional, TypeVar

from salesdesk.domain.errors import PresentationError, ValidationError
from salesdesk.usecases.save_entity import SaveEntity

from .dialog_workflow import DialogOutcome

E = TypeVar("E")

DataChangeListener = Callable[[], None]


class EntityFormVM(Generic[E]):
    """Holds raw field text, field errors and the dialog outcome.

    ``submit()`` validates, saves and records a ``saved`` outcome; the view
    closes the dialog when it returns an entity. ``cancel()`` may be called
    any number of times (button and window close both call it).
    """

    field_names: tuple = ()

    def __init__(self, entity: E, save_uc: Optional[SaveEntity[E]] = None) -> None:
        self._log = logging.getLogger(type(self).__module__)
        self.entity = entity
        self.save_uc = save_uc
        self.fields: Dict[str, str] = {name: "" for name in self.field_names}
        self.errors: Dict[str, str] = {}
        self._listeners: List[DataChangeListener] = []
        self._outcome: Optional[DialogOutcome[E]] = None

    # ---- Listeners ----
    def subscribe_data_change_listener(self, listener: DataChangeListener) -> None:
        self._listeners.append(listener)

    def _notify_data_change_listeners(self) -> None:
        for listener in list(self._listeners):
            listener()

    # ---- Fields ----
    def update_form_data(self) -> None:
        """Copy the entity into the text fields."""
        self.fields = self.entity_to_fields(self.entity)
        self.errors = {}

    def set_field(self, name: str, value: str) -> None:
        if name not in self.fields:
            raise KeyError(name)
        self.fields[name] = value
        self.errors.pop(name, None)

    def error_for(self, name: str) -> str:
        return self.errors.get(name, "")

    @property
    def is_new(self) -> bool:
        return getattr(self.entity, "id", None) is None

    # ---- Commands ----
    @property
    def closed(self) -> bool:
        return self._outcome is not None

    @property
    def outcome(self) -> DialogOutcome[E]:
        return self._outcome or DialogOutcome.cancelled()

    def submit(self) -> Optional[E]:
        """Validate and save.

        Returns:
            The saved entity, or ``None`` when validation failed (``errors``
            then holds one message per field).

        Raises:
            PresentationError: When the form has no save use case.
            ServiceError: When saving failed; the form stays open.
        """
        if self.closed:
            return self._outcome.entity if self._outcome else None
        if self.save_uc is None:
            raise PresentationError("SERVICE_NOT_READY", "Save service not initialized.")
        try:
            candidate = self.fields_to_entity(dict(self.fields))
        except ValidationError as exc:
            self.errors = dict(exc.errors)
            self._log.debug("Form rejected: %s", exc.message)
            return None
        saved = self.save_uc(candidate)
        self.entity = saved
        self.errors = {}
        self._outcome = DialogOutcome.saved(saved)
        self._notify_data_change_listeners()
        return saved

    def cancel(self) -> None:
        if self._outcome is None:
            self._outcome = DialogOutcome.cancelled()

    # ---- Entity mapping (subclasses) ----
    def entity_to_fields(self, entity: E) -> Dict[str, str]:
        raise NotImplementedError

    def fields_to_entity(self, fields: Dict[str, str]) -> E:
        raise NotImplementedError


__all__ = ["DataChangeListener", "EntityFormVM"]
