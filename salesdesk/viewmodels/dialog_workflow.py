"""Modal create/edit workflow.

The caller hands an entity (new or persisted) to ``open_form``; the injected
opener shows the form and returns only after the dialog is closed. A
``submitted`` outcome fires ``on_complete`` exactly once, a ``cancelled``
outcome fires nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, Protocol, TypeVar

from salesdesk.domain.errors import PresentationError
from salesdesk.domain.ports import UseCaseError

E = TypeVar("E")

STATE_IDLE = "idle"
STATE_FORM_OPEN = "form_open"


@dataclass(frozen=True)
class DialogOutcome(Generic[E]):
    """Result of a closed form: the saved entity, or nothing when cancelled."""

    submitted: bool
    entity: Optional[E] = None

    @classmethod
    def saved(cls, entity: E) -> "DialogOutcome[E]":
        return cls(submitted=True, entity=entity)

    @classmethod
    def cancelled(cls) -> "DialogOutcome[E]":
        return cls(submitted=False, entity=None)


class FormOpener(Protocol[E]):
    """Shows a modal form for ``entity`` and blocks until it is closed."""

    def __call__(self, entity: E, parent: Any) -> DialogOutcome[E]: ...


class DialogWorkflow(Generic[E]):
    """Open forms one at a time and report submitted changes."""

    def __init__(self, opener: FormOpener[E]) -> None:
        self._log = logging.getLogger(__name__)
        self._opener = opener
        self.state = STATE_IDLE

    def open_form(
        self,
        entity: E,
        on_complete: Optional[Callable[[], None]] = None,
        parent: Any = None,
    ) -> DialogOutcome[E]:
        """Show the form for ``entity`` and wait for it to close.

        Args:
            entity: Record to edit; a record without id creates a new one.
            on_complete: Data-changed callback, run once after a submit.
            parent: Owner window of the modal dialog.

        Raises:
            PresentationError: When a form is already open, or the form could
                not be built (``FORM_LOAD_FAILED``).
        """
        if self.state == STATE_FORM_OPEN:
            raise PresentationError("FORM_ALREADY_OPEN", "A form is already open.")
        self.state = STATE_FORM_OPEN
        try:
            outcome = self._opener(entity, parent)
        except UseCaseError:
            raise
        except Exception as exc:
            self._log.exception("Failed to open form")
            raise PresentationError("FORM_LOAD_FAILED", str(exc) or "Could not open form.") from exc
        finally:
            self.state = STATE_IDLE

        if outcome is None:
            outcome = DialogOutcome.cancelled()
        if outcome.submitted and on_complete:
            on_complete()
        return outcome


__all__ = [
    "DialogOutcome",
    "DialogWorkflow",
    "FormOpener",
    "STATE_FORM_OPEN",
    "STATE_IDLE",
]
