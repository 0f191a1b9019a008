"""Yes/no confirmation in front of destructive actions."""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Optional, TypeVar

from salesdesk.domain.errors import PresentationError
from salesdesk.usecases.delete_entity import DeleteEntity

E = TypeVar("E")

ConfirmFn = Callable[[str, str, str], Optional[bool]]

STATE_IDLE = "idle"
STATE_AWAITING_CONFIRMATION = "awaiting_confirmation"
STATE_DELETING = "deleting"

CONFIRM_MESSAGE = "Are you sure you want to delete?"


def describe(entity: Any) -> str:
    return f"Id: {getattr(entity, 'id', None)} - {getattr(entity, 'name', '')}"


class ConfirmationGate(Generic[E]):
    """Ask before deleting; only an explicit yes reaches the service.

    ``confirm(title, header, message)`` blocks until the user answers and
    returns ``True`` for yes. ``False`` and ``None`` (dialog dismissed) both
    mean no.
    """

    def __init__(
        self,
        confirm: ConfirmFn,
        delete_uc: Optional[DeleteEntity[E]] = None,
        *,
        title: str = "Delete record",
        on_deleted: Optional[Callable[[], None]] = None,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self._confirm = confirm
        self.delete_uc = delete_uc
        self.title = title
        self.on_deleted = on_deleted
        self.state = STATE_IDLE

    def confirm_delete(self, entity: E) -> bool:
        self.state = STATE_AWAITING_CONFIRMATION
        try:
            answer = self._confirm(self.title, describe(entity), CONFIRM_MESSAGE)
        finally:
            self.state = STATE_IDLE
        return answer is True

    def delete(self, entity: E) -> bool:
        """Confirm, delete, then fire ``on_deleted``.

        Returns:
            ``True`` when the record was deleted, ``False`` when the user
            declined.

        Raises:
            ServiceError: When the delete failed; ``on_deleted`` does not run.
        """
        if not self.confirm_delete(entity):
            self._log.debug("Delete declined for %s", describe(entity))
            return False
        if self.delete_uc is None:
            raise PresentationError("SERVICE_NOT_READY", "Delete service not initialized.")
        self.state = STATE_DELETING
        try:
            self.delete_uc(entity)
        finally:
            self.state = STATE_IDLE
        self._log.info("Deleted %s", describe(entity))
        if self.on_deleted:
            self.on_deleted()
        return True


__all__ = [
    "CONFIRM_MESSAGE",
    "ConfirmFn",
    "ConfirmationGate",
    "STATE_AWAITING_CONFIRMATION",
    "STATE_DELETING",
    "STATE_IDLE",
    "describe",
]
