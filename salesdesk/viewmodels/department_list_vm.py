"""Department table projection with per-row seller counts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional

from salesdesk.domain.entities import Department
from salesdesk.domain.errors import PresentationError
from salesdesk.usecases.count_sellers import CountSellers
from salesdesk.usecases.list_entities import ListEntities

from .list_vm import EntityListVM


@dataclass(frozen=True)
class DepartmentRow:
    """Display row for the departments table."""
    id: int
    name: str
    seller_count: int


class DepartmentListVM(EntityListVM[Department, DepartmentRow]):
    """Departments sorted by name, each with its seller count.

    The count is queried once per row on every reload and never cached, so
    the column always reflects the store at reload time.
    """

    def __init__(
        self,
        *,
        list_uc: Optional[ListEntities[Department]] = None,
        count_uc: Optional[CountSellers] = None,
        on_rows_changed: Optional[Callable[[List[DepartmentRow]], None]] = None,
    ) -> None:
        super().__init__(list_uc=list_uc, on_rows_changed=on_rows_changed)
        self.count_uc = count_uc

    def require_services(self) -> None:
        super().require_services()
        if self.count_uc is None:
            raise PresentationError("SERVICE_NOT_READY", "Seller service not initialized.")

    def to_row(self, entity: Department) -> DepartmentRow:
        count = self.count_uc(entity) if self.count_uc else 0
        return DepartmentRow(id=int(entity.id or 0), name=entity.name, seller_count=count)


__all__ = ["DepartmentListVM", "DepartmentRow"]
