from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from salesdesk.domain.entities import Department, Seller
from salesdesk.domain.validation import build_seller
from salesdesk.usecases.list_entities import ListEntities
from salesdesk.usecases.save_entity import SaveEntity

from .form_vm import EntityFormVM
from .list_vm import sort_by_name
from .seller_list_vm import format_date


class SellerFormVM(EntityFormVM[Seller]):
    """Form state for a seller, including the department picker options."""

    field_names = ("id", "name", "email", "birth_date", "base_salary", "department_id")

    def __init__(
        self,
        entity: Seller,
        save_uc: Optional[SaveEntity[Seller]] = None,
        *,
        departments_uc: Optional[ListEntities[Department]] = None,
    ) -> None:
        super().__init__(entity, save_uc)
        self.departments_uc = departments_uc
        self.departments: List[Department] = []

    def load_departments(self) -> List[Department]:
        """Refresh the picker options; raises ServiceError on failure."""
        self.departments = sort_by_name(self.departments_uc()) if self.departments_uc else []
        return list(self.departments)

    def update_form_data(self) -> None:
        self.load_departments()
        super().update_form_data()

    def department_options(self) -> List[Tuple[str, str]]:
        """``(department_id, label)`` pairs in display order."""
        return [(str(d.id), d.name) for d in self.departments]

    def entity_to_fields(self, entity: Seller) -> Dict[str, str]:
        return {
            "id": "" if entity.id is None else str(entity.id),
            "name": entity.name or "",
            "email": entity.email or "",
            "birth_date": format_date(entity.birth_date),
            "base_salary": "" if entity.is_new else f"{entity.base_salary:.2f}",
            "department_id": (
                str(entity.department.id)
                if entity.department and entity.department.id is not None
                else ""
            ),
        }

    def fields_to_entity(self, fields: Dict[str, str]) -> Seller:
        return build_seller(fields, self.entity, self.departments)


__all__ = ["SellerFormVM"]
