from __future__ import annotations

from typing import Dict

from salesdesk.domain.entities import Department
from salesdesk.domain.validation import build_department

from .form_vm import EntityFormVM


class DepartmentFormVM(EntityFormVM[Department]):
    """Form state for creating or renaming a department."""

    field_names = ("id", "name")

    def entity_to_fields(self, entity: Department) -> Dict[str, str]:
        return {
            "id": "" if entity.id is None else str(entity.id),
            "name": entity.name or "",
        }

    def fields_to_entity(self, fields: Dict[str, str]) -> Department:
        return build_department(fields, self.entity)


__all__ = ["DepartmentFormVM"]
