"""Domain records shared across adapters, use-cases, and view models."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Dict, Mapping, Optional

EntityId = int


@dataclass(frozen=True)
class Department:
    """Department record owned by the persistence layer.

    ``id`` is ``None`` until the record has been persisted; adapters assign
    identifiers on insert.
    """

    id: Optional[EntityId] = None
    name: str = ""

    @property
    def is_new(self) -> bool:
        return self.id is None

    def with_id(self, entity_id: EntityId) -> "Department":
        return replace(self, id=entity_id)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Department":
        raw_id = data.get("id")
        return cls(
            id=int(raw_id) if raw_id is not None else None,
            name=str(data.get("name") or ""),
        )


@dataclass(frozen=True)
class Seller:
    """Seller record; belongs to exactly one department once persisted."""

    id: Optional[EntityId] = None
    name: str = ""
    email: str = ""
    birth_date: Optional[date] = None
    base_salary: float = 0.0
    department: Optional[Department] = None

    @property
    def is_new(self) -> bool:
        return self.id is None

    def with_id(self, entity_id: EntityId) -> "Seller":
        return replace(self, id=entity_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "birth_date": self.birth_date.isoformat() if self.birth_date else None,
            "base_salary": self.base_salary,
            "department_id": self.department.id if self.department else None,
        }

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        *,
        department: Optional[Department] = None,
    ) -> "Seller":
        """Build a seller from a flat payload.

        ``department`` wins over any nested ``department`` object in the
        payload; adapters pass it when they resolve the foreign key themselves.
        """
        raw_id = data.get("id")
        birth = data.get("birth_date")
        if department is None and isinstance(data.get("department"), Mapping):
            department = Department.from_dict(data["department"])
        return cls(
            id=int(raw_id) if raw_id is not None else None,
            name=str(data.get("name") or ""),
            email=str(data.get("email") or ""),
            birth_date=date.fromisoformat(birth) if birth else None,
            base_salary=float(data.get("base_salary") or 0.0),
            department=department,
        )


__all__ = ["Department", "EntityId", "Seller"]
