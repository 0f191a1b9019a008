from __future__ import annotations
from typing import List, Optional, Protocol, TypeVar

from .entities import Department, EntityId, Seller

E = TypeVar("E")


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


# ---- Ports (Hexagonal boundaries) ----
class EntityPort(Protocol[E]):
    """CRUD surface shared by every entity service."""

    def find_all(self) -> List[E]: ...
    def find_by_id(self, entity_id: EntityId) -> Optional[E]: ...
    def insert(self, entity: E) -> E: ...  # returns the entity with its assigned id
    def update(self, entity: E) -> E: ...
    def delete(self, entity: E) -> None: ...


class DepartmentPort(EntityPort[Department], Protocol):
    """Department persistence."""


class SellerPort(EntityPort[Seller], Protocol):
    """Seller persistence plus per-department queries."""

    def find_by_department(self, department: Department) -> List[Seller]: ...
    def quantity_by_department(self, department: Department) -> int: ...


class SettingsStoragePort(Protocol):
    """Persistence for user settings."""

    def save_user_settings(self, payload: dict) -> None: ...
    def load_user_settings(self) -> Optional[dict]: ...
