from __future__ import annotations
from dataclasses import dataclass
from typing import Generic, TypeVar
from ..domain.ports import EntityPort
from .error_mapping import map_service_error

E = TypeVar("E")


@dataclass
class SaveEntity(Generic[E]):
    """Insert new records (``id is None``), update persisted ones."""

    port: EntityPort[E]

    def __call__(self, entity: E) -> E:
        try:
            if getattr(entity, "id", None) is None:
                return self.port.insert(entity)
            return self.port.update(entity)
        except Exception as e:
            raise map_service_error(e, default_code="SAVE_FAILED")
