from __future__ import annotations
from dataclasses import dataclass
from typing import Generic, TypeVar
from ..domain.errors import ServiceError
from ..domain.ports import EntityPort
from .error_mapping import map_service_error

E = TypeVar("E")


@dataclass
class DeleteEntity(Generic[E]):
    port: EntityPort[E]

    def __call__(self, entity: E) -> None:
        if getattr(entity, "id", None) is None:
            raise ServiceError("DELETE_FAILED", "Record has not been saved yet.")
        try:
            self.port.delete(entity)
        except Exception as e:
            raise map_service_error(e, default_code="DELETE_FAILED")
