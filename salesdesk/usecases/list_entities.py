from __future__ import annotations
from dataclasses import dataclass
from typing import Generic, List, TypeVar
from ..domain.ports import EntityPort
from .error_mapping import map_service_error

E = TypeVar("E")


@dataclass
class ListEntities(Generic[E]):
    """Fetch the whole collection in one call; no paging, no partial results."""

    port: EntityPort[E]

    def __call__(self) -> List[E]:
        try:
            return list(self.port.find_all() or [])
        except Exception as e:
            raise map_service_error(e, default_code="LOAD_FAILED")
