"""Domain package exports for records, ports, and errors."""

from .entities import Department, EntityId, Seller
from .errors import (
    PresentationError,
    ServiceError,
    StorageError,
    ValidationError,
)
from .ports import UseCaseError

__all__ = [
    "Department",
    "EntityId",
    "PresentationError",
    "Seller",
    "ServiceError",
    "StorageError",
    "UseCaseError",
    "ValidationError",
]
