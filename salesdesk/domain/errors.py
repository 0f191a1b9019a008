"""Domain-level error types shared by use cases, view models, and presenters.

Adapters raise transport- or storage-specific exceptions; use cases translate
them into the types below so the presentation layer only ever handles
``UseCaseError`` subclasses.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from .ports import UseCaseError


class ServiceError(UseCaseError):
    """Persistence or service failure (connectivity, integrity violation...)."""


class PresentationError(UseCaseError):
    """Form/resource load failure or missing UI wiring."""


class ValidationError(UseCaseError):
    """Form input rejected before reaching the service layer."""

    def __init__(
        self,
        errors: Mapping[str, str],
        message: Optional[str] = None,
    ) -> None:
        self.errors: Dict[str, str] = dict(errors)
        super().__init__("VALIDATION_FAILED", message or _summary(self.errors))


class StorageError(RuntimeError):
    """Raised by local storage adapters when a read/write/integrity check fails."""

    def __init__(self, message: str, *, integrity: bool = False) -> None:
        super().__init__(message)
        self.integrity = integrity


def _summary(errors: Mapping[str, str]) -> str:
    if not errors:
        return "Invalid input."
    return "; ".join(f"{field}: {text}" for field, text in errors.items())


__all__ = [
    "PresentationError",
    "ServiceError",
    "StorageError",
    "UseCaseError",
    "ValidationError",
]
