"""Translate adapter errors into user-facing ServiceError instances."""

from __future__ import annotations

from typing import Optional

from salesdesk.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    ApiTimeoutError,
    ErrorBody,
)
from salesdesk.domain.errors import ServiceError, StorageError
from salesdesk.domain.ports import UseCaseError


def map_service_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map adapter exceptions to stable ServiceError codes.

    ``UseCaseError`` instances (including ``ValidationError``) pass through
    unchanged so callers can re-raise the result unconditionally.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, StorageError):
        if exc.integrity:
            return ServiceError("INTEGRITY_VIOLATION", str(exc))
        return ServiceError("STORAGE_FAILED", str(exc))
    if isinstance(exc, ApiTimeoutError):
        return ServiceError("REQUEST_TIMEOUT", "Request timed out. Check connection.")
    if isinstance(exc, ApiClientError):
        status = exc.status or 0
        hint = exc.hint or ErrorBody.from_payload(exc.payload).hint
        if status == 409:
            return ServiceError(
                "INTEGRITY_VIOLATION",
                _compose_error_message("Record is still referenced", hint),
            )
        if status == 404:
            return ServiceError("NOT_FOUND", _compose_error_message("Record not found", hint))
        if status in (401, 403):
            return ServiceError("AUTH_FAILED", "Auth failed / API key invalid.")
        if status == 422:
            return ServiceError("INVALID_DATA", _compose_error_message("Invalid data", hint))
        label = f"Request failed (HTTP {status})" if status else "Request failed"
        return ServiceError("REQUEST_FAILED", _compose_error_message(label, hint))
    if isinstance(exc, ApiServerError):
        return ServiceError("SERVER_ERROR", "Server error, try again.")
    if isinstance(exc, ApiError):
        return ServiceError("API_ERROR", str(exc))

    message = default_message or str(exc) or "Unexpected error."
    return ServiceError(default_code, message)


def _compose_error_message(base: str, hint: Optional[str]) -> str:
    hint_text = (hint or "").strip()
    if hint_text:
        return f"{base}: {hint_text}"
    if base.endswith("."):
        return base
    return f"{base}."


__all__ = ["map_service_error"]
