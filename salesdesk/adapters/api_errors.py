"""Typed failures raised by the REST adapters.

Every non-2xx response is parsed once into an :class:`ErrorBody`; the adapter
then raises the subclass matching the status family. Use cases never look at
responses, only at these attributes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

_DETAIL_KEYS = ("detail", "message", "error", "title")
_CODE_KEYS = ("code", "error_code")
_HINT_KEYS = ("hint", "details", "errors")


class ApiError(RuntimeError):
    """Base class for sales API failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.code = code
        self.hint = hint
        self.payload = payload
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx: bad input, missing record, or a conflict such as 409."""


class ApiServerError(ApiError):
    """HTTP 5xx."""


class ApiTimeoutError(ApiError):
    """No response: timeout or connection refused after all retries."""


@dataclass(frozen=True)
class ErrorBody:
    """What an error response said, reduced to presentable strings."""

    raw: Any = None
    detail: Optional[str] = None
    code: Optional[str] = None
    hint: Optional[str] = None

    @classmethod
    def from_response(cls, resp: Any) -> "ErrorBody":
        try:
            raw = resp.json()
        except ValueError:
            text = (getattr(resp, "text", "") or "").strip()
            return cls(raw=text[:400] or None, detail=text[:200] or None)
        return cls.from_payload(raw)

    @classmethod
    def from_payload(cls, raw: Any) -> "ErrorBody":
        code = hint = None
        if isinstance(raw, dict):
            code = next((str(raw[k]) for k in _CODE_KEYS if raw.get(k) is not None), None)
            hint = next((t for t in (flatten(raw.get(k)) for k in _HINT_KEYS) if t), None)
        elif isinstance(raw, list):
            hint = flatten(raw)
        return cls(raw=raw, detail=first_text(raw), code=code, hint=hint)

    def message(self, ctx: str, status: int) -> str:
        if self.detail:
            return f"{ctx}: {self.detail} (HTTP {status})"
        return f"{ctx}: HTTP {status}"


def first_text(raw: Any) -> Optional[str]:
    """First non-empty detail string in a payload, searching nested values."""
    if isinstance(raw, str):
        return raw.strip() or None
    if isinstance(raw, dict):
        candidates = (raw.get(k) for k in _DETAIL_KEYS)
    elif isinstance(raw, list):
        candidates = iter(raw)
    else:
        return None
    for value in candidates:
        text = first_text(value)
        if text:
            return text
    return None


def flatten(raw: Any, *, limit: int = 200) -> Optional[str]:
    """One-line rendering of a hint value (string, list or mapping)."""
    if raw is None:
        return None
    if isinstance(raw, list):
        text = "; ".join(t for t in (flatten(v, limit=limit) for v in raw[:3]) if t)
    elif isinstance(raw, dict):
        text = ", ".join(
            f"{key}={value}"
            for key, value in ((k, flatten(v, limit=limit)) for k, v in list(raw.items())[:4])
            if value
        )
    else:
        text = str(raw).strip()
    return text[:limit] or None


__all__ = [
    "ApiClientError",
    "ApiError",
    "ApiServerError",
    "ApiTimeoutError",
    "ErrorBody",
    "first_text",
    "flatten",
]
