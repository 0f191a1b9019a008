"""Settings state for the Settings dialog (no tkinter, no file I/O).

``App`` loads ``user_settings.json`` through ``StorageLocal`` and feeds it to
``apply_dict``. The dialog's Save fills a candidate VM from the form and
calls ``cmd_save``, which hands the validated payload to ``on_save``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Callable, Dict, Mapping, Optional

from ..utils.logging import env_requests_debug

BACKEND_LOCAL = "local"
BACKEND_REST = "rest"
BACKENDS: tuple[str, ...] = (BACKEND_LOCAL, BACKEND_REST)

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class SettingsConfig:
    """Which backend to talk to and how."""

    backend: str = BACKEND_LOCAL
    data_dir: str = "."
    api_base_url: str = ""
    request_timeout_s: int = 10


def coerce_backend(value: Any) -> str:
    text = str(value or "").strip().lower()
    if text not in BACKENDS:
        raise ValueError(f"backend must be one of: {', '.join(BACKENDS)}.")
    return text


def coerce_dir(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError("data_dir must be a string path.")
    return value.strip() or "."


def coerce_text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def coerce_timeout(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError("request_timeout_s must be an integer.")
    try:
        seconds = int(value.strip()) if isinstance(value, str) else int(value)
    except ValueError as exc:
        raise ValueError("request_timeout_s must be an integer.") from exc
    if seconds <= 0:
        raise ValueError("request_timeout_s must be a positive number of seconds.")
    return seconds


def coerce_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)


_CONFIG_COERCERS: Dict[str, Callable[[Any], Any]] = {
    "backend": coerce_backend,
    "data_dir": coerce_dir,
    "api_base_url": coerce_text,
    "request_timeout_s": coerce_timeout,
}


class SettingsVM:
    """Holds a ``SettingsConfig`` plus the API key and the debug toggle.

    Config fields are exposed as properties; assigning one coerces the value
    and swaps in a new frozen config.
    """

    def __init__(
        self,
        *,
        config: Optional[SettingsConfig] = None,
        on_save: Optional[Callable[[dict], None]] = None,
    ) -> None:
        self.config = config or SettingsConfig()
        self.on_save = on_save
        self.api_key = ""
        self.debug_logging = env_requests_debug()

    def _set(self, name: str, value: Any) -> None:
        self.config = replace(self.config, **{name: _CONFIG_COERCERS[name](value)})

    @property
    def backend(self) -> str:
        return self.config.backend

    @backend.setter
    def backend(self, value: str) -> None:
        self._set("backend", value)

    @property
    def data_dir(self) -> str:
        return self.config.data_dir

    @data_dir.setter
    def data_dir(self, value: str) -> None:
        self._set("data_dir", value)

    @property
    def api_base_url(self) -> str:
        return self.config.api_base_url

    @api_base_url.setter
    def api_base_url(self, value: str) -> None:
        self._set("api_base_url", value)

    @property
    def request_timeout_s(self) -> int:
        return self.config.request_timeout_s

    @request_timeout_s.setter
    def request_timeout_s(self, value: Any) -> None:
        self._set("request_timeout_s", value)

    @property
    def uses_rest(self) -> bool:
        return self.backend == BACKEND_REST

    def problem(self) -> Optional[str]:
        """Why these settings cannot be used, or ``None`` when they can."""
        if self.uses_rest and not self.api_base_url:
            return "REST backend requires a base URL."
        if self.request_timeout_s <= 0:
            return "request_timeout_s must be a positive number of seconds."
        return None

    def is_valid(self) -> bool:
        return self.problem() is None

    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply a flat settings mapping; nothing changes if any value is invalid.

        Raises:
            ValueError: Unknown keys or values that cannot be coerced.
        """
        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")
        unknown = set(payload) - set(_CONFIG_COERCERS) - {"api_key", "debug_logging"}
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(sorted(map(str, unknown)))}")

        updates = {
            name: coerce(payload[name])
            for name, coerce in _CONFIG_COERCERS.items()
            if name in payload
        }
        api_key = coerce_text(payload["api_key"]) if "api_key" in payload else self.api_key
        debug = coerce_flag(payload["debug_logging"]) if "debug_logging" in payload else self.debug_logging

        self.config = replace(self.config, **updates)
        self.api_key = api_key
        self.debug_logging = debug

    def to_dict(self) -> dict:
        snapshot = asdict(self.config)
        snapshot["api_key"] = self.api_key
        snapshot["debug_logging"] = bool(self.debug_logging)
        return snapshot

    def cmd_save(self) -> None:
        """Emit ``to_dict()`` through ``on_save``.

        Raises:
            ValueError: When the settings are not usable; nothing is emitted.
        """
        problem = self.problem()
        if problem:
            raise ValueError(problem)
        if self.on_save:
            self.on_save(self.to_dict())


__all__ = [
    "BACKENDS",
    "BACKEND_LOCAL",
    "BACKEND_REST",
    "SettingsConfig",
    "SettingsVM",
]
