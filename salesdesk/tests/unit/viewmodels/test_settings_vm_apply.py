from __future__ import annotations

from typing import List

import pytest

from salesdesk.viewmodels.settings_vm import (
    BACKEND_LOCAL,
    BACKEND_REST,
    SettingsVM,
)


def test_defaults_use_local_backend(monkeypatch) -> None:
    monkeypatch.delenv("SALESDESK_LOG_LEVEL", raising=False)
    monkeypatch.delenv("SALESDESK_DEBUG", raising=False)

    payload = SettingsVM().to_dict()

    assert payload == {
        "backend": BACKEND_LOCAL,
        "data_dir": ".",
        "api_base_url": "",
        "request_timeout_s": 10,
        "api_key": "",
        "debug_logging": False,
    }


def test_apply_dict_coerces_values() -> None:
    vm = SettingsVM()

    vm.apply_dict(
        {
            "backend": " REST ",
            "api_base_url": " http://localhost:8080 ",
            "request_timeout_s": "15",
            "debug_logging": "yes",
            "data_dir": "  ",
        }
    )

    assert vm.backend == BACKEND_REST
    assert vm.uses_rest is True
    assert vm.api_base_url == "http://localhost:8080"
    assert vm.request_timeout_s == 15
    assert vm.debug_logging is True
    assert vm.data_dir == "."


def test_apply_dict_rejects_unknown_keys() -> None:
    vm = SettingsVM()

    with pytest.raises(ValueError):
        vm.apply_dict({"box_urls": {}})


def test_apply_dict_rejects_bad_backend_and_timeout() -> None:
    vm = SettingsVM()

    with pytest.raises(ValueError):
        vm.apply_dict({"backend": "sqlite"})
    with pytest.raises(ValueError):
        vm.apply_dict({"request_timeout_s": "-3"})


def test_zero_timeout_is_rejected_and_previous_value_kept() -> None:
    vm = SettingsVM()

    with pytest.raises(ValueError):
        vm.apply_dict({"request_timeout_s": 0, "backend": "rest"})

    assert vm.request_timeout_s == 10
    assert vm.backend == BACKEND_LOCAL


def test_rest_backend_needs_base_url() -> None:
    vm = SettingsVM()
    vm.backend = BACKEND_REST

    assert vm.is_valid() is False
    vm.api_base_url = "http://api.local"
    assert vm.is_valid() is True


def test_cmd_save_emits_payload() -> None:
    saved: List[dict] = []
    vm = SettingsVM(on_save=saved.append)
    vm.api_key = "secret"

    vm.cmd_save()

    assert saved[0]["api_key"] == "secret"
    vm.backend = BACKEND_REST
    with pytest.raises(ValueError, match="base URL"):
        vm.cmd_save()
    assert len(saved) == 1
