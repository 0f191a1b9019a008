from __future__ import annotations

from salesdesk.adapters.api_errors import ApiClientError, ApiError, ApiServerError, ApiTimeoutError
from salesdesk.domain.errors import ServiceError, StorageError, ValidationError
from salesdesk.usecases.error_mapping import map_service_error


def test_integrity_storage_error_maps_to_integrity_violation() -> None:
    err = map_service_error(StorageError("still has sellers", integrity=True), default_code="DELETE_FAILED")

    assert isinstance(err, ServiceError)
    assert err.code == "INTEGRITY_VIOLATION"
    assert err.message == "still has sellers"


def test_plain_storage_error_maps_to_storage_failed() -> None:
    err = map_service_error(StorageError("disk full"), default_code="SAVE_FAILED")

    assert err.code == "STORAGE_FAILED"


def test_conflict_uses_hint() -> None:
    err = map_service_error(
        ApiClientError("ctx", status=409, hint="Department has sellers"),
        default_code="DELETE_FAILED",
    )

    assert err.code == "INTEGRITY_VIOLATION"
    assert err.message == "Record is still referenced: Department has sellers"


def test_client_error_codes() -> None:
    assert map_service_error(ApiClientError("x", status=404), default_code="D").code == "NOT_FOUND"
    assert map_service_error(ApiClientError("x", status=403), default_code="D").code == "AUTH_FAILED"
    assert map_service_error(ApiClientError("x", status=422), default_code="D").code == "INVALID_DATA"
    other = map_service_error(ApiClientError("x", status=418), default_code="D")
    assert other.code == "REQUEST_FAILED"
    assert other.message == "Request failed (HTTP 418)."


def test_transport_errors() -> None:
    timeout = map_service_error(ApiTimeoutError("slow"), default_code="LOAD_FAILED")
    server = map_service_error(ApiServerError("x", status=503), default_code="LOAD_FAILED")
    generic = map_service_error(ApiError("bad json"), default_code="LOAD_FAILED")

    assert (timeout.code, timeout.message) == ("REQUEST_TIMEOUT", "Request timed out. Check connection.")
    assert server.code == "SERVER_ERROR"
    assert (generic.code, generic.message) == ("API_ERROR", "bad json")


def test_use_case_errors_pass_through() -> None:
    original = ValidationError({"name": "Field can't be empty"})

    assert map_service_error(original, default_code="SAVE_FAILED") is original


def test_unknown_errors_use_default_code() -> None:
    err = map_service_error(RuntimeError(""), default_code="COUNT_FAILED")

    assert err.code == "COUNT_FAILED"
    assert err.message == "Unexpected error."
