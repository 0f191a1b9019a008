from __future__ import annotations

import json
from datetime import date

import pytest

from salesdesk.adapters.storage_local import (
    DATA_FILENAME,
    LocalDepartmentStore,
    LocalSellerStore,
    StorageLocal,
)
from salesdesk.domain.entities import Department, Seller
from salesdesk.domain.errors import StorageError


def _stores(tmp_path):
    storage = StorageLocal(root_dir=str(tmp_path))
    return storage, LocalDepartmentStore(storage), LocalSellerStore(storage)


def _seller(name: str, department: Department) -> Seller:
    return Seller(
        name=name,
        email=f"{name.lower()}@example.com",
        birth_date=date(1990, 5, 1),
        base_salary=1500.0,
        department=department,
    )


def test_empty_store_lists_nothing(tmp_path) -> None:
    _storage, departments, sellers = _stores(tmp_path)

    assert departments.find_all() == []
    assert sellers.find_all() == []


def test_insert_assigns_increasing_ids(tmp_path) -> None:
    storage, departments, _sellers = _stores(tmp_path)

    books = departments.insert(Department(name="Books"))
    tools = departments.insert(Department(name="Tools"))

    assert (books.id, tools.id) == (1, 2)
    on_disk = json.loads((tmp_path / DATA_FILENAME).read_text(encoding="utf-8"))
    assert on_disk["departments"] == [{"id": 1, "name": "Books"}, {"id": 2, "name": "Tools"}]
    assert storage.read_document()["next_ids"]["departments"] == 3


def test_ids_are_not_reused_after_delete(tmp_path) -> None:
    _storage, departments, _sellers = _stores(tmp_path)
    first = departments.insert(Department(name="A"))
    departments.delete(first)

    second = departments.insert(Department(name="B"))

    assert second.id == 2


def test_update_renames_department(tmp_path) -> None:
    _storage, departments, _sellers = _stores(tmp_path)
    dept = departments.insert(Department(name="Electronics"))

    departments.update(Department(id=dept.id, name="Electronics & Audio"))

    assert departments.find_by_id(dept.id) == Department(id=dept.id, name="Electronics & Audio")


def test_update_missing_department_raises(tmp_path) -> None:
    _storage, departments, _sellers = _stores(tmp_path)

    with pytest.raises(StorageError) as excinfo:
        departments.update(Department(id=42, name="Ghost"))

    assert excinfo.value.integrity is False


def test_delete_department_with_sellers_is_integrity_error(tmp_path) -> None:
    _storage, departments, sellers = _stores(tmp_path)
    dept = departments.insert(Department(name="Computers"))
    sellers.insert(_seller("Bob", dept))

    with pytest.raises(StorageError) as excinfo:
        departments.delete(dept)

    assert excinfo.value.integrity is True
    assert departments.find_all() == [dept]


def test_seller_queries_by_department(tmp_path) -> None:
    _storage, departments, sellers = _stores(tmp_path)
    computers = departments.insert(Department(name="Computers"))
    books = departments.insert(Department(name="Books"))
    sellers.insert(_seller("Bob", computers))
    sellers.insert(_seller("Ann", computers))
    sellers.insert(_seller("Eve", books))

    assert sellers.quantity_by_department(computers) == 2
    assert sellers.quantity_by_department(books) == 1
    assert sellers.quantity_by_department(Department(id=99, name="None")) == 0
    assert [s.name for s in sellers.find_by_department(computers)] == ["Bob", "Ann"]


def test_sellers_are_hydrated_with_current_department_name(tmp_path) -> None:
    _storage, departments, sellers = _stores(tmp_path)
    dept = departments.insert(Department(name="Computers"))
    saved = sellers.insert(_seller("Bob", dept))

    departments.update(Department(id=dept.id, name="PCs"))

    loaded = sellers.find_by_id(saved.id)
    assert loaded is not None
    assert loaded.department == Department(id=dept.id, name="PCs")
    assert loaded.birth_date == date(1990, 5, 1)


def test_seller_requires_existing_department(tmp_path) -> None:
    _storage, _departments, sellers = _stores(tmp_path)

    with pytest.raises(StorageError) as excinfo:
        sellers.insert(_seller("Bob", Department(id=3, name="Missing")))

    assert excinfo.value.integrity is True


def test_corrupt_data_file_raises_storage_error(tmp_path) -> None:
    (tmp_path / DATA_FILENAME).write_text("{not json", encoding="utf-8")
    _storage, departments, _sellers = _stores(tmp_path)

    with pytest.raises(StorageError):
        departments.find_all()


def test_user_settings_round_trip(tmp_path) -> None:
    storage = StorageLocal(root_dir=str(tmp_path))
    payload = {
        "backend": "rest",
        "data_dir": str(tmp_path),
        "api_base_url": "http://localhost:8080",
        "api_key": "secret",
        "request_timeout_s": 15,
        "debug_logging": True,
    }

    storage.save_user_settings(payload)

    assert storage.load_user_settings() == payload


def test_load_user_settings_missing_or_corrupt_returns_none(tmp_path) -> None:
    storage = StorageLocal(root_dir=str(tmp_path))

    assert storage.load_user_settings() is None
    (tmp_path / "user_settings.json").write_text("[broken", encoding="utf-8")
    assert storage.load_user_settings() is None
