"""Local filesystem persistence (JSON) for records and user settings.

``StorageLocal`` owns the files under ``root_dir``:

* ``salesdesk_data.json``: departments, sellers and id counters
* ``user_settings.json``: settings written by ``SettingsVM.to_dict()``

``LocalDepartmentStore`` and ``LocalSellerStore`` implement the entity ports
on top of it. Every call reads the file and every mutation rewrites it, so
two stores sharing one ``StorageLocal`` always see each other's writes.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional

from salesdesk.domain.entities import Department, EntityId, Seller
from salesdesk.domain.errors import StorageError
from salesdesk.domain.ports import DepartmentPort, SellerPort, SettingsStoragePort

DATA_FILENAME = "salesdesk_data.json"
SETTINGS_FILENAME = "user_settings.json"


class StorageLocal(SettingsStoragePort):
    """JSON document store rooted at ``root_dir``."""

    def __init__(self, root_dir: str = ".") -> None:
        self.root = root_dir
        self._log = logging.getLogger(__name__)

    @property
    def data_path(self) -> str:
        return os.path.join(self.root, DATA_FILENAME)

    @property
    def settings_path(self) -> str:
        return os.path.join(self.root, SETTINGS_FILENAME)

    # ---- Record document ----
    def read_document(self) -> Dict[str, Any]:
        path = self.data_path
        if not os.path.exists(path):
            return _empty_document()
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Could not read {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageError(f"Unexpected content in {path}")
        document = _empty_document()
        for key in ("departments", "sellers"):
            rows = data.get(key)
            if isinstance(rows, list):
                document[key] = [row for row in rows if isinstance(row, dict)]
        counters = data.get("next_ids")
        if isinstance(counters, dict):
            document["next_ids"].update(
                {k: int(v) for k, v in counters.items() if isinstance(v, int)}
            )
        return document

    def write_document(self, document: Dict[str, Any]) -> None:
        path = self.data_path
        tmp_path = f"{path}.tmp"
        try:
            os.makedirs(self.root, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(document, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
        except OSError as exc:
            raise StorageError(f"Could not write {path}: {exc}") from exc

    def allocate_id(self, document: Dict[str, Any], kind: str) -> EntityId:
        rows = document.get(kind) or []
        highest = max((int(row.get("id") or 0) for row in rows), default=0)
        next_id = max(int(document["next_ids"].get(kind, 1)), highest + 1)
        document["next_ids"][kind] = next_id + 1
        return next_id

    # ---- User settings (JSON) ----
    def save_user_settings(self, payload: dict) -> None:
        os.makedirs(self.root, exist_ok=True)
        with open(self.settings_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)

    def load_user_settings(self) -> Optional[dict]:
        path = self.settings_path
        if not os.path.exists(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError):
            self._log.warning("Ignoring unreadable settings file %s", path)
            return None
        return data if isinstance(data, dict) else None


def _empty_document() -> Dict[str, Any]:
    return {
        "departments": [],
        "sellers": [],
        "next_ids": {"departments": 1, "sellers": 1},
    }


class LocalDepartmentStore(DepartmentPort):
    """Department port backed by :class:`StorageLocal`."""

    def __init__(self, storage: StorageLocal) -> None:
        self.storage = storage

    def find_all(self) -> List[Department]:
        document = self.storage.read_document()
        return [Department.from_dict(row) for row in document["departments"]]

    def find_by_id(self, entity_id: EntityId) -> Optional[Department]:
        return next((d for d in self.find_all() if d.id == entity_id), None)

    def insert(self, entity: Department) -> Department:
        document = self.storage.read_document()
        saved = entity.with_id(self.storage.allocate_id(document, "departments"))
        document["departments"].append(saved.to_dict())
        self.storage.write_document(document)
        return saved

    def update(self, entity: Department) -> Department:
        document = self.storage.read_document()
        rows = document["departments"]
        index = _index_of(rows, entity.id)
        if index is None:
            raise StorageError(f"Department {entity.id} does not exist")
        rows[index] = entity.to_dict()
        self.storage.write_document(document)
        return entity

    def delete(self, entity: Department) -> None:
        document = self.storage.read_document()
        rows = document["departments"]
        index = _index_of(rows, entity.id)
        if index is None:
            raise StorageError(f"Department {entity.id} does not exist")
        if any(row.get("department_id") == entity.id for row in document["sellers"]):
            raise StorageError(
                f"Department '{entity.name}' still has sellers and cannot be deleted",
                integrity=True,
            )
        del rows[index]
        self.storage.write_document(document)


class LocalSellerStore(SellerPort):
    """Seller port backed by :class:`StorageLocal`.

    Rows store ``department_id``; reads resolve it against the department rows
    of the same document.
    """

    def __init__(self, storage: StorageLocal) -> None:
        self.storage = storage

    def find_all(self) -> List[Seller]:
        document = self.storage.read_document()
        return self._hydrate(document, document["sellers"])

    def find_by_id(self, entity_id: EntityId) -> Optional[Seller]:
        return next((s for s in self.find_all() if s.id == entity_id), None)

    def find_by_department(self, department: Department) -> List[Seller]:
        document = self.storage.read_document()
        rows = [r for r in document["sellers"] if r.get("department_id") == department.id]
        return self._hydrate(document, rows)

    def quantity_by_department(self, department: Department) -> int:
        document = self.storage.read_document()
        return sum(1 for r in document["sellers"] if r.get("department_id") == department.id)

    def insert(self, entity: Seller) -> Seller:
        document = self.storage.read_document()
        self._check_department(document, entity)
        saved = entity.with_id(self.storage.allocate_id(document, "sellers"))
        document["sellers"].append(saved.to_dict())
        self.storage.write_document(document)
        return saved

    def update(self, entity: Seller) -> Seller:
        document = self.storage.read_document()
        self._check_department(document, entity)
        rows = document["sellers"]
        index = _index_of(rows, entity.id)
        if index is None:
            raise StorageError(f"Seller {entity.id} does not exist")
        rows[index] = entity.to_dict()
        self.storage.write_document(document)
        return entity

    def delete(self, entity: Seller) -> None:
        document = self.storage.read_document()
        rows = document["sellers"]
        index = _index_of(rows, entity.id)
        if index is None:
            raise StorageError(f"Seller {entity.id} does not exist")
        del rows[index]
        self.storage.write_document(document)

    # ------------------------------------------------------------------
    @staticmethod
    def _check_department(document: Dict[str, Any], entity: Seller) -> None:
        dept = entity.department
        if dept is None or _index_of(document["departments"], dept.id) is None:
            raise StorageError("Seller must reference an existing department", integrity=True)

    @staticmethod
    def _hydrate(document: Dict[str, Any], rows: List[Dict[str, Any]]) -> List[Seller]:
        departments = {
            row.get("id"): Department.from_dict(row) for row in document["departments"]
        }
        return [
            Seller.from_dict(row, department=departments.get(row.get("department_id")))
            for row in rows
        ]


def _index_of(rows: List[Dict[str, Any]], entity_id: Optional[EntityId]) -> Optional[int]:
    if entity_id is None:
        return None
    for index, row in enumerate(rows):
        if row.get("id") == entity_id:
            return index
    return None


__all__ = ["LocalDepartmentStore", "LocalSellerStore", "StorageLocal"]
