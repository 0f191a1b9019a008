from __future__ import annotations

from typing import Any, List, Optional

from salesdesk.domain.entities import Department, EntityId
from salesdesk.domain.ports import DepartmentPort

from .api_errors import ApiClientError, ApiError
from .http_client import RestAdapterBase


class DepartmentRestAdapter(RestAdapterBase, DepartmentPort):
    """Department CRUD against ``{base_url}/departments``."""

    def find_all(self) -> List[Department]:
        ctx = "departments.find_all"
        resp = self.session.get(self._make_url("/departments"))
        self._ensure_ok(resp, ctx)
        data = self._json(resp, ctx)
        if not isinstance(data, list):
            raise ApiError(f"{ctx}: expected list response", context=ctx)
        return [Department.from_dict(item) for item in data if isinstance(item, dict)]

    def find_by_id(self, entity_id: EntityId) -> Optional[Department]:
        ctx = f"departments.find_by_id[{entity_id}]"
        resp = self.session.get(self._make_url(f"/departments/{entity_id}"))
        try:
            self._ensure_ok(resp, ctx)
        except ApiClientError as exc:
            if exc.status == 404:
                return None
            raise
        return self._department(self._json(resp, ctx), ctx)

    def insert(self, entity: Department) -> Department:
        ctx = "departments.insert"
        resp = self.session.post(
            self._make_url("/departments"), json_body={"name": entity.name}
        )
        self._ensure_ok(resp, ctx)
        return self._department(self._json(resp, ctx), ctx)

    def update(self, entity: Department) -> Department:
        if entity.id is None:
            raise ValueError("Cannot update a department without id")
        ctx = f"departments.update[{entity.id}]"
        resp = self.session.put(
            self._make_url(f"/departments/{entity.id}"), json_body=entity.to_dict()
        )
        self._ensure_ok(resp, ctx)
        data = self._json(resp, ctx)
        return self._department(data, ctx) if data is not None else entity

    def delete(self, entity: Department) -> None:
        if entity.id is None:
            raise ValueError("Cannot delete a department without id")
        ctx = f"departments.delete[{entity.id}]"
        resp = self.session.delete(self._make_url(f"/departments/{entity.id}"))
        self._ensure_ok(resp, ctx)

    @staticmethod
    def _department(data: Any, ctx: str) -> Department:
        if not isinstance(data, dict):
            raise ApiError(f"{ctx}: expected object response", context=ctx)
        return Department.from_dict(data)
