from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, List, Optional

from salesdesk.domain.entities import Department, EntityId, Seller
from salesdesk.domain.ports import SellerPort

from .api_errors import ApiClientError, ApiError
from .http_client import RestAdapterBase


class SellerRestAdapter(RestAdapterBase, SellerPort):
    """Seller CRUD against ``{base_url}/sellers``.

    Seller payloads carry either a nested ``department`` object or a flat
    ``department_id``; both shapes are accepted on read. Flat ids are
    resolved against ``GET /departments`` so rows always show a name.
    """

    def find_all(self) -> List[Seller]:
        return self._list("/sellers", None, "sellers.find_all")

    def find_by_department(self, department: Department) -> List[Seller]:
        return self._list(
            "/sellers",
            {"department_id": department.id},
            f"sellers.find_by_department[{department.id}]",
        )

    def quantity_by_department(self, department: Department) -> int:
        ctx = f"sellers.quantity_by_department[{department.id}]"
        resp = self.session.get(self._make_url(f"/departments/{department.id}/sellers/count"))
        self._ensure_ok(resp, ctx)
        data = self._json(resp, ctx)
        if isinstance(data, dict):
            data = data.get("count")
        try:
            return int(data)
        except (TypeError, ValueError) as exc:
            raise ApiError(f"{ctx}: expected integer count", context=ctx) from exc

    def find_by_id(self, entity_id: EntityId) -> Optional[Seller]:
        ctx = f"sellers.find_by_id[{entity_id}]"
        resp = self.session.get(self._make_url(f"/sellers/{entity_id}"))
        try:
            self._ensure_ok(resp, ctx)
        except ApiClientError as exc:
            if exc.status == 404:
                return None
            raise
        return self._named([self._seller(self._json(resp, ctx), ctx)], ctx)[0]

    def insert(self, entity: Seller) -> Seller:
        ctx = "sellers.insert"
        body = entity.to_dict()
        body.pop("id", None)
        resp = self.session.post(self._make_url("/sellers"), json_body=body)
        self._ensure_ok(resp, ctx)
        return self._seller(self._json(resp, ctx), ctx, fallback=entity)

    def update(self, entity: Seller) -> Seller:
        if entity.id is None:
            raise ValueError("Cannot update a seller without id")
        ctx = f"sellers.update[{entity.id}]"
        resp = self.session.put(self._make_url(f"/sellers/{entity.id}"), json_body=entity.to_dict())
        self._ensure_ok(resp, ctx)
        data = self._json(resp, ctx)
        return self._seller(data, ctx, fallback=entity) if data is not None else entity

    def delete(self, entity: Seller) -> None:
        if entity.id is None:
            raise ValueError("Cannot delete a seller without id")
        ctx = f"sellers.delete[{entity.id}]"
        resp = self.session.delete(self._make_url(f"/sellers/{entity.id}"))
        self._ensure_ok(resp, ctx)

    # ------------------------------------------------------------------
    def _list(self, path: str, params: Optional[Dict[str, Any]], ctx: str) -> List[Seller]:
        resp = self.session.get(self._make_url(path), params=params)
        self._ensure_ok(resp, ctx)
        data = self._json(resp, ctx)
        if not isinstance(data, list):
            raise ApiError(f"{ctx}: expected list response", context=ctx)
        return self._named([self._seller(item, ctx) for item in data if isinstance(item, dict)], ctx)

    def _named(self, sellers: List[Seller], ctx: str) -> List[Seller]:
        """Fill in department names for sellers that only carried an id."""
        if not any(s.department is not None and not s.department.name for s in sellers):
            return sellers
        resp = self.session.get(self._make_url("/departments"))
        self._ensure_ok(resp, ctx)
        data = self._json(resp, ctx)
        rows = data if isinstance(data, list) else []
        known = {
            dept.id: dept
            for dept in (Department.from_dict(item) for item in rows if isinstance(item, dict))
        }
        return [
            replace(s, department=known.get(s.department.id, s.department))
            if s.department is not None and not s.department.name
            else s
            for s in sellers
        ]

    @staticmethod
    def _seller(data: Any, ctx: str, fallback: Optional[Seller] = None) -> Seller:
        if not isinstance(data, dict):
            raise ApiError(f"{ctx}: expected object response", context=ctx)
        department = None
        if not isinstance(data.get("department"), dict):
            dept_id = data.get("department_id")
            if fallback is not None and fallback.department is not None:
                department = fallback.department
            elif dept_id is not None:
                department = Department(id=int(dept_id))
        return Seller.from_dict(data, department=department)
