from __future__ import annotations
from dataclasses import dataclass
from ..domain.entities import Department
from ..domain.ports import SellerPort
from .error_mapping import map_service_error


@dataclass
class CountSellers:
    """Seller count for one department (one query per call, uncached)."""

    seller_port: SellerPort

    def __call__(self, department: Department) -> int:
        if department.id is None:
            return 0
        try:
            return int(self.seller_port.quantity_by_department(department))
        except Exception as e:
            raise map_service_error(e, default_code="COUNT_FAILED")
