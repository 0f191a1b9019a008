"""Seller table projection."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from salesdesk.domain.entities import Seller

from .list_vm import EntityListVM


@dataclass(frozen=True)
class SellerRow:
    """Display row for the sellers table; every field is display-ready text."""
    id: int
    name: str
    email: str
    birth_date: str
    base_salary: str
    department: str


class SellerListVM(EntityListVM[Seller, SellerRow]):
    """Sellers sorted by name."""

    def to_row(self, entity: Seller) -> SellerRow:
        return SellerRow(
            id=int(entity.id or 0),
            name=entity.name,
            email=entity.email,
            birth_date=format_date(entity.birth_date),
            base_salary=format_salary(entity.base_salary),
            department=entity.department.name if entity.department else "-",
        )


def format_date(value: Optional[date]) -> str:
    return value.strftime("%d/%m/%Y") if value else ""


def format_salary(value: float) -> str:
    return f"{value:,.2f}"


__all__ = ["SellerListVM", "SellerRow", "format_date", "format_salary"]
