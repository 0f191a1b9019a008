"""Form field parsing for department and seller records.

Form view models hold raw strings; the helpers here turn them into domain
records or raise ``ValidationError`` with one message per offending field.
"""

from __future__ import annotations

import math
import re
from dataclasses import replace
from datetime import date, datetime
from typing import Dict, Mapping, Optional, Sequence

from .entities import Department, Seller
from .errors import ValidationError

NAME_MAX_LENGTH = 60
EMAIL_MAX_LENGTH = 120
FIELD_REQUIRED = "Field can't be empty"

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+$")
_DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y")


def _text(fields: Mapping[str, object], key: str) -> str:
    value = fields.get(key)
    return str(value).strip() if value is not None else ""


def parse_date(raw: str) -> date:
    """Parse ``YYYY-MM-DD`` or ``DD/MM/YYYY``."""
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(raw, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Invalid date '{raw}'")


def parse_salary(raw: str) -> float:
    # accept decimal comma as typed in pt-BR locales
    value = float(raw.replace(",", "."))
    if not math.isfinite(value):
        raise ValueError(f"Salary must be a finite number, got '{raw}'")
    if value < 0:
        raise ValueError("Salary must not be negative")
    return value


def build_department(fields: Mapping[str, object], base: Department) -> Department:
    """Return ``base`` updated with the form fields.

    Raises:
        ValidationError: When the name is empty or too long.
    """
    errors: Dict[str, str] = {}
    name = _text(fields, "name")
    if not name:
        errors["name"] = FIELD_REQUIRED
    elif len(name) > NAME_MAX_LENGTH:
        errors["name"] = f"At most {NAME_MAX_LENGTH} characters"
    if errors:
        raise ValidationError(errors)
    return replace(base, name=name)


def build_seller(
    fields: Mapping[str, object],
    base: Seller,
    departments: Sequence[Department],
) -> Seller:
    """Return ``base`` updated with the form fields.

    ``fields["department_id"]`` must match one of ``departments``.

    Raises:
        ValidationError: With every failing field collected at once.
    """
    errors: Dict[str, str] = {}

    name = _text(fields, "name")
    if not name:
        errors["name"] = FIELD_REQUIRED
    elif len(name) > NAME_MAX_LENGTH:
        errors["name"] = f"At most {NAME_MAX_LENGTH} characters"

    email = _text(fields, "email")
    if not email:
        errors["email"] = FIELD_REQUIRED
    elif len(email) > EMAIL_MAX_LENGTH or not _EMAIL_PATTERN.match(email):
        errors["email"] = "Invalid e-mail"

    birth_date: Optional[date] = None
    raw_birth = _text(fields, "birth_date")
    if not raw_birth:
        errors["birth_date"] = FIELD_REQUIRED
    else:
        try:
            birth_date = parse_date(raw_birth)
        except ValueError:
            errors["birth_date"] = "Use YYYY-MM-DD or DD/MM/YYYY"

    base_salary = 0.0
    raw_salary = _text(fields, "base_salary")
    if not raw_salary:
        errors["base_salary"] = FIELD_REQUIRED
    else:
        try:
            base_salary = parse_salary(raw_salary)
        except ValueError:
            errors["base_salary"] = "Must be a non-negative number"

    department: Optional[Department] = None
    raw_department = _text(fields, "department_id")
    if not raw_department:
        errors["department_id"] = FIELD_REQUIRED
    else:
        department = next(
            (d for d in departments if str(d.id) == raw_department), None
        )
        if department is None:
            errors["department_id"] = "Unknown department"

    if errors:
        raise ValidationError(errors)
    return replace(
        base,
        name=name,
        email=email,
        birth_date=birth_date,
        base_salary=base_salary,
        department=department,
    )


__all__ = [
    "FIELD_REQUIRED",
    "NAME_MAX_LENGTH",
    "build_department",
    "build_seller",
    "parse_date",
    "parse_salary",
]
