from __future__ import annotations

from datetime import date
from typing import List

import pytest

from salesdesk.domain.entities import Department, Seller
from salesdesk.domain.errors import PresentationError, ServiceError
from salesdesk.domain.validation import FIELD_REQUIRED
from salesdesk.viewmodels.department_form_vm import DepartmentFormVM
from salesdesk.viewmodels.seller_form_vm import SellerFormVM


class _SaveRecorder:
    def __init__(self, fail: bool = False) -> None:
        self.saved: List[object] = []
        self.fail = fail

    def __call__(self, entity):
        if self.fail:
            raise ServiceError("SAVE_FAILED", "offline")
        self.saved.append(entity)
        return entity if entity.id is not None else entity.with_id(50)


def test_department_form_loads_fields() -> None:
    vm = DepartmentFormVM(Department(id=7, name="Electronics"))

    vm.update_form_data()

    assert vm.fields == {"id": "7", "name": "Electronics"}
    assert vm.is_new is False


def test_department_form_validation_error_sets_field_error() -> None:
    save = _SaveRecorder()
    vm = DepartmentFormVM(Department(), save)
    vm.update_form_data()

    assert vm.submit() is None

    assert vm.error_for("name") == FIELD_REQUIRED
    assert save.saved == []
    assert vm.closed is False
    vm.set_field("name", "Garden")
    assert vm.error_for("name") == ""


def test_department_form_submit_saves_and_notifies_once() -> None:
    save = _SaveRecorder()
    notified: List[int] = []
    vm = DepartmentFormVM(Department(), save)
    vm.subscribe_data_change_listener(lambda: notified.append(1))
    vm.update_form_data()
    vm.set_field("name", "Garden")

    saved = vm.submit()
    again = vm.submit()

    assert saved == Department(id=50, name="Garden")
    assert again == saved
    assert len(save.saved) == 1
    assert notified == [1]
    assert vm.outcome.submitted is True


def test_save_failure_keeps_form_open() -> None:
    vm = DepartmentFormVM(Department(), _SaveRecorder(fail=True))
    vm.update_form_data()
    vm.set_field("name", "Garden")

    with pytest.raises(ServiceError):
        vm.submit()

    assert vm.closed is False


def test_submit_without_save_service() -> None:
    vm = DepartmentFormVM(Department())
    vm.update_form_data()
    vm.set_field("name", "Garden")

    with pytest.raises(PresentationError):
        vm.submit()


def test_cancel_is_idempotent_and_final() -> None:
    vm = DepartmentFormVM(Department(), _SaveRecorder())

    vm.cancel()
    vm.cancel()

    assert vm.closed is True
    assert vm.outcome.submitted is False
    assert vm.submit() is None


def test_unknown_field_is_rejected() -> None:
    vm = DepartmentFormVM(Department())

    with pytest.raises(KeyError):
        vm.set_field("budget", "10")


def test_seller_form_offers_sorted_departments() -> None:
    departments = [Department(id=2, name="books"), Department(id=1, name="Appliances")]
    seller = Seller(
        id=4,
        name="Bob",
        email="bob@gmail.com",
        birth_date=date(1998, 4, 21),
        base_salary=1000.0,
        department=departments[0],
    )
    vm = SellerFormVM(seller, departments_uc=lambda: departments)

    vm.update_form_data()

    assert vm.department_options() == [("1", "Appliances"), ("2", "books")]
    assert vm.fields["birth_date"] == "21/04/1998"
    assert vm.fields["base_salary"] == "1000.00"
    assert vm.fields["department_id"] == "2"


def test_seller_form_submit_builds_seller() -> None:
    departments = [Department(id=1, name="Computers")]
    save = _SaveRecorder()
    vm = SellerFormVM(Seller(), save, departments_uc=lambda: departments)
    vm.update_form_data()
    for name, value in {
        "name": "Alex Grey",
        "email": "alex@gmail.com",
        "birth_date": "1987-01-20",
        "base_salary": "2500",
        "department_id": "1",
    }.items():
        vm.set_field(name, value)

    saved = vm.submit()

    assert saved is not None
    assert saved.id == 50
    assert saved.department == departments[0]
    assert saved.base_salary == 2500.0


def test_seller_form_department_load_failure_propagates() -> None:
    def offline():
        raise ServiceError("LOAD_FAILED", "offline")

    vm = SellerFormVM(Seller(), departments_uc=offline)

    with pytest.raises(ServiceError):
        vm.update_form_data()
