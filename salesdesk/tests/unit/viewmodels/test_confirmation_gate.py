from __future__ import annotations

from typing import List, Optional, Tuple

import pytest

from salesdesk.adapters.api_errors import ApiClientError
from salesdesk.domain.entities import Department
from salesdesk.domain.errors import PresentationError, ServiceError
from salesdesk.usecases.delete_entity import DeleteEntity
from salesdesk.usecases.list_entities import ListEntities
from salesdesk.viewmodels.confirmation_gate import CONFIRM_MESSAGE, STATE_IDLE, ConfirmationGate
from salesdesk.viewmodels.department_list_vm import DepartmentListVM


class _Departments:
    def __init__(self, *departments: Department) -> None:
        self.rows = list(departments)
        self.delete_calls: List[Department] = []
        self.fail_with: Optional[Exception] = None

    def find_all(self) -> List[Department]:
        return list(self.rows)

    def delete(self, entity: Department) -> None:
        self.delete_calls.append(entity)
        if self.fail_with is not None:
            raise self.fail_with
        self.rows = [d for d in self.rows if d.id != entity.id]


class _Prompt:
    def __init__(self, answer: Optional[bool]) -> None:
        self.answer = answer
        self.prompts: List[Tuple[str, str, str]] = []

    def __call__(self, title: str, header: str, message: str) -> Optional[bool]:
        self.prompts.append((title, header, message))
        return self.answer


def _setup(answer: Optional[bool]):
    port = _Departments(Department(id=1, name="Computers"), Department(id=3, name="Books"))
    list_vm = DepartmentListVM(list_uc=ListEntities(port), count_uc=lambda d: 0)
    list_vm.reload()
    prompt = _Prompt(answer)
    gate = ConfirmationGate(
        prompt,
        DeleteEntity(port),
        title="Delete department",
        on_deleted=list_vm.on_data_changed,
    )
    return port, list_vm, prompt, gate


@pytest.mark.parametrize("answer", [False, None])
def test_declined_confirmation_never_calls_delete(answer) -> None:
    port, list_vm, prompt, gate = _setup(answer)

    assert gate.delete(list_vm.entity_for("3")) is False

    assert port.delete_calls == []
    assert prompt.prompts == [("Delete department", "Id: 3 - Books", CONFIRM_MESSAGE)]
    assert [r.id for r in list_vm.rows()] == [3, 1]


def test_confirmed_delete_reloads_without_entity() -> None:
    port, list_vm, _prompt, gate = _setup(True)

    assert gate.delete(list_vm.entity_for("3")) is True

    assert port.delete_calls == [Department(id=3, name="Books")]
    assert [r.id for r in list_vm.rows()] == [1]
    assert gate.state == STATE_IDLE


def test_failed_delete_raises_and_leaves_list_unchanged() -> None:
    port, list_vm, _prompt, gate = _setup(True)
    port.fail_with = ApiClientError("ctx", status=409, hint="Department has sellers")
    before = list_vm.rows()

    with pytest.raises(ServiceError) as excinfo:
        gate.delete(list_vm.entity_for("1"))

    assert excinfo.value.code == "INTEGRITY_VIOLATION"
    assert list_vm.rows() == before
    assert gate.state == STATE_IDLE


def test_missing_delete_service_is_presentation_error() -> None:
    gate = ConfirmationGate(_Prompt(True))

    with pytest.raises(PresentationError):
        gate.delete(Department(id=1, name="A"))
