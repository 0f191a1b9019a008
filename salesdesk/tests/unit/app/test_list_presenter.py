from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, List, Optional, Tuple

from salesdesk.adapters.storage_local import LocalDepartmentStore, LocalSellerStore, StorageLocal
from salesdesk.domain.entities import Department, Seller
from salesdesk.domain.errors import ServiceError
from salesdesk.usecases.delete_entity import DeleteEntity
from salesdesk.usecases.count_sellers import CountSellers
from salesdesk.usecases.list_entities import ListEntities
from salesdesk.app.list_presenter import EntityListPresenter, link_tables, refresh_tables
from salesdesk.viewmodels.confirmation_gate import ConfirmationGate
from salesdesk.viewmodels.department_list_vm import DepartmentListVM
from salesdesk.viewmodels.dialog_workflow import DialogOutcome, DialogWorkflow
from salesdesk.viewmodels.seller_list_vm import SellerListVM
from salesdesk.viewmodels.row_actions import ACTION_DELETE, ACTION_EDIT


class _Departments:
    def __init__(self, *departments: Department) -> None:
        self.rows = list(departments)
        self.offline = False
        self.delete_error: Optional[Exception] = None

    def find_all(self) -> List[Department]:
        if self.offline:
            raise ConnectionError("offline")
        return list(self.rows)

    def delete(self, entity: Department) -> None:
        if self.delete_error is not None:
            raise self.delete_error
        self.rows = [d for d in self.rows if d.id != entity.id]


class _TableView:
    def __init__(self) -> None:
        self.renders: List[List[Tuple[str, Any]]] = []

    def set_rows(self, rows: List[Tuple[str, Any]]) -> None:
        self.renders.append(rows)


class _Alerts:
    def __init__(self, answer: Optional[bool] = True) -> None:
        self.answer = answer
        self.alerts: List[Tuple[str, str, str]] = []

    def show_alert(self, title: str, header: str, message: str) -> None:
        self.alerts.append((title, header, message))

    def confirm(self, title: str, header: str, message: str) -> Optional[bool]:
        return self.answer


class _Opener:
    def __init__(self, outcome: DialogOutcome) -> None:
        self.outcome = outcome
        self.opened: List[Department] = []

    def __call__(self, entity: Department, parent: Any) -> DialogOutcome:
        self.opened.append(entity)
        return self.outcome


def _presenter(port: _Departments, *, answer: Optional[bool] = True, outcome=None):
    view = _TableView()
    alerts = _Alerts(answer)
    opener = _Opener(outcome or DialogOutcome.cancelled())
    vm = DepartmentListVM(list_uc=ListEntities(port), count_uc=lambda d: 0)
    presenter = EntityListPresenter(
        vm=vm,
        view=view,
        workflow=DialogWorkflow(opener),
        gate=ConfirmationGate(alerts.confirm, DeleteEntity(port), title="Delete department"),
        alerts=alerts,
        new_entity=Department,
        noun="department",
    )
    return presenter, view, alerts, opener


def test_refresh_renders_keyed_rows() -> None:
    port = _Departments(Department(id=2, name="books"), Department(id=1, name="Appliances"))
    presenter, view, alerts, _opener = _presenter(port)

    assert presenter.refresh() is True

    assert [key for key, _row in view.renders[-1]] == ["1", "2"]
    assert alerts.alerts == []


def test_refresh_failure_shows_alert_and_keeps_rows() -> None:
    port = _Departments(Department(id=1, name="A"))
    presenter, view, alerts, _opener = _presenter(port)
    presenter.refresh()
    port.offline = True

    assert presenter.refresh() is False

    assert len(view.renders) == 1
    assert alerts.alerts == [("ServiceError", "Error loading departments", "offline")]


def test_edit_action_opens_form_with_current_entity() -> None:
    port = _Departments(Department(id=7, name="Electronics"))
    presenter, _view, _alerts, opener = _presenter(port)
    presenter.refresh()

    presenter.on_row_action(ACTION_EDIT, "7")

    assert opener.opened == [Department(id=7, name="Electronics")]


def test_submitted_form_refreshes_table_and_dependents() -> None:
    port = _Departments()
    dependents: List[int] = []
    presenter, view, _alerts, _opener = _presenter(
        port, outcome=DialogOutcome.saved(Department(id=1, name="Garden"))
    )
    presenter.also_refresh.append(lambda: dependents.append(1))

    presenter.on_new()

    assert len(view.renders) == 1
    assert dependents == [1]


def test_delete_integrity_violation_is_alerted() -> None:
    port = _Departments(Department(id=1, name="Computers"))
    port.delete_error = ServiceError("INTEGRITY_VIOLATION", "Department still has sellers")
    presenter, view, alerts, _opener = _presenter(port)
    presenter.refresh()

    presenter.on_row_action(ACTION_DELETE, "1")

    assert alerts.alerts == [("ServiceError", "Error deleting", "Department still has sellers")]
    assert len(view.renders) == 1
    assert port.rows == [Department(id=1, name="Computers")]


def test_confirmed_delete_refreshes_table() -> None:
    port = _Departments(Department(id=1, name="Computers"), Department(id=2, name="Books"))
    presenter, view, alerts, _opener = _presenter(port)
    presenter.refresh()

    presenter.on_row_action(ACTION_DELETE, "2")

    assert [key for key, _row in view.renders[-1]] == ["1"]
    assert alerts.alerts == []


def test_form_load_failure_is_alerted() -> None:
    port = _Departments()
    presenter, _view, alerts, _opener = _presenter(port)

    def broken(_entity, _parent):
        raise RuntimeError("no display")

    presenter.workflow = DialogWorkflow(broken)
    presenter.on_new()

    assert alerts.alerts == [("PresentationError", "Error loading form", "no display")]


def _linked_tables(tmp_path, rename_to: str):
    storage = StorageLocal(root_dir=str(tmp_path))
    departments, sellers = LocalDepartmentStore(storage), LocalSellerStore(storage)
    books = departments.insert(Department(name="Books"))
    sellers.insert(
        Seller(name="Ann", email="ann@x.io", birth_date=date(1990, 1, 2), base_salary=10.0, department=books)
    )

    def rename(entity: Department, _parent: Any) -> DialogOutcome:
        return DialogOutcome.saved(departments.update(replace(entity, name=rename_to)))

    alerts = _Alerts()
    department_presenter = EntityListPresenter(
        vm=DepartmentListVM(list_uc=ListEntities(departments), count_uc=CountSellers(sellers)),
        view=_TableView(),
        workflow=DialogWorkflow(rename),
        gate=ConfirmationGate(alerts.confirm, DeleteEntity(departments)),
        alerts=alerts,
        new_entity=Department,
        noun="department",
    )
    seller_presenter = EntityListPresenter(
        vm=SellerListVM(list_uc=ListEntities(sellers)),
        view=_TableView(),
        workflow=DialogWorkflow(_Opener(DialogOutcome.cancelled())),
        gate=ConfirmationGate(alerts.confirm, DeleteEntity(sellers)),
        alerts=alerts,
        new_entity=Seller,
        noun="seller",
    )
    link_tables(department_presenter, seller_presenter)
    return department_presenter, seller_presenter, alerts


def test_department_rename_reloads_seller_table(tmp_path) -> None:
    departments, sellers, alerts = _linked_tables(tmp_path, rename_to="Comics")
    assert refresh_tables(departments, sellers) is True
    assert [row.department for row in sellers.vm.rows()] == ["Books"]

    departments.on_row_action(ACTION_EDIT, "1")

    assert [row.name for row in departments.vm.rows()] == ["Comics"]
    assert [row.department for row in sellers.vm.rows()] == ["Comics"]
    assert alerts.alerts == []


def test_link_tables_does_not_refresh_self() -> None:
    first, *_ = _presenter(_Departments())
    second, *_ = _presenter(_Departments())

    link_tables(first, second)

    assert first.also_refresh == [second.refresh]
    assert second.also_refresh == [first.refresh]


def test_refresh_tables_loads_every_table_after_a_failure() -> None:
    broken = _Departments(Department(id=1, name="A"))
    broken.offline = True
    healthy = _Departments(Department(id=2, name="B"))
    first, _view, alerts, _opener = _presenter(broken)
    second, second_view, _alerts, _opener2 = _presenter(healthy)

    assert refresh_tables(first, second) is False

    assert [key for key, _row in second_view.renders[-1]] == ["2"]
    assert alerts.alerts == [("ServiceError", "Error loading departments", "offline")]
