from __future__ import annotations

from salesdesk.adapters.department_rest import DepartmentRestAdapter
from salesdesk.adapters.seller_rest import SellerRestAdapter
from salesdesk.adapters.storage_local import LocalDepartmentStore, LocalSellerStore
from salesdesk.app.controller import AppController
from salesdesk.domain.entities import Department
from salesdesk.viewmodels.settings_vm import BACKEND_REST, SettingsVM


def test_local_backend_wires_usecases(tmp_path) -> None:
    settings = SettingsVM()
    settings.data_dir = str(tmp_path)
    controller = AppController(settings)

    assert controller.ensure_ready() is True

    assert isinstance(controller.department_port, LocalDepartmentStore)
    assert isinstance(controller.seller_port, LocalSellerStore)
    saved = controller.uc_save_department(Department(name="Books"))
    assert controller.uc_list_departments() == [saved]
    assert controller.uc_count_sellers(saved) == 0
    assert controller.uc_delete_seller is not None


def test_rest_backend_without_url_is_not_ready() -> None:
    settings = SettingsVM()
    settings.backend = BACKEND_REST
    controller = AppController(settings)

    assert controller.ensure_ready() is False
    assert controller.uc_list_departments is None


def test_rest_backend_builds_rest_adapters() -> None:
    settings = SettingsVM()
    settings.apply_dict(
        {"backend": "rest", "api_base_url": "http://api.local/", "api_key": "k", "request_timeout_s": 5}
    )
    controller = AppController(settings)

    assert controller.ensure_ready() is True

    dept_port = controller.department_port
    assert isinstance(dept_port, DepartmentRestAdapter)
    assert isinstance(controller.seller_port, SellerRestAdapter)
    assert dept_port.base_url == "http://api.local"
    assert dept_port.cfg.request_timeout_s == 5
    assert dept_port.session.api_key == "k"


def test_reset_rebuilds_for_new_data_dir(tmp_path) -> None:
    settings = SettingsVM()
    settings.data_dir = str(tmp_path / "one")
    controller = AppController(settings)
    controller.ensure_ready()
    first_port = controller.department_port

    settings.data_dir = str(tmp_path / "two")
    controller.reset()
    assert controller.uc_save_department is None
    controller.ensure_ready()

    assert controller.department_port is not first_port
    assert controller.storage.root == str(tmp_path / "two")
