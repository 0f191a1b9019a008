# salesdesk/app/main.py
from __future__ import annotations
import logging
import os
from tkinter import filedialog
from typing import Optional

# ---- Views (UI-only) ----
from .views.main_window import MainWindowView
from .views.entity_table_view import EntityTableView
from .views.entity_form_dialog import DepartmentFormDialog, SellerFormDialog
from .views.settings_dialog import SettingsDialog

# ---- ViewModels ----
from ..viewmodels.department_list_vm import DepartmentListVM
from ..viewmodels.seller_list_vm import SellerListVM
from ..viewmodels.department_form_vm import DepartmentFormVM
from ..viewmodels.seller_form_vm import SellerFormVM
from ..viewmodels.dialog_workflow import DialogWorkflow
from ..viewmodels.confirmation_gate import ConfirmationGate
from ..viewmodels.settings_vm import SettingsVM

# ---- Wiring ----
from ..adapters.storage_local import StorageLocal
from ..domain.entities import Department, Seller
from ..domain.ports import UseCaseError
from ..utils import logging as logging_utils
from .alerts import TkAlerts
from .controller import AppController
from .form_openers import TkFormOpener
from .list_presenter import EntityListPresenter, link_tables, refresh_tables

DATA_DIR_ENV = "SALESDESK_DATA_DIR"


class App:
    """Bootstrap: wire Views <-> ViewModels, persistence adapters, and alerts."""

    def __init__(self, data_dir: Optional[str] = None) -> None:
        logging_utils.configure_root()
        self._log = logging.getLogger(__name__)

        # ---- Settings (persisted next to the data) ----
        root_dir = data_dir or os.getenv(DATA_DIR_ENV) or "."
        self.settings_storage = StorageLocal(root_dir)
        self.settings_vm = SettingsVM()
        self.settings_vm.data_dir = root_dir
        self._load_settings()
        if data_dir or os.getenv(DATA_DIR_ENV):
            self.settings_vm.data_dir = root_dir
        logging_utils.apply_gui_preferences(self.settings_vm.debug_logging)

        self.controller = AppController(self.settings_vm)

        # ---- Main window ----
        self.win = MainWindowView(
            on_show_departments=self._show_departments,
            on_show_sellers=self._show_sellers,
            on_reload=self.refresh_all,
            on_open_settings=self._on_open_settings,
        )
        self.alerts = TkAlerts(self.win)

        # ---- ViewModels ----
        self.department_vm = DepartmentListVM()
        self.seller_vm = SellerListVM()

        # ---- Table views ----
        self.department_view = EntityTableView(
            self.win.notebook,
            title="Departments",
            columns=(
                ("id", "Id", 60, "e"),
                ("name", "Name", 260, "w"),
                ("seller_count", "Sellers", 80, "e"),
            ),
            on_new=lambda: self.department_presenter.on_new(),
            on_row_action=lambda action, key, ev: self.department_presenter.on_row_action(action, key, ev),
            extra_buttons=(("Sellers", self._show_sellers),),
        )
        self.seller_view = EntityTableView(
            self.win.notebook,
            title="Sellers",
            columns=(
                ("id", "Id", 60, "e"),
                ("name", "Name", 200, "w"),
                ("email", "Email", 200, "w"),
                ("birth_date", "Birth date", 100, "center"),
                ("base_salary", "Base salary", 100, "e"),
                ("department", "Department", 160, "w"),
            ),
            on_new=lambda: self.seller_presenter.on_new(),
            on_row_action=lambda action, key, ev: self.seller_presenter.on_row_action(action, key, ev),
        )
        self.win.mount_tab(self.department_view, "Departments")
        self.win.mount_tab(self.seller_view, "Sellers")

        # ---- Presenters ----
        self.department_presenter: EntityListPresenter[Department] = EntityListPresenter(
            vm=self.department_vm,
            view=self.department_view,
            workflow=DialogWorkflow(
                TkFormOpener(
                    DepartmentFormDialog,
                    lambda d: DepartmentFormVM(d, self.controller.uc_save_department),
                    on_error=self._on_save_error,
                )
            ),
            gate=ConfirmationGate(self.alerts.confirm, title="Delete department"),
            alerts=self.alerts,
            new_entity=Department,
            parent=self.win,
            noun="department",
            toast=self.win.show_toast,
        )
        self.seller_presenter: EntityListPresenter[Seller] = EntityListPresenter(
            vm=self.seller_vm,
            view=self.seller_view,
            workflow=DialogWorkflow(
                TkFormOpener(
                    SellerFormDialog,
                    lambda s: SellerFormVM(
                        s,
                        self.controller.uc_save_seller,
                        departments_uc=self.controller.uc_list_departments,
                    ),
                    on_error=self._on_save_error,
                )
            ),
            gate=ConfirmationGate(self.alerts.confirm, title="Delete seller"),
            alerts=self.alerts,
            new_entity=Seller,
            parent=self.win,
            noun="seller",
            toast=self.win.show_toast,
        )

        link_tables(self.department_presenter, self.seller_presenter)
        self._wire_usecases()

    # ------------------------------------------------------------------
    def run(self) -> None:
        self.refresh_all()
        self.win.mainloop()

    def refresh_all(self) -> None:
        if not self._wire_usecases():
            self.win.show_toast("REST backend selected but no API URL configured.")
            return
        if refresh_tables(self.department_presenter, self.seller_presenter):
            self.win.show_toast("Data loaded.")

    def _wire_usecases(self) -> bool:
        """Hand the controller's use cases to list VMs and delete gates."""
        if not self.controller.ensure_ready():
            return False
        c = self.controller
        self.department_vm.list_uc = c.uc_list_departments
        self.department_vm.count_uc = c.uc_count_sellers
        self.department_presenter.gate.delete_uc = c.uc_delete_department
        self.seller_vm.list_uc = c.uc_list_sellers
        self.seller_presenter.gate.delete_uc = c.uc_delete_seller
        return True

    def _show_departments(self) -> None:
        self.department_presenter.refresh()
        self.win.select_tab(self.department_view)

    def _show_sellers(self) -> None:
        self.seller_presenter.refresh()
        self.win.select_tab(self.seller_view)

    def _on_save_error(self, exc: UseCaseError) -> None:
        self._log.warning("Save failed (%s): %s", exc.code, exc.message)
        self.alerts.show_alert(type(exc).__name__, "Error saving", exc.message)

    # ==================================================================
    # Settings
    # ==================================================================
    def _load_settings(self) -> None:
        payload = self.settings_storage.load_user_settings()
        if not payload:
            return
        try:
            self.settings_vm.apply_dict(payload)
        except ValueError as exc:
            self._log.warning("Ignoring stored settings: %s", exc)

    def _on_open_settings(self) -> None:
        dlg = SettingsDialog(
            self.win,
            on_browse_data_dir=lambda: self._on_browse_data_dir(dlg),
            on_save=lambda values: self._on_settings_saved(dlg, values),
        )
        dlg.set_values(self.settings_vm.to_dict())

    def _on_browse_data_dir(self, dlg: SettingsDialog) -> None:
        path = filedialog.askdirectory(parent=dlg, mustexist=True)
        if path:
            dlg.set_data_dir(path)

    def _on_settings_saved(self, dlg: SettingsDialog, values: dict) -> None:
        candidate = SettingsVM(
            config=self.settings_vm.config,
            on_save=lambda payload: self._commit_settings(dlg, payload),
        )
        try:
            candidate.apply_dict(values)
            candidate.cmd_save()
        except ValueError as exc:
            self.alerts.show_alert("Settings", "Invalid settings", str(exc))

    def _commit_settings(self, dlg: SettingsDialog, payload: dict) -> None:
        self.settings_vm.apply_dict(payload)
        try:
            self.settings_storage.save_user_settings(self.settings_vm.to_dict())
        except OSError as exc:
            self._log.exception("Failed to persist settings")
            self.alerts.show_alert("Settings", "Could not save settings", str(exc))
        logging_utils.apply_gui_preferences(self.settings_vm.debug_logging)
        self.controller.reset()
        dlg.destroy()
        self.refresh_all()


def main() -> None:
    App().run()


if __name__ == "__main__":
    main()
