"""Adapter and use-case wiring for the desktop app runtime.

This module owns lazy construction of the persistence adapters and use-case
objects that depend on values in :class:`salesdesk.viewmodels.settings_vm.SettingsVM`.
Presenters call ``ensure_ready`` before loading or mutating records.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..adapters.department_rest import DepartmentRestAdapter
from ..adapters.seller_rest import SellerRestAdapter
from ..adapters.storage_local import LocalDepartmentStore, LocalSellerStore, StorageLocal
from ..domain.entities import Department, Seller
from ..domain.ports import DepartmentPort, SellerPort
from ..usecases.count_sellers import CountSellers
from ..usecases.delete_entity import DeleteEntity
from ..usecases.list_entities import ListEntities
from ..usecases.save_entity import SaveEntity
from ..viewmodels.settings_vm import SettingsVM


class AppController:
    """Create and cache adapters/use-cases from settings state.

    Call chain:
        ``salesdesk.app.main.App`` creates one instance, hands the use cases to
        the list/form view models, and calls ``reset`` after settings change.
    """

    def __init__(self, settings_vm: SettingsVM, storage: Optional[StorageLocal] = None) -> None:
        """Initialize controller with settings-backed lazy dependencies.

        Args:
            settings_vm: Backend choice, API URL/key and timeout.
            storage: Optional pre-built local storage (tests, custom roots);
                otherwise one is created under ``settings_vm.data_dir``.
        """
        self._log = logging.getLogger(__name__)
        self.settings_vm = settings_vm
        self._storage = storage
        self._department_port: Optional[DepartmentPort] = None
        self._seller_port: Optional[SellerPort] = None
        self.uc_list_departments: Optional[ListEntities[Department]] = None
        self.uc_save_department: Optional[SaveEntity[Department]] = None
        self.uc_delete_department: Optional[DeleteEntity[Department]] = None
        self.uc_list_sellers: Optional[ListEntities[Seller]] = None
        self.uc_save_seller: Optional[SaveEntity[Seller]] = None
        self.uc_delete_seller: Optional[DeleteEntity[Seller]] = None
        self.uc_count_sellers: Optional[CountSellers] = None

    @property
    def storage(self) -> StorageLocal:
        if self._storage is None or self._storage.root != self.settings_vm.data_dir:
            self._storage = StorageLocal(self.settings_vm.data_dir)
        return self._storage

    @property
    def department_port(self) -> Optional[DepartmentPort]:
        return self._department_port

    @property
    def seller_port(self) -> Optional[SellerPort]:
        return self._seller_port

    def reset(self) -> None:
        """Drop all cached adapters and use-cases.

        The next ``ensure_ready`` call rebuilds everything from the current
        settings values.
        """
        self._department_port = None
        self._seller_port = None
        self.uc_list_departments = None
        self.uc_save_department = None
        self.uc_delete_department = None
        self.uc_list_sellers = None
        self.uc_save_seller = None
        self.uc_delete_seller = None
        self.uc_count_sellers = None

    def ensure_ready(self) -> bool:
        """Ensure adapters/use-cases are available.

        Returns:
            ``True`` when dependencies are available, ``False`` when the REST
            backend is selected without a base URL.
        """
        if self._department_port and self._seller_port:
            return True

        if self.settings_vm.uses_rest:
            base_url = self.settings_vm.api_base_url
            if not base_url:
                return False
            api_key = self.settings_vm.api_key or None
            timeout = self.settings_vm.request_timeout_s
            self._department_port = DepartmentRestAdapter(
                base_url, api_key=api_key, request_timeout_s=timeout, retries=2
            )
            self._seller_port = SellerRestAdapter(
                base_url, api_key=api_key, request_timeout_s=timeout, retries=2
            )
            self._log.info("Using REST backend at %s", base_url)
        else:
            storage = self.storage
            self._department_port = LocalDepartmentStore(storage)
            self._seller_port = LocalSellerStore(storage)
            self._log.info("Using local storage at %s", storage.root)

        self.uc_list_departments = ListEntities(self._department_port)
        self.uc_save_department = SaveEntity(self._department_port)
        self.uc_delete_department = DeleteEntity(self._department_port)
        self.uc_list_sellers = ListEntities(self._seller_port)
        self.uc_save_seller = SaveEntity(self._seller_port)
        self.uc_delete_seller = DeleteEntity(self._seller_port)
        self.uc_count_sellers = CountSellers(self._seller_port)
        return True


__all__ = ["AppController"]
