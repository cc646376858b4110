"""
Application context owning the launcher services

Both the tkinter window and the web view are built on one AppContext,
so they share the registry and settings held in memory.
"""

import asyncio
import logging
import threading
from pathlib import Path
from typing import Dict, Optional, Set, Union

from config.config import get_config
from services.platform_service import PlatformService
from services.registry_service import FolderRegistry
from services.scaffold_service import ProjectScaffolder
from services.scanner_service import ProjectScanner
from services.settings_service import SettingsService
from services.storage_service import JsonDocumentStore
from services.template_catalog import TemplateCatalog
from utils.async_base import AsyncResult

logger = logging.getLogger(__name__)


class AppContext:
    """Creates and holds every service used by the views and commands"""

    def __init__(self, data_dir: Optional[Union[str, Path]] = None):
        config = get_config()
        self.config = config

        self.store = JsonDocumentStore(data_dir or config.storage.data_dir)
        self.catalog = TemplateCatalog()
        self.scaffolder = ProjectScaffolder()
        self.registry = FolderRegistry(self.store, config.storage.folders_document)
        self.settings_service = SettingsService(
            self.store, self.catalog, config.storage.settings_document
        )
        self.scanner = ProjectScanner()
        self.platform_service = PlatformService()
        self._in_flight: Set[str] = set()
        self._in_flight_lock = threading.Lock()

    @property
    def data_dir(self) -> Path:
        return self.store.data_dir

    def load(self) -> "AppContext":
        """Load durable state into memory"""
        self.registry.load()
        self.settings_service.load()
        logger.info(f"Loaded launcher data from {self.data_dir}")
        return self

    def begin_operation(self, key: str) -> bool:
        """
        Claim an operation key for both views

        Returns:
            False while an operation with the same key is still running
        """
        with self._in_flight_lock:
            if key in self._in_flight:
                return False
            self._in_flight.add(key)
            return True

    def end_operation(self, key: str):
        with self._in_flight_lock:
            self._in_flight.discard(key)

    def is_running(self, key: str) -> bool:
        with self._in_flight_lock:
            return key in self._in_flight

    async def health_check(self) -> Dict[str, AsyncResult]:
        """Run every service health check"""
        checked = [
            self.store,
            self.catalog,
            self.scaffolder,
            self.registry,
            self.settings_service,
            self.scanner,
        ]
        results = await asyncio.gather(*(service.health_check() for service in checked))
        return {
            service.service_name: result for service, result in zip(checked, results)
        }
