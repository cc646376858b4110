"""
Settings Service - applications, active template and folder structure toggles
"""

import logging
from typing import Optional, Dict, Any, FrozenSet

from config.templates import ENTRY_DESCRIPTIONS, DEFAULT_TEMPLATE_ID
from models.app_settings import AppSettings, FolderStructureOption, TemplateSelection
from models.template import Template
from services.storage_service import JsonDocumentStore
from services.template_catalog import TemplateCatalog
from utils.async_base import (
    AsyncServiceInterface,
    ServiceResult,
    ValidationError,
    PersistenceError,
)

logger = logging.getLogger(__name__)


class SettingsService(AsyncServiceInterface):
    """Loads and saves the settings document as a whole"""

    def __init__(
        self,
        store: JsonDocumentStore,
        catalog: TemplateCatalog,
        document_name: str = "settings.json",
    ):
        super().__init__("SettingsService")
        self.store = store
        self.catalog = catalog
        self.document_name = document_name
        self.settings = self.default_settings()
        self.last_error: Optional[PersistenceError] = None

    async def health_check(self) -> ServiceResult[Dict[str, Any]]:
        async with self.operation_context("health_check"):
            return ServiceResult.success_result(
                {
                    "status": "healthy" if self.last_error is None else "degraded",
                    "active_template": self.settings.template.name,
                    "applications": len(self.settings.applications),
                }
            )

    def default_settings(self) -> AppSettings:
        """Settings used when no document exists yet"""
        folder_structure = {
            name: FolderStructureOption(
                enabled=True, description=ENTRY_DESCRIPTIONS.get(name, name)
            )
            for name in self.catalog.all_entry_names()
        }
        return AppSettings(
            applications={},
            folder_structure=folder_structure,
            template=TemplateSelection(name=DEFAULT_TEMPLATE_ID),
        )

    def load(self) -> AppSettings:
        """Load settings from the store, seeding missing folder structure toggles"""
        document = self.store.read(self.document_name, default=None)
        if not isinstance(document, dict):
            if document is not None:
                logger.warning(f"Ignoring malformed {self.document_name}")
            self.settings = self.default_settings()
            return self.settings

        settings = AppSettings.from_dict(document)
        for name in self.catalog.all_entry_names():
            if name not in settings.folder_structure:
                settings.folder_structure[name] = FolderStructureOption(
                    enabled=True, description=ENTRY_DESCRIPTIONS.get(name, name)
                )

        if not self.catalog.has_template(settings.template.name):
            logger.warning(
                f"Active template '{settings.template.name}' is unknown, "
                f"using '{DEFAULT_TEMPLATE_ID}'"
            )
            settings.template.name = DEFAULT_TEMPLATE_ID

        self.settings = settings
        logger.info("Settings loaded")
        return self.settings

    def save(self, settings: Optional[AppSettings] = None) -> bool:
        """Replace the stored document; in-memory settings are kept on failure"""
        if settings is not None:
            self.settings = settings
        try:
            self.store.write(
                self.document_name, self.settings.to_dict(self.catalog.to_document())
            )
        except PersistenceError as e:
            self.last_error = e
            logger.error(f"Failed to save settings: {e.message}")
            return False
        self.last_error = None
        logger.info("Settings saved")
        return True

    def update_from_dict(self, data: Dict[str, Any]) -> bool:
        """
        Replace settings from a document-shaped dict and save

        Raises:
            NotFoundError: If the document names an unknown template
        """
        settings = AppSettings.from_dict(data)
        self.catalog.get_template(settings.template.name)
        return self.save(settings)

    def set_application_path(self, key: str, path: str) -> bool:
        if not key or not key.strip():
            raise ValidationError("Application key must not be empty", field="key")
        if not path or not path.strip():
            raise ValidationError("Application path must not be empty", field="path")
        self.settings.applications[key.strip()] = path.strip()
        return self.save()

    def remove_application(self, key: str) -> bool:
        if self.settings.applications.pop(key, None) is None:
            return False
        return self.save()

    def get_application_path(self, key: str) -> Optional[str]:
        return self.settings.applications.get(key)

    def set_active_template(self, template_id: str) -> bool:
        """
        Raises:
            NotFoundError: If the template id is unknown
        """
        self.catalog.get_template(template_id)
        self.settings.template.name = template_id
        return self.save()

    def set_entry_enabled(self, name: str, enabled: bool) -> bool:
        option = self.settings.folder_structure.get(name)
        if option is None:
            option = FolderStructureOption(
                enabled=enabled, description=ENTRY_DESCRIPTIONS.get(name, name)
            )
            self.settings.folder_structure[name] = option
        option.enabled = enabled
        return self.save()

    def set_custom_template(
        self,
        use_custom_path: bool,
        custom_path: str = "",
        placeholder_name: Optional[str] = None,
    ) -> bool:
        selection = self.settings.template
        selection.use_custom_path = use_custom_path
        selection.custom_path = custom_path.strip()
        if placeholder_name is not None and placeholder_name.strip():
            selection.placeholder_name = placeholder_name.strip()
        return self.save()

    def active_template(self) -> Template:
        return self.catalog.get_template_or_default(self.settings.template.name)

    def disabled_entries(self) -> FrozenSet[str]:
        return self.settings.disabled_entries()

    def to_dict(self) -> Dict[str, Any]:
        return self.settings.to_dict(self.catalog.to_document())
