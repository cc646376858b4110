"""
Tests for SettingsService and the settings models
"""

import os
import sys
from unittest.mock import patch
import pytest

# Add parent directory to path to import modules
parent_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

from models.app_settings import AppSettings, TemplateSelection, FolderStructureOption
from services.settings_service import SettingsService
from utils.async_base import NotFoundError, ValidationError, PersistenceError


class TestSettingsDefaults:
    """Test cases for settings without a stored document"""

    def test_defaults(self, settings_service, catalog):
        settings = settings_service.settings
        assert settings.applications == {}
        assert settings.template.name == "default"
        assert settings.template.placeholder_name == "Temp"
        assert not settings.template.use_custom_path
        assert set(settings.folder_structure) == set(catalog.all_entry_names())
        assert all(option.enabled for option in settings.folder_structure.values())

    def test_active_template_defaults(self, settings_service):
        assert settings_service.active_template().id == "default"
        assert settings_service.disabled_entries() == frozenset()


class TestSettingsService:
    """Test cases for SettingsService mutations and persistence"""

    def test_set_application_path_persists(self, settings_service, document_store, catalog):
        assert settings_service.set_application_path("afterEffects", "/Apps/AE.app")

        reloaded = SettingsService(document_store, catalog).load()
        assert reloaded.applications == {"afterEffects": "/Apps/AE.app"}

    def test_set_application_path_validates(self, settings_service):
        with pytest.raises(ValidationError):
            settings_service.set_application_path("afterEffects", "  ")

    def test_remove_application(self, settings_service):
        settings_service.set_application_path("app3", "/usr/bin/app3")
        assert settings_service.remove_application("app3") is True
        assert settings_service.remove_application("app3") is False
        assert settings_service.get_application_path("app3") is None

    def test_set_active_template(self, settings_service):
        settings_service.set_active_template("developer")
        assert settings_service.active_template().id == "developer"

    def test_set_unknown_template_raises(self, settings_service):
        with pytest.raises(NotFoundError):
            settings_service.set_active_template("astronaut")
        assert settings_service.settings.template.name == "default"

    def test_disabled_entries(self, settings_service):
        settings_service.set_entry_enabled("prePro", False)
        assert settings_service.disabled_entries() == frozenset({"prePro"})

    def test_document_shape(self, settings_service, document_store):
        settings_service.set_custom_template(True, "/templates/spot", "XX")
        document = document_store.read("settings.json")

        assert set(document) == {"applications", "templates", "folderStructure", "template"}
        assert document["template"] == {
            "name": "default",
            "path": None,
            "useCustomPath": True,
            "customPath": "/templates/spot",
            "placeholderName": "XX",
        }
        assert document["templates"]["developer"]["folders"][-1] == "README.md"
        assert document["folderStructure"]["AEP"]["enabled"] is True

    def test_load_tolerates_orphaned_and_missing_keys(self, document_store, catalog):
        document_store.write(
            "settings.json",
            {
                "applications": {"afterEffects": "/Apps/AE.app"},
                "folderStructure": {"OldFolder": {"enabled": False}, "AEP": False},
                "template": {"name": "vanished-template"},
            },
        )
        service = SettingsService(document_store, catalog)
        settings = service.load()

        assert settings.template.name == "default"
        assert settings.folder_structure["AEP"].enabled is False
        assert "prePro" in settings.folder_structure
        assert service.disabled_entries() == frozenset({"OldFolder", "AEP"})

    def test_malformed_document_uses_defaults(self, document_store, catalog):
        document_store.write("settings.json", ["not", "a", "dict"])
        settings = SettingsService(document_store, catalog).load()
        assert settings.template.name == "default"

    def test_failed_save_keeps_memory(self, settings_service, document_store):
        with patch.object(document_store, "write", side_effect=PersistenceError("nope")):
            saved = settings_service.set_application_path("app4", "/usr/bin/app4")

        assert saved is False
        assert settings_service.last_error.message == "nope"
        assert settings_service.get_application_path("app4") == "/usr/bin/app4"

    def test_update_from_dict(self, settings_service):
        document = settings_service.to_dict()
        document["template"]["name"] = "photographer"
        document["applications"]["premierePro"] = "/Apps/PR.app"

        assert settings_service.update_from_dict(document)
        assert settings_service.active_template().id == "photographer"
        assert settings_service.get_application_path("premierePro") == "/Apps/PR.app"

    def test_update_from_dict_rejects_unknown_template(self, settings_service):
        with pytest.raises(NotFoundError):
            settings_service.update_from_dict({"template": {"name": "astronaut"}})


class TestSettingsModels:
    """Test cases for AppSettings serialization helpers"""

    def test_template_selection_custom_folder_active(self):
        assert not TemplateSelection(use_custom_path=True, custom_path="  ").custom_folder_active
        assert TemplateSelection(use_custom_path=True, custom_path="/t").custom_folder_active
        assert not TemplateSelection(use_custom_path=False, custom_path="/t").custom_folder_active

    def test_folder_structure_option_from_bool(self):
        option = FolderStructureOption.from_dict("AEP", False)
        assert option.enabled is False
        assert option.description == "AEP"

    def test_app_settings_from_empty(self):
        settings = AppSettings.from_dict(None)
        assert settings.template.name == "default"
        assert settings.disabled_entries() == frozenset()
