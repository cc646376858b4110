"""
Tests for the configuration manager
"""

import json
import os
import sys
from unittest.mock import patch
import pytest

# Add parent directory to path to import modules
parent_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

from config.config import ConfigManager, ConfigValidationError, Environment


class TestConfigManager:
    """Test cases for ConfigManager"""

    def test_defaults(self, temp_directory):
        with patch.dict(os.environ, {}, clear=True):
            config = ConfigManager(temp_directory).get_config()

        assert config.scanner.project_extensions == {".aep": "AE", ".prproj": "PR"}
        assert config.storage.folders_document == "folders.json"
        assert config.storage.settings_document == "settings.json"
        assert config.environment is Environment.DEVELOPMENT
        assert config.gui.fonts["title"] == ("Arial", 16, "bold")

    def test_environment_overrides(self, temp_directory):
        env = {
            "QFL_DATA_DIR": str(temp_directory / "state"),
            "QFL_WEB_PORT": "5123",
            "LOG_LEVEL": "debug",
            "PROJECT_ENV": "testing",
        }
        with patch.dict(os.environ, env, clear=True):
            config = ConfigManager(temp_directory).get_config()

        assert config.storage.data_dir == str(temp_directory / "state")
        assert config.service.web_port == 5123
        assert config.log_level == "DEBUG"
        assert config.environment is Environment.TESTING

    def test_bad_port_is_ignored(self, temp_directory):
        with patch.dict(os.environ, {"QFL_WEB_PORT": "abc"}, clear=True):
            config = ConfigManager(temp_directory).get_config()
        assert config.service.web_port == 5000

    def test_user_settings_overrides(self, temp_directory):
        (temp_directory / "user_settings.json").write_text(
            json.dumps(
                {
                    "scanner.project_extensions": {".blend": "BL"},
                    "gui.fonts.title": ["Helvetica", 18, "bold"],
                    "service.open_timeout": 3,
                    "unknown.key": 1,
                }
            )
        )
        with patch.dict(os.environ, {}, clear=True):
            config = ConfigManager(temp_directory).get_config()

        assert config.scanner.project_extensions[".blend"] == "BL"
        assert config.scanner.project_extensions[".aep"] == "AE"
        assert config.gui.fonts["title"] == ("Helvetica", 18, "bold")
        assert config.service.open_timeout == 3

    def test_invalid_extension_rejected(self, temp_directory):
        (temp_directory / "user_settings.json").write_text(
            json.dumps({"scanner.project_extensions": {"aep": "AE"}})
        )
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ConfigValidationError):
                ConfigManager(temp_directory)

    def test_save_user_settings_reloads(self, temp_directory):
        with patch.dict(os.environ, {}, clear=True):
            manager = ConfigManager(temp_directory)
            manager.save_user_settings({"service.web_port": 6001})

        assert manager.get_config().service.web_port == 6001
