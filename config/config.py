"""
Unified Configuration Management System
Centralizes all application settings with validation, type checking, and environment support
"""

import os
import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field
from enum import Enum


class Environment(Enum):
    """Application environments"""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class ConfigValidationError(Exception):
    """Raised when configuration validation fails"""

    pass


@dataclass
class GuiConfig:
    """GUI-related configuration"""

    # Window settings
    window_title: str = "Quick Folder Launcher"
    main_window_size: str = "420x640"
    popup_window_size: str = "520x560"

    # Colors
    colors: Dict[str, str] = field(
        default_factory=lambda: {
            "background": "#1e1e1e",
            "panel": "#2d2d2d",
            "border": "#404040",
            "text": "#ffffff",
            "muted": "#aaaaaa",
            "accent": "#0078d4",
            "success": "#27ae60",
            "error": "#e74c3c",
            "warning": "#f39c12",
            "info": "#3498db",
            "ae_badge": "#9999ff",
            "pr_badge": "#ea77ff",
            "white": "white",
        }
    )

    # Fonts
    fonts: Dict[str, tuple] = field(
        default_factory=lambda: {
            "title": ("Arial", 16, "bold"),
            "header": ("Arial", 13, "bold"),
            "folder_name": ("Arial", 11, "bold"),
            "button": ("Arial", 9, "bold"),
            "button_large": ("Arial", 10, "bold"),
            "info": ("Arial", 9),
            "badge": ("Arial", 8, "bold"),
            "mono": ("Consolas", 9),
        }
    )

    # Button styles
    button_styles: Dict[str, Dict[str, str]] = field(
        default_factory=lambda: {
            "primary": {"bg": "#0078d4", "fg": "white"},
            "folder": {"bg": "#404040", "fg": "white"},
            "scan": {"bg": "#16a085", "fg": "white"},
            "delete": {"bg": "#e74c3c", "fg": "white"},
            "launch": {"bg": "#9b59b6", "fg": "white"},
            "browse": {"bg": "#34495e", "fg": "white"},
            "settings": {"bg": "#95a5a6", "fg": "white"},
            "save": {"bg": "#27ae60", "fg": "white"},
            "close": {"bg": "#34495e", "fg": "white"},
            "cancel": {"bg": "#e74c3c", "fg": "white"},
        }
    )


@dataclass
class StorageConfig:
    """Persistence configuration for the JSON documents"""

    data_dir: str = field(
        default_factory=lambda: str(Path.home() / ".quick-folder-launcher")
    )
    folders_document: str = "folders.json"
    settings_document: str = "settings.json"


@dataclass
class ScannerConfig:
    """Project file scanning configuration"""

    # Recognized project file extensions and their display badges
    project_extensions: Dict[str, str] = field(
        default_factory=lambda: {
            ".aep": "AE",
            ".prproj": "PR",
        }
    )

    # Names skipped during a scan
    ignore_names: List[str] = field(
        default_factory=lambda: [".DS_Store", "Thumbs.db", "desktop.ini"]
    )


@dataclass
class CommandConfig:
    """System commands configuration"""

    commands: Dict[str, Dict] = field(
        default_factory=lambda: {
            # Open a folder or document with the platform handler
            "FILE_OPEN_COMMANDS": {
                "windows": ["explorer", "{file_path}"],
                "darwin": ["open", "{file_path}"],
                "linux": ["xdg-open", "{file_path}"],
            },
            # Launch an application bundle or executable
            "APP_LAUNCH_COMMANDS": {
                "bundle": {
                    "darwin": ["open", "-a", "{app_path}"],
                },
                "executable": {
                    "windows": ["{app_path}"],
                    "darwin": ["{app_path}"],
                    "linux": ["{app_path}"],
                },
            },
        }
    )

    # Error messages by platform
    error_messages: Dict[str, Dict[str, str]] = field(
        default_factory=lambda: {
            "windows": {
                "opener_not_found": "NOTE: Explorer could not be started.",
            },
            "linux": {
                "opener_not_found": "NOTE: Make sure xdg-utils is installed.",
            },
            "darwin": {
                "opener_not_found": "NOTE: The 'open' command is not available.",
            },
        }
    )


@dataclass
class ServiceConfig:
    """Service-specific configuration"""

    # Timeout settings
    default_timeout: float = 30.0
    open_timeout: float = 10.0

    # Companion web view
    web_host: str = "127.0.0.1"
    web_port: int = 5000


@dataclass
class UnifiedConfig:
    """Main configuration container"""

    gui: GuiConfig = field(default_factory=GuiConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    scanner: ScannerConfig = field(default_factory=ScannerConfig)
    commands: CommandConfig = field(default_factory=CommandConfig)
    service: ServiceConfig = field(default_factory=ServiceConfig)

    # Environment settings
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False
    log_level: str = "INFO"

    # Application metadata
    version: str = "1.0.0"
    config_version: str = "1.0"


class ConfigManager:
    """Manages configuration loading, validation, and access"""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or Path(__file__).parent
        self.config: Optional[UnifiedConfig] = None
        self.logger = logging.getLogger("ConfigManager")

        self._load_config()

    def _load_config(self):
        """Load configuration from files and environment"""
        self.config = UnifiedConfig()
        self._apply_user_overrides()
        self._apply_environment_overrides()
        self._validate_config()

    def _apply_user_overrides(self):
        """Apply user settings from user_settings.json"""
        user_settings_file = self.config_dir / "user_settings.json"

        if not user_settings_file.exists():
            return

        try:
            with open(user_settings_file, "r", encoding="utf-8") as f:
                user_settings = json.load(f)

            self._apply_settings_dict(user_settings)
            self.logger.info("Applied user settings overrides")

        except (json.JSONDecodeError, FileNotFoundError) as e:
            self.logger.warning(f"Could not load user settings: {e}")

    def _apply_environment_overrides(self):
        """Apply environment-specific overrides"""
        env_name = os.getenv("PROJECT_ENV", "development").lower()
        try:
            self.config.environment = Environment(env_name)
        except ValueError:
            self.logger.warning(f"Unknown environment '{env_name}', using development")
            self.config.environment = Environment.DEVELOPMENT

        if os.getenv("DEBUG") is not None:
            self.config.debug = os.getenv("DEBUG").lower() in ("true", "1", "yes", "on")

        if os.getenv("LOG_LEVEL"):
            self.config.log_level = os.getenv("LOG_LEVEL").upper()

        if os.getenv("QFL_DATA_DIR"):
            self.config.storage.data_dir = os.getenv("QFL_DATA_DIR")

        if os.getenv("QFL_WEB_PORT"):
            try:
                self.config.service.web_port = int(os.getenv("QFL_WEB_PORT"))
            except ValueError:
                self.logger.warning(
                    f"Ignoring non-numeric QFL_WEB_PORT: {os.getenv('QFL_WEB_PORT')}"
                )

    def _apply_settings_dict(self, settings: Dict[str, Any]):
        """Apply settings from a dictionary using dot notation"""
        for key, value in settings.items():
            self._set_nested_value(self.config, key, value)

    def _set_nested_value(self, obj: Any, key_path: str, value: Any):
        """Set a nested value using dot notation (e.g., 'gui.colors.success')"""
        keys = key_path.split(".")
        current = obj

        # Navigate to the parent object
        for index, key in enumerate(keys[:-1]):
            if isinstance(current, dict) and key in current:
                current = current[key]
            elif not isinstance(current, dict) and hasattr(current, key):
                current = getattr(current, key)
            else:
                self.logger.warning(
                    f"Unknown config path: {'.'.join(keys[:index + 1])}"
                )
                return

        final_key = keys[-1]

        if isinstance(current, dict):
            if final_key not in current:
                self.logger.warning(f"Unknown config key: {key_path}")
                return
            existing = current[final_key]
            if isinstance(existing, dict) and isinstance(value, dict):
                existing.update(value)
            elif isinstance(existing, tuple) and isinstance(value, list):
                # Fonts are stored as tuples
                current[final_key] = tuple(value)
            else:
                current[final_key] = value
        elif hasattr(current, final_key):
            existing = getattr(current, final_key)
            if isinstance(existing, dict) and isinstance(value, dict):
                existing.update(value)
            elif isinstance(existing, tuple) and isinstance(value, list):
                setattr(current, final_key, tuple(value))
            else:
                setattr(current, final_key, value)
        else:
            self.logger.warning(f"Unknown config key: {key_path}")

    def _validate_config(self):
        """Validate the loaded configuration"""
        if not self.config.storage.data_dir:
            raise ConfigValidationError("Data directory must not be empty")

        for name, document in (
            ("folders_document", self.config.storage.folders_document),
            ("settings_document", self.config.storage.settings_document),
        ):
            if not document.endswith(".json"):
                raise ConfigValidationError(f"{name} must be a .json file: {document}")

        for extension in self.config.scanner.project_extensions:
            if not extension.startswith("."):
                raise ConfigValidationError(
                    f"Project extension must start with '.': {extension}"
                )

        for name, color in self.config.gui.colors.items():
            if not (color.startswith("#") or color in ["white", "black"]):
                self.logger.warning(f"Invalid color format for {name}: {color}")

        if self.config.service.default_timeout <= 0:
            raise ConfigValidationError("Default timeout must be positive")

        self.logger.debug("Configuration validation completed")

    def get_config(self) -> UnifiedConfig:
        """Get the current configuration"""
        if self.config is None:
            raise RuntimeError("Configuration not loaded")
        return self.config

    def reload_config(self):
        """Reload configuration from files"""
        self._load_config()

    def save_user_settings(self, settings: Dict[str, Any]):
        """Save user settings to user_settings.json"""
        user_settings_file = self.config_dir / "user_settings.json"

        try:
            with open(user_settings_file, "w", encoding="utf-8") as f:
                json.dump(settings, f, indent=2)

            self.reload_config()
            self.logger.info("User settings saved and configuration reloaded")

        except OSError as e:
            self.logger.error(f"Failed to save user settings: {e}")
            raise


# Global configuration manager instance
_config_manager: Optional[ConfigManager] = None


def initialize_config(config_dir: Optional[Path] = None) -> ConfigManager:
    """Initialize the global configuration manager"""
    global _config_manager
    _config_manager = ConfigManager(config_dir)
    return _config_manager


def get_config() -> UnifiedConfig:
    """Get the current configuration"""
    if _config_manager is None:
        initialize_config()
    return _config_manager.get_config()


def get_config_manager() -> ConfigManager:
    """Get the configuration manager"""
    if _config_manager is None:
        initialize_config()
    return _config_manager


def reload_config():
    """Reload configuration from files"""
    if _config_manager is not None:
        _config_manager.reload_config()


# Convenience functions for common access patterns
def get_gui_config() -> GuiConfig:
    """Get GUI configuration"""
    return get_config().gui


def get_storage_config() -> StorageConfig:
    """Get storage configuration"""
    return get_config().storage


def get_scanner_config() -> ScannerConfig:
    """Get scanner configuration"""
    return get_config().scanner


def get_command_config() -> CommandConfig:
    """Get command configuration"""
    return get_config().commands


def get_service_config() -> ServiceConfig:
    """Get service configuration"""
    return get_config().service
