"""
Data models for the persisted application settings
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional, FrozenSet

from config.templates import DEFAULT_TEMPLATE_ID, DEFAULT_PLACEHOLDER_NAME


@dataclass
class FolderStructureOption:
    """Whether a template entry is created when scaffolding"""

    enabled: bool = True
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"enabled": self.enabled, "description": self.description}

    @classmethod
    def from_dict(cls, name: str, data: Any) -> "FolderStructureOption":
        if isinstance(data, bool):
            return cls(enabled=data, description=name)
        data = data or {}
        return cls(
            enabled=bool(data.get("enabled", True)),
            description=data.get("description") or name,
        )


@dataclass
class TemplateSelection:
    """Active template and the optional custom template folder override"""

    name: str = DEFAULT_TEMPLATE_ID
    path: Optional[str] = None
    use_custom_path: bool = False
    custom_path: str = ""
    placeholder_name: str = DEFAULT_PLACEHOLDER_NAME

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "useCustomPath": self.use_custom_path,
            "customPath": self.custom_path,
            "placeholderName": self.placeholder_name,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "TemplateSelection":
        data = data or {}
        return cls(
            name=data.get("name") or DEFAULT_TEMPLATE_ID,
            path=data.get("path"),
            use_custom_path=bool(data.get("useCustomPath", False)),
            custom_path=data.get("customPath") or "",
            placeholder_name=data.get("placeholderName") or DEFAULT_PLACEHOLDER_NAME,
        )

    @property
    def custom_folder_active(self) -> bool:
        """Custom folder copying applies only when enabled and a path is set"""
        return self.use_custom_path and bool(self.custom_path.strip())


@dataclass
class AppSettings:
    """Applications, template choice and folder structure toggles"""

    applications: Dict[str, str] = field(default_factory=dict)
    folder_structure: Dict[str, FolderStructureOption] = field(default_factory=dict)
    template: TemplateSelection = field(default_factory=TemplateSelection)

    def disabled_entries(self) -> FrozenSet[str]:
        """Names of template entries switched off by the user"""
        return frozenset(
            name for name, option in self.folder_structure.items() if not option.enabled
        )

    def to_dict(self, templates: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return {
            "applications": dict(self.applications),
            "templates": templates or {},
            "folderStructure": {
                name: option.to_dict() for name, option in self.folder_structure.items()
            },
            "template": self.template.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "AppSettings":
        data = data or {}
        applications = {
            str(key): str(value)
            for key, value in (data.get("applications") or {}).items()
            if value is not None
        }
        folder_structure = {
            name: FolderStructureOption.from_dict(name, option)
            for name, option in (data.get("folderStructure") or {}).items()
        }
        return cls(
            applications=applications,
            folder_structure=folder_structure,
            template=TemplateSelection.from_dict(data.get("template")),
        )
