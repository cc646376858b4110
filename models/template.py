"""
Data models for project templates
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, Tuple


class EntryKind(Enum):
    """What a template entry materializes as on disk"""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class TemplateEntry:
    """A single folder or file created by a template"""

    name: str
    kind: EntryKind

    @classmethod
    def parse(cls, name: str) -> "TemplateEntry":
        """Build an entry from a template name; a '.' in the last segment marks a file"""
        cleaned = name.strip().strip("/\\")
        if not cleaned:
            raise ValueError("Template entry name must not be empty")
        last_segment = cleaned.replace("\\", "/").rsplit("/", 1)[-1]
        kind = EntryKind.FILE if "." in last_segment else EntryKind.DIRECTORY
        return cls(name=cleaned, kind=kind)

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    @property
    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Template:
    """A named, ordered list of entries defining a project skeleton"""

    id: str
    name: str
    entries: Tuple[TemplateEntry, ...]
    description: str = ""
    profession: str = ""
    icon: str = ""
    color: str = ""

    def __post_init__(self):
        if not self.id:
            raise ValueError("Template id must not be empty")
        if not self.entries:
            raise ValueError(f"Template '{self.id}' has no entries")

    @classmethod
    def from_definition(cls, definition: Dict[str, Any]) -> "Template":
        """Create a template from a static definition dictionary"""
        return cls(
            id=definition["id"],
            name=definition.get("name", definition["id"]),
            entries=tuple(TemplateEntry.parse(e) for e in definition["entries"]),
            description=definition.get("description", ""),
            profession=definition.get("profession", ""),
            icon=definition.get("icon", ""),
            color=definition.get("color", ""),
        )

    @property
    def entry_names(self) -> Tuple[str, ...]:
        """Get entry names in declaration order"""
        return tuple(entry.name for entry in self.entries)

    @property
    def display_name(self) -> str:
        """Get the display name with profession"""
        if self.profession:
            return f"{self.name} ({self.profession})"
        return self.name

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for the settings document and the web view"""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "profession": self.profession,
            "icon": self.icon,
            "color": self.color,
            "folders": list(self.entry_names),
        }
