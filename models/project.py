"""
Data models for project files found by a scan
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, Any


@dataclass(frozen=True)
class ScannedProject:
    """Represents a project file found inside a registered folder"""

    name: str
    path: Path
    folder: str
    extension: str
    created_date: datetime
    type_label: str = ""

    @property
    def display_name(self) -> str:
        """Get the display name for the project"""
        return self.name

    @property
    def full_path(self) -> str:
        """Get the full path as string"""
        return str(self.path)

    @property
    def short_date(self) -> str:
        """Month/day used in the project list"""
        return f"{self.created_date.month}/{self.created_date.day}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "path": str(self.path),
            "folder": self.folder,
            "extension": self.extension,
            "createdDate": self.created_date.isoformat(),
            "type": self.type_label,
        }

    def __str__(self) -> str:
        return f"{self.folder}/{self.name}"
