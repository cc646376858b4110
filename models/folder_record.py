"""
Data model for registered folder shortcuts and created projects
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any


@dataclass
class FolderRecord:
    """A quick-access folder or a scaffolded project tracked by the registry"""

    id: str
    name: str
    path: str
    created: Optional[str] = None
    template: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_project(self) -> bool:
        """Check whether the record was created from a template"""
        return self.template is not None

    @property
    def exists(self) -> bool:
        """Check whether the folder is still on disk"""
        return Path(self.path).is_dir()

    def apply_metadata(self, metadata: Optional[Dict[str, Any]]):
        """Merge metadata into the record; known keys map to attributes"""
        if not metadata:
            return
        for key, value in metadata.items():
            if key in ("created", "template"):
                setattr(self, key, value)
            else:
                self.extra[key] = value

    def to_dict(self) -> Dict[str, Any]:
        data = {"id": self.id, "name": self.name, "path": self.path}
        if self.created is not None:
            data["created"] = self.created
        if self.template is not None:
            data["template"] = self.template
        data.update(self.extra)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FolderRecord":
        known = {"id", "name", "path", "created", "template"}
        return cls(
            id=str(data.get("id") or ""),
            name=data.get("name") or Path(data["path"]).name,
            path=data["path"],
            created=data.get("created"),
            template=data.get("template"),
            extra={k: v for k, v in data.items() if k not in known},
        )

    def __str__(self) -> str:
        return f"{self.name} ({self.path})"
