"""
Template Catalog - read-only set of project templates
"""

import logging
from typing import List, Optional, Dict, Any, Iterable

from config.templates import TEMPLATE_DEFINITIONS, DEFAULT_TEMPLATE_ID
from models.template import Template
from utils.async_base import (
    AsyncServiceInterface,
    ServiceResult,
    NotFoundError,
)

logger = logging.getLogger(__name__)


class TemplateCatalog(AsyncServiceInterface):
    """Named project templates, fixed for the lifetime of the process"""

    def __init__(self, definitions: Optional[Iterable[Dict[str, Any]]] = None):
        super().__init__("TemplateCatalog")
        templates = [
            Template.from_definition(definition)
            for definition in (definitions or TEMPLATE_DEFINITIONS)
        ]
        self._templates: Dict[str, Template] = {}
        for template in templates:
            if template.id in self._templates:
                raise ValueError(f"Duplicate template id: {template.id}")
            self._templates[template.id] = template

        if DEFAULT_TEMPLATE_ID not in self._templates:
            raise ValueError(f"Catalog must define the '{DEFAULT_TEMPLATE_ID}' template")

    async def health_check(self) -> ServiceResult[Dict[str, Any]]:
        """Check catalog health"""
        async with self.operation_context("health_check"):
            return ServiceResult.success_result(
                {
                    "status": "healthy",
                    "template_count": len(self._templates),
                    "default_template": DEFAULT_TEMPLATE_ID,
                }
            )

    def list_templates(self) -> List[Template]:
        """Get all templates in declaration order"""
        return list(self._templates.values())

    def get_template(self, template_id: str) -> Template:
        """Get a template by id

        Raises:
            NotFoundError: If no template has this id
        """
        try:
            return self._templates[template_id]
        except KeyError:
            raise NotFoundError(
                f"Unknown template: {template_id}", key=template_id
            ) from None

    def get_template_or_default(self, template_id: Optional[str]) -> Template:
        """Get a template by id, falling back to the default template"""
        template = self._templates.get(template_id) if template_id else None
        if template is None:
            if template_id:
                logger.warning(
                    f"Template '{template_id}' not found, using '{DEFAULT_TEMPLATE_ID}'"
                )
            template = self._templates[DEFAULT_TEMPLATE_ID]
        return template

    def default_template(self) -> Template:
        return self._templates[DEFAULT_TEMPLATE_ID]

    def template_ids(self) -> List[str]:
        return list(self._templates.keys())

    def has_template(self, template_id: str) -> bool:
        return template_id in self._templates

    def all_entry_names(self) -> List[str]:
        """Union of entry names across templates, first occurrence order"""
        names: List[str] = []
        seen = set()
        for template in self._templates.values():
            for name in template.entry_names:
                if name not in seen:
                    seen.add(name)
                    names.append(name)
        return names

    def to_document(self) -> Dict[str, Dict[str, Any]]:
        """Templates in the shape stored in the settings document"""
        return {
            template.id: {"name": template.name, "folders": list(template.entry_names)}
            for template in self._templates.values()
        }
