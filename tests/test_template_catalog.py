"""
Tests for TemplateCatalog and the template models
"""

import os
import sys
import pytest

# Add parent directory to path to import modules
parent_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

from config.templates import TEMPLATE_DEFINITIONS, DEFAULT_TEMPLATE_ID
from models.template import Template, TemplateEntry, EntryKind
from services.template_catalog import TemplateCatalog
from utils.async_base import NotFoundError


class TestTemplateEntry:
    """Test cases for TemplateEntry.parse"""

    def test_name_without_dot_is_directory(self):
        entry = TemplateEntry.parse("AEP")
        assert entry.kind is EntryKind.DIRECTORY
        assert entry.is_directory
        assert not entry.is_file

    def test_name_with_dot_is_file(self):
        entry = TemplateEntry.parse("README.md")
        assert entry.kind is EntryKind.FILE
        assert entry.is_file

    def test_nested_directory_uses_last_segment(self):
        entry = TemplateEntry.parse("assets.v1/images")
        assert entry.is_directory
        assert entry.name == "assets.v1/images"

    def test_surrounding_slashes_are_stripped(self):
        assert TemplateEntry.parse(" /src/ ").name == "src"

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            TemplateEntry.parse("   ")


class TestTemplate:
    """Test cases for the Template model"""

    def test_from_definition(self):
        template = Template.from_definition(
            {
                "id": "demo",
                "name": "Demo",
                "profession": "Testing",
                "entries": ["a", "b.txt"],
            }
        )
        assert template.entry_names == ("a", "b.txt")
        assert template.entries[1].is_file
        assert template.display_name == "Demo (Testing)"

    def test_template_is_immutable(self):
        template = Template.from_definition({"id": "demo", "entries": ["a"]})
        with pytest.raises(AttributeError):
            template.name = "Other"

    def test_template_requires_entries(self):
        with pytest.raises(ValueError):
            Template(id="empty", name="Empty", entries=())

    def test_to_dict(self):
        template = Template.from_definition({"id": "demo", "name": "Demo", "entries": ["a"]})
        data = template.to_dict()
        assert data["id"] == "demo"
        assert data["folders"] == ["a"]


class TestTemplateCatalog:
    """Test cases for TemplateCatalog"""

    def setup_method(self):
        self.catalog = TemplateCatalog()

    def test_templates_in_declaration_order(self):
        ids = [template.id for template in self.catalog.list_templates()]
        assert ids == [definition["id"] for definition in TEMPLATE_DEFINITIONS]

    def test_default_template_present(self):
        default = self.catalog.get_template(DEFAULT_TEMPLATE_ID)
        assert default.entry_names == ("AEP", "prePro")

    def test_developer_template(self):
        developer = self.catalog.get_template("developer")
        assert developer.entry_names == ("src", "docs", "tests", "assets", "build", "README.md")
        assert [e.is_file for e in developer.entries] == [False] * 5 + [True]

    def test_unknown_template_raises(self):
        with pytest.raises(NotFoundError) as exc_info:
            self.catalog.get_template("astronaut")
        assert exc_info.value.key == "astronaut"
        assert exc_info.value.error_code == "NOT_FOUND"

    def test_get_template_or_default(self):
        assert self.catalog.get_template_or_default("astronaut").id == DEFAULT_TEMPLATE_ID
        assert self.catalog.get_template_or_default(None).id == DEFAULT_TEMPLATE_ID
        assert self.catalog.get_template_or_default("photographer").id == "photographer"

    def test_template_ids(self):
        ids = self.catalog.template_ids()
        assert "vfx-artist" in ids
        assert len(ids) == len(set(ids))

    def test_all_entry_names_unique_and_ordered(self):
        names = self.catalog.all_entry_names()
        assert names[:2] == ["AEP", "prePro"]
        assert len(names) == len(set(names))
        assert "README.md" in names

    def test_catalog_requires_default(self):
        with pytest.raises(ValueError):
            TemplateCatalog([{"id": "only", "entries": ["a"]}])

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError):
            TemplateCatalog(
                [
                    {"id": "default", "entries": ["a"]},
                    {"id": "default", "entries": ["b"]},
                ]
            )

    def test_to_document(self):
        document = self.catalog.to_document()
        assert document["default"] == {"name": "Default", "folders": ["AEP", "prePro"]}

    @pytest.mark.asyncio
    async def test_health_check(self):
        result = await self.catalog.health_check()
        assert result.is_success
        assert result.data["template_count"] == len(TEMPLATE_DEFINITIONS)
