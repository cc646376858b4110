"""
Project command implementations
Handles project creation, scanning, launching and folder registration
"""

from datetime import datetime
from pathlib import Path
from typing import Dict, Any, List, Optional, Sequence

from models.folder_record import FolderRecord
from utils.async_base import (
    AsyncCommand,
    AsyncResult,
    AsyncError,
    ProcessError,
    ValidationError,
    PathInvalidError,
    LaunchError,
)

CUSTOM_TEMPLATE_ID = "custom"


class CreateProjectCommand(AsyncCommand):
    """Scaffold a new project and record it at the top of the folder list"""

    def __init__(
        self,
        location: str,
        project_name: str,
        scaffolder,
        registry,
        settings_service,
        template_id: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.location = location
        self.project_name = (project_name or "").strip()
        self.scaffolder = scaffolder
        self.registry = registry
        self.settings_service = settings_service
        self.template_id = template_id

    async def execute(self) -> AsyncResult[Dict[str, Any]]:
        """Execute the create project command"""
        try:
            target = self.scaffolder.project_path(self.location, self.project_name)

            selection = self.settings_service.settings.template
            if self.template_id:
                template = self.settings_service.catalog.get_template(self.template_id)
            else:
                template = self.settings_service.active_template()

            if selection.custom_folder_active and not self.template_id:
                self._update_progress(
                    f"Copying custom template from {selection.custom_path}...", "info"
                )
                scaffold_result = await self.scaffolder.scaffold_from_folder_async(
                    target,
                    selection.custom_path,
                    self.project_name,
                    selection.placeholder_name,
                    progress_callback=self._entry_progress,
                )
                template_id = CUSTOM_TEMPLATE_ID
            else:
                self._update_progress(
                    f"Creating {self.project_name} from {template.name}...", "info"
                )
                scaffold_result = await self.scaffolder.scaffold_async(
                    target,
                    template,
                    self.settings_service.disabled_entries(),
                    progress_callback=self._entry_progress,
                )
                template_id = template.id

            if scaffold_result.is_error:
                return AsyncResult.error_result(scaffold_result.error)

            record, persisted = self.registry.add_and_persist(
                str(target),
                self.project_name,
                metadata={
                    "created": datetime.now().isoformat(timespec="seconds"),
                    "template": template_id,
                },
                prepend=True,
            )

            result_data = {
                "message": f"Project created at {target}",
                "path": str(target),
                "record": record,
                "scaffold": scaffold_result.data,
                "persisted": persisted,
            }

            if not persisted:
                self._update_progress("Project created but not saved", "warning")
                return AsyncResult.partial_result(
                    result_data,
                    self.registry.last_error,
                    message=(
                        f"Project {self.project_name} was created at {target}, "
                        "but the folder list could not be saved"
                    ),
                )

            self._update_progress("Project created successfully", "success")
            return AsyncResult.success_result(
                result_data,
                message=f"Project {self.project_name} created successfully!\n\nLocation: {target}",
            )

        except AsyncError as e:
            return AsyncResult.error_result(e)
        except Exception as e:
            self.logger.exception(f"Create project failed for {self.project_name}")
            return AsyncResult.error_result(
                ProcessError(
                    f"Project creation failed: {str(e)}", error_code="CREATE_ERROR"
                )
            )

    def _entry_progress(self, entry_name: str, created: bool):
        if created:
            self._update_progress(f"Created {entry_name}", "info")
        else:
            self._update_progress(f"{entry_name} already exists", "info")


class ScanProjectsCommand(AsyncCommand):
    """Scan registered folders for project files"""

    def __init__(
        self,
        folders: List[FolderRecord],
        scanner,
        extensions: Optional[Sequence[str]] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.folders = list(folders)
        self.scanner = scanner
        self.extensions = extensions

    async def execute(self) -> AsyncResult[Dict[str, Any]]:
        """Execute the scan command"""
        try:
            if not self.folders:
                return AsyncResult.error_result(
                    ValidationError("No folders saved. Add some folders first.")
                )

            self._update_progress(f"Scanning {len(self.folders)} folders...", "info")
            scan_result = await self.scanner.scan_async(self.folders, self.extensions)
            if scan_result.is_error:
                return AsyncResult.error_result(scan_result.error)

            projects = scan_result.data
            title = (
                self.folders[0].name if len(self.folders) == 1 else "All Folders"
            )
            return AsyncResult.success_result(
                {"projects": projects, "title": title, "folders": self.folders},
                message=f"Found {len(projects)} projects",
            )

        except Exception as e:
            self.logger.exception("Project scan failed")
            return AsyncResult.error_result(
                ProcessError(f"Scan failed: {str(e)}", error_code="SCAN_ERROR")
            )


class LaunchPathCommand(AsyncCommand):
    """Launch a project file or an application"""

    def __init__(self, path: str, platform_service, **kwargs):
        super().__init__(**kwargs)
        self.path = path
        self.platform_service = platform_service

    async def execute(self) -> AsyncResult[Dict[str, Any]]:
        """Execute the launch command"""
        self._update_progress(f"Launching {Path(self.path).name}...", "info")
        success, message = await self.platform_service.launch_path_async(self.path)
        if not success:
            return AsyncResult.error_result(LaunchError(message, path=self.path))
        return AsyncResult.success_result({"path": self.path}, message=message)


class OpenFolderCommand(AsyncCommand):
    """Open a folder in the OS file browser"""

    def __init__(self, path: str, platform_service, **kwargs):
        super().__init__(**kwargs)
        self.path = path
        self.platform_service = platform_service

    async def execute(self) -> AsyncResult[Dict[str, Any]]:
        """Execute the open folder command"""
        success, message = await self.platform_service.open_path_async(self.path)
        if not success:
            return AsyncResult.error_result(
                LaunchError(
                    f"Could not open folder. Please check if the path exists.\n\n{message}",
                    path=self.path,
                )
            )
        return AsyncResult.success_result({"path": self.path}, message=message)


class AddFolderCommand(AsyncCommand):
    """
    Register an existing folder, or scaffold the default template at a missing path

    The caller asks the user before passing create_missing=True.
    """

    def __init__(
        self,
        path: str,
        registry,
        scaffolder=None,
        settings_service=None,
        create_missing: bool = False,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.path = (path or "").strip()
        self.registry = registry
        self.scaffolder = scaffolder
        self.settings_service = settings_service
        self.create_missing = create_missing

    @staticmethod
    def folder_name(path: str) -> str:
        """Last path segment, for either separator"""
        return Path(path.replace("\\", "/").rstrip("/")).name or path

    async def execute(self) -> AsyncResult[Dict[str, Any]]:
        """Execute the add folder command"""
        try:
            if not self.path:
                return AsyncResult.error_result(
                    ValidationError("Please enter a folder path or click Browse", field="path")
                )

            target = Path(self.registry.normalize_path(self.path))
            name = self.folder_name(str(target))
            created = False

            if not target.is_dir():
                if not self.create_missing:
                    return AsyncResult.error_result(
                        PathInvalidError(f"Folder doesn't exist: {self.path}", path=self.path)
                    )
                if self.scaffolder is None or self.settings_service is None:
                    raise RuntimeError("Creating folders requires a scaffolder and settings")

                template = self.settings_service.catalog.default_template()
                scaffold_result = await self.scaffolder.scaffold_async(
                    target, template, self.settings_service.disabled_entries()
                )
                if scaffold_result.is_error:
                    return AsyncResult.error_result(scaffold_result.error)
                created = True

            existed = self.registry.find_by_path(target) is not None
            record, persisted = self.registry.add_and_persist(target, name)

            if created:
                message = f"Project folder created successfully!\n\nLocation: {record.path}"
            elif existed:
                message = f"Updated project folder: {name}"
            else:
                message = f"Added existing project folder: {name}"

            result_data = {
                "record": record,
                "created": created,
                "updated": existed,
                "persisted": persisted,
            }
            if not persisted:
                return AsyncResult.partial_result(
                    result_data,
                    self.registry.last_error,
                    message=f"{message}\n\nThe folder list could not be saved.",
                )
            return AsyncResult.success_result(result_data, message=message)

        except AsyncError as e:
            return AsyncResult.error_result(e)
        except Exception as e:
            self.logger.exception(f"Add folder failed for {self.path}")
            return AsyncResult.error_result(
                ProcessError(f"Error processing folder: {str(e)}", error_code="ADD_FOLDER_ERROR")
            )
