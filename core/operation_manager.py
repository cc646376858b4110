"""
Operation Manager for the Quick Folder Launcher

Creates async commands with callbacks, runs them on the background task
manager and guards against starting the same operation twice.
"""

import logging
from typing import Callable, Optional, List

from commands import (
    CreateProjectCommand,
    ScanProjectsCommand,
    LaunchPathCommand,
    OpenFolderCommand,
    AddFolderCommand,
)
from config.config import get_config
from models.folder_record import FolderRecord
from utils.async_base import AsyncCommand, AsyncResult
from utils.async_utils import task_manager

logger = logging.getLogger(__name__)


class OperationManager:
    """
    Manages all async operation commands for the launcher.

    This class handles:
    - Command instantiation with progress and completion callbacks
    - One in-flight operation per key
    - Routing results to the callback handler
    """

    def __init__(
        self,
        context,
        callback_handler,
        window,
        status_callback: Optional[Callable[[str, str], None]] = None,
        runner=None,
    ):
        """
        Initialize the operation manager.

        Args:
            context: AppContext holding the services
            callback_handler: Unified callback handler for operation results
            window: Main tkinter window
            status_callback: Receives progress messages on the GUI thread
            runner: Task manager used to run commands, defaults to the global one
        """
        self.context = context
        self.callback_handler = callback_handler
        self.window = window
        self.status_callback = status_callback
        self.runner = runner or task_manager

    # Status update methods
    def _update_status(self, message: str, level: str):
        """Standard progress callback for async operations"""
        colors = get_config().gui.colors
        color = colors.get(level, colors["info"])
        if self.status_callback:
            self.window.after(0, lambda: self.status_callback(message, color))

    def is_running(self, key: str) -> bool:
        return self.context.is_running(key)

    def run(
        self,
        key: str,
        command: AsyncCommand,
        on_complete: Optional[Callable[[AsyncResult], None]] = None,
    ) -> bool:
        """
        Start a command unless one with the same key is still running

        Returns:
            False when the operation was refused
        """
        if not self.context.begin_operation(key):
            logger.info(f"Operation {key} already running, ignoring request")
            return False

        def completion(result: AsyncResult):
            self.context.end_operation(key)
            if on_complete:
                on_complete(result)

        command.completion_callback = completion
        if command.progress_callback is None:
            command.progress_callback = self._update_status

        try:
            self.runner.run_task(command.run_with_progress(), task_name=key)
        except Exception:
            self.context.end_operation(key)
            raise
        return True

    def _handler_for(self, operation: str) -> Callable[[AsyncResult], None]:
        return lambda result: self.callback_handler.handle_result(operation, result)

    # Launcher operations
    def create_project(
        self, location: str, project_name: str, template_id: Optional[str] = None
    ) -> bool:
        """Execute project creation"""
        command = CreateProjectCommand(
            location=location,
            project_name=project_name,
            scaffolder=self.context.scaffolder,
            registry=self.context.registry,
            settings_service=self.context.settings_service,
            template_id=template_id,
        )
        return self.run("create-project", command, self._handler_for("create_project"))

    def add_folder(self, path: str, create_missing: bool = False) -> bool:
        """Execute folder registration"""
        command = AddFolderCommand(
            path=path,
            registry=self.context.registry,
            scaffolder=self.context.scaffolder,
            settings_service=self.context.settings_service,
            create_missing=create_missing,
        )
        return self.run(f"add-folder-{path}", command, self._handler_for("add_folder"))

    def scan_projects(self, folders: List[FolderRecord]) -> bool:
        """Execute a project scan for one or all folders"""
        command = ScanProjectsCommand(folders=folders, scanner=self.context.scanner)
        key = f"scan-{folders[0].id}" if len(folders) == 1 else "scan-all"
        return self.run(key, command, self._handler_for("scan"))

    def launch_path(self, path: str) -> bool:
        """Execute launch of a project file or application"""
        command = LaunchPathCommand(
            path=path, platform_service=self.context.platform_service
        )
        return self.run(f"launch-{path}", command, self._handler_for("launch"))

    def open_folder(self, path: str) -> bool:
        """Execute open folder operation"""
        command = OpenFolderCommand(
            path=path, platform_service=self.context.platform_service
        )
        return self.run(f"open-{path}", command, self._handler_for("open"))
