"""
Quick Folder Launcher - Main Application
"""

import logging
import os
from pathlib import Path
from tkinter import messagebox

from config.config import get_config
from config.templates import APPLICATION_DISPLAY_NAMES
from core.callback_handler import CallbackHandler
from core.operation_manager import OperationManager
from gui import MainWindow, CreateProjectWindow, SettingsWindow, ProjectListWindow
from models.app_settings import AppSettings
from models.folder_record import FolderRecord
from models.project import ScannedProject
from services.app_context import AppContext
from services.web_integration_service import WebIntegration
from utils.async_utils import task_manager, shutdown_all

# Cache config values for efficiency
_config = get_config()

# Set up logging
logging.basicConfig(
    level=getattr(logging, _config.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


class QuickFolderLauncher:
    """Main launcher application wiring the services to the desktop window"""

    def __init__(self, context: AppContext, enable_web: bool = True):
        self.context = context.load()

        # Initialize GUI
        self.main_window = MainWindow()
        self.window = self.main_window.window

        # Initialize unified callback handler
        self.callback_handler = CallbackHandler(self.window)
        self.callback_handler.add_success_action("scan", self._show_project_list)
        self.callback_handler.add_success_action("create_project", self._after_folder_change)
        self.callback_handler.add_success_action("add_folder", self._after_add_folder)

        self.operation_manager = OperationManager(
            context=self.context,
            callback_handler=self.callback_handler,
            window=self.window,
            status_callback=self.main_window.update_status,
        )

        self.web_integration = WebIntegration(self.context) if enable_web else None

        # Set up proper event loop for async operations
        self._setup_async_integration()

        # Set up GUI callbacks
        self._setup_gui_callbacks()

        # Set up proper cleanup on window close
        self.main_window.setup_window_protocol(self._on_window_close)

        # Create GUI and load folders
        self.main_window.create_gui()
        self.refresh_folders()

        if self.web_integration is not None:
            self.web_integration.add_change_callback(
                lambda: self.window.after(0, self.refresh_folders)
            )
            self._start_web_interface()

    def _start_web_interface(self):
        """Start the web interface"""
        try:
            self.web_integration.start_web_server()
            logger.info("Web interface started successfully")
        except Exception as e:
            logger.error(f"Failed to start web interface: {e}")

    def _setup_async_integration(self):
        """Set up async integration with tkinter"""
        task_manager.setup_event_loop()
        logger.info("Async integration setup complete")

    def _setup_gui_callbacks(self):
        """Set up GUI event callbacks"""
        callbacks = {
            "open_folder": self.open_folder,
            "scan_folder": self.scan_folder,
            "scan_all": self.scan_all,
            "delete_folder": self.delete_folder,
            "add_folder": self.add_folder,
            "launch_application": self.launch_application,
            "open_create_project_window": self.open_create_project_window,
            "open_settings_window": self.open_settings_window,
        }
        self.main_window.set_callbacks(callbacks)

    def _on_window_close(self):
        """Handle window close event with proper cleanup"""
        logger.info("Application shutdown initiated")
        try:
            if self.web_integration is not None:
                self.web_integration.stop_web_server()
            shutdown_all(timeout=3.0)
        except Exception:
            logger.exception("Error during shutdown cleanup")
        finally:
            self.window.destroy()

    def refresh_folders(self):
        """Redraw the folder list and the active template label"""
        self.main_window.populate_folders(self.context.registry.list())
        self.main_window.set_active_template(
            self.context.settings_service.active_template().display_name
        )

    def _after_folder_change(self, data=None):
        self.refresh_folders()

    def _after_add_folder(self, data=None):
        self.main_window.clear_path()
        self.refresh_folders()

    # Folder operations
    def open_folder(self, record: FolderRecord):
        self.operation_manager.open_folder(record.path)

    def scan_folder(self, record: FolderRecord):
        self.operation_manager.scan_projects([record])

    def scan_all(self):
        folders = self.context.registry.list()
        if not folders:
            messagebox.showinfo("Scan", "No folders saved. Add some folders first.")
            return
        self.operation_manager.scan_projects(folders)

    def delete_folder(self, record: FolderRecord):
        removed, persisted = self.context.registry.remove_and_persist(record.id)
        if removed and not persisted:
            messagebox.showwarning(
                "Remove Folder",
                f"{record.name} was removed, but the folder list could not be saved:\n\n"
                f"{self.context.registry.last_error.message}",
            )
        self.refresh_folders()

    def add_folder(self, path: str):
        """Register a folder, offering to create it when it does not exist"""
        if Path(path).expanduser().is_dir():
            self.operation_manager.add_folder(path)
            return

        name = Path(path.replace("\\", "/").rstrip("/")).name or path
        template = self.context.catalog.default_template()
        tree = "\n".join(f"│   ├── {entry}/" for entry in template.entry_names)
        if messagebox.askyesno(
            "Create Folder",
            "Folder doesn't exist.\n\n"
            f'Would you like to create a project folder structure for "{name}"?\n\n'
            f"This will create:\n├── {name}/\n{tree}",
        ):
            self.operation_manager.add_folder(path, create_missing=True)

    def launch_application(self, key: str):
        app_path = self.context.settings_service.get_application_path(key)
        if not app_path:
            messagebox.showinfo(
                "Launch",
                f"Please set the path for {APPLICATION_DISPLAY_NAMES.get(key, key)} "
                "in settings first",
            )
            self.open_settings_window()
            return
        self.operation_manager.launch_path(app_path)

    def launch_project(self, project: ScannedProject):
        self.operation_manager.launch_path(project.full_path)

    def _show_project_list(self, data):
        window = ProjectListWindow(
            self.window,
            title=data.get("title", "Projects"),
            projects=data.get("projects", []),
            on_launch_callback=self.launch_project,
        )
        window.create_window()

    # Popup windows
    def open_create_project_window(self):
        settings_service = self.context.settings_service
        selection = settings_service.settings.template
        window = CreateProjectWindow(
            self.window,
            templates=self.context.catalog.list_templates(),
            active_template_id=settings_service.active_template().id,
            on_create_callback=self.create_project,
            custom_folder=selection.custom_path if selection.custom_folder_active else None,
        )
        window.create_window()

    def create_project(self, location: str, project_name: str, template_id: str = None):
        if not self.operation_manager.create_project(location, project_name, template_id):
            messagebox.showinfo("Create Project", "A project is already being created")

    def open_settings_window(self):
        window = SettingsWindow(
            self.window,
            settings=self.context.settings_service.settings,
            templates=self.context.catalog.list_templates(),
            on_save_callback=self.apply_settings,
        )
        window.create_window()

    def apply_settings(self, new_settings: AppSettings):
        if not self.context.settings_service.save(new_settings):
            messagebox.showerror(
                "Settings",
                "Settings could not be saved:\n\n"
                f"{self.context.settings_service.last_error.message}",
            )
        self.refresh_folders()

    def run(self):
        """Start the GUI"""
        self.main_window.run()


def main():
    """Main function to run the launcher"""
    enable_web = os.getenv("QFL_DISABLE_WEB", "").lower() not in ("1", "true", "yes")
    context = AppContext()
    logger.info(f"Starting Quick Folder Launcher (data: {context.data_dir})")

    app = QuickFolderLauncher(context, enable_web=enable_web)
    app.run()


if __name__ == "__main__":
    main()
