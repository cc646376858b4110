"""
Web Integration Module for the Quick Folder Launcher
Serves a JSON companion view over the same services as the desktop window
"""

import asyncio
import logging
import os
import threading
from typing import Callable, List, Optional, Tuple

from flask import Flask, request, jsonify

from commands import (
    CreateProjectCommand,
    ScanProjectsCommand,
    LaunchPathCommand,
    AddFolderCommand,
)
from utils.async_base import AsyncError, AsyncResult, ValidationError, NotFoundError

logger = logging.getLogger(__name__)

# Suppress Flask's default info level logging
log = logging.getLogger("werkzeug")
log.setLevel(logging.ERROR)

STATUS_CODES = {
    "VALIDATION_ERROR": 400,
    "NOT_FOUND": 404,
    "PATH_INVALID": 400,
    "PERMISSION_DENIED": 403,
    "OPERATION_IN_PROGRESS": 409,
}


def error_response(error: AsyncError) -> Tuple:
    """JSON body and status code for a failed operation"""
    body = {"success": False, "message": error.message, "error": error.to_dict()}
    return jsonify(body), STATUS_CODES.get(error.error_code, 500)


def result_response(result: AsyncResult, payload: Optional[dict] = None):
    """JSON body for a command result, partial results included"""
    if result.is_error:
        return error_response(result.error)
    body = {"success": True, "message": result.message}
    body.update(payload or {})
    if result.is_partial:
        body["warning"] = result.error.message
    return jsonify(body)


class WebIntegration:
    """Web interface integration for the launcher"""

    def __init__(self, context):
        """Initialize web integration with the shared application context"""
        self.context = context
        self.app = None
        self.web_thread = None
        self.is_running = False
        self.host = context.config.service.web_host
        self.port = context.config.service.web_port
        self._change_callbacks: List[Callable[[], None]] = []

    def add_change_callback(self, callback: Callable[[], None]):
        """Register a callback run after the web view changes folders or settings"""
        self._change_callbacks.append(callback)

    def _notify_change(self):
        for callback in self._change_callbacks:
            try:
                callback()
            except Exception as e:
                logger.error(f"Change callback failed: {e}")

    @staticmethod
    def _run_command(command) -> AsyncResult:
        """Run a command to completion on the request thread"""
        return asyncio.run(command.run_with_progress())

    def _run_guarded(self, key: str, command) -> AsyncResult:
        """Run a command under the same in-flight key the desktop window uses"""
        if not self.context.begin_operation(key):
            raise AsyncError(
                "This operation is already running, try again when it finishes",
                error_code="OPERATION_IN_PROGRESS",
                details={"operation": key},
            )
        try:
            return self._run_command(command)
        finally:
            self.context.end_operation(key)

    def setup_flask_app(self):
        """Set up Flask application with routes"""
        self.app = Flask(__name__)
        self.app.secret_key = os.environ.get(
            "SECRET_KEY", "dev-secret-key-change-in-production"
        )

        # Set up routes
        self._setup_routes()

        return self.app

    def _setup_routes(self):
        """Set up all Flask routes"""
        context = self.context

        @self.app.errorhandler(AsyncError)
        def handle_async_error(error):
            return error_response(error)

        @self.app.route("/api/health")
        def api_health():
            """Service health summary"""
            results = asyncio.run(context.health_check())
            return jsonify(
                {
                    "success": all(result.is_success for result in results.values()),
                    "services": {
                        name: result.data if result.is_success else result.error.to_dict()
                        for name, result in results.items()
                    },
                }
            )

        @self.app.route("/api/templates")
        def api_templates():
            """List templates with the active one marked"""
            active = context.settings_service.active_template()
            return jsonify(
                {
                    "success": True,
                    "active": active.id,
                    "templates": [t.to_dict() for t in context.catalog.list_templates()],
                }
            )

        @self.app.route("/api/folders", methods=["GET"])
        def api_folders():
            """List registered folders in display order"""
            return jsonify(
                {
                    "success": True,
                    "folders": [record.to_dict() for record in context.registry.list()],
                }
            )

        @self.app.route("/api/folders", methods=["POST"])
        def api_add_folder():
            """Register a folder, optionally creating it from the default template"""
            data = request.get_json(silent=True) or {}
            path = data.get("path", "")
            command = AddFolderCommand(
                path=path,
                registry=context.registry,
                scaffolder=context.scaffolder,
                settings_service=context.settings_service,
                create_missing=bool(data.get("create", False)),
            )
            result = self._run_guarded(f"add-folder-{path}", command)
            if not result.is_error:
                self._notify_change()
            payload = {}
            if result.data:
                payload = {
                    "folder": result.data["record"].to_dict(),
                    "created": result.data["created"],
                    "persisted": result.data["persisted"],
                }
            return result_response(result, payload)

        @self.app.route("/api/folders/<folder_id>", methods=["DELETE"])
        def api_delete_folder(folder_id):
            """Remove a folder from the list"""
            removed, persisted = context.registry.remove_and_persist(folder_id)
            if not removed:
                raise NotFoundError(f"Folder not found: {folder_id}", key=folder_id)
            self._notify_change()
            body = {"success": True, "message": "Folder removed", "persisted": persisted}
            if not persisted:
                body["warning"] = context.registry.last_error.message
            return jsonify(body)

        @self.app.route("/api/projects", methods=["POST"])
        def api_create_project():
            """Create a project from a template at a location"""
            data = request.get_json(silent=True) or {}
            command = CreateProjectCommand(
                location=data.get("location", ""),
                project_name=data.get("name", ""),
                scaffolder=context.scaffolder,
                registry=context.registry,
                settings_service=context.settings_service,
                template_id=data.get("template"),
            )
            result = self._run_guarded("create-project", command)
            if not result.is_error:
                self._notify_change()
            payload = {}
            if result.data:
                scaffold = result.data["scaffold"]
                payload = {
                    "path": result.data["path"],
                    "folder": result.data["record"].to_dict(),
                    "persisted": result.data["persisted"],
                    "createdEntries": scaffold.created_entries,
                    "skippedEntries": scaffold.skipped_entries,
                }
            return result_response(result, payload)

        @self.app.route("/api/projects/scan")
        def api_scan_projects():
            """Scan one folder (folder_id) or every registered folder"""
            folder_id = request.args.get("folder_id")
            if folder_id:
                record = context.registry.get(folder_id)
                if record is None:
                    raise NotFoundError(f"Folder not found: {folder_id}", key=folder_id)
                folders = [record]
            else:
                folders = context.registry.list()

            result = self._run_command(
                ScanProjectsCommand(folders=folders, scanner=context.scanner)
            )
            payload = {}
            if result.data:
                payload = {
                    "title": result.data["title"],
                    "projects": [p.to_dict() for p in result.data["projects"]],
                }
            return result_response(result, payload)

        @self.app.route("/api/launch", methods=["POST"])
        def api_launch():
            """Launch a project file or a configured application"""
            data = request.get_json(silent=True) or {}
            path = data.get("path")
            app_key = data.get("application")
            if app_key and not path:
                path = context.settings_service.get_application_path(app_key)
                if not path:
                    raise NotFoundError(
                        f"Please set the path for {app_key} in settings first",
                        key=app_key,
                    )
            if not path:
                raise ValidationError("Missing path or application", field="path")

            result = self._run_command(
                LaunchPathCommand(path=path, platform_service=context.platform_service)
            )
            return result_response(result, {"path": path})

        @self.app.route("/api/settings", methods=["GET"])
        def api_get_settings():
            """Current settings document"""
            return jsonify({"success": True, "settings": context.settings_service.to_dict()})

        @self.app.route("/api/settings", methods=["POST"])
        def api_save_settings():
            """Replace the settings document"""
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                raise ValidationError("Settings must be a JSON object")
            saved = context.settings_service.update_from_dict(data.get("settings", data))
            self._notify_change()
            if not saved:
                return jsonify(
                    {
                        "success": False,
                        "message": context.settings_service.last_error.message,
                    }
                ), 500
            return jsonify(
                {
                    "success": True,
                    "message": "Settings saved",
                    "settings": context.settings_service.to_dict(),
                }
            )

    def start_web_server(self, host: str = None, port: int = None, debug=False):
        """Start the web server in a separate thread"""
        if self.is_running:
            return

        self.host = host or self.host
        self.port = port or self.port
        self.setup_flask_app()
        self.is_running = True

        def run_server():
            try:
                self.app.run(host=self.host, port=self.port, debug=debug, use_reloader=False)
            except Exception as e:
                logger.error(f"Web server error: {e}")
            finally:
                self.is_running = False

        self.web_thread = threading.Thread(target=run_server, daemon=True)
        self.web_thread.start()
        logger.info(f"Web view available at {self.get_web_url()}")

    def stop_web_server(self):
        """Stop the web server"""
        if self.is_running:
            self.is_running = False
            logger.info("Web server stopped")

    def get_web_url(self) -> str:
        """Get the web interface URL"""
        return f"http://{self.host}:{self.port}"

    def is_web_server_running(self) -> bool:
        """Check if web server is running"""
        return self.is_running
