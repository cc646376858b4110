"""
Unified Callback Handler for launcher operations

Maps operation results to blocking acknowledgment dialogs with
per-operation message formatting.
"""

import logging
import tkinter as tk
from tkinter import messagebox
from typing import Dict, Any, Optional, Callable, List
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class CallbackConfig:
    """Configuration for operation-specific callback behavior"""

    # Success message customization
    success_title_template: str = "{operation_title} Complete"
    success_message_template: str = "{operation_title} completed successfully"
    success_show_dialog: bool = True

    # Error message customization
    error_title_template: str = "{operation_title} Error"
    error_message_template: str = "{error_message}"

    # Partial result customization
    partial_title_template: str = "{operation_title} Warning"
    partial_message_template: str = "{message}\n\n{error_message}"

    # Data extraction functions
    custom_success_message: Optional[Callable[[Dict[str, Any]], str]] = None

    # Additional UI actions
    additional_success_actions: List[Callable[[Dict[str, Any]], None]] = field(
        default_factory=list
    )


class CallbackHandler:
    """Unified callback handler for all launcher operations"""

    def __init__(self, window: tk.Tk):
        """
        Initialize the callback handler.

        Args:
            window: The main tkinter window, used to get back onto the GUI thread
        """
        self.window = window
        self.operation_configs = self._initialize_operation_configs()

    def _initialize_operation_configs(self) -> Dict[str, CallbackConfig]:
        """Initialize standardized configurations for different operation types"""
        return {
            "create_project": CallbackConfig(
                success_title_template="Project Created",
                error_title_template="Create Project Error",
            ),
            "add_folder": CallbackConfig(
                success_title_template="Folder Added",
                error_title_template="Add Folder Error",
            ),
            # Scan results open a project list window instead of a dialog
            "scan": CallbackConfig(success_show_dialog=False),
            "launch": CallbackConfig(success_show_dialog=False),
            "open": CallbackConfig(
                success_show_dialog=False, error_title_template="Open Folder Error"
            ),
        }

    @staticmethod
    def _operation_title(operation: str) -> str:
        return operation.replace("_", " ").title()

    def handle_result(self, operation: str, result) -> None:
        """Dispatch a command result to the matching dialog"""
        if result.is_error:
            self.show_error(operation, result.error)
        elif result.is_partial:
            self.show_partial_result(operation, result.data, result.error, result.message)
        else:
            self.show_success(operation, result.data, result.message)

    def show_success(
        self, operation: str, data: Dict[str, Any] = None, message: str = None
    ) -> None:
        """
        Unified success callback for all operations.

        Args:
            operation: The operation type (create_project, scan, launch, ...)
            data: Operation result data
            message: Result message, used when no custom formatter is configured
        """
        data = data or {}
        config = self.get_operation_config(operation)
        title_word = self._operation_title(operation)

        if config.custom_success_message:
            text = config.custom_success_message(data)
        else:
            text = message or config.success_message_template.format(
                operation_title=title_word
            )

        if config.success_show_dialog:
            title = config.success_title_template.format(operation_title=title_word)
            self._show_info_message(title, text)

        for action in config.additional_success_actions:
            self.window.after(0, lambda action=action: action(data))

    def show_error(self, operation: str, error: Exception) -> None:
        """
        Unified error callback for all operations.

        Args:
            operation: The operation type
            error: The error that occurred
        """
        config = self.get_operation_config(operation)
        error_message = getattr(error, "message", str(error))
        logger.error(f"{operation} failed: {error_message}")

        message = config.error_message_template.format(
            operation_title=self._operation_title(operation), error_message=error_message
        )
        title = config.error_title_template.format(
            operation_title=self._operation_title(operation)
        )
        self._show_error_message(title, message)

    def show_partial_result(
        self,
        operation: str,
        data: Dict[str, Any],
        error: Exception,
        message: str = None,
    ) -> None:
        """
        Handle partial success results (completed with warnings/issues).

        Args:
            operation: The operation type
            data: Partial result data
            error: The warning/issue that occurred
            message: Result message describing what did succeed
        """
        config = self.get_operation_config(operation)
        error_message = getattr(error, "message", str(error))
        logger.warning(f"{operation} completed with issues: {error_message}")

        text = config.partial_message_template.format(
            message=message or "", error_message=error_message
        ).strip()
        title = config.partial_title_template.format(
            operation_title=self._operation_title(operation)
        )
        self._show_warning_message(title, text)

        for action in config.additional_success_actions:
            self.window.after(0, lambda action=action: action(data or {}))

    # Thread-safe GUI update helpers
    def _show_info_message(self, title: str, message: str) -> None:
        """Show info message in GUI thread"""
        self.window.after(0, lambda: messagebox.showinfo(title, message))

    def _show_error_message(self, title: str, message: str) -> None:
        """Show error message in GUI thread"""
        self.window.after(0, lambda: messagebox.showerror(title, message))

    def _show_warning_message(self, title: str, message: str) -> None:
        """Show warning message in GUI thread"""
        self.window.after(0, lambda: messagebox.showwarning(title, message))

    def register_operation_config(self, operation: str, config: CallbackConfig) -> None:
        """Register a custom configuration for an operation"""
        self.operation_configs[operation] = config

    def get_operation_config(self, operation: str) -> CallbackConfig:
        """Get the configuration for an operation"""
        return self.operation_configs.get(operation, CallbackConfig())

    def add_success_action(
        self, operation: str, action: Callable[[Dict[str, Any]], None]
    ) -> None:
        """Run an extra GUI action after a successful operation"""
        config = self.operation_configs.setdefault(operation, CallbackConfig())
        config.additional_success_actions.append(action)
