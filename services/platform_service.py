"""
Platform-specific operations service
"""

import contextlib
import logging
import os
import platform
import subprocess
import threading
from pathlib import Path
from typing import List, Tuple, Optional, Union

from config.config import get_config

from utils.async_utils import run_in_executor

COMMANDS = get_config().commands.commands
ERROR_MESSAGES = get_config().commands.error_messages

logger = logging.getLogger(__name__)


class PlatformService:
    """Service for opening folders and launching files with the OS shell"""

    @staticmethod
    def get_platform() -> str:
        """Get the current platform (windows, linux, darwin)"""
        return platform.system().lower()

    @staticmethod
    def is_windows() -> bool:
        """Check if running on Windows"""
        return PlatformService.get_platform() == "windows"

    @staticmethod
    def is_macos() -> bool:
        """Check if running on macOS"""
        return PlatformService.get_platform() == "darwin"

    @staticmethod
    def get_error_message(error_type: str) -> str:
        """Get a platform specific hint for a failure"""
        current_platform = PlatformService.get_platform()
        messages = ERROR_MESSAGES.get(current_platform, ERROR_MESSAGES["linux"])
        return messages.get(error_type, "")

    @staticmethod
    def _prepare_command(
        command_key: str, subkey: Optional[str] = None, **kwargs
    ) -> List[str]:
        """
        Prepare command from COMMANDS dictionary with formatting
        """
        if command_key not in COMMANDS:
            raise ValueError(f"Unknown command key: {command_key}")

        cmd_template = COMMANDS[command_key]

        if subkey is not None:
            if not isinstance(cmd_template, dict) or subkey not in cmd_template:
                raise ValueError(
                    f"Unknown subkey '{subkey}' for command key '{command_key}'"
                )
            cmd_template = cmd_template[subkey]

        current_platform = PlatformService.get_platform()

        if isinstance(cmd_template, dict):
            if current_platform in cmd_template:
                cmd_template = cmd_template[current_platform]
            else:
                # Default to linux for unknown platforms
                cmd_template = cmd_template.get("linux")
            if cmd_template is None:
                raise ValueError(
                    f"Command '{command_key}' is not available on {current_platform}"
                )

        if not isinstance(cmd_template, list):
            raise ValueError(f"Invalid command template type: {type(cmd_template)}")

        return [
            part.format(**kwargs)
            if any(f"{{{key}}}" in part for key in kwargs)
            else part
            for part in cmd_template
        ]

    @staticmethod
    def run_command_with_result(
        command_key: str, subkey: Optional[str] = None, **kwargs
    ) -> Tuple[bool, str]:
        """
        Run a command and return success/error tuple

        Args:
            command_key: Key to look up command template in COMMANDS dict (e.g., "FILE_OPEN_COMMANDS")
            subkey: Optional subkey within the command group (e.g., "bundle")
            **kwargs: Template variables to format into the command

        Returns:
            (success, message) tuple
        """
        timeout = get_config().service.open_timeout
        try:
            cmd = PlatformService._prepare_command(command_key, subkey, **kwargs)

            result = subprocess.run(
                cmd, capture_output=True, text=True, timeout=timeout, check=False
            )

            if result.returncode == 0:
                return True, result.stdout.strip() if result.stdout else ""
            error_msg = (
                result.stderr.strip()
                if result.stderr
                else f"Command failed with exit code {result.returncode}"
            )
            return False, error_msg

        except subprocess.TimeoutExpired:
            return False, f"Command timed out after {timeout:g} seconds"
        except FileNotFoundError as e:
            hint = PlatformService.get_error_message("opener_not_found")
            return False, f"Command not found: {e.filename}. {hint}".strip()
        except (OSError, ValueError) as e:
            return False, f"Error: {str(e)}"

    @staticmethod
    def _handle_file_open_command(file_path: str) -> Tuple[bool, str]:
        """
        Open a path in the file browser, with explorer.exe quirks on Windows
        """
        if PlatformService.is_windows():
            # Explorer returns 1 even when it opened the window
            with contextlib.suppress(subprocess.TimeoutExpired, OSError):
                result = subprocess.run(
                    ["explorer.exe", file_path],
                    capture_output=True,
                    text=True,
                    timeout=get_config().service.open_timeout,
                    check=False,
                )
                if result.returncode in [0, 1]:
                    return True, "File explorer opened successfully"

            with contextlib.suppress(OSError):
                os.startfile(file_path)
                return True, "File explorer opened successfully"
            return False, "Failed to open file explorer"

        success, message = PlatformService.run_command_with_result(
            "FILE_OPEN_COMMANDS", file_path=file_path
        )
        if success:
            return True, "File manager opened successfully"
        return False, f"Failed to open file manager: {message}"

    @staticmethod
    def open_path(path: Union[str, Path]) -> Tuple[bool, str]:
        """
        Open a folder (or file) in the OS file browser
        Returns (success, message)
        """
        file_path = str(path or "").strip()
        if not file_path:
            return False, "No path provided"
        file_path = os.path.expanduser(file_path)
        if not Path(file_path).exists():
            return False, f"Path does not exist: {file_path}"

        success, message = PlatformService._handle_file_open_command(file_path)
        if success:
            logger.info(f"Opened {file_path}")
        else:
            logger.error(f"Could not open {file_path}: {message}")
        return success, message

    @staticmethod
    def _spawn_detached(cmd: List[str]):
        """Start a process that outlives the launcher"""
        kwargs = {
            "stdin": subprocess.DEVNULL,
            "stdout": subprocess.DEVNULL,
            "stderr": subprocess.DEVNULL,
        }
        if PlatformService.is_windows():
            kwargs["creationflags"] = getattr(
                subprocess, "DETACHED_PROCESS", 0
            ) | getattr(subprocess, "CREATE_NEW_PROCESS_GROUP", 0)
        else:
            kwargs["start_new_session"] = True
        proc = subprocess.Popen(cmd, **kwargs)
        # Reap the child so it does not linger as a zombie
        threading.Thread(target=proc.wait, name="reap-launched", daemon=True).start()
        return proc

    @staticmethod
    def launch_path(path: Union[str, Path]) -> Tuple[bool, str]:
        """
        Launch an application or open a document with its default application
        Returns (success, message); failures are reported, never raised
        """
        app_path = str(path or "").strip()
        if not app_path:
            return False, "No path provided"
        app_path = os.path.expanduser(app_path)

        target = Path(app_path)
        if not target.exists():
            return False, f"Path not found: {app_path}"

        try:
            if PlatformService.is_macos() and target.suffix.lower() == ".app":
                success, message = PlatformService.run_command_with_result(
                    "APP_LAUNCH_COMMANDS", subkey="bundle", app_path=app_path
                )
                if not success:
                    return False, f"Failed to launch {target.name}: {message}"
            elif PlatformService.is_windows():
                os.startfile(app_path)
            elif target.is_file() and os.access(app_path, os.X_OK):
                cmd = PlatformService._prepare_command(
                    "APP_LAUNCH_COMMANDS", subkey="executable", app_path=app_path
                )
                PlatformService._spawn_detached(cmd)
            else:
                success, message = PlatformService.run_command_with_result(
                    "FILE_OPEN_COMMANDS", file_path=app_path
                )
                if not success:
                    return False, f"Failed to open {target.name}: {message}"
        except (OSError, ValueError) as e:
            logger.error(f"Launch of {app_path} failed: {e}")
            return False, f"Failed to launch {app_path}: {e}"

        logger.info(f"Launched {app_path}")
        return True, f"Launched {target.name}"

    # ========== ASYNC METHODS ==========

    @staticmethod
    async def open_path_async(path: Union[str, Path]) -> Tuple[bool, str]:
        return await run_in_executor(PlatformService.open_path, path)

    @staticmethod
    async def launch_path_async(path: Union[str, Path]) -> Tuple[bool, str]:
        return await run_in_executor(PlatformService.launch_path, path)
