"""
Tests for PlatformService - Tests for platform-specific operations
"""

import os
import sys
import stat
import subprocess
from unittest.mock import Mock, patch
import pytest

# Add parent directory to path to import modules
parent_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

from services.platform_service import PlatformService, ERROR_MESSAGES


def completed(returncode=0, stdout="", stderr=""):
    return Mock(returncode=returncode, stdout=stdout, stderr=stderr)


class TestPlatformDetection:
    """Test cases for platform detection helpers"""

    def test_get_platform(self):
        """Test getting current platform"""
        with patch("platform.system") as mock_system:
            mock_system.return_value = "Windows"
            assert PlatformService.get_platform() == "windows"

            mock_system.return_value = "Linux"
            assert PlatformService.get_platform() == "linux"

            mock_system.return_value = "Darwin"
            assert PlatformService.get_platform() == "darwin"

    def test_is_windows_and_macos(self):
        with patch.object(PlatformService, "get_platform") as mock_platform:
            mock_platform.return_value = "windows"
            assert PlatformService.is_windows() is True
            assert PlatformService.is_macos() is False

            mock_platform.return_value = "darwin"
            assert PlatformService.is_windows() is False
            assert PlatformService.is_macos() is True

    def test_get_error_message_falls_back_to_linux(self):
        with patch.object(PlatformService, "get_platform", return_value="freebsd"):
            assert (
                PlatformService.get_error_message("opener_not_found")
                == ERROR_MESSAGES["linux"]["opener_not_found"]
            )
            assert PlatformService.get_error_message("unknown") == ""


class TestPrepareCommand:
    """Test cases for command template formatting"""

    def test_file_open_command_per_platform(self):
        with patch.object(PlatformService, "get_platform", return_value="linux"):
            assert PlatformService._prepare_command(
                "FILE_OPEN_COMMANDS", file_path="/tmp/x"
            ) == ["xdg-open", "/tmp/x"]

        with patch.object(PlatformService, "get_platform", return_value="darwin"):
            assert PlatformService._prepare_command(
                "FILE_OPEN_COMMANDS", file_path="/tmp/x"
            ) == ["open", "/tmp/x"]

    def test_bundle_subkey(self):
        with patch.object(PlatformService, "get_platform", return_value="darwin"):
            assert PlatformService._prepare_command(
                "APP_LAUNCH_COMMANDS", subkey="bundle", app_path="/Applications/AE.app"
            ) == ["open", "-a", "/Applications/AE.app"]

    def test_bundle_unavailable_on_linux(self):
        with patch.object(PlatformService, "get_platform", return_value="linux"):
            with pytest.raises(ValueError):
                PlatformService._prepare_command(
                    "APP_LAUNCH_COMMANDS", subkey="bundle", app_path="/x"
                )

    def test_unknown_keys(self):
        with pytest.raises(ValueError):
            PlatformService._prepare_command("NOPE")
        with pytest.raises(ValueError):
            PlatformService._prepare_command("APP_LAUNCH_COMMANDS", subkey="nope")


class TestRunCommandWithResult:
    """Test cases for run_command_with_result"""

    def test_success(self):
        with patch.object(PlatformService, "get_platform", return_value="linux"):
            with patch("subprocess.run", return_value=completed(0, "ok\n")) as mock_run:
                assert PlatformService.run_command_with_result(
                    "FILE_OPEN_COMMANDS", file_path="/tmp"
                ) == (True, "ok")
                assert mock_run.call_args.args[0] == ["xdg-open", "/tmp"]

    def test_failure_uses_stderr(self):
        with patch("subprocess.run", return_value=completed(2, stderr="boom")):
            assert PlatformService.run_command_with_result(
                "FILE_OPEN_COMMANDS", file_path="/tmp"
            ) == (False, "boom")

    def test_failure_without_stderr(self):
        with patch("subprocess.run", return_value=completed(3)):
            success, message = PlatformService.run_command_with_result(
                "FILE_OPEN_COMMANDS", file_path="/tmp"
            )
        assert not success
        assert "exit code 3" in message

    def test_timeout(self):
        with patch("subprocess.run", side_effect=subprocess.TimeoutExpired("open", 10)):
            success, message = PlatformService.run_command_with_result(
                "FILE_OPEN_COMMANDS", file_path="/tmp"
            )
        assert not success
        assert "timed out" in message

    def test_missing_opener_adds_hint(self):
        with patch.object(PlatformService, "get_platform", return_value="linux"):
            with patch(
                "subprocess.run",
                side_effect=FileNotFoundError(2, "No such file", "xdg-open"),
            ):
                success, message = PlatformService.run_command_with_result(
                    "FILE_OPEN_COMMANDS", file_path="/tmp"
                )
        assert not success
        assert "xdg-open" in message
        assert "xdg-utils" in message


class TestOpenPath:
    """Test cases for opening folders in the file browser"""

    def test_missing_path(self, temp_directory):
        success, message = PlatformService.open_path(temp_directory / "missing")
        assert not success
        assert "does not exist" in message

    def test_empty_path(self):
        assert PlatformService.open_path("") == (False, "No path provided")

    def test_linux_open(self, temp_directory):
        with patch.object(PlatformService, "get_platform", return_value="linux"):
            with patch("subprocess.run", return_value=completed(0)) as mock_run:
                success, _ = PlatformService.open_path(temp_directory)
        assert success
        assert mock_run.call_args.args[0] == ["xdg-open", str(temp_directory)]

    def test_linux_open_failure(self, temp_directory):
        with patch.object(PlatformService, "get_platform", return_value="linux"):
            with patch("subprocess.run", return_value=completed(4, stderr="no handler")):
                success, message = PlatformService.open_path(temp_directory)
        assert not success
        assert "no handler" in message

    def test_windows_explorer_exit_code_one_is_success(self, temp_directory):
        with patch.object(PlatformService, "get_platform", return_value="windows"):
            with patch("subprocess.run", return_value=completed(1)):
                success, _ = PlatformService.open_path(temp_directory)
        assert success

    def test_windows_falls_back_to_startfile(self, temp_directory):
        with patch.object(PlatformService, "get_platform", return_value="windows"):
            with patch("subprocess.run", side_effect=OSError("no explorer")):
                with patch("os.startfile", create=True) as mock_startfile:
                    success, _ = PlatformService.open_path(temp_directory)
        assert success
        mock_startfile.assert_called_once_with(str(temp_directory))


class TestLaunchPath:
    """Test cases for launching applications and project files"""

    def test_missing_path_is_reported(self, temp_directory):
        target = temp_directory / "AE.app"
        assert PlatformService.launch_path(target) == (False, f"Path not found: {target}")

    def test_macos_bundle(self, temp_directory):
        bundle = temp_directory / "AE.app"
        bundle.mkdir()
        with patch.object(PlatformService, "get_platform", return_value="darwin"):
            with patch("subprocess.run", return_value=completed(0)) as mock_run:
                success, message = PlatformService.launch_path(bundle)
        assert success
        assert message == "Launched AE.app"
        assert mock_run.call_args.args[0] == ["open", "-a", str(bundle)]

    def test_macos_bundle_failure(self, temp_directory):
        bundle = temp_directory / "AE.app"
        bundle.mkdir()
        with patch.object(PlatformService, "get_platform", return_value="darwin"):
            with patch("subprocess.run", return_value=completed(1, stderr="damaged")):
                success, message = PlatformService.launch_path(bundle)
        assert not success
        assert "damaged" in message

    def test_document_opens_with_default_application(self, temp_directory):
        project = temp_directory / "spot.aep"
        project.write_text("")
        with patch.object(PlatformService, "get_platform", return_value="linux"):
            with patch("subprocess.run", return_value=completed(0)) as mock_run:
                success, _ = PlatformService.launch_path(project)
        assert success
        assert mock_run.call_args.args[0] == ["xdg-open", str(project)]

    @pytest.mark.skipif(sys.platform.startswith("win"), reason="HOME drives ~ on POSIX")
    def test_home_relative_path_is_expanded(self, temp_directory, monkeypatch):
        (temp_directory / "spot.aep").write_text("")
        monkeypatch.setenv("HOME", str(temp_directory))
        with patch.object(PlatformService, "get_platform", return_value="linux"):
            with patch("subprocess.run", return_value=completed(0)) as mock_run:
                success, _ = PlatformService.launch_path("~/spot.aep")
        assert success
        assert mock_run.call_args.args[0] == ["xdg-open", str(temp_directory / "spot.aep")]

    @pytest.mark.skipif(sys.platform.startswith("win"), reason="POSIX permissions")
    def test_executable_is_spawned_detached(self, temp_directory):
        tool = temp_directory / "tool"
        tool.write_text("#!/bin/sh\n")
        tool.chmod(tool.stat().st_mode | stat.S_IXUSR)
        with patch.object(PlatformService, "get_platform", return_value="linux"):
            with patch("subprocess.Popen") as mock_popen:
                success, _ = PlatformService.launch_path(tool)
        assert success
        assert mock_popen.call_args.args[0] == [str(tool)]
        assert mock_popen.call_args.kwargs["start_new_session"] is True

    def test_spawned_process_is_reaped(self):
        with patch.object(PlatformService, "get_platform", return_value="linux"):
            with patch("subprocess.Popen") as mock_popen:
                with patch("threading.Thread") as mock_thread:
                    proc = PlatformService._spawn_detached(["/usr/bin/tool"])

        assert proc is mock_popen.return_value
        assert mock_thread.call_args.kwargs["target"] == mock_popen.return_value.wait
        assert mock_thread.call_args.kwargs["daemon"] is True
        mock_thread.return_value.start.assert_called_once_with()

    def test_windows_uses_startfile(self, temp_directory):
        project = temp_directory / "spot.prproj"
        project.write_text("")
        with patch.object(PlatformService, "get_platform", return_value="windows"):
            with patch("os.startfile", create=True) as mock_startfile:
                success, _ = PlatformService.launch_path(project)
        assert success
        mock_startfile.assert_called_once_with(str(project))

    def test_os_error_is_reported_not_raised(self, temp_directory):
        project = temp_directory / "spot.prproj"
        project.write_text("")
        with patch.object(PlatformService, "get_platform", return_value="windows"):
            with patch("os.startfile", create=True, side_effect=OSError("no association")):
                success, message = PlatformService.launch_path(project)
        assert not success
        assert "no association" in message

    @pytest.mark.asyncio
    async def test_launch_path_async(self, temp_directory):
        success, message = await PlatformService.launch_path_async(temp_directory / "nope")
        assert not success
        assert message.startswith("Path not found")
