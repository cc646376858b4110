"""
Tests for OperationManager - command dispatch and the in-flight guard
"""

import asyncio
import os
import sys
from unittest.mock import Mock
import pytest

# Add parent directory to path to import modules
parent_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

pytest.importorskip("tkinter")

from core.operation_manager import OperationManager
from commands import LaunchPathCommand


class RecordingRunner:
    """Collects scheduled coroutines instead of running them"""

    def __init__(self):
        self.tasks = []

    def run_task(self, coro, callback=None, task_name=None):
        self.tasks.append((task_name, coro))

    def run_next(self):
        _, coro = self.tasks.pop(0)
        return asyncio.run(coro)

    def close_all(self):
        for _, coro in self.tasks:
            coro.close()
        self.tasks.clear()


class ImmediateWindow:
    def after(self, delay, func):
        func()


@pytest.fixture
def runner():
    runner = RecordingRunner()
    yield runner
    runner.close_all()


@pytest.fixture
def manager(app_context, runner, mock_platform_service):
    app_context.platform_service = mock_platform_service
    return OperationManager(
        app_context,
        Mock(),
        ImmediateWindow(),
        status_callback=Mock(),
        runner=runner,
    )


class TestOperationManager:
    """Test cases for OperationManager"""

    def test_run_schedules_command(self, manager, runner):
        assert manager.create_project("/tmp", "Alpha") is True
        assert [name for name, _ in runner.tasks] == ["create-project"]
        assert manager.is_running("create-project")

    def test_same_key_refused_while_in_flight(self, manager, runner):
        assert manager.create_project("/tmp", "Alpha") is True
        assert manager.create_project("/tmp", "Alpha") is False
        assert len(runner.tasks) == 1

    def test_different_keys_run_concurrently(self, manager, runner):
        assert manager.launch_path("/work/a.aep")
        assert manager.launch_path("/work/b.aep")
        assert [name for name, _ in runner.tasks] == [
            "launch-/work/a.aep",
            "launch-/work/b.aep",
        ]

    def test_completion_releases_key_and_routes_result(self, manager, runner, temp_directory):
        manager.create_project(str(temp_directory), "Alpha")

        result = runner.run_next()

        assert result.is_success
        assert not manager.is_running("create-project")
        manager.callback_handler.handle_result.assert_called_once_with(
            "create_project", result
        )
        assert manager.create_project(str(temp_directory), "Beta") is True

    def test_error_result_also_releases_key(self, manager, runner):
        manager.add_folder("")
        result = runner.run_next()

        assert result.is_error
        assert not manager.is_running("add-folder-")
        manager.callback_handler.handle_result.assert_called_once_with("add_folder", result)

    def test_progress_goes_to_status_callback(self, manager, runner, temp_directory):
        manager.create_project(str(temp_directory), "Alpha")
        runner.run_next()

        messages = [c.args[0] for c in manager.status_callback.call_args_list]
        assert "Starting operation..." in messages
        assert "Project created successfully" in messages

    def test_scan_keys(self, manager, runner, app_context):
        one = app_context.registry.add("/work/one", "One")
        two = app_context.registry.add("/work/two", "Two")

        manager.scan_projects([one])
        manager.scan_projects([one, two])

        assert [name for name, _ in runner.tasks] == [f"scan-{one.id}", "scan-all"]

    def test_runner_failure_releases_key(self, app_context):
        class BrokenRunner:
            def run_task(self, coro, callback=None, task_name=None):
                coro.close()
                raise RuntimeError("Event loop not set up")

        manager = OperationManager(app_context, Mock(), ImmediateWindow(), runner=BrokenRunner())
        with pytest.raises(RuntimeError):
            manager.open_folder("/work")
        assert not manager.is_running("open-/work")

    def test_explicit_progress_callback_is_kept(self, manager, runner, app_context):
        progress = Mock()
        command = LaunchPathCommand(
            "/work/a.aep", app_context.platform_service, progress_callback=progress
        )
        manager.run("custom", command)
        assert command.progress_callback is progress

    def test_key_held_by_web_view_refuses_desktop(self, manager, runner, app_context):
        assert app_context.begin_operation("create-project")

        assert manager.create_project("/tmp", "Alpha") is False
        assert runner.tasks == []

        app_context.end_operation("create-project")
        assert manager.create_project("/tmp", "Alpha") is True
