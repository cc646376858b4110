"""
Pytest configuration and fixtures for Quick Folder Launcher tests
"""

import os
import sys
import asyncio
import tempfile
import shutil
from pathlib import Path
import pytest
from unittest.mock import Mock

# Add parent directory to path to import modules
parent_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)


# Configure asyncio for tests
@pytest.fixture(scope="session")
def event_loop_policy():
    """Set event loop policy for tests"""
    from services.platform_service import PlatformService

    if PlatformService.is_windows():
        # Windows requires special handling
        asyncio.set_event_loop_policy(asyncio.WindowsProactorEventLoopPolicy())
    return asyncio.get_event_loop_policy()


@pytest.fixture
def temp_directory():
    """Create a temporary directory for tests"""
    temp_dir = tempfile.mkdtemp(prefix="qfl_test_")
    yield Path(temp_dir)
    # Cleanup
    if os.path.exists(temp_dir):
        shutil.rmtree(temp_dir)


@pytest.fixture
def document_store(temp_directory):
    """JSON store writing into a temporary data directory"""
    from services.storage_service import JsonDocumentStore

    return JsonDocumentStore(temp_directory / "data")


@pytest.fixture
def catalog():
    """Template catalog with the built-in templates"""
    from services.template_catalog import TemplateCatalog

    return TemplateCatalog()


@pytest.fixture
def registry(document_store):
    """Empty folder registry backed by the temporary store"""
    from services.registry_service import FolderRegistry

    registry = FolderRegistry(document_store)
    registry.load()
    return registry


@pytest.fixture
def settings_service(document_store, catalog):
    """Settings service loaded with defaults"""
    from services.settings_service import SettingsService

    service = SettingsService(document_store, catalog)
    service.load()
    return service


@pytest.fixture
def app_context(temp_directory):
    """Application context using a temporary data directory"""
    from services.app_context import AppContext

    return AppContext(data_dir=temp_directory / "data").load()


@pytest.fixture
def mock_platform_service():
    """Create a mock PlatformService"""
    from services.platform_service import PlatformService

    service = Mock(spec=PlatformService)

    # Mock static methods
    service.get_platform = Mock(return_value="linux")
    service.is_windows = Mock(return_value=False)
    service.is_macos = Mock(return_value=False)
    service.open_path = Mock(return_value=(True, "File manager opened successfully"))
    service.launch_path = Mock(return_value=(True, "Launched"))
    service.get_error_message = Mock(return_value="Error occurred")

    return service


@pytest.fixture
def async_task_manager():
    """Create and setup an async task manager for tests"""
    from utils.async_utils import ImprovedAsyncTaskManager

    manager = ImprovedAsyncTaskManager()
    manager.setup_event_loop()

    yield manager

    # Cleanup
    manager.shutdown(timeout=2.0)


# Test markers
def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


# Logging configuration for tests
@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests"""
    import logging

    # Set log level for tests
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# Mock file system helpers
@pytest.fixture
def mock_file_system(temp_directory):
    """Create files and folders under the temporary directory"""

    class MockFileSystem:
        def __init__(self, base_path):
            self.base_path = base_path

        def create_folder(self, path):
            folder = self.base_path / path
            folder.mkdir(parents=True, exist_ok=True)
            return folder

        def create_file(self, path, content=""):
            """Create a file with content"""
            file_path = self.base_path / path
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content)
            return file_path

        def listing(self, path):
            """Sorted relative listing of a tree"""
            root = self.base_path / path
            return sorted(
                (p.relative_to(root).as_posix(), p.is_dir()) for p in root.rglob("*")
            )

    return MockFileSystem(temp_directory)


# Cleanup helpers
@pytest.fixture(autouse=True)
def cleanup_async_resources():
    """Ensure async resources are cleaned up after each test"""
    yield

    # Force cleanup of any remaining async tasks
    try:
        loop = asyncio.get_running_loop()
        pending = asyncio.all_tasks(loop)
        for task in pending:
            task.cancel()
    except RuntimeError:
        pass  # No loop running
