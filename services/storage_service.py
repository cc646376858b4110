"""
JSON Document Store - named JSON documents in the application data directory
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Union

from utils.async_base import (
    AsyncServiceInterface,
    ServiceResult,
    PersistenceError,
)
from utils.async_utils import run_in_executor

logger = logging.getLogger(__name__)


class JsonDocumentStore(AsyncServiceInterface):
    """Reads and writes whole JSON documents by name"""

    def __init__(self, data_dir: Union[str, Path]):
        super().__init__("JsonDocumentStore")
        self.data_dir = Path(data_dir).expanduser()

    async def health_check(self) -> ServiceResult[Dict[str, Any]]:
        """Check that the data directory is usable"""
        async with self.operation_context("health_check"):
            try:
                await run_in_executor(self.data_dir.mkdir, parents=True, exist_ok=True)
                writable = os.access(self.data_dir, os.W_OK)
                return ServiceResult.success_result(
                    {
                        "status": "healthy" if writable else "read_only",
                        "data_dir": str(self.data_dir),
                        "writable": writable,
                    }
                )
            except OSError as e:
                return ServiceResult.error_result(
                    PersistenceError(f"Data directory unavailable: {e}")
                )

    def path_for(self, name: str) -> Path:
        """Get the file path of a document"""
        return self.data_dir / name

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def read(self, name: str, default: Any = None) -> Any:
        """
        Read a document, returning default when it is missing or unreadable
        """
        path = self.path_for(name)
        if not path.is_file():
            logger.debug(f"Document {name} not found in {self.data_dir}")
            return default

        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"Document {name} is corrupt, using defaults: {e}")
            return default
        except OSError as e:
            logger.error(f"Could not read document {name}: {e}")
            return default

    def write(self, name: str, data: Any):
        """
        Write a document as a whole, replacing any previous content

        Raises:
            PersistenceError: If the document cannot be written
        """
        path = self.path_for(name)
        temp_name = None
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(
                prefix=f".{name}.", suffix=".tmp", dir=str(self.data_dir)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(temp_name, path)
            temp_name = None
            logger.debug(f"Wrote document {name}")
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(
                f"Could not write {name}: {e}", document=name
            ) from e
        finally:
            if temp_name and os.path.exists(temp_name):
                os.remove(temp_name)

    async def read_async(self, name: str, default: Any = None) -> Any:
        return await run_in_executor(self.read, name, default)

    async def write_async(self, name: str, data: Any) -> ServiceResult[Path]:
        """Write a document and wrap the outcome in a result"""
        async with self.operation_context("write"):
            try:
                await run_in_executor(self.write, name, data)
                return ServiceResult.success_result(
                    self.path_for(name), message=f"Saved {name}"
                )
            except PersistenceError as e:
                return ServiceResult.error_result(e)
