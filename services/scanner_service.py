"""
Project Scanner - finds project files directly inside registered folders
"""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import List, Dict, Any, Iterable, Optional, Sequence

from config.config import get_config
from models.folder_record import FolderRecord
from models.project import ScannedProject
from utils.async_base import AsyncServiceInterface, ServiceResult, AsyncError
from utils.async_utils import run_in_executor

logger = logging.getLogger(__name__)


def file_created_date(stat_result: os.stat_result) -> datetime:
    """Creation time where the platform records one, otherwise ctime"""
    timestamp = getattr(stat_result, "st_birthtime", None)
    if timestamp is None:
        timestamp = stat_result.st_ctime
    return datetime.fromtimestamp(timestamp)


class ProjectScanner(AsyncServiceInterface):
    """Non-recursive scan of folders for recognized project file extensions"""

    def __init__(
        self,
        extension_labels: Optional[Dict[str, str]] = None,
        ignore_names: Optional[Iterable[str]] = None,
    ):
        super().__init__("ProjectScanner")
        scanner_config = get_config().scanner
        labels = (
            extension_labels
            if extension_labels is not None
            else scanner_config.project_extensions
        )
        self.extension_labels = {ext.lower(): label for ext, label in labels.items()}
        self.ignore_names = set(
            ignore_names if ignore_names is not None else scanner_config.ignore_names
        )

    async def health_check(self) -> ServiceResult[Dict[str, Any]]:
        async with self.operation_context("health_check"):
            return ServiceResult.success_result(
                {
                    "status": "healthy",
                    "extensions": sorted(self.extension_labels),
                }
            )

    @property
    def default_extensions(self) -> Sequence[str]:
        return tuple(self.extension_labels)

    def scan(
        self,
        folders: Iterable[FolderRecord],
        extensions: Optional[Sequence[str]] = None,
    ) -> List[ScannedProject]:
        """
        List project files found directly inside each folder

        Results follow folder order, then directory listing order.
        Missing or unreadable folders are skipped with a warning.
        """
        if extensions is None:
            extensions = self.default_extensions
        wanted = tuple(ext.lower() for ext in extensions)
        projects: List[ScannedProject] = []

        for folder in folders:
            projects.extend(self._scan_folder(folder, wanted))

        logger.info(f"Scan found {len(projects)} project files")
        return projects

    def _scan_folder(
        self, folder: FolderRecord, extensions: Sequence[str]
    ) -> List[ScannedProject]:
        folder_path = Path(folder.path)
        found: List[ScannedProject] = []

        try:
            entries = os.scandir(folder_path)
        except OSError as e:
            logger.warning(f"Skipping folder {folder.name} ({folder.path}): {e}")
            return found

        with entries:
            for entry in entries:
                if entry.name in self.ignore_names:
                    continue
                extension = os.path.splitext(entry.name)[1].lower()
                if extension not in extensions:
                    continue
                try:
                    if not entry.is_file():
                        continue
                    created = file_created_date(entry.stat())
                except OSError as e:
                    logger.warning(f"Could not read {entry.path}: {e}")
                    continue

                found.append(
                    ScannedProject(
                        name=entry.name,
                        path=Path(entry.path),
                        folder=folder.name,
                        extension=extension,
                        created_date=created,
                        type_label=self.extension_labels.get(
                            extension, extension.lstrip(".").upper()
                        ),
                    )
                )

        logger.debug(f"Found {len(found)} projects in {folder.path}")
        return found

    # ========== ASYNC METHODS ==========

    async def scan_async(
        self,
        folders: Iterable[FolderRecord],
        extensions: Optional[Sequence[str]] = None,
    ) -> ServiceResult[List[ScannedProject]]:
        """Scan in the thread pool and wrap the outcome"""
        folder_list = list(folders)
        async with self.operation_context("scan"):
            try:
                projects = await run_in_executor(self.scan, folder_list, extensions)
            except AsyncError as e:
                return ServiceResult.error_result(e)
            return ServiceResult.success_result(
                projects,
                message=f"Found {len(projects)} projects",
                metadata={"folder_count": len(folder_list)},
            )
