"""
Project Scaffolder - materializes a template as folders and files on disk
"""

import errno
import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Callable, Dict, Any, FrozenSet, Union, Iterable

from models.template import Template, TemplateEntry
from utils.async_base import (
    AsyncServiceInterface,
    ServiceResult,
    ValidationError,
    PermissionDeniedError,
    PathInvalidError,
    AsyncError,
)
from utils.async_utils import run_in_executor

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
ProgressCallback = Callable[[str, bool], None]


@dataclass
class ScaffoldResult:
    """Result of scaffolding a project directory"""

    created_path: Path
    created_entries: List[str] = field(default_factory=list)
    skipped_entries: List[str] = field(default_factory=list)

    @property
    def created_count(self) -> int:
        return len(self.created_entries)

    @property
    def nothing_created(self) -> bool:
        return not self.created_entries


def _map_os_error(error: OSError, path: Path, entry: Optional[str] = None) -> AsyncError:
    """Translate an OS failure into the scaffold error taxonomy"""
    if isinstance(error, PermissionError) or error.errno in (errno.EACCES, errno.EPERM):
        return PermissionDeniedError(
            f"Permission denied creating {path}: {error.strerror or error}",
            path=str(path),
            entry=entry,
        )
    return PathInvalidError(
        f"Cannot create {path}: {error.strerror or error}",
        path=str(path),
        entry=entry,
    )


class ProjectScaffolder(AsyncServiceInterface):
    """Creates project skeletons from templates or from a custom folder"""

    def __init__(self):
        super().__init__("ProjectScaffolder")

    async def health_check(self) -> ServiceResult[Dict[str, Any]]:
        """Check scaffolder health"""
        async with self.operation_context("health_check"):
            return ServiceResult.success_result({"status": "healthy"})

    @staticmethod
    def project_path(location: PathLike, project_name: str) -> Path:
        """
        Join a location with a validated project name

        Raises:
            ValidationError: If the location or name is unusable
        """
        if location is None or not str(location).strip():
            raise ValidationError("Please choose a project location", field="location")

        name = (project_name or "").strip()
        if not name:
            raise ValidationError("Please enter a project name", field="project_name")
        if "/" in name or "\\" in name or name in (".", ".."):
            raise ValidationError(
                f"Project name must be a single folder name: {name}",
                field="project_name",
            )
        return Path(str(location).strip()).expanduser() / name

    def scaffold(
        self,
        target_dir: PathLike,
        template: Template,
        disabled: Optional[Iterable[str]] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> ScaffoldResult:
        """
        Create target_dir and every enabled template entry beneath it

        Existing entries are skipped and never overwritten, so running the
        same scaffold twice creates nothing the second time.

        Raises:
            PermissionDeniedError: If the OS refuses to create a path
            PathInvalidError: If a path cannot be created
        """
        target = Path(target_dir).expanduser()
        disabled_names: FrozenSet[str] = frozenset(disabled or ())

        try:
            target.mkdir(parents=True, exist_ok=True)
        except FileExistsError as e:
            raise PathInvalidError(
                f"A file already exists at {target}", path=str(target)
            ) from e
        except OSError as e:
            raise _map_os_error(e, target) from e

        result = ScaffoldResult(created_path=target)

        for entry in template.entries:
            if entry.name in disabled_names:
                logger.debug(f"Entry {entry.name} disabled, not created")
                continue

            created = self._create_entry(target, entry)
            if created:
                result.created_entries.append(entry.name)
            else:
                result.skipped_entries.append(entry.name)

            if progress_callback:
                progress_callback(entry.name, created)

        logger.info(
            f"Scaffolded {target} from template '{template.id}': "
            f"{len(result.created_entries)} created, "
            f"{len(result.skipped_entries)} already present"
        )
        return result

    def _create_entry(self, target: Path, entry: TemplateEntry) -> bool:
        """Create a single entry; returns False when it already exists"""
        entry_path = target / entry.name
        if entry_path.exists():
            return False

        try:
            if entry.is_file:
                entry_path.parent.mkdir(parents=True, exist_ok=True)
                # "x" mode never truncates an existing file
                with open(entry_path, "x", encoding="utf-8"):
                    pass
            else:
                entry_path.mkdir(parents=True)
        except FileExistsError:
            return False
        except OSError as e:
            raise _map_os_error(e, entry_path, entry.name) from e
        return True

    def scaffold_from_folder(
        self,
        target_dir: PathLike,
        source_dir: PathLike,
        project_name: str,
        placeholder_name: str,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> ScaffoldResult:
        """
        Copy a custom template folder into target_dir

        Every path segment containing placeholder_name has it replaced by
        project_name. Files already present at the destination are kept.

        Raises:
            PathInvalidError: If the source folder is missing or a path cannot be created
            PermissionDeniedError: If the OS refuses to create a path
        """
        source = Path(source_dir).expanduser()
        target = Path(target_dir).expanduser()

        if not source.is_dir():
            raise PathInvalidError(
                f"Custom template folder not found: {source}", path=str(source)
            )

        def rename(segment: str) -> str:
            if placeholder_name:
                return segment.replace(placeholder_name, project_name)
            return segment

        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise _map_os_error(e, target) from e

        result = ScaffoldResult(created_path=target)

        for root, dirs, files in os.walk(source):
            dirs.sort()
            relative = Path(root).relative_to(source)
            destination_root = target.joinpath(*(rename(part) for part in relative.parts))

            for directory in dirs:
                destination = destination_root / rename(directory)
                relative_name = destination.relative_to(target).as_posix()
                if destination.exists():
                    result.skipped_entries.append(relative_name)
                    continue
                try:
                    destination.mkdir(parents=True)
                except OSError as e:
                    raise _map_os_error(e, destination, relative_name) from e
                result.created_entries.append(relative_name)
                if progress_callback:
                    progress_callback(relative_name, True)

            for file_name in sorted(files):
                destination = destination_root / rename(file_name)
                relative_name = destination.relative_to(target).as_posix()
                if destination.exists():
                    result.skipped_entries.append(relative_name)
                    continue
                try:
                    destination.parent.mkdir(parents=True, exist_ok=True)
                    shutil.copy2(Path(root) / file_name, destination)
                except OSError as e:
                    raise _map_os_error(e, destination, relative_name) from e
                result.created_entries.append(relative_name)
                if progress_callback:
                    progress_callback(relative_name, True)

        logger.info(
            f"Copied custom template {source} into {target}: "
            f"{len(result.created_entries)} created"
        )
        return result

    # ========== ASYNC METHODS ==========

    async def scaffold_async(
        self,
        target_dir: PathLike,
        template: Template,
        disabled: Optional[Iterable[str]] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> ServiceResult[ScaffoldResult]:
        """Scaffold in the thread pool and wrap the outcome"""
        async with self.operation_context("scaffold"):
            try:
                result = await run_in_executor(
                    self.scaffold, target_dir, template, disabled, progress_callback
                )
                return ServiceResult.success_result(
                    result,
                    message=f"Created project at {result.created_path}",
                    metadata={"template": template.id},
                )
            except AsyncError as e:
                return ServiceResult.error_result(e)

    async def scaffold_from_folder_async(
        self,
        target_dir: PathLike,
        source_dir: PathLike,
        project_name: str,
        placeholder_name: str,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> ServiceResult[ScaffoldResult]:
        async with self.operation_context("scaffold_from_folder"):
            try:
                result = await run_in_executor(
                    self.scaffold_from_folder,
                    target_dir,
                    source_dir,
                    project_name,
                    placeholder_name,
                    progress_callback,
                )
                return ServiceResult.success_result(
                    result,
                    message=f"Created project at {result.created_path}",
                    metadata={"source": str(source_dir)},
                )
            except AsyncError as e:
                return ServiceResult.error_result(e)
