"""
Folder Registry - persisted, ordered list of folder shortcuts and created projects
"""

import logging
import os
import threading
import time
from pathlib import Path
from typing import List, Optional, Dict, Any, Tuple, Union

from models.folder_record import FolderRecord
from services.storage_service import JsonDocumentStore
from utils.async_base import (
    AsyncServiceInterface,
    ServiceResult,
    ValidationError,
    PersistenceError,
)

logger = logging.getLogger(__name__)

FOLDERS_KEY = "folders"


class FolderRegistry(AsyncServiceInterface):
    """
    In-memory registry of FolderRecords backed by a JSON document

    Paths are stored absolute with ~ expanded and are unique: adding a
    known path, in any spelling, updates that record in place.
    Mutations only touch memory; callers persist right after mutating
    (see add_and_persist / remove_and_persist). A failed write keeps the
    in-memory state and is reported through last_error.
    """

    def __init__(self, store: JsonDocumentStore, document_name: str = "folders.json"):
        super().__init__("FolderRegistry")
        self.store = store
        self.document_name = document_name
        self._records: List[FolderRecord] = []
        self._last_id = 0
        self._lock = threading.RLock()
        self.last_error: Optional[PersistenceError] = None

    async def health_check(self) -> ServiceResult[Dict[str, Any]]:
        """Check registry health"""
        async with self.operation_context("health_check"):
            return ServiceResult.success_result(
                {
                    "status": "healthy" if self.last_error is None else "degraded",
                    "record_count": len(self._records),
                    "document": str(self.store.path_for(self.document_name)),
                    "last_error": self.last_error.message if self.last_error else None,
                }
            )

    def _next_id(self) -> str:
        """Millisecond timestamp token, strictly increasing within the process"""
        candidate = int(time.time() * 1000)
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return str(candidate)

    @staticmethod
    def normalize_path(path: Union[str, Path, None]) -> str:
        """Absolute path with ~ expanded and trailing separators dropped"""
        path_str = str(path).strip() if path is not None else ""
        if not path_str:
            return ""
        return os.path.abspath(os.path.expanduser(path_str))

    def _note_existing_id(self, record_id: str):
        if record_id.isdigit():
            self._last_id = max(self._last_id, int(record_id))

    def load(self) -> List[FolderRecord]:
        """Replace in-memory records with the stored document"""
        document = self.store.read(self.document_name, default=None)
        records: List[FolderRecord] = []

        if document is None:
            logger.info(f"No {self.document_name} found, starting with an empty registry")
        else:
            # Older documents stored a bare list
            raw_records = document.get(FOLDERS_KEY, []) if isinstance(document, dict) else document
            if not isinstance(raw_records, list):
                logger.warning(f"Ignoring malformed {self.document_name}")
                raw_records = []

            seen_paths = set()
            for raw in raw_records:
                if not isinstance(raw, dict) or not raw.get("path"):
                    logger.warning(f"Skipping invalid folder entry: {raw!r}")
                    continue
                path_str = self.normalize_path(raw["path"])
                if path_str in seen_paths:
                    logger.warning(f"Skipping duplicate folder path: {raw['path']}")
                    continue
                seen_paths.add(path_str)
                record = FolderRecord.from_dict(raw)
                record.path = path_str
                if record.id:
                    self._note_existing_id(record.id)
                records.append(record)

            for record in records:
                if not record.id:
                    record.id = self._next_id()

        with self._lock:
            self._records = records
        logger.info(f"Loaded {len(records)} folders")
        return self.list()

    def add(
        self,
        path: Union[str, Path],
        name: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        prepend: bool = False,
    ) -> FolderRecord:
        """
        Insert a record, or update the name and metadata of the record with this path

        Raises:
            ValidationError: If path or name is empty
        """
        path_str = self.normalize_path(path)
        if not path_str:
            raise ValidationError("Folder path must not be empty", field="path")

        if name is None:
            name = Path(path_str).name
        name = name.strip()
        if not name:
            raise ValidationError("Folder name must not be empty", field="name")

        with self._lock:
            existing = self.find_by_path(path_str)
            if existing is not None:
                existing.name = name
                existing.apply_metadata(metadata)
                logger.info(f"Updated folder {existing}")
                return existing

            record = FolderRecord(id=self._next_id(), name=name, path=path_str)
            record.apply_metadata(metadata)
            if prepend:
                self._records.insert(0, record)
            else:
                self._records.append(record)
            logger.info(f"Added folder {record}")
            return record

    def remove(self, record_id: str) -> bool:
        """Remove a record by id; returns False for unknown ids"""
        with self._lock:
            for index, record in enumerate(self._records):
                if record.id == record_id:
                    del self._records[index]
                    logger.info(f"Removed folder {record}")
                    return True
        logger.debug(f"No folder with id {record_id}")
        return False

    def get(self, record_id: str) -> Optional[FolderRecord]:
        with self._lock:
            return next((r for r in self._records if r.id == record_id), None)

    def find_by_path(self, path: Union[str, Path]) -> Optional[FolderRecord]:
        path_str = self.normalize_path(path)
        with self._lock:
            return next((r for r in self._records if r.path == path_str), None)

    def list(self) -> List[FolderRecord]:
        """Snapshot of the records in display order"""
        with self._lock:
            return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def to_document(self) -> Dict[str, Any]:
        with self._lock:
            return {FOLDERS_KEY: [record.to_dict() for record in self._records]}

    def persist_or_raise(self):
        """
        Write the whole registry to the store

        Raises:
            PersistenceError: If the document cannot be written
        """
        try:
            self.store.write(self.document_name, self.to_document())
        except PersistenceError as e:
            self.last_error = e
            logger.error(f"Failed to save folders: {e.message}")
            raise
        self.last_error = None

    def persist(self) -> bool:
        """Write the registry; returns False and keeps memory on failure"""
        try:
            self.persist_or_raise()
            return True
        except PersistenceError:
            return False

    def add_and_persist(
        self,
        path: Union[str, Path],
        name: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        prepend: bool = False,
    ) -> Tuple[FolderRecord, bool]:
        """Add a record and persist; returns the record and whether the write succeeded"""
        record = self.add(path, name, metadata, prepend)
        return record, self.persist()

    def remove_and_persist(self, record_id: str) -> Tuple[bool, bool]:
        """Remove a record and persist; the write is skipped when nothing was removed"""
        removed = self.remove(record_id)
        if not removed:
            return False, True
        return True, self.persist()
