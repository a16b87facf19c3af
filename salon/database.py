"""
File-backed record storage.

Each entity collection is a single JSON document holding an array of records.
Reads take a shared flock on the document, writes take an exclusive flock for
the whole read-modify-write cycle, so writers to one document are serialized
while readers of it proceed together. Different documents never contend.
"""

import fcntl
import json
import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, Optional, TextIO

from . import config
from .exceptions import NotFound, PersistenceError

logger = logging.getLogger(__name__)

Record = dict[str, Any]
Records = list[Record]


class RecordStore:
    """Ordered collection of records for one entity type"""

    def __init__(self, path: Path, label: Optional[str] = None):
        self.path = Path(path)
        self.label = label or self.path.stem

    @contextmanager
    def _locked(self, exclusive: bool) -> Iterator[TextIO]:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # a+ creates a missing document without truncating an existing one
            handle = open(self.path, "a+", encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to open {self.path}: {e}")
            raise PersistenceError(f"Failed to open {self.label} storage: {e}") from e

        try:
            fcntl.flock(handle.fileno(), fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH)
            yield handle
        except OSError as e:
            logger.error(f"I/O error on {self.path}: {e}")
            raise PersistenceError(f"Failed to access {self.label} storage: {e}") from e
        finally:
            try:
                fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
            finally:
                handle.close()

    def _read(self, handle: TextIO) -> Records:
        handle.seek(0)
        content = handle.read()
        if not content.strip():
            return []
        try:
            records = json.loads(content)
        except json.JSONDecodeError as e:
            logger.warning(f"Malformed {self.label} document {self.path}, treating as empty: {e}")
            return []
        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            logger.warning(
                f"{self.label} document {self.path} is not a JSON array of records, treating as empty"
            )
            return []
        return records

    def _write(self, handle: TextIO, records: Records) -> None:
        handle.seek(0)
        handle.truncate()
        json.dump(records, handle, indent=4, ensure_ascii=False)
        handle.flush()
        os.fsync(handle.fileno())

    @staticmethod
    def _next_id(records: Records) -> int:
        max_id = 0
        for record in records:
            try:
                record_id = int(record.get("id", 0))
            except (TypeError, ValueError):
                continue
            if record_id > max_id:
                max_id = record_id
        return max_id + 1

    @staticmethod
    def _matches(record: Record, record_id: int) -> bool:
        return record.get("id") == record_id

    def list(self) -> Records:
        """Return the whole collection in insertion order"""
        with self._locked(exclusive=False) as handle:
            return self._read(handle)

    def get(self, record_id: int) -> Optional[Record]:
        """Return one record by id, or None"""
        for record in self.list():
            if self._matches(record, record_id):
                return record
        return None

    def insert(
        self,
        fields: Record,
        guard: Optional[Callable[[Records], None]] = None,
    ) -> Record:
        """
        Append a new record with id = max(existing ids) + 1.

        guard, when given, is called with the current records while the
        exclusive lock is held and may raise to abort the insert.
        """
        with self._locked(exclusive=True) as handle:
            records = self._read(handle)
            if guard is not None:
                guard(records)
            record = {"id": self._next_id(records)}
            record.update({k: v for k, v in fields.items() if k != "id"})
            records.append(record)
            self._write(handle, records)

        logger.info(f"Inserted {self.label} record {record['id']}")
        return record

    def update(self, record_id: int, fields: Record) -> Record:
        """Merge fields into an existing record"""
        with self._locked(exclusive=True) as handle:
            records = self._read(handle)
            for record in records:
                if self._matches(record, record_id):
                    record.update({k: v for k, v in fields.items() if k != "id"})
                    updated = record
                    break
            else:
                raise NotFound(f"{self.label.capitalize()} record {record_id} not found")
            self._write(handle, records)

        logger.info(f"Updated {self.label} record {record_id}")
        return updated

    def remove(self, record_id: int) -> None:
        """Hard delete one record by id"""
        with self._locked(exclusive=True) as handle:
            records = self._read(handle)
            remaining = [r for r in records if not self._matches(r, record_id)]
            if len(remaining) == len(records):
                raise NotFound(f"{self.label.capitalize()} record {record_id} not found")
            self._write(handle, remaining)

        logger.info(f"Removed {self.label} record {record_id}")

    def remove_where(self, predicate: Callable[[Record], bool]) -> Records:
        """Remove every record matching predicate and return the removed ones"""
        with self._locked(exclusive=True) as handle:
            records = self._read(handle)
            removed = [r for r in records if predicate(r)]
            if removed:
                self._write(handle, [r for r in records if not predicate(r)])

        if removed:
            logger.info(f"Removed {len(removed)} {self.label} record(s)")
        return removed


class Database:
    """The five entity collections under one data directory"""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self.clients = RecordStore(self.data_dir / "clients.json", "client")
        self.staff = RecordStore(self.data_dir / "staff.json", "staff")
        self.services = RecordStore(self.data_dir / "services.json", "service")
        self.appointments = RecordStore(self.data_dir / "appointments.json", "appointment")
        self.incomes = RecordStore(self.data_dir / "incomes.json", "income")

    def stores(self) -> list[RecordStore]:
        return [self.clients, self.staff, self.services, self.appointments, self.incomes]

    def initialize(self) -> None:
        """Create any missing backing documents as empty arrays"""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        for store in self.stores():
            if not store.path.exists():
                store.path.write_text("[]", encoding="utf-8")
                logger.info(f"Created empty {store.label} document at {store.path}")


def get_db() -> Database:
    """Dependency returning the configured database"""
    return Database(config.DATA_DIR)
