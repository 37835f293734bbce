"""JSON-file backed record store.

The whole collection lives in a single JSON array. Every operation reads
the file, works on the in-memory list and, for mutations, writes the
whole list back. Records are addressed by their position in the array.
"""

import json
import os
import threading

import structlog

from ondocket.exceptions import OutOfRangeException, StorageException, ValidationException
from ondocket.metrics import content_records_total, track_store_operation
from ondocket.models import ContentRecord
from ondocket.utils import safe_write_json

logger = structlog.get_logger('store')


class JsonFileStorage:
    """Handle on the contents file."""

    def __init__(self, path):
        self.path = path

    def ensure_exists(self):
        """Create an empty collection file when none exists yet"""
        if os.path.exists(self.path):
            return False
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        self.write([])
        logger.info(f"Created empty contents file at {self.path}")
        return True

    def read(self):
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StorageException(f"Failed to read {self.path}: {e}") from e

        if not isinstance(data, list):
            raise StorageException(f"Contents file {self.path} does not hold a JSON array")
        return data

    def write(self, items):
        try:
            safe_write_json(self.path, items)
        except (OSError, TypeError, ValueError) as e:
            raise StorageException(f"Failed to write {self.path}: {e}") from e


def _coerce_record(record):
    if isinstance(record, ContentRecord):
        return record
    return ContentRecord.from_payload(record)


def validate_index(index):
    """Return index as an int; JSON numbers like 1.0 address position 1"""
    # bool is an int subclass but never a valid position
    if isinstance(index, bool):
        raise ValidationException("Invalid index")
    if isinstance(index, float) and index.is_integer():
        return int(index)
    if not isinstance(index, int):
        raise ValidationException("Invalid index")
    return index


def _check_index(index, length):
    index = validate_index(index)
    if index < 0 or index >= length:
        raise OutOfRangeException(index, length)
    return index


class RecordStore:
    """Index-addressed CRUD over the collection.

    Operations are serialized by a per-store lock so two requests handled
    by the same process never interleave their read and write phases.
    Writers in other processes are not coordinated.
    """

    def __init__(self, storage):
        self.storage = storage
        self._lock = threading.RLock()

    def _load(self):
        records = []
        for position, item in enumerate(self.storage.read()):
            try:
                records.append(ContentRecord.from_payload(item))
            except ValidationException as e:
                logger.warning(f"Keeping non-conforming record at position {position} as stored: {e.message}")
                records.append(ContentRecord.from_stored(item))
        content_records_total.set(len(records))
        return records

    def _save(self, records):
        self.storage.write([record.to_payload() for record in records])
        content_records_total.set(len(records))

    @track_store_operation("list")
    def list_all(self):
        """Return the full collection in file order"""
        with self._lock:
            return self._load()

    def count(self):
        return len(self.list_all())

    @track_store_operation("get")
    def get_at(self, index):
        with self._lock:
            records = self._load()
            index = _check_index(index, len(records))
            return records[index]

    @track_store_operation("append")
    def append(self, record):
        """Add a record at the end of the collection and return its index"""
        record = _coerce_record(record)
        with self._lock:
            records = self._load()
            records.append(record)
            self._save(records)
            index = len(records) - 1
        logger.info(f"Appended record at index {index}: {record.post_title!r}")
        return index

    @track_store_operation("replace")
    def replace_at(self, index, record):
        """
        Replace the record at index.

        Raises OutOfRangeException when index is outside the collection;
        the file is left untouched in that case.
        """
        with self._lock:
            records = self._load()
            index = _check_index(index, len(records))
            record = _coerce_record(record)
            records[index] = record
            self._save(records)
        logger.info(f"Replaced record at index {index}: {record.post_title!r}")

    @track_store_operation("remove")
    def remove_at(self, index):
        """
        Remove the record at index; later records shift down by one.

        Raises OutOfRangeException when index is outside the collection.
        """
        with self._lock:
            records = self._load()
            index = _check_index(index, len(records))
            removed = records.pop(index)
            self._save(records)
        logger.info(f"Removed record at index {index}: {removed.post_title!r}")
        return removed
