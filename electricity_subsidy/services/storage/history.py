"""
Calculation History Store

An append-only, capacity-bounded log of past calculations kept under a
single key of the key-value storage.

Persisted layout: a JSON array of record objects, oldest first:

    [{"income": 12000, "familyMembers": 5, "area": "Rural",
      "subsidy": 3960.0, "solarEligible": true,
      "timestamp": "2025-03-07T09:15:02.481516Z"}, ...]

When an append pushes the log past its capacity, the oldest records are
dropped before the log is written back (FIFO eviction).

IMPORTANT: A malformed entry fails the whole read with CorruptedDataError.
There is no partial recovery; the caller decides whether to clear.
"""

import json
from typing import Any

import structlog
from pydantic import ValidationError

from electricity_subsidy.models.calculation import CalculationRecord
from electricity_subsidy.services.storage.interface import (
    CorruptedDataError,
    KeyValueStorageInterface,
)


DEFAULT_HISTORY_KEY = "calculation_history"
DEFAULT_HISTORY_CAPACITY = 50

logger = structlog.get_logger(__name__)


def serialize_record(record: CalculationRecord) -> str:
    """Encode one record as a JSON object string."""
    return json.dumps(record.to_storage_dict())


def deserialize_record(payload: str) -> CalculationRecord:
    """
    Decode one record from a JSON object string.

    Raises:
        CorruptedDataError: If the payload is not a valid record
    """
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise CorruptedDataError(f"Record is not valid JSON: {e}") from e
    return _record_from_entry(data, index=0)


def _record_from_entry(entry: Any, index: int) -> CalculationRecord:
    if not isinstance(entry, dict):
        raise CorruptedDataError(
            f"History entry {index} must be an object, got {type(entry).__name__}"
        )
    try:
        return CalculationRecord.from_storage_dict(entry)
    except ValidationError as e:
        raise CorruptedDataError(f"History entry {index} is malformed: {e}") from e


class CalculationHistoryStore:
    """
    Durable, ordered log of CalculationRecord values.

    Insertion order is chronological order. The store never holds more
    than `capacity` records after an append.
    """

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        key: str = DEFAULT_HISTORY_KEY,
        capacity: int = DEFAULT_HISTORY_CAPACITY,
    ):
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self._storage = storage
        self._key = key
        self._capacity = capacity

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def key(self) -> str:
        return self._key

    async def _read_entries(self) -> list[Any]:
        raw = await self._storage.get(self._key)
        if raw is None or not raw.strip():
            return []
        try:
            entries = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptedDataError(f"History under '{self._key}' is not valid JSON: {e}") from e
        if not isinstance(entries, list):
            raise CorruptedDataError(
                f"History under '{self._key}' must be a JSON array, got {type(entries).__name__}"
            )
        return entries

    async def read_all(self) -> list[CalculationRecord]:
        """
        Return every stored record, oldest first.

        Returns an empty list when nothing has been stored.

        Raises:
            CorruptedDataError: If any stored entry cannot be parsed
        """
        entries = await self._read_entries()
        return [_record_from_entry(entry, index) for index, entry in enumerate(entries)]

    async def append(self, record: CalculationRecord) -> list[CalculationRecord]:
        """
        Add a record to the end of the log and persist it.

        Args:
            record: The calculation to store

        Returns:
            The records evicted to stay within capacity (usually none or one)
        """
        records = await self.read_all()
        records.append(record)

        evicted: list[CalculationRecord] = []
        overflow = len(records) - self._capacity
        if overflow > 0:
            evicted = records[:overflow]
            records = records[overflow:]

        payload = json.dumps([r.to_storage_dict() for r in records])
        await self._storage.set(self._key, payload)

        logger.debug(
            "history_appended",
            key=self._key,
            size=len(records),
            evicted=len(evicted),
        )
        return evicted

    async def clear(self) -> int:
        """
        Remove every record.

        Returns:
            How many records were removed
        """
        try:
            removed = len(await self._read_entries())
        except CorruptedDataError:
            removed = 0
        await self._storage.set(self._key, "[]")
        logger.debug("history_cleared", key=self._key, removed=removed)
        return removed

    async def count(self) -> int:
        return len(await self.read_all())
