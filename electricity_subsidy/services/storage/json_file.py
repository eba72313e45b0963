"""
JSON File Storage Implementation

DESIGN DECISION: A single JSON object on disk is the local store.
Keys map to string values, exactly like the key-value interface.

TRADEOFFS:
- The whole file is rewritten on every set (fine for a 50-entry history)
- No multi-process coordination (single user, single writer)

Writes go to a temporary file in the same directory which then atomically
replaces the target, so a crash mid-write leaves the previous contents intact.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from electricity_subsidy.services.storage.interface import (
    CorruptedDataError,
    KeyValueStorageInterface,
    StorageError,
)


logger = structlog.get_logger(__name__)


class JsonFileKeyValueStorage(KeyValueStorageInterface):
    """
    Key-value storage persisted to one JSON file.

    The file is created on first write; a missing file reads as empty.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_file(self) -> dict[str, str]:
        """Load the whole store. Missing file means empty store."""
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise StorageError(f"Failed to read {self._path}: {e}") from e

        if not raw.strip():
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptedDataError(f"Store file {self._path} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise CorruptedDataError(
                f"Store file {self._path} must contain a JSON object, got {type(data).__name__}"
            )
        for key, value in data.items():
            if not isinstance(value, str):
                raise CorruptedDataError(
                    f"Value for key '{key}' in {self._path} is not a string"
                )
        return data

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    def _write_file(self, data: dict[str, str]) -> None:
        """Atomically replace the store file with new contents."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(data, tmp, ensure_ascii=False, indent=2)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self._path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def _save(self, data: dict[str, str], operation: str) -> None:
        try:
            self._write_file(data)
        except OSError as e:
            logger.error("store_write_failed", path=str(self._path), operation=operation, error=str(e))
            raise StorageError(f"Failed to write {self._path}: {e}") from e

    def _read_for_write(self, operation: str) -> dict[str, str]:
        """
        Load the store before modifying it.

        An unparseable file has nothing left to preserve, so the write
        starts over from an empty store instead of failing forever.
        """
        try:
            return self._read_file()
        except CorruptedDataError as e:
            logger.warning(
                "store_reset_after_corruption",
                path=str(self._path),
                operation=operation,
                error=str(e),
            )
            return {}

    async def get(self, key: str) -> Optional[str]:
        return self._read_file().get(key)

    async def set(self, key: str, value: str) -> None:
        data = self._read_for_write("set")
        data[key] = value
        self._save(data, operation="set")
        logger.debug("store_key_written", path=str(self._path), key=key)

    async def clear(self, key: str) -> None:
        try:
            data = self._read_file()
        except CorruptedDataError as e:
            logger.warning(
                "store_reset_after_corruption",
                path=str(self._path),
                operation="clear",
                error=str(e),
            )
            data = {}
        else:
            if key not in data:
                return
            del data[key]
        self._save(data, operation="clear")
        logger.debug("store_key_cleared", path=str(self._path), key=key)
