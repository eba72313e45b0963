"""In-memory key-value storage, used by tests and the 'memory' backend."""

from typing import Optional

from electricity_subsidy.services.storage.interface import KeyValueStorageInterface


class InMemoryKeyValueStorage(KeyValueStorageInterface):
    """Dict-backed storage. Contents vanish with the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def clear(self, key: str) -> None:
        self._data.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        """Copy of the raw contents."""
        return dict(self._data)
