"""Services package."""

from electricity_subsidy.services.storage import (
    CalculationHistoryStore,
    CorruptedDataError,
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    KeyValueStorageInterface,
    PreferencesStore,
    StorageError,
)

__all__ = [
    "CalculationHistoryStore",
    "CorruptedDataError",
    "InMemoryKeyValueStorage",
    "JsonFileKeyValueStorage",
    "KeyValueStorageInterface",
    "PreferencesStore",
    "StorageError",
]
