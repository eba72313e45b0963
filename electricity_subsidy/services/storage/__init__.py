"""
Storage Services Package

Provides the key-value interface, its in-memory and JSON-file
implementations, and the history and preferences stores built on top.
"""

from electricity_subsidy.services.storage.interface import (
    CorruptedDataError,
    KeyValueStorageInterface,
    StorageError,
)
from electricity_subsidy.services.storage.memory import InMemoryKeyValueStorage
from electricity_subsidy.services.storage.json_file import JsonFileKeyValueStorage
from electricity_subsidy.services.storage.history import (
    CalculationHistoryStore,
    deserialize_record,
    serialize_record,
)
from electricity_subsidy.services.storage.preferences import PreferencesStore

__all__ = [
    # Interface
    "KeyValueStorageInterface",
    # Exceptions
    "CorruptedDataError",
    "StorageError",
    # Implementations
    "InMemoryKeyValueStorage",
    "JsonFileKeyValueStorage",
    # Stores
    "CalculationHistoryStore",
    "PreferencesStore",
    "deserialize_record",
    "serialize_record",
]
