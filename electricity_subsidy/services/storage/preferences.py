"""
Preferences Store

User display preferences, each kept under its own key next to the history:

    darkMode       -> "true" / "false"   (default false)
    notifications  -> "true" / "false"   (default true)
    language       -> "\"English\""       (default "English")

Values are JSON-encoded so booleans and strings survive the string-only
key-value interface.
"""

import json
from typing import Any

from pydantic import ValidationError

from electricity_subsidy.models.calculation import UserPreferences
from electricity_subsidy.services.storage.interface import (
    CorruptedDataError,
    KeyValueStorageInterface,
)


# model field -> storage key
PREFERENCE_KEYS = {
    "dark_mode": "darkMode",
    "notifications_enabled": "notifications",
    "language": "language",
}


class PreferencesStore:
    """Loads and saves UserPreferences through key-value storage."""

    def __init__(self, storage: KeyValueStorageInterface):
        self._storage = storage

    async def load(self) -> UserPreferences:
        """
        Read preferences, using defaults for anything not yet stored.

        Raises:
            CorruptedDataError: If a stored value cannot be parsed
        """
        values: dict[str, Any] = {}
        for field, key in PREFERENCE_KEYS.items():
            raw = await self._storage.get(key)
            if raw is None:
                continue
            try:
                values[field] = json.loads(raw)
            except json.JSONDecodeError as e:
                raise CorruptedDataError(f"Preference '{key}' is not valid JSON: {e}") from e

        try:
            return UserPreferences(**values)
        except ValidationError as e:
            raise CorruptedDataError(f"Stored preferences are invalid: {e}") from e

    async def save(self, preferences: UserPreferences) -> None:
        data = preferences.model_dump(mode="json")
        for field, key in PREFERENCE_KEYS.items():
            await self._storage.set(key, json.dumps(data[field]))

    async def reset(self) -> None:
        """Forget all stored preferences so defaults apply again."""
        for key in PREFERENCE_KEYS.values():
            await self._storage.clear(key)
