"""Tests for user preference persistence."""

import pytest

from electricity_subsidy.models.calculation import Language, UserPreferences
from electricity_subsidy.services.storage import (
    CorruptedDataError,
    InMemoryKeyValueStorage,
    PreferencesStore,
)


class TestPreferencesStore:
    """Tests for PreferencesStore."""

    async def test_defaults_when_nothing_stored(self):
        store = PreferencesStore(InMemoryKeyValueStorage())
        assert await store.load() == UserPreferences()

    async def test_save_then_load(self):
        store = PreferencesStore(InMemoryKeyValueStorage())
        prefs = UserPreferences(dark_mode=True, notifications_enabled=False, language=Language.SINDHI)
        await store.save(prefs)
        assert await store.load() == prefs

    async def test_stored_under_independent_keys(self):
        storage = InMemoryKeyValueStorage()
        await PreferencesStore(storage).save(UserPreferences(dark_mode=True))
        assert storage.snapshot() == {
            "darkMode": "true",
            "notifications": "true",
            "language": '"English"',
        }

    async def test_partial_storage_falls_back_to_defaults(self):
        storage = InMemoryKeyValueStorage({"language": '"Punjabi"'})
        prefs = await PreferencesStore(storage).load()
        assert prefs.language == Language.PUNJABI
        assert prefs.dark_mode is False
        assert prefs.notifications_enabled is True

    async def test_preferences_do_not_touch_history(self):
        storage = InMemoryKeyValueStorage({"calculation_history": "[]"})
        await PreferencesStore(storage).reset()
        assert await storage.get("calculation_history") == "[]"

    async def test_reset_restores_defaults(self):
        store = PreferencesStore(InMemoryKeyValueStorage())
        await store.save(UserPreferences(dark_mode=True))
        await store.reset()
        assert await store.load() == UserPreferences()

    async def test_unknown_language_is_corrupted(self):
        storage = InMemoryKeyValueStorage({"language": '"Klingon"'})
        with pytest.raises(CorruptedDataError):
            await PreferencesStore(storage).load()

    async def test_invalid_json_is_corrupted(self):
        storage = InMemoryKeyValueStorage({"darkMode": "yes please"})
        with pytest.raises(CorruptedDataError):
            await PreferencesStore(storage).load()
