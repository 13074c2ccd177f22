# tests/test_preference_store.py
"""
Tests for the YAML preference store.
"""

from pathlib import Path

import pytest
import yaml

from todolist.shared.core.exceptions import StorageFault
from todolist.shared.domain.settings.theme import ThemePreference
from todolist.shared.infrastructure.persistence.preference_store import PreferenceStore


def test_default_is_system(preference_store: PreferenceStore) -> None:
    assert preference_store.get() is ThemePreference.SYSTEM
    assert not preference_store.path.exists()


def test_set_then_get(preference_store: PreferenceStore) -> None:
    preference_store.set(ThemePreference.DARK)
    assert preference_store.get() is ThemePreference.DARK

    preference_store.set(ThemePreference.LIGHT)
    assert preference_store.get() is ThemePreference.LIGHT


def test_value_survives_restart(tmp_path: Path) -> None:
    path = tmp_path / "preferences.yaml"
    store = PreferenceStore(path)
    store.set(ThemePreference.DARK)
    store.close()

    restarted = PreferenceStore(path)
    try:
        assert restarted.get() is ThemePreference.DARK
    finally:
        restarted.close()


def test_file_layout(preference_store: PreferenceStore) -> None:
    preference_store.set(ThemePreference.LIGHT)

    with open(preference_store.path, encoding="utf-8") as f:
        assert yaml.safe_load(f) == {"theme": "LIGHT"}
    assert not preference_store.path.with_name(preference_store.path.name + ".tmp").exists()


def test_other_keys_are_preserved(preference_store: PreferenceStore) -> None:
    preference_store.path.write_text("language: pt\n", encoding="utf-8")

    preference_store.set(ThemePreference.DARK)

    with open(preference_store.path, encoding="utf-8") as f:
        assert yaml.safe_load(f) == {"language": "pt", "theme": "DARK"}


@pytest.mark.parametrize(
    "content, expected",
    [
        (b"theme: AUTO\n", ThemePreference.SYSTEM),
        (b"theme: dark\n", ThemePreference.DARK),
        (b"theme: PURPLE\n", ThemePreference.SYSTEM),
        (b"theme: [1, 2]\n", ThemePreference.SYSTEM),
        (b"- not\n- a mapping\n", ThemePreference.SYSTEM),
        (b"theme: {unclosed\n", ThemePreference.SYSTEM),
        (b"", ThemePreference.SYSTEM),
        (b"theme: \xff\xfe DARK\n", ThemePreference.SYSTEM),
    ],
)
def test_unusable_stored_values_fail_closed(
    preference_store: PreferenceStore, content: bytes, expected: ThemePreference
) -> None:
    preference_store.path.write_bytes(content)
    assert preference_store.get() is expected


def test_write_failure_raises_storage_fault(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    store = PreferenceStore(blocker / "preferences.yaml")
    try:
        with pytest.raises(StorageFault):
            store.set(ThemePreference.DARK)
        assert store.get() is ThemePreference.SYSTEM
    finally:
        store.close()


def test_second_store_on_same_file_is_refused(preference_store: PreferenceStore) -> None:
    with pytest.raises(StorageFault):
        PreferenceStore(preference_store.path)


def test_set_after_close_raises(tmp_path: Path) -> None:
    store = PreferenceStore(tmp_path / "preferences.yaml")
    store.close()
    store.close()
    with pytest.raises(StorageFault):
        store.set(ThemePreference.DARK)
