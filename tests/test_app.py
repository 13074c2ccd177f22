# tests/test_app.py
"""
End-to-end tests through the presentation contract exposed by AppState.
"""

import pytest

from todolist.app.bootstrap import TodoApp
from todolist.shared.core import service_registry
from todolist.shared.core.configuration import SystemConfig
from todolist.shared.core.exceptions import StorageFault
from todolist.shared.domain.settings.theme import ThemePreference


async def test_started_app_is_ready(todo_app: TodoApp) -> None:
    assert todo_app.state.is_ready.value is True
    assert todo_app.state.status_text.value == "Ready"
    assert todo_app.state.observable_tasks.value == []
    assert todo_app.state.observable_theme_preference.value is ThemePreference.SYSTEM


async def test_add_and_delete_through_intents(todo_app: TodoApp) -> None:
    state = todo_app.state
    emitted = []
    state.observable_tasks.subscribe(emitted.append, replay=False)

    await state.on_add_task("Buy milk")
    await todo_app.bus.wait_until_idle()

    assert [t.description for t in emitted[-1]] == ["Buy milk"]
    task = emitted[-1][0]
    assert state.find_task(task.id) == task

    await state.on_toggle_task(task)
    await todo_app.bus.wait_until_idle()
    assert state.observable_tasks.value[0].complete is True

    await state.on_delete_task(state.observable_tasks.value[0])
    await todo_app.bus.wait_until_idle()
    assert emitted[-1] == []
    assert state.find_task(task.id) is None


async def test_blank_intent_changes_nothing(todo_app: TodoApp) -> None:
    before = todo_app.state.observable_tasks.emissions

    await todo_app.state.on_add_task("   ")
    await todo_app.bus.wait_until_idle()

    assert todo_app.state.observable_tasks.emissions == before
    assert await todo_app.task_store.snapshot() == []


async def test_theme_change_through_intent(todo_app: TodoApp) -> None:
    await todo_app.state.on_theme_change(ThemePreference.DARK)
    await todo_app.bus.wait_until_idle()

    assert todo_app.state.observable_theme_preference.value is ThemePreference.DARK
    assert todo_app.state.is_dark
    assert todo_app.preferences.get() is ThemePreference.DARK


async def test_logs_feed(todo_app: TodoApp) -> None:
    await todo_app.state.push_log("hello", "warning")
    await todo_app.state.push_status("Saving")
    await todo_app.bus.wait_until_idle()

    [entry] = todo_app.state.logs.value
    assert entry["message"] == "hello"
    assert entry["level"] == "warning"
    assert todo_app.state.status_text.value == "Saving"


async def test_shutdown_waits_for_pending_writes(app_config: SystemConfig) -> None:
    app = TodoApp(app_config)
    await app.start()
    await app.state.on_add_task("written before exit")
    await app.shutdown()

    async with TodoApp(app_config) as restarted:
        assert [t.description for t in restarted.state.observable_tasks.value] == ["written before exit"]


async def test_state_survives_restart(app_config: SystemConfig) -> None:
    async with TodoApp(app_config) as app:
        await app.task_list.submit_new_task("first")
        await app.theme.change_theme(ThemePreference.LIGHT)

    async with TodoApp(app_config) as app:
        assert [t.description for t in app.state.observable_tasks.value] == ["first"]
        assert app.state.observable_theme_preference.value is ThemePreference.LIGHT


async def test_second_app_over_same_files_is_refused(todo_app: TodoApp, app_config: SystemConfig) -> None:
    with pytest.raises(StorageFault):
        TodoApp(app_config)


async def test_app_starts_with_undecodable_preferences(app_config: SystemConfig) -> None:
    prefs = app_config.storage.preferences_path
    prefs.parent.mkdir(parents=True, exist_ok=True)
    prefs.write_bytes(b"theme: \xff\xfe DARK\n")

    async with TodoApp(app_config) as app:
        assert app.state.observable_theme_preference.value is ThemePreference.SYSTEM


async def test_shutdown_drops_exit_cleanup_handler(app_config: SystemConfig) -> None:
    async with TodoApp(app_config) as app:
        assert app.preferences.close in service_registry._cleanup_handlers

    assert app.preferences.close not in service_registry._cleanup_handlers
