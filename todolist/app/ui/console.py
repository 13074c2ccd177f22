"""Terminal front end rendered with rich.

Talks to the core only through ``AppState``: it renders the observable task
list and theme, and turns typed commands into intents.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from todolist.app.state.app_state import AppState
from todolist.app.ui import theme as ui_theme
from todolist.shared.domain.settings.theme import ThemePreference
from todolist.shared.domain.tasks.models import Task

logger = logging.getLogger(__name__)

HELP_TEXT = """\
add <text>        add a task
done <id>         toggle completion of a task
rm <id>           delete a task
theme <mode>      light, dark or system
list              show the list again
help              show this help
quit              leave"""

_ALIASES = {
    "a": "add",
    "new": "add",
    "x": "done",
    "toggle": "done",
    "del": "rm",
    "delete": "rm",
    "remove": "rm",
    "ls": "list",
    "?": "help",
    "q": "quit",
    "exit": "quit",
}

_THEME_WORDS = {"light", "dark", "system", "auto"}


@dataclass(frozen=True)
class Command:
    name: str
    argument: str = ""


def parse_command(line: str) -> Optional[Command]:
    """Split a typed line into a command name and its argument.

    Returns None for an empty line.
    """
    parts = line.strip().split(maxsplit=1)
    if not parts:
        return None
    name = parts[0].lower()
    argument = parts[1] if len(parts) > 1 else ""
    return Command(_ALIASES.get(name, name), argument)


def parse_task_id(argument: str) -> Optional[int]:
    argument = argument.strip().lstrip("#")
    return int(argument) if argument.isdecimal() else None


class ConsoleView:
    """Renders the task list and runs the command loop."""

    def __init__(
        self,
        state: AppState,
        console: Optional[Console] = None,
        read_line: Optional[Callable[[str], str]] = None,
    ) -> None:
        self.state = state
        self.console = console or Console()
        self._read_line = read_line or self.console.input
        self._unsubscribers: List[Callable[[], None]] = []

    def attach(self) -> None:
        """Re-render whenever the tasks or the theme change."""
        if self._unsubscribers:
            return
        self._unsubscribers = [
            self.state.observable_tasks.subscribe(lambda _tasks: self.render(), replay=False),
            self.state.observable_theme_preference.subscribe(lambda _theme: self.render(), replay=False),
            self.state.logs.subscribe(self._show_latest_log, replay=False),
        ]

    def detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def build_table(self) -> Table:
        palette = ui_theme.get_palette(self.state.is_dark)
        table = Table(
            title=Text(self.state.title, style=f"bold {palette['title']}"),
            border_style=palette["border"],
            expand=True,
        )
        table.add_column("#", justify="right", style=palette["muted"], no_wrap=True)
        table.add_column("Done", justify="center", no_wrap=True)
        table.add_column("Task", style=palette["text"])

        for task in self.state.observable_tasks.value or []:
            table.add_row(*self._row(task, palette))
        return table

    def render(self) -> None:
        palette = ui_theme.get_palette(self.state.is_dark)
        tasks = self.state.observable_tasks.value or []
        if tasks:
            self.console.print(self.build_table())
        else:
            self.console.print(
                Panel(Text("No tasks yet. Type 'add <text>'.", style=palette["muted"]), title=self.state.title)
            )
        label = ui_theme.get_theme_label(self.state.observable_theme_preference.value)
        self.console.print(Text(f"Theme: {label}", style=palette["muted"]))

    async def dispatch(self, command: Command) -> bool:
        """Run one command. Returns False when the loop should stop."""
        if command.name == "quit":
            return False
        if command.name == "add":
            await self.state.on_add_task(command.argument)
        elif command.name in ("done", "rm"):
            task = self._lookup(command.argument)
            if task is not None:
                if command.name == "done":
                    await self.state.on_toggle_task(task)
                else:
                    await self.state.on_delete_task(task)
        elif command.name == "theme":
            word = command.argument.strip().lower()
            if word not in _THEME_WORDS:
                self._error("Theme must be light, dark or system")
            else:
                await self.state.on_theme_change(ThemePreference.parse(word))
        elif command.name == "list":
            self.render()
        elif command.name == "help":
            self.console.print(HELP_TEXT)
        else:
            self._error(f"Unknown command '{command.name}'. Type 'help'.")
        return True

    async def run(self) -> None:
        self.attach()
        self.render()
        try:
            while True:
                try:
                    line = await asyncio.to_thread(self._read_line, "> ")
                except EOFError:
                    break
                command = parse_command(line)
                if command is None:
                    continue
                if not await self.dispatch(command):
                    break
                # Let the intent land so the next prompt follows the re-render
                await self.state.bus.wait_until_idle()
        finally:
            self.detach()

    def _lookup(self, argument: str) -> Optional[Task]:
        task_id = parse_task_id(argument)
        if task_id is None:
            self._error("Give the task number, e.g. 'rm 3'")
            return None
        task = self.state.find_task(task_id)
        if task is None:
            self._error(f"No task #{task_id}")
        return task

    def _row(self, task: Task, palette: dict) -> tuple:
        mark = Text("x", style=f"bold {palette['complete']}") if task.complete else Text(" ")
        description = Text(task.description, style=palette["complete"] if task.complete else palette["text"])
        if task.complete:
            description.stylize("strike")
        return str(task.id), mark, description

    def _error(self, message: str) -> None:
        palette = ui_theme.get_palette(self.state.is_dark)
        self.console.print(Text(message, style=palette["error"]))

    def _show_latest_log(self, entries: list) -> None:
        if not entries:
            return
        entry = entries[-1]
        dark = self.state.is_dark
        self.console.print(Text(entry["message"], style=ui_theme.get_log_color(entry["level"], dark)))
