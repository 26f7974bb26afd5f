# src/tasklist/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState
from ..tasks import task_api
from ..tasks.task_errors import TaskListError
from ..tasks.task_models import Priority, Task

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        Task-layer errors become a reply; anything else propagates.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return handler(state, args)
        except (TaskListError, ValueError) as e:
            logger.info("Command /%s failed: %s", name, e)
            return f"Error: {e}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_priority(raw: str) -> Priority:
    name = raw.strip().upper()
    if name in Priority.__members__:
        return Priority[name]
    return Priority.coerce(raw)


def _parse_id(raw: str) -> int:
    if not raw.isdigit():
        raise ValueError(f"task id must be a number, got {raw!r}")
    return int(raw)


def _format_task(task: Task) -> str:
    return f"#{task.id} [{task.priority.name.lower()}] {task.description}"


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    """/add <priority> <text...>"""
    if len(args) < 2:
        return "Usage: /add <1-3|high|medium|low> <description>"
    task_id = task_api.add_task(
        state.provider, description=" ".join(args[1:]), priority=_parse_priority(args[0])
    )
    return f"Added task #{task_id}."


def cmd_list(state: AppState, args: list[str]) -> str:
    """/list [max_priority]"""
    max_priority = _parse_priority(args[0]) if args else None
    tasks = task_api.list_tasks(state.provider, max_priority=max_priority)
    if not tasks:
        return "No tasks."
    return "\n".join(_format_task(t) for t in tasks)


def cmd_show(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /show <id>"
    task = task_api.get_task(state.provider, _parse_id(args[0]))
    return _format_task(task) if task else f"No task #{args[0]}."


def cmd_priority(state: AppState, args: list[str]) -> str:
    if len(args) != 2:
        return "Usage: /priority <id> <1-3|high|medium|low>"
    task_id = _parse_id(args[0])
    if task_api.set_priority(state.provider, task_id, _parse_priority(args[1])):
        return f"Task #{task_id} updated."
    return f"No task #{task_id}."


def cmd_edit(state: AppState, args: list[str]) -> str:
    if len(args) < 2:
        return "Usage: /edit <id> <description>"
    task_id = _parse_id(args[0])
    if task_api.set_description(state.provider, task_id, " ".join(args[1:])):
        return f"Task #{task_id} updated."
    return f"No task #{task_id}."


def cmd_delete(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /delete <id>"
    task_id = _parse_id(args[0])
    if task_api.delete_task(state.provider, task_id):
        return f"Task #{task_id} deleted."
    return f"No task #{task_id}."


def cmd_clear(state: AppState, args: list[str]) -> str:
    count = task_api.clear_tasks(state.provider)
    return f"Deleted {count} task(s)."


def cmd_type(state: AppState, args: list[str]) -> str:
    """/type <uri> -> MIME-style type of the resource."""
    if len(args) != 1:
        return "Usage: /type <uri>"
    return state.provider.get_type(args[0])


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add <priority> <description>.")
registry.register("list", cmd_list, help_text="List tasks: /list [max priority].", aliases=["ls"])
registry.register("show", cmd_show, help_text="Show one task: /show <id>.")
registry.register("priority", cmd_priority, help_text="Change priority: /priority <id> <priority>.")
registry.register("edit", cmd_edit, help_text="Change description: /edit <id> <description>.")
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <id>.", aliases=["rm"])
registry.register("clear", cmd_clear, help_text="Delete all tasks.")
registry.register("type", cmd_type, help_text="Resource type of a URI: /type tasks/1.")
