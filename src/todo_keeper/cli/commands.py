# src/todo_keeper/cli/commands.py

from __future__ import annotations

import inspect
import logging
import shlex
from collections.abc import Callable
from datetime import datetime
from typing import cast

from ..core.errors import ValidationError
from ..core.models import Todo, TodoInput, TodoStatus
from ..core.state import AppState

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

SHORT_ID_LEN = 8

_STATUS_MARKS = {
    TodoStatus.PENDING: "[ ]",
    TodoStatus.IN_PROGRESS: "[~]",
    TodoStatus.COMPLETED: "[x]",
}


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

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError as e:
            return f"Cannot parse command: {e}."
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- formatting helpers ----


def format_due_date(due_date: str) -> str:
    """ISO timestamp -> "October 19, 2026". Unparseable values are shown raw."""
    if not due_date:
        return ""
    try:
        dt = datetime.fromisoformat(due_date.replace("Z", "+00:00"))
    except ValueError:
        return due_date
    return f"{dt:%B} {dt.day}, {dt.year}"


def format_todo(todo: Todo) -> str:
    line = f"{_STATUS_MARKS[todo.status]} {todo.id[:SHORT_ID_LEN]} {todo.title} ({todo.priority.value})"
    extras: list[str] = []
    if todo.due_date:
        extras.append(f"due {format_due_date(todo.due_date)}")
    if todo.categories:
        extras.append("tags: " + ", ".join(c.name for c in todo.categories))
    if extras:
        line += " - " + "; ".join(extras)
    if todo.description:
        line += f"\n      {todo.description}"
    return line


def _find_todo_id(state: AppState, prefix: str) -> tuple[str | None, str | None]:
    """Resolve a full id or unique id prefix. Returns (todo_id, error)."""
    matches = [t.id for t in state.store.snapshot() if t.id.startswith(prefix)]
    if not matches:
        return None, f"No todo matches id {prefix!r}."
    if len(matches) > 1 and prefix not in matches:
        return None, f"Id prefix {prefix!r} is ambiguous ({len(matches)} todos)."
    return (prefix if prefix in matches else matches[0]), None


def _resolve_category_refs(state: AppState, refs: list[str]) -> list[str]:
    """Map category names or id prefixes to ids; unknown refs pass through (and get dropped)."""
    cats = state.store.categories.all()
    out: list[str] = []
    for ref in refs:
        by_name = [c.id for c in cats if c.name.lower() == ref.lower()]
        by_id = [c.id for c in cats if c.id.startswith(ref)]
        hit = by_name or by_id
        out.append(hit[0] if len(hit) == 1 else ref)
    return out


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    /list             -> all todos, most recent first
    /list <status>    -> only todos in that status
    """
    todos = state.store.snapshot()
    if args:
        try:
            wanted = TodoStatus.parse(args[0])
        except ValidationError as e:
            return str(e)
        todos = tuple(t for t in todos if t.status is wanted)

    if not todos:
        return "No todos yet. Use /add <title> to create one."
    return "\n".join(format_todo(t) for t in todos)


_ADD_FLAGS = {
    "--desc": "description",
    "--due": "due_date",
    "--priority": "priority",
    "--cat": "category_ids",
}


def cmd_add(state: AppState, args: list[str]) -> str:
    """/add <title...> [--desc text] [--due YYYY-MM-DD] [--priority low|medium|high] [--cat a,b]"""
    fields: dict[str, str] = {}
    title_words: list[str] = []
    it = iter(args)
    for tok in it:
        key = _ADD_FLAGS.get(tok)
        if key is None:
            title_words.append(tok)
            continue
        value = next(it, None)
        if value is None:
            return f"Missing value for {tok}."
        fields[key] = value

    cat_refs = [r.strip() for r in fields.get("category_ids", "").split(",") if r.strip()]
    raw = TodoInput(
        title=" ".join(title_words),
        description=fields.get("description", ""),
        due_date=fields.get("due_date", ""),
        priority=fields.get("priority"),
        category_ids=tuple(_resolve_category_refs(state, cat_refs)),
    )

    result = state.pipeline.submit_add(raw)
    if not result.ok or result.todo is None:
        return f"Could not add todo: {result.error}"
    return "Added:\n" + format_todo(result.todo)


def cmd_status(state: AppState, args: list[str]) -> str:
    """/status <id> <pending|in_progress|completed>"""
    if len(args) != 2:
        return "Usage: /status <id> <pending|in_progress|completed>"
    todo_id, err = _find_todo_id(state, args[0])
    if todo_id is None:
        return err or "Todo not found."

    result = state.pipeline.submit_status_change(todo_id, args[1])
    if not result.ok:
        return f"Could not update todo: {result.error}"
    if result.todo is None:
        return "Nothing to update."
    return "Updated:\n" + format_todo(result.todo)


def cmd_done(state: AppState, args: list[str]) -> str:
    """/done <id> toggles completed <-> pending."""
    if len(args) != 1:
        return "Usage: /done <id>"
    todo_id, err = _find_todo_id(state, args[0])
    if todo_id is None:
        return err or "Todo not found."

    result = state.pipeline.toggle_completed(todo_id)
    if not result.ok:
        return f"Could not update todo: {result.error}"
    return format_todo(result.todo) if result.todo else "Nothing to update."


def cmd_category(state: AppState, args: list[str]) -> str:
    """
    /category                    -> list categories
    /category add <name> <color> -> create a category
    """
    if not args:
        cats = state.store.categories.all()
        if not cats:
            return "No categories. Use /category add <name> <color>."
        return "\n".join(f"{c.id[:SHORT_ID_LEN]} {c.name} ({c.color})" for c in cats)

    if args[0].lower() == "add":
        if len(args) != 3:
            return "Usage: /category add <name> <color>"
        result = state.pipeline.add_category(args[1], args[2])
        if not result.ok or result.category is None:
            return f"Could not add category: {result.error}"
        c = result.category
        return f"Category added: {c.id[:SHORT_ID_LEN]} {c.name} ({c.color})"

    return "Usage: /category | /category add <name> <color>"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="List todos: /list [status].", aliases=["ls"])
registry.register(
    "add",
    cmd_add,
    help_text="Add a todo: /add <title> [--desc ..] [--due YYYY-MM-DD] [--priority ..] [--cat a,b].",
)
registry.register("status", cmd_status, help_text="Set status: /status <id> <pending|in_progress|completed>.")
registry.register("done", cmd_done, help_text="Toggle completion: /done <id>.")
registry.register(
    "category", cmd_category, help_text="Categories: /category | /category add <name> <color>.", aliases=["cat"]
)
