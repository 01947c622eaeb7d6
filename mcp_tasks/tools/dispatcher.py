"""
Tool Dispatcher - Handler Table for the Task Tools

This module maps a tool name plus parsed arguments to an effect on the task
store and returns a JSON-serializable result.

Dispatch never raises for a bad request: unknown tools, missing identifiers
and unmatched titles are reported as {"success": False, "error": ...} so the
orchestration loop can fold them into the transcript and let the model explain
them. Task store faults (TaskStoreError) are not request problems and
propagate to the caller.

Pattern: Command Executor (tool calls dispatched through a lookup table)
Pattern: Dependency Injection (task store is injected)
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

from mcp_tasks.tasks.store import TaskStore

logger = logging.getLogger(__name__)

# Candidate keys for the mark-complete identifier, in precedence order
IDENTIFIER_KEYS: tuple[str, ...] = ("id", "title", "name", "task", "query")


# =============================================================================
# Result Types
# =============================================================================


class FailureKind(str, Enum):
    """Why a handler declined to apply its effect."""

    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    UNKNOWN_TOOL = "unknown_tool"


@dataclass(frozen=True)
class ToolOutcome:
    """
    Result of one dispatched tool call.

    Attributes:
        body: JSON-serializable result folded into the transcript.
        failure: Set when body carries success=False.
    """

    body: dict[str, Any] = field(default_factory=dict)
    failure: Optional[FailureKind] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def _failure(kind: FailureKind, error: str) -> ToolOutcome:
    return ToolOutcome(body={"success": False, "error": error}, failure=kind)


ToolHandler = Callable[[dict[str, Any]], ToolOutcome]


# =============================================================================
# Argument Helpers
# =============================================================================


def resolve_identifier(
    arguments: dict[str, Any], keys: tuple[str, ...] = IDENTIFIER_KEYS
) -> Any:
    """Return the value of the first key in `keys` present in `arguments`."""
    for key in keys:
        value = arguments.get(key)
        if value is not None:
            return value
    return None


def parse_task_id(value: Any) -> Optional[int]:
    """
    Interpret `value` as a numeric task id.

    Accepts ints, integral floats and strings holding either. Booleans are
    never ids.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return int(number) if number.is_integer() else None
    return None


def is_numeric(value: Any) -> bool:
    """True for non-bool ints and floats, and strings float() reads as finite."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    if isinstance(value, str):
        try:
            return math.isfinite(float(value.strip()))
        except ValueError:
            return False
    return False


def parse_done(value: Any) -> Optional[bool]:
    """Coerce a "done" argument to bool; None if it is not boolean-like."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    return None


# =============================================================================
# ToolDispatcher Class
# =============================================================================


class ToolDispatcher:
    """
    Dispatches tool calls against the task store through a handler table.

    The table is built at construction time; names missing from it fall
    through to the unknown-tool handler.

    Attributes:
        _store: The task store collaborator.
        _handlers: Mapping of tool name to handler.

    Example:
        >>> dispatcher = ToolDispatcher(store=TaskStore("./tasks.json"))
        >>> dispatcher.dispatch("create-task", {"title": "Buy milk"})
        {'success': True, 'task': {'id': ..., 'title': 'Buy milk', 'done': False}}
    """

    def __init__(self, store: TaskStore) -> None:
        self._store = store
        self._handlers: dict[str, ToolHandler] = {
            "create-task": self._create_task,
            "list-tasks": self._list_tasks,
            "mark-complete": self._mark_complete,
            "update-task": self._update_task,
        }

    def tool_names(self) -> list[str]:
        return list(self._handlers)

    def has_handler(self, tool_name: str) -> bool:
        return tool_name in self._handlers

    def execute(self, tool_name: str, arguments: dict[str, Any]) -> ToolOutcome:
        """
        Run the handler for `tool_name` and return its outcome.

        Raises:
            TaskStoreError: If the task store is unusable.
        """
        handler = self._handlers.get(tool_name, self._unknown_tool(tool_name))
        outcome = handler(arguments or {})
        if outcome.ok:
            logger.debug(f"Tool {tool_name} succeeded")
        else:
            logger.info(f"Tool {tool_name} declined: {outcome.body.get('error')}")
        return outcome

    def dispatch(self, tool_name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        """Run a tool and return only its JSON-serializable result."""
        return self.execute(tool_name, arguments).body

    # =========================================================================
    # Handlers
    # =========================================================================

    @staticmethod
    def _unknown_tool(tool_name: str) -> ToolHandler:
        def handler(_arguments: dict[str, Any]) -> ToolOutcome:
            return _failure(FailureKind.UNKNOWN_TOOL, f"Unknown tool: {tool_name}")

        return handler

    def _create_task(self, arguments: dict[str, Any]) -> ToolOutcome:
        title = arguments.get("title")
        if title is None or title == "":
            return _failure(FailureKind.INVALID_INPUT, "Missing task title")

        task = self._store.create(title)
        return ToolOutcome(body={"success": True, "task": task.model_dump()})

    def _list_tasks(self, _arguments: dict[str, Any]) -> ToolOutcome:
        tasks = self._store.list()
        return ToolOutcome(body={"tasks": [task.model_dump() for task in tasks]})

    def _mark_complete(self, arguments: dict[str, Any]) -> ToolOutcome:
        identifier = resolve_identifier(arguments)
        if identifier is None or isinstance(identifier, bool):
            return _failure(
                FailureKind.INVALID_INPUT,
                f"Missing task identifier (expected one of: {', '.join(IDENTIFIER_KEYS)})",
            )

        # Numbers only ever match ids, never title text
        if is_numeric(identifier):
            task_id = parse_task_id(identifier)
            if task_id is None:
                return _failure(FailureKind.NOT_FOUND, f"No task with id: {identifier}")
            target: int | str = task_id
        else:
            target = str(identifier).strip()
            if not target:
                return _failure(FailureKind.INVALID_INPUT, "Invalid task identifier")

        if not self._store.find_and_complete(target):
            return _failure(FailureKind.NOT_FOUND, f"No task matching: {identifier}")
        return ToolOutcome(body={"success": True})

    def _update_task(self, arguments: dict[str, Any]) -> ToolOutcome:
        task_id = parse_task_id(arguments.get("id"))
        if task_id is None:
            return _failure(FailureKind.INVALID_INPUT, "Invalid task ID")

        fields: dict[str, Any] = {}
        if arguments.get("title") is not None:
            fields["title"] = arguments["title"]
        if arguments.get("done") is not None:
            done = parse_done(arguments["done"])
            if done is None:
                return _failure(FailureKind.INVALID_INPUT, "Invalid value for done")
            fields["done"] = done

        if not fields:
            return _failure(
                FailureKind.INVALID_INPUT, "Nothing to update: provide title and/or done"
            )

        if not self._store.update(task_id, fields):
            return _failure(FailureKind.NOT_FOUND, f"Task not found: {task_id}")
        return ToolOutcome(body={"success": True})
