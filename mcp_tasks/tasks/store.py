"""
Task Store - JSON File Repository

This module provides the file-backed task store used by the tool handlers.
The whole task list lives in a single JSON array which is read in full on
every operation and rewritten in full on every mutation.

There is no locking: concurrent mutations race at file granularity.

Pattern: Repository pattern (hides the details of data access)
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Optional

from mcp_tasks.core.exceptions import TaskStoreError
from mcp_tasks.models.domain import Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    JSON-file task storage.

    Provides create/list/complete/update operations over a list of Task
    objects persisted to `path`. The file is initialized with `[]` when it
    does not exist yet.

    Attributes:
        _path: Location of the JSON file.

    Example:
        >>> store = TaskStore("./tasks.json")
        >>> task = store.create("Buy milk")
        >>> store.find_and_complete(task.id)
        True
    """

    def __init__(self, path: str | Path) -> None:
        """
        Initialize TaskStore with a file path.

        Args:
            path: Location of the JSON task file.
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # =========================================================================
    # Persistence Helpers
    # =========================================================================

    def _read(self) -> list[Task]:
        """
        Read the full task list, creating an empty file if missing.

        Raises:
            TaskStoreError: If the file cannot be read or parsed.
        """
        try:
            if not self._path.exists():
                self._write([])
                return []

            raw = json.loads(self._path.read_text(encoding="utf-8"))
            if not isinstance(raw, list):
                raise ValueError("task file must contain a JSON array")
            return [Task.model_validate(item) for item in raw]

        except TaskStoreError:
            raise
        except Exception as e:
            logger.error(f"Failed to read task store {self._path}: {e}")
            raise TaskStoreError(
                f"Failed to read tasks from {self._path}: {e}", path=str(self._path)
            ) from e

    def _write(self, tasks: list[Task]) -> None:
        """
        Rewrite the full task list.

        Raises:
            TaskStoreError: If the file cannot be written.
        """
        try:
            payload = [task.model_dump() for task in tasks]
            self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except Exception as e:
            logger.error(f"Failed to write task store {self._path}: {e}")
            raise TaskStoreError(
                f"Failed to write tasks to {self._path}: {e}", path=str(self._path)
            ) from e

    @staticmethod
    def _next_id(tasks: list[Task]) -> int:
        """Millisecond timestamp, bumped past the largest existing id."""
        candidate = int(time.time() * 1000)
        highest = max((task.id for task in tasks), default=0)
        return max(candidate, highest + 1)

    # =========================================================================
    # Collaborator Contract
    # =========================================================================

    def create(self, title: Any) -> Task:
        """
        Append a new open task.

        Args:
            title: Task title, stored as given.

        Returns:
            The created Task.
        """
        tasks = self._read()
        task = Task(id=self._next_id(tasks), title=title, done=False)
        tasks.append(task)
        self._write(tasks)
        logger.info(f"Created task {task.id}")
        return task

    def list(self) -> list[Task]:
        """Return all tasks in store order."""
        return self._read()

    def get(self, task_id: int) -> Optional[Task]:
        """Return the task with `task_id`, or None."""
        for task in self._read():
            if task.id == task_id:
                return task
        return None

    def find_and_complete(self, identifier: int | str) -> bool:
        """
        Mark one task done.

        An int identifier matches a task id exactly. A string identifier is
        matched case-insensitively as a substring of task titles; only the
        first match in store order is marked done.

        Args:
            identifier: Numeric task id or a title fragment.

        Returns:
            True if a task was marked done, False if nothing matched.
        """
        tasks = self._read()
        index = self._find_index(tasks, identifier)
        if index is None:
            return False

        tasks[index] = tasks[index].model_copy(update={"done": True})
        self._write(tasks)
        logger.info(f"Completed task {tasks[index].id}")
        return True

    def update(self, task_id: int, fields: dict[str, Any]) -> bool:
        """
        Merge `fields` onto the task with `task_id`.

        Only "title" and "done" are applied; other keys are ignored.

        Returns:
            True if the task exists, False otherwise.
        """
        tasks = self._read()
        for i, task in enumerate(tasks):
            if task.id == task_id:
                changes = {k: v for k, v in fields.items() if k in ("title", "done")}
                tasks[i] = task.model_copy(update=changes)
                self._write(tasks)
                logger.info(f"Updated task {task_id}: {sorted(changes)}")
                return True
        return False

    @staticmethod
    def _find_index(tasks: list[Task], identifier: int | str) -> Optional[int]:
        if isinstance(identifier, int):
            for i, task in enumerate(tasks):
                if task.id == identifier:
                    return i
            return None

        needle = identifier.lower()
        for i, task in enumerate(tasks):
            if needle in str(task.title or "").lower():
                return i
        return None
