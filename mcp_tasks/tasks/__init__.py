"""
Tasks Package - the JSON-file task store behind the tool handlers.
"""

from mcp_tasks.tasks.store import TaskStore

__all__ = ["TaskStore"]
