"""
Tools Package - Tool Registry and Dispatch

The registry holds the MCP manifest and translates it into function schemas;
the dispatcher runs tool calls against the task store.
"""

from mcp_tasks.tools.dispatcher import (
    IDENTIFIER_KEYS,
    FailureKind,
    ToolDispatcher,
    ToolOutcome,
)
from mcp_tasks.tools.registry import (
    ManifestLoadError,
    ToolRegistry,
    accepts_input,
    load_manifest,
    lookup,
    translate,
)

__all__ = [
    "IDENTIFIER_KEYS",
    "FailureKind",
    "ManifestLoadError",
    "ToolDispatcher",
    "ToolOutcome",
    "ToolRegistry",
    "accepts_input",
    "load_manifest",
    "lookup",
    "translate",
]
