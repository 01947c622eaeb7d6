"""
MCP Task Manager

A FastAPI service exposing task tools, an MCP manifest, and a chat relay that
lets a model call those tools.
"""

__version__ = "1.0.0"
