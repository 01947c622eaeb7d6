"""
Providers Package - Chat Completion Adapters

This package contains the LLMProvider port and its adapters.
"""

from mcp_tasks.providers.base import LLMProvider
from mcp_tasks.providers.fake import FakeProvider, make_tool_call
from mcp_tasks.providers.openai import OpenAIProvider

__all__ = [
    "FakeProvider",
    "LLMProvider",
    "OpenAIProvider",
    "make_tool_call",
]
