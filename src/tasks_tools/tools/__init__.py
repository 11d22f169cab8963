"""Tool invocation interface for agent frameworks."""

from tasks_tools.tools.base import Tool, ToolRegistry

__all__ = ["Tool", "ToolRegistry"]
