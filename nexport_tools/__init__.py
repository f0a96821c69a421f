"""Notion Export Tool System.

Tool interface, metadata and registry shared by the adapters.
"""

from nexport_tools.base import Tool, ToolMetadata
from nexport_tools.registry import ToolRegistry

__all__ = ["Tool", "ToolMetadata", "ToolRegistry"]
