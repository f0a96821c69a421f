"""Tool Registry."""

from nexport_tools.base import Tool


class ToolRegistry:
    """Tools by name, in registration order.

    The MCP server exposes every tool tagged with the capability it serves.
    """

    def __init__(self):
        self._tools: dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        """Register a tool.

        Raises:
            ValueError: A tool with the same name is already registered
        """
        if tool.name in self._tools:
            raise ValueError(f"Tool {tool.name!r} is already registered")
        self._tools[tool.name] = tool

    def get(self, name: str) -> Tool | None:
        """Get tool by name."""
        return self._tools.get(name)

    def names(self) -> list[str]:
        """Names of all registered tools, in registration order."""
        return list(self._tools)

    def filter_by_capability(self, capability: str) -> list[Tool]:
        """Filter tools by capability tag."""
        return [t for t in self._tools.values() if capability in t.metadata.capabilities]
