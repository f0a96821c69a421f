"""Tool interface shared by the registry and the MCP server."""

from typing import Any, Protocol

from pydantic import BaseModel


class ToolMetadata(BaseModel):
    """What a tool does, used to pick the tools a server exposes."""

    dry_run_supported: bool = False
    idempotent: bool = False
    capabilities: list[str] = []


class Tool(Protocol):
    """A named, described action over validated input."""

    name: str
    description: str
    metadata: ToolMetadata

    async def execute(self, ctx: dict, input_data: dict[str, Any]) -> dict[str, Any]:
        """Run the tool; ``ctx`` may carry ``dry_run``."""
        ...
