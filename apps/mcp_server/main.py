"""
MCP Server - Notion Export over stdio.

Exposes every registered tool tagged ``notion.export``. The Notion export
adapter registers ``notion_export_get_result``, which exports a Notion page
to Markdown and returns one text block per exported file.

Usage:
    NOTION_TOKEN_V2=... NOTION_FILE_TOKEN=... notion-export-mcp
"""

from typing import Annotated

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from mcp.types import TextContent
from pydantic import Field

from nexport_config.settings import Settings
from nexport_obs.logging import get_logger, setup_logging
from nexport_tools.base import Tool
from nexport_tools.registry import ToolRegistry
from nexport_tools.adapters.notion_export import (
    ExportConfig,
    NotionExportError,
    register_notion_export_tools,
)

logger = get_logger(__name__)

SERVER_NAME = "notion-export-mcp-server"
EXPORT_CAPABILITY = "notion.export"


def load_credentials(settings: Settings) -> tuple[str, str]:
    """Return the Notion cookies, failing fast when one is missing."""
    if not settings.NOTION_TOKEN_V2:
        raise RuntimeError("NOTION_TOKEN_V2 environment variable is required")
    if not settings.NOTION_FILE_TOKEN:
        raise RuntimeError("NOTION_FILE_TOKEN environment variable is required")
    return settings.NOTION_TOKEN_V2, settings.NOTION_FILE_TOKEN


def export_config(settings: Settings) -> ExportConfig:
    """Default export options from settings."""
    return ExportConfig(
        time_zone=settings.EXPORT_TIME_ZONE,
        locale=settings.EXPORT_LOCALE,
        collection_view_export_type=settings.EXPORT_COLLECTION_VIEW_EXPORT_TYPE,
        poll_interval_ms=settings.EXPORT_POLL_INTERVAL_MS,
    )


def build_registry(settings: Settings) -> ToolRegistry:
    """Create the tool registry with the Notion export tool registered."""
    token_v2, file_token = load_credentials(settings)

    registry = ToolRegistry()
    register_notion_export_tools(
        registry,
        token_v2=token_v2,
        file_token=file_token,
        config=export_config(settings),
        timeout_seconds=settings.export_timeout,
        base_url=settings.NOTION_API_BASE_URL,
        http_timeout_seconds=settings.HTTP_TIMEOUT_SECONDS,
    )
    return registry


async def get_export_result(tool: Tool, id: str, recursive: bool = False) -> list[TextContent]:
    """Run the export tool and map its result to MCP text content."""
    try:
        result = await tool.execute(
            ctx={"actor": "mcp"},
            input_data={"id": id, "recursive": recursive},
        )
    except NotionExportError as e:
        logger.error("notion_export_request_failed", error=str(e), error_type=type(e).__name__)
        raise ToolError(str(e)) from e

    return [TextContent(type="text", text=text) for text in result["files"]]


def _add_export_tool(server: FastMCP, tool: Tool) -> None:
    @server.tool(name=tool.name, description=tool.description)
    async def export_tool(
        id: Annotated[
            str, Field(description="Notion page id (32 characters 0-9a-z, dashes allowed)")
        ],
        recursive: Annotated[bool, Field(description="Export sub-pages recursively")] = False,
    ):
        return await get_export_result(tool, id, recursive)


def build_server(registry: ToolRegistry) -> FastMCP:
    """Create the FastMCP server with every registered export tool.

    Raises:
        RuntimeError: No registered tool has the export capability
    """
    tools = registry.filter_by_capability(EXPORT_CAPABILITY)
    if not tools:
        raise RuntimeError(f"No tools registered with capability {EXPORT_CAPABILITY!r}")

    server = FastMCP(SERVER_NAME)
    for tool in tools:
        _add_export_tool(server, tool)
    return server


def main():
    """Entry point: load settings, validate credentials, serve over stdio."""
    settings = Settings()
    setup_logging(settings)

    try:
        registry = build_registry(settings)
        server = build_server(registry)
    except RuntimeError as e:
        logger.error("mcp_server_config_error", error=str(e))
        raise SystemExit(1) from e

    logger.info(
        "mcp_server_running", name=SERVER_NAME, transport="stdio", tools=registry.names()
    )
    server.run()


if __name__ == "__main__":
    main()
