"""Notion Export Get Result Tool.

Export a Notion page (optionally with its sub-pages) and return every
Markdown file of the export.
"""

from typing import Any

from pydantic import ValidationError

from nexport_obs.logging import get_logger
from nexport_tools.base import ToolMetadata
from nexport_tools.adapters.notion_export.exporter import NotionExporter
from nexport_tools.adapters.notion_export.ids import to_uuid
from nexport_tools.adapters.notion_export.schemas import (
    NotionExportGetResultInput,
    NotionExportGetResultOutput,
)
from nexport_tools.adapters.notion_export.exceptions import (
    NotionExportError,
    NotionExportValidationError,
)

logger = get_logger(__name__)


class NotionExportGetResultTool:
    """Tool for exporting Notion pages as Markdown.

    Capabilities:
    - Export a page, block or database through Notion's export tasks
    - Optionally include sub-pages
    - Return the text of each exported Markdown file

    Use Cases:
    - "Give me the content of page 3af0a1e3..."
    - "Export the project wiki with all sub-pages"
    """

    name = "notion_export_get_result"
    description = "Export a Notion page to Markdown and return the content of each exported file"

    metadata = ToolMetadata(
        dry_run_supported=True,
        idempotent=True,
        capabilities=["notion.export", "notion.read"],
    )

    def __init__(self, token_v2: str, file_token: str, **kwargs):
        """Initialize NotionExportGetResultTool.

        Args:
            token_v2: Notion ``token_v2`` cookie value
            file_token: Notion ``file_token`` cookie value
            **kwargs: Additional exporter configuration
        """
        self.exporter = NotionExporter(token_v2=token_v2, file_token=file_token, **kwargs)

    async def execute(
        self, ctx: dict[str, Any], input_data: dict[str, Any]
    ) -> dict[str, Any]:
        """Execute export.

        Args:
            ctx: Execution context
            input_data: Tool input matching NotionExportGetResultInput schema

        Returns:
            Export result matching NotionExportGetResultOutput schema
        """
        try:
            input_obj = NotionExportGetResultInput(**input_data)
        except ValidationError as e:
            raise NotionExportValidationError(f"Invalid arguments: {e}") from e

        if input_obj.dry_run:
            return self._dry_run_response(input_obj)

        try:
            files = await self.exporter.export(
                input_obj.id, {"recursive": input_obj.recursive}
            )
        except NotionExportError:
            raise
        except Exception as e:
            raise NotionExportError(f"Unexpected error exporting page: {str(e)}") from e

        logger.info(
            "notion_export_tool_completed",
            actor=ctx.get("actor"),
            file_count=len(files),
        )

        output = NotionExportGetResultOutput(
            block_id=to_uuid(input_obj.id),
            files=files,
            file_count=len(files),
            status="success",
        )
        return output.model_dump()

    def _dry_run_response(self, input_obj: NotionExportGetResultInput) -> dict[str, Any]:
        """Generate dry-run mock response."""
        block_id = to_uuid(input_obj.id)
        output = NotionExportGetResultOutput(
            block_id=block_id,
            files=["# Mock Page Title\n\nThis is mock page content for testing purposes."],
            file_count=1,
            status="dry_run",
        )

        return {
            **output.model_dump(),
            "warning": "This is a dry-run response; no real Notion API call was made",
            "would_execute": f"enqueueTask(exportBlock '{block_id}', recursive={input_obj.recursive})",
        }
