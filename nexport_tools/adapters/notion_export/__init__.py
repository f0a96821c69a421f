"""Notion export adapter.

Exports Notion pages, blocks and databases through Notion's asynchronous
export tasks and reads the resulting archive:
- Normalize block ids
- Enqueue and poll export tasks
- Download and unpack the export zip
- Select Markdown/CSV files from the archive

Usage:
    from nexport_tools.adapters.notion_export import register_notion_export_tools
    from nexport_tools.registry import ToolRegistry

    registry = ToolRegistry()
    register_notion_export_tools(registry, token_v2="...", file_token="...")
"""

from .archive import ArchiveEntry, ExportArchive
from .client import NotionExportClient
from .exceptions import (
    CorruptArchiveError,
    ExportTaskFailed,
    ExportTimeoutError,
    NoMatchError,
    NotionExportAuthError,
    NotionExportError,
    NotionExportRateLimitError,
    NotionExportValidationError,
    RemoteError,
)
from .exporter import NotionExporter
from .ids import is_block_id, strip_dashes, to_uuid
from .schemas import (
    ExportConfig,
    ExportTask,
    ExportTaskStatus,
    NotionExportGetResultInput,
    NotionExportGetResultOutput,
)
from .selector import csv_predicate, ends_with, is_markdown, select_all, select_one
from .tools import NotionExportGetResultTool

__all__ = [
    # Client
    "NotionExportClient",
    "NotionExporter",
    # Archive
    "ArchiveEntry",
    "ExportArchive",
    # Ids
    "is_block_id",
    "strip_dashes",
    "to_uuid",
    # Selection
    "csv_predicate",
    "ends_with",
    "is_markdown",
    "select_all",
    "select_one",
    # Exceptions
    "NotionExportError",
    "RemoteError",
    "NotionExportAuthError",
    "NotionExportRateLimitError",
    "ExportTaskFailed",
    "ExportTimeoutError",
    "CorruptArchiveError",
    "NoMatchError",
    "NotionExportValidationError",
    # Schemas
    "ExportConfig",
    "ExportTask",
    "ExportTaskStatus",
    "NotionExportGetResultInput",
    "NotionExportGetResultOutput",
    # Tools
    "NotionExportGetResultTool",
]


def register_notion_export_tools(registry, token_v2: str, file_token: str, **kwargs) -> None:
    """Register all Notion export tools with the tool registry.

    Args:
        registry: ToolRegistry instance
        token_v2: Notion ``token_v2`` cookie value
        file_token: Notion ``file_token`` cookie value
        **kwargs: Exporter configuration (config, timeout_seconds, ...)
    """
    registry.register(
        NotionExportGetResultTool(token_v2=token_v2, file_token=file_token, **kwargs)
    )
