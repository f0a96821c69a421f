"""Notion export tools package."""

from .get_result import NotionExportGetResultTool

__all__ = ["NotionExportGetResultTool"]
