"""Tool Adapters.

Available adapters:
- notion_export: Export Notion pages/blocks/databases to Markdown through
  Notion's asynchronous export task API
"""

__all__ = ["notion_export"]
