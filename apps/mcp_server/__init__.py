"""MCP stdio server for Notion exports."""
