"""
Notion Export Applications Package.

Contains:
- mcp_server: MCP stdio server exposing the Notion export tool
"""

__version__ = "0.1.0"
