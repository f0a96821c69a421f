"""
Notion Export Configuration Package.

Provides Pydantic Settings loaded from environment variables.
"""

from nexport_config.settings import Settings

__all__ = ["Settings"]
