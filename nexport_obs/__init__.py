"""
Notion Export Observability Package.

Provides:
- Structured logging (structlog)
"""

__all__ = ["logging"]
