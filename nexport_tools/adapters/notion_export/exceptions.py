"""Notion export adapter exceptions.

Custom exception hierarchy for export failures.
"""


class NotionExportError(Exception):
    """Base exception for Notion export adapter."""

    pass


class RemoteError(NotionExportError):
    """Transport, authentication or service-side failure on a Notion call."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NotionExportAuthError(RemoteError):
    """Expired or invalid session cookies (401/403 response)."""

    pass


class NotionExportRateLimitError(RemoteError):
    """Rate limit exceeded (429 response)."""

    pass


class ExportTaskFailed(NotionExportError):
    """Export task reached a terminal state other than success."""

    def __init__(self, task_id: str, state: str | None, message: str | None = None):
        super().__init__(message or f"Export task failed: {task_id} (state: {state})")
        self.task_id = task_id
        self.state = state


class ExportTimeoutError(ExportTaskFailed):
    """Export task did not finish before the deadline."""

    def __init__(self, task_id: str, state: str | None, timeout_seconds: float):
        super().__init__(
            task_id,
            state,
            f"Export task {task_id} did not finish within {timeout_seconds}s "
            f"(last state: {state})",
        )
        self.timeout_seconds = timeout_seconds


class CorruptArchiveError(NotionExportError):
    """Downloaded export is not a valid zip archive."""

    pass


class NoMatchError(NotionExportError):
    """No archive entry matched the requested file type."""

    pass


class NotionExportValidationError(NotionExportError):
    """Invalid input parameters."""

    pass
