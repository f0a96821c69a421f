"""Notion export task client.

Drives Notion's asynchronous export: enqueue an ``exportBlock`` task, poll it
until it is terminal, then download the resulting zip archive.
"""

import asyncio
from typing import Any

import httpx
from pydantic import ValidationError

from nexport_obs.logging import get_logger

from .archive import ExportArchive
from .exceptions import (
    ExportTaskFailed,
    ExportTimeoutError,
    NotionExportAuthError,
    NotionExportRateLimitError,
    RemoteError,
)
from .schemas import ExportConfig, ExportTask

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://www.notion.so/api/v3/"

# States in which a task is still expected to make progress
PENDING_STATES = frozenset({"not_started", "in_progress"})


class NotionExportClient:
    """Authenticated client for Notion's export task endpoints.

    Provides:
    - Cookie authentication (``token_v2`` + ``file_token``) on every call
    - Error handling and exception mapping
    - Task polling with an optional deadline
    - Archive download

    No call is retried; only "task not done yet" is tolerated while polling.
    """

    def __init__(
        self,
        token_v2: str,
        file_token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize export client.

        Args:
            token_v2: Notion ``token_v2`` cookie value
            file_token: Notion ``file_token`` cookie value
            base_url: Notion v3 API base URL
            timeout_seconds: Timeout for each HTTP call
            transport: Optional httpx transport (tests, proxies)
        """
        self.timeout_seconds = timeout_seconds
        self.client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Cookie": f"token_v2={token_v2};file_token={file_token}"},
            timeout=timeout_seconds,
            transport=transport,
        )

    def _handle_error(self, error: httpx.HTTPStatusError) -> None:
        """Map Notion HTTP errors to custom exceptions."""
        status = error.response.status_code
        try:
            message = error.response.json().get("message", error.response.text)
        except Exception:
            message = error.response.text

        if status in (401, 403):
            raise NotionExportAuthError(f"Authentication failed: {message}", status)
        elif status == 429:
            raise NotionExportRateLimitError(f"Rate limit exceeded: {message}", status)
        else:
            raise RemoteError(f"Notion API error ({status}): {message}", status)

    async def _post(self, endpoint: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST to a v3 endpoint and return the decoded JSON object."""
        try:
            response = await self.client.post(endpoint, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            self._handle_error(e)
            raise  # For type checker
        except httpx.HTTPError as e:
            raise RemoteError(f"Request to {endpoint} failed: {e}") from e
        except ValueError as e:
            raise RemoteError(f"Invalid JSON from {endpoint}: {e}") from e

        if not isinstance(data, dict):
            raise RemoteError(f"Unexpected response from {endpoint}: {data!r}")
        return data

    async def request_export(self, block_id: str, config: ExportConfig) -> str:
        """Add an 'exportBlock' task to Notion's task queue.

        Args:
            block_id: Dashed block id of the page/block/DB to export
            config: Export options

        Returns:
            The task's id

        Raises:
            NotionExportAuthError: Expired or invalid cookies
            RemoteError: Transport failure or request rejected
        """
        payload = {
            "task": {
                "eventName": "exportBlock",
                "request": {
                    "block": {"id": block_id},
                    "recursive": config.recursive,
                    "shouldExportComments": False,
                    "exportOptions": config.export_options(),
                },
            }
        }

        data = await self._post("enqueueTask", payload)
        task_id = data.get("taskId")
        if not task_id:
            raise RemoteError(f"enqueueTask returned no task id for block {block_id}")

        logger.info(
            "export_task_enqueued",
            block_id=block_id,
            task_id=task_id,
            recursive=config.recursive,
        )
        return task_id

    async def get_task(self, task_id: str) -> ExportTask | None:
        """Fetch the current state of a task, or None if Notion doesn't list it."""
        data = await self._post("getTasks", {"taskIds": [task_id]})

        for result in data.get("results") or []:
            if isinstance(result, dict) and result.get("id") == task_id:
                try:
                    return ExportTask.model_validate(result)
                except ValidationError as e:
                    raise RemoteError(f"Malformed task {task_id}: {e}") from e
        return None

    async def await_completion(
        self,
        task_id: str,
        poll_interval_ms: int = 1000,
        timeout_seconds: float | None = None,
    ) -> str:
        """Poll a task until it finishes.

        Waits ``poll_interval_ms`` before every poll, including the first.

        Args:
            task_id: Task returned by ``request_export``
            poll_interval_ms: Delay before each poll
            timeout_seconds: Deadline for the whole loop (None = wait forever)

        Returns:
            URL of the exported zip archive

        Raises:
            ExportTaskFailed: Task ended in any state but success-with-URL
            ExportTimeoutError: Deadline passed before the task finished
            RemoteError: A poll request failed
        """
        progress: dict[str, Any] = {"state": None, "polls": 0}
        poll = self._poll_until_done(task_id, poll_interval_ms / 1000, progress)

        if timeout_seconds is None:
            return await poll

        try:
            return await asyncio.wait_for(poll, timeout=timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning(
                "export_task_timeout",
                task_id=task_id,
                state=progress["state"],
                polls=progress["polls"],
                timeout_seconds=timeout_seconds,
            )
            raise ExportTimeoutError(task_id, progress["state"], timeout_seconds) from None

    async def _poll_until_done(
        self, task_id: str, interval: float, progress: dict[str, Any]
    ) -> str:
        while True:
            await asyncio.sleep(interval)

            task = await self.get_task(task_id)
            progress["polls"] += 1

            if task is None:
                logger.error("export_task_missing", task_id=task_id, polls=progress["polls"])
                raise ExportTaskFailed(
                    task_id, None, f"Export task {task_id} missing from getTasks response"
                )

            progress["state"] = task.state

            if task.state == "success" and task.export_url:
                logger.info("export_task_succeeded", task_id=task_id, polls=progress["polls"])
                return task.export_url

            if task.state in PENDING_STATES:
                logger.debug("export_task_pending", task_id=task_id, state=task.state)
                continue

            logger.error(
                "export_task_failed",
                task_id=task_id,
                state=task.state,
                task=task.model_dump(by_alias=True),
            )
            raise ExportTaskFailed(task_id, task.state)

    async def fetch_archive(self, url: str) -> ExportArchive:
        """Download the zip at ``url`` with the authenticated transport.

        Raises:
            RemoteError: Download failed
            CorruptArchiveError: Response is not a zip archive
        """
        try:
            # Export URLs redirect to a signed storage URL
            response = await self.client.get(url, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self._handle_error(e)
            raise
        except httpx.HTTPError as e:
            raise RemoteError(f"Archive download failed: {e}") from e

        archive = ExportArchive.from_bytes(response.content)
        logger.info(
            "export_archive_downloaded",
            size_bytes=len(response.content),
            entries=len(archive),
        )
        return archive

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
