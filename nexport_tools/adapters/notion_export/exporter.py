"""Notion exporter facade.

Composes id normalization, the export task client, the archive and the
entry selectors into ready-to-use export operations.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import httpx

from nexport_obs.logging import get_logger

from .archive import ExportArchive
from .client import DEFAULT_BASE_URL, NotionExportClient
from .ids import to_uuid
from .schemas import ExportConfig
from .selector import EntryPredicate, csv_predicate, is_markdown, select_all, select_one

logger = get_logger(__name__)


class NotionExporter:
    """Export Notion blocks/pages/databases and read the results.

    To export any page one needs the session cookies of a user with read
    access to it. Each call runs its own export task against a merged copy of
    the default config, so calls are independent and may run concurrently;
    only the HTTP connection pool is shared.

    Usage:
        async with NotionExporter(token_v2, file_token) as exporter:
            files = await exporter.export("3af0a1e347dd40c5ba0a2bd7a2a8e3a1")
    """

    def __init__(
        self,
        token_v2: str,
        file_token: str,
        config: ExportConfig | None = None,
        timeout_seconds: float | None = None,
        base_url: str = DEFAULT_BASE_URL,
        http_timeout_seconds: float = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize exporter.

        Args:
            token_v2: Notion ``token_v2`` cookie value
            file_token: Notion ``file_token`` cookie value
            config: Default export options
            timeout_seconds: Deadline for each export task (None = no deadline)
            base_url: Notion v3 API base URL
            http_timeout_seconds: Timeout for each HTTP call
            transport: Optional httpx transport
        """
        self.client = NotionExportClient(
            token_v2=token_v2,
            file_token=file_token,
            base_url=base_url,
            timeout_seconds=http_timeout_seconds,
            transport=transport,
        )
        self.config = config or ExportConfig()
        self.timeout_seconds = timeout_seconds

    def _config(self, overrides: Mapping[str, Any] | None) -> ExportConfig:
        return self.config.merged(overrides)

    async def get_task_id(self, id: str, overrides: Mapping[str, Any] | None = None) -> str:
        """Enqueue an export of ``id`` and return the task id."""
        return await self.client.request_export(to_uuid(id), self._config(overrides))

    async def get_zip_url(self, id: str, overrides: Mapping[str, Any] | None = None) -> str:
        """Export ``id`` and wait for the URL of the resulting zip."""
        config = self._config(overrides)
        task_id = await self.client.request_export(to_uuid(id), config)
        return await self.client.await_completion(
            task_id, config.poll_interval_ms, self.timeout_seconds
        )

    async def get_zip(
        self, id: str, overrides: Mapping[str, Any] | None = None
    ) -> ExportArchive:
        """Export ``id`` and download the archive."""
        url = await self.get_zip_url(id, overrides)
        return await self.client.fetch_archive(url)

    async def get_md_files(
        self, id: str, path: str | Path, overrides: Mapping[str, Any] | None = None
    ) -> list[Path]:
        """Export ``id`` and extract every file of the archive into ``path``."""
        archive = await self.get_zip(id, overrides)
        written = archive.extract_all(path)
        logger.info("export_extracted", path=str(path), files=len(written))
        return written

    async def get_file_string(
        self,
        id: str,
        predicate: EntryPredicate,
        overrides: Mapping[str, Any] | None = None,
    ) -> str:
        """Text of the first archive entry matching ``predicate``.

        Raises:
            NoMatchError: Nothing in the archive matched
        """
        return select_one(await self.get_zip(id, overrides), predicate)

    async def get_all_file_strings(
        self,
        id: str,
        predicate: EntryPredicate,
        overrides: Mapping[str, Any] | None = None,
    ) -> list[str]:
        """Texts of every archive entry matching ``predicate`` (may be empty)."""
        return select_all(await self.get_zip(id, overrides), predicate)

    async def get_md_string(self, id: str, overrides: Mapping[str, Any] | None = None) -> str:
        """First Markdown file of the export."""
        return await self.get_file_string(id, is_markdown, overrides)

    async def get_csv_string(
        self,
        id: str,
        only_current_view: bool = False,
        overrides: Mapping[str, Any] | None = None,
    ) -> str:
        """First CSV of an exported database.

        Args:
            id: Block id of the database
            only_current_view: Return the current-view CSV instead of ``_all.csv``
        """
        return await self.get_file_string(id, csv_predicate(only_current_view), overrides)

    async def get_all_md_strings(
        self, id: str, overrides: Mapping[str, Any] | None = None
    ) -> list[str]:
        """All Markdown files of the export."""
        return await self.get_all_file_strings(id, is_markdown, overrides)

    async def export(
        self, raw_id: str, overrides: Mapping[str, Any] | None = None
    ) -> list[str]:
        """Export a block to Markdown.

        Args:
            raw_id: Block id, with or without dashes
            overrides: Per-call ExportConfig fields (e.g. ``{"recursive": True}``)

        Returns:
            Trimmed text of every Markdown file in the archive, archive order
        """
        block_id = to_uuid(raw_id)
        config = self._config(overrides)
        logger.info("export_started", block_id=block_id, recursive=config.recursive)

        task_id = await self.client.request_export(block_id, config)
        url = await self.client.await_completion(
            task_id, config.poll_interval_ms, self.timeout_seconds
        )
        archive = await self.client.fetch_archive(url)
        files = select_all(archive, is_markdown)

        logger.info("export_finished", block_id=block_id, task_id=task_id, files=len(files))
        return files

    async def close(self):
        """Close the underlying HTTP client."""
        await self.client.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
