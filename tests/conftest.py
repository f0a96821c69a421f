"""Pytest fixtures.

Provides an in-process fake of Notion's export endpoints served through
``httpx.MockTransport``.
"""

import io
import json
import zipfile
from typing import Any

import httpx
import pytest

from nexport_tools.adapters.notion_export import ExportConfig, NotionExporter

BLOCK_ID = "abcdefabcdefabcdefabcdefabcdef12"
DASHED_BLOCK_ID = "abcdefab-cdef-abcd-efab-cdefabcdef12"
EXPORT_URL = "https://file.notion.so/f/export/Export-123.zip"


def make_zip(entries: dict[str, str | bytes]) -> bytes:
    """Build a zip archive in memory, entries written in dict order."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, content in entries.items():
            zf.writestr(name, content)
    return buffer.getvalue()


class FakeNotionService:
    """Scripted Notion export backend.

    ``states`` are returned by successive getTasks calls; the last one repeats.
    """

    def __init__(
        self,
        states: list[str] | None = None,
        archive: bytes | None = None,
        task_id: str = "task-123",
        export_url: str = EXPORT_URL,
    ):
        self.states = list(states or ["success"])
        self.archive = archive if archive is not None else make_zip({"Page.md": "# Page\n"})
        self.task_id = task_id
        self.export_url = export_url
        self.requests: list[httpx.Request] = []
        self.task_missing = False
        self.omit_export_url = False
        # When set, the export URL answers 302 to this signed storage URL
        self.storage_url: str | None = None

    def calls(self, endpoint: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith(f"/{endpoint}")]

    def body(self, request: httpx.Request) -> dict[str, Any]:
        return json.loads(request.content)

    def _task(self) -> dict[str, Any]:
        state = self.states.pop(0) if len(self.states) > 1 else self.states[0]
        status: dict[str, Any] = {"type": "progress", "pagesExported": 1}
        if state == "success" and not self.omit_export_url:
            status = {"type": "complete", "exportURL": self.export_url}
        return {"id": self.task_id, "eventName": "exportBlock", "state": state, "status": status}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.path.endswith("/enqueueTask"):
            return httpx.Response(200, json={"taskId": self.task_id})

        if request.url.path.endswith("/getTasks"):
            results = [] if self.task_missing else [self._task()]
            return httpx.Response(200, json={"results": results})

        if str(request.url) == self.export_url:
            if self.storage_url:
                return httpx.Response(302, headers={"Location": self.storage_url})
            return httpx.Response(200, content=self.archive)

        if self.storage_url and str(request.url) == self.storage_url:
            return httpx.Response(200, content=self.archive)

        return httpx.Response(404, json={"message": "Not found"})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def zip_bytes():
    """Factory building zip archives in memory."""
    return make_zip


@pytest.fixture
def fake_notion():
    """Fake Notion service reporting success on the first poll."""
    return FakeNotionService()


@pytest.fixture
def fast_config():
    """Export config with a short poll interval."""
    return ExportConfig(poll_interval_ms=1)


@pytest.fixture
def exporter(fake_notion, fast_config):
    """NotionExporter wired to the fake service."""
    return NotionExporter(
        token_v2="test_token_v2",
        file_token="test_file_token",
        config=fast_config,
        transport=fake_notion.transport(),
    )
