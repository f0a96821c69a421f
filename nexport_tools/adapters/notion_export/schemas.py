"""Notion export adapter Pydantic schemas.

Export configuration, observed task state, and tool input/output schemas.
"""

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator
from pydantic.alias_generators import to_camel

from .ids import is_block_id, strip_dashes


# ============================================================================
# EXPORT CONFIGURATION
# ============================================================================


class ExportConfig(BaseModel):
    """Options for one export run.

    Fields accept both snake_case names and the camelCase names used on the
    wire (``timeZone``, ``collectionViewExportType``, ``pollIntervalMs``).
    """

    model_config = ConfigDict(
        frozen=True, extra="forbid", alias_generator=to_camel, populate_by_name=True
    )

    recursive: bool = Field(False, description="Export child pages recursively")
    time_zone: str = "UTC"
    locale: str = "en"
    collection_view_export_type: Literal["currentView", "all"] = Field(
        "all", description="Export all database rows or just the current view"
    )
    poll_interval_ms: PositiveInt = Field(1000, description="Delay before each task poll")

    def merged(self, overrides: Mapping[str, Any] | None = None) -> "ExportConfig":
        """Return a new config with ``overrides`` laid over this one.

        Raises:
            ValidationError: An override has the wrong type or an unknown name
        """
        if not overrides:
            return self

        fields = type(self).model_fields
        data = self.model_dump(by_alias=True)
        for key, value in overrides.items():
            data[fields[key].alias if key in fields else key] = value
        return type(self).model_validate(data)

    def export_options(self) -> dict[str, Any]:
        """``exportOptions`` payload for the enqueueTask request."""
        return {
            "exportType": "markdown",
            **self.model_dump(by_alias=True, exclude={"recursive", "poll_interval_ms"}),
        }


# ============================================================================
# EXPORT TASK (observed via getTasks)
# ============================================================================


class ExportTaskStatus(BaseModel):
    """Progress payload of an export task."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    export_url: str | None = Field(None, alias="exportURL")


class ExportTask(BaseModel):
    """Snapshot of a server-side export task."""

    model_config = ConfigDict(extra="allow")

    id: str
    state: str | None = Field(None, description="not_started, in_progress, success, failure, ...")
    status: ExportTaskStatus | None = None

    @property
    def export_url(self) -> str | None:
        return self.status.export_url if self.status else None


# ============================================================================
# GET EXPORT RESULT TOOL SCHEMAS
# ============================================================================


class NotionExportGetResultInput(BaseModel):
    """Input schema for NotionExportGetResultTool."""

    id: str = Field(..., description="Notion page id")
    recursive: bool = Field(False, description="Export child pages recursively")
    dry_run: bool = False

    @field_validator("id")
    @classmethod
    def check_block_id(cls, value: str) -> str:
        if not is_block_id(value):
            raise ValueError(
                "Notion page id must only contain 0-9a-z and be 32 characters long"
            )
        return strip_dashes(value)


class NotionExportGetResultOutput(BaseModel):
    """Output schema for NotionExportGetResultTool."""

    block_id: str = Field(..., description="Dashed block id that was exported")
    files: list[str] = Field(default_factory=list, description="Markdown files, archive order")
    file_count: int
    status: Literal["success", "dry_run"] = "success"
