"""Pydantic models for sandbox modifications and build results."""

from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class ModificationType(str, Enum):
    """Kind of change reported for a sandbox member."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"


class Modification(BaseModel):
    """One changed sandbox member within a build cycle.

    Records are created by the history parser from the sandbox change listing
    and updated in place with member details, except for deleted members.
    """

    type: ModificationType = Field(default=..., description="Kind of change")
    file_name: str = Field(default=..., min_length=1, description="Member file name")
    folder_name: str | None = Field(
        default=None, description="Folder relative to the sandbox root, None for the root itself"
    )
    modified_time: datetime | None = Field(default=None, description="Time of the change")
    user_name: str | None = Field(default=None, description="Author of the member revision")
    comment: str | None = Field(default=None, description="Revision description")
    version: str | None = Field(default=None, description="Member revision number")

    model_config = {
        "json_schema_extra": {
            "example": {
                "type": "modified",
                "file_name": "Main.java",
                "folder_name": "src",
                "modified_time": "2024-01-01T12:00:00",
                "user_name": "jdoe",
                "comment": "Fix build",
                "version": "1.4",
            }
        }
    }

    @property
    def is_deleted(self) -> bool:
        return self.type == ModificationType.DELETED

    def member_path(self, sandbox_root: str | Path) -> Path:
        """Absolute path of the member inside the sandbox."""
        folder = Path(sandbox_root)
        if self.folder_name is not None:
            folder = folder / self.folder_name
        return folder / self.file_name


class IntegrationResult(BaseModel):
    """The parts of an orchestrator build result the adapter reads."""

    succeeded: bool = Field(default=False, description="Whether the build succeeded")
    label: str = Field(default="", description="Build label")
    start_time: datetime | None = Field(default=None, description="Build start timestamp")
