"""Schemas for the brand guidelines tool."""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Used as an S3 key prefix, so path separators and dots are excluded
PROJECT_ID_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9_-]*$"


class GetGuidelinesArguments(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    project_id: str = Field(
        alias="projectId",
        pattern=PROJECT_ID_PATTERN,
        max_length=128,
        description='The project identifier used as the S3 key prefix (e.g. "deck-loc")',
    )


class BrandGuidelinesConfig(BaseModel):
    """Per-project brand configuration (colours, typography, tone)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    project_id: str = Field(alias="projectId")
    guidelines: dict[str, Any]
