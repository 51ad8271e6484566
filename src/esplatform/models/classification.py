"""Classification models — Outcome of classifying a failed indexing attempt."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class ClassificationLevel(str, Enum):
    """Severity bucket of an indexing failure.

    - ERROR: platform or content defect, recorded on the index.
    - NOTICE: expected condition (e.g. encrypted source file), reported only.
    """

    ERROR = "error"
    NOTICE = "notice"


class ClassificationResult(BaseModel):
    """Level, reason and engine error type of one failure."""

    level: ClassificationLevel = Field(description="Severity bucket")
    reason: str = Field(description="Most specific human readable reason found")
    type: str | None = Field(default=None, description="Engine error type, when known")
