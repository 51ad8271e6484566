"""Index model — Durable indexing state of a single document.

An ``Index`` outlives any single indexing attempt.  Within one run its status
flags only gain bits and its error list only grows; a later successful attempt
never clears what an earlier one recorded.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum, IntEnum, IntFlag

from pydantic import BaseModel, Field


class IndexStatus(IntFlag):
    """Status flags of an index record."""

    OK = 1
    IGNORE = 2
    META = 4
    CONTENT = 8
    PARTS = 16
    FULL = META | CONTENT | PARTS
    REMOVE = 32
    DONE = 64
    FAILED = 128


class ErrorSeverity(IntEnum):
    """Severity of a recorded index error (3 is the most severe)."""

    SEV_1 = 1
    SEV_2 = 2
    SEV_3 = 3


class IndexState(str, Enum):
    """Position of an index in the indexing workflow.

    - ATTEMPTING: full document (content + metadata) is being indexed.
    - DEGRADED_ATTEMPTING: first attempt failed, retrying without content.
    - INDEXED: full document indexed.
    - DEGRADED_INDEXED: indexed without content (metadata only).
    - FAILED: both attempts failed.
    """

    ATTEMPTING = "attempting"
    DEGRADED_ATTEMPTING = "degraded_attempting"
    INDEXED = "indexed"
    DEGRADED_INDEXED = "degraded_indexed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (IndexState.INDEXED, IndexState.DEGRADED_INDEXED, IndexState.FAILED)


class IndexErrorEntry(BaseModel):
    """A single error recorded against an index."""

    message: str = Field(description="Human readable error message")
    exception: str = Field(default="", description="Kind of failure that produced the error")
    severity: ErrorSeverity = Field(default=ErrorSeverity.SEV_3, description="Error severity (1-3)")


class Index(BaseModel):
    """Indexing record of one document of one provider."""

    provider_id: str = Field(description="Content provider identifier (e.g. 'files')")
    document_id: str = Field(description="Document identifier within the provider")
    owner_id: str = Field(default="", description="Owner of the indexed document")
    status: IndexStatus = Field(default=IndexStatus.FULL, description="Status flags")
    errors: list[IndexErrorEntry] = Field(default_factory=list, description="Recorded errors, oldest first")
    last_index: datetime | None = Field(default=None, description="Time of the last successful indexing")
    state: IndexState | None = Field(default=None, description="Workflow state of the current run")

    @property
    def es_id(self) -> str:
        """Identifier of the document inside the Elasticsearch index."""
        return f"{self.provider_id}:{self.document_id}"

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def has_status(self, status: IndexStatus) -> bool:
        return (self.status & status) == status

    def add_status(self, status: IndexStatus) -> Index:
        self.status |= status
        return self

    def add_error(self, message: str, exception: str = "", severity: ErrorSeverity = ErrorSeverity.SEV_3) -> Index:
        self.errors.append(IndexErrorEntry(message=message, exception=exception, severity=severity))
        return self

    def set_last_index(self, when: datetime | None = None) -> Index:
        self.last_index = when or datetime.now(UTC)
        return self
