"""Document model — A content unit pushed to the search platform.

An ``IndexDocument`` is created by the orchestrator for one indexing call and
carries the ``Index`` record it belongs to.  Only ``content`` is dropped when
the platform falls back to degraded (metadata only) indexing.
"""

from __future__ import annotations

import hashlib
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from esplatform.models.index import Index


class ContentEncoding(str, Enum):
    """Encoding of ``IndexDocument.content``."""

    NONE = "none"
    BASE64 = "base64"


class DocumentAccess(BaseModel):
    """Access-control metadata of a document."""

    owner_id: str = Field(description="User owning the document")
    users: list[str] = Field(default_factory=list, description="Users the document is shared with")
    groups: list[str] = Field(default_factory=list, description="Groups the document is shared with")
    circles: list[str] = Field(default_factory=list, description="Circles the document is shared with")
    links: list[str] = Field(default_factory=list, description="Public share links")


class IndexDocument(BaseModel):
    """A document to be indexed, with its metadata and access information."""

    provider_id: str = Field(description="Content provider identifier")
    id: str = Field(description="Document identifier within the provider")
    content: str = Field(default="", description="Document content (plain or base64)")
    content_encoded: ContentEncoding = Field(default=ContentEncoding.NONE, description="Content encoding")
    access: DocumentAccess | None = Field(default=None, description="Access-control metadata")
    hash: str = Field(default="", description="md5 digest of the content")
    title: str = Field(default="", description="Document title")
    link: str = Field(default="", description="Link to the document")
    source: str = Field(default="", description="Source of the document inside the provider")
    tags: list[str] = Field(default_factory=list, description="User tags")
    metatags: list[str] = Field(default_factory=list, description="Provider meta tags")
    subtags: dict[str, list[str]] = Field(default_factory=dict, description="Provider sub tags, by tag")
    parts: dict[str, str] = Field(default_factory=dict, description="Additional indexed parts, by name")
    index: Index | None = Field(default=None, description="Index record of this document")

    def model_post_init(self, __context: Any) -> None:
        self.get_index()

    def get_index(self) -> Index:
        """Index record of this document, created from its identifiers when missing."""
        if self.index is None:
            owner = self.access.owner_id if self.access else ""
            self.index = Index(provider_id=self.provider_id, document_id=self.id, owner_id=owner)
        return self.index

    def init_hash(self) -> IndexDocument:
        """Compute ``hash`` from the content.  Empty content leaves the hash untouched."""
        if self.content:
            self.hash = hashlib.md5(self.content.encode("utf-8")).hexdigest()
        return self

    def strip_content(self) -> IndexDocument:
        """Drop the content, keeping metadata and access information."""
        self.content = ""
        self.content_encoded = ContentEncoding.NONE
        return self

    def flat_subtags(self) -> list[str]:
        """Sub tags flattened to ``'<tag>_<subtag>'`` strings."""
        return [f"{tag}_{sub}" for tag, subs in self.subtags.items() for sub in subs]
