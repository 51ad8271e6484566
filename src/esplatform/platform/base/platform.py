"""Base search platform — Abstract interface for full-text search platforms.

Every search engine must implement this interface to be driven by the
indexing orchestrator.  The platform is responsible for:
  1. Connecting to the engine and exposing its (redacted) configuration
  2. Initializing and resetting indexes
  3. Indexing documents, falling back to metadata-only indexing on failure
  4. Deleting indexes without aborting on a single failure
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from esplatform.models.document import IndexDocument
from esplatform.models.index import Index
from esplatform.platform.base.runner import Runner


class SearchPlatform(ABC):
    """Abstract base class for search platforms.

    All platforms must implement:
      - load_platform(): Open the long-lived connection to the engine
      - index_document(): Index one document and return its updated Index
      - delete_indexes(): Remove documents, isolating failures per item
      - reset_index(): Drop one provider's documents, or everything

    Calls are synchronous and blocking.  A platform holds a single engine
    handle that every operation reuses.
    """

    @property
    @abstractmethod
    def id(self) -> str:
        """Unique platform identifier (e.g., 'elastic_search')."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name of the platform."""

    @abstractmethod
    def get_configuration(self) -> dict[str, Any]:
        """Return the platform configuration, safe for display."""

    @abstractmethod
    def set_runner(self, runner: Runner | None) -> None:
        """Attach (or detach, with ``None``) the orchestrator's runner."""

    @abstractmethod
    def load_platform(self) -> None:
        """Connect to the search engine.

        Raises:
            ConfigurationError: If the engine hosts are missing or malformed.
        """

    @abstractmethod
    def test_platform(self) -> bool:
        """Return whether the engine answers."""

    @abstractmethod
    def initialize_index(self) -> None:
        """Create the index and its ingest resources, if missing."""

    @abstractmethod
    def reset_index(self, provider_id: str) -> None:
        """Remove the documents of one provider, or of all providers for ``'all'``."""

    @abstractmethod
    def index_document(self, document: IndexDocument) -> Index:
        """Index a document and return its updated index record."""

    @abstractmethod
    def delete_indexes(self, indexes: Sequence[Index]) -> None:
        """Delete the given indexes from the engine."""

    @abstractmethod
    def get_document(self, provider_id: str, document_id: str) -> IndexDocument:
        """Fetch an indexed document by its identifiers."""
