"""Elasticsearch platform — Indexing workflow for Elasticsearch (v8+).

Indexing one document goes through at most two attempts:

  1. Full document (content + metadata).
  2. On failure, the same document without its content, so that it stays
     findable by title, tags and access even when its content cannot be
     processed (encrypted PDF, unparsable file, mapping conflict, ...).

The first failure is classified by ``IndexErrorClassifier``.  Its level only
decides what gets reported when the second attempt fails too: errors are
recorded on the index, notices are reported as warnings.

Install the dependency::

    pip install elasticsearch
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

from elasticsearch import Elasticsearch, NotFoundError

from esplatform.config.settings import ElasticSettings
from esplatform.core.classifier import IndexErrorClassifier
from esplatform.core.connection import connect, sanitize_hosts
from esplatform.core.index_service import IndexService
from esplatform.models.classification import ClassificationLevel, ClassificationResult
from esplatform.models.document import DocumentAccess, IndexDocument
from esplatform.models.index import ErrorSeverity, Index, IndexState, IndexStatus
from esplatform.platform.base.exceptions import ConnectionError, DocumentNotFoundError
from esplatform.platform.base.platform import SearchPlatform
from esplatform.platform.base.runner import ResultType, Runner, RunnerNotifier

logger = logging.getLogger(__name__)


class ElasticSearchPlatform(SearchPlatform):
    """Search platform backed by Elasticsearch.

    Args:
        settings: Elasticsearch settings (hosts, index name).
        client: Already built client.  When omitted, ``load_platform()``
            creates one from ``settings.elastic_host``.
        index_service: Request builder, mostly overridden in tests.
        runner: Optional orchestrator runner receiving progress reports.
    """

    def __init__(
        self,
        settings: ElasticSettings | None = None,
        client: Elasticsearch | None = None,
        index_service: IndexService | None = None,
        runner: Runner | None = None,
    ) -> None:
        self._settings = settings or ElasticSettings()
        self._client = client
        self._index_service = index_service or IndexService(self._settings)
        self._notifier = RunnerNotifier(runner)

    @property
    def id(self) -> str:
        return "elastic_search"

    @property
    def name(self) -> str:
        return "Elasticsearch"

    @property
    def client(self) -> Elasticsearch:
        if self._client is None:
            raise ConnectionError("Elasticsearch client not initialized. Call load_platform() first.")
        return self._client

    def get_configuration(self) -> dict[str, Any]:
        """Settings with credentials masked in ``elastic_host``."""
        config = self._settings.model_dump()
        config["elastic_host"] = sanitize_hosts(self._settings.elastic_host)
        return config

    def set_runner(self, runner: Runner | None) -> None:
        self._notifier.runner = runner

    def load_platform(self) -> None:
        """Create the client used by every later operation."""
        if self._client is None:
            self._client = connect(self._settings.elastic_host)

    def test_platform(self) -> bool:
        return bool(self.client.ping())

    def initialize_index(self) -> None:
        self._index_service.initialize_index(self.client)

    # ── Reset / delete ───────────────────────────────────────────────────

    def reset_index(self, provider_id: str) -> None:
        """Remove one provider's documents, or the whole index for ``'all'``.

        Failures propagate to the caller.
        """
        if provider_id == "all":
            self._index_service.reset_index_all(self.client)
        else:
            self._index_service.reset_index(self.client, provider_id)

    def delete_indexes(self, indexes: Sequence[Index]) -> None:
        """Delete each index independently; a failed deletion is reported and skipped."""
        client = self.client
        for index in indexes:
            try:
                self._index_service.delete_index(client, index)
                self._notifier.new_index_result(index, "index deleted", "success", ResultType.SUCCESS)
            except Exception:
                logger.warning("Could not delete index %s", index.es_id, exc_info=True)
                self._notifier.new_index_result(
                    index, "index not deleted", "issue while deleting index", ResultType.WARNING
                )

    # ── Indexing ─────────────────────────────────────────────────────────

    def index_document(self, document: IndexDocument) -> Index:
        """Index a document, falling back to metadata-only indexing on failure.

        Never raises for a failed attempt: the outcome is recorded on the
        returned index (``state``, ``status``, ``errors``) and reported to the
        runner.
        """
        client = self.client
        index = document.get_index()
        document.init_hash()

        index.state = IndexState.ATTEMPTING
        try:
            result = self._index_service.index_document(client, document)
            index = self._index_service.parse_index_result(index, result)
        except Exception as e:
            failure: Exception = e
        else:
            index.state = IndexState.INDEXED
            self._notifier.new_index_result(index, json.dumps(result), "ok", ResultType.SUCCESS)
            return index

        classification = IndexErrorClassifier.classify(failure)
        logger.warning(
            "Failed to index %s (%s: %s), retrying without content",
            index.es_id,
            classification.level.value,
            classification.reason,
        )

        index.state = IndexState.DEGRADED_ATTEMPTING
        self._notifier.update_action("indexDocumentWithoutContent", True)
        document.strip_content()
        try:
            result = self._index_service.index_document(client, document)
            index = self._index_service.parse_index_result(index, result)
        except Exception:
            logger.warning("Failed to index %s without content", index.es_id, exc_info=True)
            index.state = IndexState.FAILED
            index.add_status(IndexStatus.FAILED)
            self._notifier.new_index_result(index, "", "fail", ResultType.FAIL)
            self._manage_index_error(index, failure, classification)
            return index

        index.state = IndexState.DEGRADED_INDEXED
        index.add_status(IndexStatus.META)
        self._notifier.new_index_result(index, json.dumps(result), "ok", ResultType.WARNING)
        return index

    def _manage_index_error(self, index: Index, failure: Exception, classification: ClassificationResult) -> None:
        """Report a terminal failure according to its classification."""
        if classification.level == ClassificationLevel.NOTICE:
            self._notifier.new_index_result(
                index, classification.reason, classification.type or "", ResultType.WARNING
            )
            return

        exception = type(failure).__name__
        index.add_error(classification.reason, exception, ErrorSeverity.SEV_3)
        self._notifier.new_index_error(index, classification.reason, exception, ErrorSeverity.SEV_3)

    # ── Retrieval ────────────────────────────────────────────────────────

    def get_document(self, provider_id: str, document_id: str) -> IndexDocument:
        """Fetch an indexed document; its content is not returned."""
        try:
            raw = self._index_service.get_document(self.client, provider_id, document_id)
        except NotFoundError as e:
            raise DocumentNotFoundError(f"Document '{provider_id}:{document_id}' not found.") from e

        source = raw.get("_source", {})
        document = IndexDocument(
            provider_id=provider_id,
            id=document_id,
            title=source.get("title", ""),
            link=source.get("link", ""),
            source=source.get("source", ""),
            hash=source.get("hash", ""),
            tags=source.get("tags", []),
            metatags=source.get("metatags", []),
            parts=source.get("parts", {}),
            access=DocumentAccess(
                owner_id=source.get("owner", ""),
                users=source.get("users", []),
                groups=source.get("groups", []),
                circles=source.get("circles", []),
                links=source.get("links", []),
            ),
        )
        return document
