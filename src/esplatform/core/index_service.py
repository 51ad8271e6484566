"""Index Service — Elasticsearch requests behind the platform operations.

Documents live in one Elasticsearch index and are addressed as
``<provider_id>:<document_id>``.  Base64 content (binary files) is routed
through the ``attachment`` ingest pipeline, which extracts the text; this is
where ``encrypted_document_exception`` and ``invalid_password_exception``
failures originate.
"""

from __future__ import annotations

import logging
from typing import Any

from elasticsearch import Elasticsearch

from esplatform.config.settings import ElasticSettings
from esplatform.models.document import ContentEncoding, IndexDocument
from esplatform.models.index import Index, IndexStatus
from esplatform.platform.base.exceptions import AccessIsEmptyError, IndexResultError

logger = logging.getLogger(__name__)

ATTACHMENT_PIPELINE = "attachment"

ACCEPTED_RESULTS = frozenset({"created", "updated", "noop"})


class IndexService:
    """Builds and sends index, delete and reset requests.

    Args:
        settings: Elasticsearch settings (index name, mapping limits).
    """

    def __init__(self, settings: ElasticSettings) -> None:
        self._settings = settings

    @property
    def index_name(self) -> str:
        return self._settings.elastic_index

    # ── Initialization ───────────────────────────────────────────────────

    def initialize_index(self, client: Elasticsearch) -> None:
        """Create the index and the attachment pipeline if they do not exist."""
        if not client.indices.exists(index=self.index_name):
            client.indices.create(
                index=self.index_name,
                settings=self._index_settings(),
                mappings=self._index_mappings(),
            )
            logger.info("Created index %s", self.index_name)

        client.ingest.put_pipeline(
            id=ATTACHMENT_PIPELINE,
            description="Extract text from base64 encoded content",
            processors=[
                {"attachment": {"field": "content", "indexed_chars": -1, "ignore_missing": True}},
                {
                    "convert": {
                        "field": "attachment.content",
                        "type": "string",
                        "target_field": "content",
                        "ignore_failure": True,
                    }
                },
                {"remove": {"field": "attachment.content", "ignore_failure": True}},
            ],
        )

    def _index_settings(self) -> dict[str, Any]:
        return {
            "index.mapping.total_fields.limit": self._settings.fields_limit,
            "analysis": {
                "analyzer": {
                    "analyzer": {
                        "type": "custom",
                        "tokenizer": self._settings.analyzer_tokenizer,
                        "filter": ["lowercase", "asciifolding"],
                    }
                }
            },
        }

    @staticmethod
    def _index_mappings() -> dict[str, Any]:
        keyword = {"type": "keyword"}
        return {
            "dynamic": True,
            "properties": {
                "provider": keyword,
                "source": keyword,
                "title": {"type": "text", "analyzer": "analyzer"},
                "content": {"type": "text", "analyzer": "analyzer"},
                "owner": keyword,
                "users": keyword,
                "groups": keyword,
                "circles": keyword,
                "links": keyword,
                "link": keyword,
                "hash": keyword,
                "tags": keyword,
                "metatags": keyword,
                "subtags": keyword,
            },
        }

    # ── Reset ────────────────────────────────────────────────────────────

    def reset_index(self, client: Elasticsearch, provider_id: str) -> None:
        """Delete every document of one provider."""
        client.delete_by_query(
            index=self.index_name,
            query={"term": {"provider": provider_id}},
            conflicts="proceed",
            refresh=True,
        )
        logger.info("Reset index %s for provider %s", self.index_name, provider_id)

    def reset_index_all(self, client: Elasticsearch) -> None:
        """Delete the whole index and the attachment pipeline."""
        client.options(ignore_status=404).ingest.delete_pipeline(id=ATTACHMENT_PIPELINE)
        client.indices.delete(index=self.index_name, ignore_unavailable=True)
        logger.info("Reset index %s for all providers", self.index_name)

    # ── Documents ────────────────────────────────────────────────────────

    def index_document(self, client: Elasticsearch, document: IndexDocument) -> dict[str, Any]:
        """Send one document to Elasticsearch.

        Returns:
            The engine acknowledgement.

        Raises:
            AccessIsEmptyError: If the document has no access information.
        """
        request: dict[str, Any] = {
            "index": self.index_name,
            "id": document.get_index().es_id,
            "document": self.generate_body(document),
        }
        if document.content and document.content_encoded == ContentEncoding.BASE64:
            request["pipeline"] = ATTACHMENT_PIPELINE

        response = client.index(**request)
        return dict(getattr(response, "body", response))

    def generate_body(self, document: IndexDocument) -> dict[str, Any]:
        """Engine-side representation of a document."""
        access = document.access
        if access is None:
            raise AccessIsEmptyError(f"Document {document.get_index().es_id} has no access information")

        body: dict[str, Any] = {
            "owner": access.owner_id,
            "users": access.users,
            "groups": access.groups,
            "circles": access.circles,
            "links": access.links,
            "metatags": document.metatags,
            "subtags": document.flat_subtags(),
            "tags": document.tags,
            "hash": document.hash,
            "provider": document.provider_id,
            "source": document.source,
            "title": document.title,
            "link": document.link,
            "parts": document.parts,
        }
        if document.content:
            body["content"] = document.content
        return body

    def parse_index_result(self, index: Index, result: dict[str, Any]) -> Index:
        """Update ``index`` from an index acknowledgement.

        Raises:
            IndexResultError: If the acknowledgement does not report a stored document.
        """
        outcome = result.get("result")
        if outcome not in ACCEPTED_RESULTS:
            raise IndexResultError(f"Unexpected index result for {index.es_id}: {outcome!r}", body=result)

        index.set_last_index()
        index.add_status(IndexStatus.DONE)
        return index

    def delete_index(self, client: Elasticsearch, index: Index) -> None:
        """Remove one document from Elasticsearch."""
        client.delete(index=self.index_name, id=index.es_id)

    def get_document(self, client: Elasticsearch, provider_id: str, document_id: str) -> dict[str, Any]:
        """Fetch the stored representation of one document."""
        response = client.get(index=self.index_name, id=f"{provider_id}:{document_id}")
        return dict(getattr(response, "body", response))
