"""Shared test fixtures and configuration."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from esplatform.config.settings import ElasticSettings, Settings
from esplatform.core.index_service import IndexService
from esplatform.models.document import DocumentAccess, IndexDocument
from esplatform.platform.base.runner import Runner
from esplatform.platform.elasticsearch.platform import ElasticSearchPlatform


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        elastic={"elastic_host": ["http://localhost:9200"], "elastic_index": "test_index"},
    )


@pytest.fixture
def elastic_settings(settings: Settings) -> ElasticSettings:
    return settings.elastic


@pytest.fixture
def access() -> DocumentAccess:
    return DocumentAccess(owner_id="alice", users=["bob"], groups=["staff"])


@pytest.fixture
def document(access: DocumentAccess) -> IndexDocument:
    """A plain-text document of the files provider."""
    return IndexDocument(
        provider_id="files",
        id="42",
        title="Quarterly report.txt",
        content="Revenue grew by 12% over the last quarter.",
        access=access,
        tags=["finance"],
        source="files_local",
    )


@pytest.fixture
def client() -> MagicMock:
    """Fake Elasticsearch client; ``index`` acknowledges every request by default."""
    fake = MagicMock()
    fake.index.return_value = {"_index": "test_index", "_id": "files:42", "result": "created", "_version": 1}
    fake.ping.return_value = True
    return fake


@pytest.fixture
def runner() -> MagicMock:
    return MagicMock(spec=Runner)


@pytest.fixture
def index_service(elastic_settings: ElasticSettings) -> IndexService:
    return IndexService(elastic_settings)


@pytest.fixture
def platform(
    elastic_settings: ElasticSettings,
    client: MagicMock,
    index_service: IndexService,
    runner: MagicMock,
) -> ElasticSearchPlatform:
    return ElasticSearchPlatform(elastic_settings, client=client, index_service=index_service, runner=runner)
