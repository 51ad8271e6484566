"""Integration test fixtures — A running Elasticsearch with ingest-attachment.

Expects a node reachable at ``ESPLATFORM_TEST_HOST`` (default
``http://localhost:9200``), e.g.::

    docker run -p 9200:9200 -e discovery.type=single-node -e xpack.security.enabled=false \
        docker.elastic.co/elasticsearch/elasticsearch:8.13.0

Tests are skipped when the node does not answer.
"""

from __future__ import annotations

import os
import time
from collections.abc import Iterator

import pytest
from elasticsearch import Elasticsearch

from esplatform.config.settings import ElasticSettings
from esplatform.platform.elasticsearch import ElasticSearchPlatform

TEST_INDEX = "esplatform-test"


def _wait_for_service(client: Elasticsearch, timeout: float = 30.0) -> bool:
    """Block until the node answers a ping, or timeout."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if client.ping():
            return True
        time.sleep(2)
    return False


@pytest.fixture(scope="session")
def elasticsearch_ready() -> str:
    """Ensure Elasticsearch is running."""
    host = os.environ.get("ESPLATFORM_TEST_HOST", "http://localhost:9200")
    if not _wait_for_service(Elasticsearch(host)):
        pytest.skip(f"Elasticsearch not available at {host}")
    return host


@pytest.fixture
def es_platform(elasticsearch_ready: str) -> Iterator[ElasticSearchPlatform]:
    platform = ElasticSearchPlatform(
        ElasticSettings(elastic_host=[elasticsearch_ready], elastic_index=TEST_INDEX),
    )
    platform.load_platform()
    platform.reset_index("all")
    platform.initialize_index()
    yield platform
    platform.reset_index("all")
