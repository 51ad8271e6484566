"""Search platform layer — The surface exposed to the indexing orchestrator.

Built-in platforms:
  - elasticsearch: Elasticsearch v8+ (ingest-attachment for binary content)

Implement ``SearchPlatform`` to plug another search engine in.
"""
