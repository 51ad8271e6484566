"""esplatform — Elasticsearch platform adapter for full-text document indexing."""

__version__ = "0.1.0"
