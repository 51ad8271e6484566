"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. Environment variables (ESPLATFORM_ prefix)
  2. YAML config file (if specified)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class ElasticSettings(BaseModel):
    """Elasticsearch connection and index configuration."""

    elastic_host: list[str] = Field(default_factory=list, description="Elasticsearch node URLs")
    elastic_index: str = Field(default="my_index", description="Name of the Elasticsearch index")
    fields_limit: int = Field(default=10000, description="Maximum number of fields in the index mapping")
    analyzer_tokenizer: str = Field(default="standard", description="Tokenizer of the content analyzer")

    @field_validator("elastic_host", mode="before")
    @classmethod
    def _parse_hosts(cls, v: Any) -> list[str]:
        """Parse hosts from JSON string, comma-separated string (env var) or list."""
        if isinstance(v, str):
            import json

            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return [str(h) for h in parsed]
            except (json.JSONDecodeError, TypeError):
                pass
            return [h.strip() for h in v.split(",") if h.strip()]
        return list(v)


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the ESPLATFORM_ prefix.
    Nested settings use double underscores.

    Example:
        ESPLATFORM_ELASTIC__ELASTIC_HOST='["http://localhost:9200"]'
        ESPLATFORM_ELASTIC__ELASTIC_INDEX=nextcloud
        ESPLATFORM_OBSERVABILITY__LOG_FORMAT=console
    """

    model_config = {
        "env_prefix": "ESPLATFORM_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    elastic: ElasticSettings = Field(default_factory=ElasticSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file are used as defaults; environment variables
        still take precedence.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
