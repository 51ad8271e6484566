from esplatform.platform.elasticsearch.platform import ElasticSearchPlatform

__all__ = ["ElasticSearchPlatform"]
