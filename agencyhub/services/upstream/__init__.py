from .cache import ResponseCache, InMemoryResponseCache, NullResponseCache, make_cache_key
from .client import AgencyHubClient, MetricsCollections, UpstreamError, load_collections

__all__ = [
    "ResponseCache",
    "InMemoryResponseCache",
    "NullResponseCache",
    "make_cache_key",
    "AgencyHubClient",
    "MetricsCollections",
    "UpstreamError",
    "load_collections",
]
