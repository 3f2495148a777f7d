"""Async FreeAgent accounting API client with a cache-aside layer."""

__version__ = "0.1.0"

from freeagent.cache import (  # noqa: E402
    CacheStore,
    InMemoryCacheStore,
    RedisCacheStore,
    ResourceCache,
    create_cache_store,
)
from freeagent.core import (  # noqa: E402
    FreeAgentError,
    FreeAgentSettings,
    get_logger,
    setup_logging,
)
from freeagent.services import FreeAgentClient  # noqa: E402

__all__ = [
    "__version__",
    "CacheStore",
    "InMemoryCacheStore",
    "RedisCacheStore",
    "ResourceCache",
    "create_cache_store",
    "FreeAgentClient",
    "FreeAgentError",
    "FreeAgentSettings",
    "get_logger",
    "setup_logging",
]
