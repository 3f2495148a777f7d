"""Cache-aside accessor shared by every resource wrapper.

A ``ResourceCache`` belongs to one resource (``"timeslips"``, ``"invoices"``,
...) and provides:

- key construction: ``entity_key(id)`` -> ``"<resource>_<id>"`` and
  ``collection_key(**filters)`` -> ``"<resource>_all"`` or
  ``"<resource>_<signature>"``;
- the read path, ``get_or_fetch``: serve a fresh entry or await the fetch
  callable and cache its result;
- the write path, ``mutate_and_invalidate``: await the mutation and, only if
  it succeeded, remove every key that may now be stale.

Filtered collection keys always contain ``=`` and entity keys never do, so
``invalidation_pattern`` reaches every filtered list cached for the
resource, whichever accessor or process built it.
"""

from datetime import date, datetime, timedelta
from enum import Enum
from typing import (
    Any,
    Awaitable,
    Callable,
    Iterable,
    List,
    Mapping,
    Optional,
    Tuple,
    TypeVar,
)
from urllib.parse import urlencode

from pydantic import TypeAdapter

from freeagent.cache.store import CacheStore
from freeagent.core.logging import LoggerAdapter, get_logger

logger = get_logger(__name__)

T = TypeVar("T")

ALL_SUFFIX = "all"


def canonical_value(value: Any) -> str:
    """Render a filter value the same way on every call."""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return ",".join(canonical_value(v) for v in value)
    return str(value)


def canonical_filters(filters: Mapping[str, Any]) -> List[Tuple[str, str]]:
    """Normalize list-operation filters.

    ``None`` values are dropped so an omitted filter and an explicit
    ``None`` are the same query; the rest are sorted by name.
    """
    return sorted(
        (name, canonical_value(value))
        for name, value in filters.items()
        if value is not None
    )


class ResourceCache:
    """Cache-aside helper for one resource type.

    Args:
        store: Shared cache store, injected by the client.
        resource: Resource name used as the key namespace.
        ttl: Default lifetime of cached entries. Defaults to 5 minutes.

    Concurrent reads of the same missing key are not deduplicated: each
    awaits its own fetch and the last ``set`` wins. A read that started
    before a mutation may repopulate a key the mutation just invalidated.
    """

    DEFAULT_TTL = timedelta(minutes=5)

    def __init__(
        self,
        store: CacheStore,
        resource: str,
        ttl: Optional[timedelta] = None,
    ):
        if not resource or not resource.strip():
            raise ValueError("Resource name is required")

        self.store = store
        self.resource = resource
        self.ttl = ttl if ttl is not None else self.DEFAULT_TTL

        self._log = LoggerAdapter(logger, {"resource": resource})

    # =========================================================================
    # Key Construction
    # =========================================================================

    @property
    def all_key(self) -> str:
        """Key of the unfiltered list."""
        return f"{self.resource}_{ALL_SUFFIX}"

    @property
    def invalidation_pattern(self) -> str:
        """Glob matching every filtered collection key of the resource."""
        return f"{self.resource}_*=*"

    def entity_key(self, entity_id: Any) -> str:
        """Key of a single entity: ``"<resource>_<id>"``."""
        key_id = str(entity_id).strip() if entity_id is not None else ""
        if not key_id:
            raise ValueError(f"An id is required to build a {self.resource} key")
        if key_id == ALL_SUFFIX or "=" in key_id:
            # Would collide with a collection key.
            raise ValueError(f"Invalid {self.resource} id: {key_id!r}")
        return f"{self.resource}_{key_id}"

    def collection_key(self, **filters: Any) -> str:
        """Key of a list result for the given filters.

        Semantically equal filters (same values, any order, ``None`` for
        omitted) map to the same key; no filters map to ``all_key``.
        """
        pairs = canonical_filters(filters)
        if not pairs:
            return self.all_key
        return f"{self.resource}_{urlencode(pairs)}"

    def invalidation_keys(self, entity_id: Any = None) -> List[str]:
        """Exact keys a mutation must invalidate.

        ``all_key``, plus the entity key when ``entity_id`` is given
        (update, delete, state transitions). Creates pass no id: the new
        entity is not cached yet. Filtered lists are covered by
        ``invalidation_pattern``.
        """
        keys = [self.all_key]
        if entity_id is not None:
            keys.insert(0, self.entity_key(entity_id))
        return keys

    # =========================================================================
    # Read Path
    # =========================================================================

    async def get_or_fetch(
        self,
        key: str,
        fetch: Callable[[], Awaitable[T]],
        ttl: Optional[timedelta] = None,
        adapter: Optional[TypeAdapter] = None,
    ) -> T:
        """Return the cached value for key, fetching it on a miss.

        Args:
            key: Pre-computed cache key.
            fetch: Zero-argument coroutine function doing the real read.
            ttl: Lifetime of a newly cached value; defaults to ``self.ttl``.
            adapter: Optional pydantic adapter applied to cached values, so
                stores that keep JSON still hand back typed records.

        Returns:
            The cached or freshly fetched value. A successful fetch is
            cached even when it returns ``None`` or an empty list.

        Raises:
            Whatever ``fetch`` raises, unchanged. Nothing is cached then.
        """
        value, found = await self.store.get(key)
        if found:
            self._log.debug(f"Cache hit for {key}")
            if adapter is not None:
                return adapter.validate_python(value)
            return value

        self._log.debug(f"Cache miss for {key}")
        value = await fetch()

        await self.store.set(key, value, ttl if ttl is not None else self.ttl)
        return value

    # =========================================================================
    # Write Path
    # =========================================================================

    async def mutate_and_invalidate(
        self,
        mutate: Callable[[], Awaitable[T]],
        keys: Iterable[str],
        patterns: Iterable[str] = (),
    ) -> T:
        """Run a write, then invalidate keys if it succeeded.

        Args:
            mutate: Zero-argument coroutine function doing the real write.
            keys: Exact keys that may be stale after the write, usually
                ``invalidation_keys(entity_id)``.
            patterns: Glob patterns of further stale keys, usually
                ``[invalidation_pattern]``.

        Returns:
            The mutation's result.

        Raises:
            Whatever ``mutate`` raises, unchanged. Nothing is removed then.
        """
        keys = list(keys)
        patterns = list(patterns)
        result = await mutate()

        for key in keys:
            await self.store.remove(key)
        for pattern in patterns:
            await self.store.remove_matching(pattern)
        self._log.debug(f"Invalidated {len(keys)} cache keys and {len(patterns)} key patterns")

        return result

    async def mutate_resource(
        self,
        mutate: Callable[[], Awaitable[T]],
        entity_id: Any = None,
    ) -> T:
        """Run a write that touches this resource and invalidate its lists.

        Removes the unfiltered list, every filtered list and, when
        ``entity_id`` is given, that entity's key.
        """
        return await self.mutate_and_invalidate(
            mutate,
            self.invalidation_keys(entity_id),
            [self.invalidation_pattern],
        )
