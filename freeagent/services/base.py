"""Shared plumbing for resource wrappers.

Each wrapper declares its endpoint, resource name, JSON root keys and model;
``BaseResource`` turns those into cached reads and invalidating writes.
"""

from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    Dict,
    Generic,
    List,
    Optional,
    Type,
    TypeVar,
)

from pydantic import TypeAdapter

from freeagent.cache import ResourceCache, canonical_filters
from freeagent.core.errors import FreeAgentResponseError, FreeAgentValidationError
from freeagent.models.base import FreeAgentModel

if TYPE_CHECKING:
    from freeagent.services.client import FreeAgentClient

ModelT = TypeVar("ModelT", bound=FreeAgentModel)


def resource_id(value: Any) -> str:
    """Return the id of an entity given its id or its full URL.

    FreeAgent identifies entities by URL, e.g.
    ``https://api.freeagent.com/v2/timeslips/25``; the id is the last segment.
    """
    text = str(value).strip() if value is not None else ""
    if "/" in text:
        text = text.rstrip("/").rsplit("/", 1)[-1]
    if not text:
        raise FreeAgentValidationError(f"Invalid FreeAgent id or URL: {value!r}")
    return text


class BaseResource(Generic[ModelT]):
    """Base class for one FreeAgent resource.

    Subclasses set:
        endpoint: API path, e.g. ``"v2/timeslips"``
        root_key: JSON key wrapping one record, e.g. ``"timeslip"``
        collection_root_key: JSON key wrapping a list, e.g. ``"timeslips"``
        model: pydantic model of the record
    """

    endpoint: str
    root_key: str
    collection_root_key: str
    model: Type[ModelT]

    def __init__(self, client: "FreeAgentClient", cache: ResourceCache):
        self.client = client
        self.cache = cache
        self._entity_adapter = TypeAdapter(self.model)
        self._list_adapter = TypeAdapter(List[self.model])
        self._optional_adapter = TypeAdapter(Optional[self.model])

    # =========================================================================
    # Response Parsing
    # =========================================================================

    def _parse_entity(self, data: Any) -> ModelT:
        if not isinstance(data, dict) or data.get(self.root_key) is None:
            raise FreeAgentResponseError(
                f"Expected '{self.root_key}' in response from {self.endpoint}"
            )
        return self._entity_adapter.validate_python(data[self.root_key])

    def _parse_list(self, data: Any) -> List[ModelT]:
        if not isinstance(data, dict) or not isinstance(data.get(self.collection_root_key), list):
            raise FreeAgentResponseError(
                f"Expected '{self.collection_root_key}' in response from {self.endpoint}"
            )
        return self._list_adapter.validate_python(data[self.collection_root_key])

    # =========================================================================
    # Cached Reads
    # =========================================================================

    async def _get_entity(self, entity_id: Any) -> ModelT:
        """GET ``<endpoint>/<id>`` through the cache."""
        key_id = resource_id(entity_id)

        async def fetch() -> ModelT:
            data = await self.client._get(f"{self.endpoint}/{key_id}")
            return self._parse_entity(data)

        return await self.cache.get_or_fetch(
            self.cache.entity_key(key_id), fetch, adapter=self._entity_adapter
        )

    async def _list(self, **filters: Any) -> List[ModelT]:
        """GET ``<endpoint>`` with filters through the cache.

        The same canonical filters build both the cache key and the query
        string, so a key always describes exactly the request made.
        """
        params = dict(canonical_filters(filters))

        async def fetch() -> List[ModelT]:
            data = await self.client._get(self.endpoint, params=params or None)
            return self._parse_list(data)

        return await self.cache.get_or_fetch(
            self.cache.collection_key(**filters), fetch, adapter=self._list_adapter
        )

    async def _find_one(
        self,
        lookup: Dict[str, Any],
        records: Callable[[], Awaitable[List[ModelT]]],
    ) -> Optional[ModelT]:
        """Cache the first record matching ``lookup`` from a list read.

        FreeAgent has no server-side lookup for some fields; the match is
        cached under its own collection key, so it is invalidated together
        with the lists it was taken from.
        """

        async def fetch() -> Optional[ModelT]:
            for record in await records():
                if all(getattr(record, name, None) == value for name, value in lookup.items()):
                    return record
            return None

        return await self.cache.get_or_fetch(
            self.cache.collection_key(**lookup), fetch, adapter=self._optional_adapter
        )

    # =========================================================================
    # Invalidating Writes
    # =========================================================================

    async def _create(self, record: ModelT, params: Optional[dict] = None) -> ModelT:
        """POST a new record; invalidates every list of the resource."""

        async def mutate() -> ModelT:
            data = await self.client._post(
                self.endpoint, {self.root_key: record.to_payload()}, params=params
            )
            return self._parse_entity(data)

        return await self.cache.mutate_resource(mutate)

    async def _update(self, entity_id: Any, record: ModelT) -> ModelT:
        """PUT changes to a record; invalidates it and every list."""
        key_id = resource_id(entity_id)

        async def mutate() -> ModelT:
            data = await self.client._put(
                f"{self.endpoint}/{key_id}", {self.root_key: record.to_payload()}
            )
            return self._parse_entity(data)

        return await self.cache.mutate_resource(mutate, key_id)

    async def _delete(self, entity_id: Any) -> None:
        """DELETE a record; invalidates it and every list."""
        key_id = resource_id(entity_id)

        async def mutate() -> None:
            await self.client._delete(f"{self.endpoint}/{key_id}")

        await self.cache.mutate_resource(mutate, key_id)
