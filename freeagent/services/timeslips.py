"""Timeslips resource.

Timeslips are time entries logged by a user against a project task. Lists
are the most frequently filtered reads in this client (by user, project and
date range), so each filter combination gets its own cache entry and every
write drops all of them.
"""

from datetime import date, datetime
from typing import Any, List, Optional

from freeagent.core.errors import FreeAgentResponseError
from freeagent.models import Timeslip
from freeagent.services.base import BaseResource


class Timeslips(BaseResource[Timeslip]):
    """Access to ``/v2/timeslips``."""

    endpoint = "v2/timeslips"
    root_key = "timeslip"
    collection_root_key = "timeslips"
    model = Timeslip

    USERS_ENDPOINT = "v2/users"

    async def get_all(
        self,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        updated_since: Optional[datetime] = None,
        view: Optional[str] = None,
        nested: Optional[bool] = None,
        user: Optional[str] = None,
        task: Optional[str] = None,
        project: Optional[str] = None,
    ) -> List[Timeslip]:
        """Fetch timeslips.

        Args:
            from_date: Earliest dated_on to include
            to_date: Latest dated_on to include
            updated_since: Only timeslips updated after this timestamp
            view: "all", "unbilled" or "running"
            nested: Return associated resources nested instead of as URLs
            user: User URL to restrict the list to
            task: Task URL to restrict the list to
            project: Project URL to restrict the list to

        Returns:
            Timeslips matching every given filter
        """
        return await self._list(
            from_date=from_date,
            to_date=to_date,
            updated_since=updated_since,
            view=view,
            nested=nested,
            user=user,
            task=task,
            project=project,
        )

    async def get_by_project_url(self, project_url: str) -> List[Timeslip]:
        return await self.get_all(project=project_url)

    async def get_by_user_and_date_range(
        self,
        user_id: Any,
        from_date: date,
        to_date: date,
    ) -> List[Timeslip]:
        """Fetch every timeslip a user logged within a date range."""
        user_url = self.client.resource_url(self.USERS_ENDPOINT, user_id)
        return await self.get_all(
            from_date=from_date,
            to_date=to_date,
            view="all",
            user=user_url,
        )

    async def get_by_id(self, timeslip_id: Any) -> Timeslip:
        return await self._get_entity(timeslip_id)

    async def create(self, timeslip: Timeslip) -> Timeslip:
        return await self._create(timeslip)

    async def create_batch(self, timeslips: List[Timeslip]) -> List[Timeslip]:
        """Create several timeslips in one request."""
        payload = {self.collection_root_key: [t.to_payload() for t in timeslips]}

        async def mutate() -> List[Timeslip]:
            data = await self.client._post(self.endpoint, payload)
            try:
                return self._parse_list(data)
            except FreeAgentResponseError:
                # A batch of one comes back in the single-record shape.
                return [self._parse_entity(data)]

        return await self.cache.mutate_resource(mutate)

    async def update(self, timeslip_id: Any, timeslip: Timeslip) -> Timeslip:
        return await self._update(timeslip_id, timeslip)

    async def delete(self, timeslip_id: Any) -> None:
        await self._delete(timeslip_id)
