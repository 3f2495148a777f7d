"""Projects resource."""

from typing import Any, List, Optional

from freeagent.models import Project
from freeagent.services.base import BaseResource


class Projects(BaseResource[Project]):
    """Access to ``/v2/projects``."""

    endpoint = "v2/projects"
    root_key = "project"
    collection_root_key = "projects"
    model = Project

    async def get_all(
        self,
        view: Optional[str] = None,
        contact: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> List[Project]:
        """Fetch projects.

        Args:
            view: "active", "completed", "cancelled", "inactive" or "hidden"
            contact: Contact URL to restrict the list to
            sort: "name", "contact_name", "contact_display_name",
                "created_at" or "updated_at" (prefix "-" to reverse)
        """
        return await self._list(view=view, contact=contact, sort=sort)

    async def get_all_active(self) -> List[Project]:
        return await self.get_all(view="active")

    async def get_by_id(self, project_id: Any) -> Project:
        return await self._get_entity(project_id)

    async def get_by_name(self, name: str) -> Optional[Project]:
        """Find a project by exact name.

        Returns:
            The first matching project, or None if there is none
        """
        return await self._find_one({"name": name}, self.get_all)

    async def create(self, project: Project) -> Project:
        return await self._create(project)

    async def update(self, project_id: Any, project: Project) -> Project:
        return await self._update(project_id, project)

    async def delete(self, project_id: Any) -> None:
        await self._delete(project_id)
