"""Project tasks resource."""

from datetime import datetime
from typing import Any, List, Optional

from freeagent.core.errors import FreeAgentValidationError
from freeagent.models import TaskItem
from freeagent.services.base import BaseResource


class Tasks(BaseResource[TaskItem]):
    """Access to ``/v2/tasks``."""

    endpoint = "v2/tasks"
    root_key = "task"
    collection_root_key = "tasks"
    model = TaskItem

    async def get_all(
        self,
        project: Optional[str] = None,
        view: Optional[str] = None,
        sort: Optional[str] = None,
        updated_since: Optional[datetime] = None,
    ) -> List[TaskItem]:
        """Fetch tasks.

        Args:
            project: Project URL to restrict the list to
            view: "all", "active", "completed" or "hidden"
            sort: "name", "project", "billing_rate", "created_at" or
                "updated_at" (prefix "-" to reverse)
            updated_since: Only tasks updated after this timestamp
        """
        return await self._list(
            project=project,
            view=view,
            sort=sort,
            updated_since=updated_since,
        )

    async def get_all_by_project_url(self, project_url: str) -> List[TaskItem]:
        return await self.get_all(project=project_url)

    async def get_by_id(self, task_id: Any) -> TaskItem:
        return await self._get_entity(task_id)

    async def create(self, task: TaskItem, project: Optional[str] = None) -> TaskItem:
        """Create a task in a project.

        Args:
            task: Task to create
            project: Project URL; defaults to ``task.project``
        """
        project = project or task.project
        if not project:
            raise FreeAgentValidationError("A project URL is required to create a task")
        return await self._create(task, params={"project": project})

    async def update(self, task_id: Any, task: TaskItem) -> TaskItem:
        return await self._update(task_id, task)

    async def delete(self, task_id: Any) -> None:
        await self._delete(task_id)
