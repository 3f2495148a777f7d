"""Contacts resource."""

from typing import Any, List, Optional

from freeagent.models import Contact
from freeagent.services.base import BaseResource


class Contacts(BaseResource[Contact]):
    """Access to ``/v2/contacts``."""

    endpoint = "v2/contacts"
    root_key = "contact"
    collection_root_key = "contacts"
    model = Contact

    async def get_all(
        self,
        view: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> List[Contact]:
        """Fetch contacts.

        Args:
            view: "all", "active", "clients", "suppliers",
                "active_projects", "completed_projects", "open_clients",
                "open_suppliers" or "hidden"; FreeAgent defaults to "active"
            sort: "name", "created_at" or "updated_at" (prefix "-" to reverse)
        """
        return await self._list(view=view, sort=sort)

    async def get_all_with_active_projects(self) -> List[Contact]:
        return await self.get_all(view="active_projects")

    async def get_by_id(self, contact_id: Any) -> Contact:
        return await self._get_entity(contact_id)

    async def get_by_organisation_name(self, organisation_name: str) -> Optional[Contact]:
        """Find a contact by organisation name among all contacts.

        Returns:
            The first matching contact, or None if there is none
        """
        return await self._find_one(
            {"organisation_name": organisation_name},
            lambda: self.get_all(view="all"),
        )

    async def create(self, contact: Contact) -> Contact:
        return await self._create(contact)

    async def update(self, contact_id: Any, contact: Contact) -> Contact:
        return await self._update(contact_id, contact)

    async def delete(self, contact_id: Any) -> None:
        await self._delete(contact_id)
