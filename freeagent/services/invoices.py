"""Invoices resource."""

from datetime import datetime
from typing import Any, List, Optional

from freeagent.models import Invoice
from freeagent.services.base import BaseResource, resource_id


class Invoices(BaseResource[Invoice]):
    """Access to ``/v2/invoices``.

    Besides CRUD, invoices move between states through transition
    endpoints (mark as sent, cancelled, scheduled, draft). A transition
    changes the invoice and which status views list it, so it invalidates
    like an update.
    """

    endpoint = "v2/invoices"
    root_key = "invoice"
    collection_root_key = "invoices"
    model = Invoice

    async def get_all(
        self,
        view: Optional[str] = None,
        contact: Optional[str] = None,
        project: Optional[str] = None,
        sort: Optional[str] = None,
        updated_since: Optional[datetime] = None,
    ) -> List[Invoice]:
        """Fetch invoices.

        Args:
            view: "all", "recent_open_or_overdue", "open", "overdue",
                "open_or_overdue", "draft", "scheduled_to_email",
                "thank_you_emails", "reminder_emails" or "last_N_months"
            contact: Contact URL to restrict the list to
            project: Project URL to restrict the list to
            sort: "created_at" or "updated_at" (prefix "-" to reverse)
            updated_since: Only invoices updated after this timestamp
        """
        return await self._list(
            view=view,
            contact=contact,
            project=project,
            sort=sort,
            updated_since=updated_since,
        )

    async def get_all_by_status(self, status: str) -> List[Invoice]:
        return await self.get_all(view=status)

    async def get_all_by_contact(self, contact_url: str) -> List[Invoice]:
        return await self.get_all(contact=contact_url)

    async def get_all_by_project(self, project_url: str) -> List[Invoice]:
        return await self.get_all(project=project_url)

    async def get_by_id(self, invoice_id: Any) -> Invoice:
        return await self._get_entity(invoice_id)

    async def create(self, invoice: Invoice) -> Invoice:
        return await self._create(invoice)

    async def update(self, invoice_id: Any, invoice: Invoice) -> Invoice:
        return await self._update(invoice_id, invoice)

    async def delete(self, invoice_id: Any) -> None:
        await self._delete(invoice_id)

    # =========================================================================
    # State Transitions
    # =========================================================================

    async def _transition(self, invoice_id: Any, transition: str) -> Optional[Invoice]:
        """PUT ``/v2/invoices/<id>/transitions/<transition>``.

        Returns:
            The updated invoice when FreeAgent returns it, otherwise None
        """
        key_id = resource_id(invoice_id)

        async def mutate() -> Optional[Invoice]:
            data = await self.client._put(f"{self.endpoint}/{key_id}/transitions/{transition}")
            if data is None:
                return None
            return self._parse_entity(data)

        return await self.cache.mutate_resource(mutate, key_id)

    async def mark_as_sent(self, invoice_id: Any) -> Optional[Invoice]:
        return await self._transition(invoice_id, "mark_as_sent")

    async def mark_as_cancelled(self, invoice_id: Any) -> Optional[Invoice]:
        return await self._transition(invoice_id, "mark_as_cancelled")

    async def mark_as_scheduled(self, invoice_id: Any) -> Optional[Invoice]:
        return await self._transition(invoice_id, "mark_as_scheduled")

    async def mark_as_draft(self, invoice_id: Any) -> Optional[Invoice]:
        return await self._transition(invoice_id, "mark_as_draft")
