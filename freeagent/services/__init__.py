"""FreeAgent API client and resource wrappers."""

from freeagent.services.bank_transactions import BankTransactions
from freeagent.services.base import BaseResource, resource_id
from freeagent.services.client import FreeAgentClient
from freeagent.services.contacts import Contacts
from freeagent.services.invoices import Invoices
from freeagent.services.projects import Projects
from freeagent.services.tasks import Tasks
from freeagent.services.timeslips import Timeslips

__all__ = [
    "FreeAgentClient",
    "BaseResource",
    "resource_id",
    "BankTransactions",
    "Contacts",
    "Invoices",
    "Projects",
    "Tasks",
    "Timeslips",
]
