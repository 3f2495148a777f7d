"""FreeAgent record models."""

from freeagent.models.bank_transaction import BankTransaction
from freeagent.models.base import FreeAgentModel
from freeagent.models.contact import Contact
from freeagent.models.invoice import Invoice, InvoiceItem
from freeagent.models.project import Project
from freeagent.models.task import TaskItem
from freeagent.models.timeslip import Timeslip

__all__ = [
    "FreeAgentModel",
    "BankTransaction",
    "Contact",
    "Invoice",
    "InvoiceItem",
    "Project",
    "TaskItem",
    "Timeslip",
]
