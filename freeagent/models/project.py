"""Project records."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from freeagent.models.base import FreeAgentModel


class Project(FreeAgentModel):
    """A project run for a contact."""
    url: Optional[str] = None
    name: str
    contact: Optional[str] = None  # Contact URL
    contact_name: Optional[str] = None
    status: Optional[str] = None  # "Active", "Completed", "Cancelled", "Hidden"
    currency: Optional[str] = None
    budget: Optional[Decimal] = None
    budget_units: Optional[str] = None
    normal_billing_rate: Optional[Decimal] = None
    billing_period: Optional[str] = None
    hours_per_day: Optional[Decimal] = None
    uses_project_invoice_sequence: Optional[bool] = None
    starts_on: Optional[date] = None
    ends_on: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
