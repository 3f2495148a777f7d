"""Project task records."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from freeagent.models.base import FreeAgentModel


class TaskItem(FreeAgentModel):
    """A task within a project that time can be logged against."""
    url: Optional[str] = None
    project: Optional[str] = None  # Project URL
    name: str
    is_billable: Optional[bool] = None
    billing_rate: Optional[Decimal] = None
    billing_period: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
