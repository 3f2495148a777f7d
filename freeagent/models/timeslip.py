"""Timeslip records."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from freeagent.models.base import FreeAgentModel


class Timeslip(FreeAgentModel):
    """Time logged by a user against a project task."""
    url: Optional[str] = None
    user: Optional[str] = None  # User URL
    project: Optional[str] = None  # Project URL
    task: Optional[str] = None  # Task URL
    dated_on: Optional[date] = None
    hours: Optional[Decimal] = None
    comment: Optional[str] = None
    billed_on_invoice: Optional[str] = None  # Invoice URL
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
