"""Bank transaction records."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from freeagent.models.base import FreeAgentModel


class BankTransaction(FreeAgentModel):
    """A transaction on a FreeAgent bank account."""
    url: Optional[str] = None
    bank_account: Optional[str] = None  # Bank account URL
    dated_on: Optional[date] = None
    description: Optional[str] = None
    full_description: Optional[str] = None
    amount: Optional[Decimal] = None
    unexplained_amount: Optional[Decimal] = None
    is_explained: Optional[bool] = None
    is_manual: Optional[bool] = None
    is_locked: Optional[bool] = None
    uploaded_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
