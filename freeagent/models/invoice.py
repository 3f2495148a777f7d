"""Invoice records."""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from freeagent.models.base import FreeAgentModel


class InvoiceItem(FreeAgentModel):
    """Line item on an invoice."""
    url: Optional[str] = None
    position: Optional[int] = None
    item_type: Optional[str] = None  # e.g. "Hours", "Days", "Products"
    quantity: Optional[Decimal] = None
    price: Optional[Decimal] = None
    description: Optional[str] = None
    sales_tax_rate: Optional[Decimal] = None
    category: Optional[str] = None  # Category URL


class Invoice(FreeAgentModel):
    """A sales invoice."""
    url: Optional[str] = None
    contact: Optional[str] = None  # Contact URL
    project: Optional[str] = None  # Project URL
    reference: Optional[str] = None
    dated_on: Optional[date] = None
    due_on: Optional[date] = None
    paid_on: Optional[date] = None
    status: Optional[str] = None
    currency: Optional[str] = None
    exchange_rate: Optional[Decimal] = None
    net_value: Optional[Decimal] = None
    total_value: Optional[Decimal] = None
    paid_value: Optional[Decimal] = None
    due_value: Optional[Decimal] = None
    payment_terms_in_days: Optional[int] = None
    comments: Optional[str] = None
    invoice_items: Optional[List[InvoiceItem]] = None
    sent_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
