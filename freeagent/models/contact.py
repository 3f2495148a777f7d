"""Contact records."""

from datetime import datetime
from typing import Optional

from freeagent.models.base import FreeAgentModel


class Contact(FreeAgentModel):
    """A customer or supplier."""
    url: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    organisation_name: Optional[str] = None
    email: Optional[str] = None
    billing_email: Optional[str] = None
    phone_number: Optional[str] = None
    address1: Optional[str] = None
    town: Optional[str] = None
    postcode: Optional[str] = None
    country: Optional[str] = None
    status: Optional[str] = None
    default_payment_terms_in_days: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
