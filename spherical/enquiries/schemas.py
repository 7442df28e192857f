"""
Enquiry payloads. Fields are typed here and checked by the form rules
afterwards, so a missing field still gets its form message.
"""

from pydantic import BaseModel
from typing import Optional


class ContactRequest(BaseModel):
    """POST /public/contact"""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None


class QuoteRequest(BaseModel):
    """POST /public/quote"""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    service_type: Optional[str] = None
    other_service_type: Optional[str] = None
    project_description: Optional[str] = None
    budget: Optional[str] = None
    timeframe: Optional[str] = None
    additional_info: Optional[str] = None
