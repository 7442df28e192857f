"""
Enquiry routes.

Public, mounted at /api/{v}/public:
    POST /contact     Contact form
    POST /quote       Quote request form

Back office (VIEW_ENQUIRIES), mounted at /api/{v}/enquiries:
    GET  /contact
    GET  /quote
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from spherical.config import get_database
from spherical.forms import submit_payload
from spherical.forms.definitions import CONTACT_FORM, QUOTE_FORM
from spherical.rbac import Permission, require_permission
from spherical.utils import success_response
from .schemas import ContactRequest, QuoteRequest
from .service import EnquiryService

public_enquiries_router = APIRouter()
enquiries_router = APIRouter()


@public_enquiries_router.post("/contact")
async def submit_contact(
    body: ContactRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = EnquiryService(db, "contact")
    record = await submit_payload(body.model_dump(), CONTACT_FORM, svc.submit)
    return success_response(
        data=record, message="Message sent successfully", code=201
    )


@public_enquiries_router.post("/quote")
async def submit_quote(
    body: QuoteRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = EnquiryService(db, "quote")
    record = await submit_payload(body.model_dump(), QUOTE_FORM, svc.submit)
    return success_response(
        data=record, message="Quote request submitted successfully", code=201
    )


@enquiries_router.get("/{kind}")
@require_permission(Permission.VIEW_ENQUIRIES)
async def list_enquiries(
    request: Request,
    kind: str,
    status: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    items, total = await EnquiryService(db, kind).list_requests(
        status_filter=status, limit=limit, offset=offset
    )
    return success_response(
        data={"items": items, "total": total, "limit": limit, "offset": offset}
    )
