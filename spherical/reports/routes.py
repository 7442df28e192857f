"""
Reports Routes — analytics for the back office.

Endpoints:
    GET  /dashboard        Counts at a glance
    GET  /sales-summary    Totals, average sale value, revenue by category
"""

from fastapi import APIRouter, Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from spherical.config import get_database
from spherical.rbac import Permission, require_permission
from spherical.utils import success_response
from .service import ReportsService

reports_router = APIRouter()


@reports_router.get("/dashboard")
@require_permission(Permission.VIEW_DASHBOARD)
async def dashboard(
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    data = await ReportsService(db).dashboard()
    return success_response(data=data)


@reports_router.get("/sales-summary")
@require_permission(Permission.VIEW_REPORTS)
async def sales_summary(
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    data = await ReportsService(db).sales_summary()
    return success_response(data=data)
