"""Dashboard API endpoints.

GET /api/dashboard/stats - Role-scoped customer counters
GET /api/admin/stats - Global counters (admin only)
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from scorify.api.app import get_db_session
from scorify.api.auth import Caller, get_current_user, require_admin
from scorify.api.routes.customers import NO_CACHE_HEADERS
from scorify.crm.stats import admin_stats, dashboard_stats
from scorify.db.repo import DbSession
from scorify.models.types import AdminStats, DashboardStats

router = APIRouter()


@router.get("/dashboard/stats", response_model=DashboardStats)
def get_dashboard_stats(
    caller: Caller = Depends(get_current_user),
    session: DbSession = Depends(get_db_session),
) -> DashboardStats:
    """Admins see every customer with a campaign, sales only their own."""
    return dashboard_stats(session, owner_id=None if caller.is_admin else caller.id)


@router.get("/admin/stats", response_model=AdminStats)
def get_admin_stats(
    response: Response,
    admin: Caller = Depends(require_admin),
    session: DbSession = Depends(get_db_session),
) -> AdminStats:
    """Total customers, sales accounts and high-score customers."""
    response.headers.update(NO_CACHE_HEADERS)
    return admin_stats(session)
