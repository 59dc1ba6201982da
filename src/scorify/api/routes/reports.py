"""Reports API endpoints.

GET /api/reports/monthly - 12-month decision breakdown
GET /api/reports/summary - Current-month KPIs with month-over-month growth
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from scorify.aggregation.filters import ReportFilters, parse_status, parse_year
from scorify.aggregation.monthly import monthly_breakdown
from scorify.aggregation.summary import summarize_reports
from scorify.api.app import get_db_session
from scorify.api.auth import Caller, get_current_user, resolve_owner_scope
from scorify.db.repo import DbSession
from scorify.models.types import MonthlyBucket, ReportSummary

router = APIRouter()


def report_filters(
    caller: Caller = Depends(get_current_user),
    year: str | None = Query(None),
    status: str | None = Query(None),
    sales_id: str | None = Query(None, alias="salesId"),
) -> ReportFilters:
    """Build report filters from raw query parameters and caller scope.

    Malformed year/status values fall back to their defaults.
    """
    return ReportFilters(
        year=parse_year(year),
        owner_id=resolve_owner_scope(caller, sales_id),
        status=parse_status(status),
    )


@router.get("/reports/monthly", response_model=list[MonthlyBucket])
def get_monthly_report(
    filters: ReportFilters = Depends(report_filters),
    session: DbSession = Depends(get_db_session),
) -> list[MonthlyBucket]:
    """Get agreed/declined/pending counts per month for a year.

    Args:
        filters: Year, owner and status filters (injected).
        session: Database session (injected).

    Returns:
        12 buckets in calendar order.
    """
    return monthly_breakdown(session, filters)


@router.get("/reports/summary", response_model=ReportSummary)
def get_report_summary(
    filters: ReportFilters = Depends(report_filters),
    session: DbSession = Depends(get_db_session),
) -> ReportSummary:
    """Get headline KPIs for the current month.

    Args:
        filters: Owner and status filters (injected).
        session: Database session (injected).

    Returns:
        ReportSummary with score distribution and growth.
    """
    return summarize_reports(session, filters)
