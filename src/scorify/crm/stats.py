"""Dashboard counters."""

from __future__ import annotations

from scorify.aggregation.scoring import HIGH_SCORE_FLOOR
from scorify.db import repo
from scorify.db.repo import DbSession
from scorify.models.types import AdminStats, DashboardStats


def _count_high_priority(session: DbSession, customer_ids: list[str]) -> int:
    latest = repo.get_latest_scores(session, customer_ids)
    return sum(1 for score in latest.values() if score >= HIGH_SCORE_FLOOR)


def dashboard_stats(session: DbSession, owner_id: str | None) -> DashboardStats:
    """Counters for the landing dashboard.

    Counts customers having at least one campaign, restricted to campaigns
    owned by `owner_id` when given. High priority means the latest score is
    in the high band.
    """
    customer_ids = repo.get_campaign_customer_ids(session, owner_id)
    return DashboardStats(
        high_priority_count=_count_high_priority(session, customer_ids),
        total_customers=len(customer_ids),
        scope="all-customers" if owner_id is None else f"sales-{owner_id}",
    )


def admin_stats(session: DbSession) -> AdminStats:
    """Global counters for the admin dashboard."""
    customer_ids = repo.get_all_customer_ids(session)
    return AdminStats(
        total_customers=len(customer_ids),
        total_sales=repo.count_users_by_role(session, "Sales"),
        total_high_score=_count_high_priority(session, customer_ids),
    )
