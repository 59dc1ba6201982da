"""Monthly decision breakdown.

Buckets a year's campaigns into 12 fixed calendar-month slots and counts
agreed/declined/pending decisions per slot.
Domain logic is pure - database operations go through repo.
"""

from __future__ import annotations

import logging
from typing import Iterable

from scorify.aggregation.filters import ReportFilters, year_window
from scorify.aggregation.months import MONTH_LABELS, resolve_month_index
from scorify.db import repo
from scorify.db.repo import DbSession
from scorify.models.domain import CampaignEntity, Decision, StatusFilter
from scorify.models.types import MonthlyBucket

logger = logging.getLogger(__name__)


def monthly_breakdown(session: DbSession, filters: ReportFilters) -> list[MonthlyBucket]:
    """Compute the 12-month decision breakdown for a year.

    The status filter only masks the returned counters; every campaign of
    the year is counted first.

    Args:
        session: Database session.
        filters: Year, owner and status filters.

    Returns:
        12 buckets in fixed month order.
    """
    start, end = year_window(filters.year)
    campaigns = repo.get_campaigns_between(session, start, end, owner_id=filters.owner_id)

    buckets = compute_monthly_buckets(campaigns)
    logger.debug(
        f"Monthly breakdown year={filters.year} owner={filters.owner_id or 'all'} "
        f"records={len(campaigns)}"
    )
    return mask_buckets(buckets, filters.status)


def compute_monthly_buckets(campaigns: Iterable[CampaignEntity]) -> list[MonthlyBucket]:
    """Count decisions per month.

    Pure function - no database access. Null or unrecognized decisions
    count as pending.
    """
    buckets = [MonthlyBucket(month=label) for label in MONTH_LABELS]

    for campaign in campaigns:
        bucket = buckets[resolve_month_index(campaign.month, campaign.created_at)]
        decision = campaign.decision
        if decision is Decision.AGREED:
            bucket.setuju += 1
        elif decision is Decision.DECLINED:
            bucket.ditolak += 1
        else:
            bucket.tertunda += 1

    return buckets


def mask_buckets(buckets: list[MonthlyBucket], status: StatusFilter) -> list[MonthlyBucket]:
    """Zero the counters not selected by the status filter.

    Returns new buckets; the input list is left untouched.
    """
    if status == "all":
        return [bucket.model_copy() for bucket in buckets]

    masked = []
    for bucket in buckets:
        masked.append(
            MonthlyBucket(
                month=bucket.month,
                setuju=bucket.setuju if status == "agreed" else 0,
                ditolak=bucket.ditolak if status == "declined" else 0,
                tertunda=bucket.tertunda if status == "pending" else 0,
            )
        )
    return masked
