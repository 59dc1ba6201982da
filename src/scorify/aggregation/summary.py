"""Report summary aggregation.

Computes headline KPIs for the current calendar month (distinct customers,
approval rate, contacted customers, score-band distribution) and their
growth versus the previous calendar month.
Domain logic is pure - database operations go through repo.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Mapping

from scorify.aggregation.filters import (
    ReportFilters,
    month_window,
    previous_month_window,
    utcnow,
)
from scorify.aggregation.months import MONTH_LABELS
from scorify.aggregation.scoring import compute_score_distribution
from scorify.db import repo
from scorify.db.repo import DbSession
from scorify.models.domain import CampaignEntity, Decision
from scorify.models.types import Growth, ReportSummary

logger = logging.getLogger(__name__)


@dataclass
class PeriodMetrics:
    """KPIs of one reporting period."""

    total_customers: int
    approval_rate: float
    contacted_customers: int


def summarize_reports(
    session: DbSession,
    filters: ReportFilters,
    now: datetime | None = None,
) -> ReportSummary:
    """Compute the report summary for the month containing `now`.

    Both the current and the previous month are fetched with the same
    owner and status filters.

    Args:
        session: Database session.
        filters: Owner/status filters; `year` is echoed in the result.
        now: Reference time (defaults to current UTC time).

    Returns:
        ReportSummary for the current calendar month.
    """
    now = now or utcnow()
    current_start, current_end = month_window(now)
    previous_start, previous_end = previous_month_window(now)

    current = _filter_by_decision(
        repo.get_campaigns_between(session, current_start, current_end, filters.owner_id),
        filters.decision,
    )
    previous = _filter_by_decision(
        repo.get_campaigns_between(session, previous_start, previous_end, filters.owner_id),
        filters.decision,
    )

    customer_ids = {c.customer_id for c in current}
    latest_scores = repo.get_latest_scores(session, customer_ids, before=current_end)

    logger.debug(
        f"Summary window={current_start:%Y-%m} owner={filters.owner_id or 'all'} "
        f"status={filters.status} current={len(current)} previous={len(previous)}"
    )
    return build_summary(current, previous, latest_scores, year=filters.year)


def _filter_by_decision(
    campaigns: list[CampaignEntity], decision: Decision | None
) -> list[CampaignEntity]:
    if decision is None:
        return campaigns
    return [c for c in campaigns if c.decision is decision]


def build_summary(
    current: list[CampaignEntity],
    previous: list[CampaignEntity],
    latest_scores: Mapping[str, float],
    year: int,
) -> ReportSummary:
    """Assemble the summary from already-fetched records.

    Pure function - no database access.

    Args:
        current: Campaigns of the current month.
        previous: Campaigns of the previous month.
        latest_scores: Latest score per customer id.
        year: Year echoed back to the caller.
    """
    current_metrics = compute_period_metrics(current)
    previous_metrics = compute_period_metrics(previous)

    customer_ids = {c.customer_id for c in current}
    scores = [latest_scores[cid] for cid in sorted(customer_ids) if cid in latest_scores]

    return ReportSummary(
        total_customers=current_metrics.total_customers,
        approval_rate=current_metrics.approval_rate,
        contacted_customers=current_metrics.contacted_customers,
        score_distribution=compute_score_distribution(scores),
        months=list(MONTH_LABELS),
        growth=compute_growth(current_metrics, previous_metrics),
        year=year,
    )


def compute_period_metrics(campaigns: Iterable[CampaignEntity]) -> PeriodMetrics:
    """Compute KPIs for one period.

    - total_customers: distinct customer ids
    - approval_rate: agreed / (agreed + declined), 0 when nothing is decided
    - contacted_customers: distinct customers whose latest decision is
      agreed or declined (null counts as pending)
    """
    records = list(campaigns)

    agreed = sum(1 for c in records if c.decision is Decision.AGREED)
    declined = sum(1 for c in records if c.decision is Decision.DECLINED)
    decided = agreed + declined
    approval_rate = agreed / decided if decided > 0 else 0.0

    latest_decision: dict[str, Decision] = {}
    for campaign in sorted(records, key=lambda c: (c.created_at, c.id), reverse=True):
        if campaign.customer_id not in latest_decision:
            latest_decision[campaign.customer_id] = campaign.decision

    contacted = sum(1 for decision in latest_decision.values() if decision.is_decided)

    return PeriodMetrics(
        total_customers=len(latest_decision),
        approval_rate=approval_rate,
        contacted_customers=contacted,
    )


def growth_percentage(current: float, previous: float) -> float:
    """Percentage change from previous to current; 0 when previous is 0."""
    if previous <= 0:
        return 0.0
    return (current - previous) / previous * 100


def compute_growth(current: PeriodMetrics, previous: PeriodMetrics) -> Growth:
    """Month-over-month growth of the three headline metrics."""
    return Growth(
        customers=growth_percentage(current.total_customers, previous.total_customers),
        approval_rate=growth_percentage(current.approval_rate, previous.approval_rate),
        contacted=growth_percentage(current.contacted_customers, previous.contacted_customers),
    )
