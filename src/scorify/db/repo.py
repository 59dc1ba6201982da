"""Repository pattern for database operations.

Encapsulates all SQLAlchemy queries, keeping domain logic pure.
Returns domain models (not SQLAlchemy entities) to external callers.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Iterable

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from scorify.db.schema import Campaign, Customer, InteractionLog, LeadScore, User
from scorify.models.domain import (
    CampaignEntity,
    CustomerEntity,
    CustomerSnapshot,
    InteractionLogEntity,
    LeadScoreEntity,
    UserEntity,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession
else:
    DbSession = Session

# Re-export for external use
__all__ = ["DbSession", "ScoreRange"]

# Half-open [lower, upper) score bounds; None means unbounded on that side
ScoreRange = tuple[float | None, float | None]


# ============================================================================
# Converters: SQLAlchemy -> Domain
# ============================================================================


def _campaign_to_entity(campaign: Campaign) -> CampaignEntity:
    """Convert SQLAlchemy Campaign to domain entity."""
    return CampaignEntity(
        id=campaign.id,
        customer_id=campaign.customer_id,
        user_id=campaign.user_id,
        created_at=campaign.created_at,
        month=campaign.month,
        final_decision=campaign.final_decision,
        poutcome=campaign.poutcome,
        contact=campaign.contact,
        day_of_week=campaign.day_of_week,
        contact_count=campaign.contact_count,
        previous=campaign.previous,
        pdays=campaign.pdays,
    )


def _score_to_entity(score: LeadScore) -> LeadScoreEntity:
    """Convert SQLAlchemy LeadScore to domain entity."""
    return LeadScoreEntity(
        id=score.id,
        customer_id=score.customer_id,
        score=score.score,
        created_at=score.created_at,
        campaign_id=score.campaign_id,
    )


def _user_to_entity(user: User) -> UserEntity:
    """Convert SQLAlchemy User to domain entity."""
    return UserEntity(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        phone=user.phone,
        created_at=user.created_at,
    )


def _customer_to_entity(customer: Customer) -> CustomerEntity:
    """Convert SQLAlchemy Customer to domain entity."""
    return CustomerEntity(
        id=customer.id,
        name=customer.name,
        age=customer.age,
        job=customer.job,
        loan=customer.loan,
        phone=customer.phone,
        address=customer.address,
    )


def _log_to_entity(log: InteractionLog, user_name: str | None = None) -> InteractionLogEntity:
    """Convert SQLAlchemy InteractionLog to domain entity."""
    return InteractionLogEntity(
        id=log.id,
        customer_id=log.customer_id,
        type=log.type,
        note=log.note,
        user_id=log.user_id,
        user_name=user_name,
        call_result=log.call_result,
        created_at=log.created_at,
    )


def _score_range_filter(score_range: ScoreRange):
    lower, upper = score_range
    conditions = []
    if lower is not None:
        conditions.append(LeadScore.score >= lower)
    if upper is not None:
        conditions.append(LeadScore.score < upper)
    return conditions


# ============================================================================
# Reporting Repository
# ============================================================================


def get_campaigns_between(
    session: DbSession,
    start: datetime,
    end: datetime,
    owner_id: str | None = None,
) -> list[CampaignEntity]:
    """Get campaigns created in [start, end), optionally for one owner."""
    query = session.query(Campaign).filter(
        Campaign.created_at >= start,
        Campaign.created_at < end,
    )
    if owner_id is not None:
        query = query.filter(Campaign.user_id == owner_id)
    campaigns = query.order_by(Campaign.created_at.desc(), Campaign.id).all()
    return [_campaign_to_entity(c) for c in campaigns]


def get_scores_for_customers(
    session: DbSession,
    customer_ids: Iterable[str],
    before: datetime | None = None,
) -> list[LeadScoreEntity]:
    """Get scores for the given customers, newest first.

    Only scores created strictly before `before` are returned when given.
    """
    ids = list(customer_ids)
    if not ids:
        return []
    query = session.query(LeadScore).filter(LeadScore.customer_id.in_(ids))
    if before is not None:
        query = query.filter(LeadScore.created_at < before)
    scores = query.order_by(LeadScore.created_at.desc(), LeadScore.id).all()
    return [_score_to_entity(s) for s in scores]


def get_latest_scores(
    session: DbSession,
    customer_ids: Iterable[str],
    before: datetime | None = None,
) -> dict[str, float]:
    """Get the most recent score per customer (first seen wins, newest first)."""
    latest: dict[str, float] = {}
    for score in get_scores_for_customers(session, customer_ids, before):
        if score.customer_id not in latest:
            latest[score.customer_id] = score.score
    return latest


# ============================================================================
# Customer Repository
# ============================================================================


def get_customer(session: DbSession, customer_id: str) -> CustomerEntity | None:
    """Get customer by ID."""
    customer = session.query(Customer).filter(Customer.id == customer_id).first()
    return _customer_to_entity(customer) if customer else None


def _filtered_customers(session: DbSession, search: str, score_range: ScoreRange | None):
    query = session.query(Customer)
    if search:
        query = query.filter(
            func.lower(Customer.name).contains(search.lower(), autoescape=True)
        )
    if score_range is not None:
        scored = select(LeadScore.customer_id).where(*_score_range_filter(score_range))
        query = query.filter(Customer.id.in_(scored))
    return query


def count_customers(
    session: DbSession,
    search: str = "",
    score_range: ScoreRange | None = None,
) -> int:
    """Count customers matching the name search and score band."""
    return _filtered_customers(session, search, score_range).count()


def list_customers(
    session: DbSession,
    search: str = "",
    score_range: ScoreRange | None = None,
    offset: int = 0,
    limit: int | None = None,
) -> list[CustomerEntity]:
    """List customers ordered by name.

    Args:
        session: Database session.
        search: Case-insensitive substring of the customer name.
        score_range: Keep customers having any score within this range.
        offset: Rows to skip.
        limit: Max rows; None returns everything.
    """
    query = _filtered_customers(session, search, score_range).order_by(Customer.name, Customer.id)
    if offset:
        query = query.offset(offset)
    if limit is not None:
        query = query.limit(limit)
    return [_customer_to_entity(c) for c in query.all()]


def get_latest_campaigns(
    session: DbSession, customer_ids: Iterable[str]
) -> dict[str, CampaignEntity]:
    """Get the newest campaign per customer."""
    ids = list(customer_ids)
    if not ids:
        return {}
    campaigns = (
        session.query(Campaign)
        .filter(Campaign.customer_id.in_(ids))
        .order_by(Campaign.created_at.desc(), Campaign.id)
        .all()
    )
    latest: dict[str, CampaignEntity] = {}
    for campaign in campaigns:
        if campaign.customer_id not in latest:
            latest[campaign.customer_id] = _campaign_to_entity(campaign)
    return latest


def get_latest_call_results(
    session: DbSession, customer_ids: Iterable[str]
) -> dict[str, str | None]:
    """Get the call result of the newest interaction per customer."""
    ids = list(customer_ids)
    if not ids:
        return {}
    rows = (
        session.query(InteractionLog.customer_id, InteractionLog.call_result)
        .filter(InteractionLog.customer_id.in_(ids))
        .order_by(InteractionLog.created_at.desc(), InteractionLog.id)
        .all()
    )
    latest: dict[str, str | None] = {}
    for customer_id, call_result in rows:
        if customer_id not in latest:
            latest[customer_id] = call_result
    return latest


def get_customer_snapshots(
    session: DbSession, customers: list[CustomerEntity]
) -> list[CustomerSnapshot]:
    """Attach latest score, decision and call result to each customer."""
    ids = [c.id for c in customers]
    scores = get_latest_scores(session, ids)
    campaigns = get_latest_campaigns(session, ids)
    call_results = get_latest_call_results(session, ids)

    snapshots = []
    for customer in customers:
        campaign = campaigns.get(customer.id)
        snapshots.append(
            CustomerSnapshot(
                customer=customer,
                latest_score=scores.get(customer.id),
                latest_decision=campaign.final_decision if campaign else None,
                latest_call_result=call_results.get(customer.id),
                latest_poutcome=campaign.poutcome if campaign else None,
            )
        )
    return snapshots


def get_all_customer_ids(session: DbSession) -> list[str]:
    """Get IDs of every customer."""
    return [row[0] for row in session.query(Customer.id).all()]


def get_campaign_customer_ids(session: DbSession, owner_id: str | None = None) -> list[str]:
    """Get distinct IDs of customers having at least one campaign.

    Restricted to campaigns owned by `owner_id` when given.
    """
    query = session.query(Campaign.customer_id).distinct()
    if owner_id is not None:
        query = query.filter(Campaign.user_id == owner_id)
    return [row[0] for row in query.all()]


# ============================================================================
# Campaign Repository
# ============================================================================


def get_latest_campaign(session: DbSession, customer_id: str) -> CampaignEntity | None:
    """Get the newest campaign of a customer."""
    campaign = (
        session.query(Campaign)
        .filter(Campaign.customer_id == customer_id)
        .order_by(Campaign.created_at.desc(), Campaign.id)
        .first()
    )
    return _campaign_to_entity(campaign) if campaign else None


def create_campaign(session: DbSession, entity: CampaignEntity) -> CampaignEntity:
    """Create a new campaign."""
    campaign = Campaign(
        id=entity.id,
        customer_id=entity.customer_id,
        user_id=entity.user_id,
        contact=entity.contact,
        day_of_week=entity.day_of_week,
        month=entity.month,
        contact_count=entity.contact_count,
        previous=entity.previous,
        pdays=entity.pdays,
        final_decision=entity.final_decision,
        poutcome=entity.poutcome,
        created_at=entity.created_at,
    )
    session.add(campaign)
    return entity


def update_campaign_decision(session: DbSession, campaign_id: str, decision: str) -> None:
    """Set final_decision on a campaign."""
    campaign = session.query(Campaign).filter(Campaign.id == campaign_id).first()
    if campaign:
        campaign.final_decision = decision


# ============================================================================
# Interaction Log Repository
# ============================================================================


def get_interaction_logs(session: DbSession, customer_id: str) -> list[InteractionLogEntity]:
    """Get all interactions of a customer, newest first, with the author name."""
    rows = (
        session.query(InteractionLog, User.name)
        .outerjoin(User, InteractionLog.user_id == User.id)
        .filter(InteractionLog.customer_id == customer_id)
        .order_by(InteractionLog.created_at.desc(), InteractionLog.id)
        .all()
    )
    return [_log_to_entity(log, user_name) for log, user_name in rows]


def create_interaction_log(
    session: DbSession, entity: InteractionLogEntity
) -> InteractionLogEntity:
    """Create a new interaction log entry."""
    log = InteractionLog(
        id=entity.id,
        customer_id=entity.customer_id,
        user_id=entity.user_id,
        type=entity.type,
        note=entity.note,
        call_result=entity.call_result,
    )
    if entity.created_at is not None:
        log.created_at = entity.created_at
    session.add(log)
    session.flush()
    entity.created_at = log.created_at
    return entity


# ============================================================================
# User Repository
# ============================================================================


def get_user(session: DbSession, user_id: str) -> UserEntity | None:
    """Get user by ID."""
    user = session.query(User).filter(User.id == user_id).first()
    return _user_to_entity(user) if user else None


def get_user_by_email(session: DbSession, email: str) -> UserEntity | None:
    """Get user by email (case-insensitive)."""
    user = session.query(User).filter(func.lower(User.email) == email.lower()).first()
    return _user_to_entity(user) if user else None


def get_users_by_role(session: DbSession, role: str) -> list[UserEntity]:
    """Get all users with a role, ordered by name."""
    users = session.query(User).filter(User.role == role).order_by(User.name, User.id).all()
    return [_user_to_entity(u) for u in users]


def get_user_ids_by_role(session: DbSession, role: str) -> list[str]:
    """Get IDs of all users with a role."""
    return [row[0] for row in session.query(User.id).filter(User.role == role).all()]


def count_users_by_role(session: DbSession, role: str) -> int:
    """Count users with a role."""
    return session.query(User).filter(User.role == role).count()


def create_user(session: DbSession, entity: UserEntity) -> UserEntity:
    """Create a new user."""
    user = User(
        id=entity.id,
        name=entity.name,
        email=entity.email,
        role=entity.role,
        phone=entity.phone,
    )
    session.add(user)
    return entity


def update_user(
    session: DbSession,
    user_id: str,
    *,
    name: str | None = None,
    email: str | None = None,
) -> None:
    """Update user fields that are provided."""
    user = session.query(User).filter(User.id == user_id).first()
    if user:
        if name is not None:
            user.name = name
        if email is not None:
            user.email = email


def delete_user(session: DbSession, user_id: str) -> None:
    """Delete a user."""
    user = session.query(User).filter(User.id == user_id).first()
    if user:
        session.delete(user)


# ============================================================================
# Batch Operations
# ============================================================================


def commit(session: DbSession) -> None:
    """Commit current transaction."""
    session.commit()
