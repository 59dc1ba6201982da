"""Campaign contact logging.

Each logged contact becomes a new campaign row stamped with the weekday
and month label of the contact, plus the contact history of the
customer's previous campaign.
"""

from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass
from datetime import datetime

from scorify.aggregation.filters import utcnow
from scorify.db import repo
from scorify.db.repo import DbSession
from scorify.models.domain import CampaignEntity
from scorify.models.types import ContactType, PreviousOutcome

logger = logging.getLogger(__name__)

# Never contacted before
NO_PREVIOUS_CONTACT_DAYS = 999

_MONTH_CODES = (
    "jan", "feb", "mar", "apr", "may", "jun",
    "jul", "aug", "sep", "oct", "nov", "dec",
)
_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


@dataclass
class CampaignContact:
    """Input for logging a campaign contact."""

    customer_id: str
    contact: ContactType
    poutcome: PreviousOutcome
    user_id: str | None = None


def days_between(earlier: datetime, later: datetime) -> int:
    """Whole days between two times, rounded up."""
    seconds = abs((later - earlier).total_seconds())
    return math.ceil(seconds / 86400)


def log_campaign(
    session: DbSession,
    contact: CampaignContact,
    now: datetime | None = None,
) -> CampaignEntity:
    """Record a new campaign contact for a customer.

    `previous` copies the contact count of the customer's latest campaign
    and `pdays` is the number of days since it (999 when there is none).

    Raises:
        ValueError: If the customer does not exist.
    """
    if repo.get_customer(session, contact.customer_id) is None:
        raise ValueError(f"Customer not found: {contact.customer_id}")

    now = now or utcnow()
    last = repo.get_latest_campaign(session, contact.customer_id)

    entity = repo.create_campaign(
        session,
        CampaignEntity(
            id=str(uuid.uuid4()),
            customer_id=contact.customer_id,
            user_id=contact.user_id,
            created_at=now,
            month=_MONTH_CODES[now.month - 1],
            poutcome=contact.poutcome,
            contact=contact.contact,
            day_of_week=_WEEKDAYS[now.weekday()],
            contact_count=1,
            previous=last.contact_count if last else 0,
            pdays=days_between(last.created_at, now) if last else NO_PREVIOUS_CONTACT_DAYS,
        ),
    )
    repo.commit(session)
    logger.info(
        f"Campaign {entity.id} logged for customer {contact.customer_id} "
        f"by {contact.user_id or 'system'}"
    )
    return entity
