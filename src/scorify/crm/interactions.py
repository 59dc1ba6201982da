"""Interaction logging for customers.

Handles call logs, internal notes and offer decision updates.
Domain logic is pure - database operations go through repo.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from scorify.db import repo
from scorify.db.repo import DbSession
from scorify.models.domain import CampaignEntity, InteractionLogEntity
from scorify.models.types import OfferStatus

logger = logging.getLogger(__name__)

CALL = "PANGGILAN_TELEPON"
NOTE = "CATATAN_INTERNAL"


class EmptyNoteError(ValueError):
    """Raised when a call or note has no text."""


@dataclass
class CallInput:
    """Input for logging a phone call."""

    customer_id: str
    note: str
    user_id: str | None = None
    call_result: str | None = None
    offer_status: OfferStatus | None = None


@dataclass
class StatusResult:
    """Result of an offer decision update."""

    campaign_id: str
    final_decision: OfferStatus


def _require_customer(session: DbSession, customer_id: str) -> None:
    if repo.get_customer(session, customer_id) is None:
        raise ValueError(f"Customer not found: {customer_id}")


def _clean_note(note: str) -> str:
    cleaned = note.strip()
    if not cleaned:
        raise EmptyNoteError("Note must not be empty")
    return cleaned


def log_call(session: DbSession, call: CallInput) -> InteractionLogEntity:
    """Record a phone call and optionally update the latest offer decision.

    The decision update is skipped when the customer has no campaign.

    Raises:
        EmptyNoteError: If the note is blank.
        ValueError: If the customer does not exist.
    """
    note = _clean_note(call.note)
    _require_customer(session, call.customer_id)

    log = repo.create_interaction_log(
        session,
        InteractionLogEntity(
            id=str(uuid.uuid4()),
            customer_id=call.customer_id,
            type=CALL,
            note=note,
            user_id=call.user_id,
            call_result=call.call_result,
        ),
    )

    if call.offer_status:
        campaign = repo.get_latest_campaign(session, call.customer_id)
        if campaign is not None:
            repo.update_campaign_decision(session, campaign.id, call.offer_status)

    repo.commit(session)
    logger.info(f"Call logged for customer {call.customer_id} by {call.user_id or 'system'}")
    return log


def add_note(
    session: DbSession,
    customer_id: str,
    note: str,
    user_id: str | None = None,
) -> InteractionLogEntity:
    """Record an internal note for a customer.

    Raises:
        EmptyNoteError: If the note is blank.
        ValueError: If the customer does not exist.
    """
    cleaned = _clean_note(note)
    _require_customer(session, customer_id)

    log = repo.create_interaction_log(
        session,
        InteractionLogEntity(
            id=str(uuid.uuid4()),
            customer_id=customer_id,
            type=NOTE,
            note=cleaned,
            user_id=user_id,
            call_result="unknown",
        ),
    )
    repo.commit(session)
    logger.info(f"Note added for customer {customer_id} by {user_id or 'system'}")
    return log


def update_offer_status(
    session: DbSession, customer_id: str, status: OfferStatus
) -> StatusResult:
    """Set the decision of the customer's latest campaign.

    Raises:
        ValueError: If the customer has no campaign.
    """
    campaign: CampaignEntity | None = repo.get_latest_campaign(session, customer_id)
    if campaign is None:
        raise ValueError(f"No campaign found for customer: {customer_id}")

    repo.update_campaign_decision(session, campaign.id, status)
    repo.commit(session)
    logger.info(f"Campaign {campaign.id} decision set to {status}")
    return StatusResult(campaign_id=campaign.id, final_decision=status)
