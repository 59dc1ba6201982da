"""Campaigns API endpoint.

POST /api/campaigns - Log a campaign contact with a customer
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from scorify.api.app import get_db_session
from scorify.api.auth import Caller, get_current_user
from scorify.crm.campaigns import CampaignContact, log_campaign
from scorify.db.repo import DbSession
from scorify.models.types import CampaignCreate, CampaignDetail, CampaignLoggedResponse

router = APIRouter()


@router.post("/campaigns", response_model=CampaignLoggedResponse, status_code=201)
def create_campaign(
    body: CampaignCreate,
    caller: Caller = Depends(get_current_user),
    session: DbSession = Depends(get_db_session),
) -> CampaignLoggedResponse:
    """Log a new campaign contact attributed to the caller.

    Raises:
        HTTPException: 404 if customer not found.
    """
    try:
        campaign = log_campaign(
            session,
            CampaignContact(
                customer_id=body.customer_id,
                contact=body.contact,
                poutcome=body.poutcome,
                user_id=caller.id,
            ),
        )
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

    return CampaignLoggedResponse(
        message="Campaign contact logged",
        log=CampaignDetail(
            id=campaign.id,
            customer_id=campaign.customer_id,
            user_id=campaign.user_id,
            contact=campaign.contact,
            day_of_week=campaign.day_of_week,
            month=campaign.month,
            campaign=campaign.contact_count,
            previous=campaign.previous,
            pdays=campaign.pdays,
            poutcome=campaign.poutcome,
            final_decision=campaign.final_decision,
            created_at=campaign.created_at,
        ),
    )
