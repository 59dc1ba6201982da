"""Customers API endpoints.

GET /api/customers - Paginated customer table
GET /api/customers/{customer_id} - Customer detail with history
POST /api/customers/{customer_id}/calls - Log a phone call
POST /api/customers/{customer_id}/notes - Add an internal note
PATCH /api/customers/{customer_id}/status - Update latest offer decision
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from scorify.api.app import get_db_session
from scorify.api.auth import Caller, get_current_user
from scorify.crm.customers import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    MAX_LIMIT,
    get_customer_detail,
    list_customer_page,
    parse_band_filter,
    parse_positive_int,
)
from scorify.crm.interactions import (
    CallInput,
    EmptyNoteError,
    add_note,
    log_call,
    update_offer_status,
)
from scorify.db.repo import DbSession
from scorify.models.domain import InteractionLogEntity
from scorify.models.types import (
    CallSubmission,
    CustomerDetailResponse,
    CustomerPage,
    InteractionCreatedResponse,
    InteractionLogDetail,
    NoteSubmission,
    StatusUpdate,
    StatusUpdatedResponse,
)

router = APIRouter()

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, proxy-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def _log_detail(log: InteractionLogEntity) -> InteractionLogDetail:
    return InteractionLogDetail(
        id=log.id,
        customer_id=log.customer_id,
        user_id=log.user_id,
        type=log.type,
        note=log.note,
        call_result=log.call_result,
        created_at=log.created_at,
    )


@router.get("/customers", response_model=CustomerPage)
def get_customers(
    response: Response,
    page: str | None = Query(None),
    limit: str | None = Query(None),
    search: str = Query(""),
    filter: str | None = Query(None),
    caller: Caller = Depends(get_current_user),
    session: DbSession = Depends(get_db_session),
) -> CustomerPage:
    """Get one page of customers ordered by name.

    Args:
        page: 1-based page number (default 1).
        limit: Rows per page (default 10, max 100).
        search: Case-insensitive name filter.
        filter: Score band filter (Semua/Tinggi/Sedang/Rendah).
    """
    response.headers.update(NO_CACHE_HEADERS)
    return list_customer_page(
        session,
        page=parse_positive_int(page, DEFAULT_PAGE),
        limit=parse_positive_int(limit, DEFAULT_LIMIT, MAX_LIMIT),
        search=search.strip(),
        band=parse_band_filter(filter),
    )


@router.get("/customers/{customer_id}", response_model=CustomerDetailResponse)
def get_customer(
    customer_id: str,
    caller: Caller = Depends(get_current_user),
    session: DbSession = Depends(get_db_session),
) -> CustomerDetailResponse:
    """Get customer details and interaction history.

    Raises:
        HTTPException: 404 if customer not found.
    """
    detail = get_customer_detail(session, customer_id)
    if detail is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    return detail


@router.post(
    "/customers/{customer_id}/calls",
    response_model=InteractionCreatedResponse,
    status_code=201,
)
def create_call(
    customer_id: str,
    call: CallSubmission,
    caller: Caller = Depends(get_current_user),
    session: DbSession = Depends(get_db_session),
) -> InteractionCreatedResponse:
    """Log a phone call, optionally updating the offer decision.

    Raises:
        HTTPException: 400 if the note is blank, 404 if customer not found.
    """
    call_input = CallInput(
        customer_id=customer_id,
        note=call.note,
        user_id=caller.id,
        call_result=call.call_result,
        offer_status=call.status_penawaran,
    )

    try:
        log = log_call(session, call_input)
    except EmptyNoteError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

    return InteractionCreatedResponse(
        message="Call and offer status saved",
        data=_log_detail(log),
    )


@router.post(
    "/customers/{customer_id}/notes",
    response_model=InteractionCreatedResponse,
    status_code=201,
)
def create_note(
    customer_id: str,
    note: NoteSubmission,
    caller: Caller = Depends(get_current_user),
    session: DbSession = Depends(get_db_session),
) -> InteractionCreatedResponse:
    """Add an internal note to a customer's history.

    Raises:
        HTTPException: 400 if the note is blank, 404 if customer not found.
    """
    try:
        log = add_note(session, customer_id, note.note, user_id=caller.id)
    except EmptyNoteError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

    return InteractionCreatedResponse(message="Note added", data=_log_detail(log))


@router.patch("/customers/{customer_id}/status", response_model=StatusUpdatedResponse)
def patch_customer_status(
    customer_id: str,
    update: StatusUpdate,
    caller: Caller = Depends(get_current_user),
    session: DbSession = Depends(get_db_session),
) -> StatusUpdatedResponse:
    """Set the decision of the customer's latest campaign.

    Raises:
        HTTPException: 404 if the customer has no campaign.
    """
    try:
        result = update_offer_status(session, customer_id, update.status_penawaran)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

    return StatusUpdatedResponse(
        message="Offer status updated",
        campaign_id=result.campaign_id,
        final_decision=result.final_decision,
    )
