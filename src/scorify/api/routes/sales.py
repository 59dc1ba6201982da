"""Sales management API endpoints (admin only).

GET /api/admin/sales - List sales accounts
POST /api/admin/sales - Create a sales account
PUT /api/admin/sales - Update a sales account
DELETE /api/admin/sales?id=... - Delete a sales account
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from scorify.api.app import get_db_session
from scorify.api.auth import Caller, require_admin
from scorify.crm.sales import (
    DuplicateEmailError,
    SalesNotFoundError,
    create_sales,
    delete_sales,
    list_sales,
    update_sales,
)
from scorify.db.repo import DbSession
from scorify.models.types import (
    MessageResponse,
    SalesAccount,
    SalesCreate,
    SalesList,
    SalesUpdate,
)

router = APIRouter(prefix="/admin/sales")


@router.get("", response_model=SalesList)
def get_sales(
    admin: Caller = Depends(require_admin),
    session: DbSession = Depends(get_db_session),
) -> SalesList:
    """List all sales accounts ordered by name."""
    return SalesList(
        sales=[SalesAccount(id=u.id, name=u.name, email=u.email) for u in list_sales(session)]
    )


@router.post("", response_model=MessageResponse, status_code=201)
def post_sales(
    body: SalesCreate,
    admin: Caller = Depends(require_admin),
    session: DbSession = Depends(get_db_session),
) -> MessageResponse:
    """Create a sales account.

    Raises:
        HTTPException: 400 if fields are blank or the email is taken.
    """
    if not body.name.strip() or not body.email.strip():
        raise HTTPException(status_code=400, detail="Name and email are required")

    try:
        user = create_sales(session, body.name, body.email, requested_id=body.id)
    except DuplicateEmailError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return MessageResponse(message="Sales account created", id=user.id)


@router.put("", response_model=MessageResponse)
def put_sales(
    body: SalesUpdate,
    admin: Caller = Depends(require_admin),
    session: DbSession = Depends(get_db_session),
) -> MessageResponse:
    """Partially update a sales account.

    Raises:
        HTTPException: 404 if not found, 400 if the email is taken.
    """
    try:
        update_sales(session, body.id, name=body.name, email=body.email)
    except SalesNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except DuplicateEmailError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return MessageResponse(message=f"Sales {body.id} updated", id=body.id)


@router.delete("", response_model=MessageResponse)
def remove_sales(
    sales_id: str = Query(..., alias="id"),
    admin: Caller = Depends(require_admin),
    session: DbSession = Depends(get_db_session),
) -> MessageResponse:
    """Delete a sales account.

    Raises:
        HTTPException: 404 if not found.
    """
    try:
        delete_sales(session, sales_id)
    except SalesNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

    return MessageResponse(message=f"Sales {sales_id} deleted", id=sales_id)
