"""Customer list and detail views.

Builds the paginated customer table and the customer detail page
(profile, latest score, statuses and interaction history).
Domain logic is pure - database operations go through repo.
"""

from __future__ import annotations

import math

from scorify.aggregation.scoring import BAND_RANGES, ScoreBand
from scorify.crm.labels import INTERACTION_TYPE_LABELS, format_enum_value, translate_value
from scorify.db import repo
from scorify.db.repo import DbSession
from scorify.models.domain import CustomerSnapshot, Decision, InteractionLogEntity
from scorify.models.types import (
    CustomerDetailResponse,
    CustomerDetails,
    CustomerPage,
    CustomerRow,
    HistoryEntry,
    Pagination,
)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

# UI filter values (Indonesian) plus their English equivalents
_BAND_FILTERS: dict[str, ScoreBand | None] = {
    "semua": None,
    "all": None,
    "tinggi": "high",
    "high": "high",
    "sedang": "medium",
    "medium": "medium",
    "rendah": "low",
    "low": "low",
}


def parse_band_filter(raw: str | None) -> ScoreBand | None:
    """Map the table's score filter to a band; unknown values mean no filter."""
    if not raw:
        return None
    return _BAND_FILTERS.get(raw.strip().lower())


def parse_positive_int(raw: str | None, default: int, maximum: int | None = None) -> int:
    """Parse a positive integer query parameter, falling back to default."""
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if value < 1:
        return default
    if maximum is not None:
        value = min(value, maximum)
    return value


def _row_from_snapshot(snapshot: CustomerSnapshot) -> CustomerRow:
    customer = snapshot.customer
    return CustomerRow(
        id=customer.id,
        nama=customer.name,
        usia=customer.age,
        pekerjaan=format_enum_value(customer.job),
        phone=customer.phone or "-",
        address=customer.address or "-",
        status=translate_value(snapshot.latest_decision or "pending"),
        skor=snapshot.latest_score,
        interaksi=translate_value(snapshot.latest_call_result or "unknown"),
    )


def list_customer_page(
    session: DbSession,
    *,
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
    search: str = "",
    band: ScoreBand | None = None,
) -> CustomerPage:
    """Get one page of the customer table ordered by name.

    Args:
        session: Database session.
        page: 1-based page number.
        limit: Rows per page.
        search: Case-insensitive name substring.
        band: Keep customers having any score in this band.
    """
    score_range = BAND_RANGES[band] if band else None

    total_items = repo.count_customers(session, search, score_range)
    customers = repo.list_customers(
        session,
        search,
        score_range,
        offset=(page - 1) * limit,
        limit=limit,
    )
    snapshots = repo.get_customer_snapshots(session, customers)

    return CustomerPage(
        data=[_row_from_snapshot(s) for s in snapshots],
        pagination=Pagination(
            total_items=total_items,
            total_pages=math.ceil(total_items / limit),
            current_page=page,
            items_per_page=limit,
        ),
    )


def _history_entry(log: InteractionLogEntity) -> HistoryEntry:
    if log.type == "CATATAN_INTERNAL":
        result = ""
    else:
        outcome = translate_value(log.call_result)
        result = f"Sales: {log.user_name or 'System'}. Hasil: {outcome}"
    return HistoryEntry(
        id=log.id,
        type=INTERACTION_TYPE_LABELS.get(log.type, log.type),
        date=log.created_at,
        note=log.note,
        result=result,
    )


def get_customer_detail(session: DbSession, customer_id: str) -> CustomerDetailResponse | None:
    """Get the customer detail view, or None if the customer does not exist."""
    customer = repo.get_customer(session, customer_id)
    if customer is None:
        return None

    snapshot = repo.get_customer_snapshots(session, [customer])[0]
    logs = repo.get_interaction_logs(session, customer_id)
    latest_contact = logs[0].call_result if logs else None

    return CustomerDetailResponse(
        details=CustomerDetails(
            id=customer.id,
            name=customer.name,
            age=customer.age,
            job=customer.job,
            phone=customer.phone,
            address=customer.address,
            skor_peluang=snapshot.latest_score,
            status_kontak=latest_contact or "unknown",
            status_penawaran=Decision.normalize(snapshot.latest_decision).value,
        ),
        history=[_history_entry(log) for log in logs],
    )
