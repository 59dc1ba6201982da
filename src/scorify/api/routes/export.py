"""Export API endpoint.

GET /api/export/csv - Export the customer table as CSV
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from scorify.api.app import get_db_session
from scorify.api.auth import Caller, get_current_user
from scorify.crm.customers import parse_band_filter
from scorify.crm.export import collect_export_rows, export_filename, render_csv
from scorify.db.repo import DbSession

router = APIRouter()


@router.get("/export/csv")
def export_customers_csv(
    search: str = Query(""),
    filter: str | None = Query(None),
    caller: Caller = Depends(get_current_user),
    session: DbSession = Depends(get_db_session),
) -> Response:
    """Export customers matching the table filters as a downloadable CSV.

    Args:
        search: Case-insensitive name filter.
        filter: Score band filter (Semua/Tinggi/Sedang/Rendah).

    Returns:
        CSV response with Content-Disposition header for download.
    """
    rows = collect_export_rows(session, search.strip(), parse_band_filter(filter))

    return Response(
        content=render_csv(rows),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )
