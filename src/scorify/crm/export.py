"""CSV export of the customer table."""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import date

from scorify.aggregation.scoring import BAND_RANGES, ScoreBand
from scorify.db import repo
from scorify.db.repo import DbSession

CSV_HEADERS = [
    "Nama",
    "Usia",
    "Pekerjaan",
    "Status Pinjaman",
    "Skor",
    "Status Interaksi",
]


@dataclass
class ExportRow:
    """One exported customer."""

    nama: str
    usia: int
    pekerjaan: str
    status: str
    skor: float | None
    interaksi: str


def collect_export_rows(
    session: DbSession,
    search: str = "",
    band: ScoreBand | None = None,
) -> list[ExportRow]:
    """Customers matching the table filters, ordered by name."""
    score_range = BAND_RANGES[band] if band else None
    customers = repo.list_customers(session, search, score_range)
    snapshots = repo.get_customer_snapshots(session, customers)
    return [
        ExportRow(
            nama=s.customer.name,
            usia=s.customer.age,
            pekerjaan=s.customer.job,
            status=s.customer.loan,
            skor=s.latest_score,
            interaksi=s.latest_poutcome or "nonexistent",
        )
        for s in snapshots
    ]


def render_csv(rows: list[ExportRow]) -> str:
    """Render rows as CSV text with a header line."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for row in rows:
        writer.writerow(
            [
                row.nama,
                row.usia,
                row.pekerjaan,
                row.status,
                "" if row.skor is None else row.skor,
                row.interaksi,
            ]
        )
    return buffer.getvalue()


def export_filename(today: date | None = None) -> str:
    """Attachment filename for an export made on `today`."""
    today = today or date.today()
    return f"scorify_export_{today.isoformat()}.csv"
