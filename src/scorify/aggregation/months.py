"""Month labels and month-index resolution for campaign records."""

from __future__ import annotations

from datetime import datetime

# Display order for charts (Indonesian abbreviations)
MONTH_LABELS: tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "Mei", "Jun",
    "Jul", "Agus", "Sep", "Okt", "Nov", "Des",
)

# English and Indonesian names, full and abbreviated
MONTH_INDEX: dict[str, int] = {
    "jan": 0, "january": 0, "januari": 0,
    "feb": 1, "february": 1, "februari": 1,
    "mar": 2, "march": 2, "maret": 2,
    "apr": 3, "april": 3,
    "may": 4, "mei": 4,
    "jun": 5, "june": 5, "juni": 5,
    "jul": 6, "july": 6, "juli": 6,
    "aug": 7, "agu": 7, "agus": 7, "august": 7, "agustus": 7,
    "sep": 8, "sept": 8, "september": 8,
    "oct": 9, "okt": 9, "october": 9, "oktober": 9,
    "nov": 10, "november": 10, "nop": 10, "nopember": 10,
    "dec": 11, "des": 11, "december": 11, "desember": 11,
}


def month_index_from_label(label: str | None) -> int | None:
    """Parse a free-text month label into 0-11, or None if unrecognized."""
    if not label:
        return None
    return MONTH_INDEX.get(label.strip().lower())


def resolve_month_index(label: str | None, created_at: datetime) -> int:
    """Month bucket for a record.

    A recognized label wins even if it disagrees with created_at;
    otherwise the calendar month of created_at is used.
    """
    index = month_index_from_label(label)
    if index is None:
        return created_at.month - 1
    return index
