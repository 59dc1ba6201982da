"""Report filters and time windows.

Query parameters arrive as raw strings from the dashboard. Malformed values
fall back to defaults instead of failing the request.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from scorify.models.domain import Decision, StatusFilter

_STATUS_FILTERS: tuple[str, ...] = ("all", "agreed", "declined", "pending")


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (matches stored timestamps)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True)
class ReportFilters:
    """Filters shared by the report operations.

    Attributes:
        year: Target year for the monthly breakdown.
        owner_id: Salesperson to restrict to; None means all owners.
        status: Decision filter ("all" means no restriction).
    """

    year: int
    owner_id: str | None = None
    status: StatusFilter = "all"

    @property
    def decision(self) -> Decision | None:
        """Decision the status filter selects, or None for "all"."""
        if self.status == "all":
            return None
        return Decision(self.status)


def parse_year(raw: str | int | None, now: datetime | None = None) -> int:
    """Parse the year parameter, defaulting to the current year."""
    default = (now or utcnow()).year
    if raw is None:
        return default
    try:
        year = int(str(raw).strip())
    except ValueError:
        return default
    if not 1 <= year <= 9998:
        return default
    return year


def parse_status(raw: str | None) -> StatusFilter:
    """Parse the status parameter, defaulting to "all"."""
    if not raw:
        return "all"
    status = raw.strip().lower()
    if status not in _STATUS_FILTERS:
        return "all"
    return status  # type: ignore[return-value]


def parse_owner(raw: str | None) -> str | None:
    """Parse the owner parameter; empty or "all" means no restriction."""
    if raw is None:
        return None
    owner = raw.strip()
    if not owner or owner.lower() == "all":
        return None
    return owner


def year_window(year: int) -> tuple[datetime, datetime]:
    """[Jan 1 of year, Jan 1 of next year)."""
    return datetime(year, 1, 1), datetime(year + 1, 1, 1)


def month_window(reference: datetime) -> tuple[datetime, datetime]:
    """Calendar month containing `reference`, as [start, next month start)."""
    start = datetime(reference.year, reference.month, 1)
    if reference.month == 12:
        end = datetime(reference.year + 1, 1, 1)
    else:
        end = datetime(reference.year, reference.month + 1, 1)
    return start, end


def previous_month_window(reference: datetime) -> tuple[datetime, datetime]:
    """Calendar month immediately before the one containing `reference`."""
    current_start, _ = month_window(reference)
    if current_start.month == 1:
        start = datetime(current_start.year - 1, 12, 1)
    else:
        start = datetime(current_start.year, current_start.month - 1, 1)
    return start, current_start
