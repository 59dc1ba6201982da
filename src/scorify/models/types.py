"""Pydantic models for the Scorify API.

Wire names follow the dashboard UI: camelCase keys, and Indonesian keys
where the UI tables expect them (nama, usia, setuju, ...).
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

OfferStatus = Literal["agreed", "declined", "pending"]
ContactType = Literal["cellular", "telephone", "unknown"]
PreviousOutcome = Literal["success", "failure", "nonexistent", "unknown"]


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Reports
# ============================================================================


class MonthlyBucket(BaseModel):
    """Decision counts for one calendar month."""

    month: str
    setuju: int = 0  # agreed
    ditolak: int = 0  # declined
    tertunda: int = 0  # pending

    @property
    def total(self) -> int:
        return self.setuju + self.ditolak + self.tertunda


class ScoreDistribution(BaseModel):
    """Share of scored customers per band."""

    high: float
    medium: float
    low: float


class Growth(CamelModel):
    """Percentage change versus the previous calendar month."""

    customers: float
    approval_rate: float
    contacted: float


class ReportSummary(CamelModel):
    """Headline KPIs for the current calendar month."""

    total_customers: int
    approval_rate: float
    contacted_customers: int
    score_distribution: ScoreDistribution
    months: list[str]
    growth: Growth
    year: int


# ============================================================================
# Customers
# ============================================================================


class CustomerRow(BaseModel):
    """One row of the customer table."""

    id: str
    nama: str
    usia: int
    pekerjaan: str
    phone: str
    address: str
    status: str
    skor: float | None
    interaksi: str


class Pagination(CamelModel):
    """Pagination block for list responses."""

    total_items: int
    total_pages: int
    current_page: int
    items_per_page: int


class CustomerPage(BaseModel):
    """Paginated customer list."""

    data: list[CustomerRow]
    pagination: Pagination


class CustomerDetails(CamelModel):
    """Customer profile with latest score and statuses."""

    id: str
    name: str
    age: int
    job: str
    phone: str | None
    address: str | None
    skor_peluang: float | None
    status_kontak: str
    status_penawaran: str


class HistoryEntry(BaseModel):
    """Formatted interaction history entry."""

    id: str
    type: str
    date: datetime | None
    note: str
    result: str


class CustomerDetailResponse(BaseModel):
    """Customer detail view."""

    details: CustomerDetails
    history: list[HistoryEntry]


# ============================================================================
# Interactions
# ============================================================================


class CallSubmission(CamelModel):
    """Logged phone call, optionally updating the offer decision."""

    note: str
    call_result: str | None = None
    status_penawaran: OfferStatus | None = None


class NoteSubmission(BaseModel):
    """Internal note."""

    note: str


class StatusUpdate(CamelModel):
    """New decision for the latest campaign."""

    status_penawaran: OfferStatus


class InteractionLogDetail(CamelModel):
    """Stored interaction log entry."""

    id: str
    customer_id: str
    user_id: str | None
    type: str
    note: str
    call_result: str | None
    created_at: datetime | None


class CampaignCreate(CamelModel):
    """New campaign contact for a customer."""

    customer_id: str
    contact: ContactType
    poutcome: PreviousOutcome


class CampaignDetail(CamelModel):
    """Stored campaign."""

    id: str
    customer_id: str
    user_id: str | None
    contact: str | None
    day_of_week: str | None
    month: str | None
    campaign: int
    previous: int
    pdays: int
    poutcome: str | None
    final_decision: str | None
    created_at: datetime


class CampaignLoggedResponse(BaseModel):
    """Response for a logged campaign contact."""

    message: str
    log: CampaignDetail


class InteractionCreatedResponse(BaseModel):
    """Response for a created call or note."""

    message: str
    data: InteractionLogDetail


class StatusUpdatedResponse(CamelModel):
    """Response for a decision update."""

    message: str
    campaign_id: str
    final_decision: OfferStatus


# ============================================================================
# Sales accounts
# ============================================================================


class SalesAccount(BaseModel):
    """Sales account as listed to admins."""

    id: str
    name: str
    email: str


class SalesList(BaseModel):
    """All sales accounts."""

    sales: list[SalesAccount]


class SalesCreate(BaseModel):
    """New sales account."""

    name: str
    email: str
    id: str | None = None


class SalesUpdate(BaseModel):
    """Partial sales account update."""

    id: str
    name: str | None = None
    email: str | None = None


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
    id: str | None = None


# ============================================================================
# Dashboard / account
# ============================================================================


class DashboardStats(CamelModel):
    """Role-scoped dashboard counters."""

    high_priority_count: int
    total_customers: int
    scope: str


class AdminStats(CamelModel):
    """Global counters for the admin dashboard."""

    total_customers: int
    total_sales: int
    total_high_score: int


class UserDetail(CamelModel):
    """Account of the current caller."""

    id: str
    email: str
    name: str
    phone: str | None
    role: str
    created_at: datetime | None


class MeResponse(BaseModel):
    """Response for the current-account endpoint."""

    user: UserDetail
