"""Domain models for Scorify.

Pure Python dataclasses representing domain entities.
These models are independent of SQLAlchemy and used throughout
the application for clean separation from the database layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Literal


# ============================================================================
# Decisions
# ============================================================================


class Decision(str, Enum):
    """Final disposition of an offer."""

    AGREED = "agreed"
    DECLINED = "declined"
    PENDING = "pending"

    @classmethod
    def normalize(cls, value: str | None) -> Decision:
        """Map a stored decision to the closed set; anything else is pending."""
        if not value:
            return cls.PENDING
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.PENDING

    @property
    def is_decided(self) -> bool:
        return self is not Decision.PENDING


StatusFilter = Literal["all", "agreed", "declined", "pending"]
Role = Literal["Admin", "Sales"]
InteractionType = Literal["PANGGILAN_TELEPON", "CATATAN_INTERNAL"]


# ============================================================================
# Reporting Domain
# ============================================================================


@dataclass
class CampaignEntity:
    """Domain model for a campaign (one interaction record)."""

    id: str
    customer_id: str
    user_id: str | None
    created_at: datetime
    month: str | None = None
    final_decision: str | None = None
    poutcome: str | None = None
    contact: str | None = None
    day_of_week: str | None = None
    contact_count: int = 1
    previous: int = 0
    pdays: int = 999

    @property
    def decision(self) -> Decision:
        return Decision.normalize(self.final_decision)


@dataclass
class LeadScoreEntity:
    """Domain model for a lead score."""

    id: str
    customer_id: str
    score: float
    created_at: datetime
    campaign_id: str | None = None


# ============================================================================
# CRM Domain
# ============================================================================


@dataclass
class UserEntity:
    """Domain model for an account."""

    id: str
    name: str
    email: str
    role: Role
    phone: str | None = None
    created_at: datetime | None = None


@dataclass
class CustomerEntity:
    """Domain model for a customer."""

    id: str
    name: str
    age: int
    job: str
    loan: str
    phone: str | None = None
    address: str | None = None


@dataclass
class InteractionLogEntity:
    """Domain model for a call or internal note."""

    id: str
    customer_id: str
    type: InteractionType
    note: str
    user_id: str | None = None
    user_name: str | None = None
    call_result: str | None = None
    created_at: datetime | None = None


@dataclass
class CustomerSnapshot:
    """Customer with its latest score, decision and call result."""

    customer: CustomerEntity
    latest_score: float | None
    latest_decision: str | None
    latest_call_result: str | None
    latest_poutcome: str | None = None
