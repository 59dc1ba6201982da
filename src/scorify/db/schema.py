"""Database schema for Scorify.

Sales accounts, customers, campaigns (one offer to one customer by one
salesperson), lead scores and the interaction log behind the customer
history view.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class User(Base):
    """Application account (Admin or Sales)."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default="Sales")
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)


class Customer(Base):
    """Bank customer (nasabah) targeted by campaigns."""

    __tablename__ = "customers"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    job: Mapped[str] = mapped_column(String(64), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    loan: Mapped[str] = mapped_column(String(32), nullable=False, default="no")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)


class Campaign(Base):
    """A sales offer made to a customer.

    `month` is the free-text campaign month label and may disagree with
    created_at. `final_decision` is stored as text and normalized on read.
    """

    __tablename__ = "campaigns"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    customer_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("customers.id"), nullable=False
    )
    user_id: Mapped[str | None] = mapped_column(String(64), ForeignKey("users.id"), nullable=True)
    contact: Mapped[str | None] = mapped_column(String(16), nullable=True)
    day_of_week: Mapped[str | None] = mapped_column(String(16), nullable=True)
    month: Mapped[str | None] = mapped_column(String(16), nullable=True)
    # Contact counts: during this campaign, and before it (previous)
    contact_count: Mapped[int] = mapped_column("campaign", Integer, nullable=False, default=1)
    previous: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Days since the previous campaign; 999 when there was none
    pdays: Mapped[int] = mapped_column(Integer, nullable=False, default=999)
    final_decision: Mapped[str | None] = mapped_column(String(16), nullable=True)
    poutcome: Mapped[str | None] = mapped_column(String(32), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)

    __table_args__ = (
        Index("ix_campaigns_user_created", "user_id", "created_at"),
        Index("ix_campaigns_customer_created", "customer_id", "created_at"),
    )


class LeadScore(Base):
    """Computed opportunity score in [0, 1] for a customer."""

    __tablename__ = "lead_scores"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    customer_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("customers.id"), nullable=False
    )
    campaign_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("campaigns.id"), nullable=True
    )
    score: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)

    __table_args__ = (Index("ix_lead_scores_customer_created", "customer_id", "created_at"),)


class InteractionLog(Base):
    """Call or internal note recorded against a customer (append-only)."""

    __tablename__ = "interaction_logs"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    customer_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("customers.id"), nullable=False
    )
    user_id: Mapped[str | None] = mapped_column(String(64), ForeignKey("users.id"), nullable=True)
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    note: Mapped[str] = mapped_column(Text, nullable=False)
    call_result: Mapped[str | None] = mapped_column(String(32), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)
