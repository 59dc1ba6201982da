"""Tests for the report summary aggregation."""

import math
from datetime import datetime

import pytest

from scorify.aggregation.filters import ReportFilters
from scorify.aggregation.summary import (
    PeriodMetrics,
    build_summary,
    compute_growth,
    compute_period_metrics,
    growth_percentage,
    summarize_reports,
)
from scorify.db.schema import Campaign, Customer, LeadScore, User
from scorify.models.domain import CampaignEntity

NOW = datetime(2025, 3, 15, 12, 0)


def make_campaign(
    campaign_id: str,
    customer_id: str,
    decision: str | None = "agreed",
    created_at: datetime = datetime(2025, 3, 2),
) -> CampaignEntity:
    return CampaignEntity(
        id=campaign_id,
        customer_id=customer_id,
        user_id="sales_1",
        created_at=created_at,
        final_decision=decision,
    )


class TestPeriodMetrics:
    def test_three_agreed_distinct_customers(self):
        metrics = compute_period_metrics(
            [make_campaign("c1", "X"), make_campaign("c2", "Y"), make_campaign("c3", "Z")]
        )
        assert metrics.total_customers == 3
        assert metrics.approval_rate == 1.0
        assert metrics.contacted_customers == 3

    def test_null_decision_is_not_contacted(self):
        metrics = compute_period_metrics([make_campaign("c1", "X", decision=None)])
        assert metrics.total_customers == 1
        assert metrics.contacted_customers == 0

    def test_approval_rate_zero_when_nothing_decided(self):
        metrics = compute_period_metrics(
            [make_campaign("c1", "X", decision="pending"), make_campaign("c2", "Y", None)]
        )
        assert metrics.approval_rate == 0.0
        assert not math.isnan(metrics.approval_rate)

    def test_empty_period(self):
        metrics = compute_period_metrics([])
        assert metrics == PeriodMetrics(0, 0.0, 0)

    def test_approval_rate_ignores_pending(self):
        metrics = compute_period_metrics(
            [
                make_campaign("c1", "X", "agreed"),
                make_campaign("c2", "Y", "declined"),
                make_campaign("c3", "Z", "declined"),
                make_campaign("c4", "W", None),
            ]
        )
        assert metrics.approval_rate == pytest.approx(1 / 3)

    def test_contacted_uses_latest_decision_per_customer(self):
        metrics = compute_period_metrics(
            [
                make_campaign("c1", "X", "agreed", created_at=datetime(2025, 3, 1)),
                make_campaign("c2", "X", None, created_at=datetime(2025, 3, 9)),
                make_campaign("c3", "Y", None, created_at=datetime(2025, 3, 1)),
                make_campaign("c4", "Y", "declined", created_at=datetime(2025, 3, 9)),
            ]
        )
        assert metrics.total_customers == 2
        assert metrics.contacted_customers == 1


class TestGrowth:
    def test_percentage_change(self):
        assert growth_percentage(15, 10) == pytest.approx(50.0)
        assert growth_percentage(5, 10) == pytest.approx(-50.0)

    def test_zero_previous_is_zero(self):
        assert growth_percentage(5, 0) == 0.0
        assert growth_percentage(0, 0) == 0.0

    def test_previous_month_empty(self):
        growth = compute_growth(PeriodMetrics(5, 0.6, 3), PeriodMetrics(0, 0.0, 0))
        assert (growth.customers, growth.approval_rate, growth.contacted) == (0.0, 0.0, 0.0)


class TestBuildSummary:
    def test_distribution_from_latest_scores(self):
        current = [make_campaign("c1", "X"), make_campaign("c2", "Y"), make_campaign("c3", "Z")]
        summary = build_summary(current, [], {"X": 0.9, "Y": 0.65}, year=2025)

        dist = summary.score_distribution
        assert dist.high == pytest.approx(0.5)
        assert dist.medium == pytest.approx(0.5)
        assert dist.low == 0.0
        assert summary.months[7] == "Agus"
        assert summary.year == 2025

    def test_no_scores_is_all_zero(self):
        summary = build_summary([make_campaign("c1", "X")], [], {}, year=2025)
        dist = summary.score_distribution
        assert (dist.high, dist.medium, dist.low) == (0.0, 0.0, 0.0)

    def test_camel_case_wire_keys(self):
        summary = build_summary([], [], {}, year=2025)
        payload = summary.model_dump(by_alias=True)
        assert {"totalCustomers", "approvalRate", "contactedCustomers", "scoreDistribution"} <= set(
            payload
        )
        assert set(payload["growth"]) == {"customers", "approvalRate", "contacted"}


def setup_report_data(session):
    session.add_all(
        [
            User(id="sales_1", name="Sari", email="sari@example.com", role="Sales"),
            User(id="sales_2", name="Budi", email="budi@example.com", role="Sales"),
        ]
    )
    for cid in ("A", "B", "C", "D"):
        session.add(Customer(id=cid, name=f"Customer {cid}", age=35, job="services"))
    session.add_all(
        [
            # Current month (March 2025)
            Campaign(id="m1", customer_id="A", user_id="sales_1", final_decision="agreed",
                     created_at=datetime(2025, 3, 2)),
            Campaign(id="m2", customer_id="B", user_id="sales_1", final_decision="declined",
                     created_at=datetime(2025, 3, 3)),
            Campaign(id="m3", customer_id="C", user_id="sales_2", final_decision=None,
                     created_at=datetime(2025, 3, 4)),
            # Previous month (February 2025)
            Campaign(id="p1", customer_id="A", user_id="sales_1", final_decision="agreed",
                     created_at=datetime(2025, 2, 10)),
            Campaign(id="p2", customer_id="D", user_id="sales_2", final_decision="agreed",
                     created_at=datetime(2025, 2, 11)),
        ]
    )
    session.add_all(
        [
            LeadScore(id="s1", customer_id="A", score=0.3, created_at=datetime(2025, 1, 1)),
            LeadScore(id="s2", customer_id="A", score=0.9, created_at=datetime(2025, 3, 1)),
            LeadScore(id="s3", customer_id="B", score=0.7, created_at=datetime(2025, 2, 1)),
            # Scored after the current window ends: ignored
            LeadScore(id="s4", customer_id="C", score=0.95, created_at=datetime(2025, 4, 2)),
        ]
    )
    session.commit()


class TestSummarizeReports:
    def test_current_month_metrics(self, session):
        setup_report_data(session)
        summary = summarize_reports(session, ReportFilters(year=2025), now=NOW)

        assert summary.total_customers == 3
        assert summary.approval_rate == pytest.approx(0.5)
        assert summary.contacted_customers == 2
        assert summary.score_distribution.high == pytest.approx(0.5)
        assert summary.score_distribution.medium == pytest.approx(0.5)
        assert summary.score_distribution.low == 0.0

    def test_growth_versus_previous_month(self, session):
        setup_report_data(session)
        summary = summarize_reports(session, ReportFilters(year=2025), now=NOW)

        # previous: 2 customers, approval 1.0, contacted 2
        assert summary.growth.customers == pytest.approx(50.0)
        assert summary.growth.approval_rate == pytest.approx(-50.0)
        assert summary.growth.contacted == pytest.approx(0.0)

    def test_owner_scope(self, session):
        setup_report_data(session)
        summary = summarize_reports(
            session, ReportFilters(year=2025, owner_id="sales_2"), now=NOW
        )

        assert summary.total_customers == 1
        assert summary.contacted_customers == 0
        assert summary.approval_rate == 0.0
        assert summary.growth.customers == pytest.approx(0.0)

    def test_status_filter_applies_to_both_months(self, session):
        setup_report_data(session)
        summary = summarize_reports(
            session, ReportFilters(year=2025, status="agreed"), now=NOW
        )

        assert summary.total_customers == 1
        assert summary.approval_rate == 1.0
        # previous month: 2 agreed customers
        assert summary.growth.customers == pytest.approx(-50.0)

    def test_empty_previous_month_has_zero_growth(self, session):
        setup_report_data(session)
        summary = summarize_reports(
            session, ReportFilters(year=2025), now=datetime(2025, 2, 20)
        )

        assert summary.total_customers == 2
        assert summary.growth.customers == 0.0

    def test_idempotent(self, session):
        setup_report_data(session)
        filters = ReportFilters(year=2025)
        first = summarize_reports(session, filters, now=NOW)
        second = summarize_reports(session, filters, now=NOW)
        assert first.model_dump_json() == second.model_dump_json()
