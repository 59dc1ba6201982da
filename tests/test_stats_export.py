"""Tests for dashboard counters and CSV export."""

import csv
import io
from datetime import date, datetime

from scorify.crm.export import (
    CSV_HEADERS,
    ExportRow,
    collect_export_rows,
    export_filename,
    render_csv,
)
from scorify.crm.stats import admin_stats, dashboard_stats
from scorify.db.schema import Campaign, Customer, LeadScore, User


def setup_stats_data(session):
    session.add_all(
        [
            User(id="admin", name="Admin", email="admin@example.com", role="Admin"),
            User(id="sales_1", name="Sari", email="sari@example.com", role="Sales"),
            User(id="sales_2", name="Budi", email="budi@example.com", role="Sales"),
            Customer(id="cust-1", name="Ani", age=30, job="admin.", loan="yes"),
            Customer(id="cust-2", name="Budi", age=45, job="technician"),
            Customer(id="cust-3", name="Citra", age=27, job="student"),
            Customer(id="cust-4", name="Dedi, Jr.", age=51, job="retired"),
        ]
    )
    session.add_all(
        [
            Campaign(id="c1", customer_id="cust-1", user_id="sales_1", poutcome="success",
                     created_at=datetime(2025, 1, 1)),
            Campaign(id="c2", customer_id="cust-2", user_id="sales_1",
                     created_at=datetime(2025, 1, 2)),
            Campaign(id="c3", customer_id="cust-3", user_id="sales_2",
                     created_at=datetime(2025, 1, 3)),
        ]
    )
    session.add_all(
        [
            LeadScore(id="s1", customer_id="cust-1", score=0.9, created_at=datetime(2025, 1, 1)),
            # Was high, latest is low: not high priority
            LeadScore(id="s2", customer_id="cust-2", score=0.95, created_at=datetime(2025, 1, 1)),
            LeadScore(id="s3", customer_id="cust-2", score=0.2, created_at=datetime(2025, 1, 5)),
            LeadScore(id="s4", customer_id="cust-3", score=0.8, created_at=datetime(2025, 1, 1)),
            LeadScore(id="s5", customer_id="cust-4", score=0.85, created_at=datetime(2025, 1, 1)),
        ]
    )
    session.commit()


class TestDashboardStats:
    def test_all_customers(self, session):
        setup_stats_data(session)
        stats = dashboard_stats(session, owner_id=None)

        assert stats.total_customers == 3
        assert stats.high_priority_count == 2
        assert stats.scope == "all-customers"

    def test_owner_scope(self, session):
        setup_stats_data(session)
        stats = dashboard_stats(session, owner_id="sales_1")

        assert stats.total_customers == 2
        assert stats.high_priority_count == 1
        assert stats.scope == "sales-sales_1"


class TestAdminStats:
    def test_global_counters(self, session):
        setup_stats_data(session)
        stats = admin_stats(session)

        assert stats.total_customers == 4
        assert stats.total_sales == 2
        assert stats.total_high_score == 3


class TestExport:
    def test_collect_rows(self, session):
        setup_stats_data(session)
        rows = collect_export_rows(session)

        assert [r.nama for r in rows] == ["Ani", "Budi", "Citra", "Dedi, Jr."]
        assert rows[0].status == "yes"
        assert rows[0].interaksi == "success"
        assert rows[1].interaksi == "nonexistent"
        assert rows[1].skor == 0.2

    def test_collect_rows_with_filters(self, session):
        setup_stats_data(session)
        rows = collect_export_rows(session, search="d", band="low")
        assert [r.nama for r in rows] == ["Budi"]

    def test_render_csv(self):
        text = render_csv(
            [
                ExportRow("Dedi, Jr.", 51, "retired", "no", 0.85, "nonexistent"),
                ExportRow("Eka", 33, "services", "no", None, "failure"),
            ]
        )
        lines = list(csv.reader(io.StringIO(text)))

        assert lines[0] == CSV_HEADERS
        assert lines[1] == ["Dedi, Jr.", "51", "retired", "no", "0.85", "nonexistent"]
        assert lines[2] == ["Eka", "33", "services", "no", "", "failure"]

    def test_header_only_when_empty(self):
        assert render_csv([]) == ",".join(CSV_HEADERS) + "\n"

    def test_filename(self):
        assert export_filename(date(2025, 3, 7)) == "scorify_export_2025-03-07.csv"
