"""Tests for customers API endpoints."""

from datetime import datetime

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from scorify.db.schema import Base, Campaign, Customer, InteractionLog, LeadScore, User


def create_test_app_and_client():
    """Create app with test database and return (client, engine)."""
    from scorify.api.app import create_app, get_db_session

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    app = create_app()

    def override_get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db
    client = TestClient(app)

    return client, engine


def setup_customers(engine, count: int = 3) -> None:
    with Session(engine) as db_session:
        db_session.add(User(id="sales_1", name="Sari", email="sari@example.com", role="Sales"))
        for i in range(count):
            db_session.add(
                Customer(id=f"cust-{i:02d}", name=f"Nasabah {i:02d}", age=30 + i,
                         job="management")
            )
        db_session.add(
            Campaign(id="c0", customer_id="cust-00", user_id="sales_1",
                     created_at=datetime(2025, 1, 1))
        )
        db_session.add(LeadScore(id="s0", customer_id="cust-00", score=0.82))
        db_session.add(LeadScore(id="s1", customer_id="cust-01", score=0.61))
        db_session.commit()


class TestListCustomers:
    def test_requires_auth(self):
        client, _ = create_test_app_and_client()
        assert client.get("/api/customers").status_code == 401

    def test_default_page(self, auth_headers):
        client, engine = create_test_app_and_client()
        setup_customers(engine, count=12)

        response = client.get("/api/customers", headers=auth_headers("sales_1"))
        assert response.status_code == 200
        assert "no-store" in response.headers["cache-control"]

        data = response.json()
        assert len(data["data"]) == 10
        assert data["pagination"] == {
            "totalItems": 12,
            "totalPages": 2,
            "currentPage": 1,
            "itemsPerPage": 10,
        }
        first = data["data"][0]
        assert first["nama"] == "Nasabah 00"
        assert first["pekerjaan"] == "Management"
        assert first["status"] == "Tertunda"
        assert first["skor"] == 0.82

    def test_band_filter_and_search(self, auth_headers):
        client, engine = create_test_app_and_client()
        setup_customers(engine)
        headers = auth_headers("sales_1")

        medium = client.get("/api/customers", params={"filter": "Sedang"}, headers=headers)
        assert [row["id"] for row in medium.json()["data"]] == ["cust-01"]

        search = client.get("/api/customers", params={"search": "02"}, headers=headers)
        assert [row["id"] for row in search.json()["data"]] == ["cust-02"]

    def test_bad_paging_falls_back(self, auth_headers):
        client, engine = create_test_app_and_client()
        setup_customers(engine)

        response = client.get(
            "/api/customers",
            params={"page": "x", "limit": "-3"},
            headers=auth_headers("sales_1"),
        )
        pagination = response.json()["pagination"]
        assert pagination["currentPage"] == 1
        assert pagination["itemsPerPage"] == 10


class TestCustomerDetail:
    def test_not_found(self, auth_headers):
        client, _ = create_test_app_and_client()
        response = client.get("/api/customers/missing", headers=auth_headers("sales_1"))
        assert response.status_code == 404

    def test_detail(self, auth_headers):
        client, engine = create_test_app_and_client()
        setup_customers(engine)
        with Session(engine) as db_session:
            db_session.add(
                InteractionLog(id="l1", customer_id="cust-00", user_id="sales_1",
                               type="PANGGILAN_TELEPON", note="Called",
                               call_result="failure", created_at=datetime(2025, 1, 2))
            )
            db_session.commit()

        response = client.get("/api/customers/cust-00", headers=auth_headers("sales_1"))
        assert response.status_code == 200

        data = response.json()
        assert data["details"]["skorPeluang"] == 0.82
        assert data["details"]["statusKontak"] == "failure"
        assert data["details"]["statusPenawaran"] == "pending"
        assert data["history"][0]["result"] == "Sales: Sari. Hasil: Gagal"


class TestCallsAndNotes:
    def test_log_call_updates_status(self, auth_headers):
        client, engine = create_test_app_and_client()
        setup_customers(engine)

        response = client.post(
            "/api/customers/cust-00/calls",
            json={"note": "Agreed on the phone", "callResult": "success",
                  "statusPenawaran": "agreed"},
            headers=auth_headers("sales_1"),
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["type"] == "PANGGILAN_TELEPON"
        assert data["userId"] == "sales_1"
        assert data["callResult"] == "success"

        with Session(engine) as db_session:
            assert db_session.get(Campaign, "c0").final_decision == "agreed"

    def test_blank_note(self, auth_headers):
        client, engine = create_test_app_and_client()
        setup_customers(engine)

        response = client.post(
            "/api/customers/cust-00/notes", json={"note": "  "}, headers=auth_headers("sales_1")
        )
        assert response.status_code == 400

    def test_unknown_customer(self, auth_headers):
        client, engine = create_test_app_and_client()
        setup_customers(engine)

        response = client.post(
            "/api/customers/missing/calls", json={"note": "hi"}, headers=auth_headers("sales_1")
        )
        assert response.status_code == 404

    def test_invalid_status_rejected(self, auth_headers):
        client, engine = create_test_app_and_client()
        setup_customers(engine)

        response = client.post(
            "/api/customers/cust-00/calls",
            json={"note": "hi", "statusPenawaran": "maybe"},
            headers=auth_headers("sales_1"),
        )
        assert response.status_code == 422

    def test_add_note(self, auth_headers):
        client, engine = create_test_app_and_client()
        setup_customers(engine)

        response = client.post(
            "/api/customers/cust-01/notes",
            json={"note": "Prefers email"},
            headers=auth_headers("sales_1"),
        )
        assert response.status_code == 201
        assert response.json()["data"]["type"] == "CATATAN_INTERNAL"

        detail = client.get("/api/customers/cust-01", headers=auth_headers("sales_1")).json()
        assert detail["history"][0]["type"] == "Catatan Internal"
        assert detail["history"][0]["note"] == "Prefers email"


class TestStatusUpdate:
    def test_updates_latest_campaign(self, auth_headers):
        client, engine = create_test_app_and_client()
        setup_customers(engine)

        response = client.patch(
            "/api/customers/cust-00/status",
            json={"statusPenawaran": "declined"},
            headers=auth_headers("sales_1"),
        )
        assert response.status_code == 200
        assert response.json()["campaignId"] == "c0"
        assert response.json()["finalDecision"] == "declined"

    def test_no_campaign(self, auth_headers):
        client, engine = create_test_app_and_client()
        setup_customers(engine)

        response = client.patch(
            "/api/customers/cust-01/status",
            json={"statusPenawaran": "agreed"},
            headers=auth_headers("sales_1"),
        )
        assert response.status_code == 404
