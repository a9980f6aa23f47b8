"""Endpoint tests for the travel routes. Supabase is replaced by the recorded fake client."""

from datetime import date, timedelta
from unittest.mock import patch
from uuid import uuid4

from fastapi.testclient import TestClient

from app.main import app

PACKAGE_ID = str(uuid4())


def booking_body(**overrides):
    body = {
        "package_id": PACKAGE_ID,
        "package_type": "package",
        "booking_date": (date.today() + timedelta(days=5)).isoformat(),
        "number_of_people": 2,
        "contact_phone": "9876543210",
        "contact_email": "traveller@example.com",
    }
    body.update(overrides)
    return body


class TestAuth:
    def test_bookings_require_bearer_token(self):
        resp = TestClient(app).get("/api/bookings")
        assert resp.status_code == 401

    def test_invalid_token_is_401(self):
        with patch("app.api.travel_routes.supabase_client.get_user", return_value=None) as mock_get_user:
            resp = TestClient(app).post("/api/favorites/toggle", json={"package_id": PACKAGE_ID},
                                        headers={"Authorization": "Bearer expired"})
        assert resp.status_code == 401
        mock_get_user.assert_called_once_with("expired")


class TestBookingsApi:
    def test_create_booking(self, authed_client, db):
        db.queue("packages", [{"id": PACKAGE_ID, "price": 3000}])
        db.queue("bookings", [{"id": "b-1", "status": "pending", "total_amount": 6000}])

        resp = authed_client.post("/api/bookings", json=booking_body())

        assert resp.status_code == 201
        assert resp.json()["status"] == "pending"
        row = db.calls("bookings")[0].args_of("insert")[0][0]
        assert row["total_amount"] == 6000
        assert row["user_id"] == "user-1"

    def test_past_date_rejected(self, authed_client, db):
        past = (date.today() - timedelta(days=1)).isoformat()
        resp = authed_client.post("/api/bookings", json=booking_body(booking_date=past))
        assert resp.status_code == 422
        assert not db.executed

    def test_party_size_capped_at_twenty(self, authed_client, db):
        resp = authed_client.post("/api/bookings", json=booking_body(number_of_people=21))
        assert resp.status_code == 422
        assert not db.executed

        db.queue("packages", [{"id": PACKAGE_ID, "price": 1000}])
        assert authed_client.post("/api/bookings", json=booking_body(number_of_people=20)).status_code == 201

    def test_missing_contact_rejected(self, authed_client):
        body = booking_body()
        del body["contact_email"]
        assert authed_client.post("/api/bookings", json=body).status_code == 422

    def test_unknown_package_is_404(self, authed_client):
        resp = authed_client.post("/api/bookings", json=booking_body())
        assert resp.status_code == 404

    def test_cancel_confirmed_is_409(self, authed_client, db):
        booking_id = str(uuid4())
        db.queue("bookings", [{"id": booking_id, "status": "confirmed"}])
        resp = authed_client.post(f"/api/bookings/{booking_id}/cancel")
        assert resp.status_code == 409
        assert "pending" in resp.json()["detail"]

    def test_list_with_status_filter(self, authed_client, db):
        db.queue("bookings", [{"id": "b-1", "status": "pending"}])
        resp = authed_client.get("/api/bookings", params={"status": "pending"})
        assert resp.status_code == 200
        assert resp.json() == [{"id": "b-1", "status": "pending"}]

    def test_unknown_status_filter_rejected(self, authed_client):
        assert authed_client.get("/api/bookings", params={"status": "lost"}).status_code == 422

    def test_store_failure_is_502(self, authed_client, db):
        db.error = RuntimeError("boom")
        resp = authed_client.get("/api/bookings")
        assert resp.status_code == 502
        assert resp.json()["detail"] == "Failed to load bookings"


class TestReviewsApi:
    def test_list_reviews(self, authed_client, db):
        db.queue("reviews", [{"id": "r-1", "rating": 5}, {"id": "r-2", "rating": 4}])
        resp = authed_client.get(f"/api/packages/package/{PACKAGE_ID}/reviews")
        assert resp.status_code == 200
        assert resp.json()["average_rating"] == 4.5
        assert resp.json()["count"] == 2

    def test_rating_out_of_range(self, authed_client):
        resp = authed_client.post("/api/reviews", json={
            "package_id": PACKAGE_ID, "rating": 6, "title": "Wow", "comment": "Too good",
        })
        assert resp.status_code == 422

    def test_create_review(self, authed_client, db):
        resp = authed_client.post("/api/reviews", json={
            "package_id": PACKAGE_ID, "rating": 5, "title": "Wow", "comment": "Scuba was amazing",
        })
        assert resp.status_code == 201
        assert resp.json()["rating"] == 5


class TestFavoritesApi:
    def test_toggle(self, authed_client, db):
        resp = authed_client.post("/api/favorites/toggle", json={"package_id": PACKAGE_ID, "package_type": "tour_package"})
        assert resp.status_code == 200
        assert resp.json() == {"is_favorite": True}
        row = db.calls("favorites")[1].args_of("insert")[0][0]
        assert row == {"user_id": "user-1", "tour_package_id": PACKAGE_ID}

    def test_status(self, authed_client, db):
        db.queue("favorites", [{"id": "f-1"}])
        resp = authed_client.get(f"/api/favorites/package/{PACKAGE_ID}")
        assert resp.json() == {"is_favorite": True}


class TestCatalogAndLogs:
    def test_destinations(self, authed_client, db):
        db.queue("destinations", [{"name": "Tarkarli Beach", "category": "beach"}])
        resp = authed_client.get("/api/destinations", params={"category": "beach"})
        assert resp.status_code == 200
        assert resp.json()[0]["name"] == "Tarkarli Beach"

    def test_packages_by_type(self, authed_client, db):
        authed_client.get("/api/packages", params={"type": "tour_package"})
        assert db.calls("tour_packages")

    def test_chat_log_saved(self, authed_client, db):
        resp = authed_client.post("/api/chat-logs", json={"question": "Best beach?", "response": "Tarkarli!"})
        assert resp.status_code == 204
        row = db.calls("chat_logs")[0].args_of("insert")[0][0]
        assert row == {"user_id": "user-1", "question": "Best beach?", "response": "Tarkarli!"}


class TestCorsForTravelRoutes:
    def test_preflight_still_handled_by_middleware(self):
        resp = TestClient(app).options("/api/bookings", headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "GET",
        })
        assert resp.status_code == 200
        assert "GET" in resp.headers["access-control-allow-methods"]
