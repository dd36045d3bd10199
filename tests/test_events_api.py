"""
Test event API endpoints.
"""
from datetime import datetime, timedelta

from bson import ObjectId
from fastapi.testclient import TestClient

from conftest import ORGANIZER_EMAIL
from help_hive_api.app.core.db import Database
from help_hive_api.app.services.event_service import utcnow


class TestHealth:
    def test_health(self, client: TestClient):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_root_banner(self, client: TestClient):
        response = client.get("/")
        assert response.status_code == 200
        assert "running" in response.json()["message"]


class TestCreateEvent:
    """Test POST /api/events."""

    def test_create_event(self, auth_client: TestClient, database: Database):
        response = auth_client.post(
            "/api/events",
            json={
                "title": "River Cleanup Project",
                "eventType": "Cleanup",
                "location": "River Park",
                "eventDate": "2099-11-05T10:00:00Z",
                "email": "watercare@example.com",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Event created"
        stored = database.events.find_one({"_id": ObjectId(data["eventId"])})
        assert stored["title"] == "River Cleanup Project"
        assert stored["eventType"] == "Cleanup"
        assert stored["email"] == "watercare@example.com"
        assert stored["eventDate"].year == 2099
        assert "createdAt" in stored

    def test_create_event_accepts_bare_date(self, auth_client: TestClient, database: Database):
        response = auth_client.post("/api/events", json={"title": "Food Drive", "eventDate": "2099-08-30"})

        assert response.status_code == 201
        stored = database.events.find_one({"_id": ObjectId(response.json()["eventId"])})
        assert (stored["eventDate"].month, stored["eventDate"].day) == (8, 30)

    def test_creator_defaults_to_authenticated_user(self, auth_client: TestClient, database: Database):
        response = auth_client.post("/api/events", json={"title": "Tree Plantation", "eventDate": "2099-09-15"})

        stored = database.events.find_one({"_id": ObjectId(response.json()["eventId"])})
        assert stored["email"] == ORGANIZER_EMAIL

    def test_missing_title_is_rejected(self, auth_client: TestClient, database: Database):
        response = auth_client.post("/api/events", json={"eventDate": "2099-01-01"})

        assert response.status_code == 400
        assert response.json() == {"message": "Title and event date are required"}
        assert database.events.count_documents({}) == 0

    def test_missing_event_date_is_rejected(self, auth_client: TestClient, database: Database):
        response = auth_client.post("/api/events", json={"title": "No date"})

        assert response.status_code == 400
        assert database.events.count_documents({}) == 0

    def test_empty_title_is_rejected(self, auth_client: TestClient, database: Database):
        response = auth_client.post("/api/events", json={"title": "  ", "eventDate": "2099-01-01"})

        assert response.status_code == 400
        assert database.events.count_documents({}) == 0

    def test_malformed_date_is_rejected(self, auth_client: TestClient, database: Database):
        response = auth_client.post("/api/events", json={"title": "Bad date", "eventDate": "soon"})

        assert response.status_code == 400
        assert "message" in response.json()
        assert database.events.count_documents({}) == 0

    def test_requires_authentication(self, client: TestClient, database: Database):
        response = client.post("/api/events", json={"title": "Anon", "eventDate": "2099-01-01"})

        assert response.status_code == 401
        assert response.json() == {"message": "unauthorized access"}
        assert database.events.count_documents({}) == 0


class TestListEvents:
    """Test GET /api/events filtering and ordering."""

    def test_past_events_are_excluded(self, client: TestClient, make_event):
        make_event(title="Yesterday", eventDate=utcnow() - timedelta(days=1))
        upcoming = make_event(title="Next week", eventDate=utcnow() + timedelta(days=7))

        response = client.get("/api/events")

        assert response.status_code == 200
        assert [e["_id"] for e in response.json()] == [upcoming]

    def test_sorted_by_event_date(self, client: TestClient, make_event):
        later = make_event(title="Later", eventDate=utcnow() + timedelta(days=30))
        sooner = make_event(title="Sooner", eventDate=utcnow() + timedelta(days=2))

        response = client.get("/api/events")

        assert [e["_id"] for e in response.json()] == [sooner, later]

    def test_filter_by_event_type(self, client: TestClient, make_event):
        make_event(title="Beach Cleanup Drive", eventType="Cleanup")
        make_event(title="Urban Tree Plantation", eventType="Plantation")

        response = client.get("/api/events", params={"eventType": "Cleanup"})

        events = response.json()
        assert len(events) == 1
        assert events[0]["eventType"] == "Cleanup"

    def test_event_type_all_disables_filter(self, client: TestClient, make_event):
        make_event(eventType="Cleanup")
        make_event(eventType="Plantation")
        make_event(eventType="Donation", eventDate=utcnow() - timedelta(days=3))

        response = client.get("/api/events", params={"eventType": "All"})

        assert len(response.json()) == 2

    def test_search_is_case_insensitive_substring(self, client: TestClient, make_event):
        make_event(title="Beach Cleanup Drive")
        make_event(title="River Cleanup Project")

        response = client.get("/api/events", params={"search": "beach"})

        titles = [e["title"] for e in response.json()]
        assert titles == ["Beach Cleanup Drive"]

    def test_search_treats_regex_characters_literally(self, client: TestClient, make_event):
        make_event(title="Beach Cleanup Drive")

        response = client.get("/api/events", params={"search": ".*"})

        assert response.json() == []

    def test_response_shape(self, client: TestClient, make_event):
        event_id = make_event()

        event = client.get("/api/events").json()[0]

        assert event["_id"] == event_id
        for key in ("title", "description", "eventType", "thumbnail", "location", "eventDate", "email", "createdAt"):
            assert key in event


class TestGetEvent:
    def test_get_event(self, client: TestClient, make_event):
        event_id = make_event(title="Plastic-Free Campaign")

        response = client.get(f"/api/events/{event_id}")

        assert response.status_code == 200
        assert response.json()["title"] == "Plastic-Free Campaign"

    def test_dates_carry_utc_offset(self, client: TestClient, make_event):
        event_id = make_event(eventDate=datetime(2099, 8, 30, 9, 0))

        body = client.get(f"/api/events/{event_id}").json()

        assert body["eventDate"] in ("2099-08-30T09:00:00Z", "2099-08-30T09:00:00+00:00")
        assert body["createdAt"].endswith(("Z", "+00:00"))

    def test_unknown_id(self, client: TestClient):
        response = client.get(f"/api/events/{ObjectId()}")

        assert response.status_code == 404
        assert response.json() == {"message": "Event not found"}

    def test_malformed_id_is_not_found(self, client: TestClient):
        response = client.get("/api/events/not-an-object-id")

        assert response.status_code == 404


class TestUpdateEvent:
    """Test PATCH /api/events/{id}."""

    def test_partial_update_merges_fields(self, auth_client: TestClient, database: Database, make_event):
        event_id = make_event(title="Old title", location="Central Park")

        response = auth_client.patch(f"/api/events/{event_id}", json={"title": "New title"})

        assert response.status_code == 200
        assert response.json() == {"message": "Event updated"}
        stored = database.events.find_one({"_id": ObjectId(event_id)})
        assert stored["title"] == "New title"
        assert stored["location"] == "Central Park"
        assert "updatedAt" in stored

    def test_unknown_id(self, auth_client: TestClient, database: Database, make_event):
        make_event()

        response = auth_client.patch(f"/api/events/{ObjectId()}", json={"title": "Ghost"})

        assert response.status_code == 404
        assert database.events.count_documents({"title": "Ghost"}) == 0

    def test_empty_title_is_rejected(self, auth_client: TestClient, database: Database, make_event):
        event_id = make_event(title="Keep me")

        response = auth_client.patch(f"/api/events/{event_id}", json={"title": ""})

        assert response.status_code == 400
        assert database.events.find_one({"_id": ObjectId(event_id)})["title"] == "Keep me"

    def test_requires_authentication(self, client: TestClient, database: Database, make_event):
        event_id = make_event(title="Untouched")

        response = client.patch(f"/api/events/{event_id}", json={"title": "Changed"})

        assert response.status_code == 401
        assert database.events.find_one({"_id": ObjectId(event_id)})["title"] == "Untouched"


class TestDeleteEvent:
    """Test DELETE /api/events/{id}."""

    def test_delete_event(self, auth_client: TestClient, database: Database, make_event):
        event_id = make_event()

        response = auth_client.delete(f"/api/events/{event_id}")

        assert response.status_code == 200
        assert response.json() == {"message": "Event deleted"}
        assert database.events.count_documents({}) == 0

    def test_unknown_id(self, auth_client: TestClient, database: Database, make_event):
        make_event()

        response = auth_client.delete(f"/api/events/{ObjectId()}")

        assert response.status_code == 404
        assert database.events.count_documents({}) == 1

    def test_delete_removes_join_records(self, auth_client: TestClient, database: Database, make_event):
        event_id = make_event()
        other_id = make_event(title="Other")
        auth_client.post(f"/api/events/{event_id}/join", json={"email": "p1@example.com"})
        auth_client.post(f"/api/events/{other_id}/join", json={"email": "p1@example.com"})

        auth_client.delete(f"/api/events/{event_id}")

        joined = auth_client.get("/api/events/user/p1@example.com/joined").json()
        assert [j["eventId"] for j in joined] == [other_id]

    def test_delete_removes_joins_made_with_any_id_spelling(
        self, auth_client: TestClient, database: Database, make_event
    ):
        event_id = make_event()
        auth_client.post(f"/api/events/{event_id.upper()}/join", json={"email": "p1@example.com"})

        response = auth_client.delete(f"/api/events/{event_id.upper()}")

        assert response.status_code == 200
        assert database.joined_events.count_documents({}) == 0

    def test_requires_authentication(self, client: TestClient, database: Database, make_event):
        event_id = make_event()

        response = client.delete(f"/api/events/{event_id}")

        assert response.status_code == 401
        assert database.events.count_documents({}) == 1


class TestUserEvents:
    def test_lists_creator_events_newest_first(self, client: TestClient, make_event):
        older = make_event(email="green@example.com", createdAt=utcnow() - timedelta(days=2))
        newer = make_event(email="green@example.com", createdAt=utcnow())
        make_event(email="someone@example.com")

        response = client.get("/api/events/user/green@example.com")

        assert response.status_code == 200
        assert [e["_id"] for e in response.json()] == [newer, older]

    def test_includes_past_events(self, client: TestClient, make_event):
        make_event(email="green@example.com", eventDate=utcnow() - timedelta(days=20))

        response = client.get("/api/events/user/green@example.com")

        assert len(response.json()) == 1

    def test_unknown_user_gets_empty_list(self, client: TestClient):
        response = client.get("/api/events/user/nobody@example.com")

        assert response.status_code == 200
        assert response.json() == []
