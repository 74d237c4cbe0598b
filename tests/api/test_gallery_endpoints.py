"""API tests for the guest-facing gallery routes."""
import pytest

from gallery.core.config import settings
from gallery.core.security import decode_guest_token
from gallery.schemas.feedback import FeedbackSettingsUpdate

API = "/api/v1/gallery/summer-wedding"


@pytest.fixture
def feedback_on(db, service, event):
    return service.update_event_feedback_settings(
        db, event.id, FeedbackSettingsUpdate(feedback_enabled=True, allow_comments=True)
    )


@pytest.fixture
def guest(event, guest_headers):
    return guest_headers(event.id, "guest-a")


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert "X-Process-Time" in response.headers


class TestGuestToken:

    def test_issue_new_token(self, client, event):
        response = client.post(f"{API}/guest-token")

        assert response.status_code == 200
        data = response.json()
        assert data["event_id"] == event.id
        assert decode_guest_token(data["guest_token"], event.id) == data["guest_id"]

    def test_refresh_keeps_guest_id(self, client, event, guest):
        response = client.post(f"{API}/guest-token", headers=guest)

        assert response.json()["guest_id"] == "guest-a"

    def test_unknown_gallery(self, client):
        assert client.post("/api/v1/gallery/nope/guest-token").status_code == 404

    def test_token_from_other_gallery_rejected(self, client, event, other_event, guest_headers):
        response = client.post(f"{API}/guest-token", headers=guest_headers(other_event.id, "guest-a"))

        assert response.status_code == 401
        assert response.json()["error_code"] == "GUEST_TOKEN_001"

    def test_garbage_token_rejected(self, client, event):
        response = client.post(f"{API}/guest-token", headers={"X-Guest-Token": "not-a-jwt"})

        assert response.status_code == 401


class TestFeedbackSettingsRoute:

    def test_defaults(self, client, event):
        response = client.get(f"{API}/feedback-settings")

        assert response.status_code == 200
        assert response.json()["feedback_enabled"] is False
        assert response.json()["event_id"] == event.id


class TestListPhotos:

    def test_all_photos(self, client, photos):
        response = client.get(f"{API}/photos")

        assert response.status_code == 200
        assert [p["filename"] for p in response.json()] == ["p1.jpg", "p2.jpg", "p3.jpg"]

    def test_category(self, client, photos):
        response = client.get(f"{API}/photos", params={"category_id": 2})

        assert [p["filename"] for p in response.json()] == ["p3.jpg"]

    def test_feedback_filter_needs_token(self, client, photos):
        response = client.get(f"{API}/photos", params={"liked": True})

        assert response.status_code == 401

    def test_feedback_filters(self, client, event, photos, feedback_on, guest):
        p1, p2, p3 = photos
        client.post(f"{API}/photos/{p1.id}/feedback", json={"feedback_type": "like"}, headers=guest)
        client.post(f"{API}/photos/{p2.id}/feedback", json={"feedback_type": "like"}, headers=guest)
        client.post(f"{API}/photos/{p2.id}/feedback", json={"feedback_type": "favorite"}, headers=guest)

        liked = client.get(f"{API}/photos", params={"liked": True}, headers=guest).json()
        both = client.get(
            f"{API}/photos", params={"liked": True, "favorited": True, "operator": "AND"}, headers=guest
        ).json()
        liked_in_category = client.get(
            f"{API}/photos", params={"liked": True, "category_id": 2}, headers=guest
        ).json()

        assert [p["id"] for p in liked] == [p1.id, p2.id]
        assert [p["id"] for p in both] == [p2.id]
        assert liked_in_category == []

    def test_bad_operator(self, client, photos, guest):
        response = client.get(
            f"{API}/photos", params={"liked": True, "favorited": True, "operator": "XOR"}, headers=guest
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_001"

    def test_operator_is_case_insensitive(self, client, photos, feedback_on, guest):
        p1 = photos[0]
        client.post(f"{API}/photos/{p1.id}/feedback", json={"feedback_type": "like"}, headers=guest)
        client.post(f"{API}/photos/{p1.id}/feedback", json={"feedback_type": "favorite"}, headers=guest)

        response = client.get(
            f"{API}/photos", params={"liked": True, "favorited": True, "operator": "and"}, headers=guest
        )

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [p1.id]

    def test_operator_ignored_without_feedback_filter(self, client, photos):
        response = client.get(f"{API}/photos", params={"operator": "XOR"})

        assert response.status_code == 200
        assert len(response.json()) == 3

    def test_operator_rules_are_documented(self, client):
        schema = client.get("/api/v1/openapi.json").json()
        parameters = schema["paths"]["/api/v1/gallery/{slug}/photos"]["get"]["parameters"]
        operator = next(p for p in parameters if p["name"] == "operator")

        assert "case-insensitive" in operator["description"]
        assert "rejected with 400" in operator["description"]


class TestSubmitFeedback:

    def test_like_toggle(self, client, photos, feedback_on, guest):
        url = f"{API}/photos/{photos[0].id}/feedback"

        first = client.post(url, json={"feedback_type": "like"}, headers=guest)
        second = client.post(url, json={"feedback_type": "like"}, headers=guest)

        assert first.status_code == 200
        assert first.json()["action"] == "added"
        assert second.json() == {"action": "removed", "feedback_type": "like", "feedback": None}

    def test_rating_counters_visible_in_listing(self, client, photos, feedback_on, guest):
        client.post(f"{API}/photos/{photos[0].id}/feedback", json={"feedback_type": "rating", "rating": 4}, headers=guest)

        listing = client.get(f"{API}/photos").json()
        assert listing[0]["average_rating"] == 4.0
        assert listing[0]["feedback_count"] == 1

    def test_feedback_disabled(self, client, photos, guest):
        response = client.post(f"{API}/photos/{photos[0].id}/feedback", json={"feedback_type": "like"}, headers=guest)

        assert response.status_code == 403
        assert response.json()["error_code"] == "FEEDBACK_DISABLED_001"

    def test_type_disabled(self, client, db, service, event, photos, guest):
        service.update_event_feedback_settings(db, event.id, FeedbackSettingsUpdate(feedback_enabled=True))

        response = client.post(
            f"{API}/photos/{photos[0].id}/feedback", json={"feedback_type": "comment", "comment": "hi"}, headers=guest
        )

        assert response.status_code == 403

    def test_name_and_email_required(self, client, db, service, event, photos, guest):
        service.update_event_feedback_settings(
            db, event.id, FeedbackSettingsUpdate(feedback_enabled=True, require_name_email=True)
        )
        url = f"{API}/photos/{photos[0].id}/feedback"

        missing = client.post(url, json={"feedback_type": "like"}, headers=guest)
        supplied = client.post(
            url, json={"feedback_type": "like", "guest_name": "Ada", "guest_email": "ada@example.com"}, headers=guest
        )

        assert missing.status_code == 403
        assert supplied.status_code == 200

    @pytest.mark.parametrize(
        "payload",
        [
            {"feedback_type": "love"},
            {"feedback_type": "rating", "rating": 9},
            {"feedback_type": "comment", "comment": "   "},
        ],
    )
    def test_invalid_feedback(self, client, photos, feedback_on, guest, payload):
        response = client.post(f"{API}/photos/{photos[0].id}/feedback", json=payload, headers=guest)

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_001"

    def test_non_numeric_rating(self, client, photos, feedback_on, guest):
        response = client.post(
            f"{API}/photos/{photos[0].id}/feedback", json={"feedback_type": "rating", "rating": "abc"}, headers=guest
        )

        assert response.status_code == 422

    def test_requires_guest_token(self, client, photos, feedback_on):
        response = client.post(f"{API}/photos/{photos[0].id}/feedback", json={"feedback_type": "like"})

        assert response.status_code == 401

    def test_ip_fallback(self, client, db, photos, feedback_on, monkeypatch):
        monkeypatch.setattr(settings, "ALLOW_IP_GUEST_FALLBACK", True)

        response = client.post(f"{API}/photos/{photos[0].id}/feedback", json={"feedback_type": "like"})

        assert response.status_code == 200
        assert response.json()["action"] == "added"

    def test_unknown_photo(self, client, feedback_on, guest):
        response = client.post(f"{API}/photos/9999/feedback", json={"feedback_type": "like"}, headers=guest)

        assert response.status_code == 404

    def test_photo_from_other_event(self, client, other_event, make_photo, feedback_on, guest):
        photo = make_photo(other_event.id, "o1.jpg")

        response = client.post(f"{API}/photos/{photo.id}/feedback", json={"feedback_type": "like"}, headers=guest)

        assert response.status_code == 404


class TestReadFeedback:

    def test_public_feedback_hides_pending_comments(self, client, event, photos, feedback_on, guest, guest_headers):
        url = f"{API}/photos/{photos[0].id}/feedback"
        client.post(url, json={"feedback_type": "comment", "comment": "pending"}, headers=guest)
        client.post(url, json={"feedback_type": "rating", "rating": 5}, headers=guest_headers(event.id, "guest-b"))

        response = client.get(url)

        assert response.status_code == 200
        assert [f["feedback_type"] for f in response.json()] == ["rating"]
        assert "guest_identifier" not in response.json()[0]

    def test_public_feedback_can_be_switched_off(self, client, db, service, event, photos):
        service.update_event_feedback_settings(db, event.id, FeedbackSettingsUpdate(show_feedback_to_guests=False))

        assert client.get(f"{API}/photos/{photos[0].id}/feedback").status_code == 403

    def test_my_feedback_includes_pending(self, client, event, photos, feedback_on, guest, guest_headers):
        url = f"{API}/photos/{photos[0].id}/feedback"
        client.post(url, json={"feedback_type": "comment", "comment": "mine"}, headers=guest)
        client.post(url, json={"feedback_type": "like"}, headers=guest_headers(event.id, "guest-b"))

        response = client.get(f"{API}/photos/{photos[0].id}/my-feedback", headers=guest)

        assert response.status_code == 200
        assert [(f["feedback_type"], f["is_approved"]) for f in response.json()] == [("comment", False)]


class TestDownload:

    def test_download_original(self, client, photos, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "PHOTO_STORAGE_DIR", str(tmp_path))
        (tmp_path / "p1.jpg").write_bytes(b"original")

        response = client.get(f"{API}/photos/{photos[0].id}/download")

        assert response.status_code == 200
        assert response.content == b"original"
        assert "p1.jpg" in response.headers["content-disposition"]

    def test_missing_file(self, client, photos, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "PHOTO_STORAGE_DIR", str(tmp_path))

        assert client.get(f"{API}/photos/{photos[0].id}/download").status_code == 404

    def test_path_outside_storage(self, client, event, make_photo, tmp_path, monkeypatch):
        storage = tmp_path / "photos"
        storage.mkdir()
        (tmp_path / "secret.txt").write_text("nope")
        monkeypatch.setattr(settings, "PHOTO_STORAGE_DIR", str(storage))
        photo = make_photo(event.id, "../secret.txt")

        assert client.get(f"{API}/photos/{photo.id}/download").status_code == 404
