"""Unit tests for the liked / favorited photo filter."""
import pytest

from gallery.core.exceptions import ValidationError
from gallery.schemas.feedback import PhotoFeedbackQuery, PhotoFilter


@pytest.fixture
def guest_feedback(db, event, photos, submit):
    """guest-a likes p1 and p2 and favorites p2 and p3."""
    p1, p2, p3 = photos
    submit(event.id, p1.id, "guest-a", "like")
    submit(event.id, p2.id, "guest-a", "like")
    submit(event.id, p2.id, "guest-a", "favorite")
    submit(event.id, p3.id, "guest-a", "favorite")
    submit(event.id, p1.id, "guest-b", "favorite")
    return photos


class TestGetFilteredPhotos:

    def test_no_filters_returns_every_photo(self, db, service, event, guest_feedback):
        ids = service.get_filtered_photos(db, event.id, "guest-a")

        assert ids == [p.id for p in guest_feedback]

    def test_liked_only(self, db, service, event, guest_feedback):
        p1, p2, _ = guest_feedback

        assert service.get_filtered_photos(db, event.id, "guest-a", PhotoFilter(liked=True)) == [p1.id, p2.id]

    def test_favorited_only(self, db, service, event, guest_feedback):
        _, p2, p3 = guest_feedback

        ids = service.get_filtered_photos(db, event.id, "guest-a", PhotoFilter(favorited=True))
        assert ids == [p2.id, p3.id]

    def test_or_is_union(self, db, service, event, guest_feedback):
        filters = PhotoFilter(liked=True, favorited=True, operator="OR")

        ids = service.get_filtered_photos(db, event.id, "guest-a", filters)
        assert ids == [p.id for p in guest_feedback]

    def test_and_is_intersection(self, db, service, event, guest_feedback):
        _, p2, _ = guest_feedback
        filters = PhotoFilter(liked=True, favorited=True, operator="AND")

        assert service.get_filtered_photos(db, event.id, "guest-a", filters) == [p2.id]

    def test_operator_is_case_insensitive(self, db, service, event, guest_feedback):
        _, p2, _ = guest_feedback
        filters = PhotoFilter(liked=True, favorited=True, operator="and")

        assert service.get_filtered_photos(db, event.id, "guest-a", filters) == [p2.id]

    def test_and_with_single_filter(self, db, service, event, guest_feedback):
        p1, p2, _ = guest_feedback
        filters = PhotoFilter(liked=True, operator="AND")

        assert service.get_filtered_photos(db, event.id, "guest-a", filters) == [p1.id, p2.id]

    def test_scoped_to_guest(self, db, service, event, guest_feedback):
        p1, _, _ = guest_feedback

        assert service.get_filtered_photos(db, event.id, "guest-b", PhotoFilter(liked=True)) == []
        assert service.get_filtered_photos(db, event.id, "guest-b", PhotoFilter(favorited=True)) == [p1.id]

    def test_hidden_rows_excluded(self, db, service, event, guest_feedback):
        p1, p2, _ = guest_feedback
        like = service.get_photo_feedback(
            db, p1.id, PhotoFeedbackQuery(feedback_type="like", guest_identifier="guest-a")
        )[0]
        service.moderate_feedback(db, like.id, "hide", "admin-1")

        assert service.get_filtered_photos(db, event.id, "guest-a", PhotoFilter(liked=True)) == [p2.id]

    def test_unknown_operator(self, db, service, event, guest_feedback):
        with pytest.raises(ValidationError):
            service.get_filtered_photos(
                db, event.id, "guest-a", PhotoFilter(liked=True, favorited=True, operator="XOR")
            )

    def test_other_event_photos_not_returned(self, db, service, event, other_event, make_photo, submit):
        photo = make_photo(other_event.id, "o1.jpg")
        submit(other_event.id, photo.id, "guest-a", "like")

        assert service.get_filtered_photos(db, event.id, "guest-a", PhotoFilter(liked=True)) == []
