"""
Feedback submission and organizer read endpoints
"""
from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app import crud
from app.core.config import settings
from app.models.event import EventStatus
from app.models.feedback import Feedback
from app.services import feedback_service
from conftest import auth_headers_for, make_event, make_user

API = "/api/v1"

SCENARIO_ITEMS = [
    {"category": "overall", "rating": 5, "comment": "great"},
    {"category": "venue", "rating": 3, "comment": "nice venue"},
]


def submit(client, event_id, items=None, headers=None, **common):
    body = {"items": items if items is not None else SCENARIO_ITEMS}
    body.update(common)
    return client.post(f"{API}/events/{event_id}/feedback", json=body, headers=headers or {})


def stored_rows(db, event_id):
    db.expire_all()
    return db.query(Feedback).filter(Feedback.event_id == event_id).order_by(Feedback.id).all()


class TestSubmitFeedback:

    def test_guest_submission(self, client, db_session, published_event):
        response = submit(client, published_event.id, name="Ann")

        assert response.status_code == 201
        data = response.json()
        assert data["display_name"] == "Ann"
        assert data["rating"] == 5
        assert data["sentiment"] == "positive"
        assert data["user_id"] is None
        assert [i["category"] for i in data["items"]] == ["overall", "venue"]

        rows = stored_rows(db_session, published_event.id)
        assert len(rows) == 2
        assert {r.submission_id for r in rows} == {data["submission_id"]}
        assert len({r.created_at for r in rows}) == 1
        assert [r.sentiment for r in rows] == ["positive", "positive"]

    def test_signed_in_submission_keeps_user(self, client, db_session, published_event):
        attendee = make_user(db_session)

        response = submit(client, published_event.id, headers=auth_headers_for(attendee), name="Bo")

        assert response.status_code == 201
        assert {r.user_id for r in stored_rows(db_session, published_event.id)} == {attendee.id}

    def test_anonymous_drops_user(self, client, db_session, published_event):
        attendee = make_user(db_session)

        response = submit(
            client, published_event.id, headers=auth_headers_for(attendee),
            name="Bo", is_anonymous=True,
        )

        assert response.status_code == 201
        assert response.json()["display_name"] == "Anonymous"
        rows = stored_rows(db_session, published_event.id)
        assert {r.user_id for r in rows} == {None}
        assert all(r.is_anonymous for r in rows)

    def test_completed_event_accepts_feedback(self, client, db_session, organizer):
        event = make_event(db_session, organizer, EventStatus.COMPLETED)
        assert submit(client, event.id).status_code == 201

    @pytest.mark.parametrize("event_status", [EventStatus.DRAFT, EventStatus.CANCELLED])
    def test_unavailable_event(self, client, db_session, organizer, event_status):
        event = make_event(db_session, organizer, event_status)

        response = submit(client, event.id)

        assert response.status_code == 404
        assert response.json()["detail"] == "Event not available"
        assert stored_rows(db_session, event.id) == []

    def test_missing_event(self, client, db_session):
        response = submit(client, 9999)

        assert response.status_code == 404
        assert response.json()["detail"] == "Event not available"

    def test_missing_overall_rating(self, client, db_session, published_event):
        response = submit(client, published_event.id, items=[{"category": "venue", "rating": 4, "comment": "ok hall"}])

        assert response.status_code == 400
        assert response.json()["detail"] == "Please provide an overall rating."
        assert stored_rows(db_session, published_event.id) == []

    def test_no_items(self, client, db_session, published_event):
        response = submit(client, published_event.id, items=[])
        assert response.status_code == 400

    def test_rating_out_of_range(self, client, db_session, published_event):
        response = submit(client, published_event.id, items=[{"category": "overall", "rating": 6}])

        assert response.status_code == 400
        assert stored_rows(db_session, published_event.id) == []

    def test_comment_too_long_rejects_whole_submission(self, client, db_session, published_event):
        items = [
            {"category": "overall", "rating": 4},
            {"category": "content", "rating": 4, "comment": "x" * (settings.FEEDBACK_COMMENT_MAX_LENGTH + 1)},
        ]

        response = submit(client, published_event.id, items=items)

        assert response.status_code == 400
        assert "at most" in response.json()["detail"]
        assert stored_rows(db_session, published_event.id) == []

    def test_unknown_category(self, client, published_event):
        response = submit(client, published_event.id, items=[{"category": "catering", "rating": 4}])
        assert response.status_code == 422

    def test_identity_required(self, client, db_session, published_event, monkeypatch):
        monkeypatch.setattr(settings, "FEEDBACK_REQUIRE_IDENTITY", True)

        named_guest = submit(client, published_event.id, name="Ann")
        anonymous = submit(client, published_event.id, is_anonymous=True)

        assert named_guest.status_code == 401
        assert anonymous.status_code == 201
        assert len(stored_rows(db_session, published_event.id)) == 2

    def test_storage_failure(self, client, db_session, published_event, monkeypatch):
        def broken_batch(db, *, records):
            raise SQLAlchemyError("disk full")

        monkeypatch.setattr(crud.feedback, "create_batch", broken_batch)

        response = submit(client, published_event.id)

        assert response.status_code == 500
        assert response.json()["error_code"] == "PersistenceError"
        assert stored_rows(db_session, published_event.id) == []

    def test_one_analytics_refresh_per_submission(self, client, published_event, monkeypatch):
        calls = []
        original = feedback_service.refresh_feedback_analytics

        def counting_refresh(db, event):
            calls.append(event.id)
            return original(db, event)

        monkeypatch.setattr(feedback_service, "refresh_feedback_analytics", counting_refresh)

        items = [
            {"category": "overall", "rating": 4},
            {"category": "content", "comment": "Good talks"},
            {"category": "speaker", "comment": "Clear speakers"},
        ]
        assert submit(client, published_event.id, items=items).status_code == 201
        assert calls == [published_event.id]

    def test_analytics_failure_reported_as_storage_error(self, client, published_event, monkeypatch):
        def broken_upsert(db, *, obj_in):
            raise SQLAlchemyError("database is locked")

        monkeypatch.setattr(crud.feedback_analytics, "upsert", broken_upsert)

        response = submit(client, published_event.id)

        assert response.status_code == 500
        assert response.json()["error_code"] == "PersistenceError"


class TestEventFeedbackList:

    def test_groups_by_submission(self, client, published_event, organizer_headers):
        submit(client, published_event.id, name="Ann")
        submit(client, published_event.id, items=[{"category": "overall", "rating": 2, "comment": "boring"}])

        response = client.get(f"{API}/events/{published_event.id}/feedback", headers=organizer_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total_submissions"] == 2
        assert sorted(len(s["items"]) for s in data["submissions"]) == [1, 2]
        assert {s["display_name"] for s in data["submissions"]} == {"Ann", "Guest"}

    def test_legacy_rows_grouped(self, client, db_session, published_event, organizer_headers):
        created = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
        for category, rating in [("overall", 4), ("venue", 3)]:
            db_session.add(Feedback(
                event_id=published_event.id, name="Legacy", category=category,
                rating=rating, sentiment="neutral", created_at=created,
            ))
        db_session.commit()

        response = client.get(f"{API}/events/{published_event.id}/feedback", headers=organizer_headers)

        data = response.json()
        assert data["total_submissions"] == 1
        assert data["submissions"][0]["submission_id"] is None
        assert data["submissions"][0]["rating"] == 4

    def test_other_organizer_forbidden(self, client, published_event, other_headers):
        response = client.get(f"{API}/events/{published_event.id}/feedback", headers=other_headers)
        assert response.status_code == 403

    def test_requires_login(self, client, published_event):
        response = client.get(f"{API}/events/{published_event.id}/feedback")
        assert response.status_code in (401, 403)

    def test_missing_event(self, client, organizer_headers):
        response = client.get(f"{API}/events/9999/feedback", headers=organizer_headers)
        assert response.status_code == 404


class TestFeedbackAnalytics:

    def test_counts_submissions_not_rows(self, client, published_event, organizer_headers):
        submit(client, published_event.id, items=[
            {"category": "overall", "rating": 5, "comment": "great"},
            {"category": "venue", "comment": "nice venue"},
            {"category": "content", "comment": "useful talks"},
        ])
        submit(client, published_event.id, items=[{"category": "overall", "rating": 2, "comment": "too long and boring"}])

        response = client.get(f"{API}/events/{published_event.id}/feedback/analytics", headers=organizer_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total_feedback"] == 2
        assert data["avg_rating"] == 3.5
        assert data["positive_count"] == 1
        assert data["negative_count"] == 1
        assert data["event_title"] == published_event.title

    def test_empty_event(self, client, published_event, organizer_headers):
        response = client.get(f"{API}/events/{published_event.id}/feedback/analytics", headers=organizer_headers)

        assert response.status_code == 200
        assert response.json()["total_feedback"] == 0
        assert response.json()["avg_rating"] == 0.0

    def test_other_organizer_forbidden(self, client, published_event, other_headers):
        response = client.get(f"{API}/events/{published_event.id}/feedback/analytics", headers=other_headers)
        assert response.status_code == 403


class TestDeleteSubmission:

    def test_removes_all_rows(self, client, db_session, published_event, organizer_headers):
        kept = submit(client, published_event.id, items=[{"category": "overall", "rating": 3}]).json()
        removed = submit(client, published_event.id).json()

        response = client.delete(
            f"{API}/events/{published_event.id}/feedback/{removed['submission_id']}",
            headers=organizer_headers,
        )

        assert response.status_code == 200
        assert response.json()["deleted_rows"] == 2
        assert {r.submission_id for r in stored_rows(db_session, published_event.id)} == {kept["submission_id"]}

        analytics = client.get(
            f"{API}/events/{published_event.id}/feedback/analytics", headers=organizer_headers
        ).json()
        assert analytics["total_feedback"] == 1
        assert analytics["avg_rating"] == 3.0

    def test_unknown_submission(self, client, published_event, organizer_headers):
        response = client.delete(
            f"{API}/events/{published_event.id}/feedback/not-a-submission", headers=organizer_headers
        )
        assert response.status_code == 404

    def test_other_organizer_forbidden(self, client, db_session, published_event, other_headers):
        removed = submit(client, published_event.id).json()

        response = client.delete(
            f"{API}/events/{published_event.id}/feedback/{removed['submission_id']}", headers=other_headers
        )

        assert response.status_code == 403
        assert len(stored_rows(db_session, published_event.id)) == 2


class TestAllFeedback:

    def test_only_owned_events(self, client, db_session, organizer, other_organizer, organizer_headers):
        first = make_event(db_session, organizer)
        second = make_event(db_session, organizer, EventStatus.COMPLETED)
        foreign = make_event(db_session, other_organizer)
        submit(client, first.id)
        submit(client, second.id, items=[{"category": "overall", "rating": 4}])
        submit(client, foreign.id)

        response = client.get(f"{API}/feedback/", headers=organizer_headers)

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 2
        assert {s["event_title"] for s in data} == {first.title, second.title}

    def test_no_events(self, client, organizer_headers):
        response = client.get(f"{API}/feedback/", headers=organizer_headers)
        assert response.json() == []
