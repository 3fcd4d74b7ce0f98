from datetime import datetime, timedelta, timezone
import pytest

from lvlup import crud
from lvlup.crud.focus import get_session_counts
from lvlup.utils import email_sender


# Categories

def test_categories_are_trimmed_unique_and_sorted(client, auth_headers):
    assert client.post("/categories/", json={"name": "  Sport "}, headers=auth_headers).status_code == 201
    assert client.post("/categories/", json={"name": "art"}, headers=auth_headers).status_code == 201

    duplicate = client.post("/categories/", json={"name": "sport"}, headers=auth_headers)
    assert duplicate.status_code == 400

    blank = client.post("/categories/", json={"name": "   "}, headers=auth_headers)
    assert blank.status_code == 400

    names = [c["name"] for c in client.get("/categories/", headers=auth_headers).json()]
    assert names == ["art", "Sport"]


def test_delete_category(client, auth_headers, other_user):
    category = client.post("/categories/", json={"name": "Health"}, headers=auth_headers).json()
    assert client.delete(f"/categories/{category['id']}", headers={"X-User-ID": other_user.id}).status_code == 404
    assert client.delete(f"/categories/{category['id']}", headers=auth_headers).status_code == 204
    assert client.get("/categories/", headers=auth_headers).json() == []


# Goals

def test_goal_lifecycle(client, auth_headers):
    goal = client.post("/goals/", json={"title": "Run a marathon"}, headers=auth_headers).json()
    assert goal["progress"] == 0
    assert goal["is_completed"] is False

    updated = client.patch(f"/goals/{goal['id']}/progress", json={"progress": 60}, headers=auth_headers).json()
    assert updated["progress"] == 60

    too_much = client.patch(f"/goals/{goal['id']}/progress", json={"progress": 150}, headers=auth_headers)
    assert too_much.status_code == 422

    done = client.patch(f"/goals/{goal['id']}/progress", json={"progress": 100}, headers=auth_headers).json()
    assert done["is_completed"] is True

    achievements = {a["code"]: a for a in client.get("/achievements/", headers=auth_headers).json()}
    assert achievements["first_goal_completed"]["earned"] is True

    renamed = client.put(f"/goals/{goal['id']}", json={"title": "Run two marathons"}, headers=auth_headers).json()
    assert renamed["title"] == "Run two marathons"
    assert renamed["progress"] == 100

    assert client.delete(f"/goals/{goal['id']}", headers=auth_headers).status_code == 204
    assert client.get("/goals/", headers=auth_headers).json() == []


def test_goals_are_private(client, auth_headers, other_user):
    goal = client.post("/goals/", json={"title": "Learn Go"}, headers=auth_headers).json()
    other = {"X-User-ID": other_user.id}
    assert client.get("/goals/", headers=other).json() == []
    assert client.patch(f"/goals/{goal['id']}/progress", json={"progress": 10}, headers=other).status_code == 404


def test_goal_edit_rejects_null_for_required_fields(client, auth_headers):
    goal = client.post("/goals/", json={"title": "Learn Spanish"}, headers=auth_headers).json()

    for payload in ({"title": None}, {"progress": None}):
        response = client.put(f"/goals/{goal['id']}", json=payload, headers=auth_headers)
        assert response.status_code == 422, payload

    cleared = client.put(f"/goals/{goal['id']}", json={"description": None}, headers=auth_headers)
    assert cleared.status_code == 200
    assert cleared.json()["title"] == "Learn Spanish"
    assert cleared.json()["progress"] == 0


# Journal

def test_journal_entries(client, auth_headers):
    first = client.post("/journal/", json={"title": "Day 1", "content": "Started."}, headers=auth_headers)
    assert first.status_code == 201
    client.post("/journal/", json={"title": "Day 2", "content": "Kept going."}, headers=auth_headers)

    entries = client.get("/journal/", headers=auth_headers).json()
    assert {e["title"] for e in entries} == {"Day 1", "Day 2"}

    page = client.get("/journal/", params={"limit": 1}, headers=auth_headers).json()
    assert len(page) == 1

    entry_id = first.json()["id"]
    assert client.get(f"/journal/{entry_id}", headers=auth_headers).json()["content"] == "Started."
    assert client.delete(f"/journal/{entry_id}", headers=auth_headers).status_code == 204
    assert client.get(f"/journal/{entry_id}", headers=auth_headers).status_code == 404

    achievements = {a["code"]: a for a in client.get("/achievements/", headers=auth_headers).json()}
    assert achievements["first_journal_entry"]["earned"] is True


def test_journal_rejects_empty_content(client, auth_headers):
    response = client.post("/journal/", json={"title": "Empty", "content": ""}, headers=auth_headers)
    assert response.status_code == 422


# Timers

def test_timer_settings_default_then_upsert(client, auth_headers):
    defaults = client.get("/timers/settings", headers=auth_headers).json()
    assert defaults["pomo_duration"] == 25
    assert defaults["deep_work_duration"] == 60
    assert defaults["auto_break"] is False

    saved = client.put("/timers/settings", json={"pomo_duration": 50, "auto_break": True}, headers=auth_headers).json()
    assert saved["pomo_duration"] == 50
    assert saved["auto_break"] is True
    assert saved["short_break_duration"] == 5

    again = client.put("/timers/settings", json={"short_break_duration": 10}, headers=auth_headers).json()
    assert again["pomo_duration"] == 50
    assert again["short_break_duration"] == 10


def test_focus_sessions_and_stats(client, auth_headers):
    for _ in range(2):
        response = client.post("/timers/sessions", json={"timer_type": "pomodoro", "duration_minutes": 25}, headers=auth_headers)
        assert response.status_code == 201
    client.post("/timers/sessions", json={"timer_type": "deep_work", "duration_minutes": 60}, headers=auth_headers)

    stats = client.get("/timers/stats", headers=auth_headers).json()
    assert stats["daily_sessions"] == 3
    assert stats["weekly_sessions"] == 3
    assert stats["total_sessions"] == 3
    assert stats["total_minutes"] == 110


def test_focus_session_rejects_unknown_type(client, auth_headers):
    response = client.post("/timers/sessions", json={"timer_type": "nap", "duration_minutes": 20}, headers=auth_headers)
    assert response.status_code == 422


def test_session_counts_use_local_day_and_week(db_session, user):
    # Wednesday 2026-10-14 10:00 UTC
    now = datetime(2026, 10, 14, 10, 0, tzinfo=timezone.utc)
    crud.log_focus_session(db_session, user.id, "pomodoro", 25, now - timedelta(hours=1))
    crud.log_focus_session(db_session, user.id, "pomodoro", 25, now - timedelta(days=1))
    crud.log_focus_session(db_session, user.id, "pomodoro", 25, now - timedelta(days=5))

    counts = get_session_counts(db_session, user.id, now, "UTC")
    assert counts["daily_sessions"] == 1
    assert counts["weekly_sessions"] == 2
    assert counts["total_sessions"] == 3


def test_ten_sessions_award_focus_achievement(client, auth_headers):
    for _ in range(10):
        client.post("/timers/sessions", json={"timer_type": "pomodoro", "duration_minutes": 25}, headers=auth_headers)
    achievements = {a["code"]: a for a in client.get("/achievements/", headers=auth_headers).json()}
    assert achievements["focus_10_sessions"]["earned"] is True
    assert achievements["streak_7"]["earned"] is False


# Achievements

def test_achievement_catalog_starts_unearned(client, auth_headers):
    achievements = client.get("/achievements/", headers=auth_headers).json()
    assert len(achievements) == 7
    assert all(not a["earned"] and a["earned_at"] is None for a in achievements)


def test_achievements_awarded_once(client, auth_headers):
    habit = client.post("/habits/", json={"title": "Stretch"}, headers=auth_headers).json()
    first = client.post(f"/habits/{habit['id']}/complete", headers=auth_headers).json()
    second = client.post(f"/habits/{habit['id']}/complete", headers=auth_headers).json()

    assert [a["code"] for a in first["new_achievements"]] == ["first_habit_completion"]
    assert second["new_achievements"] == []


# Users and profile

def test_get_and_update_profile(client, auth_headers):
    me = client.get("/users/me", headers=auth_headers).json()
    assert me["email"] == "alice@example.com"
    assert me["username"] is None

    updated = client.put(
        "/users/me",
        json={"username": "alice_lvl", "bio": "Levelling up", "timezone": "Europe/Paris"},
        headers=auth_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["username"] == "alice_lvl"
    assert updated.json()["timezone"] == "Europe/Paris"

    public = client.get("/users/ALICE_LVL", headers=auth_headers).json()
    assert public["bio"] == "Levelling up"


def test_username_validation_and_uniqueness(client, auth_headers, other_user):
    assert client.put("/users/me", json={"username": "ab"}, headers=auth_headers).status_code == 422
    assert client.put("/users/me", json={"username": "bad name"}, headers=auth_headers).status_code == 422
    assert client.put("/users/me", json={"username": "admin"}, headers=auth_headers).status_code == 422
    assert client.put("/users/me", json={"timezone": "Mars/Olympus"}, headers=auth_headers).status_code == 422

    assert client.put("/users/me", json={"username": "taken_name"}, headers=auth_headers).status_code == 200
    conflict = client.put("/users/me", json={"username": "Taken_Name"}, headers={"X-User-ID": other_user.id})
    assert conflict.status_code == 400

    check = client.get("/users/username/check", params={"username": "taken_name"}, headers={"X-User-ID": other_user.id}).json()
    assert check["available"] is False
    own = client.get("/users/username/check", params={"username": "taken_name"}, headers=auth_headers).json()
    assert own["available"] is True


def test_unknown_public_profile(client, auth_headers):
    assert client.get("/users/ghost", headers=auth_headers).status_code == 404


def test_analytics(client, auth_headers):
    client.post("/goals/", json={"title": "A"}, headers=auth_headers)
    goal = client.post("/goals/", json={"title": "B"}, headers=auth_headers).json()
    client.patch(f"/goals/{goal['id']}/progress", json={"progress": 100}, headers=auth_headers)
    habit = client.post("/habits/", json={"title": "Walk"}, headers=auth_headers).json()
    client.post("/habits/", json={"title": "Floss"}, headers=auth_headers)
    client.post(f"/habits/{habit['id']}/complete", headers=auth_headers)
    client.post("/journal/", json={"title": "t", "content": "c"}, headers=auth_headers)

    stats = client.get("/users/me/analytics", headers=auth_headers).json()
    assert stats == {
        "total_goals": 2,
        "completed_goals": 1,
        "total_habits": 2,
        "active_habits": 1,
        "longest_streak": 1,
        "journal_entries": 1,
        "focus_sessions": 0,
    }


def test_user_timezone_drives_completion_date(client, auth_headers):
    client.put("/users/me", json={"timezone": "Pacific/Kiritimati"}, headers=auth_headers)
    habit = client.post("/habits/", json={"title": "Journal"}, headers=auth_headers).json()

    body = client.post(f"/habits/{habit['id']}/complete", headers=auth_headers).json()

    from lvlup.services.habit_tracker import local_date
    expected = local_date(datetime.now(timezone.utc), "Pacific/Kiritimati")
    assert body["habit"]["last_completed"] == expected.isoformat()


# Suggestions

def test_suggestion_is_stored_and_forwarded(client, auth_headers, monkeypatch):
    sent = []

    def recording_send(to_email, subject, html_content, reply_to=None, bcc=None):
        sent.append((to_email, subject, html_content, reply_to))

    monkeypatch.setattr("lvlup.routers.suggestions.send_email", recording_send)
    response = client.post(
        "/suggestions/",
        json={"name": "Alice", "category": "feature", "suggestion": "Dark mode <please>"},
        headers=auth_headers,
    )

    assert response.status_code == 201
    assert response.json()["forwarded"] is True
    assert len(sent) == 1
    to_email, subject, html_content, reply_to = sent[0]
    assert subject.startswith("[Suggestion/feature]")
    assert "Dark mode &lt;please&gt;" in html_content
    assert reply_to == "alice@example.com"


def test_suggestion_kept_when_forwarding_fails(client, auth_headers, db_session, monkeypatch):
    def rejecting_send(*args, **kwargs):
        raise email_sender.EmailDeliveryError("Mailgun returned 500")

    monkeypatch.setattr("lvlup.routers.suggestions.send_email", rejecting_send)
    response = client.post(
        "/suggestions/",
        json={"name": "Alice", "category": "bug", "suggestion": "Timer resets on refresh"},
        headers=auth_headers,
    )

    assert response.status_code == 201
    assert response.json()["forwarded"] is False
    from lvlup.models import Suggestion
    assert db_session.query(Suggestion).count() == 1


def test_logging_provider_does_not_call_mailgun(monkeypatch):
    def unexpected_post(*args, **kwargs):
        raise AssertionError("Mailgun must not be called")

    monkeypatch.setattr(email_sender.requests, "post", unexpected_post)
    email_sender.send_email("team@lvlup.app", "Hello", "<p>hi</p>")


class FakeResponse:
    def __init__(self, status_code, text=""):
        self.status_code = status_code
        self.text = text


def test_mailgun_provider_posts_message(monkeypatch):
    calls = []

    def fake_post(url, auth, data, timeout):
        calls.append((url, auth, data))
        return FakeResponse(200)

    monkeypatch.setattr(email_sender.settings, "EMAIL_PROVIDER", "mailgun")
    monkeypatch.setattr(email_sender.settings, "MAILGUN_API_KEY", "key-123")
    monkeypatch.setattr(email_sender.settings, "MAILGUN_DOMAIN", "mg.lvlup.app")
    monkeypatch.setattr(email_sender.requests, "post", fake_post)

    email_sender.send_email("team@lvlup.app", "Hello", "<p>hi</p>", reply_to="alice@example.com", bcc="audit@lvlup.app")

    url, auth, data = calls[0]
    assert url.endswith("/v3/mg.lvlup.app/messages")
    assert auth == ("api", "key-123")
    assert data["h:Reply-To"] == "alice@example.com"
    assert data["bcc"] == "audit@lvlup.app"


def test_mailgun_rejection_raises(monkeypatch):
    monkeypatch.setattr(email_sender.settings, "EMAIL_PROVIDER", "mailgun")
    monkeypatch.setattr(email_sender.settings, "MAILGUN_API_KEY", "key-123")
    monkeypatch.setattr(email_sender.requests, "post", lambda *a, **kw: FakeResponse(401, "Forbidden"))

    with pytest.raises(email_sender.EmailDeliveryError):
        email_sender.send_email("team@lvlup.app", "Hello", "<p>hi</p>")


# Service

def test_root_and_health(client):
    assert client.get("/").json()["message"] == "Lvl'Up API"
    assert client.get("/health").json()["status"] == "healthy"
