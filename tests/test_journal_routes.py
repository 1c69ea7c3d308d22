from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import OperationalError

from app.journals.models import JournalEntry
from app.quotes.models import Quote


def test_analyze_returns_mood_and_matching_quote(client, auth_headers, db):
    resp = client.post("/api/journal/analyze", json={"entryText": "I am SO happy today"}, headers=auth_headers)

    assert resp.status_code == 200
    data = resp.json()
    assert data["mood"] == "happy"
    assert data["quote"]["mood_tag"] == "happy"
    assert db.query(JournalEntry).count() == 0


def test_analyze_does_not_escalate(client, auth_headers, dispatcher, db):
    resp = client.post("/api/journal/analyze", json={"entryText": "I want to end it all"}, headers=auth_headers)

    assert resp.status_code == 200
    assert resp.json()["mood"] == "suicidal"
    assert dispatcher.alerts == []
    assert db.query(JournalEntry).count() == 0


def test_analyze_requires_auth(client):
    resp = client.post("/api/journal/analyze", json={"entryText": "hello"})
    assert resp.status_code in (401, 403)


def test_analyze_rejects_blank_text(client, auth_headers):
    resp = client.post("/api/journal/analyze", json={"entryText": "   "}, headers=auth_headers)
    assert resp.status_code == 400


def test_analyze_rejects_missing_or_non_string_text(client, auth_headers):
    assert client.post("/api/journal/analyze", json={}, headers=auth_headers).status_code == 422
    assert client.post("/api/journal/analyze", json={"entryText": 42}, headers=auth_headers).status_code == 422


def test_analyze_without_quotes_for_mood_is_server_error(client, auth_headers, db):
    db.query(Quote).filter(Quote.mood_tag == "anxious").delete()
    db.commit()

    resp = client.post("/api/journal/analyze", json={"entryText": "so nervous"}, headers=auth_headers)

    assert resp.status_code == 500
    assert resp.json()["detail"] == "No quote available for mood"


def test_save_suicidal_entry_escalates_once(client, auth_headers, dispatcher, db, user):
    resp = client.post("/api/journal/save", json={"entryText": "I want to end it all"}, headers=auth_headers)

    assert resp.status_code == 201
    data = resp.json()
    assert data["mood"] == "suicidal"
    assert data["alert_scheduled"] is True
    assert data["quote"]["mood_tag"] == "suicidal"

    entry = db.query(JournalEntry).one()
    assert entry.mood == "suicidal"
    assert entry.user_id == user.id

    assert len(dispatcher.alerts) == 1
    alert = dispatcher.alerts[0]
    assert alert.trusted_contact == "friend@example.com"
    assert alert.user_name == "Ada"
    assert alert.excerpt == "I want to end it all"


def test_save_succeeds_when_dispatch_fails(client, auth_headers, dispatcher, db):
    dispatcher.fail = True

    resp = client.post("/api/journal/save", json={"entryText": "I want to end it all"}, headers=auth_headers)

    assert resp.status_code == 201
    assert len(dispatcher.alerts) == 1
    assert db.query(JournalEntry).count() == 1


def test_save_ignores_client_supplied_mood(client, auth_headers, dispatcher, db):
    resp = client.post(
        "/api/journal/save",
        json={"entryText": "Honestly I feel hopeless", "mood": "happy"},
        headers=auth_headers,
    )

    assert resp.status_code == 201
    assert resp.json()["mood"] == "suicidal"
    assert db.query(JournalEntry).one().mood == "suicidal"
    assert len(dispatcher.alerts) == 1


def test_client_cannot_force_escalation(client, auth_headers, dispatcher):
    resp = client.post(
        "/api/journal/save",
        json={"entryText": "Lovely walk in the park", "mood": "suicidal"},
        headers=auth_headers,
    )

    assert resp.status_code == 201
    assert resp.json()["mood"] == "happy"
    assert dispatcher.alerts == []


def test_save_without_trusted_contact_skips_alert(client, dispatcher, make_user):
    from app.auth.service import create_token

    lonely = make_user(email="solo@example.com", trusted_email="  ")
    headers = {"Authorization": f"Bearer {create_token(lonely.id)}"}

    resp = client.post("/api/journal/save", json={"entryText": "I want to die"}, headers=headers)

    assert resp.status_code == 201
    assert resp.json()["alert_scheduled"] is False
    assert dispatcher.alerts == []


def test_non_suicidal_save_does_not_escalate(client, auth_headers, dispatcher):
    resp = client.post(
        "/api/journal/save", json={"entryText": "I feel so lonely and empty, a bit nervous too."}, headers=auth_headers
    )

    assert resp.status_code == 201
    assert resp.json()["mood"] == "sad"
    assert dispatcher.alerts == []


def test_long_entry_alert_is_truncated(client, auth_headers, dispatcher):
    text = "I want to die. " + "x" * 600
    resp = client.post("/api/journal/save", json={"entryText": text}, headers=auth_headers)

    assert resp.status_code == 201
    excerpt = dispatcher.alerts[0].excerpt
    assert excerpt.endswith("...")
    assert len(excerpt) == 503


def test_persistence_failure_rejects_save_without_alert(client, auth_headers, dispatcher, monkeypatch):
    from sqlalchemy.orm import Session

    def broken_commit(self):
        raise OperationalError("INSERT", {}, Exception("disk full"))

    monkeypatch.setattr(Session, "commit", broken_commit)

    resp = client.post("/api/journal/save", json={"entryText": "I want to end it all"}, headers=auth_headers)

    assert resp.status_code == 500
    assert resp.json()["detail"] == "Failed to save journal entry"
    assert dispatcher.alerts == []


def test_entries_listed_newest_first(client, auth_headers, db, user):
    now = datetime.now(timezone.utc)
    db.add_all([
        JournalEntry(user_id=user.id, entry_text="older", mood="neutral", created_at=now - timedelta(days=2)),
        JournalEntry(user_id=user.id, entry_text="newer", mood="happy", created_at=now - timedelta(hours=1)),
    ])
    db.commit()

    resp = client.get("/api/journal/entries", headers=auth_headers)

    assert resp.status_code == 200
    assert [e["entry_text"] for e in resp.json()] == ["newer", "older"]


def test_save_survives_failing_trusted_contact_lookup(client, auth_headers, dispatcher, db, monkeypatch):
    def broken_lookup(db, user_id):
        raise RuntimeError("connection reset")

    monkeypatch.setattr("app.journals.service.get_trusted_contact", broken_lookup)

    resp = client.post("/api/journal/save", json={"entryText": "I want to end it all"}, headers=auth_headers)

    assert resp.status_code == 201
    assert resp.json()["alert_scheduled"] is False
    assert db.query(JournalEntry).one().mood == "suicidal"
    assert dispatcher.alerts == []


def test_alert_carries_stored_entry_timestamp(client, auth_headers, dispatcher, db):
    resp = client.post("/api/journal/save", json={"entryText": "I want to end it all"}, headers=auth_headers)

    assert resp.status_code == 201
    stored = db.query(JournalEntry).one().created_at
    if stored.tzinfo is None:
        stored = stored.replace(tzinfo=timezone.utc)
    assert dispatcher.alerts[0].created_at == stored


def test_save_accepts_non_string_client_mood(client, auth_headers, dispatcher):
    resp = client.post("/api/journal/save", json={"entryText": "Lovely walk", "mood": 5}, headers=auth_headers)

    assert resp.status_code == 201
    assert resp.json()["mood"] == "happy"
    assert dispatcher.alerts == []


def test_analyze_accepts_field_name_as_well_as_alias(client, auth_headers):
    resp = client.post("/api/journal/analyze", json={"entry_text": "I am so happy"}, headers=auth_headers)

    assert resp.status_code == 200
    assert resp.json()["mood"] == "happy"
