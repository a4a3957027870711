import json
from datetime import datetime, timedelta, timezone


def analysis(*themes):
    return json.dumps({"sentiment_score": 0.1, "themes": list(themes), "insights": "", "reflection_questions": []})


def write(client, headers, days_ago=0, content="Some words here."):
    day = (datetime.now(timezone.utc) - timedelta(days=days_ago)).date()
    response = client.post("/journal", json={"content": content, "entry_date": day.isoformat()}, headers=headers)
    assert response.status_code == 201


def test_overview_for_new_user(client, auth_headers):
    body = client.get("/stats/overview", headers=auth_headers).json()
    assert body == {
        "total_entries": 0,
        "average_mood": 0.0,
        "average_mood_label": "Unknown",
        "streak": 0,
        "common_themes": [],
        "mood_chart": [],
    }


def test_overview(client, auth_headers, gemini):
    gemini.queue(analysis("work", "rest"), analysis("rest"), analysis("family"))
    write(client, auth_headers, days_ago=3)
    write(client, auth_headers, days_ago=1)
    write(client, auth_headers, days_ago=0)
    for value in (4, 4, 4, 2):
        client.post("/moods", json={"mood_value": value}, headers=auth_headers)

    body = client.get("/stats/overview", headers=auth_headers).json()

    assert body["total_entries"] == 3
    assert body["average_mood"] == 3.5
    assert body["average_mood_label"] == "Happy"
    assert body["streak"] == 2
    assert body["common_themes"] == ["rest", "family", "work"]
    assert [p["mood"] for p in body["mood_chart"]] == [4, 4, 4, 2]


def test_growth(client, auth_headers, gemini):
    write(client, auth_headers, days_ago=0, content="one two three four")
    write(client, auth_headers, days_ago=1, content="five six")
    client.post("/moods", json={"mood_value": 5}, headers=auth_headers)

    body = client.get("/stats/growth", headers=auth_headers).json()

    assert body["current_streak"] == 2
    assert body["mood_trend"] == "stable"
    assert body["average_mood"] == 5.0
    assert body["journal"] == {"total_entries": 2, "total_words": 6, "avg_words_per_entry": 3}
    assert body["top_themes"] == [{"theme": "reflection", "count": 2}]
    assert body["recent_insights"] == []
    achieved = [m["title"] for m in body["milestones"] if m["achieved"]]
    assert achieved == ["First Journal Entry"]


def test_growth_without_moods(client, auth_headers):
    body = client.get("/stats/growth", headers=auth_headers).json()
    assert body["average_mood"] is None
    assert body["mood_trend"] == "stable"


def test_summary(client, auth_headers, gemini):
    write(client, auth_headers, days_ago=0)
    gemini.queue('{"insights": [{"title": "T", "content": "C"}]}')
    client.post("/insights/generate", headers=auth_headers)

    assert client.get("/stats/summary", headers=auth_headers).json() == {
        "unread_insights": 1,
        "current_streak": 1,
    }


def test_summary_tolerates_a_failed_count(client, auth_headers, monkeypatch):
    from sqlalchemy.exc import OperationalError
    from app.crud.insight import crud_insight

    def broken(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(crud_insight, "count_unread", broken)

    response = client.get("/stats/summary", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["unread_insights"] == 0


def test_calendar(client, auth_headers, gemini):
    write(client, auth_headers, days_ago=0)
    write(client, auth_headers, days_ago=0)
    write(client, auth_headers, days_ago=2)
    client.post("/moods", json={"mood_value": 1}, headers=auth_headers)
    client.post("/moods", json={"mood_value": 4}, headers=auth_headers)

    days = client.get("/stats/calendar", headers=auth_headers).json()

    assert len(days) == 2
    assert days[0]["journal_count"] == 2
    assert days[0]["mood_value"] == 4
    assert days[1]["journal_count"] == 1
    assert days[1]["mood_value"] is None


def test_store_failure_is_service_unavailable(client, auth_headers, monkeypatch):
    from sqlalchemy.exc import OperationalError
    from app.crud.journal_entry import crud_journal_entry

    def broken(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(crud_journal_entry, "count_by_user", broken)

    response = client.get("/stats/overview", headers=auth_headers)
    assert response.status_code == 503
    assert response.json()["notice"] == "We couldn't reach your data right now. Please try again."


def test_growth_average_is_rounded(client, auth_headers):
    for value in (3, 3, 4):
        client.post("/moods", json={"mood_value": value}, headers=auth_headers)

    assert client.get("/stats/growth", headers=auth_headers).json()["average_mood"] == 3.3
