import json

GENERATED = json.dumps({"insights": [
    {"title": "Evening reflection", "content": "You tend to write in the evening.", "type": "pattern"},
    {"title": "Celebrate rest", "content": "Rest days lift your mood.", "type": "mood"},
]})


def write_entry(client, headers, content="A calm day."):
    return client.post("/journal", json={"content": content}, headers=headers)


def test_generate_requires_a_journal_entry(client, auth_headers, gemini):
    response = client.post("/insights/generate", headers=auth_headers)
    assert response.status_code == 422
    assert response.json()["notice"] == "Write at least one journal entry to generate insights."
    assert gemini.requests == []


def test_generate_stores_companion_insights(client, auth_headers, gemini):
    write_entry(client, auth_headers)
    gemini.queue(GENERATED)

    response = client.post("/insights/generate", headers=auth_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["generated"] == 2
    assert body["from_fallback"] is False
    assert [i["insight_type"] for i in body["insights"]] == ["pattern", "mood"]
    assert "I have 1 journal entries and 0 mood entries." in gemini.prompts[-1]


def test_generate_falls_back_when_reply_is_not_json(client, auth_headers, gemini):
    write_entry(client, auth_headers)
    client.post("/moods", json={"mood_value": 4}, headers=auth_headers)
    client.post("/moods", json={"mood_value": 3}, headers=auth_headers)
    gemini.queue("Here are some thoughts about your week.")

    body = client.post("/insights/generate", headers=auth_headers).json()

    assert body["from_fallback"] is True
    titles = [i["title"] for i in body["insights"]]
    assert titles == ["Emotional Journey Analysis", "Growth Opportunity", "Mood Pattern Insight"]
    assert body["insights"][2]["content"].startswith("Your average mood rating is 3.5/5.")


def test_fallback_without_moods_has_two_insights(client, auth_headers, gemini):
    write_entry(client, auth_headers)
    gemini.queue('{"insights": []}')

    body = client.post("/insights/generate", headers=auth_headers).json()
    assert [i["insight_type"] for i in body["insights"]] == ["pattern", "growth"]


def test_filters_unread_count_and_mark_read(client, auth_headers, gemini):
    write_entry(client, auth_headers)
    gemini.queue(GENERATED)
    insights = client.post("/insights/generate", headers=auth_headers).json()["insights"]

    assert client.get("/insights/unread-count", headers=auth_headers).json() == {"unread": 2}

    mood_insight = next(i for i in insights if i["insight_type"] == "mood")
    marked = client.patch(f"/insights/{mood_insight['id']}/read", headers=auth_headers).json()
    assert marked["is_read"] is True

    assert client.get("/insights/unread-count", headers=auth_headers).json() == {"unread": 1}
    unread = client.get("/insights?filter=unread", headers=auth_headers).json()
    assert [i["title"] for i in unread] == ["Evening reflection"]
    by_type = client.get("/insights?filter=mood", headers=auth_headers).json()
    assert [i["title"] for i in by_type] == ["Celebrate rest"]
    assert len(client.get("/insights", headers=auth_headers).json()) == 2


def test_unknown_filter(client, auth_headers):
    assert client.get("/insights?filter=bogus", headers=auth_headers).status_code == 422


def test_generate_keeps_insights_with_null_or_unknown_type(client, auth_headers, gemini):
    write_entry(client, auth_headers)
    gemini.queue(json.dumps({"insights": [
        {"title": "Evening reflection", "content": "You tend to write in the evening.", "type": None},
        {"title": "Naming feelings", "content": "You name your feelings clearly.", "type": "emotional"},
        {"title": "Celebrate rest", "content": "Rest days lift your mood.", "type": "mood"},
    ]}))

    body = client.post("/insights/generate", headers=auth_headers).json()

    assert body["from_fallback"] is False
    assert [i["title"] for i in body["insights"]] == ["Evening reflection", "Naming feelings", "Celebrate rest"]
    assert [i["insight_type"] for i in body["insights"]] == ["pattern", "pattern", "mood"]
