from app.services.chat import FALLBACK_REPLY


def test_send_message_stores_both_sides(client, auth_headers, gemini):
    gemini.queue("That sounds like a lot. What helped you get through it?")
    response = client.post("/chat", json={"message": "  Rough day.  "}, headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["user_message"]["content"] == "Rough day."
    assert body["user_message"]["message_type"] == "user"
    assert body["reply"]["message_type"] == "ai"
    assert body["reply"]["content"].startswith("That sounds like a lot.")

    history = client.get("/chat", headers=auth_headers).json()
    assert [m["message_type"] for m in history] == ["user", "ai"]


def test_prompt_carries_mood_and_themes(client, auth_headers, gemini):
    client.post("/moods", json={"mood_value": 2}, headers=auth_headers)
    gemini.queue('{"sentiment_score": -0.2, "themes": ["overwhelm"], "insights": "", "reflection_questions": []}')
    client.post("/journal", json={"content": "Too much at work."}, headers=auth_headers)

    client.post("/chat", json={"message": "Hi"}, headers=auth_headers)

    prompt = gemini.prompts[-1]
    assert "Latest mood: Sad (2/5)" in prompt
    assert "Recent journal themes: overwhelm." in prompt
    assert prompt.endswith("User: Hi")


def test_empty_reply_is_replaced(client, auth_headers, gemini):
    gemini.queue("   ")
    body = client.post("/chat", json={"message": "Hello"}, headers=auth_headers).json()
    assert body["reply"]["content"] == FALLBACK_REPLY


def test_companion_failure_is_bad_gateway(client, auth_headers, gemini):
    gemini.queue(500)
    response = client.post("/chat", json={"message": "Hello"}, headers=auth_headers)

    assert response.status_code == 502
    assert response.json()["notice"] == "The companion is unavailable right now. Please try again."


def test_clear_history(client, auth_headers, gemini):
    client.post("/chat", json={"message": "One"}, headers=auth_headers)
    client.post("/chat", json={"message": "Two"}, headers=auth_headers)

    response = client.delete("/chat", headers=auth_headers)
    assert response.json()["message"] == "Deleted 4 messages"
    assert client.get("/chat", headers=auth_headers).json() == []


def test_companion_endpoint(client, auth_headers, gemini):
    gemini.queue("not json")
    analysis = client.post(
        "/companion", json={"message": "My entry", "type": "analyze_journal"}, headers=auth_headers
    ).json()
    assert analysis == {
        "sentiment_score": 0,
        "themes": ["reflection"],
        "insights": "not json",
        "reflection_questions": ["How did writing this make you feel?"],
    }

    gemini.queue("Keep going.")
    reply = client.post(
        "/companion",
        json={"message": "Encourage me", "type": "generate_insight", "context": {"moods": [4]}},
        headers=auth_headers,
    ).json()
    assert reply == {"response": "Keep going."}
