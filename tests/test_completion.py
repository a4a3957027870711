import json

import httpx
import pytest

from app.core.exceptions import CompletionServiceError
from app.core.result import ErrorKind
from app.schemas.completion import CompanionRequest, CompletionType, JournalAnalysis
from app.schemas.insight import InsightType
from app.services.completion import (
    CompanionService,
    CompletionClient,
    parse_generated_insights,
    parse_journal_analysis,
)
from app.services.prompts import build_prompt, summarize_chat_context


def gemini_reply(text):
    return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": text}]}}]})


def client_for(handler, api_key="test-key"):
    return CompletionClient(api_key=api_key, model="test-model", transport=httpx.MockTransport(handler))


# =====================================================================
# REPLY PARSING
# =====================================================================

class TestParseJournalAnalysis:
    def test_not_json_yields_default(self):
        analysis = parse_journal_analysis("not json")
        assert analysis == JournalAnalysis(
            sentiment_score=0,
            themes=["reflection"],
            insights="not json",
            reflection_questions=["How did writing this make you feel?"],
        )

    def test_json_array_yields_default(self):
        assert parse_journal_analysis('["calm"]').themes == ["reflection"]

    def test_fenced_json(self):
        text = '```json\n{"sentiment_score": 0.4, "themes": ["gratitude"], "insights": "ok", "reflection_questions": []}\n```'
        analysis = parse_journal_analysis(text)
        assert analysis.sentiment_score == 0.4
        assert analysis.themes == ["gratitude"]

    def test_score_clamped_and_themes_truncated(self):
        text = json.dumps({
            "sentiment_score": 3.5,
            "themes": ["a", "b", " ", "c", "d", "e", "f"],
            "insights": "",
            "reflection_questions": [],
        })
        analysis = parse_journal_analysis(text)
        assert analysis.sentiment_score == 1.0
        assert analysis.themes == ["a", "b", "c", "d", "e"]

    def test_wrong_field_type_yields_default(self):
        analysis = parse_journal_analysis('{"sentiment_score": "very happy"}')
        assert analysis.themes == ["reflection"]


class TestParseGeneratedInsights:
    def test_valid_reply(self):
        text = json.dumps({"insights": [
            {"title": "Evening calm", "content": "You write more calmly at night.", "type": "pattern"},
            {"title": "Small steps", "content": "Try a short walk.", "type": "advice"},
        ]})
        drafts = parse_generated_insights(text)
        assert [d.type for d in drafts] == [InsightType.pattern, InsightType.advice]

    def test_missing_type_defaults_to_pattern(self):
        drafts = parse_generated_insights('{"insights": [{"title": "T", "content": "C"}]}')
        assert drafts[0].type == InsightType.pattern

    def test_null_or_unknown_type_defaults_to_pattern(self):
        text = json.dumps({"insights": [
            {"title": "Evening reflection", "content": "You write at night.", "type": None},
            {"title": "Feelings", "content": "Named feelings often.", "type": "emotional"},
            {"title": "Rest", "content": "Rest lifts you.", "type": " Mood ", "data": None},
        ]})
        drafts = parse_generated_insights(text)
        assert [d.type for d in drafts] == [InsightType.pattern, InsightType.pattern, InsightType.mood]
        assert drafts[2].data == {}

    @pytest.mark.parametrize("text", ["plain prose", '{"insights": []}', '{"other": 1}', '{"insights": [{"title": ""}]}'])
    def test_unusable_reply_is_none(self, text):
        assert parse_generated_insights(text) is None


# =====================================================================
# HTTP CLIENT
# =====================================================================

class TestCompletionClient:
    def test_posts_prompt_and_returns_text(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return gemini_reply("hello")

        result = client_for(handler).complete("Hi there", max_output_tokens=500)

        assert result.ok
        assert result.value == "hello"
        assert "/models/test-model:generateContent" in seen["url"]
        assert "key=test-key" in seen["url"]
        assert seen["body"]["contents"][0]["parts"][0]["text"] == "Hi there"
        assert seen["body"]["generationConfig"] == {"temperature": 0.7, "maxOutputTokens": 500}

    def test_error_status_is_failure(self):
        result = client_for(lambda request: httpx.Response(503)).complete("Hi")
        assert not result.ok
        assert result.error == ErrorKind.completion
        with pytest.raises(CompletionServiceError):
            result.unwrap()

    def test_network_error_is_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        assert client_for(handler).complete("Hi").error == ErrorKind.completion

    def test_envelope_without_text_is_failure(self):
        result = client_for(lambda request: httpx.Response(200, json={"candidates": []})).complete("Hi")
        assert result.error == ErrorKind.completion

    def test_missing_api_key_is_failure(self, monkeypatch):
        monkeypatch.setattr("app.services.completion.settings.GEMINI_API_KEY", None)
        calls = []
        client = CompletionClient(api_key=None, transport=httpx.MockTransport(calls.append))
        assert client.complete("Hi").error == ErrorKind.completion
        assert calls == []


# =====================================================================
# COMPANION SERVICE
# =====================================================================

class TestCompanionService:
    def test_analyze_journal_uses_small_budget_and_falls_back(self):
        bodies = []

        def handler(request):
            bodies.append(json.loads(request.content))
            return gemini_reply("not json")

        service = CompanionService(client_for(handler))
        response = service.handle(
            CompanionRequest(message="Long day at work.", type=CompletionType.analyze_journal)
        )

        assert isinstance(response, JournalAnalysis)
        assert response.themes == ["reflection"]
        assert response.insights == "not json"
        assert bodies[0]["generationConfig"]["maxOutputTokens"] == 500

    def test_chat_returns_response_text(self):
        service = CompanionService(client_for(lambda request: gemini_reply("I'm listening.")))
        response = service.handle(CompanionRequest(message="Hello"))
        assert response.response == "I'm listening."

    def test_failure_raises_completion_error(self):
        service = CompanionService(client_for(lambda request: httpx.Response(500)))
        with pytest.raises(CompletionServiceError):
            service.handle(CompanionRequest(message="Hello", type=CompletionType.generate_insight))


# =====================================================================
# PROMPTS
# =====================================================================

def test_prompt_ends_with_user_message():
    prompt = build_prompt(CompletionType.analyze_journal, "Today was calm.")
    assert prompt.endswith("\n\nUser: Today was calm.")
    assert '"sentiment_score"' in prompt


def test_chat_prompt_without_context():
    prompt = build_prompt(CompletionType.chat, "Hi")
    assert "This is a new conversation with no previous context." in prompt


def test_chat_context_summary():
    context = {
        "recentMoods": [{"mood_label": "Happy", "mood_value": 4, "created_at": "2024-03-15T09:00:00Z"}],
        "recentJournalEntries": [
            {"themes": ["gratitude", "family"]},
            {"themes": ["work", "rest", "sleep", "focus"]},
        ],
    }
    summary = summarize_chat_context(context)
    assert "Latest mood: Happy (4/5) on 3/15/2024." in summary
    assert "Recent journal themes: gratitude, family, work, rest, sleep." in summary


def test_insight_prompt_embeds_user_data():
    prompt = build_prompt(CompletionType.generate_insight, "Insight please", {"moods": [3, 4]})
    assert '"moods"' in prompt
    assert "Limited data available" in build_prompt(CompletionType.generate_insight, "x")
