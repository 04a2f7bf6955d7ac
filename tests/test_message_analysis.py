import json

import pytest
import requests

from shared.core.exceptions import AIServiceError
from shared.utils.ai_client import AIClient
from hotel_service.app.enum.guest_services_enum import MaintenanceCategory, MaintenancePriority
from hotel_service.app.util.message_analyzer import MessageAnalyzer


class StubResponse:
    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self._body = body

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._body is None:
            raise ValueError("no JSON body")
        return self._body


class StubSession:
    """Replays queued responses (or exceptions) for ``session.post``."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def post(self, url, headers=None, json=None, timeout=None):
        self.requests.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        outcome = self.responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def completion(content):
    return StubResponse(body={"choices": [{"message": {"content": json.dumps(content)}}]})


def make_client(session, api_key="sk-test", max_retries=2):
    return AIClient(api_key=api_key, base_url="https://ai.example.com/v1/", model="gpt-4o-mini",
                    timeout=5, max_retries=max_retries, retry_delay=0, session=session)


# ----------------- AIClient -----------------
def test_complete_json_posts_chat_completion():
    session = StubSession(completion({"category": "hvac"}))

    answer = make_client(session).complete_json("system", "user text")

    assert answer == {"category": "hvac"}
    sent = session.requests[0]
    assert sent["url"] == "https://ai.example.com/v1/chat/completions"
    assert sent["headers"]["Authorization"] == "Bearer sk-test"
    assert sent["json"]["model"] == "gpt-4o-mini"
    assert sent["json"]["response_format"] == {"type": "json_object"}
    assert sent["json"]["messages"][1] == {"role": "user", "content": "user text"}
    assert sent["timeout"] == 5


def test_complete_json_retries_network_errors():
    session = StubSession(requests.ConnectionError("reset"), completion({"ok": True}))
    assert make_client(session).complete_json("s", "u") == {"ok": True}
    assert len(session.requests) == 2


def test_complete_json_gives_up_after_retries():
    session = StubSession(StubResponse(503), StubResponse(503))
    with pytest.raises(AIServiceError):
        make_client(session).complete_json("s", "u")
    assert len(session.requests) == 2


def test_bad_credentials_are_not_retried():
    session = StubSession(StubResponse(401), completion({}))
    with pytest.raises(AIServiceError):
        make_client(session).complete_json("s", "u")
    assert len(session.requests) == 1


def test_non_json_content_is_an_error():
    body = {"choices": [{"message": {"content": "not json"}}]}
    with pytest.raises(AIServiceError):
        make_client(StubSession(StubResponse(body=body))).complete_json("s", "u")


def test_missing_api_key_short_circuits():
    session = StubSession()
    with pytest.raises(AIServiceError):
        make_client(session, api_key=None).complete_json("s", "u")
    assert session.requests == []


# ----------------- MessageAnalyzer -----------------
def test_categorize_maps_model_answer(fake_ai_client):
    analyzer = MessageAnalyzer(fake_ai_client(answer={
        "category": "Electrical",
        "priority": "URGENT",
        "summary": "Sparks from the outlet.",
    }))

    result = analyzer.categorize_maintenance("The socket is sparking")

    assert result["category"] == MaintenanceCategory.ELECTRICAL
    assert result["priority"] == MaintenancePriority.URGENT
    assert result["summary_amharic"] == "Sparks from the outlet."
    assert result["message_amharic"] == "The socket is sparking"


def test_categorize_unknown_labels_fall_back(fake_ai_client):
    analyzer = MessageAnalyzer(fake_ai_client(answer={
        "category": "spaceship", "priority": "whenever", "summary": "Odd request"}))

    result = analyzer.categorize_maintenance("Fix my spaceship")

    assert result["category"] == MaintenanceCategory.OTHER
    assert result["priority"] == MaintenancePriority.MEDIUM
    assert result["summary"] == "Odd request"


def test_categorize_fallback_on_failure(fake_ai_client):
    message = "x" * 150
    result = MessageAnalyzer(fake_ai_client(error=AIServiceError("boom"))).categorize_maintenance(message)
    assert result == {
        "category": MaintenanceCategory.OTHER,
        "priority": MaintenancePriority.MEDIUM,
        "summary": "x" * 100,
        "summary_amharic": "x" * 100,
        "message_amharic": message,
    }


def test_translate_fills_missing_keys(fake_ai_client):
    analyzer = MessageAnalyzer(fake_ai_client(answer={"original_language": "am"}))
    result = analyzer.translate_inquiry("ሰላም", "Sara")
    assert result == {
        "message_english": "ሰላም",
        "message_amharic": "ሰላም",
        "original_language": "am",
        "summary": "ሰላም",
    }


def test_translate_fallback_on_failure(fake_ai_client):
    result = MessageAnalyzer(fake_ai_client(error=AIServiceError("down"))).translate_inquiry("Hi", "Sara")
    assert result["original_language"] == "unknown"
    assert result["message_english"] == "Hi"
