"""
HTTP tests for the FastAPI application.

Tests cover:
- CORS headers and preflight short-circuit on both AI endpoints
- /itinerary-planner success, plain-text fallback and failure envelopes
- /multilingual-chatbot success and failure envelopes
- Request validation (400) vs malformed body (500)
- Missing credential end-to-end with zero outbound requests
- /meta and /health
"""
import json
from datetime import datetime

import httpx
import pytest

from app.ai.openai_client import LLMGateway
from app.core.errors import ConfigurationError, GatewayError
from app.dependencies import get_llm_gateway
from app.main import app
from tests.fakes import TEST_API_KEY

CORS = {
    "access-control-allow-origin": "*",
    "access-control-allow-headers": "authorization, x-client-info, apikey, content-type",
}

ITINERARY_BODY = {"duration": 2, "budget": "low", "interests": ["nature"], "preferences": "quiet"}

STRUCTURED = {
    "title": "Your Jharkhand Adventure",
    "days": [
        {
            "day": 1,
            "title": "Into the forest",
            "activities": [
                {
                    "time": "06:00 AM",
                    "activity": "Jeep safari",
                    "location": "Betla National Park",
                    "description": "Early morning safari to spot elephants.",
                    "cost": "₹1500",
                    "tips": "Book the first slot.",
                }
            ],
        },
        {
            "day": 2,
            "title": "Sunrise point",
            "activities": [],
        },
    ],
    "totalBudget": "₹6000",
    "tips": ["Respect village customs"],
}


def _parse_timestamp(value: str) -> datetime:
    assert value.endswith("Z")
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _assert_cors(response):
    for name, value in CORS.items():
        assert response.headers[name] == value


# ---------------------------------------------------------------------------
# CORS / preflight
# ---------------------------------------------------------------------------

class TestPreflight:
    @pytest.mark.parametrize("path", ["/itinerary-planner", "/multilingual-chatbot"])
    def test_options_is_empty_and_skips_gateway(self, client, gateway, path):
        response = client.options(path)

        assert response.status_code == 200
        assert response.content == b""
        _assert_cors(response)
        assert gateway.calls == []

    def test_browser_preflight_headers(self, client, gateway):
        response = client.options(
            "/multilingual-chatbot",
            headers={"Origin": "https://example.org", "Access-Control-Request-Method": "POST"},
        )

        assert response.status_code == 200
        _assert_cors(response)
        assert gateway.calls == []

    def test_cors_headers_on_success_and_failure(self, client, gateway):
        gateway.reply = "Hello"
        _assert_cors(client.post("/multilingual-chatbot", json={"message": "Hi"}))

        gateway.error = GatewayError("OpenAI API error: down")
        _assert_cors(client.post("/multilingual-chatbot", json={"message": "Hi"}))


# ---------------------------------------------------------------------------
# /itinerary-planner
# ---------------------------------------------------------------------------

class TestItineraryPlanner:
    def test_structured_itinerary(self, client, gateway):
        gateway.reply = json.dumps(STRUCTURED)

        response = client.post("/itinerary-planner", json=ITINERARY_BODY)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert response.json() == {"itinerary": STRUCTURED}

    def test_plain_text_fallback(self, client, gateway):
        gateway.reply = "I suggest a nature trip"

        response = client.post("/itinerary-planner", json=ITINERARY_BODY)

        assert response.status_code == 200
        assert response.json() == {
            "itinerary": {
                "title": "Your Jharkhand Adventure",
                "content": "I suggest a nature trip",
                "isPlainText": True,
            }
        }

    def test_partial_json_never_mixes_shapes(self, client, gateway):
        gateway.reply = json.dumps({"title": "Half", "days": []})

        itinerary = client.post("/itinerary-planner", json=ITINERARY_BODY).json()["itinerary"]

        assert set(itinerary) == {"title", "content", "isPlainText"}
        assert itinerary["content"] == gateway.reply

    def test_language_defaults_to_english(self, client, gateway):
        gateway.reply = "text"

        client.post("/itinerary-planner", json=ITINERARY_BODY)

        assert "Response language: English" in gateway.calls[0]["messages"][1]["content"]

    def test_gateway_error_is_500_with_upstream_message(self, client, gateway):
        gateway.error = GatewayError("OpenAI API error: Rate limit reached", status_code=429)

        response = client.post("/itinerary-planner", json=ITINERARY_BODY)

        assert response.status_code == 500
        body = response.json()
        assert set(body) == {"error", "details"}
        assert "Rate limit reached" in body["error"]
        assert body["details"] == "Failed to generate itinerary. Please try again."
        _assert_cors(response)

    def test_configuration_error_is_500(self, client, gateway):
        gateway.error = ConfigurationError("OpenAI API key not configured")

        response = client.post("/itinerary-planner", json=ITINERARY_BODY)

        assert response.status_code == 500
        assert response.json()["error"] == "OpenAI API key not configured"

    def test_error_message_never_contains_secret(self, client, gateway):
        gateway.error = GatewayError(f"OpenAI API error: bad key {TEST_API_KEY}")

        response = client.post("/itinerary-planner", json=ITINERARY_BODY)

        assert TEST_API_KEY not in response.text

    @pytest.mark.parametrize("missing", ["duration", "interests", "preferences", "budget"])
    def test_missing_required_field_is_400(self, client, gateway, missing):
        body = {k: v for k, v in ITINERARY_BODY.items() if k != missing}

        response = client.post("/itinerary-planner", json=body)

        assert response.status_code == 400
        assert missing in response.json()["error"]
        assert set(response.json()) == {"error", "details"}
        assert gateway.calls == []

    def test_non_positive_duration_is_400(self, client, gateway):
        response = client.post("/itinerary-planner", json=dict(ITINERARY_BODY, duration=0))

        assert response.status_code == 400
        assert gateway.calls == []

    def test_malformed_body_is_500(self, client, gateway):
        response = client.post(
            "/itinerary-planner", content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 500
        assert response.json()["details"] == "Failed to generate itinerary. Please try again."
        assert gateway.calls == []


# ---------------------------------------------------------------------------
# /multilingual-chatbot
# ---------------------------------------------------------------------------

class TestChatbot:
    def test_reply_language_and_timestamp(self, client, gateway):
        gateway.reply = "Visit the falls and the park."

        response = client.post(
            "/multilingual-chatbot",
            json={"message": "What can I do in 3 days?", "language": "English", "chatHistory": []},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["reply"] == "Visit the falls and the park."
        assert body["language"] == "English"
        _parse_timestamp(body["timestamp"])

    def test_history_order_and_new_message_last(self, client, gateway):
        gateway.reply = "ok"
        history = [
            {"role": "user", "content": "first"},
            {"role": "assistant", "content": "second"},
            {"role": "user", "content": "third"},
        ]

        client.post("/multilingual-chatbot", json={"message": "fourth", "chatHistory": history})

        messages = gateway.calls[0]["messages"]
        assert messages[0]["role"] == "system"
        assert [m["content"] for m in messages[1:]] == ["first", "second", "third", "fourth"]
        assert messages[-1]["role"] == "user"

    def test_failure_still_has_reply(self, client, gateway):
        gateway.error = GatewayError("OpenAI API error: Service unavailable")

        response = client.post("/multilingual-chatbot", json={"message": "Hi"})

        assert response.status_code == 500
        body = response.json()
        assert "Service unavailable" in body["error"]
        assert body["reply"] == "Sorry, I encountered an error. Please try again."
        _parse_timestamp(body["timestamp"])

    def test_missing_message_is_400_with_reply(self, client, gateway):
        response = client.post("/multilingual-chatbot", json={"language": "Hindi"})

        assert response.status_code == 400
        body = response.json()
        assert "message" in body["error"]
        assert body["reply"]
        assert gateway.calls == []

    def test_unknown_history_role_is_400(self, client, gateway):
        response = client.post(
            "/multilingual-chatbot",
            json={"message": "Hi", "chatHistory": [{"role": "tool", "content": "x"}]},
        )

        assert response.status_code == 400
        assert gateway.calls == []

    @pytest.mark.parametrize("entries", [200, 201, 202, 1000])
    def test_long_conversation_is_trimmed_not_rejected(self, client, gateway, entries):
        gateway.reply = "ok"
        history = [
            {"role": "user" if i % 2 == 0 else "assistant", "content": f"turn {i}"} for i in range(entries)
        ]

        response = client.post("/multilingual-chatbot", json={"message": "latest", "chatHistory": history})

        assert response.status_code == 200
        messages = gateway.calls[0]["messages"]
        assert [m["content"] for m in messages[1:-1]] == [f"turn {i}" for i in range(entries - 20, entries)]
        assert messages[-1]["content"] == "latest"

    def test_dropped_long_turn_does_not_fail_request(self, client, gateway):
        gateway.reply = "ok"
        history = [{"role": "assistant", "content": "x" * 4001}]
        history += [{"role": "user", "content": f"short {i}"} for i in range(25)]

        response = client.post("/multilingual-chatbot", json={"message": "Hi", "chatHistory": history})

        assert response.status_code == 200
        assert all(len(m["content"]) < 4001 for m in gateway.calls[0]["messages"][1:])

    @pytest.mark.parametrize("length,forwarded", [(4000, 4000), (4001, 4000), (9000, 4000)])
    def test_forwarded_turn_is_truncated(self, client, gateway, length, forwarded):
        gateway.reply = "ok"
        history = [{"role": "assistant", "content": "y" * length}]

        response = client.post("/multilingual-chatbot", json={"message": "Hi", "chatHistory": history})

        assert response.status_code == 200
        assert gateway.calls[0]["messages"][1]["content"] == "y" * forwarded

    @pytest.mark.parametrize("length,status", [(4000, 200), (4001, 400)])
    def test_message_length_limit(self, client, gateway, length, status):
        gateway.reply = "ok"

        response = client.post("/multilingual-chatbot", json={"message": "m" * length})

        assert response.status_code == status
        assert response.json()["reply"]


# ---------------------------------------------------------------------------
# Missing credential end-to-end
# ---------------------------------------------------------------------------

class TestMissingCredential:
    @pytest.fixture
    def unconfigured(self, client):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={})

        gateway = LLMGateway(api_key="", http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
        app.dependency_overrides[get_llm_gateway] = lambda: gateway
        return requests

    def test_itinerary_fails_without_outbound_call(self, client, unconfigured):
        response = client.post("/itinerary-planner", json=ITINERARY_BODY)

        assert response.status_code == 500
        assert response.json()["error"] == "OpenAI API key not configured"
        assert unconfigured == []

    def test_chat_fails_without_outbound_call(self, client, unconfigured):
        response = client.post("/multilingual-chatbot", json={"message": "Hi"})

        assert response.status_code == 500
        assert response.json()["reply"] == "Sorry, I encountered an error. Please try again."
        assert unconfigured == []


# ---------------------------------------------------------------------------
# Meta & health
# ---------------------------------------------------------------------------

class TestMeta:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_destinations(self, client):
        destinations = client.get("/meta/destinations").json()

        assert len(destinations) == 5
        assert destinations[0]["name"] == "Betla National Park"
        assert destinations[0]["coordinates"] == [84.1947, 23.8748]

    def test_destinations_by_category(self, client):
        response = client.get("/meta/destinations", params={"category": "Cultural Tourism"})

        names = [d["name"] for d in response.json()]
        assert names == ["Tribal Cultural Village", "Jagannath Temple Ranchi"]

    def test_unknown_category_is_400(self, client):
        assert client.get("/meta/destinations", params={"category": "Space"}).status_code == 400

    def test_preview_scenes(self, client):
        scenes = client.get("/meta/preview-scenes").json()
        assert [s["id"] for s in scenes] == ["forest", "waterfall", "village"]
