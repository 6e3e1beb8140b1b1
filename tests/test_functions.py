from __future__ import annotations

import json

import httpx
import pytest

from app.core.config import settings
from app.services import groq


@pytest.fixture
def groq_upstream(monkeypatch):
    """Reemplaza el cliente HTTP de Groq por un MockTransport configurable."""
    state = {"requests": [], "response": httpx.Response(200, json={})}

    def handler(request: httpx.Request) -> httpx.Response:
        state["requests"].append(request)
        return state["response"]

    def make_client():
        return httpx.AsyncClient(base_url=settings.GROQ_BASE_URL, transport=httpx.MockTransport(handler))

    monkeypatch.setattr(groq, "_make_client", make_client)
    return state


def test_preflight_has_permissive_cors(client):
    r = client.options("/functions/v1/groq-chat")
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "*"
    assert r.headers["access-control-allow-headers"] == "authorization, x-client-info, apikey, content-type"


@pytest.mark.parametrize("body", [{}, {"messages": []}, {"messages": "hi"}, ["not", "an", "object"]])
def test_messages_are_required(client, groq_upstream, body):
    r = client.post("/functions/v1/groq-chat", json=body)
    assert r.status_code == 400
    assert r.json() == {"error": "Messages array is required"}
    assert r.headers["access-control-allow-origin"] == "*"
    assert groq_upstream["requests"] == []


def test_missing_api_key(client, groq_upstream, monkeypatch):
    monkeypatch.setattr(settings, "GROQ_API_KEY", None)
    r = client.post("/functions/v1/groq-chat", json={"messages": [{"role": "user", "content": "hi"}]})
    assert r.status_code == 500
    assert r.json() == {"error": "Groq API key not configured"}
    assert groq_upstream["requests"] == []


def test_chat_success_uses_defaults(client, groq_upstream):
    groq_upstream["response"] = httpx.Response(200, json={
        "choices": [{"message": {"role": "assistant", "content": "Drink water and rest."}}],
        "usage": {"total_tokens": 42},
        "model": "llama3-8b-8192",
    })

    r = client.post("/functions/v1/groq-chat", json={"messages": [{"role": "user", "content": "I have a cold"}]})

    assert r.status_code == 200
    assert r.json() == {"message": "Drink water and rest.", "usage": {"total_tokens": 42}, "model": "llama3-8b-8192"}
    (req,) = groq_upstream["requests"]
    assert req.url.path.endswith("/chat/completions")
    assert req.headers["authorization"] == f"Bearer {settings.GROQ_API_KEY}"
    sent = json.loads(req.content)
    assert sent["model"] == "llama3-8b-8192"
    assert sent["temperature"] == 0.7
    assert sent["max_tokens"] == 1000


def test_upstream_error_status(client, groq_upstream):
    groq_upstream["response"] = httpx.Response(503, text="overloaded")
    r = client.post("/functions/v1/groq-chat", json={"messages": [{"role": "user", "content": "hi"}]})
    assert r.status_code == 500
    assert r.json() == {"error": "Groq API returned error status: 503"}


def test_malformed_upstream_body(client, groq_upstream):
    groq_upstream["response"] = httpx.Response(200, json={"choices": []})
    r = client.post("/functions/v1/groq-chat", json={"messages": [{"role": "user", "content": "hi"}]})
    assert r.status_code == 500
    assert r.json() == {"error": "Invalid response structure from Groq API"}


def test_transcription_relay(client, groq_upstream):
    groq_upstream["response"] = httpx.Response(200, json={"text": " I have a headache. "})

    r = client.post("/functions/v1/transcribe-audio",
                    files={"audio": ("note.webm", b"fake-webm", "audio/webm")})

    assert r.status_code == 200
    assert r.json() == {"transcript": "I have a headache.", "language": "en"}
    (req,) = groq_upstream["requests"]
    assert req.url.path.endswith("/audio/transcriptions")
    assert b"whisper-large-v3-turbo" in req.content


def test_transcription_requires_audio(client, groq_upstream):
    r = client.post("/functions/v1/transcribe-audio", data={"other": "x"})
    assert r.status_code == 400
    assert r.json() == {"error": "Audio file is required"}


def test_transcription_upstream_failure(client, groq_upstream):
    groq_upstream["response"] = httpx.Response(401, text="bad key")
    r = client.post("/functions/v1/transcribe-audio", files={"audio": ("a.webm", b"x", "audio/webm")})
    assert r.status_code == 500
    assert r.json() == {"error": "Transcription failed: 401"}
