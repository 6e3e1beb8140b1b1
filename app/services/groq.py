"""
Cliente de Groq (API compatible con OpenAI): chat completions y Whisper.
"""
from typing import Any

import httpx

from app.core.config import settings
from app.core.errors import ExternalCallError
from app.core.logger import get_module_logger

log = get_module_logger(__name__)

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1000
TRANSCRIPTION_LANGUAGE = "en"


class GroqNotConfiguredError(ExternalCallError):
    code = "groq_not_configured"
    message = "Groq API key not configured"


def _make_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=settings.GROQ_BASE_URL, timeout=settings.GROQ_TIMEOUT_SECONDS)


def _auth_headers() -> dict[str, str]:
    if not settings.GROQ_API_KEY:
        raise GroqNotConfiguredError()
    return {"Authorization": f"Bearer {settings.GROQ_API_KEY}"}


async def chat_completion(
    messages: list[dict[str, Any]],
    model: str | None = None,
    temperature: float = DEFAULT_TEMPERATURE,
    max_tokens: int = DEFAULT_MAX_TOKENS,
) -> dict[str, Any]:
    """
    Devuelve {message, usage, model}. Cualquier respuesta no-2xx o con
    cuerpo inesperado levanta ExternalCallError.
    """
    headers = _auth_headers()
    payload = {
        "model": model or settings.GROQ_CHAT_MODEL,
        "messages": messages,
        "temperature": temperature,
        "max_tokens": max_tokens,
    }
    log.info("Sending request to Groq API (model=%s, %d messages)", payload["model"], len(messages))

    try:
        async with _make_client() as client:
            r = await client.post("/chat/completions", json=payload, headers=headers)
    except httpx.HTTPError as exc:
        log.error("Groq API request failed: %s", exc)
        raise ExternalCallError(f"Groq API error: {exc}")

    if r.status_code != 200:
        log.error("Groq API error: %s %s", r.status_code, r.text)
        raise ExternalCallError(f"Groq API returned error status: {r.status_code}")

    try:
        data = r.json()
        content = data["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError):
        log.error("Invalid response format from Groq API: %s", r.text)
        raise ExternalCallError("Invalid response structure from Groq API")

    return {"message": content, "usage": data.get("usage"), "model": data.get("model")}


async def transcribe(
    audio: bytes,
    filename: str = "recording.webm",
    content_type: str = "audio/webm",
    model: str | None = None,
    language: str = TRANSCRIPTION_LANGUAGE,
) -> dict[str, Any]:
    headers = _auth_headers()
    if not audio:
        raise ExternalCallError("Audio file is empty")

    data = {
        "model": model or settings.GROQ_TRANSCRIPTION_MODEL,
        "language": language,
        "response_format": "json",
    }
    log.info("Sending %d bytes to Groq transcription (model=%s)", len(audio), data["model"])

    try:
        async with _make_client() as client:
            r = await client.post(
                "/audio/transcriptions",
                data=data,
                files={"file": (filename, audio, content_type)},
                headers=headers,
            )
    except httpx.HTTPError as exc:
        log.error("Groq transcription request failed: %s", exc)
        raise ExternalCallError(f"Groq API error: {exc}")

    if r.status_code != 200:
        log.error("Groq transcription error: %s %s", r.status_code, r.text)
        raise ExternalCallError(f"Transcription failed: {r.status_code}")

    try:
        text = r.json()["text"]
    except (ValueError, KeyError, TypeError):
        raise ExternalCallError("Invalid response structure from Groq API")

    return {"transcript": (text or "").strip(), "language": language}
