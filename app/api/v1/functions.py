"""
Relays sin estado hacia Groq (chat y transcripción).

Contrato de respuesta: siempre JSON `{error}` en los fallos (400 por input,
500 por configuración o upstream) y cabeceras CORS abiertas en todas las
respuestas, incluido el preflight OPTIONS.
"""
from fastapi import APIRouter, File, Request, UploadFile
from fastapi.responses import JSONResponse, Response

from app.core.config import settings
from app.core.errors import ExternalCallError
from app.core.logger import get_module_logger
from app.services import groq

log = get_module_logger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

router = APIRouter(prefix="/functions/v1", tags=["functions"])


def _json(body: dict, status_code: int = 200) -> JSONResponse:
    return JSONResponse(body, status_code=status_code, headers=CORS_HEADERS)


def _preflight() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)


# ---------- chat ----------
@router.options("/groq-chat")
async def groq_chat_preflight():
    return _preflight()


@router.post("/groq-chat")
async def groq_chat(request: Request):
    try:
        body = await request.json()
    except ValueError:
        return _json({"error": "Invalid JSON body"}, 400)

    messages = body.get("messages") if isinstance(body, dict) else None
    if not messages or not isinstance(messages, list):
        return _json({"error": "Messages array is required"}, 400)

    try:
        result = await groq.chat_completion(
            messages,
            model=body.get("model"),
            temperature=body.get("temperature", groq.DEFAULT_TEMPERATURE),
            max_tokens=body.get("max_tokens", groq.DEFAULT_MAX_TOKENS),
        )
    except ExternalCallError as exc:
        log.error("Error in groq-chat relay: %s", exc.message)
        return _json({"error": exc.message}, 500)
    except Exception as exc:
        log.exception("Error in groq-chat relay")
        return _json({"error": str(exc) or "An unknown error occurred"}, 500)

    log.info("Received response from Groq API")
    return _json(result)


# ---------- transcripción ----------
@router.options("/transcribe-audio")
async def transcribe_preflight():
    return _preflight()


@router.post("/transcribe-audio")
async def transcribe_audio(audio: UploadFile | None = File(None)):
    if not settings.GROQ_API_KEY:
        return _json({"error": groq.GroqNotConfiguredError.message}, 500)
    if audio is None:
        return _json({"error": "Audio file is required"}, 400)

    data = await audio.read()
    log.info("Audio file received, size: %d", len(data))
    try:
        result = await groq.transcribe(
            data,
            filename=audio.filename or "recording.webm",
            content_type=audio.content_type or "audio/webm",
        )
    except ExternalCallError as exc:
        log.error("Error in transcribe-audio relay: %s", exc.message)
        return _json({"error": exc.message}, 500)
    except Exception as exc:
        log.exception("Error in transcribe-audio relay")
        return _json({"error": str(exc) or "An unknown error occurred"}, 500)

    return _json(result)
