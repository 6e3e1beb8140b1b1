"""
Notas de voz por WebSocket.

Protocolo (cliente -> servidor):
    {"type": "start", "mime_type"?: str, "transcribe"?: bool, "device_error"?: str}
    frames binarios con chunks de audio
    {"type": "stop"}
Servidor -> cliente:
    started / tick / recording_complete / transcript / error
"""
import json

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from app.api.deps import get_current_user_ws
from app.core.errors import ExternalCallError
from app.core.logger import get_module_logger
from app.schemas.auth import AuthUser
from app.services import groq
from app.services.voice_recorder import (
    AudioClip,
    CaptureError,
    DEFAULT_MIME_TYPE,
    VoiceRecorder,
    format_elapsed,
)

log = get_module_logger(__name__)

router = APIRouter()


class ClientStream:
    """El micrófono vive en el cliente: `device_error` indica que no se pudo abrir."""

    def __init__(self, device_error: str | None = None):
        self.device_error = device_error
        self.is_open = False

    async def open(self) -> None:
        if self.device_error:
            raise CaptureError(self.device_error)
        self.is_open = True

    async def close(self) -> None:
        self.is_open = False


@router.websocket("/ws/voice")
async def ws_voice(ws: WebSocket, user: AuthUser | None = Depends(get_current_user_ws)):
    if user is None:
        return
    await ws.accept()

    want_transcript = False

    async def on_tick(elapsed: int):
        await ws.send_json({"type": "tick", "elapsed": elapsed, "display": format_elapsed(elapsed)})

    async def on_error(message: str):
        await ws.send_json({"type": "error", "message": message})

    async def on_complete(clip: AudioClip):
        await ws.send_json({
            "type": "recording_complete",
            "size": clip.size,
            "mime_type": clip.mime_type,
            "duration_seconds": clip.duration_seconds,
        })
        if not want_transcript:
            return
        if not clip.size:
            await ws.send_json({"type": "error", "message": "No audio recorded"})
            return
        try:
            result = await groq.transcribe(clip.data, content_type=clip.mime_type)
        except ExternalCallError as exc:
            await ws.send_json({"type": "error", "message": exc.message})
            return
        await ws.send_json({"type": "transcript", **result})

    recorder = VoiceRecorder(on_complete, on_tick=on_tick, on_error=on_error)

    try:
        while True:
            msg = await ws.receive()
            if msg["type"] == "websocket.disconnect":
                break

            if msg.get("bytes") is not None:
                recorder.push(msg["bytes"])
                continue

            try:
                data = json.loads(msg.get("text") or "")
            except ValueError:
                await ws.send_json({"type": "error", "message": "Invalid message"})
                continue

            kind = data.get("type") if isinstance(data, dict) else None
            if kind == "start":
                want_transcript = bool(data.get("transcribe"))
                recorder.mime_type = data.get("mime_type") or DEFAULT_MIME_TYPE
                if await recorder.start(ClientStream(data.get("device_error"))):
                    await ws.send_json({"type": "started", "mime_type": recorder.mime_type})
            elif kind == "stop":
                await recorder.stop()
            else:
                await ws.send_json({"type": "error", "message": f"Unknown message type: {kind}"})
    except WebSocketDisconnect:
        pass
    finally:
        # nada actualiza el estado después de cerrar el socket
        await recorder.close()
        log.info("Voice socket closed for user %s", user.id)
