"""
Grabación de notas de voz.

El recorder acumula chunks de audio en memoria mientras está grabando y,
al parar, los empaqueta en un único AudioClip que entrega al handler de
finalización (exactamente una vez por grabación, aunque no haya llegado
ningún dato). Mientras graba, un contador de segundos avanza una vez por
segundo. No hay persistencia ni reintentos.
"""
import asyncio
import enum
import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Protocol

from app.core.logger import get_module_logger

log = get_module_logger(__name__)

DEFAULT_MIME_TYPE = "audio/webm"


class CaptureError(Exception):
    """El dispositivo de captura no pudo abrirse."""


class CaptureDevice(Protocol):
    async def open(self) -> None: ...
    async def close(self) -> None: ...


class RecorderState(str, enum.Enum):
    idle = "idle"
    recording = "recording"


@dataclass(frozen=True)
class AudioClip:
    data: bytes
    mime_type: str = DEFAULT_MIME_TYPE
    duration_seconds: int = 0

    @property
    def size(self) -> int:
        return len(self.data)


async def _maybe_await(result: Any) -> None:
    if inspect.isawaitable(result):
        await result


class VoiceRecorder:
    def __init__(
        self,
        on_complete: Callable[[AudioClip], Awaitable[None] | None],
        on_tick: Callable[[int], Awaitable[None] | None] | None = None,
        on_error: Callable[[str], Awaitable[None] | None] | None = None,
        mime_type: str = DEFAULT_MIME_TYPE,
        tick_interval: float = 1.0,
    ):
        self._on_complete = on_complete
        self._on_tick = on_tick
        self._on_error = on_error
        self.mime_type = mime_type
        self.tick_interval = tick_interval

        self.state = RecorderState.idle
        self.elapsed = 0
        self._chunks: list[bytes] = []
        self._device: CaptureDevice | None = None
        self._timer: asyncio.Task | None = None

    @property
    def is_recording(self) -> bool:
        return self.state == RecorderState.recording

    async def start(self, device: CaptureDevice) -> bool:
        if self.is_recording:
            return False
        try:
            await device.open()
        except Exception as exc:
            log.warning("Error accessing microphone: %s", exc)
            self.state = RecorderState.idle
            if self._on_error:
                await _maybe_await(self._on_error("Failed to access microphone"))
            return False

        self._device = device
        self._chunks = []
        self.elapsed = 0
        self.state = RecorderState.recording
        self._timer = asyncio.create_task(self._tick_loop())
        log.info("Recording started")
        return True

    def push(self, chunk: bytes) -> None:
        """Agrega un chunk; se ignoran vacíos o fuera de grabación."""
        if self.is_recording and chunk:
            self._chunks.append(bytes(chunk))

    async def stop(self) -> AudioClip | None:
        if not self.is_recording:
            return None
        self.state = RecorderState.idle
        await self._cancel_timer()

        clip = AudioClip(b"".join(self._chunks), self.mime_type, self.elapsed)
        self._chunks = []
        await self._release_device()

        log.info("Recording stopped (%d bytes, %ds)", clip.size, clip.duration_seconds)
        await _maybe_await(self._on_complete(clip))
        return clip

    async def close(self) -> None:
        """Teardown: corta el timer y libera el dispositivo sin entregar nada."""
        self.state = RecorderState.idle
        self._chunks = []
        await self._cancel_timer()
        await self._release_device()

    async def _tick_loop(self) -> None:
        while True:
            await asyncio.sleep(self.tick_interval)
            self.elapsed += 1
            if self._on_tick:
                await _maybe_await(self._on_tick(self.elapsed))

    async def _cancel_timer(self) -> None:
        timer, self._timer = self._timer, None
        if timer is None or timer is asyncio.current_task():
            return
        timer.cancel()
        try:
            await timer
        except asyncio.CancelledError:
            pass
        except Exception:
            log.warning("Tick loop ended with error", exc_info=True)

    async def _release_device(self) -> None:
        device, self._device = self._device, None
        if device is None:
            return
        try:
            await device.close()
        except Exception:
            log.warning("Error releasing capture device", exc_info=True)


def format_elapsed(seconds: int) -> str:
    """m:ss"""
    mins, secs = divmod(max(seconds, 0), 60)
    return f"{mins}:{secs:02d}"
