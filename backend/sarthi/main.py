from __future__ import annotations
import asyncio, base64, binascii, contextlib, json, logging
from typing import Any, Dict, Optional
from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from sarthi.settings import settings
from sarthi.lang import coerce_locale, ui_text
from sarthi.intents import explain
from sarthi.normalize import normalize
from sarthi.session import ChatSession, SessionState
from sarthi.stt.whisper_stt import WhisperListener
from sarthi.tts.mms_tts import MmsSpeaker

logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger("sarthi")

app = FastAPI(title="KUSUM Sarthi")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()] or ["*"],
    allow_credentials=True, allow_methods=["*"], allow_headers=["*"],
)

@app.get("/health")
def health():
    return {"ok": True, "stt": settings.stt_provider, "tts": settings.tts_provider, "locale": settings.default_locale}


class ResolveRequest(BaseModel):
    text: str
    locale: Optional[str] = None

@app.post("/resolve")
def resolve_text(req: ResolveRequest):
    locale = coerce_locale(req.locale)
    result = explain(locale, normalize(req.text))
    return result.model_dump()


async def stop_sender(task: asyncio.Task) -> None:
    """Cancel the outbox pump and collect whatever ended it."""
    task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        try:
            await task
        except Exception:
            logger.warning("WS sender failed", exc_info=True)


@app.websocket("/ws")
async def ws_endpoint(ws: WebSocket):
    await ws.accept()
    logger.info("WS connected")

    outbox: asyncio.Queue[Dict[str, Any]] = asyncio.Queue()

    def emit(event_type: str, payload: Dict[str, Any]) -> None:
        outbox.put_nowait({"type": event_type, **payload})

    async def pump():
        while True:
            frame = await outbox.get()
            await ws.send_text(json.dumps(frame, ensure_ascii=False))

    async def speech_sink(audio: bytes, mime: str) -> None:
        emit("speech", {"audioB64": base64.b64encode(audio).decode("utf-8"), "mime": mime})

    listener = WhisperListener()
    speaker = MmsSpeaker(speech_sink)
    session: Optional[ChatSession] = None
    sender = asyncio.create_task(pump())

    try:
        while True:
            raw = await ws.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                emit("error", {"message": "invalid JSON"})
                continue
            if not isinstance(msg, dict):
                emit("error", {"message": "expected an object"})
                continue
            kind = msg.get("type")

            if kind == "hello" or session is None:
                if session is not None:
                    session.close()
                state = SessionState(locale=coerce_locale(msg.get("locale")), muted=bool(msg.get("muted", False)))
                session = ChatSession(state=state, speaker=speaker, listener=listener, emit=emit)
                session_id = msg.get("sessionId") or "sess_default"
                emit("hello_ack", {
                    "sessionId": session_id,
                    "locale": state.locale,
                    "title": ui_text(state.locale, "title"),
                    "placeholder": ui_text(state.locale, "placeholder"),
                    "muted": state.muted,
                })
                session.start()
                if kind == "hello":
                    continue

            try:
                if kind == "text":
                    session.submit(str(msg.get("text") or ""))
                elif kind == "locale":
                    session.set_locale(str(msg.get("locale") or ""))
                elif kind == "mute":
                    muted = msg.get("muted")
                    if muted is None:
                        session.toggle_mute()
                    elif isinstance(muted, bool):
                        session.set_muted(muted)
                    else:
                        emit("error", {"message": "muted must be true or false"})
                elif kind == "voice_start":
                    session.start_listening()
                elif kind == "voice_stop":
                    session.stop_listening()
                elif kind == "audio":
                    if not session.state.listening:
                        logger.debug("Audio received while not listening; dropped")
                        continue
                    audio_bytes = base64.b64decode(msg.get("data") or "", validate=True)
                    listener.feed(audio_bytes, mime_type=msg.get("mimeType") or "audio/webm")
                else:
                    emit("error", {"message": f"unknown message type: {kind}"})
            except binascii.Error:
                emit("error", {"message": "audio must be base64"})
            except Exception as e:
                logger.exception("Turn error")
                emit("error", {"message": str(e)})

    except WebSocketDisconnect:
        logger.info("WS disconnected")
    finally:
        if session is not None:
            session.close()
        speaker.cancel()
        await stop_sender(sender)
