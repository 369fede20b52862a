from __future__ import annotations
import asyncio, itertools, logging
from functools import partial
from typing import Any, Callable, Dict, List, Literal, Optional, Protocol

from pydantic import BaseModel, Field

from sarthi.events import log_event
from sarthi.intents import resolve
from sarthi.lang import Locale, coerce_locale, ui_text
from sarthi.normalize import normalize

logger = logging.getLogger("sarthi")

Emit = Callable[[str, Dict[str, Any]], None]
LogEvent = Callable[[str, Dict[str, Any]], None]


class Speaker(Protocol):
    def speak(self, text: str, locale: str) -> None: ...
    def cancel(self) -> None: ...


class Listener(Protocol):
    @property
    def available(self) -> bool: ...
    def listen(self, locale: str) -> "asyncio.Future[str]": ...


class Message(BaseModel):
    id: int
    role: Literal["user","bot"]
    text: str


class SessionState(BaseModel):
    locale: Locale = "hi"
    muted: bool = False
    listening: bool = False
    pending_input: str = ""
    transcript: List[Message] = Field(default_factory=list)


def _no_emit(event_type: str, payload: Dict[str, Any]) -> None:
    pass


class ChatSession:
    """
    Owns one conversation: transcript, mute/listening flags and the voice capture handle.

    All methods run on the event loop thread. Voice results come back through
    the capture future's done-callback and go through ``submit`` like typed text.
    """

    def __init__(
        self,
        state: SessionState | None = None,
        speaker: Speaker | None = None,
        listener: Listener | None = None,
        emit: Emit | None = None,
        log: LogEvent = log_event,
    ):
        self.state = state or SessionState()
        self.speaker = speaker
        self.listener = listener
        self.emit = emit or _no_emit
        self.log = log
        self._ids = itertools.count(max((m.id for m in self.state.transcript), default=0) + 1)
        self._capture: Optional[asyncio.Future] = None

    # --- lifecycle ---

    def start(self) -> None:
        if not self.state.transcript:
            self._append("bot", ui_text(self.state.locale, "greeting"))
        self.log("page_view", {"page": "chat", "locale": self.state.locale})

    def close(self) -> None:
        self.stop_listening()
        if self.speaker is not None:
            self.speaker.cancel()

    def set_locale(self, locale: str) -> None:
        new = coerce_locale(locale, default=self.state.locale)
        if new == self.state.locale:
            return
        self.stop_listening()
        self.state.locale = new
        self.emit("locale", {"locale": new})
        self.log("page_view", {"page": "chat", "locale": new})

    def set_muted(self, muted: bool) -> None:
        self.state.muted = bool(muted)
        if self.state.muted and self.speaker is not None:
            self.speaker.cancel()
        self.emit("muted", {"muted": self.state.muted})

    def toggle_mute(self) -> bool:
        self.set_muted(not self.state.muted)
        return self.state.muted

    # --- text ---

    def submit(self, raw_text: str) -> Optional[Message]:
        raw = (raw_text or "").strip()
        normalized = normalize(raw)
        if not normalized:
            return None

        locale = self.state.locale
        self.log("chat_send", {"locale": locale, "input_length": len(normalized)})
        answer = resolve(locale, normalized)

        self._append("user", raw)
        bot = self._append("bot", answer)
        self.state.pending_input = ""
        self._speak(answer)
        return bot

    def _append(self, role: str, text: str) -> Message:
        msg = Message(id=next(self._ids), role=role, text=text)
        self.state.transcript.append(msg)
        self.emit("message", msg.model_dump())
        return msg

    def _speak(self, text: str) -> None:
        if self.state.muted or self.speaker is None:
            return
        try:
            self.speaker.speak(text, self.state.locale)
        except Exception:
            logger.warning("Speech output failed", exc_info=True)

    # --- voice ---

    def start_listening(self) -> bool:
        if self.listener is None or not self.listener.available:
            self.emit("notice", {"text": ui_text(self.state.locale, "voice_unsupported")})
            return False

        self.stop_listening()
        try:
            handle = self.listener.listen(self.state.locale)
        except Exception:
            logger.warning("Could not start voice capture", exc_info=True)
            self.emit("notice", {"text": ui_text(self.state.locale, "voice_unsupported")})
            return False

        self._capture = handle
        self._set_listening(True)
        handle.add_done_callback(partial(self._on_capture_done, handle))
        return True

    def stop_listening(self) -> None:
        handle = self._capture
        if handle is None:
            return
        self._capture = None
        handle.cancel()
        self._set_listening(False)

    def _on_capture_done(self, handle: asyncio.Future, fut: asyncio.Future) -> None:
        if handle is not self._capture:
            # superseded or stopped; result is discarded
            return
        self._capture = None
        self._set_listening(False)
        if fut.cancelled():
            return
        exc = fut.exception()
        if exc is not None:
            logger.info("Voice capture ended without text: %s", exc)
            return
        text = fut.result() or ""
        self.state.pending_input = text
        self.submit(text)

    def _set_listening(self, value: bool) -> None:
        if self.state.listening != value:
            self.state.listening = value
            self.emit("listening", {"listening": value})
