from __future__ import annotations
import asyncio, io, logging
from functools import lru_cache
from typing import Awaitable, Callable, Optional, Tuple
import numpy as np
import soundfile as sf

from sarthi.lang import coerce_locale
from sarthi.settings import settings

logger = logging.getLogger("sarthi")

AudioSink = Callable[[bytes, str], Awaitable[None]]

def _model_id(locale: str) -> str:
    return settings.tts_model_en if coerce_locale(locale) == "en" else settings.tts_model_hi

@lru_cache(maxsize=2)
def _load(model_id: str):
    import torch
    from transformers import VitsModel, AutoTokenizer
    device="mps" if torch.backends.mps.is_available() else ("cuda" if torch.cuda.is_available() else "cpu")
    tok=AutoTokenizer.from_pretrained(model_id)
    model=VitsModel.from_pretrained(model_id)
    model.speaking_rate=settings.tts_speaking_rate
    model.to(device); model.eval()
    return device, tok, model

def _silence(sr: int = 16000) -> bytes:
    buf=io.BytesIO()
    sf.write(buf, np.zeros(sr,dtype=np.float32), sr, format="WAV")
    return buf.getvalue()

def synth_mms(text: str, locale: str="hi")->Tuple[bytes,str]:
    # markdown emphasis is for the chat bubble only
    text=(text or "").replace("**","").strip()
    if not text:
        return _silence(), "audio/wav"
    device, tok, model=_load(_model_id(locale))
    import torch
    inputs=tok(text, return_tensors="pt")
    inputs={k:v.to(device) for k,v in inputs.items()}
    with torch.no_grad():
        wav=model(**inputs).waveform[0].detach().cpu().numpy().astype(np.float32)
    sr=int(getattr(model.config,"sampling_rate",16000) or 16000)
    buf=io.BytesIO()
    sf.write(buf, wav, sr, format="WAV")
    return buf.getvalue(), "audio/wav"


class MmsSpeaker:
    """Fire-and-forget speech: each call supersedes the audio of the previous one."""

    def __init__(self, sink: AudioSink, synth: Callable[[str, str], Tuple[bytes, str]] = synth_mms):
        self._sink = sink
        self._synth = synth
        self._task: Optional[asyncio.Task] = None

    @property
    def available(self) -> bool:
        return (settings.tts_provider or "").strip().lower() == "mms"

    def speak(self, text: str, locale: str) -> None:
        self.cancel()
        if not self.available:
            return
        self._task = asyncio.ensure_future(self._render(text, locale))

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _render(self, text: str, locale: str) -> None:
        try:
            audio, mime = await asyncio.to_thread(self._synth, text, locale)
            await self._sink(audio, mime)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("TTS failed locale=%s", locale)
