from __future__ import annotations
import asyncio, logging, math
from functools import lru_cache, partial
from typing import List, Tuple
from faster_whisper import WhisperModel

from sarthi.lang import iso_for
from sarthi.settings import settings
from sarthi.utils.audio import cleanup_audio_file, convert_to_wav

logger = logging.getLogger("sarthi")


class CaptureError(RuntimeError):
    pass


@lru_cache(maxsize=1)
def _model()->WhisperModel:
    return WhisperModel(settings.whisper_model, device=settings.whisper_device, compute_type=settings.whisper_compute_type)

def _conf(segs: List)->float:
    probs=[]
    for s in segs:
        lp=getattr(s,"avg_logprob",-2.5)
        nsp=getattr(s,"no_speech_prob",0.0)
        try: p_lp=math.exp(lp) if lp<0 else 1.0
        except OverflowError: p_lp=0.2
        p=float(p_lp)*(1.0-float(nsp))
        probs.append(max(0.0,min(1.0,p)))
    return float(sum(probs)/len(probs)) if probs else 0.0

def transcribe_wav(wav_path: str, language_iso: str="hi")->Tuple[str,float]:
    model=_model()
    segments, _info = model.transcribe(
        wav_path,
        language=language_iso,
        task="transcribe",
        vad_filter=True,
        vad_parameters=dict(min_silence_duration_ms=350),
        beam_size=1,
        condition_on_previous_text=False,
        temperature=0.0
    )
    segs=list(segments)
    text=" ".join([(s.text or "").strip() for s in segs]).strip()
    conf=_conf(segs)
    if not text or conf<settings.stt_min_confidence:
        return "", 0.0
    return text, conf


class WhisperListener:
    """
    Single-shot voice capture backed by client-uploaded audio.

    ``listen()`` returns a task that waits for the next clip passed to ``feed()``,
    converts it to WAV and transcribes it in the session locale. Cancelling the
    task abandons the capture; clips fed while nobody listens are dropped.
    """

    def __init__(self):
        self._clips: asyncio.Queue[Tuple[bytes, str]] = asyncio.Queue()

    @property
    def available(self) -> bool:
        return (settings.stt_provider or "").strip().lower() == "whisper"

    def listen(self, locale: str) -> "asyncio.Future[str]":
        while not self._clips.empty():
            self._clips.get_nowait()
        return asyncio.ensure_future(self._capture(locale))

    def feed(self, audio_bytes: bytes, mime_type: str = "audio/webm") -> None:
        self._clips.put_nowait((audio_bytes, mime_type))

    async def _capture(self, locale: str) -> str:
        audio_bytes, mime_type = await self._clips.get()

        # Worker threads keep running after a cancel, so temp files are released
        # from done-callbacks once the worker is finished with them.
        conversion = asyncio.ensure_future(convert_to_wav(audio_bytes, mime_type=mime_type))
        try:
            wav_path = await asyncio.shield(conversion)
        except asyncio.CancelledError:
            conversion.add_done_callback(_discard_converted)
            raise

        transcription = asyncio.ensure_future(asyncio.to_thread(transcribe_wav, str(wav_path), iso_for(locale)))
        transcription.add_done_callback(partial(_release_wav, wav_path))
        text, conf = await asyncio.shield(transcription)

        logger.info("STT locale=%s chars=%d confidence=%.2f", locale, len(text), conf)
        if not (text or "").strip():
            raise CaptureError("Empty or low-confidence transcript")
        return text


def _discard_converted(fut: asyncio.Future) -> None:
    if fut.cancelled():
        return
    if fut.exception() is None:
        cleanup_audio_file(fut.result())


def _release_wav(wav_path, fut: asyncio.Future) -> None:
    cleanup_audio_file(wav_path)
    if not fut.cancelled() and fut.exception() is not None:
        logger.debug("Abandoned transcription failed: %s", fut.exception())
