"""Speech output and voice capture adapters with the heavy models stubbed out."""
import asyncio
import tempfile
import time
from pathlib import Path

import pytest

from sarthi.stt import whisper_stt
from sarthi.stt.whisper_stt import CaptureError, WhisperListener
from sarthi.tts.mms_tts import MmsSpeaker
from sarthi.utils import audio
from sarthi.utils.audio import AudioConversionError, cleanup_audio_file, ext_for


@pytest.mark.parametrize("mime, ext", [
    ("audio/webm;codecs=opus", ".webm"),
    ("audio/mp4", ".mp4"),
    ("audio/x-m4a", ".mp4"),
    ("audio/wav", ".wav"),
    ("audio/mpeg", ".mp3"),
    ("audio/ogg", ".ogg"),
    ("", ".dat"),
])
def test_ext_for(mime, ext):
    assert ext_for(mime) == ext


def test_empty_audio_is_rejected():
    with pytest.raises(AudioConversionError):
        audio._convert_sync(b"")


def test_cleanup_ignores_foreign_paths(tmp_path):
    f = tmp_path / "keep.wav"
    f.write_bytes(b"x")
    cleanup_audio_file(f)
    cleanup_audio_file(None)
    assert f.exists()


@pytest.mark.asyncio
async def test_speaker_latest_call_wins():
    played = []

    def synth(text, locale):
        return text.encode("utf-8"), "audio/wav"

    async def sink(data, mime):
        played.append((data.decode("utf-8"), mime))

    speaker = MmsSpeaker(sink, synth=synth)
    speaker.speak("first", "hi")
    speaker.speak("second", "hi")
    await asyncio.sleep(0.2)

    assert played == [("second", "audio/wav")]


@pytest.mark.asyncio
async def test_speaker_cancel_stops_playback():
    played = []

    async def sink(data, mime):
        played.append(data)

    speaker = MmsSpeaker(sink, synth=lambda t, l: (b"x", "audio/wav"))
    speaker.speak("hello", "en")
    speaker.cancel()
    await asyncio.sleep(0.1)

    assert played == []


@pytest.mark.asyncio
async def test_speaker_synth_failure_is_logged(caplog):
    def synth(text, locale):
        raise RuntimeError("model missing")

    async def sink(data, mime):
        raise AssertionError("should not play")

    speaker = MmsSpeaker(sink, synth=synth)
    speaker.speak("hello", "en")
    await asyncio.sleep(0.2)

    assert any("TTS failed" in r.getMessage() for r in caplog.records)


@pytest.fixture()
def fake_pipeline(monkeypatch, tmp_path):
    seen = {}

    async def fake_convert(data, mime_type="audio/webm"):
        seen["mime"] = mime_type
        p = tmp_path / "audio.wav"
        p.write_bytes(data)
        return p

    def fake_transcribe(path, language_iso="hi"):
        seen["language"] = language_iso
        text = Path(path).read_bytes().decode("utf-8")
        return (text, 0.9) if text else ("", 0.0)

    monkeypatch.setattr(whisper_stt, "convert_to_wav", fake_convert)
    monkeypatch.setattr(whisper_stt, "transcribe_wav", fake_transcribe)
    return seen


@pytest.mark.asyncio
async def test_listener_transcribes_next_clip(fake_pipeline):
    listener = WhisperListener()
    handle = listener.listen("en")
    listener.feed("what documents".encode("utf-8"), mime_type="audio/ogg")

    assert await handle == "what documents"
    assert fake_pipeline == {"mime": "audio/ogg", "language": "en"}


@pytest.mark.asyncio
async def test_listener_empty_transcript_raises(fake_pipeline):
    listener = WhisperListener()
    handle = listener.listen("hi")
    listener.feed(b"")

    with pytest.raises(CaptureError):
        await handle


@pytest.mark.asyncio
async def test_listener_drops_stale_clips(fake_pipeline):
    listener = WhisperListener()
    listener.feed(b"old clip")
    handle = listener.listen("hi")
    listener.feed("नया".encode("utf-8"))

    assert await handle == "नया"


def _temp_wav(tmp_path, data, made):
    out = Path(tempfile.mkdtemp(prefix="sarthi_audio_", dir=tmp_path)) / "audio.wav"
    out.write_bytes(data)
    made.append(out.parent)
    return out


def _slow_convert(tmp_path, made):
    def convert(data, mime_type="audio/webm"):
        time.sleep(0.2)
        return _temp_wav(tmp_path, data, made)
    return convert


@pytest.mark.asyncio
async def test_cancel_during_conversion_removes_temp_dir(monkeypatch, tmp_path):
    made = []
    monkeypatch.setattr(audio, "_convert_sync", _slow_convert(tmp_path, made))
    monkeypatch.setattr(whisper_stt, "transcribe_wav", lambda path, language_iso="hi": ("unused", 0.9))

    listener = WhisperListener()
    handle = listener.listen("hi")
    listener.feed(b"clip")
    await asyncio.sleep(0.05)
    handle.cancel()
    await asyncio.sleep(0.4)

    assert handle.cancelled()
    assert len(made) == 1
    assert not made[0].exists()


@pytest.mark.asyncio
async def test_cancel_during_transcription_keeps_wav_until_worker_is_done(monkeypatch, tmp_path):
    made, readable = [], []

    async def fast_convert(data, mime_type="audio/webm"):
        return _temp_wav(tmp_path, data, made)

    def slow_transcribe(path, language_iso="hi"):
        time.sleep(0.2)
        readable.append(Path(path).exists())
        return "late text", 0.9

    monkeypatch.setattr(whisper_stt, "convert_to_wav", fast_convert)
    monkeypatch.setattr(whisper_stt, "transcribe_wav", slow_transcribe)

    listener = WhisperListener()
    handle = listener.listen("en")
    listener.feed(b"clip")
    await asyncio.sleep(0.05)
    handle.cancel()
    await asyncio.sleep(0.4)

    assert handle.cancelled()
    assert readable == [True]
    assert not made[0].exists()
