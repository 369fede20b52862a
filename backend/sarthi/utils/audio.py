from __future__ import annotations
import asyncio, shutil, subprocess, tempfile
from functools import partial
from pathlib import Path

_TMP_PREFIX = "sarthi_audio_"

_EXT_BY_MIME = (
    ("webm", ".webm"),
    ("mp4", ".mp4"),
    ("m4a", ".mp4"),
    ("wav", ".wav"),
    ("mpeg", ".mp3"),
    ("mp3", ".mp3"),
    ("ogg", ".ogg"),
)


class AudioConversionError(RuntimeError):
    pass


def ext_for(mime_type: str) -> str:
    mt = (mime_type or "").lower()
    for needle, ext in _EXT_BY_MIME:
        if needle in mt:
            return ext
    return ".dat"

def _convert_sync(input_bytes: bytes, mime_type: str = "audio/webm") -> Path:
    if not input_bytes:
        raise AudioConversionError("No audio received")
    tmp_dir = Path(tempfile.mkdtemp(prefix=_TMP_PREFIX))
    in_path = tmp_dir / f"input{ext_for(mime_type)}"
    out_path = tmp_dir / "audio.wav"
    in_path.write_bytes(input_bytes)

    # 16 kHz mono PCM, what faster-whisper expects
    cmd = [
        "ffmpeg","-y","-hide_banner","-loglevel","error",
        "-i", str(in_path),
        "-vn","-ac","1","-ar","16000","-acodec","pcm_s16le",
        str(out_path)
    ]
    try:
        proc = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, check=False)
    except FileNotFoundError as exc:
        shutil.rmtree(tmp_dir, ignore_errors=True)
        raise AudioConversionError("ffmpeg is not installed") from exc
    if proc.returncode != 0 or not out_path.exists():
        err = proc.stderr.decode("utf-8", errors="ignore")[:800]
        shutil.rmtree(tmp_dir, ignore_errors=True)
        raise AudioConversionError(f"FFmpeg failed: {err}")
    return out_path

async def convert_to_wav(input_bytes: bytes, mime_type: str = "audio/webm") -> Path:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(_convert_sync, input_bytes, mime_type))

def cleanup_audio_file(file_path: Path | None):
    if not file_path:
        return
    parent = file_path.parent
    if parent.name.startswith(_TMP_PREFIX):
        shutil.rmtree(parent, ignore_errors=True)
