from __future__ import annotations
import os
from pydantic import Field
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    default_locale: str = Field(default=os.getenv("DEFAULT_LOCALE","hi"))

    stt_provider: str = Field(default=os.getenv("STT_PROVIDER","whisper"))
    tts_provider: str = Field(default=os.getenv("TTS_PROVIDER","mms"))

    whisper_model: str = Field(default=os.getenv("WHISPER_MODEL","medium"))
    whisper_device: str = Field(default=os.getenv("WHISPER_DEVICE","cpu"))
    whisper_compute_type: str = Field(default=os.getenv("WHISPER_COMPUTE_TYPE","int8"))
    stt_min_confidence: float = Field(default=float(os.getenv("STT_MIN_CONFIDENCE","0.18")))

    tts_model_hi: str = Field(default=os.getenv("TTS_MODEL_HI","facebook/mms-tts-hin"))
    tts_model_en: str = Field(default=os.getenv("TTS_MODEL_EN","facebook/mms-tts-eng"))
    tts_speaking_rate: float = Field(default=float(os.getenv("TTS_SPEAKING_RATE","0.95")))

    torch_num_threads: int = Field(default=int(os.getenv("TORCH_NUM_THREADS","4")))
    torch_num_interop_threads: int = Field(default=int(os.getenv("TORCH_NUM_INTEROP_THREADS","2")))

    # JSONL analytics file, appended synchronously by a logging.FileHandler; empty keeps events in the log only
    event_log_path: str = Field(default=os.getenv("EVENT_LOG_PATH",""))
    cors_origins: str = Field(default=os.getenv("CORS_ORIGINS","*"))
    log_level: str = Field(default=os.getenv("LOG_LEVEL","INFO"))

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()

try:
    import torch  # type: ignore
    torch.set_num_threads(settings.torch_num_threads)
    torch.set_num_interop_threads(settings.torch_num_interop_threads)
except Exception:
    pass
