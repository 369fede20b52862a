from __future__ import annotations
from typing import Dict, Literal, get_args

from sarthi.settings import settings

Locale = Literal["hi","en"]

LOCALES = get_args(Locale)

_ALIASES = {
    "hi": "hi", "hin": "hi", "hindi": "hi", "हिंदी": "hi", "हिन्दी": "hi",
    "en": "en", "eng": "en", "english": "en",
}

# Whisper language codes
_ISO = {"hi": "hi", "en": "en"}

# Speech synthesis / recognition tags
_SPEECH_TAGS = {"hi": "hi-IN", "en": "en-US"}

UI_TEXT: Dict[str, Dict[str, str]] = {
    "hi": {
        "title": "कुसुम सारथी",
        "greeting": "नमस्ते किसान मित्र! कुसुम योजना के बारे में क्या जानना चाहते हैं?        आप पूछने के लिए वॉयस असिस्टेंट का भी उपयोग कर सकते हैं |!",
        "placeholder": "अपना सवाल यहाँ लिखें... (जैसे: लाभ, कागज़, सब्सिडी, सोलर खेती, धूप घंटे)",
        "send": "भेजें",
        "voice_unsupported": "इस डिवाइस पर वॉयस उपलब्ध नहीं है। कृपया अपना सवाल लिखकर भेजें।",
        "voice_start": "वॉयस शुरू करें",
        "voice_stop": "रिकॉर्डिंग बंद करें",
        "muted": "ध्वनि बंद",
        "unmuted": "ध्वनि चालू",
    },
    "en": {
        "title": "KUSUM Sarthi",
        "greeting": "Hello farmer friend! What would you like to know about the KUSUM scheme?       you can use voice assistant also to ask . !",
        "placeholder": "Type your question here... (e.g., benefits, documents, subsidy, sun hours)",
        "send": "Send",
        "voice_unsupported": "Voice not supported on this device. Please type your question.",
        "voice_start": "Start voice",
        "voice_stop": "Stop recording",
        "muted": "Muted",
        "unmuted": "Unmuted",
    },
}


def coerce_locale(value: str | None, default: str | None = None) -> Locale:
    """Map "hi", "Hindi", "hi-IN", "en_US" etc. onto a supported locale."""
    fallback = (default or settings.default_locale or "hi").strip().lower()
    t = (value or "").strip().lower().replace("_", "-")
    if not t:
        t = fallback
    t = _ALIASES.get(t) or _ALIASES.get(t.split("-")[0]) or _ALIASES.get(fallback, "hi")
    return t  # type: ignore[return-value]

def iso_for(locale: str) -> str:
    return _ISO.get(coerce_locale(locale), "hi")

def speech_tag(locale: str) -> str:
    return _SPEECH_TAGS[coerce_locale(locale)]

def ui_text(locale: str, key: str) -> str:
    return UI_TEXT[coerce_locale(locale)][key]
