from __future__ import annotations
import re

_WS = re.compile(r"\s+")
_TRAILING_PUNCT = re.compile(r"[?!.]+$")


def normalize(raw: str) -> str:
    """
    Prepare user text for keyword matching.

    Collapses whitespace, strips a trailing run of ?, ! or . and lowercases.
    Internal punctuation, the danda and transliteration variants are kept as is;
    the keyword tables list spelling variants explicitly.
    """
    t = _WS.sub(" ", raw or "").strip()
    t = _TRAILING_PUNCT.sub("", t).strip()
    return t.lower()
