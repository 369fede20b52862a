import pytest

from sarthi.normalize import normalize


@pytest.mark.parametrize("raw, expected", [
    ("  What   documents are required??  ", "what documents are required"),
    ("Hello ?", "hello"),
    ("Hi...!", "hi"),
    ("kya?! ok.", "kya?! ok"),
    ("लाभ क्या है।", "लाभ क्या है।"),
    ("कितनी   जमीन\tचाहिए?", "कितनी जमीन चाहिए"),
    ("PM KUSUM Scheme", "pm kusum scheme"),
])
def test_normalize(raw, expected):
    assert normalize(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "\n\t ", "???", " ?!. ", None])
def test_blank_input_normalizes_to_empty(raw):
    assert normalize(raw) == ""


def test_normalize_is_idempotent():
    once = normalize("  Who can   APPLY?? ")
    assert normalize(once) == once
