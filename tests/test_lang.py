import pytest

from sarthi.lang import LOCALES, UI_TEXT, coerce_locale, iso_for, speech_tag, ui_text


@pytest.mark.parametrize("value, expected", [
    ("hi", "hi"), ("Hindi", "hi"), ("hi-IN", "hi"), ("हिंदी", "hi"),
    ("en", "en"), ("English", "en"), ("en_US", "en"), ("EN-gb", "en"),
])
def test_coerce_locale(value, expected):
    assert coerce_locale(value) == expected


def test_unknown_locale_uses_default():
    assert coerce_locale("fr", default="en") == "en"
    assert coerce_locale("", default="hi") == "hi"
    assert coerce_locale(None, default="en") == "en"


def test_speech_tags():
    assert speech_tag("hi") == "hi-IN"
    assert speech_tag("en") == "en-US"
    assert iso_for("Hindi") == "hi"


def test_ui_text_has_same_keys_per_locale():
    assert set(LOCALES) == set(UI_TEXT)
    assert set(UI_TEXT["hi"]) == set(UI_TEXT["en"])
    assert ui_text("en", "title") == "KUSUM Sarthi"
