import pytest

from searchguard.sanitizers import BleachSanitizer, get_sanitizer


def test_clean_text_is_unchanged():
    s = BleachSanitizer()
    for text in (
        "hello world",
        "test123",
        "Is it (really) done? Yes, it is.",
        "salt & pepper",
        "a > b",
        "x\r\ny",
        "a\x00b",
    ):
        assert s.sanitize(text) == text


def test_allowed_tags_pass_through():
    assert BleachSanitizer().sanitize("<b>bold</b>") == "<b>bold</b>"


def test_disallowed_markup_is_escaped():
    out = BleachSanitizer().sanitize("<u>under</u>")
    assert out != "<u>under</u>"
    assert "&lt;u&gt;" in out


def test_script_is_neutralised():
    out = BleachSanitizer().sanitize("<script>alert(1)</script>")
    assert "<script>" not in out


def test_custom_tag_set_and_strip():
    assert BleachSanitizer(tags={"u"}).sanitize("<u>under</u>") == "<u>under</u>"
    assert BleachSanitizer(strip=True).sanitize("<u>under</u>") == "under"


def test_get_sanitizer():
    assert isinstance(get_sanitizer("bleach"), BleachSanitizer)
    assert isinstance(get_sanitizer(" Bleach "), BleachSanitizer)
    assert get_sanitizer("none") is None
    with pytest.raises(ValueError):
        get_sanitizer("dompurify")
