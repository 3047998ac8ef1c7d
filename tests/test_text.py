import json

import pytest

from pushwire.text import Text, json_escape


def test_create_holds_data():
    t = Text(b"hello")
    assert t.data == b"hello"
    assert len(t) == 5


def test_create_from_str_encodes_utf8():
    assert Text("héllo").data == "héllo".encode("utf-8")


def test_append_returns_same_text():
    t = Text(b"ab")
    assert t.append(b"cd") is t
    assert t.data == b"abcd"


def test_append_empty_is_noop():
    t = Text(b"ab")
    t.append(b"")
    assert t.data == b"ab"


def test_prepend():
    t = Text(b"world")
    t.prepend(b"hello ")
    assert t.data == b"hello world"


def test_prepend_then_append_order():
    t = Text(b"mid")
    t.prepend(b"<").append(b">")
    assert bytes(t) == b"<mid>"


def test_append_char_variants():
    t = Text()
    t.append_char("a").append_char(98).append_char(b"c")
    assert t.data == b"abc"


def test_append_char_rejects_multiple_bytes():
    with pytest.raises(ValueError):
        Text().append_char("ab")


def test_append_char_rejects_out_of_range():
    with pytest.raises(ValueError):
        Text().append_char(256)


def test_reset_clears():
    t = Text(b"data")
    t.reset()
    assert len(t) == 0
    assert t.data == b""


def test_copy_is_independent():
    t = Text(b"abc", binary=True)
    c = t.copy()
    c.append(b"d")
    assert t.data == b"abc"
    assert c.data == b"abcd"
    assert c.binary is False


def test_release_fresh_text_frees():
    t = Text(b"x")
    assert t.release() is True
    assert t.released is True


def test_ref_counting():
    t = Text(b"x")
    t.ref()
    t.ref()
    assert t.ref_count == 2
    assert t.release() is False
    assert t.release() is True


def test_json_escape_quote():
    assert json_escape(b'a"b') == b'a\\"b'


def test_json_escape_control_char():
    assert json_escape(b"\x01") == b"\\u0001"


def test_json_escape_plain_unchanged():
    assert json_escape(b"plain text 123") == b"plain text 123"


@pytest.mark.parametrize(
    "value",
    ["simple", 'quote " here', "back\\slash", "tab\tnew\nline\r", "\b\f\x00\x1f\x0b", "del\x7f"],
)
def test_append_json_round_trips(value):
    t = Text(b'"')
    t.append_json(value).append(b'"')
    assert json.loads(t.data.decode("utf-8")) == value


def test_append_json_utf8_round_trip():
    value = "naïve ☃"
    t = Text(b'"').append_json(value).append(b'"')
    assert json.loads(t.data.decode("utf-8")) == value