import pytest

from pushwire.text import Text
from pushwire.websocket import (
    FrameError,
    Opcode,
    accept_key,
    add_headers,
    calc_len,
    decode,
    expand,
)


def _mask_frame(payload, mask):
    assert len(payload) <= 125
    body = bytes(b ^ mask[i % 4] for i, b in enumerate(payload))
    return bytes((0x81, 0x80 | len(payload))) + mask + body


def test_accept_key_worked_example():
    assert accept_key("dGhlIHNhbXBsZSBub25jZQ==") == "s3pPLMBiTxaQ9kYGzzhZRbK+xOo="


def test_accept_key_str_and_bytes_agree():
    assert accept_key("abc") == accept_key(b"abc")


def test_add_headers_basic():
    text = add_headers({}, Text())
    assert text.data == b"Upgrade: websocket\r\nConnection: Upgrade\r\n"


def test_add_headers_with_key_and_protocol():
    key = "dGhlIHNhbXBsZSBub25jZQ=="
    text = add_headers({"sec-websocket-key": key, "Sec-WebSocket-Protocol": "chat"}, Text())
    expected_accept = b"Sec-WebSocket-Accept: " + accept_key(key).encode() + b"\r\n"
    assert expected_accept in text.data
    assert text.data.endswith(b"Sec-WebSocket-Protocol: chat\r\n")


def test_add_headers_skips_overlong_key():
    text = add_headers({"Sec-WebSocket-Key": "k" * 1000}, Text())
    assert b"Sec-WebSocket-Accept" not in text.data


def test_expand_small_text_frame():
    text = expand(Text(b"hi"))
    assert text.data == b"\x81\x02hi"


def test_expand_binary_opcode():
    text = expand(Text(b"\x00\x01", binary=True))
    assert text.data[0] & 0x0F == Opcode.BIN
    assert text.data[0] & 0x80


@pytest.mark.parametrize("size", [0, 5, 125, 126, 200, 0xFFFF, 70000])
def test_expand_decode_round_trip(size):
    payload = bytes(i % 251 for i in range(size))
    frame = expand(Text(payload)).data
    assert decode(frame) == payload


@pytest.mark.parametrize("size", [5, 125, 126, 300, 0x10000])
def test_calc_len_matches_frame_length(size):
    frame = expand(Text(b"x" * size)).data
    assert calc_len(frame) == len(frame)


def test_calc_len_from_header_only():
    frame = expand(Text(b"y" * 300)).data
    assert calc_len(frame[:6]) == len(frame)


def test_decode_masked_frame():
    payload = b"masked message"
    frame = _mask_frame(payload, b"\x12\x34\x56\x78")
    assert decode(frame) == payload
    assert calc_len(frame) == len(frame)


def test_calc_len_not_ready():
    assert calc_len(b"") is None
    assert calc_len(b"\x81\x05") is None
    assert calc_len(b"\x81\x7e\x01\x00") is None
    assert calc_len(b"\x81\x7f\x00\x00\x00") is None


def test_calc_len_requires_fin():
    with pytest.raises(FrameError):
        calc_len(b"\x01\x05hello")


def test_decode_incomplete_payload():
    frame = expand(Text(b"hello world")).data
    with pytest.raises(FrameError):
        decode(frame[:-3])


def test_decode_too_short():
    with pytest.raises(FrameError):
        decode(b"\x81")