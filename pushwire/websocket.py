"""WebSocket handshake headers and frame encoding and decoding."""

import base64
from enum import IntEnum
from typing import Mapping, Optional, Union

from .sha1 import sha1
from .text import Text

MAX_KEY_LEN = 1024

_UP_CON = b"Upgrade: websocket\r\nConnection: Upgrade\r\n"
_WS_MAGIC = b"258EAFA5-E914-47DA-95CA-C5AB0DC85B11"
_WS_PROTOCOL = b"Sec-WebSocket-Protocol: "
_WS_ACCEPT = b"Sec-WebSocket-Accept: "

Bytesish = Union[bytes, bytearray, memoryview]
HeaderValue = Union[str, bytes]


class Opcode(IntEnum):
    """WebSocket frame opcodes."""

    CONT = 0x00
    TEXT = 0x01
    BIN = 0x02
    CLOSE = 0x08
    PING = 0x09
    PONG = 0x0A


class FrameError(ValueError):
    """Raised when a frame is malformed or unsupported."""


def _as_bytes(value: HeaderValue) -> bytes:
    if isinstance(value, str):
        return value.encode("latin-1")
    return bytes(value)


def _header(headers: Mapping[str, HeaderValue], name: str) -> Optional[bytes]:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return _as_bytes(value)
    return None


def accept_key(key: HeaderValue) -> str:
    """Return the Sec-WebSocket-Accept value for a Sec-WebSocket-Key."""
    digest = sha1(_as_bytes(key) + _WS_MAGIC)
    return base64.b64encode(digest).decode("ascii")


def add_headers(headers: Mapping[str, HeaderValue], text: Text) -> Text:
    """Append the upgrade response headers for a request's ``headers`` to ``text``."""
    text.append(_UP_CON)
    key = _header(headers, "Sec-WebSocket-Key")
    if key is not None and len(key) + len(_WS_MAGIC) + 1 < MAX_KEY_LEN:
        text.append(_WS_ACCEPT).append(accept_key(key)).append(b"\r\n")
    protocol = _header(headers, "Sec-WebSocket-Protocol")
    if protocol is not None:
        text.append(_WS_PROTOCOL).append(protocol).append(b"\r\n")
    return text


def expand(text: Text) -> Text:
    """Prefix ``text`` with an unmasked, final frame header."""
    opcode = Opcode.BIN if text.binary else Opcode.TEXT
    length = len(text)
    header = bytearray((0x80 | opcode,))
    if length <= 125:
        header.append(length)
    elif length <= 0xFFFF:
        header.append(0x7E)
        header += length.to_bytes(2, "big")
    else:
        header.append(0x7F)
        header += length.to_bytes(8, "big")
    return text.prepend(header)


def _payload_info(buf: bytes):
    """Return (masked, payload length, offset after length field) or None if short."""
    masked = bool(buf[1] & 0x80)
    plen = buf[1] & 0x7F
    offset = 2
    if plen == 126:
        if len(buf) < 4:
            return None
        plen = int.from_bytes(buf[2:4], "big")
        offset = 4
    elif plen == 127:
        if len(buf) < 10:
            return None
        plen = int.from_bytes(buf[2:10], "big")
        offset = 10
    return masked, plen, offset


def decode(buf: Bytesish) -> bytes:
    """Return the payload of a complete frame, unmasked when needed."""
    data = bytes(buf)
    if len(data) < 2:
        raise FrameError("frame header is incomplete")
    info = _payload_info(data)
    if info is None:
        raise FrameError("frame length is incomplete")
    masked, plen, offset = info
    if masked:
        mask = data[offset:offset + 4]
        if len(mask) < 4:
            raise FrameError("frame mask is incomplete")
        offset += 4
    payload = data[offset:offset + plen]
    if len(payload) < plen:
        raise FrameError("frame payload is incomplete")
    if masked:
        payload = bytes(b ^ mask[i % 4] for i, b in enumerate(payload))
    return payload


def calc_len(buf: Bytesish) -> Optional[int]:
    """Return the full length of the frame at the start of ``buf``.

    Returns None when not enough has been read to tell, and raises
    FrameError for a frame without the FIN bit, as continuation frames are
    not supported.
    """
    data = bytes(buf)
    if not data:
        return None
    if not data[0] & 0x80:
        raise FrameError("FIN must be 1; websocket continuation is not supported")
    if len(data) < 3:
        return None
    code = data[1] & 0x7F
    if code == 126 and len(data) < 5:
        return None
    if code == 127 and len(data) < 11:
        return None
    masked, plen, offset = _payload_info(data)
    return offset + (4 if masked else 0) + plen