"""SHA-1 digest, as used for the WebSocket handshake."""

import struct
from typing import Union

DIGEST_SIZE = 20

_H0 = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0)
_MASK = 0xFFFFFFFF


def _rol(value: int, bits: int) -> int:
    return ((value << bits) | (value >> (32 - bits))) & _MASK


def _transform(state: list, block: bytes) -> None:
    w = list(struct.unpack(">16I", block))
    for i in range(16, 80):
        w.append(_rol(w[i - 3] ^ w[i - 8] ^ w[i - 14] ^ w[i - 16], 1))
    a, b, c, d, e = state
    for i, word in enumerate(w):
        if i < 20:
            f = (b & (c ^ d)) ^ d
            k = 0x5A827999
        elif i < 40:
            f = b ^ c ^ d
            k = 0x6ED9EBA1
        elif i < 60:
            f = ((b | c) & d) | (b & c)
            k = 0x8F1BBCDC
        else:
            f = b ^ c ^ d
            k = 0xCA62C1D6
        temp = (_rol(a, 5) + f + e + k + word) & _MASK
        e, d, c, b, a = d, c, _rol(b, 30), a, temp
    for i, v in enumerate((a, b, c, d, e)):
        state[i] = (state[i] + v) & _MASK


def sha1(data: Union[bytes, bytearray, memoryview]) -> bytes:
    """Return the 20 byte SHA-1 digest of ``data``."""
    raw = bytes(data)
    bit_len = (len(raw) * 8) & 0xFFFFFFFFFFFFFFFF
    padding = b"\x80" + b"\x00" * ((55 - len(raw)) % 64)
    message = raw + padding + struct.pack(">Q", bit_len)
    state = list(_H0)
    for offset in range(0, len(message), 64):
        _transform(state, message[offset:offset + 64])
    return struct.pack(">5I", *state)