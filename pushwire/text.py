"""Growable, reference-counted byte text used for responses and messages."""

from typing import Union

from .atomic import AtomicInt

Data = Union[bytes, bytearray, memoryview, str]

_HEX = "0123456789abcdef"
_SHORT_ESCAPES = {
    ord("\\"): b"\\\\",
    ord('"'): b'\\"',
    ord("\b"): b"\\b",
    ord("\t"): b"\\t",
    ord("\n"): b"\\n",
    ord("\f"): b"\\f",
    ord("\r"): b"\\r",
}


def _as_bytes(data: Data) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def _escape_byte(byte: int) -> bytes:
    short = _SHORT_ESCAPES.get(byte)
    if short is not None:
        return short
    if byte < 0x20:
        return f"\\u00{_HEX[byte >> 4]}{_HEX[byte & 0x0F]}".encode("ascii")
    return bytes((byte,))


def json_escape(data: Data) -> bytes:
    """Return ``data`` escaped for use inside a JSON string literal."""
    raw = _as_bytes(data)
    return b"".join(_escape_byte(b) for b in raw)


class Text:
    """A mutable byte buffer with a reference count and a binary marker."""

    def __init__(self, data: Data = b"", *, binary: bool = False) -> None:
        self._buf = bytearray(_as_bytes(data))
        self.binary = binary
        self._refs = AtomicInt(0)
        self.released = False

    @property
    def data(self) -> bytes:
        """The valid contents of the text."""
        return bytes(self._buf)

    @property
    def ref_count(self) -> int:
        return self._refs.load()

    def __len__(self) -> int:
        return len(self._buf)

    def __bytes__(self) -> bytes:
        return bytes(self._buf)

    def __repr__(self) -> str:
        return f"Text({bytes(self._buf)!r}, binary={self.binary})"

    def copy(self) -> "Text":
        """Return an independent copy of the contents; the copy is not marked binary."""
        return Text(self._buf)

    def ref(self) -> None:
        """Take one more reference."""
        self._refs.fetch_add(1)

    def release(self) -> bool:
        """Drop a reference and return True when it was the last one."""
        if self._refs.fetch_sub(1) <= 1:
            self.released = True
            return True
        return False

    def append(self, data: Data) -> "Text":
        """Add ``data`` to the end and return the text."""
        self._buf += _as_bytes(data)
        return self

    def append_char(self, char: Union[int, str, bytes]) -> "Text":
        """Add a single byte to the end and return the text."""
        if isinstance(char, int):
            if not 0 <= char <= 0xFF:
                raise ValueError(f"byte value out of range: {char}")
            self._buf.append(char)
            return self
        raw = _as_bytes(char)
        if len(raw) != 1:
            raise ValueError(f"expected a single byte, got {char!r}")
        self._buf += raw
        return self

    def prepend(self, data: Data) -> "Text":
        """Insert ``data`` at the start and return the text."""
        self._buf[0:0] = _as_bytes(data)
        return self

    def append_json(self, data: Data) -> "Text":
        """Add ``data`` escaped as JSON string content and return the text."""
        self._buf += json_escape(data)
        return self

    def reset(self) -> None:
        """Discard the contents."""
        self._buf.clear()