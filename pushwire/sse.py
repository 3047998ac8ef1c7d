"""Server-sent event framing."""

from .text import Text

_PREFIX = b"event: msg\ndata: "
_SUFFIX = b"\n\n"
_UPGRADE = (
    b"HTTP/1.1 200 OK\r\n"
    b"Content-Type: text/event-stream\r\n"
    b"Cache-Control: no-cache\r\n"
    b"Connection: keep-alive\r\n"
    b"\r\n"
    b"retry: 5\n\n"
)


def sse_upgrade(text: Text) -> Text:
    """Replace the contents of ``text`` with the event-stream upgrade response."""
    text.reset()
    return text.append(_UPGRADE)


def sse_expand(text: Text) -> Text:
    """Wrap the contents of ``text`` as a single ``msg`` event."""
    return text.prepend(_PREFIX).append(_SUFFIX)