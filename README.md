# pushwire

`pushwire` holds the pieces a server needs once an HTTP connection stops
being plain request/response and becomes a push channel. That channel is
either a WebSocket or a server-sent event stream. The package uses only the
standard library.

## Install

```
pip install pushwire
```

To run the tests:

```
pip install "pushwire[test]"
pytest
```

## What is in it

- `pushwire.text`
  - `Text` is a growable byte buffer. It carries a reference count and a
    `binary` marker.
  - It has the methods `append`, `append_char`, `prepend`, `append_json`,
    `reset`, `copy`, `ref` and `release`.
  - `release` returns `True` when the last reference is dropped.
  - `json_escape` escapes bytes or text for use inside a JSON string.
- `pushwire.sha1`
  - `sha1` returns the 20-byte SHA-1 digest of a byte string.
- `pushwire.websocket`
  - `accept_key` returns the `Sec-WebSocket-Accept` value as a string.
  - `add_headers` appends the upgrade headers for a request's header
    mapping to a `Text`.
  - `expand` prefixes a `Text` with an unmasked, final frame header. The
    frame uses the binary opcode when `text.binary` is set.
  - `calc_len` returns the full length of the frame at the start of a
    buffer. It returns `None` when too little has been read.
  - `decode` returns a frame's payload, unmasked when the frame is masked.
  - `FrameError` is raised for a frame without FIN, since continuation
    frames are not supported. `decode` also raises it for a truncated frame.
  - `Opcode` lists the frame opcodes.
- `pushwire.sse`
  - `sse_upgrade` replaces a `Text` with the event-stream response head.
  - `sse_expand` wraps a `Text` as a single `msg` event.
- `pushwire.subject`
  - `subject_matches` and `Subject.check` match dotted subjects against
    patterns.
  - In a pattern, `*` matches the rest of one dot-separated token and `>`
    matches everything that follows.
- `pushwire.upgraded`
  - `Upgraded` represents an upgraded connection. It holds the connection's
    subscribed patterns, its reference count and its count of pending
    publications.
  - `write`, `subscribe`, `unsubscribe` and `close` queue a `Publication`
    of the matching `PubKind`.
  - `write` returns `False` and drops a reference when `max_push_pending`
    publications are already pending.
  - `Registry` tracks upgraded connections. `publish` puts each publication
    on every loop's queue: the last loop gets the original and the others
    get copies. A loop collects its share with `Registry.drain(index)`.
- `pushwire.atomic`
  - `AtomicInt` is a lock-protected integer.
  - `AtomicFlag` is a flag with a lock-protected `test_and_set` and `clear`.
- `pushwire.kinds`
  - `ConKind` and `Method` are the enumerations for connection kinds and
    request methods.

## Example

```python
from pushwire.text import Text
from pushwire.websocket import accept_key, expand, decode, calc_len
from pushwire.subject import subject_matches

print(accept_key(b"dGhlIHNhbXBsZSBub25jZQ=="))
# s3pPLMBiTxaQ9kYGzzhZRbK+xOo=

frame = expand(Text(b"hello")).data
assert calc_len(frame) == len(frame)
assert decode(frame) == b"hello"

assert subject_matches("news.*.today", "news.sports.today")
assert subject_matches("news.>", "news.sports.today")
```

## What it does not do

`pushwire` is a library of parts, not a server. It does not:

- open sockets or accept connections;
- parse HTTP requests;
- run connection loops or worker threads.

It ships no command-line program. `Registry` only queues publications.
Reading them with `drain`, writing frames to clients and decrementing the
pending count is left to the code that uses it.