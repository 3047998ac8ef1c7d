"""Upgraded (WebSocket and SSE) connections and publication fan-out."""

import dataclasses
import queue
import threading
from enum import Enum
from typing import Any, Callable, Iterator, List, Optional, Union

from .atomic import AtomicInt
from .subject import Subject

DEFAULT_MAX_PUSH_PENDING = 32

SubjectLike = Union[Subject, str]
MessageLike = Union[bytes, bytearray, memoryview, str]


class PubKind(Enum):
    """What a publication asks a connection loop to do."""

    WRITE = "write"
    SUBSCRIBE = "subscribe"
    UNSUBSCRIBE = "unsubscribe"
    CLOSE = "close"


@dataclasses.dataclass
class Publication:
    """A message or control request for an upgraded connection."""

    kind: PubKind
    upgraded: Optional["Upgraded"] = None
    message: Optional[bytes] = None
    subject: Optional[Subject] = None
    binary: bool = False


def _as_subject(subject: SubjectLike) -> Subject:
    if isinstance(subject, Subject):
        return subject
    return Subject(subject)


def _as_bytes(message: MessageLike) -> bytes:
    if isinstance(message, str):
        return message.encode("utf-8")
    return bytes(message)


class Registry:
    """Tracks upgraded connections and fans publications out to loops."""

    def __init__(self, loops: int = 1, max_push_pending: int = DEFAULT_MAX_PUSH_PENDING) -> None:
        if loops < 1:
            raise ValueError("at least one connection loop is required")
        self.max_push_pending = max_push_pending
        self.lock = threading.RLock()
        self._upgraded: List["Upgraded"] = []
        self._queues: List["queue.SimpleQueue[Publication]"] = [
            queue.SimpleQueue() for _ in range(loops)
        ]

    @property
    def loop_count(self) -> int:
        return len(self._queues)

    def __len__(self) -> int:
        with self.lock:
            return len(self._upgraded)

    def __iter__(self) -> Iterator["Upgraded"]:
        with self.lock:
            return iter(list(self._upgraded))

    def __contains__(self, up: object) -> bool:
        with self.lock:
            return any(u is up for u in self._upgraded)

    def add(self, up: "Upgraded") -> None:
        """Register ``up``; the newest connection comes first."""
        with self.lock:
            self._upgraded.insert(0, up)

    def remove(self, up: "Upgraded") -> None:
        """Unregister ``up`` if it is registered."""
        with self.lock:
            self._upgraded = [u for u in self._upgraded if u is not up]

    def publish(self, pub: Publication) -> None:
        """Queue ``pub`` on every loop: the last loop gets it, the others copies."""
        last = len(self._queues) - 1
        for index, loop_queue in enumerate(self._queues):
            loop_queue.put(pub if index == last else dataclasses.replace(pub))

    def drain(self, loop: int) -> List[Publication]:
        """Remove and return everything queued for the loop at index ``loop``."""
        loop_queue = self._queues[loop]
        drained = []
        while True:
            try:
                drained.append(loop_queue.get_nowait())
            except queue.Empty:
                return drained


class Upgraded:
    """A connection that has been upgraded to push messages to a client."""

    def __init__(
        self,
        registry: Registry,
        con: Any = None,
        ctx: Any = None,
        env: Any = None,
        on_destroy: Optional[Callable[["Upgraded"], None]] = None,
    ) -> None:
        self.registry = registry
        self.con = con
        self.ctx = ctx
        self.env = env
        self.wrap: Any = None
        self.on_destroy = on_destroy
        self.on_empty = False
        self.on_close = False
        self.on_shut = False
        self.on_msg = False
        self.on_error = False
        self.destroyed = False
        self._subjects: List[Subject] = []
        self._pending = AtomicInt(0)
        # Start with one reference held on behalf of the connection.
        self._refs = AtomicInt(1)

    def __repr__(self) -> str:
        return f"Upgraded(ref_count={self.ref_count}, pending={self.pending()})"

    @property
    def ref_count(self) -> int:
        return self._refs.load()

    @property
    def subjects(self) -> List[Subject]:
        """The subscribed patterns, newest first."""
        return list(self._subjects)

    def _destroy(self) -> None:
        if self.on_destroy is not None:
            self.on_destroy(self)
        self.registry.remove(self)
        self._subjects.clear()
        self.destroyed = True

    def ref(self) -> None:
        """Take one more reference."""
        self._refs.fetch_add(1)

    def release(self) -> bool:
        """Drop a reference; destroy and return True when it was the last."""
        with self.registry.lock:
            if self._refs.fetch_sub(1) <= 1:
                self._destroy()
                return True
            return False

    def release_con(self) -> bool:
        """Detach the connection and drop its reference."""
        with self.registry.lock:
            self.con = None
            if self._refs.fetch_sub(1) <= 1:
                self._destroy()
                return True
            return False

    def add_subject(self, subject: SubjectLike) -> None:
        """Subscribe to ``subject`` unless the same pattern is already held."""
        subj = _as_subject(subject)
        if any(s.pattern == subj.pattern for s in self._subjects):
            return
        self._subjects.insert(0, subj)

    def del_subject(self, subject: Optional[SubjectLike] = None) -> None:
        """Remove the matching pattern, or every pattern when ``subject`` is None."""
        if subject is None:
            self._subjects.clear()
            return
        pattern = _as_subject(subject).pattern
        for index, s in enumerate(self._subjects):
            if s.pattern == pattern:
                del self._subjects[index]
                return

    def match(self, subject: str) -> bool:
        """Return True when any held pattern matches ``subject``."""
        return any(s.check(subject) for s in self._subjects)

    def _push(self, pub: Publication, inc_ref: bool) -> None:
        if inc_ref:
            self._refs.fetch_add(1)
        self._pending.fetch_add(1)
        self.registry.publish(pub)

    def write(self, message: MessageLike, binary: bool = False, inc_ref: bool = True) -> bool:
        """Queue ``message`` for delivery; False when too many are already pending."""
        limit = self.registry.max_push_pending
        if 0 < limit <= self._pending.load():
            self._refs.fetch_sub(1)
            return False
        pub = Publication(PubKind.WRITE, self, message=_as_bytes(message), binary=binary)
        self._push(pub, inc_ref)
        return True

    def subscribe(self, subject: SubjectLike, inc_ref: bool = True) -> None:
        """Queue a request to subscribe to ``subject``."""
        self._push(Publication(PubKind.SUBSCRIBE, self, subject=_as_subject(subject)), inc_ref)

    def unsubscribe(self, subject: Optional[SubjectLike] = None, inc_ref: bool = True) -> None:
        """Queue a request to unsubscribe from ``subject``, or from all when None."""
        subj = None if subject is None else _as_subject(subject)
        self._push(Publication(PubKind.UNSUBSCRIBE, self, subject=subj), inc_ref)

    def close(self, inc_ref: bool = True) -> None:
        """Queue a request to close the connection."""
        self._push(Publication(PubKind.CLOSE, self), inc_ref)

    def pending(self) -> int:
        """Return the number of queued publications not yet handled."""
        return self._pending.load()