"""Thread-safe integer and flag primitives."""

import threading


class AtomicInt:
    """An integer whose reads and updates are serialised by a lock."""

    def __init__(self, value: int = 0) -> None:
        self._value = value
        self._lock = threading.Lock()

    def load(self) -> int:
        """Return the current value."""
        with self._lock:
            return self._value

    def store(self, value: int) -> None:
        """Replace the current value."""
        with self._lock:
            self._value = value

    def fetch_add(self, delta: int) -> int:
        """Add ``delta`` and return the value from before the addition."""
        with self._lock:
            before = self._value
            self._value = before + delta
            return before

    def fetch_sub(self, delta: int) -> int:
        """Subtract ``delta`` and return the value from before the subtraction."""
        with self._lock:
            before = self._value
            self._value = before - delta
            return before

    def __repr__(self) -> str:
        return f"AtomicInt({self.load()})"


class AtomicFlag:
    """A boolean flag that can be tested and set in one step."""

    def __init__(self) -> None:
        self._set = False
        self._lock = threading.Lock()

    def test_and_set(self) -> bool:
        """Set the flag and return whether it was already set."""
        with self._lock:
            previous = self._set
            self._set = True
            return previous

    def clear(self) -> None:
        """Reset the flag."""
        with self._lock:
            self._set = False

    def __repr__(self) -> str:
        with self._lock:
            return f"AtomicFlag({self._set})"