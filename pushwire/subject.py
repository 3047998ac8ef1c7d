"""Subscription subjects and their wildcard matching."""

from dataclasses import dataclass


def subject_matches(pattern: str, subject: str) -> bool:
    """Return True when ``subject`` is matched by ``pattern``.

    ``*`` matches the rest of one dot separated token and ``>`` matches
    everything that follows.
    """
    pi = 0
    si = 0
    plen = len(pattern)
    slen = len(subject)
    while pi < plen and si < slen:
        pc = pattern[pi]
        if subject[si] == pc:
            pi += 1
        elif pc == "*":
            dot = subject.find(".", si)
            if dot < 0:
                return True
            si = dot
            pi += 1
        elif pc == ">":
            return True
        else:
            break
        si += 1
    return pi == plen and si == slen


@dataclass(frozen=True)
class Subject:
    """A subscription pattern."""

    pattern: str

    def check(self, subject: str) -> bool:
        """Return True when ``subject`` matches this pattern."""
        return subject_matches(self.pattern, subject)