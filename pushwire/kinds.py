"""Connection kinds and request methods."""

from enum import Enum


class ConKind(str, Enum):
    """Kind of connection a bind or response belongs to."""

    ANY = "\0"
    HTTP = "H"
    WS = "W"
    SSE = "S"


class Method(str, Enum):
    """HTTP methods and the pseudo methods used for push callbacks."""

    CONNECT = "C"
    DELETE = "D"
    GET = "G"
    HEAD = "H"
    OPTIONS = "O"
    POST = "P"
    PUT = "U"
    PATCH = "T"
    ALL = "A"
    NONE = "\0"

    ON_MSG = "M"
    ON_BIN = "B"
    ON_CLOSE = "X"
    ON_SHUTDOWN = "S"
    ON_EMPTY = "E"
    ON_ERROR = "F"