"""Push-connection building blocks: WebSocket framing, server-sent events, subjects and publication fan-out."""

__version__ = "0.1.0"
__all__ = ["atomic", "kinds", "sha1", "sse", "subject", "text", "upgraded", "websocket"]