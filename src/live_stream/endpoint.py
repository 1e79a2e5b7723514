"""Stream endpoint resolution and validation.

The socket URL is derived from the page URL the client is attached to:
secure pages stream over ``wss``, plain pages over ``ws``, and host/port
are inherited. Validation happens here, once, before any socket is built.
"""

from urllib.parse import urlsplit, urlunsplit

from src.live_stream.config import DEFAULT_WS_PATH
from src.live_stream.errors import InvalidEndpoint

_SCHEME_MAP = {
    "https": "wss",
    "http": "ws",
    "wss": "wss",
    "ws": "ws",
}


def resolve_stream_url(page_url: str, ws_path: str = DEFAULT_WS_PATH) -> str:
    """Return the WebSocket URL for *page_url*.

    Raises:
        InvalidEndpoint: unsupported scheme or missing host.
    """
    try:
        parts = urlsplit((page_url or "").strip())
        port = parts.port  # raises ValueError on junk ports
    except ValueError as exc:
        raise InvalidEndpoint(f"Cannot parse page URL: {exc}", page_url) from exc

    scheme = _SCHEME_MAP.get(parts.scheme.lower())
    if scheme is None:
        raise InvalidEndpoint(f"Unsupported URL scheme: {parts.scheme!r}", page_url)
    if not parts.hostname:
        raise InvalidEndpoint("Page URL has no host", page_url)

    host = f"[{parts.hostname}]" if ":" in parts.hostname else parts.hostname
    netloc = host if port is None else f"{host}:{port}"

    path = ws_path if ws_path.startswith("/") else f"/{ws_path}"
    return urlunsplit((scheme, netloc, path, "", ""))
