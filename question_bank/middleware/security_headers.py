"""Default response headers for the archive API.

JSON routes are never meant to be framed or sniffed. The PDF viewer route
sets its own X-Frame-Options / Content-Security-Policy, and those win:
a default is only added when the response does not carry that header yet.
"""

from typing import Callable

DEFAULT_HEADERS = {
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
}

RawHeaders = list[tuple[bytes, bytes]]


def _encode(headers: dict[str, str]) -> RawHeaders:
    return [(name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in headers.items()]


def _fill_missing(current: RawHeaders, defaults: RawHeaders) -> RawHeaders:
    """Append each default whose name is absent from current."""
    present = {name.lower() for name, _ in current}
    return current + [(name, value) for name, value in defaults if name not in present]


def SecurityHeadersMiddleware(
    app: Callable, headers: dict[str, str] | None = None
) -> Callable:
    """Wrap app so every HTTP response gets the default headers it lacks."""
    defaults = _encode(DEFAULT_HEADERS if headers is None else headers)

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        async def send_with_defaults(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = _fill_missing(list(message.get("headers", [])), defaults)
            await send(message)

        await app(scope, receive, send_with_defaults)

    return asgi_app
