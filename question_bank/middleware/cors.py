"""Path-scoped CORS middleware.

Starlette's CORSMiddleware answers every preflight itself. The storage
proxies answer their own OPTIONS requests with their own CORS policy, so
the shared CORS policy is applied only under path_prefix (the JSON API).
"""

from typing import Any, Callable

from starlette.middleware.cors import CORSMiddleware


def ScopedCORSMiddleware(
    app: Callable, path_prefix: str = "/api/v1", **cors_options: Any
) -> Callable:
    """Apply CORSMiddleware(**cors_options) to requests under path_prefix only. Raw ASGI."""
    cors_app = CORSMiddleware(app, **cors_options)

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] == "http" and scope.get("path", "").startswith(path_prefix):
            await cors_app(scope, receive, send)
            return
        await app(scope, receive, send)

    return asgi_app
