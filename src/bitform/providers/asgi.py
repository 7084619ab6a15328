"""ASGI provider — serves the route table through any ASGI server.

The provider is itself an ASGI 3.0 callable. ``start()`` runs it under
pounce; tests drive it directly with ``bitform.testing.TestClient``.
"""

import logging
from typing import Any

from bitform._internal.asgi import Receive, Scope, Send
from bitform._internal.invoke import invoke
from bitform.config import ProviderConfig
from bitform.errors import HTTPError
from bitform.http.request import Request
from bitform.http.response import Response
from bitform.provider import Provider
from bitform.providers.sender import send_response

logger = logging.getLogger("bitform.server")


def apply_result(result: Any, response: Response) -> Response:
    """Fold a route callback's return value into the outgoing response.

    - ``None``            -> the (mutated) response passed to the handler
    - ``Response``        -> that response
    - ``str`` / ``bytes`` -> sent as the body
    - ``dict`` / ``list`` -> sent as JSON
    """
    match result:
        case None:
            return response
        case Response():
            return result
        case str() | bytes():
            return response.send(result)
        case dict() | list():
            return response.json(result)
        case _:
            msg = f"Route callback returned unsupported type {type(result).__name__!r}"
            raise TypeError(msg)


def error_response(exc: HTTPError) -> Response:
    """Plain-text response for an ``HTTPError``."""
    response = Response(status=exc.status).set_type("text/plain; charset=utf-8")
    for name, value in exc.headers:
        response.set_header(name, value)
    return response.send(exc.detail or str(exc.status))


class AsgiProvider(Provider):
    """A provider that speaks ASGI.

    Usage::

        provider = AsgiProvider(ProviderConfig(port=8000), secret_key="s3cr3t")
        provider.get("/", lambda req, res: "Hello, World!")
        provider.start()  # blocks

    ``secret_key`` verifies incoming signed cookies and signs outgoing
    ones. ``workers`` and ``reload`` are passed through to pounce.
    """

    def __init__(
        self,
        config: ProviderConfig | None = None,
        *,
        secret_key: str = "",
        workers: int = 1,
        reload: bool = False,
    ) -> None:
        super().__init__(config)
        self._secret_key = secret_key
        self._workers = workers
        self._reload = reload

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        body = await self._read_body(receive)
        request = Request.from_asgi(scope, body, secret=self._secret_key or None)
        response = await self.dispatch(request)
        await send_response(response, send, head=request.method == "HEAD")

    async def dispatch(self, request: Request) -> Response:
        """Route *request* and run its callback.

        Routing misses become 404/405 responses. Any other exception is
        logged and becomes a 500.
        """
        response = Response(secret=self._secret_key or None)
        try:
            match = self.resolve(request.method, request.path)
            request = request.with_params(match.params)
            result = await invoke(match.route.call, request.method, request, response)
            return apply_result(result, response)
        except HTTPError as exc:
            return error_response(exc)
        except Exception:
            logger.exception("Unhandled error in %s %s", request.method, request.path)
            return Response().send_status(500)

    async def _read_body(self, receive: Receive) -> bytes:
        chunks: list[bytes] = []
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                break
            chunks.append(message.get("body", b""))
            if not message.get("more_body", False):
                break
        return b"".join(chunks)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        # Routes are registered before start(), so there is nothing to
        # boot here; acknowledge so the server begins accepting requests.
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Server --

    def start(self) -> None:
        """Serve on ``host:port`` with pounce. Blocks until the server exits."""
        from pounce.config import ServerConfig
        from pounce.server import Server

        logger.info("Serving %d route(s) on http://%s:%d", len(self.routes), self.host, self.port)
        config = ServerConfig(
            host=self.host,
            port=self.port,
            workers=self._workers,
            reload=self._reload,
        )
        Server(config, self).run()
