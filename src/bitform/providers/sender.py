"""ASGI response sending — translates a Response into ASGI messages.

Handles in-memory bodies and file transfers; files are streamed in
chunks through ``anyio`` so large downloads never sit in memory.
"""

import logging

import anyio

from bitform._internal.asgi import Send
from bitform.http.response import Response

logger = logging.getLogger("bitform.server")

CHUNK_SIZE = 64 * 1024


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


def _raw_headers(response: Response, content_length: int) -> list[tuple[bytes, bytes]]:
    raw_headers = [
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in response.headers
        if name.lower() != "content-length"
    ]
    raw_headers.extend(
        (b"set-cookie", cookie.to_header_value().encode("latin-1")) for cookie in response.cookies
    )
    raw_headers.append((b"content-length", str(content_length).encode("latin-1")))
    return raw_headers


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Send *response* through ASGI ``send()``.

    With *head*, headers (including ``Content-Length``) are sent as for
    the full response but the body is omitted.
    """
    allowed = _body_allowed(response.status)

    if response.file is not None and allowed:
        await _send_file(response, send, head=head)
        return

    body = response.body_bytes if allowed else b""
    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": _raw_headers(response, len(body)),
        }
    )
    await send({"type": "http.response.body", "body": b"" if head else body})


async def _send_file(response: Response, send: Send, *, head: bool) -> None:
    assert response.file is not None
    path = anyio.Path(response.file)
    size = (await path.stat()).st_size

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": _raw_headers(response, size),
        }
    )
    if head:
        await send({"type": "http.response.body", "body": b""})
        return

    async with await anyio.open_file(response.file, "rb") as handle:
        while True:
            chunk = await handle.read(CHUNK_SIZE)
            more = len(chunk) == CHUNK_SIZE
            await send({"type": "http.response.body", "body": chunk, "more_body": more})
            if not more:
                break
    logger.debug("Sent file %s (%d bytes)", response.file, size)
