"""ASGI response sending — translates a switchyard Response to ASGI messages."""

from switchyard._internal.asgi import Send
from switchyard.http.response import Response


def body_allowed(status: int) -> bool:
    """Whether a response with *status* may carry a body."""
    # RFC 9110: 1xx, 204 and 304 responses have no body
    return not (100 <= status < 200 or status in {204, 304})


def encode_headers(response: Response, content_length: int | None) -> list[tuple[bytes, bytes]]:
    """Encode response headers; ``content_length=None`` omits the length header."""
    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    for name, value in response.headers:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))
    if content_length is not None:
        raw_headers.append((b"content-length", str(content_length).encode("latin-1")))
    return raw_headers


async def send_response(response: Response, send: Send, *, method: str = "GET") -> None:
    """Send *response* as one ``http.response.start`` and one body message."""
    if body_allowed(response.status):
        body = response.body_bytes
        headers = encode_headers(response, len(body))
    else:
        # A 304 length would describe the omitted representation, not an empty one
        body = b""
        headers = encode_headers(response, None)
    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            # HEAD keeps the GET headers, content-length included
            "body": b"" if method == "HEAD" else body,
        }
    )
