"""Writes a finished glide Response to the ASGI ``send`` channel."""

from glide._internal.asgi import Send
from glide.http.response import Response

# 1xx, 204 and 304 never carry a message body
_BODYLESS = frozenset({204, 304})


def _encode_headers(response: Response, content_length: int) -> list[tuple[bytes, bytes]]:
    pairs = [("content-type", response.content_type), *response.headers]
    pairs.append(("content-length", str(content_length)))
    return [(name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in pairs]


async def send_response(response: Response, send: Send) -> None:
    """Emit ``http.response.start`` then a single ``http.response.body``.

    The response is complete before the first message goes out, so a
    failure while building it can never leave a half-written body.
    """
    status = response.status
    body = b"" if status < 200 or status in _BODYLESS else response.body_bytes
    await send(
        {
            "type": "http.response.start",
            "status": status,
            "headers": _encode_headers(response, len(body)),
        }
    )
    await send({"type": "http.response.body", "body": body})
