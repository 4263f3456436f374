"""Frozen responses and redirects.

A ``Response`` is fully built before anything is sent. The engine,
the version guard and the redirect adapter all derive new responses
with ``.with_*()``; none of them can touch bytes already written.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Response:
    """Status, content type, headers and body of one reply.

    ::

        Response(payload, content_type="application/json").with_header("Vary", "Accept")
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> Response:
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Copy with ``name: value`` appended; earlier values are kept."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str] | tuple[tuple[str, str], ...]) -> Response:
        """Copy with every pair of *headers* appended, in order."""
        pairs = headers.items() if isinstance(headers, Mapping) else headers
        return replace(self, headers=(*self.headers, *pairs))

    def with_content_type(self, content_type: str) -> Response:
        return replace(self, content_type=content_type)

    def header(self, name: str) -> str | None:
        """First value of header *name* (case-insensitive), or None."""
        wanted = name.lower()
        return next((value for key, value in self.headers if key.lower() == wanted), None)

    @property
    def body_bytes(self) -> bytes:
        return self.body.encode("utf-8") if isinstance(self.body, str) else self.body

    @property
    def text(self) -> str:
        return self.body if isinstance(self.body, str) else self.body.decode("utf-8")


@dataclass(frozen=True, slots=True)
class Redirect:
    """Handler return value for a redirect to *url*.

    302 unless told otherwise; ``RedirectStatusAdapter`` turns it into 303
    for PUT, PATCH and DELETE requests.
    """

    url: str
    status: int = 302
    headers: tuple[tuple[str, str], ...] = ()
