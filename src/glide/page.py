"""Page envelope: the object sent to the client on every visit.

Wire format, field-exact::

    {"component": "Events/Show", "props": {...}, "url": "/events/1", "version": "3f2a9c"}
"""

import html
import json
from dataclasses import dataclass
from typing import Any

from kida.template import Markup

from glide.errors import PageSerializationError


@dataclass(frozen=True, slots=True)
class PageEnvelope:
    """One rendered page. Built fresh per request."""

    component: str
    props: dict[str, Any]
    url: str
    version: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "component": self.component,
            "props": self.props,
            "url": self.url,
            "version": self.version,
        }


def serialize_page(page: PageEnvelope) -> bytes:
    """Encode *page* as compact JSON.

    Fails closed: values with no JSON form (sets, objects, NaN, lone
    surrogates, ...) raise ``PageSerializationError`` instead of being coerced.
    """
    try:
        return json.dumps(
            page.to_dict(),
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        ).encode("utf-8")
    # UnicodeEncodeError is a ValueError
    except (TypeError, ValueError) as exc:
        raise PageSerializationError(page.component, str(exc)) from exc


def embed_page(payload: bytes) -> Markup:
    """HTML-escape a serialized page for a ``data-page`` attribute.

    The result is ``Markup`` so autoescaping templates emit it verbatim::

        <div id="app" data-page="{{ page }}"></div>
    """
    return Markup(html.escape(payload.decode("utf-8"), quote=True))
