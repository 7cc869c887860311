from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from duck_proxy.domain.errors import UpstreamError
from duck_proxy.domain.models import FetchedResponse, OutgoingResponse
from duck_proxy.services.html_rewriter import inject_banner, rewrite_links

# Not replicated by the forwarding layer, so never passed on.
HOP_BY_HOP_HEADERS = frozenset({"content-encoding", "transfer-encoding"})


def is_html(content_type: str) -> bool:
    return "text/html" in (content_type or "").lower()


def read_text(upstream: FetchedResponse, max_bytes: int = 0) -> str:
    """Buffers the whole body and decodes it. max_bytes=0 means no cap."""
    buf = bytearray()
    try:
        for chunk in upstream.body:
            buf.extend(chunk)
            if max_bytes and len(buf) > max_bytes:
                raise UpstreamError(f"HTML document larger than {max_bytes} bytes")
    finally:
        upstream.close()
    return buf.decode(upstream.encoding or "utf-8", errors="replace")


def _stream(upstream: FetchedResponse) -> Iterator[bytes]:
    try:
        yield from upstream.body
    finally:
        upstream.close()


@dataclass(frozen=True)
class ResponseTransformer:
    """
    Decides per response between rewriting (HTML) and streaming passthrough
    (everything else).
    """
    banner_enabled: bool = True
    max_html_bytes: int = 0

    def rewrite_document(self, html: str, base_url: str) -> str:
        html = rewrite_links(html, base_url)
        if self.banner_enabled:
            html = inject_banner(html)
        return html

    def transform(self, upstream: FetchedResponse, base_url: str) -> OutgoingResponse:
        content_type = upstream.content_type

        if is_html(content_type):
            text = read_text(upstream, self.max_html_bytes)
            return OutgoingResponse(
                status=upstream.status,
                headers=[("Content-Type", content_type)],
                body=self.rewrite_document(text, base_url),
                charset=upstream.encoding or "utf-8",
            )

        headers = [
            (name, value)
            for name, value in upstream.headers.items()
            if name.lower() not in HOP_BY_HOP_HEADERS
        ]
        return OutgoingResponse(status=upstream.status, headers=headers, body=_stream(upstream))
