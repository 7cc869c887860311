from __future__ import annotations

import codecs
import logging
import re
from dataclasses import dataclass
from typing import Iterator, Optional

import requests

from duck_proxy.domain.errors import UpstreamError
from duck_proxy.domain.models import FetchedResponse
from duck_proxy.ports.fetcher import Fetcher

logger = logging.getLogger(__name__)

# Pretend to be a normal browser
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

_CHARSET_RE = re.compile(r"charset\s*=\s*[\"']?([\w.:-]+)", flags=re.IGNORECASE)


def charset_from_content_type(content_type: str) -> Optional[str]:
    """Declared charset if Python knows it, else None."""
    m = _CHARSET_RE.search(content_type or "")
    if not m:
        return None
    try:
        return codecs.lookup(m.group(1)).name
    except LookupError:
        return None


def _iter_body(resp: requests.Response, chunk_size: int) -> Iterator[bytes]:
    try:
        for chunk in resp.iter_content(chunk_size=chunk_size):
            if chunk:
                yield chunk
    except requests.RequestException as e:
        raise UpstreamError(str(e)) from e


@dataclass
class RequestsFetcher(Fetcher):
    """
    Single-attempt GET through requests, body left on the wire (stream=True)
    until the caller iterates it.
    """
    user_agent: str = DEFAULT_USER_AGENT
    timeout_seconds: float = 30.0
    chunk_size: int = 8192

    def fetch(self, url: str) -> FetchedResponse:
        headers = {
            "User-Agent": self.user_agent,
            # Bodies are re-sent without Content-Encoding, ask for them plain.
            "Accept-Encoding": "identity",
        }
        try:
            resp = requests.get(url, headers=headers, stream=True, timeout=self.timeout_seconds)
        except requests.RequestException as e:
            raise UpstreamError(str(e)) from e

        logger.debug("Upstream %s -> %s (%s)", url, resp.status_code, resp.headers.get("content-type", "-"))

        return FetchedResponse(
            status=resp.status_code,
            headers=resp.headers,
            body=_iter_body(resp, self.chunk_size),
            encoding=charset_from_content_type(resp.headers.get("content-type", "")),
            close=resp.close,
        )
