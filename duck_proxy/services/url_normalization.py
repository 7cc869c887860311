import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

DUCKDUCKGO_SEARCH_URL = "https://duckduckgo.com/html/?q="

_ABSOLUTE_URL_RE = re.compile(r"^https?://", flags=re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s")

# Characters encodeURIComponent leaves alone besides ASCII letters and digits.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(s: str) -> str:
    return quote(s, safe=_URI_COMPONENT_SAFE)


class UrlNormalizer:
    """Strategy interface."""
    def normalize(self, s: Optional[str]) -> Optional[str]:
        raise NotImplementedError


@dataclass(frozen=True)
class SearchFallbackUrlNormalizer(UrlNormalizer):
    """
    Turns whatever the user typed into something fetchable:

    - "http://..." / "https://..." (any case) is used as is
    - a dotted word with no whitespace is taken as a host name
    - everything else becomes a search query

    Returns None when there is nothing to work with.
    """
    default_scheme: str = "https"
    search_url: str = DUCKDUCKGO_SEARCH_URL

    def normalize(self, s: Optional[str]) -> Optional[str]:
        # str.strip() leaves a pasted byte-order mark in place
        s = (s or "").strip().strip("\ufeff").strip()
        if not s:
            return None

        if _ABSOLUTE_URL_RE.match(s):
            return s

        # "foo.bar baz" is a search, not a host
        if "." in s and not _WHITESPACE_RE.search(s):
            return f"{self.default_scheme}://{s}"

        return self.search_url + encode_uri_component(s)
