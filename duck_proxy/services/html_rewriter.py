from __future__ import annotations

import re
from typing import Optional
from urllib.parse import SplitResult, urljoin, urlsplit

from duck_proxy.services.url_normalization import encode_uri_component

PROXY_PATH = "/proxy"

# Double-quoted values only; single-quoted and unquoted values are left alone.
_REFERENCE_ATTR_RE = re.compile(r'(href|src)="(.*?)"', flags=re.IGNORECASE)
_BODY_TAG_RE = re.compile(r"<body[^>]*>", flags=re.IGNORECASE)

_EXEMPT_PREFIXES = ("#", "javascript:", "mailto:", "data:")

# Never valid in a host[:port]; whitespace is checked separately.
_BAD_NETLOC_CHARS = frozenset('<>"{}|\\^')

BANNER_TEXT = "You are viewing this page through <b>Duck Proxy</b>."

BANNER_HTML = f"""
    <div style="
      position:fixed;
      top:0;left:0;right:0;
      z-index:999999;
      background:#111;
      color:#eee;
      font-family:system-ui, sans-serif;
      font-size:12px;
      padding:6px 10px;
      border-bottom:1px solid #333;
    ">
      &#128274; {BANNER_TEXT}
      <span style="opacity:0.7;">Type a new URL or search above to go somewhere else.</span>
    </div>
    <div style="height:28px;"></div>
  """


def proxy_url_for(absolute_url: str) -> str:
    return f"{PROXY_PATH}?url={encode_uri_component(absolute_url)}"


def _has_valid_authority(parts: SplitResult) -> bool:
    if not parts.hostname:
        return False
    return not any(c.isspace() or c in _BAD_NETLOC_CHARS for c in parts.netloc)


def _resolve(value: str, base_url: str) -> Optional[str]:
    """Absolute http(s) URL for value, or None when it does not resolve."""
    try:
        given = urlsplit(value)
        # "https://" with nothing after it must not fall back to base_url
        rest = value[len(given.scheme) + 1:] if given.scheme else value
        if rest.startswith("//") and not _has_valid_authority(given):
            return None

        resolved = urljoin(base_url, value)
        parts = urlsplit(resolved)
        # urljoin is lenient about ports; reading one forces validation
        parts.port
    except ValueError:
        return None

    if parts.scheme not in ("http", "https") or not _has_valid_authority(parts):
        return None
    return resolved


def rewrite_links(html: str, base_url: str) -> str:
    """
    Points every double-quoted href/src at the proxy.

    Anchors, javascript:, mailto: and data: values are kept byte for byte, and
    so is anything that does not resolve against base_url.
    """
    def _replace(match: re.Match) -> str:
        attr, raw = match.group(1), match.group(2)
        value = raw.strip()

        if value.lower().startswith(_EXEMPT_PREFIXES):
            return match.group(0)

        resolved = _resolve(value, base_url)
        if resolved is None:
            return match.group(0)

        return f'{attr}="{proxy_url_for(resolved)}"'

    return _REFERENCE_ATTR_RE.sub(_replace, html)


def inject_banner(html: str, banner: str = BANNER_HTML) -> str:
    # Right after the first <body ...> when there is one, otherwise up front.
    if _BODY_TAG_RE.search(html):
        return _BODY_TAG_RE.sub(lambda m: m.group(0) + banner, html, count=1)
    return banner + html
