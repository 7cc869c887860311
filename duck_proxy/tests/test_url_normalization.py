from urllib.parse import unquote

import pytest

from duck_proxy.services.url_normalization import (
    DUCKDUCKGO_SEARCH_URL,
    SearchFallbackUrlNormalizer,
    encode_uri_component,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, None),
        ("", None),
        ("   ", None),
        ("\t\n", None),
        ("example.com", "https://example.com"),
        ("  example.com  ", "https://example.com"),
        ("example.com/path?q=1", "https://example.com/path?q=1"),
        ("127.0.0.1:5000/test", "https://127.0.0.1:5000/test"),
        ("https://example.com", "https://example.com"),     # already has scheme -> unchanged
        ("http://example.com/a/b", "http://example.com/a/b"),
        ("HTTP://Example.com", "HTTP://Example.com"),       # case-insensitive scheme match
        ("hTtPs://x.org/ a b", "hTtPs://x.org/ a b"),        # scheme wins over the whitespace rule
        ("hello", DUCKDUCKGO_SEARCH_URL + "hello"),         # no dot -> search
        ("localhost", DUCKDUCKGO_SEARCH_URL + "localhost"),
        ("foo.bar baz", DUCKDUCKGO_SEARCH_URL + "foo.bar%20baz"),
        ("ftp://example.com", "https://ftp://example.com"),  # only http(s) counts as a scheme
    ],
)
def test_normalize_default_behavior(raw, expected):
    norm = SearchFallbackUrlNormalizer()
    assert norm.normalize(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "what is a duck",
        "  padded query  ",
        "café & crème?",
        "a+b=c/d#e",
        "tab\tseparated.words",
        "日本語 検索",
    ],
)
def test_search_phrase_decodes_back_to_trimmed_input(raw):
    result = SearchFallbackUrlNormalizer().normalize(raw)

    assert result.startswith(DUCKDUCKGO_SEARCH_URL)
    assert unquote(result[len(DUCKDUCKGO_SEARCH_URL):]) == raw.strip()


def test_whitespace_other_than_space_forces_search():
    # a dotted string with a newline is not a host name
    result = SearchFallbackUrlNormalizer().normalize("example.com\nmore")
    assert result == DUCKDUCKGO_SEARCH_URL + "example.com%0Amore"


def test_default_scheme_respected():
    norm = SearchFallbackUrlNormalizer(default_scheme="http")
    assert norm.normalize("example.com") == "http://example.com"
    assert norm.normalize("https://example.com") == "https://example.com"


def test_custom_search_url():
    norm = SearchFallbackUrlNormalizer(search_url="https://search.example/?q=")
    assert norm.normalize("two words") == "https://search.example/?q=two%20words"


def test_encode_uri_component_matches_browser_rules():
    assert encode_uri_component("https://example.com/page") == "https%3A%2F%2Fexample.com%2Fpage"
    assert encode_uri_component("a b&c=d") == "a%20b%26c%3Dd"
    # left alone by encodeURIComponent
    assert encode_uri_component("-_.!~*'()") == "-_.!~*'()"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("﻿example.com", "https://example.com"),
        ("  ﻿https://example.com/a﻿ ", "https://example.com/a"),
        ("﻿", None),
        (" ﻿ ", None),
    ],
)
def test_byte_order_mark_is_trimmed_like_whitespace(raw, expected):
    assert SearchFallbackUrlNormalizer().normalize(raw) == expected
