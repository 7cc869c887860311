from .proxy_service import ProxyService
from .response_transformer import ResponseTransformer
from .url_normalization import UrlNormalizer, SearchFallbackUrlNormalizer

__all__ = [
    "ProxyService",
    "ResponseTransformer",
    "UrlNormalizer",
    "SearchFallbackUrlNormalizer",
]
