class ProxyError(Exception):
    """Base class for failures that end a single proxy request."""


class UpstreamError(ProxyError):
    """The upstream target could not be reached or its response could not be read."""
