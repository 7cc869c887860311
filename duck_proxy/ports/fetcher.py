from duck_proxy.domain.models import FetchedResponse


class Fetcher:
    """
    Port for the upstream GET.

    Implementations raise UpstreamError when the target cannot be reached;
    the returned body must not have been read yet.
    """
    def fetch(self, url: str) -> FetchedResponse:
        raise NotImplementedError
