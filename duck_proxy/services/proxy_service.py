from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from duck_proxy.domain.models import OutgoingResponse
from duck_proxy.ports.fetcher import Fetcher
from duck_proxy.services.response_transformer import ResponseTransformer
from duck_proxy.services.url_normalization import UrlNormalizer


@dataclass
class ProxyService:
    """
    Service layer: normalize -> fetch -> transform.
    Keeps controllers/routes thin.
    """
    url_normalizer: UrlNormalizer
    fetcher: Fetcher
    transformer: ResponseTransformer

    def resolve_target(self, raw: Optional[str]) -> Optional[str]:
        return self.url_normalizer.normalize(raw)

    def forward(self, target: str) -> OutgoingResponse:
        upstream = self.fetcher.fetch(target)
        try:
            return self.transformer.transform(upstream, target)
        except Exception:
            upstream.close()
            raise
