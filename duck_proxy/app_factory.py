from __future__ import annotations

from typing import Optional

from flask import Flask

from duck_proxy.adapters.requests_fetcher import RequestsFetcher
from duck_proxy.config.ini_config import AppSettings, IniConfig
from duck_proxy.ports.fetcher import Fetcher
from duck_proxy.services.proxy_service import ProxyService
from duck_proxy.services.response_transformer import ResponseTransformer
from duck_proxy.services.url_normalization import SearchFallbackUrlNormalizer
from duck_proxy.web.routes import create_blueprint


def create_app(settings: Optional[AppSettings] = None, *, fetcher: Optional[Fetcher] = None) -> Flask:
    if settings is None:
        settings = IniConfig.from_env_or_default().load_settings()

    url_norm = SearchFallbackUrlNormalizer(
        default_scheme=settings.default_scheme,
        search_url=settings.search_url,
    )

    if fetcher is None:
        fetcher = RequestsFetcher(
            user_agent=settings.user_agent,
            timeout_seconds=settings.timeout_seconds,
            chunk_size=settings.chunk_size,
        )

    transformer = ResponseTransformer(
        banner_enabled=settings.banner_enabled,
        max_html_bytes=settings.max_html_bytes,
    )

    proxy_service = ProxyService(
        url_normalizer=url_norm,
        fetcher=fetcher,
        transformer=transformer,
    )

    app = Flask(__name__)
    app.register_blueprint(create_blueprint(proxy_service))

    app.config["HOST"] = settings.flask_host
    app.config["PORT"] = settings.flask_port
    app.config["DEBUG"] = settings.flask_debug

    return app
