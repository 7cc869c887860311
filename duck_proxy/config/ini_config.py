########## ini_config.py

import os
from configparser import ConfigParser
from dataclasses import dataclass
from pathlib import Path

from duck_proxy.adapters.requests_fetcher import DEFAULT_USER_AGENT
from duck_proxy.services.url_normalization import DUCKDUCKGO_SEARCH_URL

INI_DEFAULT_NAME = "duck_proxy.ini"


@dataclass(frozen=True)
class AppSettings:
    default_scheme: str = "https"
    search_url: str = DUCKDUCKGO_SEARCH_URL

    user_agent: str = DEFAULT_USER_AGENT
    timeout_seconds: float = 30.0
    chunk_size: int = 8192
    max_html_bytes: int = 10 * 1024 * 1024   # 0 = unlimited
    banner_enabled: bool = True

    flask_host: str = "127.0.0.1"
    flask_port: int = 3000
    flask_debug: bool = False


class IniConfig:
    """
    Adapter around ConfigParser.
    Keeps INI handling out of your app/service code.
    """

    def __init__(self, ini_path: Path):
        self._ini_path = ini_path
        self._cfg = ConfigParser()
        read_ok = self._cfg.read(str(ini_path), encoding="utf-8-sig")
        if not read_ok:
            raise FileNotFoundError(f"INI file not found or unreadable: {ini_path}")

    @staticmethod
    def from_env_or_default() -> "IniConfig":
        ini_raw = (os.getenv("APP_INI") or "").strip()
        # If APP_INI is not set, default to repo-root-relative ini location
        ini_path = Path(ini_raw) if ini_raw else (Path(__file__).resolve().parents[2] / INI_DEFAULT_NAME)
        return IniConfig(ini_path)

    def _cfg_str(self, section: str, key: str, default: str) -> str:
        return (self._cfg.get(section, key, fallback=default) or "").strip() or default

    def load_settings(self) -> AppSettings:
        defaults = AppSettings()

        # URL normalization
        default_scheme = self._cfg_str("url_normalization", "default_scheme", defaults.default_scheme).lower()
        search_url = self._cfg_str("url_normalization", "search_url", defaults.search_url)

        # Upstream fetch + rewriting
        user_agent = self._cfg_str("proxy", "user_agent", defaults.user_agent)
        timeout_seconds = self._cfg.getfloat("proxy", "timeout_seconds", fallback=defaults.timeout_seconds)
        chunk_size = self._cfg.getint("proxy", "chunk_size", fallback=defaults.chunk_size)
        max_html_bytes = self._cfg.getint("proxy", "max_html_bytes", fallback=defaults.max_html_bytes)
        banner_enabled = self._cfg.getboolean("proxy", "banner_enabled", fallback=defaults.banner_enabled)

        # Flask; PORT from the environment wins over the INI
        flask_host = self._cfg_str("flask", "host", defaults.flask_host)
        port_raw = (os.getenv("PORT") or "").strip()
        flask_port = int(port_raw) if port_raw else self._cfg.getint("flask", "port", fallback=defaults.flask_port)
        flask_debug = self._cfg.getboolean("flask", "debug", fallback=defaults.flask_debug)

        # Validate
        if default_scheme not in ("http", "https"):
            raise ValueError(f"url_normalization.default_scheme must be http or https, got {default_scheme!r}")
        if timeout_seconds <= 0:
            raise ValueError("proxy.timeout_seconds must be positive")
        if chunk_size <= 0:
            raise ValueError("proxy.chunk_size must be positive")
        if max_html_bytes < 0:
            raise ValueError("proxy.max_html_bytes must be 0 (unlimited) or positive")

        return AppSettings(
            default_scheme=default_scheme,
            search_url=search_url,
            user_agent=user_agent,
            timeout_seconds=timeout_seconds,
            chunk_size=chunk_size,
            max_html_bytes=max_html_bytes,
            banner_enabled=banner_enabled,
            flask_host=flask_host,
            flask_port=flask_port,
            flask_debug=flask_debug,
        )
