"""Runtime wiring for CLI and service entrypoints."""

from __future__ import annotations

from dataclasses import dataclass

from .config import AppConfig, load_config
from .fetcher import JsonFetcher
from .logging import configure_logging


@dataclass(slots=True)
class Runtime:
    config: AppConfig
    fetcher: JsonFetcher

    def close(self) -> None:
        self.fetcher.close()


def build_runtime(config: AppConfig | None = None) -> Runtime:
    cfg = config or load_config()
    configure_logging(cfg.log_level, cfg.log_json)

    fetcher = JsonFetcher(
        timeout=cfg.http_timeout,
        retries=cfg.http_retries,
        user_agent=cfg.http_user_agent,
    )
    return Runtime(config=cfg, fetcher=fetcher)
