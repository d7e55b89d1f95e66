"""HTTP fetcher for remote JSON resources."""

from __future__ import annotations

import time
from typing import Optional
from urllib.parse import urlsplit

import httpx

from .logging import get_logger
from .values import JsonValue, parse_json

logger = get_logger(__name__)

JSON_MEDIA_TYPE = "application/json"


class FetchError(Exception):
    """Raised when the target resource cannot be turned into a JSON value."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidTargetError(FetchError):
    status_code = 400


class UnsupportedContentTypeError(FetchError):
    status_code = 415


class UpstreamStatusError(FetchError):
    """Non-2xx upstream response; ``status_code`` mirrors the upstream status."""


class UpstreamUnavailableError(FetchError):
    status_code = 502


class InvalidJsonError(FetchError):
    status_code = 500


class JsonFetcher:
    """Issues GET requests and parses JSON responses into tagged values."""

    def __init__(
        self,
        timeout: float,
        retries: int,
        user_agent: str,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.timeout = timeout
        self.retries = max(1, retries)
        self._client = httpx.Client(
            timeout=timeout,
            headers={"User-Agent": user_agent},
            follow_redirects=True,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def fetch(self, url: str) -> JsonValue:
        _validate_target(url)
        logger.info("fetch_target", url=url)
        response = self._get(url)

        # Content type is checked before status, so an HTML error page is a 415.
        content_type = response.headers.get("Content-Type", "")
        if JSON_MEDIA_TYPE not in content_type:
            raise UnsupportedContentTypeError(
                f"Target URL returned {content_type} instead of {JSON_MEDIA_TYPE}"
            )

        if not response.is_success:
            logger.warning(
                "upstream_error",
                url=url,
                status=response.status_code,
                reason=response.reason_phrase,
            )
            raise UpstreamStatusError(
                f"Target API error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            return parse_json(response.content)
        except (ValueError, RecursionError) as exc:
            raise InvalidJsonError(str(exc) or type(exc).__name__) from exc

    def _get(self, url: str) -> httpx.Response:
        for attempt in range(1, self.retries + 1):
            try:
                return self._client.get(url)
            except httpx.TransportError as exc:
                logger.warning(
                    "http_retry",
                    url=url,
                    attempt=attempt,
                    retries=self.retries,
                    error=str(exc),
                )
                if attempt == self.retries:
                    raise UpstreamUnavailableError(f"Target unreachable: {exc}") from exc
                backoff = min(60.0, 2 ** (attempt - 1))
                time.sleep(backoff)


def _validate_target(url: str) -> None:
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise InvalidTargetError(f"Unsupported target URL: {url}")
