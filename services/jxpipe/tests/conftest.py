import httpx
import pytest

from jxpipe.config import AppConfig
from jxpipe.fetcher import JsonFetcher
from jxpipe.runtime import Runtime


@pytest.fixture()
def make_fetcher():
    fetchers = []

    def factory(handler, retries=1):
        fetcher = JsonFetcher(
            timeout=5.0,
            retries=retries,
            user_agent="jxpipe-test",
            transport=httpx.MockTransport(handler),
        )
        fetchers.append(fetcher)
        return fetcher

    yield factory
    for fetcher in fetchers:
        fetcher.close()


@pytest.fixture()
def make_runtime(make_fetcher):
    def factory(handler, retries=1):
        return Runtime(config=AppConfig(http_retries=retries), fetcher=make_fetcher(handler, retries))

    return factory
