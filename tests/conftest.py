"""Shared fixtures for the extraction pipeline tests."""
from typing import Callable, Dict, List, Optional

import httpx
import pytest

from schema_markup.adapters.fetcher import FetchResult


class StaticFetcher:
    """Fetcher double serving fixed markup (or raising a fixed error)."""
    
    def __init__(self, html: str = "", final_url: Optional[str] = None, error: Optional[Exception] = None):
        self.html = html
        self.final_url = final_url
        self.error = error
        self.calls: List[str] = []
    
    async def fetch(self, url: str) -> FetchResult:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return FetchResult(url=self.final_url or url, html=self.html, status_code=200)


@pytest.fixture
def static_fetcher() -> Callable[..., StaticFetcher]:
    return StaticFetcher


@pytest.fixture
def routed_transport() -> Callable[[Dict[str, Callable[[httpx.Request], httpx.Response]]], httpx.MockTransport]:
    """Build a MockTransport dispatching on the full request URL."""
    
    def build(routes):
        def handler(request: httpx.Request) -> httpx.Response:
            route = routes.get(str(request.url))
            if route is None:
                return httpx.Response(404)
            return route(request)
        return httpx.MockTransport(handler)
    
    return build
