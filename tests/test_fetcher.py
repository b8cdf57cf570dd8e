"""Tests for the content fetcher (redirects, gzip, failures)."""
import gzip

import httpx
import pytest

from schema_markup.adapters.fetcher import ContentFetcher
from schema_markup.exceptions import FetchError, FetchTimeoutError, InvalidInputError

PAGE = "<html><head><title>Widgets</title></head><body>Café</body></html>"


@pytest.mark.asyncio
async def test_fetch_returns_decoded_body(routed_transport):
    transport = routed_transport({
        "https://example.com/": lambda request: httpx.Response(200, content=PAGE.encode("utf-8")),
    })
    fetcher = ContentFetcher(transport=transport)
    
    result = await fetcher.fetch("https://example.com/")
    
    assert result.html == PAGE
    assert result.url == "https://example.com/"
    assert result.status_code == 200
    assert result.redirects == 0


@pytest.mark.asyncio
async def test_fetch_sends_browser_headers():
    seen = {}
    
    def handler(request: httpx.Request) -> httpx.Response:
        seen["headers"] = request.headers
        return httpx.Response(200, text="ok")
    
    fetcher = ContentFetcher(transport=httpx.MockTransport(handler))
    await fetcher.fetch("http://example.com/page")
    
    headers = seen["headers"]
    assert headers["User-Agent"].startswith("Mozilla/5.0")
    assert "text/html" in headers["Accept"]
    assert headers["Accept-Language"] == "en-US,en;q=0.5"


@pytest.mark.asyncio
async def test_relative_redirect_is_resolved_and_refetched(routed_transport):
    requested = []
    
    def old(request):
        requested.append(str(request.url))
        return httpx.Response(301, headers={"Location": "/new-path"})
    
    def new(request):
        requested.append(str(request.url))
        return httpx.Response(200, text=PAGE)
    
    transport = routed_transport({
        "https://example.com/old": old,
        "https://example.com/new-path": new,
    })
    fetcher = ContentFetcher(transport=transport)
    
    result = await fetcher.fetch("https://example.com/old")
    
    assert requested == ["https://example.com/old", "https://example.com/new-path"]
    assert result.url == "https://example.com/new-path"
    assert result.redirects == 1
    assert result.html == PAGE


@pytest.mark.asyncio
async def test_absolute_redirect_across_hosts(routed_transport):
    transport = routed_transport({
        "http://example.com/": lambda r: httpx.Response(302, headers={"Location": "https://www.example.org/home"}),
        "https://www.example.org/home": lambda r: httpx.Response(200, text="moved"),
    })
    result = await ContentFetcher(transport=transport).fetch("http://example.com/")
    
    assert result.url == "https://www.example.org/home"
    assert result.html == "moved"


@pytest.mark.asyncio
async def test_redirect_loop_is_bounded():
    calls = []
    
    def handler(request):
        calls.append(str(request.url))
        return httpx.Response(302, headers={"Location": "/loop"})
    
    fetcher = ContentFetcher(max_redirects=3, transport=httpx.MockTransport(handler))
    
    with pytest.raises(FetchError, match="Too many redirects"):
        await fetcher.fetch("https://example.com/loop")
    assert len(calls) == 4


@pytest.mark.asyncio
async def test_gzip_body_is_decompressed(routed_transport):
    compressed = gzip.compress(PAGE.encode("utf-8"))
    transport = routed_transport({
        "https://example.com/": lambda r: httpx.Response(
            200, headers={"Content-Encoding": "gzip"}, content=compressed
        ),
    })
    result = await ContentFetcher(transport=transport).fetch("https://example.com/")
    
    assert result.html == PAGE


@pytest.mark.asyncio
async def test_non_success_status_raises_with_code(routed_transport):
    transport = routed_transport({
        "https://example.com/missing": lambda r: httpx.Response(404),
    })
    
    with pytest.raises(FetchError) as exc_info:
        await ContentFetcher(transport=transport).fetch("https://example.com/missing")
    
    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "HTTP 404: Not Found"


@pytest.mark.asyncio
async def test_redirect_without_location_is_a_failure(routed_transport):
    transport = routed_transport({
        "https://example.com/": lambda r: httpx.Response(302),
    })
    
    with pytest.raises(FetchError) as exc_info:
        await ContentFetcher(transport=transport).fetch("https://example.com/")
    assert exc_info.value.status_code == 302


@pytest.mark.asyncio
async def test_timeout_raises_timeout_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)
    
    fetcher = ContentFetcher(transport=httpx.MockTransport(handler))
    
    with pytest.raises(FetchTimeoutError, match="Request timeout"):
        await fetcher.fetch("https://slow.example.com/")


@pytest.mark.asyncio
async def test_transport_error_raises_fetch_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)
    
    fetcher = ContentFetcher(transport=httpx.MockTransport(handler))
    
    with pytest.raises(FetchError, match="connection refused") as exc_info:
        await fetcher.fetch("https://down.example.com/")
    assert not isinstance(exc_info.value, FetchTimeoutError)
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
@pytest.mark.parametrize("url", ["", "ftp://example.com/file", "example.com", None])
async def test_invalid_url_is_rejected_before_any_request(url):
    def handler(request):
        raise AssertionError("no request expected")
    
    fetcher = ContentFetcher(transport=httpx.MockTransport(handler))
    
    with pytest.raises(InvalidInputError):
        await fetcher.fetch(url)
