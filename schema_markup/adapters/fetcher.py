"""
Content Fetcher for the Schema Markup Generator.
Retrieves the raw markup of a page, following redirects itself so the
number of hops stays bounded.
"""
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urljoin

import httpx

from schema_markup.config import config
from schema_markup.exceptions import FetchError, FetchTimeoutError, InvalidInputError
from schema_markup.utils.logger import LayerLogger


@dataclass
class FetchResult:
    """Raw page body tied to the URL it was finally served from."""
    url: str
    html: str
    status_code: int
    redirects: int = 0


class ContentFetcher:
    """
    Fetches page markup over HTTP(S).
    
    - Redirects (3xx + Location) are resolved against the current URL and
      followed up to max_redirects hops
    - gzip bodies are decompressed by httpx, then decoded as UTF-8
    - Any other non-2xx status, a timeout or a transport error raises
    """
    
    def __init__(
        self,
        timeout: Optional[float] = None,
        max_redirects: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT
        self.max_redirects = max_redirects if max_redirects is not None else config.MAX_REDIRECTS
        self.transport = transport
        self.logger = LayerLogger("content_fetcher")
    
    async def fetch(self, url: str) -> FetchResult:
        """
        Fetch the page body for a URL.
        
        Args:
            url: Absolute http:// or https:// URL
        
        Returns:
            FetchResult with the decoded body and the final URL
        
        Raises:
            InvalidInputError: URL is missing or not http(s)
            FetchTimeoutError: No response within the timeout
            FetchError: Non-2xx status, too many redirects or transport failure
        """
        if not url or not isinstance(url, str) or not url.startswith(("http://", "https://")):
            raise InvalidInputError("Please provide a valid URL starting with http:// or https://")
        
        self.logger.log_action("fetch_page", "started", url=url)
        
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=False,
                transport=self.transport,
            ) as client:
                result = await self._fetch_following_redirects(client, url)
        except httpx.TimeoutException as e:
            self.logger.log_error("Request timeout", error_type="timeout", url=url)
            raise FetchTimeoutError("Request timeout", url=url) from e
        except httpx.InvalidURL as e:
            raise InvalidInputError(f"Invalid URL: {e}") from e
        except httpx.HTTPError as e:
            self.logger.log_error(
                f"Failed to fetch URL: {str(e)}",
                error_type="transport_error",
                url=url
            )
            raise FetchError(str(e) or type(e).__name__, url=url) from e
        
        self.logger.log_action(
            "fetch_page",
            "completed",
            url=result.url,
            status_code=result.status_code,
            redirects=result.redirects,
            content_length=len(result.html)
        )
        return result
    
    async def _fetch_following_redirects(self, client: httpx.AsyncClient, url: str) -> FetchResult:
        """Issue GETs until a non-redirect response arrives."""
        current_url = url
        
        for hop in range(self.max_redirects + 1):
            response = await client.get(current_url, headers=self._get_headers())
            status_code = response.status_code
            location = response.headers.get("location")
            
            if 300 <= status_code < 400 and location:
                next_url = urljoin(current_url, location)
                self.logger.log_fetch(
                    url=current_url,
                    status_code=status_code,
                    result="redirect",
                    location=next_url
                )
                current_url = next_url
                continue
            
            if not 200 <= status_code < 300:
                self.logger.log_fetch(url=current_url, status_code=status_code, result="failed")
                raise FetchError(
                    f"HTTP {status_code}: {response.reason_phrase}",
                    status_code=status_code,
                    url=current_url,
                )
            
            self.logger.log_fetch(url=current_url, status_code=status_code, result="ok")
            return FetchResult(
                url=current_url,
                html=response.content.decode("utf-8", errors="replace"),
                status_code=status_code,
                redirects=hop,
            )
        
        self.logger.log_error(
            "Redirect limit exceeded",
            error_type="too_many_redirects",
            url=url,
            max_redirects=self.max_redirects
        )
        raise FetchError(
            f"Too many redirects (more than {self.max_redirects})",
            url=current_url,
        )
    
    def _get_headers(self) -> dict:
        """Get request headers mimicking a browser."""
        return {
            "User-Agent": config.USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.5",
            "Accept-Encoding": "gzip, deflate",
            "Connection": "keep-alive",
            "Upgrade-Insecure-Requests": "1",
        }
