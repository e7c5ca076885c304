"""HTTP fetcher implementation using httpx."""

import asyncio
import logging

import httpx

from ..errors import TransportError
from .protocols import Response
from .rate_limit import RateLimiter

DEFAULT_USER_AGENT = "DynastySource/0.1 (+https://github.com/dynasty-source)"

logger = logging.getLogger(__name__)


class HttpFetcher:
    """Async HTTP fetcher using httpx with connection reuse and a shared rate limit."""

    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        max_connections: int = 100,
        max_keepalive_connections: int = 20,
        rate_limiter: RateLimiter | None = None,
    ):
        self.timeout = httpx.Timeout(timeout)
        self.user_agent = user_agent
        self.limits = httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive_connections,
        )
        self.rate_limiter = rate_limiter or RateLimiter()
        self._client: httpx.AsyncClient | None = None
        self._lock = asyncio.Lock()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client with double-checked locking."""
        if self._client is None:
            async with self._lock:
                if self._client is None:
                    self._client = httpx.AsyncClient(
                        timeout=self.timeout,
                        limits=self.limits,
                        headers={"User-Agent": self.user_agent},
                        follow_redirects=True,
                    )
        return self._client

    async def fetch(self, url: str) -> Response:
        """Fetch a URL and return the response. Raises TransportError on network failure."""
        client = await self._get_client()
        await self.rate_limiter.acquire()
        try:
            resp = await client.get(url)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise TransportError(url, e) from e
        logger.debug("GET %s -> %d", url, resp.status_code)
        return Response(
            url=str(resp.url),
            status=resp.status_code,
            content=resp.content,
            headers=dict(resp.headers),
        )

    async def _fetch_result(self, url: str) -> Response | TransportError:
        try:
            return await self.fetch(url)
        except TransportError as e:
            return e

    async def submit(self, urls: list[str]) -> list[Response | TransportError]:
        """Fetch all URLs concurrently and return once every request has finished."""
        return list(await asyncio.gather(*(self._fetch_result(url) for url in urls)))

    async def close(self):
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
