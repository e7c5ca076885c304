"""Protocol definitions for fetch primitives."""

from dataclasses import dataclass
from typing import Protocol

from ..errors import TransportError


@dataclass
class Response:
    """HTTP response container."""

    url: str
    status: int
    content: bytes
    headers: dict[str, str]

    @property
    def text(self) -> str:
        """Decode content as UTF-8."""
        return self.content.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class Request:
    """A GET request descriptor handed back to the host's image loader."""

    url: str
    method: str = "GET"
    headers: dict[str, str] | None = None


class Fetcher(Protocol):
    """Protocol for URL fetchers."""

    async def fetch(self, url: str) -> Response:
        """Fetch a URL and return the response."""
        ...


class BatchFetcher(Fetcher, Protocol):
    """Fetcher that can submit a set of requests and await them all."""

    async def submit(self, urls: list[str]) -> list[Response | TransportError]:
        """Fetch every URL concurrently, one result per URL in the same order."""
        ...
