"""Batched, retrying JSON fetches.

A batch is submitted to the fetcher as a single unit. Items answered with a
status other than 200 stay pending and are resubmitted together on the next
pass; a transport error or an undecodable body fails the whole batch. The
result is all-or-nothing and always in input order.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import TypeVar

from pydantic import TypeAdapter, ValidationError

from .core import BatchFetcher, Response
from .errors import DecodeError, RetryExhausted, TransportError

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 4
DEFAULT_RETRY_DELAY = 1.0

logger = logging.getLogger(__name__)


@dataclass
class FetchUnit:
    """One URL of a batch and, once fetched successfully, its response."""

    url: str
    response: Response | None = None

    def update_response(self, response: Response):
        logger.debug("Valid response for %s", self.url)
        self.response = response


class BatchedRequest:
    """Fetch a list of URLs as one batch and decode every body as JSON."""

    def __init__(
        self,
        urls: list[str],
        fetcher: BatchFetcher,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        retry_delay: float = DEFAULT_RETRY_DELAY,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.units = [FetchUnit(url) for url in urls]
        self.pending: list[int] = list(range(len(self.units)))
        self.fetcher = fetcher
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self.attempts = 0

    def is_completed(self) -> bool:
        return not self.pending

    def pending_urls(self) -> list[str]:
        return [self.units[idx].url for idx in self.pending]

    async def get_jsons(self, record_type: type[T]) -> list[T]:
        """Send every request, then decode all bodies as `record_type`."""
        await self.send_requests()
        return self.decode_all(record_type)

    async def send_requests(self):
        """
        Run submit passes until every unit holds a 200 response.

        Raises:
            TransportError: The fetcher reported a network failure on any pass.
            RetryExhausted: Units were still pending after `max_attempts` passes.
        """
        while not self.is_completed():
            self.attempts += 1
            indexes = list(self.pending)
            results = await self.fetcher.submit([self.units[idx].url for idx in indexes])

            for result in results:
                if isinstance(result, TransportError):
                    raise result

            for result, idx in zip(results, indexes, strict=True):
                if result.status == 200:
                    self.units[idx].update_response(result)
                    self.pending.remove(idx)
                else:
                    logger.warning(
                        "Bad response for %s (index %d): status %d, pass %d/%d",
                        self.units[idx].url, idx, result.status, self.attempts, self.max_attempts,
                    )

            if self.is_completed():
                break

            if self.attempts >= self.max_attempts:
                raise RetryExhausted(self.pending_urls(), self.attempts)

            await asyncio.sleep(self.retry_delay)

        logger.debug("Successfully sent all %d requests in %d pass(es)", len(self.units), self.attempts)

    def decode_all(self, record_type: type[T]) -> list[T]:
        """Decode every stored body in input order; one failure fails them all."""
        adapter = TypeAdapter(record_type)
        records = []
        for unit in self.units:
            if unit.response is None:
                raise RuntimeError(f"No response stored for {unit.url}")
            try:
                records.append(adapter.validate_json(unit.response.content))
            except ValidationError as e:
                raise DecodeError(unit.url, e) from e
        return records


async def fetch_jsons(
    urls: list[str],
    record_type: type[T],
    fetcher: BatchFetcher,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    retry_delay: float = DEFAULT_RETRY_DELAY,
) -> list[T]:
    """Fetch `urls` as one retrying batch and decode each body as `record_type`."""
    batch = BatchedRequest(urls, fetcher, max_attempts=max_attempts, retry_delay=retry_delay)
    return await batch.get_jsons(record_type)
