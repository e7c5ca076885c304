"""Dynasty Scans source: search, details, cover resolution and home layout."""

import logging

import httpx
from pydantic import ValidationError

from .batch import fetch_jsons
from .config import SourceSettings, settings as default_settings
from .core import BatchFetcher, HttpFetcher, RateLimiter, Request, Response
from .errors import DecodeError, HttpStatusError, MissingField, Unimplemented
from .extract import SearchPageExtractor
from .filters import FilterValue, build_search_params
from .models import (
    DynastyManga,
    HomeComponent,
    HomeComponentKind,
    HomeLayout,
    Manga,
    MangaPageResult,
)

# Marks a cover URL whose real image has to be looked up at image-load time
COVER_QUERY_PARAMETERS_FLAG = "?dsCover"

logger = logging.getLogger(__name__)


def create_fetcher(settings: SourceSettings) -> HttpFetcher:
    """Build the fetcher with the source's one-time rate limit policy."""
    return HttpFetcher(
        timeout=settings.timeout,
        user_agent=settings.user_agent,
        max_connections=settings.max_connections,
        max_keepalive_connections=settings.max_keepalive_connections,
        rate_limiter=RateLimiter(settings.rate_limit, settings.rate_limit_period),
    )


class DynastyScans:
    """Content source for dynasty-scans.com."""

    def __init__(
        self,
        settings: SourceSettings | None = None,
        fetcher: BatchFetcher | None = None,
    ):
        self.settings = settings or default_settings
        self.base_url = self.settings.base_url.rstrip("/")
        self.fetcher = fetcher or create_fetcher(self.settings)

    def cover_placeholder(self, href: str) -> str:
        return f"{self.base_url}{href}{COVER_QUERY_PARAMETERS_FLAG}"

    def detail_url(self, key: str) -> str:
        return f"{self.base_url}/{key}.json"

    async def _get_ok(self, url: str) -> Response:
        response = await self.fetcher.fetch(url)
        if response.status != 200:
            raise HttpStatusError(url, response.status)
        return response

    async def _get_details(self, url: str) -> DynastyManga:
        response = await self._get_ok(url)
        try:
            return DynastyManga.model_validate_json(response.content)
        except ValidationError as e:
            raise DecodeError(url, e) from e

    async def get_search_manga_list(
        self,
        query: str | None,
        page: int,
        filters: list[FilterValue],
    ) -> MangaPageResult:
        """
        Run a search and return one page of entries.

        Covers are placeholders resolved later through get_image_request, so the
        page is usable without a detail request per entry.
        """
        logger.debug("Query: %r, page: %d, filters: %r", query, page, filters)
        params = build_search_params(query, page, filters, classes=self.settings.search_classes)
        logger.debug("Query parameters: %r", params)

        url = str(httpx.URL(f"{self.base_url}/search", params=params.items()))
        response = await self._get_ok(url)
        extractor = SearchPageExtractor(response.text)

        entries = [
            Manga(
                key=entry.key,
                title=entry.title,
                cover=self.cover_placeholder(entry.href),
            )
            for entry in extractor.entries()
        ]
        return MangaPageResult(
            entries=entries,
            has_next_page=page < extractor.total_pages(),
        )

    async def get_manga_details(self, key: str) -> Manga:
        """Fetch a single entry's detail document."""
        details = await self._get_details(self.detail_url(key))
        return details.to_manga(self.base_url)

    async def fetch_details(self, entries: list[Manga]) -> list[Manga]:
        """
        Fetch detail documents for a page of entries as one retrying batch.

        Returns entries in the same order; fails as a whole if any entry fails.
        """
        urls = [self.detail_url(entry.key) for entry in entries]
        records = await fetch_jsons(
            urls,
            DynastyManga,
            self.fetcher,
            max_attempts=self.settings.max_attempts,
            retry_delay=self.settings.retry_delay,
        )
        return [record.to_manga(self.base_url) for record in records]

    async def get_manga_update(
        self,
        manga: Manga,
        needs_details: bool,
        needs_chapters: bool,
    ) -> Manga:
        if needs_chapters:
            raise Unimplemented("Chapter lists are not supported")
        if not needs_details:
            return manga
        return await self.get_manga_details(manga.key)

    async def get_page_list(self, manga: Manga, chapter: object) -> list:
        raise Unimplemented("Page lists are not supported")

    async def get_manga_list(self, listing: object, page: int) -> MangaPageResult:
        raise Unimplemented("Listings are not supported")

    async def handle_deep_link(self, url: str):
        raise Unimplemented("Deep links are not supported")

    def get_home(self) -> HomeLayout:
        return HomeLayout(components=[
            HomeComponent(title="Popular New Titles", kind=HomeComponentKind.BIG_SCROLLER),
            HomeComponent(title="Latest Updates", kind=HomeComponentKind.MANGA_CHAPTER_LIST),
        ])

    async def resolve_cover(self, url: str) -> str:
        """
        Turn a deferred cover placeholder into the real image URL.

        URLs without the placeholder flag are returned unchanged.

        Raises:
            MissingField: The detail document has no cover.
        """
        flag_idx = url.find(COVER_QUERY_PARAMETERS_FLAG)
        if flag_idx == -1:
            return url

        details = await self._get_details(f"{url[:flag_idx]}.json")
        if not details.cover_url:
            raise MissingField("cover", "Missing cover image")
        return f"{self.base_url}{details.cover_url}"

    async def get_image_request(self, url: str, context: object | None = None) -> Request:
        """Image-load hook: the request the host should issue for `url`."""
        return Request(url=await self.resolve_cover(url))

    async def close(self):
        close = getattr(self.fetcher, "close", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> "DynastyScans":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
