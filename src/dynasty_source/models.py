"""Site records and the normalized catalog model handed to the host."""

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, Field

from .config import settings


class PublicationStatus(str, Enum):
    UNKNOWN = "unknown"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    HIATUS = "hiatus"


class ContentRating(str, Enum):
    UNKNOWN = "unknown"
    SAFE = "safe"
    SUGGESTIVE = "suggestive"
    NSFW = "nsfw"


@dataclass
class Manga:
    """A catalog entry as the host sees it."""

    key: str
    title: str
    cover: str | None = None
    url: str | None = None
    artists: list[str] | None = None
    authors: list[str] | None = None
    description: str | None = None
    tags: list[str] | None = None
    status: PublicationStatus = PublicationStatus.UNKNOWN
    content_rating: ContentRating = ContentRating.UNKNOWN


@dataclass
class MangaPageResult:
    """One page of catalog entries."""

    entries: list[Manga] = field(default_factory=list)
    has_next_page: bool = False


class HomeComponentKind(str, Enum):
    BIG_SCROLLER = "big_scroller"
    MANGA_CHAPTER_LIST = "manga_chapter_list"


@dataclass
class HomeComponent:
    title: str | None
    kind: HomeComponentKind
    subtitle: str | None = None


@dataclass
class HomeLayout:
    components: list[HomeComponent] = field(default_factory=list)


class DynastyMangaType(str, Enum):
    ANTHOLOGY = "Anthology"
    DOUJIN = "Doujin"
    SERIES = "Series"

    @property
    def path(self) -> str:
        """URL path segment for this type, e.g. "series"."""
        return self.value.lower()


class DynastyManga(BaseModel):
    """Detail document served at `/<type>/<permalink>.json`."""

    name: str
    permalink: str
    type: DynastyMangaType
    cover_url: str | None = Field(default=None, alias="cover")
    description: str | None = None

    @property
    def key(self) -> str:
        """Catalog key, the same "<type>/<permalink>" path search results use."""
        return f"{self.type.path}/{self.permalink}"

    def to_manga(self, base_url: str | None = None) -> Manga:
        base_url = base_url or settings.base_url
        return Manga(
            key=self.key,
            title=self.name,
            cover=f"{base_url}{self.cover_url}" if self.cover_url else None,
            url=f"{base_url}/{self.type.path}/{self.permalink}",
            description=self.description,
        )
