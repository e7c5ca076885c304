"""Tests for site records and catalog mapping."""

import pytest
from pydantic import ValidationError

from dynasty_source.models import (
    ContentRating,
    DynastyManga,
    DynastyMangaType,
    Manga,
    MangaPageResult,
    PublicationStatus,
)

BASE = "https://dynasty-scans.com"


class TestDynastyManga:
    def test_parses_detail_document(self):
        """Known fields are read and unknown ones ignored."""
        record = DynastyManga.model_validate_json(
            '{"name": "Alpha", "permalink": "alpha", "type": "Series",'
            ' "cover": "/system/alpha.jpg", "description": "<p>Hi</p>",'
            ' "tags": [{"type": "General", "name": "Yuri"}], "taggings": []}'
        )
        assert record.name == "Alpha"
        assert record.type is DynastyMangaType.SERIES
        assert record.cover_url == "/system/alpha.jpg"
        assert record.description == "<p>Hi</p>"

    def test_optional_fields(self):
        """Cover and description may be absent or null."""
        record = DynastyManga.model_validate(
            {"name": "Beta", "permalink": "beta", "type": "Doujin", "cover": None}
        )
        assert record.cover_url is None
        assert record.description is None

    def test_rejects_unknown_type(self):
        """Types other than Anthology, Doujin and Series are a decode failure."""
        with pytest.raises(ValidationError):
            DynastyManga.model_validate({"name": "X", "permalink": "x", "type": "Chapter"})

    @pytest.mark.parametrize(
        "kind,path",
        [("Anthology", "anthology"), ("Doujin", "doujin"), ("Series", "series")],
    )
    def test_type_path(self, kind, path):
        """Types map to lowercase URL segments."""
        assert DynastyMangaType(kind).path == path

    def test_to_manga(self):
        """Mapping qualifies the cover and builds key and URL from the type."""
        record = DynastyManga.model_validate(
            {"name": "Alpha", "permalink": "alpha", "type": "Series",
             "cover": "/system/alpha.jpg", "description": "desc"}
        )
        manga = record.to_manga(BASE)

        assert manga.key == "series/alpha"
        assert manga.title == "Alpha"
        assert manga.cover == f"{BASE}/system/alpha.jpg"
        assert manga.url == f"{BASE}/series/alpha"
        assert manga.description == "desc"
        assert manga.tags is None
        assert manga.status is PublicationStatus.UNKNOWN
        assert manga.content_rating is ContentRating.UNKNOWN

    def test_to_manga_without_cover(self):
        """A missing cover stays None."""
        record = DynastyManga.model_validate({"name": "A", "permalink": "a", "type": "Anthology"})
        assert record.to_manga(BASE).cover is None


class TestCatalogModels:
    def test_manga_defaults(self):
        """Optional catalog fields default to empty."""
        manga = Manga(key="series/a", title="A")
        assert manga.cover is None
        assert manga.authors is None
        assert manga.status is PublicationStatus.UNKNOWN

    def test_page_result_defaults(self):
        """An empty page has no next page."""
        result = MangaPageResult()
        assert result.entries == []
        assert result.has_next_page is False
