"""Tests for search page extraction."""

import pytest

from dynasty_source.extract import SearchEntry, SearchPageExtractor


class TestSearchPageExtractor:
    @pytest.fixture
    def html(self):
        return """
        <!DOCTYPE html>
        <html>
        <body>
            <dl class="chapter-list">
                <dd><a class="name" href="/series/alpha_beta">Alpha Beta</a></dd>
                <dd><a class="name" href="/series/gamma">Gamma</a> <a class="label" href="/tags/yuri">Yuri</a></dd>
                <dd><a class="name" href="/anthologies/delta">  Delta  </a></dd>
                <dd><a class="name">No Link</a></dd>
                <dd><a class="name" href="/series/empty"></a></dd>
            </dl>
            <a class="name" href="/series/outside">Outside the list</a>
            <div class="pagination">
                <a href="/search?page=1">1</a>
                <a href="/search?page=2">2</a>
                <a href="/search?page=12">12</a>
                <a href="/search?page=2">Next &rsaquo;</a>
            </div>
        </body>
        </html>
        """

    def test_entries(self, html):
        """Only titled, linked entries inside the chapter list are returned."""
        entries = SearchPageExtractor(html).entries()
        assert entries == [
            SearchEntry(title="Alpha Beta", href="/series/alpha_beta"),
            SearchEntry(title="Gamma", href="/series/gamma"),
            SearchEntry(title="Delta", href="/anthologies/delta"),
        ]

    def test_total_pages_takes_max_number(self, html):
        """Total pages is the highest numeric pagination link."""
        assert SearchPageExtractor(html).total_pages() == 12

    def test_total_pages_defaults_to_one(self):
        """Without pagination there is a single page."""
        assert SearchPageExtractor("<html><body></body></html>").total_pages() == 1

    def test_total_pages_skips_non_decimal_text(self):
        """Digit-like text that is not a number is ignored."""
        html = '<div class="pagination"><a>1</a><a>\u00b2</a><a>4</a></div>'
        assert SearchPageExtractor(html).total_pages() == 4

    def test_css_extracts_attribute(self, html):
        """css() with an attribute returns attribute values."""
        hrefs = SearchPageExtractor(html).css(".chapter-list a.name", attribute="href")
        assert "/series/gamma" in hrefs
        assert len(hrefs) == 4

    def test_empty_page(self):
        """An empty page has no entries."""
        assert SearchPageExtractor("").entries() == []


class TestSearchEntry:
    def test_key_strips_leading_slash(self):
        """Key is the href without its leading slash."""
        assert SearchEntry(title="A", href="/series/a").key == "series/a"

    def test_key_without_leading_slash(self):
        """Hrefs without a leading slash are used as-is."""
        assert SearchEntry(title="A", href="series/a").key == "series/a"
