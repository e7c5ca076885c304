"""Search page scraping using CSS selectors."""

from dataclasses import dataclass

from selectolax.parser import HTMLParser

SEARCH_ENTRY = ".chapter-list a.name"
PAGINATION_COUNT = "div.pagination a"


@dataclass
class SearchEntry:
    """A search hit as it appears on the page."""

    title: str
    href: str

    @property
    def key(self) -> str:
        """Entry path without the leading slash, e.g. "series/foo"."""
        return self.href[1:] if self.href.startswith("/") else self.href


class SearchPageExtractor:
    """Extract entries and pagination from a search results page."""

    def __init__(self, html: str):
        self.tree = HTMLParser(html)

    def css(self, selector: str, attribute: str | None = None) -> list[str]:
        """Extract text (or an attribute) of every node matching a selector."""
        results = []
        for node in self.tree.css(selector):
            if attribute:
                attr_val = node.attributes.get(attribute)
                if attr_val:
                    results.append(attr_val)
            else:
                text = node.text(strip=True)
                if text:
                    results.append(text)
        return results

    def entries(self) -> list[SearchEntry]:
        """Entries with both a title and a link; anything else is skipped."""
        entries = []
        for node in self.tree.css(SEARCH_ENTRY):
            title = node.text(strip=True)
            href = node.attributes.get("href")
            if title and href:
                entries.append(SearchEntry(title=title, href=href))
        return entries

    def total_pages(self) -> int:
        """Highest page number among the pagination links, 1 without pagination."""
        numbers = [int(text) for text in self.css(PAGINATION_COUNT) if text.isdecimal()]
        return max(numbers, default=1)
