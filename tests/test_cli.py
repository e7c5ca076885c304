"""Tests for the command line interface."""

import json
import logging
import re

import pytest
from typer.testing import CliRunner

from dynasty_source import __version__
from dynasty_source.cli import app

runner = CliRunner()

SEARCH_HTML = """
<dl class="chapter-list"><dd><a class="name" href="/series/alpha">Alpha</a></dd></dl>
"""


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestCli:
    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_home(self):
        result = runner.invoke(app, ["home"])
        assert result.exit_code == 0
        assert "Popular New Titles (big_scroller)" in result.output
        assert "Latest Updates (manga_chapter_list)" in result.output

    def test_bad_sort_exits_with_error(self):
        """Source errors are reported and exit with status 1."""
        result = runner.invoke(app, ["search", "abc", "--sort", "9"])
        assert result.exit_code == 1
        assert "Unsupported filter value" in result.output

    def test_search_prints_entries(self, httpx_mock):
        httpx_mock.add_response(url=re.compile(r"https://dynasty-scans\.com/search\?.*"), text=SEARCH_HTML)

        result = runner.invoke(app, ["search", "alpha"])

        assert result.exit_code == 0
        assert "1. Alpha [series/alpha]" in result.output
        assert "1 entries on page 1 (last page)" in result.output

    def test_search_writes_json(self, httpx_mock, tmp_path):
        httpx_mock.add_response(url=re.compile(r"https://dynasty-scans\.com/search\?.*"), text=SEARCH_HTML)
        output = tmp_path / "result.json"

        result = runner.invoke(app, ["search", "alpha", "-o", str(output)])

        assert result.exit_code == 0
        data = json.loads(output.read_text())
        assert data["has_next_page"] is False
        assert data["entries"][0]["key"] == "series/alpha"
        assert data["entries"][0]["cover"].endswith("/series/alpha?dsCover")

    def test_details_invalid_key_exits_with_error(self):
        """An unusable key is reported as an error, not a traceback."""
        result = runner.invoke(app, ["details", "series/a\x00b"])
        assert result.exit_code == 1
        assert "Transport error" in result.output

    def test_cover_passthrough(self):
        result = runner.invoke(app, ["cover", "https://dynasty-scans.com/system/a.jpg"])
        assert result.exit_code == 0
        assert result.output.strip() == "https://dynasty-scans.com/system/a.jpg"
