"""CLI interface using typer."""

import asyncio
import json
from dataclasses import asdict

import typer

from .config import settings
from .errors import SourceError
from .filters import SORT_FILTER_ID, TAG_FILTER_ID, MultiSelectFilter, SortFilter
from .logging_config import setup_logging
from .models import Manga
from .source import DynastyScans

app = typer.Typer(
    name="dynasty",
    help="Dynasty Scans content source",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Show debug logging"),
):
    setup_logging("DEBUG" if verbose else settings.log_level)


def _run(coro):
    """Run a source coroutine, reporting source errors as a failed exit."""
    try:
        return asyncio.run(coro)
    except SourceError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


def _echo_manga(index: int, manga: Manga):
    typer.echo(f"{index}. {manga.title} [{manga.key}]")
    if manga.cover:
        typer.echo(f"   cover: {manga.cover}")
    if manga.description:
        typer.echo(f"   {manga.description[:200]}")


async def _search(
    query: str | None,
    page: int,
    sort: int | None,
    tags: list[str],
    exclude_tags: list[str],
    details: bool,
) -> dict:
    filters = []
    if sort is not None:
        filters.append(SortFilter(id=SORT_FILTER_ID, index=sort))
    if tags or exclude_tags:
        filters.append(MultiSelectFilter(id=TAG_FILTER_ID, included=tags, excluded=exclude_tags))

    async with DynastyScans() as source:
        result = await source.get_search_manga_list(query, page, filters)
        entries = await source.fetch_details(result.entries) if details else result.entries

    return {
        "page": page,
        "has_next_page": result.has_next_page,
        "entries": [asdict(entry) for entry in entries],
    }


@app.command()
def search(
    query: str = typer.Argument(None, help="Search text"),
    page: int = typer.Option(1, "--page", "-p", help="Result page"),
    sort: int = typer.Option(None, "--sort", "-s", help="0 alphabetical, 1 best match, 2 date added, 3 release date"),
    tag: list[str] = typer.Option([], "--tag", "-t", help="Only titles with this tag"),
    exclude_tag: list[str] = typer.Option([], "--exclude-tag", "-x", help="Leave out titles with this tag"),
    details: bool = typer.Option(False, "--details", help="Fetch detail documents for every entry"),
    output: str = typer.Option(None, "-o", "--output", help="Output file (JSON)"),
):
    """Search the catalog."""
    result = _run(_search(query, page, sort, tag, exclude_tag, details))

    if output:
        with open(output, "w") as f:
            json.dump(result, f, indent=2, ensure_ascii=False)
        typer.echo(f"Saved to {output}")
        return

    for i, entry in enumerate(result["entries"], 1):
        _echo_manga(i, Manga(**entry))
    more = "more pages available" if result["has_next_page"] else "last page"
    typer.echo(f"\n{len(result['entries'])} entries on page {page} ({more})")


async def _details(key: str) -> Manga:
    async with DynastyScans() as source:
        return await source.get_manga_details(key)


@app.command()
def details(
    key: str = typer.Argument(..., help="Entry key, e.g. series/some_title"),
):
    """Show an entry's details."""
    manga = _run(_details(key))
    typer.echo(json.dumps(asdict(manga), indent=2, ensure_ascii=False))


async def _cover(url: str) -> str:
    async with DynastyScans() as source:
        return (await source.get_image_request(url)).url


@app.command()
def cover(
    url: str = typer.Argument(..., help="Cover URL, deferred placeholders included"),
):
    """Resolve a cover URL to the image location."""
    typer.echo(_run(_cover(url)))


@app.command()
def home():
    """Show the home screen layout."""
    layout = DynastyScans().get_home()
    for component in layout.components:
        typer.echo(f"{component.title} ({component.kind.value})")


@app.command()
def version():
    """Show version."""
    from . import __version__

    typer.echo(f"dynasty-source {__version__}")


if __name__ == "__main__":
    app()
