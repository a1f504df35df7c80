# ABOUTME: The `findthatbook search` command for free-text book lookup.
# ABOUTME: Interprets the query, ranks Open Library candidates, and prints explained matches.

import asyncio
import json
from dataclasses import replace
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from findthatbook.ai.llm import LanguageModelService
from findthatbook.cli.options import configure_logging, timeout_option, verbose_option
from findthatbook.config import ConfigError, Settings, load_settings
from findthatbook.core.search import BookSearchService
from findthatbook.matching.types import AuthorStatus
from findthatbook.metadata.http import FindThatBookHttpClient
from findthatbook.metadata.openlibrary import OpenLibraryProvider
from findthatbook.metadata.types import BookCandidate


def _create_service(settings: Settings, http_client: FindThatBookHttpClient) -> BookSearchService:
    """Wire the default collaborators: OpenAI for language, Open Library for books."""
    language_model = LanguageModelService(
        api_key=settings.openai_api_key, options=settings.generation_options
    )
    provider = OpenLibraryProvider(
        http_client,
        base_url=settings.openlibrary_url,
        covers_url=settings.covers_url,
    )
    return BookSearchService(
        language_model,
        provider,
        language_model,
        policy=settings.match_policy,
    )


async def _run_search(settings: Settings, query: str) -> list[BookCandidate]:
    """Run one search under the configured deadline, closing the HTTP pool afterwards."""
    async with FindThatBookHttpClient() as http_client:
        service = _create_service(settings, http_client)
        return await asyncio.wait_for(service.search(query), timeout=settings.timeout)


def _candidate_to_dict(candidate: BookCandidate) -> dict[str, Any]:
    return {
        "title": candidate.title,
        "authors": candidate.authors,
        "primary_authors": candidate.primary_authors,
        "contributors": candidate.contributors,
        "first_publish_year": candidate.first_publish_year,
        "external_id": candidate.external_id,
        "cover_url": candidate.cover_url,
        "explanation": candidate.explanation,
        "rank": candidate.rank.name,
        "match_type": candidate.match_type.value,
        "author_status": candidate.author_status.value,
    }


def _render_table(console: Console, results: list[BookCandidate]) -> None:
    table = Table()
    table.add_column("#", style="dim", width=3)
    table.add_column("Title", style="bold")
    table.add_column("Authors")
    table.add_column("Year", width=5)
    table.add_column("Match")
    table.add_column("Why")

    for i, candidate in enumerate(results, 1):
        match = candidate.match_type.value
        if candidate.author_status is not AuthorStatus.UNKNOWN:
            match = f"{match} / {candidate.author_status.value}"
        table.add_row(
            str(i),
            candidate.title,
            candidate.author or "[dim]unknown[/dim]",
            str(candidate.first_publish_year or "?"),
            match,
            candidate.explanation or "[dim]-[/dim]",
        )

    console.print(table)
    console.print(f"\n[dim]{len(results)} match(es), rank {results[0].rank.name}[/dim]")


@click.command("search")
@click.argument("query")
@click.option("--model", default=None, help="Chat model used to interpret and explain.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print results as JSON.")
@timeout_option
@verbose_option
def search(
    query: str,
    model: str | None,
    as_json: bool,
    timeout: float | None,
    verbose: bool,
) -> None:
    """Find a book from a free-text description, e.g. "tolkien hobbit illustrated"."""
    console = Console()
    configure_logging(verbose)

    if not query.strip():
        raise click.UsageError("Query cannot be empty.")

    try:
        settings = load_settings()
    except ConfigError as exc:
        raise click.UsageError(str(exc)) from exc
    if model:
        settings = replace(settings, model=model)
    if timeout is not None:
        settings = replace(settings, timeout=timeout)
    if not settings.openai_api_key:
        raise click.UsageError("OPENAI_API_KEY is not set.")

    try:
        results = asyncio.run(_run_search(settings, query))
    except asyncio.TimeoutError:
        console.print(f"[red]Search aborted:[/red] no answer within {settings.timeout:g}s.")
        raise SystemExit(1) from None

    if as_json:
        click.echo(json.dumps([_candidate_to_dict(c) for c in results], indent=2))
        return

    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    _render_table(console, results)
