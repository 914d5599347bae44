"""Command-line interface for Pictoboard."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import List, Optional

import typer

from pictoboard.config import get_settings
from pictoboard.llm.client import build_remote_suggester
from pictoboard.logging_utils import configure_logging
from pictoboard.suggest.orchestrator import build_orchestrator
from pictoboard.suggest.rule_engine import RuleEngine
from pictoboard.vocabulary.repository import JsonVocabularyRepository, VocabularyError

app = typer.Typer(help="Pictoboard next-word suggestion commands.")


@app.callback()
def configure() -> None:
    """Configure logging from settings before any command runs."""

    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format, [settings.llm_api_key or ""])


def _load_repository(vocabulary_path: Optional[Path]) -> JsonVocabularyRepository:
    path = vocabulary_path or get_settings().vocabulary_path
    try:
        return JsonVocabularyRepository.from_path(path)
    except VocabularyError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def suggest(
    word_ids: List[str] = typer.Argument(..., help="Word ids of the sentence, in order."),
    vocabulary_path: Optional[Path] = typer.Option(
        None,
        "--vocabulary",
        help="Vocabulary JSON file (defaults to settings or the bundled vocabulary).",
    ),
    location: Optional[str] = typer.Option(None, "--location", help="Restrict vocabulary to a location."),
    remote: bool = typer.Option(True, "--remote/--no-remote", help="Consult the configured LLM."),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print output JSON."),
) -> None:
    """
    Suggest the next words for the sentence made of WORD_IDS.
    """
    repository = _load_repository(vocabulary_path)
    sentence = []
    for word_id in word_ids:
        word = repository.get_word_by_id(word_id)
        if word is None:
            typer.secho(f"Error: unknown word id '{word_id}'", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)
        sentence.append(word)

    vocabulary = (
        repository.get_words_by_location(location) if location else repository.get_all_words()
    )
    orchestrator = build_orchestrator(remote=build_remote_suggester() if remote else None)
    state = asyncio.run(orchestrator.resolve(sentence, vocabulary))
    templates = RuleEngine().match_templates(sentence)

    payload = {
        "sentence": " ".join(word.spanish for word in sentence),
        "source": orchestrator.source.value,
        "suggestions": [word.id for word in state.suggestions],
        "templates": [template.label for template in templates],
    }
    if pretty:
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        typer.echo(json.dumps(payload, ensure_ascii=False))


@app.command()
def words(
    vocabulary_path: Optional[Path] = typer.Option(None, "--vocabulary", help="Vocabulary JSON file."),
    location: Optional[str] = typer.Option(None, "--location", help="Only words used at this location."),
    search: Optional[str] = typer.Option(None, "--search", help="Partial Spanish text to match."),
) -> None:
    """List vocabulary words as ``id<TAB>spanish<TAB>category``."""

    repository = _load_repository(vocabulary_path)
    if search:
        matches = repository.search_words(search)
        if location:
            matches = [word for word in matches if word.belongs_to_location(location)]
    elif location:
        matches = repository.get_words_by_location(location)
    else:
        matches = repository.get_all_words()

    for word in matches:
        typer.echo(f"{word.id}\t{word.spanish}\t{word.category.value}")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind."),
    port: int = typer.Option(8000, "--port", help="Port to listen on."),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes."),
) -> None:
    """Run the suggestion HTTP API."""

    from pictoboard.server.run import serve as run_server

    run_server(host, port, reload=reload)


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for `python -m pictoboard`."""
    app(prog_name="pictoboard", args=argv)


if __name__ == "__main__":
    main()
