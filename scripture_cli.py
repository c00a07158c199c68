#!/usr/bin/env python3
"""
Vangmaya: Scripture Document CLI

Offline companion to the ingestion endpoint:
  • validate   check a scripture JSON document and list every problem
  • normalize  print (or write) the canonical normalized form
  • ingest     validate, normalize and persist into a data directory
  • summary    report chapter/verse counts of the persisted normalized document
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import typer

from vangmaya.scripture import (
    FilesystemArtifactStore,
    IngestionService,
    PersistenceError,
    ScriptureNotFoundError,
    chapter_keys,
    load_normalized_scripture,
    load_payload_file,
    normalize,
    serialize_document,
    validate,
    verse_keys,
)
from vangmaya.scripture.models import ValidationIssue

app = typer.Typer(add_completion=False, help="Vangmaya scripture document CLI")

DEFAULT_DATA_DIR = Path("data/scripture")
DEFAULT_SLUG = "bhagavad-gita"


def _read_document(path: Path):
    try:
        return load_payload_file(path)
    except ValueError as e:
        typer.secho(f"{path} is not valid JSON: {e}", fg=typer.colors.RED, bold=True)
        raise typer.Exit(code=2)


def _print_issues(issues: list[ValidationIssue]) -> None:
    typer.secho(f"Validation failed ({len(issues)} issues):", fg=typer.colors.RED, bold=True)
    for issue in issues:
        typer.echo(f"  {issue.path or '<root>'}: {issue.reason}")


# ---------------------------
# CLI: Validate
# ---------------------------
@app.command("validate")
def validate_cmd(document_path: Path = typer.Argument(..., exists=True, readable=True)) -> None:
    """Validate a scripture document and print every issue found."""
    result = validate(_read_document(document_path))
    if not result.ok or result.value is None:
        _print_issues(result.errors)
        raise typer.Exit(code=1)

    chapters = result.value.chapters
    verses = sum(len(chapter.verses) for chapter in chapters.values())
    typer.secho("Document looks good ✔", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"chapters: {len(chapters)} | verses: {verses}")


# ---------------------------
# CLI: Normalize
# ---------------------------
@app.command("normalize")
def normalize_cmd(
    document_path: Path = typer.Argument(..., exists=True, readable=True),
    out: Path | None = typer.Option(None, "--out", "-o", help="Write here instead of stdout"),
) -> None:
    """Print the normalized form of a valid document."""
    result = validate(_read_document(document_path))
    if not result.ok or result.value is None:
        _print_issues(result.errors)
        raise typer.Exit(code=1)

    data = serialize_document(normalize(result.value))
    if out is None:
        typer.echo(data.decode("utf-8"))
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(data)
    typer.secho(f"Wrote {out} ✔", fg=typer.colors.GREEN, bold=True)


# ---------------------------
# CLI: Ingest
# ---------------------------
@app.command("ingest")
def ingest_cmd(
    document_path: Path = typer.Argument(..., exists=True, readable=True),
    data_dir: Path = typer.Option(DEFAULT_DATA_DIR, "--data-dir", help="Artifact root"),
    slug: str = typer.Option(DEFAULT_SLUG, "--slug", help="Artifact name stem"),
) -> None:
    """Validate, normalize and persist a document into DATA_DIR."""
    service = IngestionService(FilesystemArtifactStore(data_dir, slug=slug))
    try:
        outcome = asyncio.run(service.ingest(_read_document(document_path)))
    except PersistenceError as e:
        label = "Partial persistence" if e.partial else "Persistence failed"
        typer.secho(f"{label}: {e}", fg=typer.colors.RED, bold=True)
        if e.raw_location:
            typer.echo(f"raw artifact: {e.raw_location}")
        raise typer.Exit(code=3)

    if not outcome.ok or outcome.summary is None:
        _print_issues(outcome.errors)
        raise typer.Exit(code=1)

    typer.secho("Ingest successful ✔", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"chapters: {outcome.summary.chapters} | verses: {outcome.summary.verses}")
    typer.echo(f"raw:        {outcome.raw_location}")
    typer.echo(f"normalized: {outcome.normalized_location}")


# ---------------------------
# CLI: Summary
# ---------------------------
@app.command("summary")
def summary_cmd(
    data_dir: Path = typer.Option(DEFAULT_DATA_DIR, "--data-dir", help="Artifact root"),
    slug: str = typer.Option(DEFAULT_SLUG, "--slug", help="Artifact name stem"),
) -> None:
    """Print per-chapter verse counts of the persisted normalized document."""
    store = FilesystemArtifactStore(data_dir, slug=slug)
    try:
        document = asyncio.run(load_normalized_scripture(store))
    except ScriptureNotFoundError as e:
        typer.secho(str(e), fg=typer.colors.RED, bold=True)
        raise typer.Exit(code=1)

    typer.secho("Normalized Scripture Summary", fg=typer.colors.CYAN, bold=True)
    typer.echo(f"chapters: {document.chapter_count()} | verses: {document.verse_count()}")
    typer.echo("")
    for key in chapter_keys(document):
        chapter = document.chapters[key]
        numbers = verse_keys(chapter)
        span = f"{numbers[0]}-{numbers[-1]}" if numbers else "-"
        title = chapter.title.en or chapter.title.sa or ""
        typer.echo(f"[{int(key):03d}] verses={len(numbers)} range={span} {title}".rstrip())


# ---------------------------
# Entrypoint
# ---------------------------
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(130)
