"""Operator CLI for the education center content site."""

from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.table import Table

from apps.outline import OutlineGenerationError
from edusite.core.models import LANGUAGES
from edusite.runtime import SiteContext, bootstrap_site

ENV_REPO_ROOT = "EDUSITE_REPO_ROOT"

app = typer.Typer(help="Inspect the mirrored site content and draft course outlines.")
console = Console()


def _resolve_repo_root() -> Path:
    override = os.environ.get(ENV_REPO_ROOT)
    if override:
        return Path(override).expanduser().resolve()
    return Path(__file__).resolve().parents[1]


def _load_site(config: Path | None) -> SiteContext:
    try:
        return bootstrap_site(config, repo_root=_resolve_repo_root())
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc


async def _loaded(site: SiteContext) -> SiteContext:
    try:
        await site.state.load()
    finally:
        await site.aclose()
    return site


def _print_table(headers: List[str], rows: List[dict], keys: List[str]) -> None:
    table = Table(*headers)
    for row in rows:
        table.add_row(*(str(row.get(key, "") or "") for key in keys))
    console.print(table)


CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Path to the site YAML (defaults to config/site.yaml).")


@app.command()
def status(
    config: Path | None = CONFIG_OPTION,
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of a table."),
) -> None:
    """Load every table once and show how many records each collection holds."""
    site = asyncio.run(_loaded(_load_site(config)))
    counts = site.state.counts()
    if as_json:
        typer.echo(json.dumps({"counts": counts, "teacher_image": site.state.teacher_image}, indent=2))
        return
    console.print(f"[bold]Table service:[/bold] {site.config.store.base_url}")
    table = Table("Collection", "Records")
    for name, count in counts.items():
        table.add_row(name, str(count))
    console.print(table)


@app.command()
def messages(
    config: Path | None = CONFIG_OPTION,
    enrollments: bool = typer.Option(False, "--enrollments", help="List enrollment requests instead of messages."),
) -> None:
    """List the inbox, newest first."""
    site = asyncio.run(_loaded(_load_site(config)))
    if enrollments:
        rows = [record.model_dump() for record in site.state.enrollments]
        _print_table(["Date", "Student", "Phone", "Course"], rows, ["date", "student_name", "student_phone", "course_title"])
        return
    rows = [record.model_dump() for record in site.state.messages]
    _print_table(["Date", "Name", "Email", "Message"], rows, ["date", "name", "email", "message"])


@app.command()
def outline(
    title: str = typer.Argument(..., help="Course title to draft an outline for."),
    category: str = typer.Option("", "--category", help="Course category; defaults to the configured one."),
    lang: str = typer.Option("uz", "--lang", help="Output language (uz, ru or en)."),
    config: Path | None = CONFIG_OPTION,
) -> None:
    """Draft a chapter outline with the configured language model."""
    if lang not in LANGUAGES:
        raise typer.BadParameter(f"Unsupported language '{lang}'", param_hint="--lang")
    site = _load_site(config)
    try:
        result = site.generator.generate(title, category, lang)
    except (OutlineGenerationError, ValueError) as exc:
        console.print(f"[red]Outline generation failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    finally:
        asyncio.run(site.aclose())
    table = Table("#", "Chapter", "Description")
    for index, chapter in enumerate(result.outline, start=1):
        table.add_row(str(index), chapter.chapter, chapter.description)
    console.print(table)


def main() -> None:  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
