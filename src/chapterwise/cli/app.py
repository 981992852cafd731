"""Command-line interface for Chapterwise.

This module provides a thin Typer wrapper around the commands layer.
Each command:
1. Parses args (via Typer)
2. Creates progress callbacks (for Rich display)
3. Calls commands module functions
4. Renders results with Rich
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from chapterwise import __version__
from chapterwise.commands import (
    AnswerCommandResult,
    CommandStage,
    IngestResult,
    ProgressUpdate,
    ask,
    config_cmd,
    ingest,
    questions,
    status,
)
from chapterwise.config import load_config, load_env_file, resolve_data_dir

app = typer.Typer(
    name="chapterwise",
    help="Chapterwise - spoiler-safe answers about the book you are reading.",
    no_args_is_help=True,
)
console = Console()

# Stage names for progress display
STAGE_NAMES = {
    CommandStage.LOADING: "Loading",
    CommandStage.EMBEDDING: "Embedding",
    CommandStage.STORING: "Storing",
    CommandStage.PROCESSING: "Processing",
    CommandStage.COMPLETE: "Complete",
}


def version_callback(value: bool) -> None:
    if value:
        console.print(f"chapterwise {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route library logging through Rich; DEBUG when verbose, else WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=verbose)],
        force=True,
    )
    if not verbose:
        # LiteLLM logs every request at INFO
        logging.getLogger("LiteLLM").setLevel(logging.WARNING)


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging.",
    ),
) -> None:
    """Chapterwise - spoiler-safe book Q&A."""
    configure_logging(verbose)
    load_env_file()


def _error(message: str | None, plain: bool = False) -> None:
    if plain:
        console.print(f"Error: {message}", markup=False)
    else:
        console.print(f"[red]Error: {escape(str(message))}[/red]")
    raise typer.Exit(1)


@app.command(name="ingest")
def ingest_cmd(
    path: str = typer.Argument(..., help="Book file (.txt or .md) to ingest"),
    title_id: str = typer.Option(..., "--title", "-t", help="Title ID to store chapters under"),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    keep: bool = typer.Option(
        False,
        "--keep",
        help="Fail instead of replacing a title that already has chapters",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Split a book into chapters and index them under a title."""
    if not plain and console.is_terminal:
        with Progress(
            SpinnerColumn(),
            TextColumn("[bold]{task.fields[stage]:>12}", justify="right"),
            BarColumn(bar_width=20),
            TextColumn("{task.fields[progress_text]}", style="cyan"),
            TextColumn("{task.description}", style="dim"),
            console=console,
        ) as progress:
            task = progress.add_task("", total=None, stage="", progress_text="")

            def on_progress(update: ProgressUpdate) -> None:
                stage_name = STAGE_NAMES.get(update.stage, update.stage.value)
                if update.total > 1:
                    progress.update(
                        task,
                        stage=stage_name,
                        progress_text=f"{update.percentage}%",
                        description=f"({update.current}/{update.total})",
                        total=update.total,
                        completed=update.current,
                    )
                else:
                    progress.update(
                        task,
                        stage=stage_name,
                        progress_text="",
                        description=update.message or "",
                        total=None,
                    )

            result = ingest.ingest(
                path=path,
                title_id=title_id,
                data_dir=data_dir,
                config_path=config_file,
                replace=not keep,
                on_progress=on_progress,
            )
    else:
        result = ingest.ingest(
            path=path,
            title_id=title_id,
            data_dir=data_dir,
            config_path=config_file,
            replace=not keep,
        )

    _render_ingest_result(result, plain)


def _render_ingest_result(result: IngestResult, plain: bool) -> None:
    """Render ingest result to console."""
    if not result.success:
        _error(result.error, plain)

    if result.skipped:
        message = f"Skipped {result.filepath}: no content"
        console.print(message if plain else f"[yellow]{message}[/yellow]")
        return

    lines = [
        f"Ingested {result.chapters} chapters of '{result.title_id}' from {result.filepath}",
        f"Stored {result.embeddings} embeddings (dimension {result.dimension})",
    ]
    for line in lines:
        console.print(line if plain else f"[green]{line}[/green]")


@app.command(name="ask")
def ask_cmd(
    title_id: str = typer.Argument(..., help="Title the question is about"),
    question: str = typer.Argument(..., help="Question to ask"),
    chapter_limit: int = typer.Option(
        ...,
        "--chapter",
        "-n",
        help="Last chapter you have read; nothing after it is used",
    ),
    user_id: str = typer.Option(ask.DEFAULT_USER_ID, "--user", "-u", help="Who is asking"),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Ask a question about a title, answered only from chapters you have read."""
    result = ask.ask(
        title_id=title_id,
        question=question,
        chapter_limit=chapter_limit,
        user_id=user_id,
        data_dir=data_dir,
        config_path=config_file,
    )
    _render_answer_result(result, plain)


@app.command(name="answer")
def answer_cmd(
    question_id: str = typer.Argument(..., help="ID of a stored question"),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Re-run the answer pipeline for a stored question."""
    result = ask.answer(question_id=question_id, data_dir=data_dir, config_path=config_file)
    _render_answer_result(result, plain)


def _render_answer_result(result: AnswerCommandResult, plain: bool) -> None:
    if not result.success:
        if result.question_id and result.status:
            console.print(
                f"Question {result.question_id} is {result.status}"
                if plain
                else f"[dim]Question {result.question_id} is {result.status}[/dim]"
            )
        _error(result.error, plain)

    orders = ", ".join(str(c.order) for c in result.chapters)
    if plain:
        console.print(f"Answer: {result.answer}", markup=False)
        console.print()
        console.print(f"Chapters used: {orders}")
        if result.dropped:
            dropped = ", ".join(str(c.order) for c in result.dropped)
            console.print(f"Dropped to fit context: {dropped}")
        console.print(f"Question ID: {result.question_id}")
        return

    console.print(
        Panel(
            Markdown(result.answer or ""),
            title=f"Answer (up to chapter {result.chapter_limit})",
            border_style="green",
        )
    )
    table = Table(title="Chapters used")
    table.add_column("Chapter", justify="right", style="cyan")
    table.add_column("Name")
    table.add_column("Similarity", justify="right", style="dim")
    for ref in result.chapters:
        table.add_row(str(ref.order), escape(ref.name), f"{ref.similarity:.3f}")
    console.print(table)
    if result.dropped:
        dropped = ", ".join(str(c.order) for c in result.dropped)
        console.print(f"[yellow]Dropped to fit context: {dropped}[/yellow]")
    console.print(f"[dim]Question ID: {result.question_id}[/dim]")


@app.command(name="questions")
def questions_cmd(
    user_id: str = typer.Option(None, "--user", "-u", help="Filter by user"),
    title_id: str = typer.Option(None, "--title", "-t", help="Filter by title"),
    status_filter: str = typer.Option(
        None,
        "--status",
        "-s",
        help="Filter by status (pending, answered, failed)",
    ),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """List stored questions, newest first."""
    result = questions.list_questions(
        user_id=user_id,
        title_id=title_id,
        status=status_filter,
        data_dir=data_dir,
        config_path=config_file,
    )

    if not result.success:
        _error(result.error, plain)

    if not result.questions:
        console.print("No questions found." if plain else "[dim]No questions found.[/dim]")
        raise typer.Exit(0)

    if plain:
        console.print(f"Questions ({len(result.questions)}):")
        for q in result.questions:
            console.print(
                f"  {q.question_id} [{q.status}] {q.title_id} "
                f"(chapter {q.chapter_limit}): {q.question}",
                markup=False,
            )
        return

    table = Table(title=f"Questions ({len(result.questions)})")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Ch.", justify="right")
    table.add_column("Status")
    table.add_column("Question")
    colors = {"answered": "green", "failed": "red", "pending": "yellow"}
    for q in result.questions:
        color = colors.get(q.status, "white")
        table.add_row(
            q.question_id,
            q.title_id,
            str(q.chapter_limit),
            f"[{color}]{q.status}[/{color}]",
            escape(q.question),
        )
    console.print(table)


@app.command(name="status")
def status_cmd(
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    detailed: bool = typer.Option(
        False,
        "--detailed",
        help="Show chapter counts per title",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Show database statistics."""
    effective_data_dir = resolve_data_dir(data_dir, load_config(config_file))

    result = status.status(
        data_dir=data_dir,
        config_path=config_file,
        detailed=detailed,
    )

    if not result.success:
        _error(result.error, plain)

    if result.total_titles == 0 and result.total_questions == 0:
        if plain:
            console.print("No database found.")
        else:
            console.print("[dim]No database found. Run 'chapterwise ingest' first.[/dim]")
        raise typer.Exit(0)

    rows = [
        ("Data directory", effective_data_dir),
        ("Titles", str(result.total_titles)),
        ("Chapters", str(result.total_chapters)),
        ("Chapter embeddings", str(result.total_embeddings)),
        ("Questions", str(result.total_questions)),
    ]
    rows += [(f"  {name}", str(count)) for name, count in result.questions_by_status.items()]

    if plain:
        console.print("Database Status:")
        for name, value in rows:
            console.print(f"  {name}: {value}")
        if detailed and result.titles:
            console.print()
            console.print("Chapters by Title:")
            for title in result.titles:
                console.print(
                    f"  {title.title_id}: {title.chapter_count} chapters, "
                    f"{title.embedding_count} embeddings"
                )
        return

    table = Table(title="Database Status")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")
    for name, value in rows:
        table.add_row(name, value)
    console.print(table)

    if detailed and result.titles:
        console.print()
        detail_table = Table(title="Chapters by Title")
        detail_table.add_column("Title", style="cyan")
        detail_table.add_column("Chapters", justify="right")
        detail_table.add_column("Embeddings", justify="right", style="green")
        for title in result.titles:
            detail_table.add_row(
                title.title_id,
                str(title.chapter_count),
                str(title.embedding_count),
            )
        console.print(detail_table)


@app.command(name="config")
def config_cmd_handler(
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Show current configuration settings."""
    result = config_cmd.config(config_path=config_file)

    if not result.success:
        _error(result.error)

    table = Table(title="Chapterwise Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Source", style="dim")

    table.add_row("provider", result.provider, "yaml" if result.config_path else "default")
    if result.provider == "litellm":
        table.add_row("llm_model", result.llm_model or "(not set)", "")
        table.add_row("embedding_model", result.embedding_model or "(not set)", "")
    table.add_row("data_dir", result.data_dir, "")
    table.add_row("", "", "")

    for setting in result.settings:
        table.add_row(setting.name, setting.value, setting.source)

    console.print(table)

    for warning in result.warnings:
        console.print(f"[yellow]Warning: {warning}[/yellow]")

    if result.config_path:
        console.print(f"\n[dim]Config file: {result.config_path}[/dim]")
    else:
        console.print("\n[dim]No config file found. Using env vars / defaults.[/dim]")

    console.print("\n[dim]Precedence: env var > yaml settings > default[/dim]")
