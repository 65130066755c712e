"""CLI interface for docqa."""

import json
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from ....config.logging import setup_logging
from ....config.settings import get_settings
from ....core.domain import AnswerQuestionRequest, IndexDocumentRequest
from ...common.exception_handler import format_exception_json

app = typer.Typer(
    name="docqa",
    help="docqa - index text documents and ask questions about them",
    add_completion=False,
)

console = Console(force_terminal=True, legacy_windows=False)

# Determine if we're in debug mode (shows full stack traces)
DEBUG_MODE = os.getenv("DEBUG", "false").lower() == "true"


def handle_cli_error(exc: Exception) -> None:
    """Handle and display errors in CLI with structured format.

    In debug mode, shows full JSON error details.
    In normal mode, shows a user-friendly message with error code.

    Args:
        exc: The exception to handle.
    """
    error_data = format_exception_json(exc, include_trace=DEBUG_MODE)

    if DEBUG_MODE:
        console.print(
            Panel(
                json.dumps(error_data, indent=2, default=str),
                title="[bold red]Error Details[/]",
                border_style="red",
            )
        )
        return

    error = error_data["error"]
    console.print(f"\n[red]Error [{error.get('code', 'UNKNOWN')}]:[/] {error['message']}")
    console.print(f"[dim]Type: {error['type']}[/]")

    cause = error_data.get("cause")
    if cause:
        console.print(f"[dim]Cause: {cause.get('message', cause)}[/]")

    location = error_data.get("location", {})
    if location:
        loc_str = (
            f"{location.get('file', '?')}:{location.get('line', '?')} "
            f"in {location.get('method', '?')}"
        )
        console.print(f"[dim]Location: {loc_str}[/]")

    console.print("[dim]Set DEBUG=true for full details[/]")


def get_pipeline():
    """Build the pipeline from the environment, exiting on configuration errors."""
    from ....composition.container import build_pipeline

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file, settings.log_json)

    try:
        return build_pipeline(settings)
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1) from exc


@app.command()
def serve(
    host: str = typer.Option(None, help="Bind address (defaults to HOST)"),
    port: int = typer.Option(None, help="Port (defaults to PORT)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the HTTP API server."""
    import uvicorn

    settings = get_settings()
    try:
        settings.validate_credentials()
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1) from exc

    uvicorn.run(
        "docqa.adapters.inbound.api.main:build_default_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@app.command()
def index(
    path: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="Text file to index"
    ),
) -> None:
    """Index a text file into the vector store."""
    settings = get_settings()
    pipeline = get_pipeline()

    try:
        request = IndexDocumentRequest.from_payload(
            {"documentText": path.read_text(encoding="utf-8")},
            max_length=settings.max_document_length,
        )
        with console.status(f"[bold green]Indexing {path.name}...[/]"):
            result = pipeline.index_document(request)
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1) from exc

    console.print(f"[green]✅ {result.message}[/]")
    console.print(
        f"[dim]{result.record_count} records stored in {settings.index_name} "
        f"({result.duration_ms}ms)[/]"
    )


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question about the indexed documents"),
) -> None:
    """Ask a single question and get an answer."""
    settings = get_settings()
    pipeline = get_pipeline()

    try:
        request = AnswerQuestionRequest.from_payload(
            {"question": question}, max_length=settings.max_question_length
        )
        with console.status("[bold green]Thinking...[/]"):
            result = pipeline.answer_question(request)
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1) from exc

    console.print(Markdown(result.answer))
    console.print(
        f"\n[dim]{result.chunks_retrieved} chunks retrieved ({result.duration_ms}ms)[/]"
    )


@app.command()
def stats() -> None:
    """Connect to the vector index and show its statistics."""
    from ....composition.container import build_vector_store

    settings = get_settings()
    console.print("[bold]docqa status[/]\n")

    if settings.embedding_api_key:
        console.print("✅ Embedding API key configured")
    else:
        console.print("❌ Embedding API key not set (set GEMINI_API_KEY in .env)")

    if settings.llm_api_key:
        console.print("✅ LLM API key configured")
    else:
        console.print("❌ LLM API key not set (set GEMINI_API_KEY in .env)")

    if not settings.qdrant_location and not settings.qdrant_url:
        console.print("❌ Qdrant not configured (set QDRANT_URL and QDRANT_API_KEY in .env)")
        raise typer.Exit(1)

    try:
        with console.status("[bold green]Connecting to Qdrant...[/]"):
            info = build_vector_store(settings).get_collection_stats()
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1) from exc

    table = Table(title="Vector index")
    table.add_column("Property", style="cyan")
    table.add_column("Value")
    table.add_row("Index", info["index"])
    table.add_row("Records", str(info["count"]))
    table.add_row("Dimension", str(info["dimension"]))
    table.add_row("Status", info["status"])
    console.print(table)

    if info["count"] == 0:
        console.print("\n[yellow]Index is empty. Run 'docqa index PATH' to add a document.[/]")


if __name__ == "__main__":
    app()
