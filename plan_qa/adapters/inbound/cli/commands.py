"""CLI interface for plan-qa."""

import json
import mimetypes
from pathlib import Path

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from ....config.logging import setup_logging
from ....config.settings import settings
from ....core.domain import AnswerOutcome, RetrievalRequest
from ...common.exception_handler import format_exception_json

app = typer.Typer(
    name="plan-qa",
    help="Ask questions about uploaded PDF plans and documents",
    add_completion=False,
)

console = Console(force_terminal=True, legacy_windows=False)

# Determine if we're in debug mode (shows full stack traces)
DEBUG_MODE = settings.debug


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
                json.dumps(error_data, indent=2),
                title="[bold red]Error Details[/]",
                border_style="red",
            )
        )
    else:
        error_type = error_data["error"]["type"]
        error_msg = error_data["error"]["message"]
        error_code = error_data["error"].get("code", "UNKNOWN")
        stage = (error_data.get("context") or {}).get("stage")

        console.print(f"\n[red]Error [{error_code}]:[/] {error_msg}")
        console.print(f"[dim]Type: {error_type}[/]")
        if stage:
            console.print(f"[dim]Stage: {stage}[/]")

        console.print("[dim]Set DEBUG=true for full details[/]")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output"),
) -> None:
    """plan-qa command line."""
    setup_logging("DEBUG" if verbose else settings.log_level, json_format=settings.log_json)


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question about the uploaded documents"),
    document: str | None = typer.Option(
        None, "--document", "-d", help="Stored file name to restrict retrieval to"
    ),
    top_k: int | None = typer.Option(
        None, "--top-k", "-k", min=1, help="Number of passages to use as context"
    ),
) -> None:
    """Ask a single question and get a cited answer."""
    from ....composition.container import get_pipeline

    try:
        pipeline = get_pipeline()
        with console.status("[bold green]Thinking...[/]"):
            envelope = pipeline.run(
                RetrievalRequest(question=question, document_id=document), top_k=top_k
            )
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    if envelope.outcome is not AnswerOutcome.ANSWERED:
        console.print(f"[yellow]{envelope.answer_text}[/]")
        return

    console.print(Panel(Markdown(envelope.answer_text), title="[bold]Answer[/]", border_style="green"))

    console.print("\n[dim]Sources:[/]")
    for item in envelope.scored_passages:
        passage = item.passage
        console.print(
            f"  [dim]{passage.display_name or passage.document_id} p.{passage.page} "
            f"({item.score:.3f})[/]",
            highlight=False,
        )


@app.command()
def upload(
    paths: list[Path] = typer.Argument(..., exists=True, dir_okay=False, help="PDF files to store"),
    project: str | None = typer.Option(None, "--project", "-p", help="Project name"),
) -> None:
    """Copy PDF files into the uploads directory."""
    from ....composition.container import get_document_store

    store = get_document_store()
    failed = 0
    for path in paths:
        content_type, _ = mimetypes.guess_type(path.name)
        try:
            stored = store.save_upload(
                path.name,
                path.read_bytes(),
                project_name=project,
                content_type=content_type,
            )
        except Exception as exc:
            failed += 1
            handle_cli_error(exc)
            continue
        console.print(f"[green]Stored[/] {path.name} -> {stored.id} ({stored.project_name})")

    if failed:
        raise typer.Exit(1)


@app.command(name="list")
def list_documents() -> None:
    """List stored PDFs, newest first."""
    from ....composition.container import get_document_store

    try:
        documents = get_document_store().list_documents()
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    if not documents:
        console.print("[yellow]No documents uploaded yet.[/]")
        return

    table = Table(title=f"Documents in {settings.uploads_dir}")
    table.add_column("Stored name", style="cyan")
    table.add_column("File")
    table.add_column("Project")
    table.add_column("Uploaded", style="dim")
    for doc in documents:
        table.add_row(doc.id, doc.display_name, doc.project_name or "", doc.uploaded_at or "")
    console.print(table)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Interface to bind"),
    port: int = typer.Option(8000, help="Port to listen on"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    if not settings.is_configured:
        console.print(
            "[yellow]Warning:[/] GOOGLE_API_KEY is not set; questions will fail until it is."
        )
    uvicorn.run("plan_qa.adapters.inbound.api.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
