"""CLI interface for Second Brain."""

import json
import mimetypes
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table

from ....composition.container import get_container
from ....config.logging import setup_logging
from ....config.settings import settings
from ....core.domain import ConflictReport, IncomingFile, UploadOutcome, UploadStatus
from ....core.domain.exceptions import SecondBrainError
from ...common.exception_handler import format_exception_json

app = typer.Typer(
    name="second-brain",
    help="Second Brain - personal document storage with near-duplicate warnings",
    add_completion=False,
)

console = Console()

# Determine if we're in debug mode (shows full stack traces)
DEBUG_MODE = os.getenv("DEBUG", "false").lower() == "true"

OwnerOption = typer.Option(None, "--user", "-u", help="Owner id (defaults to DEFAULT_OWNER_ID)")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level")) -> None:
    setup_logging("DEBUG" if verbose else settings.log_level, json_format=settings.log_json)


def handle_cli_error(exc: Exception) -> None:
    """Print an error with its code; full JSON details when DEBUG=true."""
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

    error_code = error_data["error"].get("code", "UNKNOWN")
    console.print(f"\n[red]Error [{error_code}]:[/] {error_data['error']['message']}")
    console.print(f"[dim]Type: {error_data['error']['type']}[/]")
    console.print("[dim]Set DEBUG=true for full details[/]")


def _owner(user: str | None) -> str:
    return user or settings.default_owner_id


def _read_file(path: Path) -> IncomingFile:
    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    return IncomingFile(name=path.name, data=path.read_bytes(), content_type=content_type)


def _format_size(size: int) -> str:
    if size == 0:
        return "0 Bytes"
    value = float(size)
    for unit in ("Bytes", "KB", "MB"):
        if value < 1024:
            return f"{round(value, 2):g} {unit}"
        value /= 1024
    return f"{round(value, 2):g} GB"


def print_report(report: ConflictReport, file_name: str) -> None:
    if report.error:
        console.print(f"[yellow]Warning: could not check for conflicts. {report.error}[/]")
        return
    if not report.has_conflicts:
        console.print(f"[green]No similar content found for {file_name}[/]")
        return

    table = Table(title=f"Similar content found for {file_name}", border_style="yellow")
    table.add_column("Similarity", justify="right", style="bold yellow")
    table.add_column("File")
    table.add_column("Preview", style="dim")
    for conflict in report.conflicts:
        table.add_row(f"{conflict.similarity}%", conflict.name, conflict.content_preview)
    console.print(table)
    if report.used_fallback:
        console.print("[dim]Matches computed by local scan[/]")


def _print_outcome(outcome: UploadOutcome) -> None:
    if outcome.status is UploadStatus.COMMITTED and outcome.record:
        if outcome.warning:
            console.print(f"[yellow]Warning: could not check for conflicts. {outcome.warning}[/]")
        console.print(f"[green]File uploaded successfully![/] [dim](id {outcome.record.id})[/]")
    elif outcome.status is UploadStatus.CANCELLED:
        console.print("[dim]Upload cancelled, nothing was stored[/]")


@app.command()
def files(user: str | None = OwnerOption) -> None:
    """List stored files, newest first."""
    try:
        records = get_container().file_service().list_files(_owner(user))
    except SecondBrainError as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    if not records:
        console.print("[dim]No files uploaded yet. Upload your first file to get started![/]")
        return

    table = Table(title=f"Your Files ({len(records)})")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Size", justify="right")
    table.add_column("Type")
    table.add_column("Created")
    table.add_column("Embedded", justify="center")
    for record in records:
        table.add_row(
            record.id,
            record.name,
            _format_size(record.size),
            record.mime_type,
            record.created_at.strftime("%Y-%m-%d") if record.created_at else "",
            "✅" if record.has_embedding else "⚪",
        )
    console.print(table)


@app.command()
def upload(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    user: str | None = OwnerOption,
    yes: bool = typer.Option(False, "--yes", "-y", help="Upload even if similar content exists"),
) -> None:
    """Upload a file, warning first if similar content is already stored."""
    incoming = _read_file(path)
    try:
        gate = get_container().upload_gate(_owner(user))
        with console.status("[bold green]Checking for similar content...[/]"):
            outcome = gate.start(incoming)

        if outcome.status is UploadStatus.AWAITING_DECISION and outcome.report:
            print_report(outcome.report, incoming.name)
            if yes or Confirm.ask("Upload anyway?", default=False):
                with console.status("[bold green]Uploading file...[/]"):
                    outcome = gate.proceed()
            else:
                outcome = gate.cancel()
    except SecondBrainError as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    _print_outcome(outcome)


@app.command()
def check(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    user: str | None = OwnerOption,
    threshold: float | None = typer.Option(
        None, "--threshold", "-t", min=0.0, max=1.0, help="Similarity threshold override"
    ),
) -> None:
    """Check a text file for similar stored content without uploading it."""
    incoming = _read_file(path)
    text = incoming.extract_text()
    if text is None:
        console.print(f"[yellow]{incoming.name} is not a text file, nothing to analyze[/]")
        return

    try:
        with console.status("[bold green]Checking for similar content...[/]"):
            report = get_container().conflict_detector().detect_conflicts(
                text, incoming.name, _owner(user), threshold=threshold
            )
    except SecondBrainError as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    print_report(report, incoming.name)


@app.command()
def delete(
    document_id: str = typer.Argument(..., help="ID shown by 'files'"),
    user: str | None = OwnerOption,
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Delete one stored file."""
    if not force and not Confirm.ask("Are you sure you want to delete this file?", default=False):
        raise typer.Exit(0)
    try:
        record = get_container().file_service().delete_file(_owner(user), document_id)
    except SecondBrainError as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)
    console.print(f"[green]Deleted {record.name}[/]")


@app.command()
def clear(
    user: str | None = OwnerOption,
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Delete all stored files. This cannot be undone."""
    if not force and not Confirm.ask(
        "Are you sure you want to delete all your files? This cannot be undone.", default=False
    ):
        raise typer.Exit(0)
    try:
        deleted = get_container().file_service().clear_files(_owner(user))
    except SecondBrainError as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)
    console.print(f"[green]All files deleted ({deleted})[/]")


@app.command()
def diagnose(
    user: str | None = OwnerOption,
    text: str | None = typer.Option(None, "--text", help="Sample text to embed"),
    threshold: float | None = typer.Option(
        None, "--threshold", "-t", min=0.0, max=1.0, help="Search threshold for the test"
    ),
) -> None:
    """Run each stage of the conflict pipeline and report what happens."""
    container = get_container()
    kwargs: dict = {"threshold": threshold if threshold is not None else settings.diagnostic_threshold}
    if text:
        kwargs["sample_text"] = text

    try:
        with console.status("[bold green]Running embedding tests...[/]"):
            report = container.diagnostics().run(_owner(user), **kwargs)
    except SecondBrainError as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    for step in report.steps:
        icon = "✅" if step.ok else "❌"
        console.print(f"{icon} [bold]{step.name}[/]: {step.message}")
        for detail in step.details:
            console.print(f"    [dim]- {detail}[/]")

    if not report.ok:
        raise typer.Exit(1)


@app.command()
def status(user: str | None = OwnerOption) -> None:
    """Show configuration and storage status."""
    console.print("[bold]Second Brain Status[/]\n")
    console.print(f"Storage backend: [bold]{settings.storage_backend}[/]")

    if settings.openai_api_key:
        console.print("✅ Embedding API key configured")
    else:
        console.print("❌ Embedding API key not set (set OPENAI_API_KEY in .env)")

    if settings.storage_backend == "supabase":
        if settings.supabase_url and settings.supabase_key:
            console.print("✅ Supabase credentials configured")
        else:
            console.print("❌ Supabase credentials not set (set SUPABASE_URL and SUPABASE_KEY)")
            return

    try:
        records = get_container().file_service().list_files(_owner(user))
    except SecondBrainError as exc:
        handle_cli_error(exc)
        return
    embedded = sum(1 for r in records if r.has_embedding)
    console.print(f"\n[green]{len(records)} file(s) stored, {embedded} with embeddings[/]")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Bind port"),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("second_brain.adapters.inbound.api.main:app", host=host, port=port)


if __name__ == "__main__":
    app()
