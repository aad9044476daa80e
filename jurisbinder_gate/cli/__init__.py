"""
Command Line Interface for the JurisBinder gate.
"""

import json
from typing import Optional

import httpx
import typer
import uvicorn
from rich import print as rprint
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from ..config import get_settings
from ..domain import BRANCH_LABELS, BranchCode, DocumentStatus
from ..gate.state_machine import ALLOWED_TRANSITIONS, INITIAL_STATUS, is_terminal

app = typer.Typer(help="JurisBinder Gate - authoritative access to the case record store")
console = Console()


@app.command()
def serve(
    port: Optional[int] = typer.Option(None, help="Port to run the API server on"),
    host: Optional[str] = typer.Option(None, help="Host to bind the server to"),
    dev: bool = typer.Option(False, help="Run in development mode (auto-reload)"),
):
    """Start the gate API server."""
    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    rprint(Panel.fit("⚖️ Starting JurisBinder Gate", style="bold blue"))
    console.print(f"🚀 Gate listening on http://{host}:{port}/api/gate")
    uvicorn.run(
        "jurisbinder_gate.main:app",
        host=host,
        port=port,
        reload=dev,
        workers=1,
    )


@app.command()
def submit(
    operation: str = typer.Argument(..., help="Operation name, e.g. case_get or doc_ingest"),
    payload: str = typer.Option("", help="JSON payload for the operation"),
    case_id: Optional[str] = typer.Option(None, "--case-id", help="Case context"),
    url: Optional[str] = typer.Option(None, help="Base URL of a running gate"),
    timeout: float = typer.Option(10.0, help="Request timeout in seconds"),
):
    """Submit one operation to a running gate and print the response."""
    settings = get_settings()
    base_url = url or f"http://localhost:{settings.api_port}"

    body = {"toolName": operation, "caseId": case_id}
    if payload:
        try:
            body["payload"] = json.loads(payload)
        except json.JSONDecodeError:
            console.print("❌ Invalid JSON payload")
            raise typer.Exit(code=2)

    try:
        response = httpx.post(f"{base_url}/api/gate", json=body, timeout=timeout)
    except httpx.HTTPError as exc:
        console.print(f"❌ Could not reach the gate at {base_url}: {exc}")
        raise typer.Exit(code=1)

    try:
        data = response.json()
    except ValueError:
        console.print(f"❌ Unexpected response ({response.status_code}): {response.text}")
        raise typer.Exit(code=1)

    if data.get("ok"):
        title = f"✅ {operation} ({response.status_code})"
        if data.get("trace_event_id"):
            title += f" trace={data['trace_event_id']}"
        style = "green"
    else:
        error = data.get("error") or {}
        title = f"❌ {error.get('code', 'ERROR')} ({response.status_code})"
        style = "red"

    console.print(
        Panel(
            Syntax(json.dumps(data, indent=2, default=str), "json"),
            title=title,
            border_style=style,
        )
    )
    if not data.get("ok"):
        raise typer.Exit(code=1)


@app.command()
def transitions():
    """Show the document status transition table."""
    table = Table(
        title="Document Status Transitions", show_header=True, header_style="bold magenta"
    )
    table.add_column("From", style="cyan")
    table.add_column("To (any of)", style="green")
    table.add_column("Notes")

    for status in DocumentStatus:
        targets = sorted(t.value for t in ALLOWED_TRANSITIONS[status])
        notes = []
        if status == INITIAL_STATUS:
            notes.append("initial")
        if is_terminal(status):
            notes.append("terminal")
        table.add_row(status.value, ", ".join(targets) or "(none)", ", ".join(notes))

    console.print(table)


@app.command()
def branches():
    """List the fixed branch codes every case carries."""
    table = Table(title="Case Branches", show_header=True, header_style="bold cyan")
    table.add_column("Code", style="yellow")
    table.add_column("Label")

    for code in BranchCode:
        table.add_row(code.value, BRANCH_LABELS[code])

    console.print(table)


@app.command()
def version():
    """Show version information."""
    from .. import __version__
    rprint(Panel.fit(f"JurisBinder Gate v{__version__}", style="bold green"))


def main():
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
