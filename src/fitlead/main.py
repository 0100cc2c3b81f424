"""
Fitlead - CLI Entry Point.

Usage:
    fitlead chat             Run the questionnaire in the terminal
    fitlead serve            Start the web API
    fitlead leads            List leads with dashboard stats
    fitlead export           Export leads to CSV
    fitlead health           Check configuration
    fitlead db               Check database connection
    fitlead --help           Show help
"""

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.spinner import Spinner
from rich.table import Table

app = typer.Typer(
    name="fitlead",
    help="Fitlead - AI fitness coach lead funnel.",
    add_completion=False,
)
console = Console()


def _resolve_option(options: tuple[str, ...], answer: str) -> str | None:
    """Match a select answer by text (case-insensitive) or 1-based number."""
    cleaned = answer.strip()
    for option in options:
        if option.lower() == cleaned.lower():
            return option
    if cleaned.isdigit() and 1 <= int(cleaned) <= len(options):
        return options[int(cleaned) - 1]
    return None


@app.command()
def chat(
    log_prompts: bool = typer.Option(False, "--log-prompts", "-l", help="Log generation prompts to prompt_logs/"),
) -> None:
    """Walk through the fitness questionnaire and get a diet plan."""
    import intake
    from intake import messages
    from fitlead.config import get_settings
    from fitlead.db import get_lead_store
    from fitlead.errors import ConfigurationError, FitleadError
    from fitlead.llm import get_plan_generator
    from fitlead.llm.prompt_logger import enable_prompt_logging, get_session_log_dir
    from fitlead.messaging import get_notifier
    from fitlead.orchestration import run_lead_flow
    from fitlead.sheets import get_lead_sheet

    log_prompts = log_prompts or get_settings().fitlead_log_prompts
    if log_prompts:
        enable_prompt_logging(True)
        console.print("[dim]Generation prompts will be written to prompt_logs/.[/dim]")

    console.print(
        Panel.fit(
            "[bold green]AI Fitness Coach[/bold green]\n"
            "Answer a few questions and get a personalized diet plan on WhatsApp.\n\n"
            "[dim]Type 'exit' or 'quit' to leave.[/dim]",
            title="Welcome",
            border_style="green",
        )
    )

    state = intake.start()

    while not state.completed:
        question = state.current_question
        console.print(f"\n[dim][{state.progress}%][/dim] [bold green]Coach:[/bold green] {question.prompt}")
        if question.options:
            for number, option in enumerate(question.options, 1):
                console.print(f"  [cyan]{number}.[/cyan] {option}")

        try:
            answer = console.input("[bold blue]You:[/bold blue] ")
        except (KeyboardInterrupt, EOFError):
            console.print("\n\n[dim]Questionnaire abandoned, nothing was saved.[/dim]")
            raise typer.Exit(0)

        if answer.strip().lower() in ("exit", "quit", "q"):
            console.print("\n[dim]No problem, come back any time. Nothing was saved.[/dim]")
            raise typer.Exit(0)

        if question.options:
            selected = _resolve_option(question.options, answer)
            if selected is None:
                console.print(f"[red]Please choose one of: {', '.join(question.options)}[/red]")
                continue
            answer = selected

        result = intake.submit(state, answer)
        if result.error:
            console.print(f"[red]{result.error}[/red]")
            continue
        state = result.state

    console.print(f"\n[bold green]Coach:[/bold green] {messages.GENERATING}")

    try:
        with Live(Spinner("dots", text="Creating your plan..."), console=console, transient=True):
            flow = asyncio.run(run_lead_flow(
                state.profile(),
                store=get_lead_store(),
                generator=get_plan_generator(),
                notifier=get_notifier(),
                sheet=get_lead_sheet(),
            ))
    except ConfigurationError as e:
        console.print(f"\n[yellow]{messages.CONFIGURATION_ERROR}[/yellow]")
        console.print(f"[dim]{e.message}[/dim]")
        raise typer.Exit(1)
    except FitleadError as e:
        console.print(f"\n[red]{messages.error_reply(e.message)}[/red]")
        console.print(f"[dim]{e.message}[/dim]")
        raise typer.Exit(1)

    console.print(f"\n[bold green]Coach:[/bold green] {messages.SUCCESS}")
    console.print(f"[bold green]Coach:[/bold green] {messages.FOLLOW_UP}")
    console.print(Panel(flow.diet_plan, title="Your Diet Plan", border_style="blue"))

    if log_prompts:
        log_dir = get_session_log_dir()
        if log_dir:
            console.print(f"\n[dim]Prompts logged to: {log_dir}[/dim]")


@app.command()
def leads(
    search: str = typer.Option("", "--search", "-s", help="Filter by name, phone number, or goal"),
) -> None:
    """List leads with dashboard stats."""
    from fitlead.dashboard import compute_stats, filter_leads, lead_to_csv_row, load_leads
    from fitlead.db import get_lead_store

    all_leads = load_leads(get_lead_store())
    stats = compute_stats(all_leads)
    filtered = filter_leads(all_leads, search)

    console.print("\n[bold]Lead Dashboard[/bold]\n")
    console.print(f"  Total leads:     {stats.total_leads}")
    console.print(f"  Today's leads:   {stats.today_leads}")
    console.print(f"  WhatsApp sent:   {stats.whatsapp_sent}")
    console.print(f"  Conversion rate: {stats.conversion_rate}%")

    table = Table(title=f"All Leads ({len(filtered)})")
    for header in ("Name", "Age", "Level", "Goal", "Days", "Phone", "Sent", "Created"):
        table.add_column(header)

    for lead in filtered:
        row = lead_to_csv_row(lead)
        table.add_row(
            str(row[0]), str(row[1]), str(row[4]), str(row[5]),
            str(row[6]), str(row[7]), row[8], row[9],
        )

    console.print(table)
    if not filtered:
        console.print("[dim]No leads found.[/dim]")


@app.command()
def export(
    search: str = typer.Option("", "--search", "-s", help="Export only leads matching this term"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output file (default: fitness-leads-<date>.csv)"),
) -> None:
    """Export leads to CSV."""
    from fitlead.dashboard import csv_filename, export_csv, filter_leads, load_leads
    from fitlead.db import get_lead_store

    filtered = filter_leads(load_leads(get_lead_store()), search)
    path = output or Path(csv_filename())
    path.write_text(export_csv(filtered), encoding="utf-8")

    console.print(f"[green]OK[/green] Exported {len(filtered)} leads to {path}")


@app.command()
def health() -> None:
    """Show which providers are configured (real, simulated, or disabled)."""
    from fitlead.config import get_settings

    try:
        settings = get_settings()
    except Exception as e:
        console.print(f"[red]FAIL[/red] Settings could not be loaded: {e}")
        console.print("[dim]SUPABASE_URL and SUPABASE_ANON_KEY are required (.env or environment).[/dim]")
        raise typer.Exit(1)

    table = Table(title=f"Fitlead {settings.fitlead_env} ({settings.log_level})")
    table.add_column("Component")
    table.add_column("Status")
    table.add_column("Notes", style="dim")

    supabase_ok = settings.supabase_url.startswith("https://")
    table.add_row(
        "Lead store (Supabase)",
        "[green]ready[/green]" if supabase_ok else "[red]invalid URL[/red]",
        settings.supabase_url,
    )
    table.add_row(
        "Diet plans (OpenAI)",
        "[green]ready[/green]" if settings.generation_configured else "[yellow]missing key[/yellow]",
        settings.openai_model if settings.generation_configured else "generation fails with a configuration error",
    )
    table.add_row(
        "WhatsApp (Twilio)",
        "[green]ready[/green]" if settings.messaging_configured else "[cyan]simulated[/cyan]",
        settings.twilio_whatsapp_number or "sends are logged, lead stays unsent",
    )
    table.add_row(
        "Lead sheet (Google)",
        "[green]ready[/green]" if settings.sheets_configured else "[dim]disabled[/dim]",
        settings.google_sheet_id or "",
    )
    console.print(table)

    if not supabase_ok:
        raise typer.Exit(1)


@app.command()
def db() -> None:
    """Count rows in the lead tables to confirm Supabase access."""
    from fitlead.db import get_lead_store
    from fitlead.db.client import DIET_PLANS_TABLE, USERS_TABLE

    try:
        client = get_lead_store().client
    except Exception as e:
        console.print(f"[red]FAIL[/red] Could not create Supabase client: {e}")
        raise typer.Exit(1)

    table = Table(title="Supabase lead tables")
    table.add_column("Table")
    table.add_column("Rows", justify="right")

    failed = False
    for name in (USERS_TABLE, DIET_PLANS_TABLE):
        try:
            result = client.table(name).select("id", count="exact").limit(1).execute()
            table.add_row(name, str(result.count))
        except Exception as e:
            failed = True
            table.add_row(name, f"[red]{e}[/red]")

    console.print(table)
    if failed:
        console.print("[dim]Apply migrations/001_leads.sql in the Supabase SQL editor.[/dim]")
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Print the installed fitlead version."""
    from fitlead import __version__

    console.print(f"Fitlead version {__version__}")


@app.command()
def serve(
    port: int = typer.Option(8000, "--port", "-p", help="Port to run on"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload for development"),
) -> None:
    """Start the web API server."""
    import os

    import uvicorn

    from fitlead.config import get_settings

    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    actual_port = int(os.environ.get("PORT", port))

    console.print("\n[bold green]Fitlead API[/bold green]")
    console.print(f"Starting server on http://localhost:{actual_port}")
    console.print("[dim]Press Ctrl+C to stop[/dim]\n")

    uvicorn.run(
        "fitlead.web.app:app",
        host="0.0.0.0",
        port=actual_port,
        reload=reload,
    )


if __name__ == "__main__":
    app()
