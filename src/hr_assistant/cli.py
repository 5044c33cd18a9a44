"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from hr_assistant.config import AppConfig, load_config
from hr_assistant.errors import HRAssistantError
from hr_assistant.history.store import HistoryStore
from hr_assistant.logging.usage_store import UsageStore
from hr_assistant.models.chat import ChatTurn
from hr_assistant.models.generation import GenderPreference
from hr_assistant.parsers.document_parser import extract_text
from hr_assistant.parsers.samples import SAMPLE_JOB_POSTING
from hr_assistant.pipeline.orchestrator import HRAssistant

app = typer.Typer(
    name="hr-assistant",
    help="AI HR assistant: generate, analyze and parse job descriptions.",
    no_args_is_help=True,
)
history_app = typer.Typer(help="Browse saved job descriptions.", no_args_is_help=True)
app.add_typer(history_app, name="history")
console = Console()

_state: dict = {"verbose": False}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs and error details"),
    config_path: Path = typer.Option(None, "--config", help="Path to config.yaml"),
) -> None:
    _state["verbose"] = verbose
    _state["config_path"] = config_path
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _config() -> AppConfig:
    try:
        return load_config(_state.get("config_path"))
    except ValueError as exc:
        console.print(f"[red]Invalid configuration: {exc}[/red]")
        raise typer.Exit(1)


def _history(config: AppConfig) -> HistoryStore:
    return HistoryStore(config.storage.resolved_history_db_path)


def _assistant(config: AppConfig) -> HRAssistant:
    return HRAssistant.from_config(
        config,
        history=_history(config),
        usage=UsageStore(config.storage.resolved_usage_db_path),
    )


def _run(coro):
    """Run a flow, turning its errors into a generic notice and exit code 1."""
    try:
        with console.status("Working..."):
            return asyncio.run(coro)
    except HRAssistantError as exc:
        console.print("[red]Uh oh! Something went wrong. Please try again.[/red]")
        if _state["verbose"]:
            console.print(f"[dim]{type(exc).__name__}: {exc}[/dim]")
        raise typer.Exit(1)


def _print_description(text: str, output: Path | None) -> None:
    console.print(Panel(Markdown(text), title="Job Description"))
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        console.print(f"[green]Saved: {output}[/green]")


def _form(
    role_title: str,
    experience: str,
    location: str,
    key_skills: str,
    company_name: str,
    about_company: str,
    gender: GenderPreference,
) -> dict:
    return {
        "roleTitle": role_title,
        "experience": experience,
        "location": location,
        "keySkills": key_skills,
        "companyName": company_name,
        "aboutCompany": about_company,
        "genderPreference": gender.value,
    }


@app.command()
def generate(
    role_title: str = typer.Option(..., "--role", help="Role title, e.g. Senior Software Engineer"),
    experience: str = typer.Option(..., "--experience", help="Experience level, e.g. 5-7 years"),
    location: str = typer.Option(..., "--location", help="Location, e.g. Remote/Bangalore"),
    key_skills: str = typer.Option(..., "--skills", help="Comma-separated key skills"),
    company_name: str = typer.Option(..., "--company", help="Company name"),
    about_company: str = typer.Option(..., "--about", help="Short company description"),
    gender: GenderPreference = typer.Option(GenderPreference.BOTH, "--gender", help="Gender preference"),
    output: Path = typer.Option(None, "--output", "-o", help="Write the description to a .md file"),
) -> None:
    """Generate a job description from the form fields."""
    assistant = _assistant(_config())
    form = _form(role_title, experience, location, key_skills, company_name, about_company, gender)
    result = _run(assistant.generate(form))
    _print_description(result.job_description, output)


@app.command()
def regenerate(
    role_title: str = typer.Option(..., "--role", help="Role title"),
    experience: str = typer.Option(..., "--experience", help="Experience level"),
    location: str = typer.Option(..., "--location", help="Location"),
    key_skills: str = typer.Option(..., "--skills", help="Comma-separated key skills"),
    company_name: str = typer.Option(..., "--company", help="Company name"),
    about_company: str = typer.Option(..., "--about", help="Short company description"),
    gender: GenderPreference = typer.Option(GenderPreference.BOTH, "--gender", help="Gender preference"),
    original: Path = typer.Option(None, "--original", help="File with the description to rephrase"),
    from_history: str = typer.Option(None, "--from-history", help="History id of the description to rephrase"),
    output: Path = typer.Option(None, "--output", "-o", help="Write the description to a .md file"),
) -> None:
    """Rephrase an existing job description without changing its meaning."""
    config = _config()
    if original is not None:
        if not original.exists():
            console.print(f"[red]File not found: {original}[/red]")
            raise typer.Exit(1)
        original_description = original.read_text(encoding="utf-8")
    elif from_history is not None:
        item = _history(config).get(from_history)
        if item is None:
            console.print(f"[red]No history entry with id {from_history}[/red]")
            raise typer.Exit(1)
        original_description = item.description
    else:
        console.print("[red]Pass --original or --from-history.[/red]")
        raise typer.Exit(1)

    form = _form(role_title, experience, location, key_skills, company_name, about_company, gender)
    form["originalDescription"] = original_description
    result = _run(_assistant(config).regenerate(form))
    _print_description(result.job_description, output)


@app.command()
def analyze(
    file: Path = typer.Argument(None, help="Job description file (TXT/MD/PDF/DOCX)"),
    text: str = typer.Option(None, "--text", help="Job description text instead of a file"),
) -> None:
    """Restructure a job description and suggest improvements."""
    if file is not None:
        if not file.exists():
            console.print(f"[red]File not found: {file}[/red]")
            raise typer.Exit(1)
        try:
            text = extract_text(file)
        except ValueError as exc:
            console.print(f"[red]{exc}[/red]")
            raise typer.Exit(1)
    if not text:
        console.print("[red]Pass a file or --text.[/red]")
        raise typer.Exit(1)

    result = _run(_assistant(_config()).analyze({"jobDescription": text}))
    console.print(Panel(Markdown(result.structured_content), title="Structured Content"))
    console.print(Panel(Markdown(result.recommendations), title="Recommendations"))


@app.command()
def parse(
    file: Path = typer.Argument(None, help="Job description document (PDF/DOCX/TXT/MD)"),
    sample: bool = typer.Option(False, "--sample", help="Parse the built-in sample posting"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON result"),
) -> None:
    """Extract structured fields from a job description document."""
    if sample:
        content = SAMPLE_JOB_POSTING
    elif file is not None:
        if not file.exists():
            console.print(f"[red]File not found: {file}[/red]")
            raise typer.Exit(1)
        try:
            content = extract_text(file)
        except ValueError as exc:
            console.print(f"[red]{exc}[/red]")
            raise typer.Exit(1)
    else:
        console.print("[red]Pass a file or --sample.[/red]")
        raise typer.Exit(1)

    result = _run(_assistant(_config()).parse_file({"fileContent": content}))
    if as_json:
        console.print_json(json.dumps(result.model_dump(by_alias=True)))
        return

    table = Table(title="Parsed Content", show_lines=True)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Company Name", result.company_name)
    table.add_row("About Company", result.about_company)
    table.add_row("Job Title", result.job_title)
    table.add_row("Required Experience", result.required_experience)
    table.add_row("Required Skills", "\n".join(f"- {s}" for s in result.required_skills))
    table.add_row(
        "Roles & Responsibilities",
        "\n".join(f"- {r}" for r in result.roles_and_responsibilities),
    )
    table.add_row("Salary Package", result.salary_package)
    table.add_row("Location", result.location)
    table.add_row("Other Info", result.other_info)
    console.print(table)


@app.command()
def chat(
    message: str = typer.Option(None, "--message", "-m", help="Ask a single question and exit"),
) -> None:
    """Chat with the HR assistant (interactive unless --message is given)."""
    assistant = _assistant(_config())
    if message:
        reply = _run(assistant.chat({"history": [], "message": message}))
        console.print(Markdown(reply.response))
        return

    console.print("[dim]Type your question; an empty line or Ctrl-D quits.[/dim]")
    asyncio.run(_chat_loop(assistant))


async def _chat_loop(assistant: HRAssistant) -> None:
    # One event loop for the whole session so the HTTP client is reused.
    history: list[ChatTurn] = []
    while True:
        try:
            question = console.input("[bold cyan]you>[/bold cyan] ").strip()
        except EOFError:
            break
        if not question:
            break
        try:
            reply = await assistant.chat({"history": history, "message": question})
        except HRAssistantError as exc:
            console.print("[red]Sorry, I encountered an error. Please try again.[/red]")
            if _state["verbose"]:
                console.print(f"[dim]{type(exc).__name__}: {exc}[/dim]")
            continue
        history.append(ChatTurn(role="user", content=question))
        history.append(ChatTurn(role="model", content=reply.response))
        console.print(Markdown(reply.response))


@history_app.command("list")
def history_list(
    limit: int = typer.Option(20, "--limit", "-n", help="Number of entries"),
) -> None:
    """List saved job descriptions, newest first."""
    items = _history(_config()).list(limit=limit)
    if not items:
        console.print("[yellow]No history found. Generate a job description to see it here.[/yellow]")
        return

    table = Table(title="Job Description History")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Company")
    table.add_column("Created")
    for item in items:
        table.add_row(
            item.id,
            item.title,
            item.company_name or "",
            item.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    console.print(table)


@history_app.command("show")
def history_show(item_id: str = typer.Argument(help="History entry id")) -> None:
    """Show one saved job description."""
    item = _history(_config()).get(item_id)
    if item is None:
        console.print(f"[red]No history entry with id {item_id}[/red]")
        raise typer.Exit(1)
    console.print(Panel(Markdown(item.description), title=item.title))


@history_app.command("delete")
def history_delete(item_id: str = typer.Argument(help="History entry id")) -> None:
    """Delete one saved job description."""
    if not _history(_config()).delete(item_id):
        console.print(f"[red]No history entry with id {item_id}[/red]")
        raise typer.Exit(1)
    console.print("[green]Deleted.[/green]")


@history_app.command("clear")
def history_clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete every saved job description."""
    if not yes and not typer.confirm("Delete all saved job descriptions?"):
        raise typer.Exit(0)
    removed = _history(_config()).clear()
    console.print(f"[green]Removed {removed} entries.[/green]")


@app.command()
def usage() -> None:
    """Show this month's LLM usage and estimated cost."""
    store = UsageStore(_config().storage.resolved_usage_db_path)
    stats = store.get_monthly_stats()
    modes = ", ".join(f"{mode}: {count}" for mode, count in sorted(stats["runs_by_mode"].items()))
    console.print(
        Panel(
            f"Runs: {stats['total_runs']} ({modes or 'none'})\n"
            f"Tokens: {stats['total_input_tokens']} in / {stats['total_output_tokens']} out\n"
            f"Success rate: {stats['success_rate']:.0f}%\n"
            f"Estimated cost: ${stats['total_cost_usd']:.4f}",
            title=f"Usage {stats['month']}",
        )
    )


if __name__ == "__main__":
    app()
