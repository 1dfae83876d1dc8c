"""Main CLI application using Typer."""
import asyncio
import logging

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..chat import SessionController
from ..errors import HistoryNotFoundError, HistoryStoreError
from ..history import HistoryStore
from ..models import HistoryEntry, Role, Turn
from .providers import get_config, get_history_store, get_llm

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="rebound",
    help="Chat with Rebound AI and browse past conversations",
    no_args_is_help=True,
    add_completion=True,
)

history_app = typer.Typer(help="List, inspect and delete archived conversations")
app.add_typer(history_app, name="history")

# Console for rich output
console = Console()

# Quick-action prompts offered on the start screen
EXAMPLE_PROMPTS = {
    "study-plan": "Make me a 7-day study plan for SWE3305",
    "explain-simply": "Explain this topic like I'm 10",
    "project-ideas": "Give me AI project ideas and modules",
    "writing-help": "Help me write a report introduction",
}

TIME_FORMAT = "%H:%M"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _print_turn(turn: Turn) -> None:
    stamp = turn.timestamp.astimezone().strftime(TIME_FORMAT)
    if turn.role == Role.USER:
        console.print(f"[bold yellow]You[/bold yellow] [dim]{stamp}[/dim]\n{turn.content}\n")
    elif turn.is_error:
        console.print(f"[bold red]Rebound AI[/bold red] [dim]{stamp}[/dim]\n[red]{turn.content}[/red]\n")
    else:
        console.print(f"[bold green]Rebound AI[/bold green] [dim]{stamp}[/dim]\n{turn.content}\n")


def _print_history(entries: list[HistoryEntry]) -> None:
    if not entries:
        console.print("[dim]No chat history yet.[/dim]")
        return

    table = Table(title="Chat History")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Opening message", style="dim")
    for entry in reversed(entries):
        opening = entry.messages[-1].content if entry.messages else ""
        table.add_row(entry.id, entry.title, opening[:60])
    console.print(table)


async def _submit(session: SessionController, text: str) -> None:
    with console.status("[dim]Rebound AI is typing...[/dim]"):
        reply = await session.submit(text)
    if reply is not None:
        _print_turn(reply)


@app.command()
def chat(
    prompt: str | None = typer.Option(
        None,
        "--prompt",
        "-p",
        help="Message to send as soon as the chat opens"
    ),
    example: str | None = typer.Option(
        None,
        "--example",
        "-e",
        help="Open with one of the quick-action prompts (see 'rebound examples')"
    ),
    history_backend: str | None = typer.Option(
        None,
        "--history",
        help="History store: 'sqlite' (persistent) or 'memory' (session-only); default: REBOUND_HISTORY_BACKEND"
    ),
):
    """Interactive chat with Rebound AI."""
    config = get_config(console)
    _configure_logging(config.log_level)

    if example is not None and example not in EXAMPLE_PROMPTS:
        console.print(f"[red]Error: Unknown example '{example}'. See 'rebound examples'.[/red]")
        raise typer.Exit(code=1)
    initial_prompt = prompt or (EXAMPLE_PROMPTS[example] if example else None)

    async def _chat():
        llm = get_llm(config, console)
        try:
            store = get_history_store(config, history_backend)
        except ValueError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)

        try:
            await store.connect()
        except HistoryStoreError as e:
            console.print(f"[red]Error: {e}[/red]")
            await llm.close()
            raise typer.Exit(code=1)

        try:
            session = SessionController(llm, store, config)

            console.print("[bold cyan]Rebound AI Chat[/bold cyan]")
            console.print("[dim]Commands: /new, /history, /load <id>, /quit[/dim]\n")
            for turn in session.messages:
                _print_turn(turn)

            if initial_prompt:
                console.print(f"[bold yellow]You:[/bold yellow] {initial_prompt}")
                await _submit(session, initial_prompt)

            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                command = user_input.strip()
                if not command:
                    continue

                if command.lower() in ("/quit", "/exit", "exit", "quit", "q"):
                    console.print("[dim]Goodbye![/dim]")
                    break

                if command == "/new":
                    session.reset()
                    console.print("[dim]Started a new chat.[/dim]\n")
                    _print_turn(session.messages[0])
                    continue

                if command == "/history":
                    try:
                        _print_history(await store.list_entries())
                    except HistoryStoreError as e:
                        console.print(f"[red]Error: {e}[/red]")
                    continue

                if command.startswith("/load"):
                    entry_id = command[len("/load"):].strip()
                    try:
                        await session.load_history_entry(entry_id)
                    except (HistoryNotFoundError, HistoryStoreError) as e:
                        console.print(f"[red]Error: {e}[/red]")
                        continue
                    for turn in session.messages:
                        _print_turn(turn)
                    continue

                await _submit(session, command)

        finally:
            await store.disconnect()
            await llm.close()

    asyncio.run(_chat())


@app.command()
def examples():
    """List the quick-action prompts."""
    table = Table(title="Quick Actions")
    table.add_column("Name", style="cyan")
    table.add_column("Prompt")
    for name, text in EXAMPLE_PROMPTS.items():
        table.add_row(name, text)
    console.print(table)


def _open_store(backend: str | None) -> HistoryStore:
    config = get_config(console)
    _configure_logging(config.log_level)
    try:
        store = get_history_store(config, backend)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)
    if store.backend_type == "memory":
        console.print("[yellow]Warning: in-memory history is empty outside a chat session[/yellow]")
    return store


_BACKEND_OPTION = typer.Option(
    None,
    "--backend",
    "-b",
    help="History store: 'sqlite' or 'memory' (default: REBOUND_HISTORY_BACKEND)"
)


@history_app.command("list")
def history_list(backend: str | None = _BACKEND_OPTION):
    """List archived conversations, newest first."""
    async def _list():
        store = _open_store(backend)
        try:
            await store.connect()
            _print_history(await store.list_entries())
        except HistoryStoreError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await store.disconnect()

    asyncio.run(_list())


@history_app.command("show")
def history_show(
    entry_id: str = typer.Argument(..., help="History entry id"),
    backend: str | None = _BACKEND_OPTION,
):
    """Show the messages of an archived conversation."""
    async def _show():
        store = _open_store(backend)
        try:
            await store.connect()
            entry = await store.get(entry_id)
            if entry is None:
                console.print(f"[red]Error: History entry not found: {entry_id}[/red]")
                raise typer.Exit(code=1)
            console.print(f"[bold cyan]{entry.title}[/bold cyan]\n")
            for turn in entry.messages:
                _print_turn(turn)
        except HistoryStoreError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await store.disconnect()

    asyncio.run(_show())


@history_app.command("delete")
def history_delete(
    entry_id: str = typer.Argument(..., help="History entry id"),
    backend: str | None = _BACKEND_OPTION,
):
    """Delete one archived conversation."""
    async def _delete():
        store = _open_store(backend)
        try:
            await store.connect()
            if not await store.remove(entry_id):
                console.print(f"[yellow]No history entry with id {entry_id}[/yellow]")
                raise typer.Exit(code=1)
            console.print(f"[green]Deleted {entry_id}[/green]")
        except HistoryStoreError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await store.disconnect()

    asyncio.run(_delete())


@history_app.command("clear")
def history_clear(
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip confirmation prompt"
    ),
    backend: str | None = _BACKEND_OPTION,
):
    """Delete all archived conversations."""
    if not yes:
        confirm = typer.confirm("Delete all chat history?")
        if not confirm:
            console.print("[dim]Aborted.[/dim]")
            return

    async def _clear():
        store = _open_store(backend)
        try:
            await store.connect()
            await store.clear()
            console.print("[green]Chat history cleared.[/green]")
        except HistoryStoreError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await store.disconnect()

    asyncio.run(_clear())


if __name__ == "__main__":
    app()
