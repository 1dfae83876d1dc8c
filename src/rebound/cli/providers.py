"""Provider factory functions for CLI.

Centralizes creation of the configuration, LLM provider and history store
from environment variables. Hides configuration details from command
implementations.
"""

from rich.console import Console

from ..config import ReboundConfig
from ..history import HistoryStore, create_history_store
from ..llm import LLMProvider, create_llm_provider

# Default console for output
_console = Console()


def get_config(console: Console | None = None) -> ReboundConfig:
    """Load configuration from environment variables.

    Environment variables:
        GEMINI_API_KEY: Gemini API key (replies are disabled without it)
        GEMINI_MODEL: Gemini model (default: gemini-2.5-flash)
        GEMINI_BASE_URL: Endpoint override (optional)
        REBOUND_CONTEXT_WINDOW: Trailing turns sent to the model (default: 12)
        REBOUND_TEMPERATURE, REBOUND_TOP_P, REBOUND_MAX_OUTPUT_TOKENS: Sampling
        REBOUND_HISTORY_BACKEND: 'sqlite' or 'memory' (default: sqlite)
        REBOUND_HISTORY_PATH: SQLite database path
        REBOUND_LOG_LEVEL: Logging level (default: WARNING)

    Raises:
        SystemExit: If a variable has an invalid value
    """
    import typer

    from ..errors import ConfigurationError

    con = console or _console
    try:
        return ReboundConfig.from_env()
    except ConfigurationError as e:
        con.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


def get_llm(config: ReboundConfig, console: Console | None = None) -> LLMProvider:
    """Create the Gemini provider.

    A missing key does not stop the CLI: the provider is still created and
    each reply becomes an error message explaining the missing key.
    """
    con = console or _console
    if not config.api_key:
        con.print("[yellow]Warning: GEMINI_API_KEY not set, replies will report an error[/yellow]")

    return create_llm_provider(
        "gemini",
        api_key=config.api_key,
        model=config.model,
        base_url=config.base_url,
    )


def get_history_store(
    config: ReboundConfig,
    backend: str | None = None,
) -> HistoryStore:
    """Create the history store selected by configuration or override.

    Raises:
        ValueError: If the backend is not supported
    """
    backend = backend or config.history_backend
    if backend == "sqlite":
        return create_history_store("sqlite", path=config.history_path)
    return create_history_store(backend)
