"""Main CLI application."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from hindsight_memory.cli.console import console, error, success
from hindsight_memory.client import HindsightClient
from hindsight_memory.config import ConfigError, PluginConfig, load_config
from hindsight_memory.logging import configure_logging
from hindsight_memory.recall import RecallPolicy
from hindsight_memory.retry import RetryConfig, RetryingClient
from hindsight_memory.tools import MemoryRetainTool, ToolContext

app = typer.Typer(
    name="hindsight-memory",
    help="Query and populate a Hindsight memory bank",
    no_args_is_help=True,
)

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration file",
    ),
]


def _load(config_path: Path | None) -> PluginConfig:
    try:
        return load_config(config_path)
    except (FileNotFoundError, ConfigError) as e:
        error(escape(str(e)))
        raise typer.Exit(1) from e


def _client(config: PluginConfig, retries: int) -> HindsightClient | RetryingClient:
    client = HindsightClient.from_config(config)
    if retries > 0:
        return RetryingClient(client, RetryConfig(max_attempts=retries + 1))
    return client


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    configure_logging("DEBUG" if verbose else None, use_rich=True)


@app.command()
def recall(
    query: Annotated[str, typer.Argument(help="What to search for")],
    max_tokens: Annotated[
        int | None,
        typer.Option("--max-tokens", "-m", min=1, help="Token ceiling (default: 2000)"),
    ] = None,
    retries: Annotated[
        int,
        typer.Option("--retries", min=0, help="Retry transient failures N times"),
    ] = 0,
    config: ConfigOption = None,
) -> None:
    """Search the memory bank."""
    cfg = _load(config)
    policy = RecallPolicy(_client(cfg, retries))
    result = asyncio.run(policy.recall_for_tool(query, max_tokens))
    if result.is_error:
        error(escape(result.content))
        raise typer.Exit(1)
    console.print(escape(result.content))


@app.command()
def retain(
    content: Annotated[str, typer.Argument(help="Information to remember")],
    context: Annotated[
        str | None,
        typer.Option("--context", help="When/why this was stored"),
    ] = None,
    tags: Annotated[
        list[str] | None,
        typer.Option("--tag", "-t", help="Tag (repeatable)"),
    ] = None,
    retries: Annotated[
        int,
        typer.Option("--retries", min=0, help="Retry transient failures N times"),
    ] = 0,
    config: ConfigOption = None,
) -> None:
    """Store one memory in the bank."""
    cfg = _load(config)
    tool = MemoryRetainTool(_client(cfg, retries))
    params: dict[str, object] = {"content": content}
    if context is not None:
        params["context"] = context
    if tags:
        params["tags"] = list(tags)
    result = asyncio.run(tool.execute(params, ToolContext()))
    if result.is_error:
        error(escape(result.content))
        raise typer.Exit(1)
    success(escape(result.content))


@app.command("config")
def show_config(config: ConfigOption = None) -> None:
    """Show the resolved configuration."""
    cfg = _load(config)

    table = Table(title="hindsight-memory configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("baseUrl", cfg.base_url)
    table.add_row("bankId", cfg.bank_id)
    table.add_row("apiKey", "********" if cfg.resolve_api_key() else "(not set)")
    table.add_row("autoRetain", str(cfg.auto_retain))
    table.add_row("autoRecall", str(cfg.auto_recall))
    console.print(table)
