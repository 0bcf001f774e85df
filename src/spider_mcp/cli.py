"""CLI interface using typer."""

import asyncio
import json
import logging
import sys
from typing import Any

import typer

from .config import SpiderSettings
from .core import ConfigurationError, SpiderClient, SpiderError
from .output import JsonlRecordWriter, format_result
from .tools import TOOLS, get_tool, iter_tool_records, run_tool

app = typer.Typer(
    name="spider-mcp",
    help="Spider web crawling API as Model Context Protocol tools",
    no_args_is_help=True,
)


def _configure_logging(level: str):
    """Log to stderr; stdout carries the protocol."""
    logging.basicConfig(
        level=level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def _run(settings: SpiderSettings, tool: str, arguments: dict[str, Any]) -> Any:
    async with SpiderClient.from_settings(settings) as client:
        return await run_tool(client, tool, arguments)


async def _save(settings: SpiderSettings, tool: str, arguments: dict[str, Any], output: str) -> int:
    async with SpiderClient.from_settings(settings) as client:
        records = iter_tool_records(client, tool, arguments)
        with JsonlRecordWriter(output) as writer:
            return await writer.consume(records)


@app.command()
def serve():
    """Serve the tools over stdio."""
    from .server import run_stdio

    settings = SpiderSettings()
    _configure_logging(settings.log_level)
    try:
        settings.require_api_key()
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    asyncio.run(run_stdio(settings))


@app.command()
def call(
    tool: str = typer.Argument(..., help="Tool name, e.g. spider_scrape"),
    params: str = typer.Argument("{}", help="Tool arguments as a JSON object"),
    output: str = typer.Option(None, "-o", "--output", help="Output file (JSONL)"),
):
    """Invoke a single tool and print its result."""
    try:
        get_tool(tool)
        arguments = json.loads(params)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)
    if not isinstance(arguments, dict):
        typer.echo("Error: tool arguments must be a JSON object", err=True)
        raise typer.Exit(code=2)

    settings = SpiderSettings()
    _configure_logging(settings.log_level)
    try:
        if output:
            saved = asyncio.run(_save(settings, tool, arguments, output))
        else:
            data = asyncio.run(_run(settings, tool, arguments))
    except (SpiderError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if output:
        typer.echo(f"Saved {saved} records to {output}")
    else:
        typer.echo(format_result(data))


@app.command("tools")
def list_tools():
    """List available tools."""
    for tool in TOOLS:
        summary = tool.description.split(". ", 1)[0].rstrip(".")
        typer.echo(f"{tool.name:<20} {summary}")


@app.command()
def version():
    """Show version."""
    from . import __version__

    typer.echo(f"spider-cloud-mcp {__version__}")


if __name__ == "__main__":
    app()
