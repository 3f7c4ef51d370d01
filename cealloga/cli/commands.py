"""CLI commands for cealloga.

`cealloga code ...` manages code artifacts; `cealloga exec` / `cealloga test`
run a published or unpublished artifact with a JSON payload.
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable

import typer
from rich.console import Console
from rich.markup import escape

from cealloga import __logo__, __version__
from cealloga.api.client import ApiClient
from cealloga.cli.logging_utils import configure_logging
from cealloga.client.result import RequestResult
from cealloga.config.loader import load_config
from cealloga.config.schema import ClientConfig
from cealloga.utils.exceptions import format_error

app = typer.Typer(
    name="cealloga",
    help=f"{__logo__} cealloga - code artifact and execution client",
    no_args_is_help=True,
)
code_app = typer.Typer(help="Manage code artifacts", no_args_is_help=True)
app.add_typer(code_app, name="code")

console = Console()


def _build_client(config: ClientConfig) -> ApiClient:
    return ApiClient(config)


def _read_body(path: Path | None) -> Any:
    """Read a JSON request body from ``path`` ('-' for stdin)."""
    if path is None:
        return None
    text = sys.stdin.read() if str(path) == "-" else path.read_text(encoding="utf-8")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        console.print(f"[red]Invalid JSON body in {escape(str(path))}:[/red] {escape(exc.msg)}")
        raise typer.Exit(2) from exc


def _parse_query(pairs: list[str] | None) -> dict[str, str]:
    query: dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            console.print(f"[red]Invalid query parameter (expected key=value):[/red] {escape(pair)}")
            raise typer.Exit(2)
        query[key] = value
    return query


def _run(ctx: typer.Context, call: Callable[[ApiClient], Awaitable[RequestResult]]) -> None:
    config: ClientConfig = ctx.obj

    async def _go() -> RequestResult:
        async with _build_client(config) as client:
            return await call(client)

    result = asyncio.run(_go())
    if not result.ok:
        status = f" (status {result.metadata.status})" if result.metadata is not None else ""
        console.print(f"[red]{escape(format_error(result.error, include_details=True))}{status}[/red]")
        raise typer.Exit(1)
    console.print_json(data=result.value)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"{__logo__} cealloga v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    host: str | None = typer.Option(None, "--host", help="Service base URL"),
    config_path: Path | None = typer.Option(None, "--config", help="Path to config.json"),
    log_level: str | None = typer.Option(None, "--log-level", help="Loguru level, e.g. DEBUG"),
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True),
) -> None:
    """cealloga - code artifact and execution client."""
    try:
        config = load_config(config_path, host=host, log_level=log_level)
    except ValueError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(2) from exc
    configure_logging(config.log_level)
    ctx.obj = config


@code_app.command("list")
def code_list(
    ctx: typer.Context,
    query: list[str] | None = typer.Option(None, "--query", "-q", help="Filter as key=value (repeatable)"),
) -> None:
    """List code records."""
    params = _parse_query(query)
    _run(ctx, lambda client: client.code.list(params))


@code_app.command("record")
def code_record(ctx: typer.Context, id: str = typer.Argument(..., help="Record id")) -> None:
    """Fetch a single code record."""
    _run(ctx, lambda client: client.code.record(id))


@code_app.command("publish")
def code_publish(ctx: typer.Context, id: str = typer.Argument(..., help="Record id")) -> None:
    """Publish a validated code record."""
    _run(ctx, lambda client: client.code.publish(id))


@code_app.command("unpublish")
def code_unpublish(ctx: typer.Context, name: str = typer.Argument(..., help="Published name")) -> None:
    """Unpublish code by name."""
    _run(ctx, lambda client: client.code.unpublish(name))


@code_app.command("validate")
def code_validate(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="JSON file with the code submission ('-' for stdin)"),
) -> None:
    """Submit code for validation."""
    body = _read_body(file)
    _run(ctx, lambda client: client.code.validate(body))


@app.command("exec")
def exec_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Published artifact name"),
    file: Path | None = typer.Argument(None, help="JSON payload file ('-' for stdin)"),
) -> None:
    """Execute a published artifact."""
    body = _read_body(file)
    _run(ctx, lambda client: client.cealloga.exec(name, body))


@app.command("test")
def test_command(
    ctx: typer.Context,
    id: str = typer.Argument(..., help="Unpublished record id"),
    file: Path | None = typer.Argument(None, help="JSON payload file ('-' for stdin)"),
) -> None:
    """Execute an unpublished artifact by id."""
    body = _read_body(file)
    _run(ctx, lambda client: client.cealloga.test(id, body))


if __name__ == "__main__":
    app()
