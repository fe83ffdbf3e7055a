"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, get_user_env_file, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_service(settings: AppSettings) -> tuple[bool, str]:
    """Any HTTP answer counts as reachable; the empty batch may be rejected."""

    try:
        async with build_async_client(settings) as client:
            response = await client.post(settings.checker_url, json={"handles": []})
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or exc.__class__.__name__


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="handle-check Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("User config", "OK" if get_user_env_file().exists() else "OPTIONAL", str(get_user_env_file()))
    table.add_row("Checker URL", "OK", settings.checker_url)
    if settings.api_key:
        table.add_row("API key", "OK", "Sent as Authorization/apikey headers")
    else:
        table.add_row("API key", "OPTIONAL", "No key set")
    table.add_row("Batch limit", "OK", str(settings.max_handles_per_submission))

    ok_http, detail_http = asyncio.run(_check_service(settings))
    table.add_row("Service connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] unreachable service means every handle is reported as `error`. "
            "Run `handle-check doctor setup` to change the URL."
        )
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    current = AppSettings()
    checker_url = typer.prompt("Checker URL", default=current.checker_url, show_default=True).strip()
    api_key = typer.prompt(
        "API key (empty to keep current)",
        default="",
        show_default=False,
        hide_input=True,
    ).strip()

    if not checker_url.startswith(("http://", "https://")):
        raise typer.BadParameter("checker URL must start with http:// or https://")

    env_path = write_user_env_vars(
        {
            "HANDLE_CHECK_CHECKER_URL": checker_url,
            "HANDLE_CHECK_API_KEY": api_key or None,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
