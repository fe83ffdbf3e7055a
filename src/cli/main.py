"""CLI principal (Typer).

Por qué la CLI es delgada:
- Solo traduce input (args/fichero/stdin) a una lista de handles y pinta
  resultados; validación, caché y llamadas remotas viven en el Core.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn

from adapters.checker_service import HttpHandleLookupService
from adapters.json_exporter import export_results_json, results_payload
from cli import doctor
from cli.ui_components import (
    build_results_table,
    build_summary_panel,
    build_validation_table,
    print_banner,
)
from core.config import AppSettings
from core.domain.models import CheckProgress, HandleResult
from core.log_config import configure_logging
from core.services.handle_checker import HandleChecker
from core.validation import parse_handles_input, validate_multiple_handles

app = typer.Typer(no_args_is_help=True, help="Check handle availability in batches.")
app.add_typer(doctor.app, name="doctor")

logger = logging.getLogger(__name__)

_console = Console()


def _read_input(handles: list[str] | None, file: Path | None) -> str:
    chunks: list[str] = []
    if handles:
        chunks.extend(handles)
    if file is not None:
        try:
            chunks.append(file.read_text(encoding="utf-8"))
        except OSError as exc:
            raise typer.BadParameter(f"cannot read {file}: {exc}", param_hint="--file") from exc
    if not chunks and not sys.stdin.isatty():
        chunks.append(sys.stdin.read())
    return "\n".join(chunks)


async def _run_check(
    checker: HandleChecker,
    handles: list[str],
    *,
    show_progress: bool,
) -> list[HandleResult]:
    if not show_progress:
        return await checker.check_multiple_handles(handles)

    with Progress(
        TextColumn("[cyan]Checking handles"),
        BarColumn(),
        MofNCompleteColumn(),
        TextColumn("{task.fields[pending]} pending", style="dim"),
        console=_console,
        transient=True,
    ) as progress:
        task = progress.add_task("check", total=len(handles), pending=len(handles))

        def on_progress(completed: int, total: int) -> None:
            state = CheckProgress.from_counts(completed, total)
            progress.update(task, completed=state.completed, total=state.total, pending=state.in_progress)

        return await checker.check_multiple_handles(handles, on_progress)


@app.command()
def check(
    handles: list[str] | None = typer.Argument(None, help="Handles a comprobar (uno por argumento)."),
    file: Path | None = typer.Option(None, "--file", "-f", help="Fichero con un handle por línea."),
    json_output: bool = typer.Option(False, "--json", help="Imprime el resultado como JSON en stdout."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Guarda el resultado en un fichero JSON."),
    no_banner: bool = typer.Option(False, "--no-banner", help="No mostrar el banner."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Logging en DEBUG."),
) -> None:
    """Valida los handles y consulta su disponibilidad."""

    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)

    text = _read_input(handles, file)
    candidates = parse_handles_input(text, limit=None)
    if not candidates:
        raise typer.BadParameter("no handles provided", param_hint="HANDLES")

    limit = settings.max_handles_per_submission
    if len(candidates) > limit:
        logger.warning("only the first %d of %d handles will be checked", limit, len(candidates))
        candidates = candidates[:limit]

    report = validate_multiple_handles(candidates)
    if report.errors:
        logger.warning("%d handle(s) failed validation", len(report.errors))

    interactive = not json_output
    if interactive and not no_banner:
        print_banner(_console)
    if interactive and report.errors:
        _console.print(build_validation_table(report.errors))

    if not report.valid:
        if json_output:
            typer.echo(json.dumps(results_payload(results=[], errors=report.errors), ensure_ascii=False, indent=2))
        raise typer.Exit(code=1)

    checker = HandleChecker(HttpHandleLookupService(settings))
    results = asyncio.run(_run_check(checker, report.valid, show_progress=interactive))

    if json_output:
        payload = results_payload(results=results, errors=report.errors)
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        _console.print(build_results_table(results))
        _console.print(build_summary_panel(results))

    if output is not None:
        path = export_results_json(results=results, errors=report.errors, output_path=output)
        if interactive:
            _console.print(f"[green]Saved results to:[/green] {path}")


@app.command()
def validate(
    handles: list[str] | None = typer.Argument(None, help="Handles a validar."),
    file: Path | None = typer.Option(None, "--file", "-f", help="Fichero con un handle por línea."),
) -> None:
    """Solo validación local, sin llamadas remotas."""

    candidates = parse_handles_input(_read_input(handles, file), limit=None)
    if not candidates:
        raise typer.BadParameter("no handles provided", param_hint="HANDLES")

    report = validate_multiple_handles(candidates)
    for handle in report.valid:
        _console.print(f"[green]OK[/green] {handle}")
    if report.errors:
        _console.print(build_validation_table(report.errors, limit=len(report.errors)))
        raise typer.Exit(code=1)


def run() -> None:
    app()
