"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import HandleResult, HandleStatus, ValidationError

_STATUS_STYLES: dict[HandleStatus, str] = {
    HandleStatus.AVAILABLE: "bold green",
    HandleStatus.TAKEN: "bold red",
    HandleStatus.ERROR: "yellow",
    HandleStatus.CHECKING: "dim",
}


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (se omite en modo `--json`)."""

    title = Text("handle-check", style="bold cyan")
    subtitle = Text("Disponibilidad de handles • Validación • Caché de sesión", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_results_table(results: Sequence[HandleResult]) -> Table:
    table = Table(title="Handles")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Handle", style="cyan", no_wrap=True)
    table.add_column("Status")
    table.add_column("Checked at", style="dim")
    table.add_column("Error", style="red")
    for index, result in enumerate(results, start=1):
        table.add_row(
            str(index),
            f"@{result.handle}",
            Text(result.status.value, style=_STATUS_STYLES.get(result.status, "")),
            result.checked_at.strftime("%Y-%m-%d %H:%M:%S"),
            result.error or "",
        )
    return table


def build_validation_table(errors: Sequence[ValidationError], *, limit: int = 5) -> Table:
    """Tabla de errores de validación; muestra como mucho `limit` filas."""

    table = Table(title="Invalid handles", title_style="yellow")
    table.add_column("Input", style="white", no_wrap=True)
    table.add_column("Reason", style="yellow")
    for error in errors[:limit]:
        table.add_row(error.handle, error.message)
    if len(errors) > limit:
        table.caption = f"...and {len(errors) - limit} more errors"
    return table


def build_summary_panel(results: Sequence[HandleResult]) -> Panel:
    counts = Counter(r.status for r in results)
    body = Text()
    body.append(f"Available: {counts[HandleStatus.AVAILABLE]}", style="green")
    body.append("   ")
    body.append(f"Taken: {counts[HandleStatus.TAKEN]}", style="red")
    body.append("   ")
    body.append(f"Errors: {counts[HandleStatus.ERROR]}", style="yellow")
    return Panel(body, title="Summary", border_style="cyan")
