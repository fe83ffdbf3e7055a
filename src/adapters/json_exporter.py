"""Exportación JSON de una comprobación.

Por qué JSON:
- Interoperabilidad con otras herramientas y pipelines.
- Permite guardar el resultado sin depender de la salida de terminal.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

from core.domain.models import HandleResult, ValidationError


def results_payload(
    *,
    results: Sequence[HandleResult],
    errors: Sequence[ValidationError] = (),
) -> dict[str, Any]:
    return {
        "results": [r.model_dump(mode="json", by_alias=True) for r in results],
        "validation_errors": [e.model_dump(mode="json") for e in errors],
    }


def export_results_json(
    *,
    results: Sequence[HandleResult],
    errors: Sequence[ValidationError] = (),
    output_path: Path,
) -> Path:
    """Exporta resultados y errores de validación a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = results_payload(results=results, errors=errors)
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
