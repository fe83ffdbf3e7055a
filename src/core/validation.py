"""Validación sintáctica de handles.

Funciones puras y totales: un input inválido produce un `ValidationError`
(dato), nunca una excepción.
"""

from __future__ import annotations

import re
from typing import Iterable

from core.domain.models import ValidationError, ValidationReport

MIN_HANDLE_LENGTH = 3
MAX_HANDLE_LENGTH = 30
MAX_HANDLES_PER_SUBMISSION = 50

RESERVED_HANDLES: frozenset[str] = frozenset({"admin", "root", "system", "support", "help"})

_HANDLE_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*[A-Za-z0-9]$|^[A-Za-z0-9]$")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_handle(handle: str) -> str:
    return handle.strip().lower()


def validate_handle(raw: str) -> ValidationError | None:
    """Valida un handle. Devuelve `None` si es válido.

    Reglas (la primera que falla gana):
    1. vacío tras `strip`
    2. menos de 3 caracteres
    3. más de 30 caracteres
    4. alfanumérico al inicio y al final; `_` y `-` solo en medio
    5. palabra reservada (sin distinguir mayúsculas)
    """

    trimmed = raw.strip()

    if not trimmed:
        return ValidationError(handle=raw, message="Handle cannot be empty")
    if len(trimmed) < MIN_HANDLE_LENGTH:
        return ValidationError(
            handle=raw, message=f"Handle must be at least {MIN_HANDLE_LENGTH} characters long"
        )
    if len(trimmed) > MAX_HANDLE_LENGTH:
        return ValidationError(
            handle=raw, message=f"Handle cannot exceed {MAX_HANDLE_LENGTH} characters"
        )
    # `fullmatch` evita que `$` acepte un salto de línea final.
    if not _HANDLE_RE.fullmatch(trimmed):
        return ValidationError(
            handle=raw,
            message=(
                "Handle must start and end with alphanumeric characters, "
                "can contain hyphens and underscores in between"
            ),
        )
    if trimmed.lower() in RESERVED_HANDLES:
        return ValidationError(handle=raw, message="This handle is reserved and cannot be used")
    return None


def validate_multiple_handles(handles: Iterable[str]) -> ValidationReport:
    """Particiona en válidos (normalizados, en orden, con duplicados) y errores."""

    report = ValidationReport()
    for handle in handles:
        error = validate_handle(handle)
        if error is not None:
            report.errors.append(error)
        else:
            report.valid.append(normalize_handle(handle))
    return report


def parse_handles_input(text: str, *, limit: int | None = MAX_HANDLES_PER_SUBMISSION) -> list[str]:
    """Convierte texto libre (un handle por línea) en una lista de candidatos.

    - descarta líneas vacías
    - elimina cualquier espacio interno
    - quita un `@` inicial (`@canal` -> `canal`)
    - conserva como mucho `limit` entradas (`None` = sin límite)
    """

    out: list[str] = []
    for line in text.splitlines():
        cleaned = _WHITESPACE_RE.sub("", line)
        if cleaned.startswith("@"):
            cleaned = cleaned[1:]
        if not cleaned:
            continue
        out.append(cleaned)
        if limit is not None and len(out) >= limit:
            break
    return out
