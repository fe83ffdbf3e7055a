"""Caché de resultados por sesión.

Mapea handle normalizado (trim + lower) -> último `HandleResult` conocido.
Sin TTL ni límite de tamaño: vive lo que vive el `HandleChecker` que la posee
y solo se vacía de forma explícita.
"""

from __future__ import annotations

from core.domain.models import HandleResult
from core.validation import normalize_handle


class HandleCache:
    """Memoización en memoria de consultas de disponibilidad."""

    def __init__(self) -> None:
        self._entries: dict[str, HandleResult] = {}

    def __contains__(self, handle: object) -> bool:
        return isinstance(handle, str) and normalize_handle(handle) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, handle: str) -> HandleResult | None:
        return self._entries.get(normalize_handle(handle))

    def put(self, result: HandleResult, *, key: str | None = None) -> None:
        """Guarda (reemplaza) la entrada. Por defecto la clave es `result.handle`."""

        self._entries[normalize_handle(key if key is not None else result.handle)] = result

    def clear(self) -> None:
        self._entries.clear()
