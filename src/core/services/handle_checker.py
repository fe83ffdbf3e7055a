"""Cliente por lotes con caché de sesión.

Este módulo orquesta el flujo de comprobación:
- separa los handles ya cacheados de los pendientes
- hace UNA sola llamada remota con los pendientes
- vuelca el resultado (o el fallo) en la caché
- recorre la entrada en orden para montar la respuesta y reportar progreso

El progreso es "resultados recogidos hasta ahora", no progreso real de red:
el servicio remoto resuelve el lote de forma atómica.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from core.cache import HandleCache
from core.domain.models import HandleResult, LookupFailure, LookupOutcome
from core.interfaces.lookup import HandleLookupService
from core.validation import normalize_handle

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]

GENERIC_FAILURE = "Handle check failed"
DEFAULT_FAILURE = "Failed to check handle"
EMPTY_RESPONSE_FAILURE = "Invalid response from backend"


class HandleChecker:
    """Comprueba handles contra un `HandleLookupService`, memoizando en una `HandleCache`.

    La caché pertenece a la instancia: dos checkers no comparten estado.
    """

    def __init__(self, service: HandleLookupService, cache: HandleCache | None = None) -> None:
        self._service = service
        self._cache = cache if cache is not None else HandleCache()

    @property
    def cache(self) -> HandleCache:
        return self._cache

    async def check_multiple_handles(
        self,
        handles: Sequence[str],
        on_progress: ProgressCallback | None = None,
    ) -> list[HandleResult]:
        """Devuelve exactamente un resultado por handle de entrada, en el mismo orden.

        Nunca lanza por fallos del servicio: se degradan a resultados `error`.
        """

        uncached = self._pending(handles)
        if uncached:
            logger.debug("cache miss for %d handle(s); %d served from cache", len(uncached), len(handles) - len(uncached))
            outcome = await self._lookup(uncached)
            self._store(outcome, uncached)
        else:
            logger.debug("all %d handle(s) served from cache", len(handles))

        results: list[HandleResult] = []
        total = len(handles)
        for completed, handle in enumerate(handles, start=1):
            cached = self._cache.get(handle)
            if cached is None:
                # El servicio no devolvió este handle.
                logger.warning("no result for %r after lookup", handle)
                cached = HandleResult.failed(handle, GENERIC_FAILURE)
            results.append(cached)
            if on_progress is not None:
                on_progress(completed, total)
        return results

    async def check_handle(self, handle: str) -> HandleResult:
        """Atajo para un único handle: caché primero, llamada remota si falla."""

        cached = self._cache.get(handle)
        if cached is not None:
            return cached

        outcome = await self._lookup([handle])
        if isinstance(outcome, LookupFailure):
            result = HandleResult.failed(handle, outcome.message or DEFAULT_FAILURE)
        elif not outcome.results:
            result = HandleResult.failed(handle, EMPTY_RESPONSE_FAILURE)
        else:
            first = outcome.results[0]
            result = HandleResult(
                handle=handle,
                status=first.status,
                error=first.error,
                checked_at=first.checked_at,
            )
        self._cache.put(result, key=handle)
        return result

    def clear_cache(self) -> None:
        logger.debug("clearing %d cached handle(s)", len(self._cache))
        self._cache.clear()

    async def _lookup(self, handles: list[str]) -> LookupOutcome:
        """Llama al servicio; cualquier excepción se convierte en `LookupFailure`."""

        try:
            return await self._service.lookup(handles)
        except Exception as exc:
            logger.warning("lookup raised %s for %d handle(s): %s", exc.__class__.__name__, len(handles), exc)
            return LookupFailure(message=str(exc) or DEFAULT_FAILURE)

    def _pending(self, handles: Sequence[str]) -> list[str]:
        """Handles sin entrada en caché, sin duplicados, en orden de aparición."""

        seen: set[str] = set()
        pending: list[str] = []
        for handle in handles:
            key = normalize_handle(handle)
            if key in seen or handle in self._cache:
                continue
            seen.add(key)
            pending.append(handle)
        return pending

    def _store(self, outcome: LookupOutcome, requested: list[str]) -> None:
        if isinstance(outcome, LookupFailure):
            logger.warning("lookup failed for %d handle(s): %s", len(requested), outcome.message)
            for handle in requested:
                self._cache.put(HandleResult.failed(handle, outcome.message or DEFAULT_FAILURE))
            return

        # Se confía en el handle devuelto por el servicio, no en el orden.
        for result in outcome.results:
            self._cache.put(result)
