"""Contrato del servicio remoto de disponibilidad.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite sustituir el adaptador HTTP por un fake en tests sin acoplar el Core
  a httpx.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import LookupOutcome


@runtime_checkable
class HandleLookupService(Protocol):
    """Colaborador remoto opaco.

    Reglas de diseño:
    - `lookup` es asíncrono porque hace I/O.
    - Nunca lanza por fallos remotos: devuelve `LookupFailure`.
    - El orden y la cantidad de resultados no tienen por qué coincidir con
      la petición.
    """

    async def lookup(self, handles: Sequence[str]) -> LookupOutcome:
        """Resuelve la disponibilidad de todos los `handles` en una sola llamada."""

        ...
