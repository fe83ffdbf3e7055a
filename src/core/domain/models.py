"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- El mismo modelo sirve para el contrato con el servicio remoto (alias
  `checkedAt`) y para exportar resultados.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class HandleStatus(str, Enum):
    """Estado de disponibilidad de un handle."""

    AVAILABLE = "available"
    TAKEN = "taken"
    ERROR = "error"
    CHECKING = "checking"


class HandleResult(BaseModel):
    """Resultado de disponibilidad para un handle.

    Inmutable: una consulta posterior del mismo handle reemplaza la entrada
    completa en la caché, nunca la modifica.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    handle: str = Field(
        ...,
        description="Handle tal como lo devolvió el servicio (o el consultado).",
    )
    status: HandleStatus = Field(
        ...,
        description="available | taken | error | checking.",
    )
    error: str | None = Field(
        default=None,
        description="Motivo del fallo cuando `status` es `error`.",
    )
    checked_at: datetime = Field(
        default_factory=utc_now,
        alias="checkedAt",
        description="Momento de la comprobación.",
    )

    @classmethod
    def failed(cls, handle: str, message: str) -> "HandleResult":
        """Sintetiza un resultado `error` con timestamp fresco."""

        return cls(handle=handle, status=HandleStatus.ERROR, error=message, checked_at=utc_now())


class ValidationError(BaseModel):
    """Rechazo sintáctico de un handle. Efímero: nunca se cachea."""

    model_config = ConfigDict(frozen=True)

    handle: str = Field(..., description="Input original, sin normalizar.")
    message: str = Field(..., min_length=1, description="Motivo legible.")


class ValidationReport(BaseModel):
    """Partición de un envío en handles válidos (normalizados) y errores."""

    valid: list[str] = Field(default_factory=list)
    errors: list[ValidationError] = Field(default_factory=list)


class CheckProgress(BaseModel):
    """Progreso derivado; se recalcula en cada tick y nunca se persiste."""

    total: int = Field(default=0, ge=0)
    completed: int = Field(default=0, ge=0)
    in_progress: int = Field(default=0, ge=0)

    @classmethod
    def from_counts(cls, completed: int, total: int) -> "CheckProgress":
        return cls(total=total, completed=completed, in_progress=max(total - completed, 0))


class CheckRequest(BaseModel):
    """Cuerpo enviado al servicio remoto."""

    handles: list[str] = Field(default_factory=list)


class HandleRecord(BaseModel):
    """Registro tal como llega del servicio remoto.

    A diferencia de `HandleResult`, aquí `checkedAt` es obligatorio: un
    registro sin timestamp invalida la respuesta entera.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    handle: str = Field(..., min_length=1)
    status: HandleStatus
    error: str | None = None
    checked_at: datetime = Field(..., alias="checkedAt")

    def to_result(self) -> HandleResult:
        return HandleResult(
            handle=self.handle,
            status=self.status,
            error=self.error,
            checked_at=self.checked_at,
        )


class CheckResponse(BaseModel):
    """Cuerpo esperado del servicio remoto: `{"data": [...]}`."""

    model_config = ConfigDict(extra="ignore")

    data: list[HandleRecord]


class LookupSuccess(BaseModel):
    """La llamada remota devolvió datos utilizables."""

    results: list[HandleResult] = Field(default_factory=list)


class LookupFailure(BaseModel):
    """La llamada remota falló (transporte, status, cuerpo inválido)."""

    message: str = Field(..., min_length=1)


LookupOutcome = LookupSuccess | LookupFailure
