"""Adaptador HTTP del servicio de disponibilidad.

Contrato:
- Request:  POST `{"handles": [...]}`
- Response: `{"data": [{"handle", "status", "error"?, "checkedAt"}]}`

Cualquier fallo (transporte, status no 2xx, cuerpo no JSON o sin `data`
válido) se trata igual: `LookupFailure`. No se confía a medias en una
respuesta parcialmente válida.
"""

from __future__ import annotations

import logging
from typing import Sequence

import httpx
from pydantic import ValidationError as PydanticValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import (
    CheckRequest,
    CheckResponse,
    LookupFailure,
    LookupOutcome,
    LookupSuccess,
)
from core.interfaces.lookup import HandleLookupService

logger = logging.getLogger(__name__)

INVALID_RESPONSE = "Invalid response from backend"


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        for key in ("error", "message"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
            if isinstance(value, dict) and isinstance(value.get("message"), str):
                return value["message"]
    return f"Service responded with HTTP {response.status_code}"


class HttpHandleLookupService(HandleLookupService):
    """Llama al servicio remoto configurado en `AppSettings.checker_url`."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def lookup(self, handles: Sequence[str]) -> LookupOutcome:
        body = CheckRequest(handles=list(handles)).model_dump(mode="json")
        url = self._settings.checker_url

        try:
            async with build_async_client(self._settings, transport=self._transport) as client:
                response = await client.post(url, json=body)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            # ValueError cubre cabeceras no ASCII (UnicodeEncodeError) al construir la request.
            logger.warning("request to %s failed: %s", url, exc)
            return LookupFailure(message=str(exc) or exc.__class__.__name__)

        if not response.is_success:
            message = _error_message(response)
            logger.warning("service error from %s: %s", url, message)
            return LookupFailure(message=message)

        try:
            payload = response.json()
        except ValueError:
            logger.warning("non-JSON body from %s", url)
            return LookupFailure(message=INVALID_RESPONSE)

        try:
            parsed = CheckResponse.model_validate(payload)
        except PydanticValidationError as exc:
            logger.warning("malformed body from %s (%d validation error(s))", url, exc.error_count())
            return LookupFailure(message=INVALID_RESPONSE)

        logger.info("resolved %d handle(s) via %s", len(parsed.data), url)
        return LookupSuccess(results=[record.to_result() for record in parsed.data])
