from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

import pytest

from core.domain.models import (
    HandleResult,
    HandleStatus,
    LookupFailure,
    LookupOutcome,
    LookupSuccess,
)

CHECKED_AT = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class FakeLookupService:
    """Servicio remoto en memoria: `taken` decide el estado, `fail_with` simula caídas."""

    def __init__(
        self,
        *,
        taken: set[str] | None = None,
        fail_with: str | None = None,
        reverse: bool = False,
        drop: set[str] | None = None,
    ) -> None:
        self.taken = taken or set()
        self.fail_with = fail_with
        self.reverse = reverse
        self.drop = drop or set()
        self.calls: list[list[str]] = []

    async def lookup(self, handles: Sequence[str]) -> LookupOutcome:
        self.calls.append(list(handles))
        if self.fail_with is not None:
            return LookupFailure(message=self.fail_with)
        results = [
            HandleResult(
                handle=h,
                status=HandleStatus.TAKEN if h in self.taken else HandleStatus.AVAILABLE,
                checked_at=CHECKED_AT,
            )
            for h in handles
            if h not in self.drop
        ]
        if self.reverse:
            results.reverse()
        return LookupSuccess(results=results)


@pytest.fixture
def fake_service() -> FakeLookupService:
    return FakeLookupService(taken={"taken1", "b"})
