from __future__ import annotations

import time
from dataclasses import dataclass

# Highest value a signed 64-bit epoch timestamp or timeout can take.
INT64_MAX = 2**63 - 1


def elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


@dataclass
class CheckResult:
    """
    Outcome of a single probe.

    A failed result always carries ``error``, already prefixed with the
    check's label (e.g. "Redis: ..."), ready to be shown to the user.
    """

    ok: bool
    latency_ms: int
    status_code: int | None = None
    error: str | None = None

    @classmethod
    def passed(cls, start: float, status_code: int | None = None) -> CheckResult:
        return cls(ok=True, latency_ms=elapsed_ms(start), status_code=status_code)

    @classmethod
    def failed(
        cls, label: str, detail: str, start: float, status_code: int | None = None
    ) -> CheckResult:
        return cls(
            ok=False,
            latency_ms=elapsed_ms(start),
            status_code=status_code,
            error=f"{label}: {detail}",
        )
