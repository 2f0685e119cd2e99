from __future__ import annotations

from fastapi import Header, Query

MISSING_CORRELATION = "missing-correlation"


def get_correlation_id(
    x_correlation_id: str | None = Header(default=None, alias="X-Correlation-Id"),
) -> str:
    return x_correlation_id or MISSING_CORRELATION


def get_failure_mode(
    failure: str | None = Query(default=None),
    x_failure_mode: str | None = Header(default=None, alias="X-Failure-Mode"),
) -> bool:
    """Failure is injected only by the literal string "true" in the query or header."""
    return failure == "true" or x_failure_mode == "true"


def get_target(target: str | None = Query(default=None)) -> str:
    return (target or "EUR").upper()
