from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from faultdemo.errors import INTERDEPENDENCY_FAIL

CHAIN = "A→B→C"

logger = logging.getLogger("faultdemo.failures")


def log_structured_failure(upstream_service: str, status_or_reason: str, correlation_id: str) -> None:
    """Emit one JSON record per upstream failure, keyed by the chain's correlation id."""
    record = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "chain": CHAIN,
        "upstreamService": upstream_service,
        "statusOrReason": status_or_reason,
        "correlationId": correlation_id,
        "errorCode": INTERDEPENDENCY_FAIL,
    }
    logger.error(json.dumps(record, ensure_ascii=False))
