"""Domain errors and their HTTP mapping.

Every error carries the exact JSON body the client receives.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INTERDEPENDENCY_FAIL = "INTERDEPENDENCY_FAIL"
ENOSPC = "ENOSPC"


class DemoError(Exception):
    status_code: int = 500

    def body(self) -> dict[str, Any]:
        raise NotImplementedError


class InterdependencyFailure(DemoError):
    def __init__(
        self,
        correlation_id: str,
        error: str,
        status_code: int = 502,
        human_message: str | None = None,
    ):
        super().__init__(error)
        self.correlation_id = correlation_id
        self.error = error
        self.status_code = status_code
        self.human_message = human_message

    def body(self) -> dict[str, Any]:
        out: dict[str, Any] = {"correlationId": self.correlation_id, "error": self.error}
        if self.human_message is not None:
            out["humanMessage"] = self.human_message
        out["code"] = INTERDEPENDENCY_FAIL
        return out


class UnsupportedCurrency(DemoError):
    status_code = 400

    def __init__(self, correlation_id: str, target: str):
        super().__init__(f"Unsupported target currency: {target}")
        self.correlation_id = correlation_id
        self.target = target

    def body(self) -> dict[str, Any]:
        return {"correlationId": self.correlation_id, "error": str(self)}


class DiskFullError(DemoError):
    status_code = 507
    message = "No space left on device"

    def __init__(self, size: int, threshold: int):
        super().__init__(self.message)
        self.size = size
        self.threshold = threshold

    def body(self) -> dict[str, Any]:
        return {
            "error": ENOSPC,
            "message": self.message,
            "code": ENOSPC,
            "threshold": self.threshold,
            "size": self.size,
        }


class NoteWriteError(DemoError):
    status_code = 500

    def __init__(self, code: str, reason: str):
        super().__init__(reason)
        self.code = code
        self.reason = reason

    def body(self) -> dict[str, Any]:
        return {"error": self.code, "message": "Failed to write note"}


class NoteNotFound(DemoError):
    status_code = 404

    def body(self) -> dict[str, Any]:
        return {"error": "NOT_FOUND"}


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(DemoError)
    async def demo_error_handler(request: Request, exc: DemoError) -> JSONResponse:
        logger.info("%s %s -> %s %s", request.method, request.url.path, exc.status_code, type(exc).__name__)
        return JSONResponse(status_code=exc.status_code, content=exc.body())
